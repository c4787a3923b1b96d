"""
tally/cli/repl.py

Interactive command loop over a single in-memory Ledger.

Commands (one per line):

    deposit <amount> to <account>
    withdraw <amount> from <account>
    send <amount> from <sender> to <recipient>
    print          show all balances
    log            show the transaction log
    replay         check that the log reproduces the balances
    help           list commands
    quit           leave the loop (EOF does the same)

Every record the Ledger returns is appended to the session's TransactionLog.
Errors are reported and the loop carries on.
"""

import logging
import re
from typing import Callable, List, Optional

import click

from tally.core import MAX_BALANCE, is_error
from tally.ledger import Ledger
from tally.log import TransactionLog


logger = logging.getLogger(__name__)

_AMOUNT_RE = re.compile(r"^\+?[0-9]+$")

HELP_TEXT = """\
deposit <amount> to <account>
withdraw <amount> from <account>
send <amount> from <sender> to <recipient>
print | log | replay | help | quit"""


def parse_amount(text: str) -> Optional[int]:
    """
    Parse a non-negative integer amount that fits the balance width.

    Returns None when ``text`` is not a plain decimal number or is too large.
    """
    if not _AMOUNT_RE.match(text):
        return None
    amount = int(text)
    if amount > MAX_BALANCE:
        return None
    return amount


class Session:
    """
    One command-loop session: a Ledger, its TransactionLog and an output sink.

    ``echo`` receives (message, is_error). The default writes through
    click.echo, errors to stderr.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        log: Optional[TransactionLog] = None,
        echo: Optional[Callable[[str, bool], None]] = None,
        verbose: bool = False,
    ):
        self.ledger = ledger if ledger is not None else Ledger()
        self.log = log if log is not None else TransactionLog()
        self.verbose = verbose
        self._echo = echo or (lambda message, err: click.echo(message, err=err))

    def out(self, message: str) -> None:
        self._echo(message, False)

    def err(self, message: str) -> None:
        self._echo(message, True)

    def execute(self, line: str) -> bool:
        """
        Run one command line.

        Returns:
            False when the session should end, True otherwise.
        """
        words = line.strip().split()
        logger.debug("command: %s", words)
        match words:
            case ["deposit", amount, "to", account]:
                self._apply(amount, lambda a: self.ledger.deposit(account, a))
            case ["withdraw", amount, "from", account]:
                self._apply(amount, lambda a: self.ledger.withdraw(account, a))
            case ["send", amount, "from", sender, "to", recipient]:
                self._apply(amount, lambda a: self.ledger.send(sender, recipient, a))
            case ["print"]:
                self.out(repr(self.ledger))
            case ["log"]:
                self._print_log()
            case ["replay"]:
                self._check_replay()
            case ["help"]:
                self.out(HELP_TEXT)
            case ["quit"]:
                return False
            case _:
                first = words[0] if words else ""
                self.out(f"Command '{first}' not found")
        return True

    def _apply(self, text: str, operation) -> None:
        amount = parse_amount(text)
        if amount is None:
            self.err(f"failed to parse '{text}'")
            return
        result = operation(amount)
        if is_error(result):
            logger.info("rejected: %s", result.message)
            self.err(f"✗ {result.message}")
            return
        self.log.record(result)
        records: List = list(result) if isinstance(result, tuple) else [result]
        logger.info("applied: %s", records)
        if self.verbose:
            for record in records:
                self.out(f"✓ {record!r}")

    def _print_log(self) -> None:
        if not len(self.log):
            self.out("(empty)")
            return
        for index, record in enumerate(self.log):
            self.out(f"[{index}] {record!r}")

    def _check_replay(self) -> None:
        if self.log.verify(self.ledger):
            self.out(f"✓ replay of {len(self.log)} records matches balances")
        else:
            self.err("✗ replay does not match balances")


def run_loop(session: Session, prompt: str = "cmd: ") -> None:
    """Read commands from stdin until ``quit`` or EOF."""
    stdin = click.get_text_stream("stdin")
    while True:
        click.echo(prompt, nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            return
        if not session.execute(line):
            return


@click.command("repl")
@click.option("--prompt", default="cmd: ", show_default=True, help="Prompt shown before each command.")
@click.option("--verbose", "-v", is_flag=True, help="Echo every applied record.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Level for diagnostic logging on stderr.",
)
def repl_command(prompt: str, verbose: bool, log_level: str) -> None:
    """
    Start an interactive ledger session.

    \b
    Examples:
      cmd: deposit 100 to alice
      cmd: send 40 from alice to bob
      cmd: print
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = Session(verbose=verbose)
    run_loop(session, prompt=prompt)
