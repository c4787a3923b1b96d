"""
tally/cli/__init__.py

Root Click command group for the `tally` terminal command, registered in
pyproject.toml as:

    [project.scripts]
    tally = "tally.cli:cli"
"""

import click

from tally.cli.repl import repl_command


@click.group()
@click.version_option(package_name="tally-ledger")
def cli() -> None:
    """
    tally - in-memory account ledger.

    \b
    Commands:
      repl    Start an interactive ledger session.

    \b
    Quick start:
      tally repl
      tally repl --verbose --log-level INFO
    """
    pass


cli.add_command(repl_command)
