"""
log.py - Caller-owned transaction log

The Ledger does not keep its own history. Callers collect the records it
returns in a TransactionLog, which can rebuild an equivalent ledger at any
time through replay.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple, Union

from .core import AccountingError, Transaction, TxResult, SendResult, Deposit, Withdraw
from .ledger import Ledger


class TransactionLog:
    """
    Ordered, append-only sequence of transaction records.

    Example:
        ledger = Ledger()
        log = TransactionLog()
        log.record(ledger.deposit("alice", 100))
        log.record(ledger.withdraw("alice", 500))   # error, nothing appended
        assert log.verify(ledger)
    """

    def __init__(self, records: Iterable[Transaction] = ()):
        self._records: List[Transaction] = []
        self.extend(records)

    def append(self, record: Transaction) -> None:
        """Append a single record. Raises TypeError for anything else."""
        if not isinstance(record, (Deposit, Withdraw)):
            raise TypeError(f"Expected a Deposit or Withdraw record, got {type(record).__name__}")
        self._records.append(record)

    def extend(self, records: Iterable[Transaction]) -> None:
        for record in records:
            self.append(record)

    def record(self, result: Union[TxResult, SendResult]) -> bool:
        """
        Append whatever a Ledger operation returned.

        A single record is appended as-is, a send pair as two records in
        (Withdraw, Deposit) order. Errors are not logged.

        Returns:
            True if anything was appended.
        """
        if isinstance(result, AccountingError):
            return False
        if isinstance(result, tuple):
            self.extend(result)
        else:
            self.append(result)
        return True

    def records(self) -> Tuple[Transaction, ...]:
        """Return an immutable snapshot of the log."""
        return tuple(self._records)

    def replay(self) -> Ledger:
        """Build a fresh Ledger from the records. Raises ReplayError if they do not apply."""
        return Ledger.replay(self._records)

    def verify(self, ledger: Ledger) -> bool:
        """Check that replaying this log reproduces ``ledger``'s balances exactly."""
        return self.replay().matches(ledger)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._records))

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return tuple(self._records[index])
        return self._records[index]

    def __repr__(self) -> str:
        return f"TransactionLog({len(self._records)} records)"
