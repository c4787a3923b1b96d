"""
Core types and pure functions for the tally ledger.

This module provides the foundational data structures for the ledger:
1. Constants: the balance width and its bound
2. Checked arithmetic: overflow/underflow-detecting add and subtract
3. Immutable transaction records: Deposit and Withdraw
4. Accounting errors: typed result values returned by the Ledger
5. Exceptions: LedgerError and ReplayError for caller bugs and bad logs
6. Protocols: LedgerView for read-only ledger access

All functions in this module are pure. No function can mutate ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import (
    Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, Union,
    runtime_checkable,
)


# ============================================================================
# CONSTANTS
# ============================================================================

# Balances and amounts are unsigned integers of this many bits.
BALANCE_BITS = 64

# Largest representable balance (and largest single amount).
MAX_BALANCE = 2 ** BALANCE_BITS - 1


# ============================================================================
# TYPE ALIASES
# ============================================================================

# Mapping from account id to its current balance.
BalanceTable = Dict[str, int]


# ============================================================================
# VALIDATION
# ============================================================================

def validate_account(account: str) -> str:
    """Return ``account`` unchanged, or raise ValueError if it is not a non-empty string."""
    if not isinstance(account, str):
        raise ValueError(f"Account id must be str, got {type(account).__name__}")
    if not account or not account.strip():
        raise ValueError("Account id cannot be empty")
    return account


def validate_amount(amount: int) -> int:
    """
    Return ``amount`` unchanged, or raise ValueError if it is out of range.

    Amounts are plain ints in [0, MAX_BALANCE]. bool is rejected even though
    it subclasses int.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative, got {amount}")
    if amount > MAX_BALANCE:
        raise ValueError(f"Amount exceeds {BALANCE_BITS}-bit width, got {amount}")
    return amount


# ============================================================================
# CHECKED ARITHMETIC
# ============================================================================

def checked_add(balance: int, amount: int) -> Optional[int]:
    """
    Add ``amount`` to ``balance`` without leaving the balance width.

    Returns:
        The sum, or None if it would exceed MAX_BALANCE.
    """
    if amount > MAX_BALANCE - balance:
        return None
    return balance + amount


def checked_sub(balance: int, amount: int) -> Optional[int]:
    """
    Subtract ``amount`` from ``balance`` without going below zero.

    Returns:
        The difference, or None if ``amount`` exceeds ``balance``.
    """
    if amount > balance:
        return None
    return balance - amount


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class ReplayError(LedgerError):
    """Raised when a sequence of records cannot be replayed onto a balance table."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


# ============================================================================
# ACCOUNTING ERRORS
# ============================================================================
#
# These are result values, not exceptions. The Ledger returns them in place of
# a transaction record; it never raises them.
#

@dataclass(frozen=True, slots=True)
class AccountingError:
    """Base type for a failed ledger operation."""
    account: str

    @property
    def message(self) -> str:
        return f"accounting error on {self.account}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class AccountNotFound(AccountingError):
    """The referenced account has never been deposited into."""

    @property
    def message(self) -> str:
        return f"account '{self.account}' not found"


@dataclass(frozen=True, slots=True)
class AccountUnderFunded(AccountingError):
    """A withdrawal of ``amount`` exceeds the account's balance."""
    amount: int

    @property
    def message(self) -> str:
        return f"account '{self.account}' cannot cover {self.amount}"


@dataclass(frozen=True, slots=True)
class AccountOverFunded(AccountingError):
    """A deposit of ``amount`` would overflow the account's balance width."""
    amount: int

    @property
    def message(self) -> str:
        return f"account '{self.account}' cannot hold another {self.amount}"


# ============================================================================
# TRANSACTION RECORDS
# ============================================================================

class TxKind(Enum):
    """Tag of a transaction record."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


@dataclass(frozen=True, slots=True)
class _Record:
    """
    Shared shape of the two transaction records.

    Attributes:
        account: The account whose balance changed.
        amount: The amount requested by the operation (not the resulting balance).

    Records are immutable (frozen=True) and memory-optimized (slots=True).
    All fields are validated in __post_init__.
    """
    account: str
    amount: int

    kind = None  # overridden by each record type

    def __post_init__(self):
        validate_account(self.account)
        validate_amount(self.amount)

    @property
    def delta(self) -> int:
        """Signed effect of this record on its account's balance."""
        raise NotImplementedError

    def apply(self, balances: Mapping[str, int]) -> int:
        """Return the new balance of ``self.account`` after applying this record."""
        raise NotImplementedError

    def to_dict(self) -> Dict[str, object]:
        return {"kind": self.kind.value, "account": self.account, "amount": self.amount}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.account}, {self.amount})"


@dataclass(frozen=True, slots=True, repr=False)
class Deposit(_Record):
    """An amount credited to an account, creating the account if needed."""

    kind = TxKind.DEPOSIT

    @property
    def delta(self) -> int:
        return self.amount

    def apply(self, balances: Mapping[str, int]) -> int:
        current = balances.get(self.account)
        if current is None:
            return self.amount
        new_balance = checked_add(current, self.amount)
        if new_balance is None:
            raise ReplayError(f"{self!r} overflows balance {current}")
        return new_balance


@dataclass(frozen=True, slots=True, repr=False)
class Withdraw(_Record):
    """An amount debited from an existing account."""

    kind = TxKind.WITHDRAW

    @property
    def delta(self) -> int:
        return -self.amount

    def apply(self, balances: Mapping[str, int]) -> int:
        current = balances.get(self.account)
        if current is None:
            raise ReplayError(f"{self!r} references unknown account")
        new_balance = checked_sub(current, self.amount)
        if new_balance is None:
            raise ReplayError(f"{self!r} underflows balance {current}")
        return new_balance


# A completed balance change.
Transaction = Union[Deposit, Withdraw]

# What each Ledger operation hands back.
TxResult = Union[Transaction, AccountingError]
SendResult = Union[Tuple[Withdraw, Deposit], AccountingError]

_RECORD_TYPES = {TxKind.DEPOSIT: Deposit, TxKind.WITHDRAW: Withdraw}


def record_from_dict(data: Mapping[str, object]) -> Transaction:
    """
    Rebuild a record from the output of ``to_dict()``.

    Raises:
        ValueError: If the kind is unknown or a field is missing or invalid.
    """
    try:
        kind = TxKind(data["kind"])
        return _RECORD_TYPES[kind](account=data["account"], amount=data["amount"])
    except KeyError as e:
        raise ValueError(f"Record is missing field {e}") from None


def apply_records(records: Iterable[Transaction]) -> BalanceTable:
    """
    Replay ``records`` in order onto an empty balance table.

    Returns:
        The resulting balance table.

    Raises:
        ReplayError: If any record cannot be applied. ``index`` names the
            position of the offending record.
    """
    balances: BalanceTable = {}
    for index, record in enumerate(records):
        try:
            balances[record.account] = record.apply(balances)
        except ReplayError as e:
            raise ReplayError(f"Replay failed at record {index}: {e}", index=index) from None
    return balances


def is_error(result: object) -> bool:
    """Return True if ``result`` is an AccountingError rather than a record."""
    return isinstance(result, AccountingError)


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Display and reporting code accepts a LedgerView to declare that it will
    only read balances.
    """

    def get_balance(self, account: str) -> Optional[int]:
        """Return the account's balance, or None if it has no entry."""
        ...

    def has_account(self, account: str) -> bool:
        ...

    def list_accounts(self) -> List[str]:
        """Return all account ids, sorted."""
        ...

    def balances(self) -> BalanceTable:
        """Return a copy of the full balance table."""
        ...
