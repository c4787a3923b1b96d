"""
ledger.py - Stateful Account Ledger

The Ledger class is the central state manager for the tally system.
It is the only module that mutates balances, ensuring controlled and auditable changes.

Key responsibilities:
    - Implements LedgerView protocol for safe read-only access by display code
    - Applies deposits and withdrawals with checked (non-wrapping) arithmetic
    - Composes transfers from a withdraw and a deposit, refunding on failure
    - Returns an immutable record for every successful change, an error value otherwise
    - Rebuilds state from a record sequence (replay)
"""

from __future__ import annotations
from threading import RLock
from typing import Iterable, List, Optional

from .core import (
    # Types
    Deposit, Withdraw, Transaction, BalanceTable,
    TxResult, SendResult,
    # Errors
    AccountNotFound, AccountUnderFunded, AccountOverFunded,
    # Helper functions
    checked_add, checked_sub, apply_records, is_error,
    validate_account, validate_amount,
)


class Ledger:
    """
    In-memory account ledger with checked arithmetic and replayable history.

    Implements the LedgerView protocol, allowing the ledger to be passed to
    display functions that only read balances.

    Design Principles:
        - Check, then commit: every operation validates its arithmetic before
          touching the balance table, so a failing call leaves it unchanged.
        - Errors are values: deposit, withdraw and send return an
          AccountingError instead of raising. Invalid arguments (empty account
          ids, amounts outside the balance width) still raise ValueError.
        - The caller keeps the history: returned records go into a
          TransactionLog owned by the caller, and Ledger.replay() rebuilds
          the same balances from it.

    Thread Safety:
        Every public method holds a single re-entrant lock for its whole
        duration, so the intermediate state of a send is never observable.

    Example:
        ledger = Ledger()
        ledger.deposit("alice", 100)
        ledger.deposit("bob", 100)
        withdraw, deposit = ledger.send("alice", "bob", 100)
    """

    def __init__(self):
        self._balances: BalanceTable = {}
        self._lock = RLock()

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def get_balance(self, account: str) -> Optional[int]:
        """
        Get the balance of an account.

        Returns:
            Current balance, or None if the account has never been deposited into.
        """
        with self._lock:
            return self._balances.get(account)

    def has_account(self, account: str) -> bool:
        """Check if an account has an entry."""
        with self._lock:
            return account in self._balances

    def list_accounts(self) -> List[str]:
        """List all account ids, sorted."""
        with self._lock:
            return sorted(self._balances)

    def balances(self) -> BalanceTable:
        """Return a copy of the balance table. Mutating it does not affect the ledger."""
        with self._lock:
            return dict(self._balances)

    def total_supply(self) -> int:
        """Sum of all balances. Not bounded by the balance width."""
        with self._lock:
            return sum(self._balances.values())

    def __contains__(self, account: str) -> bool:
        return self.has_account(account)

    def __len__(self) -> int:
        with self._lock:
            return len(self._balances)

    def __repr__(self) -> str:
        with self._lock:
            entries = ", ".join(f"{a!r}: {b}" for a, b in sorted(self._balances.items()))
        return f"Ledger({{{entries}}})"

    # ========================================================================
    # MUTATING OPERATIONS
    # ========================================================================

    def deposit(self, account: str, amount: int) -> TxResult:
        """
        Credit ``amount`` to ``account``, creating the account if needed.

        A new account cannot overflow since it has no prior balance.

        Returns:
            Deposit(account, amount) on success.
            AccountOverFunded(account, amount) if the balance would exceed
            MAX_BALANCE; the balance is left unchanged.

        Raises:
            ValueError: If the account id or amount is invalid.
        """
        validate_account(account)
        validate_amount(amount)
        with self._lock:
            current = self._balances.get(account)
            if current is None:
                self._balances[account] = amount
                return Deposit(account, amount)
            new_balance = checked_add(current, amount)
            if new_balance is None:
                return AccountOverFunded(account, amount)
            self._balances[account] = new_balance
            return Deposit(account, amount)

    def withdraw(self, account: str, amount: int) -> TxResult:
        """
        Debit ``amount`` from an existing ``account``.

        Returns:
            Withdraw(account, amount) on success.
            AccountNotFound(account) if the account has no entry.
            AccountUnderFunded(account, amount) if ``amount`` exceeds the
            balance; the balance is left unchanged.

        Raises:
            ValueError: If the account id or amount is invalid.
        """
        validate_account(account)
        validate_amount(amount)
        with self._lock:
            current = self._balances.get(account)
            if current is None:
                return AccountNotFound(account)
            new_balance = checked_sub(current, amount)
            if new_balance is None:
                return AccountUnderFunded(account, amount)
            self._balances[account] = new_balance
            return Withdraw(account, amount)

    def send(self, sender: str, recipient: str, amount: int) -> SendResult:
        """
        Move ``amount`` from ``sender`` to ``recipient``.

        Both accounts must already exist; unlike deposit(), send never creates
        the recipient. The transfer is a withdraw followed by a deposit. If the
        deposit overflows the recipient, the amount is deposited back into the
        sender so the ledger ends up as if send had never run.

        Returns:
            (Withdraw(sender, amount), Deposit(recipient, amount)) on success.
            AccountNotFound for the sender, then the recipient, if missing.
            AccountUnderFunded(sender, amount) if the sender cannot cover it.
            AccountOverFunded(recipient, amount) if the recipient would overflow.
            The refund's own error if refunding the sender fails.

        Raises:
            ValueError: If an account id or the amount is invalid.
        """
        validate_account(sender)
        validate_account(recipient)
        validate_amount(amount)
        with self._lock:
            if sender not in self._balances:
                return AccountNotFound(sender)
            if recipient not in self._balances:
                return AccountNotFound(recipient)

            withdraw = self.withdraw(sender, amount)
            if is_error(withdraw):
                return AccountUnderFunded(sender, amount)

            deposit = self.deposit(recipient, amount)
            if is_error(deposit):
                refund = self.deposit(sender, amount)
                if is_error(refund):
                    return refund
                return AccountOverFunded(recipient, amount)

            return withdraw, deposit

    # ========================================================================
    # LEDGER OPERATIONS
    # ========================================================================

    def clone(self) -> Ledger:
        """
        Create an independent copy of this ledger.

        Modifications to the clone do not affect the original, and vice versa.
        """
        cloned = Ledger()
        cloned._balances = self.balances()
        return cloned

    @classmethod
    def replay(cls, records: Iterable[Transaction]) -> Ledger:
        """
        Create a new ledger by applying ``records`` in order to an empty table.

        Deposits add (creating accounts), withdrawals subtract. For records
        returned by a ledger's own operations, the result has exactly that
        ledger's balances.

        Raises:
            ReplayError: If a record cannot be applied (unknown account,
                underflow or overflow).
        """
        replayed = cls()
        replayed._balances = apply_records(records)
        return replayed

    def matches(self, other: Ledger) -> bool:
        """Check if ``other`` holds exactly the same balance table."""
        return self.balances() == other.balances()
