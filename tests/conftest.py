"""
conftest.py - Shared pytest fixtures for tally tests

Provides common fixtures used across unit, conformance and CLI tests:
- Ledgers (empty, funded, funded to the balance limit)
- A ledger paired with its transaction log
"""

import pytest

from tally import Ledger, TransactionLog, MAX_BALANCE


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def empty_ledger():
    """Fresh ledger with no accounts."""
    return Ledger()


@pytest.fixture
def funded_ledger():
    """Ledger with alice and bob holding 100 each."""
    ledger = Ledger()
    ledger.deposit("alice", 100)
    ledger.deposit("bob", 100)
    return ledger


@pytest.fixture
def full_ledger():
    """Ledger where alice holds MAX_BALANCE and bob holds 100."""
    ledger = Ledger()
    ledger.deposit("alice", MAX_BALANCE)
    ledger.deposit("bob", 100)
    return ledger


@pytest.fixture
def logged_ledger():
    """An empty ledger paired with an empty transaction log."""
    return Ledger(), TransactionLog()
