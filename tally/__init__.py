"""
tally - In-Memory Account Ledger

Integer account balances with checked arithmetic and a replayable transaction log.

Usage:
    from tally import Ledger, TransactionLog, is_error

    ledger = Ledger()
    log = TransactionLog()

    log.record(ledger.deposit("alice", 100))
    log.record(ledger.deposit("bob", 100))

    # Transfer between accounts: a Withdraw record and a Deposit record
    result = ledger.send("alice", "bob", 40)
    if is_error(result):
        print(result.message)
    else:
        log.record(result)

    # The log alone rebuilds the same balances
    assert log.replay().balances() == ledger.balances()
"""

# Core types
from .core import (
    Deposit,
    Withdraw,
    Transaction,
    TxKind,
    TxResult,
    SendResult,
    BalanceTable,
    LedgerView,
    AccountingError,
    AccountNotFound,
    AccountUnderFunded,
    AccountOverFunded,
    LedgerError,
    ReplayError,
    BALANCE_BITS,
    MAX_BALANCE,
    checked_add,
    checked_sub,
    apply_records,
    record_from_dict,
    is_error,
    validate_account,
    validate_amount,
)

# Ledger
from .ledger import Ledger

# Transaction log
from .log import TransactionLog

__all__ = [
    # Records
    'Deposit', 'Withdraw', 'Transaction', 'TxKind', 'TxResult', 'SendResult',
    'record_from_dict', 'apply_records',
    # Errors
    'AccountingError', 'AccountNotFound', 'AccountUnderFunded', 'AccountOverFunded',
    'LedgerError', 'ReplayError', 'is_error',
    # Arithmetic and validation
    'BALANCE_BITS', 'MAX_BALANCE', 'checked_add', 'checked_sub',
    'validate_account', 'validate_amount',
    # Ledger
    'Ledger', 'LedgerView', 'BalanceTable',
    # Log
    'TransactionLog',
]

__version__ = '0.1.0'
