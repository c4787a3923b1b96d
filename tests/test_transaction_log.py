"""
test_transaction_log.py - Unit tests for log.py

Tests:
- Appending records, send pairs and errors
- Snapshots, indexing and iteration
- replay() and verify()
"""

import pytest

from tally import (
    Ledger, TransactionLog, Deposit, Withdraw,
    AccountNotFound, ReplayError,
)


class TestAppend:
    """Tests for adding records to the log."""

    def test_new_log_is_empty(self):
        log = TransactionLog()
        assert len(log) == 0
        assert log.records() == ()

    def test_initial_records(self):
        log = TransactionLog([Deposit("alice", 1), Withdraw("alice", 1)])
        assert len(log) == 2

    def test_append_rejects_non_records(self):
        log = TransactionLog()
        with pytest.raises(TypeError, match="Deposit or Withdraw"):
            log.append(AccountNotFound("alice"))

    def test_record_single(self):
        log = TransactionLog()
        assert log.record(Deposit("alice", 5)) is True
        assert log.records() == (Deposit("alice", 5),)

    def test_record_send_pair_keeps_order(self):
        log = TransactionLog()
        log.record((Withdraw("alice", 5), Deposit("bob", 5)))
        assert log.records() == (Withdraw("alice", 5), Deposit("bob", 5))

    def test_record_ignores_errors(self):
        log = TransactionLog()
        assert log.record(AccountNotFound("bob")) is False
        assert len(log) == 0


class TestAccess:
    """Tests for reading the log."""

    def test_indexing(self):
        log = TransactionLog([Deposit("alice", 1), Deposit("bob", 2), Withdraw("bob", 1)])
        assert log[1] == Deposit("bob", 2)
        assert log[-1] == Withdraw("bob", 1)
        assert log[:2] == (Deposit("alice", 1), Deposit("bob", 2))

    def test_iteration_order(self):
        records = [Deposit("alice", 1), Deposit("bob", 2)]
        assert list(TransactionLog(records)) == records

    def test_records_snapshot_is_immutable(self):
        log = TransactionLog([Deposit("alice", 1)])
        snapshot = log.records()
        log.append(Deposit("alice", 2))
        assert snapshot == (Deposit("alice", 1),)

    def test_repr(self):
        assert repr(TransactionLog([Deposit("alice", 1)])) == "TransactionLog(1 records)"


class TestReplayAndVerify:
    """Tests for rebuilding a ledger from the log."""

    def test_replay(self):
        log = TransactionLog([Deposit("alice", 10), Withdraw("alice", 3)])
        assert log.replay().balances() == {"alice": 7}

    def test_replay_invalid_log_raises(self):
        log = TransactionLog([Deposit("alice", 1), Withdraw("bob", 1)])
        with pytest.raises(ReplayError) as exc_info:
            log.replay()
        assert exc_info.value.index == 1

    def test_verify_matches(self):
        ledger = Ledger()
        log = TransactionLog()
        log.record(ledger.deposit("alice", 100))
        log.record(ledger.deposit("bob", 100))
        log.record(ledger.send("alice", "bob", 30))
        assert log.verify(ledger)

    def test_verify_detects_unlogged_change(self):
        ledger = Ledger()
        log = TransactionLog()
        log.record(ledger.deposit("alice", 100))
        ledger.withdraw("alice", 1)
        assert not log.verify(ledger)
