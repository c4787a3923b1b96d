"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the tally Ledger.

The tests are organized by invariant:
1. test_replay.py - The transaction log rebuilds the ledger exactly
2. test_atomicity.py - Failed operations leave balances untouched

These tests use hypothesis for property-based testing.
"""
