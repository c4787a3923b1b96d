"""
strategies.py - Hypothesis strategies for random ledger operation sequences
"""

from hypothesis import strategies as st

from tally import Ledger, MAX_BALANCE


ACCOUNTS = ["alice", "bob", "carol"]

# Amounts biased towards both small values and the top of the balance width,
# so overflow and underflow paths come up as often as successes.
amounts = st.one_of(
    st.integers(min_value=0, max_value=1_000),
    st.integers(min_value=MAX_BALANCE - 1_000, max_value=MAX_BALANCE),
    st.integers(min_value=0, max_value=MAX_BALANCE),
)

accounts = st.sampled_from(ACCOUNTS)

operations = st.one_of(
    st.tuples(st.just("deposit"), accounts, amounts),
    st.tuples(st.just("withdraw"), accounts, amounts),
    st.tuples(st.just("send"), accounts, accounts, amounts),
)

operation_sequences = st.lists(operations, min_size=1, max_size=40)


def run_operation(ledger: Ledger, op: tuple):
    """Run an (operation, *args) tuple against ``ledger`` and return its result."""
    name, *args = op
    return getattr(ledger, name)(*args)
