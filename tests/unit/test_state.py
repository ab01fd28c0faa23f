"""Tests for PoolState primitives and invariant checks."""

import pytest

from dex.errors import Insufficient, InsufficientReserves, InsufficientShares, InvariantViolation
from dex.state import PoolState


class TestPoolStatePrimitives:
    """Tests for checked reserve and share updates."""

    def test_new_state_is_empty(self):
        state = PoolState()
        assert state.is_empty
        assert (state.reserve_a, state.reserve_b, state.total_shares) == (0, 0, 0)
        assert state.shares == {}
        state.check_invariants()

    def test_mint_creates_holder_lazily(self):
        state = PoolState()
        assert state.share_of("alice") == 0
        assert "alice" not in state.shares
        state.mint("alice", 10)
        assert state.shares == {"alice": 10}
        assert state.total_shares == 10

    def test_full_burn_leaves_zero_entry(self):
        """A fully withdrawn holder stays in the mapping at zero."""
        state = PoolState()
        state.mint("alice", 10)
        state.burn("alice", 10)
        assert state.shares == {"alice": 0}
        assert state.total_shares == 0

    def test_burn_more_than_owned_raises(self):
        state = PoolState()
        state.mint("alice", 10)
        with pytest.raises(InsufficientShares):
            state.burn("alice", 11)
        assert state.share_of("alice") == 10
        assert state.total_shares == 10

    def test_burn_unknown_holder_raises(self):
        state = PoolState()
        with pytest.raises(InsufficientShares):
            state.burn("mallory", 1)

    def test_debit_reserves_below_zero_raises(self):
        """Reserve decrements fail instead of clamping, and change nothing."""
        state = PoolState(reserve_a=5, reserve_b=5)
        with pytest.raises(InsufficientReserves):
            state.debit_reserves(0, 6)
        assert (state.reserve_a, state.reserve_b) == (5, 5)

    def test_insufficient_errors_share_base(self):
        assert issubclass(InsufficientShares, Insufficient)
        assert issubclass(InsufficientReserves, Insufficient)

    def test_negative_amounts_rejected(self):
        state = PoolState()
        with pytest.raises(ValueError):
            state.credit_reserves(-1, 0)
        with pytest.raises(ValueError):
            state.mint("alice", -1)


class TestPoolStateSnapshot:
    """Tests for snapshot and restore."""

    def test_snapshot_is_detached(self):
        state = PoolState()
        state.credit_reserves(100, 200)
        state.mint("alice", 141)
        snapshot = state.snapshot()

        state.mint("bob", 5)
        assert "bob" not in snapshot.shares
        assert snapshot.total_shares == 141
        with pytest.raises(TypeError):
            snapshot.shares["bob"] = 1  # type: ignore[index]

    def test_restore_resets_everything(self):
        state = PoolState()
        state.credit_reserves(100, 200)
        state.mint("alice", 141)
        snapshot = state.snapshot()

        state.credit_reserves(1, 1)
        state.mint("bob", 3)
        state.restore(snapshot)

        assert state.snapshot() == snapshot
        assert state.shares == {"alice": 141}

    def test_k(self):
        state = PoolState(reserve_a=3, reserve_b=7)
        assert state.k == 21
        assert state.snapshot().k == 21


class TestPoolStateInvariants:
    """Tests for check_invariants."""

    def test_shares_must_sum_to_total(self):
        state = PoolState(reserve_a=1, reserve_b=1, total_shares=2, shares={"alice": 1})
        with pytest.raises(InvariantViolation):
            state.check_invariants()

    def test_reserves_without_shares(self):
        state = PoolState(reserve_a=1, reserve_b=0)
        with pytest.raises(InvariantViolation):
            state.check_invariants()

    def test_shares_with_empty_reserve(self):
        state = PoolState(reserve_a=10, reserve_b=0, total_shares=1, shares={"alice": 1})
        with pytest.raises(InvariantViolation):
            state.check_invariants()

    def test_consistent_state_passes(self):
        state = PoolState(
            reserve_a=10, reserve_b=20, total_shares=14, shares={"a": 4, "b": 10, "c": 0}
        )
        state.check_invariants()
