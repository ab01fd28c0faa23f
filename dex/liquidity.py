"""Liquidity deposit and withdrawal accounting.

LiquidityManager splits each operation in two steps so that the caller can
put external transfers between validation and mutation:

- ``quote_deposit`` / ``quote_withdrawal`` validate against the current
  state and compute amounts without touching it
- ``apply_deposit`` / ``apply_withdrawal`` commit a quoted operation

Share math:
    first deposit:       shares = floor(sqrt(amount_a * amount_b))
    later deposits:      shares = floor(total_shares * amount_a / reserve_a)
    withdrawal payouts:  out_x  = floor(reserve_x * shares / total_shares)

Every division truncates, so rounding always favors the pool.
"""

from __future__ import annotations

import structlog

from dex.errors import InsufficientShares, InvariantViolation, RatioMismatch, ZeroAmount
from dex.safe_int import S
from dex.state import PoolState

logger = structlog.get_logger()


def bootstrap_shares(amount_a: int, amount_b: int) -> int:
    """Shares minted by the first deposit: the geometric mean of the amounts.

    Independent of asset order, and >= 1 for any positive amounts.
    """
    return (S(amount_a) * S(amount_b)).isqrt().to_uint256()


class LiquidityManager:
    """Deposit and withdrawal rules for a PoolState."""

    def quote_deposit(self, state: PoolState, amount_a: int, amount_b: int) -> int:
        """Validate a deposit and return the shares it would mint.

        Raises:
            ZeroAmount: If either amount is not positive, or the deposit is
                too small to mint a single share
            RatioMismatch: If the pool has liquidity and
                amount_a * reserve_b != amount_b * reserve_a
        """
        if S(amount_a) <= 0 or S(amount_b) <= 0:
            raise ZeroAmount()

        if state.is_empty:
            return bootstrap_shares(amount_a, amount_b)

        # Exact cross-multiplication, no division
        if S(amount_a) * S(state.reserve_b) != S(amount_b) * S(state.reserve_a):
            raise RatioMismatch()

        minted = (S(state.total_shares) * S(amount_a) // S(state.reserve_a)).to_uint256()
        if minted == 0:
            raise ZeroAmount("Deposit too small to mint shares")
        return minted

    def apply_deposit(
        self,
        state: PoolState,
        holder: str,
        amount_a: int,
        amount_b: int,
        minted: int,
    ) -> None:
        """Commit a deposit previously validated by quote_deposit."""
        state.credit_reserves(amount_a, amount_b)
        state.mint(holder, minted)

    def quote_withdrawal(self, state: PoolState, holder: str, share_amount: int) -> tuple[int, int]:
        """Validate a withdrawal and return its (payout_a, payout_b).

        Raises:
            InsufficientShares: If share_amount <= 0 or exceeds the holder's balance
        """
        balance = state.share_of(holder)
        if S(share_amount) <= 0 or share_amount > balance:
            logger.debug(
                "withdrawal_exceeds_balance",
                holder=holder,
                requested=share_amount,
                balance=balance,
            )
            raise InsufficientShares()

        total = S(state.total_shares)
        payout_a = (S(state.reserve_a) * S(share_amount) // total).to_uint256()
        payout_b = (S(state.reserve_b) * S(share_amount) // total).to_uint256()
        return payout_a, payout_b

    def apply_withdrawal(
        self,
        state: PoolState,
        holder: str,
        share_amount: int,
        payout_a: int,
        payout_b: int,
    ) -> None:
        """Commit a withdrawal previously validated by quote_withdrawal."""
        state.burn(holder, share_amount)
        state.debit_reserves(payout_a, payout_b)
        if state.total_shares == 0 and (state.reserve_a or state.reserve_b):
            raise InvariantViolation(
                f"Last shares burned but reserves remain: ({state.reserve_a}, {state.reserve_b})"
            )


# Singleton instance
liquidity_manager = LiquidityManager()
