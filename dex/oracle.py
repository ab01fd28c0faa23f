"""Spot price derived from pool reserves.

The canonical price is an exact rational reserve_b / reserve_a, so a
ratio-matching deposit leaves it exactly unchanged. Integer projections
(truncated and 18-decimal fixed point) are provided for callers that need
a single number.
"""

from __future__ import annotations

from fractions import Fraction

from dex.constants import PRICE_SCALE
from dex.errors import NoLiquidity
from dex.safe_int import S


class PriceOracle:
    """Read-only price queries over (reserve_a, reserve_b)."""

    def get_price(self, reserve_a: int, reserve_b: int) -> Fraction:
        """Price of one unit of A in units of B.

        Raises:
            NoLiquidity: If reserve_a is zero
        """
        if reserve_a == 0:
            raise NoLiquidity()
        return Fraction(reserve_b, reserve_a)

    def get_price_truncated(self, reserve_a: int, reserve_b: int) -> int:
        """Integer price reserve_b // reserve_a (2 for reserves (100, 200))."""
        if reserve_a == 0:
            raise NoLiquidity()
        return (S(reserve_b) // S(reserve_a)).to_uint256()

    def get_price_scaled(self, reserve_a: int, reserve_b: int, scale: int = PRICE_SCALE) -> int:
        """Price as a fixed-point integer: reserve_b * scale // reserve_a."""
        if reserve_a == 0:
            raise NoLiquidity()
        return (S(reserve_b) * S(scale) // S(reserve_a)).to_uint256()


# Singleton instance
price_oracle = PriceOracle()
