"""Constant-product swap math.

The pool prices swaps with x * y = k after taking a proportional fee from
the input. The fee stays in the pool, so k grows with every swap.
"""

from __future__ import annotations

from dex.amm.base import AMM, DEFAULT_FEE_MULTIPLIER
from dex.constants import FEE_BASIS
from dex.errors import InsufficientReserves, NoLiquidity, ZeroInput, ZeroOutput
from dex.safe_int import S


class ConstantProduct(AMM):
    """Fee-adjusted constant-product math.

    Formula: amount_out = (amount_in * fee * reserve_out) / (reserve_in * 10000 + amount_in * fee)

    where fee = 10000 - fee_bps (9970 for the default 0.3% fee).
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
    ) -> int:
        """Quote the output of an exact-input swap.

        Division truncates, so the trader never receives more than the
        curve allows. The result may be 0 when amount_in is dust relative
        to the reserves.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_multiplier: 10000 - fee_bps (default 9970 for 0.3%)

        Returns:
            Output token amount

        Raises:
            ZeroInput: If amount_in <= 0
            NoLiquidity: If either reserve is empty
        """
        if S(amount_in) <= 0:
            raise ZeroInput()
        if S(reserve_in) <= 0 or S(reserve_out) <= 0:
            raise NoLiquidity()

        amount_in_with_fee = S(amount_in) * S(fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_BASIS) + amount_in_with_fee

        return (numerator // denominator).to_uint256()

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
    ) -> int:
        """Minimum input that yields at least amount_out.

        Formula: amount_in = (res_in * out * 10000) / ((res_out - out) * fee) + 1

        Raises:
            ZeroOutput: If amount_out <= 0
            NoLiquidity: If either reserve is empty
            InsufficientReserves: If amount_out would drain the output reserve
        """
        if S(amount_out) <= 0:
            raise ZeroOutput()
        if S(reserve_in) <= 0 or S(reserve_out) <= 0:
            raise NoLiquidity()
        if amount_out >= reserve_out:
            raise InsufficientReserves(
                f"Requested output {amount_out} >= reserve {reserve_out}"
            )

        numerator = S(reserve_in) * S(amount_out) * S(FEE_BASIS)
        denominator = (S(reserve_out) - S(amount_out)) * S(fee_multiplier)

        return ((numerator // denominator) + S(1)).to_uint256()


# Singleton instance
constant_product = ConstantProduct()
