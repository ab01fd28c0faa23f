"""Base classes for AMM pricing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from dex.constants import DEFAULT_FEE_BPS, FEE_BASIS

# Share of the input kept after the fee, in FEE_BASIS units (9970 = 0.3% fee)
DEFAULT_FEE_MULTIPLIER = FEE_BASIS - DEFAULT_FEE_BPS


class SwapDirection(str, Enum):
    """Which asset a swap sells into the pool."""

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


@dataclass(frozen=True)
class SwapResult:
    """Outcome of an executed swap."""

    direction: SwapDirection
    amount_in: int
    amount_out: int
    token_in: str
    token_out: str
    # Reserve product before and after, for invariant auditing
    k_before: int
    k_after: int


class AMM(ABC):
    """Abstract pricing function of a two-asset pool.

    Implementations are pure: they read reserves passed in and never
    touch pool state.
    """

    @abstractmethod
    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
    ) -> int:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_multiplier: FEE_BASIS - fee_bps

        Returns:
            Output token amount (may be 0 for dust inputs)
        """
        ...

    @abstractmethod
    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
    ) -> int:
        """Calculate required input for a desired output.

        Args:
            amount_out: Desired output token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_multiplier: FEE_BASIS - fee_bps

        Returns:
            Required input token amount
        """
        ...
