"""Pool configuration."""

import os
from dataclasses import dataclass

from dex.constants import (
    DEFAULT_FEE_BPS,
    DEFAULT_POOL_ADDRESS,
    DEFAULT_TOKEN_A,
    DEFAULT_TOKEN_B,
    FEE_BASIS,
)


@dataclass(frozen=True)
class PoolConfig:
    """Identity and fee parameters of a single pool.

    Attributes:
        token_a: Ledger identifier of asset A
        token_b: Ledger identifier of asset B
        address: Ledger account that holds the pool's reserves
        fee_bps: Swap fee in basis points (30 = 0.3%), retained by the pool
    """

    token_a: str = DEFAULT_TOKEN_A
    token_b: str = DEFAULT_TOKEN_B
    address: str = DEFAULT_POOL_ADDRESS
    fee_bps: int = DEFAULT_FEE_BPS

    def __post_init__(self) -> None:
        if self.token_a == self.token_b:
            raise ValueError(f"Pool needs two distinct assets, got {self.token_a} twice")
        if not (0 <= self.fee_bps < FEE_BASIS):
            raise ValueError(f"fee_bps must be in [0, {FEE_BASIS}): {self.fee_bps}")

    @property
    def fee_multiplier(self) -> int:
        """Fee multiplier for AMM math (FEE_BASIS - fee_bps).

        For 30 bps (0.3%), this returns 9970.
        """
        return FEE_BASIS - self.fee_bps

    @classmethod
    def from_env(cls) -> "PoolConfig":
        """Build a config from environment variables.

        - DEX_TOKEN_A / DEX_TOKEN_B: asset identifiers (default: TKA / TKB)
        - DEX_POOL_ADDRESS: custody account (default: pool)
        - DEX_FEE_BPS: swap fee in basis points (default: 30)
        """
        return cls(
            token_a=os.environ.get("DEX_TOKEN_A", DEFAULT_TOKEN_A),
            token_b=os.environ.get("DEX_TOKEN_B", DEFAULT_TOKEN_B),
            address=os.environ.get("DEX_POOL_ADDRESS", DEFAULT_POOL_ADDRESS),
            fee_bps=int(os.environ.get("DEX_FEE_BPS", str(DEFAULT_FEE_BPS))),
        )


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
