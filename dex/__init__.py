"""Two-asset constant-product DEX pool."""

__version__ = "0.1.0"

from dex.amm import SwapDirection, SwapResult  # noqa: E402
from dex.config import PoolConfig  # noqa: E402
from dex.errors import PoolError  # noqa: E402
from dex.ledger import AssetLedger, InMemoryLedger  # noqa: E402
from dex.pool import Pool, get_default_pool  # noqa: E402

__all__ = [
    "Pool",
    "PoolConfig",
    "PoolError",
    "AssetLedger",
    "InMemoryLedger",
    "SwapDirection",
    "SwapResult",
    "get_default_pool",
    "__version__",
]
