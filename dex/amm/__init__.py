"""AMM pricing math."""

from dex.amm.base import AMM, SwapDirection, SwapResult
from dex.amm.constant_product import ConstantProduct, constant_product

__all__ = [
    "AMM",
    "SwapDirection",
    "SwapResult",
    "ConstantProduct",
    "constant_product",
]
