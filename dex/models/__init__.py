"""Pydantic models for the pool HTTP API."""

from dex.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
    ErrorResponse,
    LiquidityResponse,
    MintRequest,
    PoolResponse,
    PriceResponse,
    QuoteRequest,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from dex.models.types import Identity, Uint256

__all__ = [
    # Types
    "Identity",
    "Uint256",
    # Requests
    "AddLiquidityRequest",
    "RemoveLiquidityRequest",
    "SwapRequest",
    "QuoteRequest",
    "MintRequest",
    "ApproveRequest",
    # Responses
    "AddLiquidityResponse",
    "RemoveLiquidityResponse",
    "SwapResponse",
    "QuoteResponse",
    "PriceResponse",
    "PoolResponse",
    "LiquidityResponse",
    "BalanceResponse",
    "ErrorResponse",
]
