"""Pydantic models for the pool HTTP API."""

from fractions import Fraction

from pydantic import BaseModel, Field, model_validator

from dex.amm.base import SwapDirection, SwapResult
from dex.models.types import Identity, Uint256


class AddLiquidityRequest(BaseModel):
    """Deposit a matched pair of assets."""

    provider: Identity
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    shares_minted: Uint256 = Field(alias="sharesMinted")
    total_liquidity: Uint256 = Field(alias="totalLiquidity")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn shares for a proportional slice of the reserves."""

    provider: Identity
    shares: Uint256

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Exact-input swap."""

    trader: Identity
    direction: SwapDirection
    amount_in: Uint256 = Field(alias="amountIn")
    min_amount_out: Uint256 = Field(
        default="0",
        alias="minAmountOut",
        description="Reject the swap if it would pay less than this.",
    )

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    direction: SwapDirection
    token_in: str = Field(alias="tokenIn")
    token_out: str = Field(alias="tokenOut")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: SwapResult) -> "SwapResponse":
        return cls(
            direction=result.direction,
            token_in=result.token_in,
            token_out=result.token_out,
            amount_in=str(result.amount_in),
            amount_out=str(result.amount_out),
        )


class QuoteRequest(BaseModel):
    """Pure quote against caller-supplied reserves.

    Exactly one of amountIn (exact input) or amountOut (exact output) is set.
    """

    amount_in: Uint256 | None = Field(default=None, alias="amountIn")
    amount_out: Uint256 | None = Field(default=None, alias="amountOut")
    reserve_in: Uint256 = Field(alias="reserveIn")
    reserve_out: Uint256 = Field(alias="reserveOut")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _exactly_one_side(self) -> "QuoteRequest":
        if (self.amount_in is None) == (self.amount_out is None):
            raise ValueError("Provide exactly one of amountIn or amountOut")
        return self


class QuoteResponse(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class PriceResponse(BaseModel):
    """Spot price of asset A in units of asset B."""

    numerator: Uint256
    denominator: Uint256
    truncated: Uint256 = Field(description="reserveB // reserveA")
    scaled: Uint256 = Field(description="reserveB * 1e18 // reserveA")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_fraction(cls, price: Fraction, truncated: int, scaled: int) -> "PriceResponse":
        return cls(
            numerator=str(price.numerator),
            denominator=str(price.denominator),
            truncated=str(truncated),
            scaled=str(scaled),
        )


class PoolResponse(BaseModel):
    """Current pool state."""

    address: str
    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    fee_bps: int = Field(alias="feeBps")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_liquidity: Uint256 = Field(alias="totalLiquidity")
    price: PriceResponse | None = Field(
        default=None, description="Omitted while the pool is empty."
    )

    model_config = {"populate_by_name": True}


class LiquidityResponse(BaseModel):
    holder: str
    shares: Uint256

    model_config = {"populate_by_name": True}


class MintRequest(BaseModel):
    """Credit a development balance on the in-memory ledger."""

    asset: Identity
    account: Identity
    amount: Uint256

    model_config = {"populate_by_name": True}


class ApproveRequest(BaseModel):
    """Authorize the pool to pull up to amount of owner's asset."""

    asset: Identity
    owner: Identity
    amount: Uint256

    model_config = {"populate_by_name": True}


class BalanceResponse(BaseModel):
    asset: str
    account: str
    balance: Uint256
    allowance: Uint256

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str = Field(description="Failure kind, e.g. RatioMismatch")
    detail: str
