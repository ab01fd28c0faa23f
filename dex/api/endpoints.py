"""API endpoints for the pool."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from dex.errors import NoLiquidity
from dex.ledger import InMemoryLedger
from dex.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
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
from dex.oracle import price_oracle
from dex.pool import Pool, get_default_pool

logger = structlog.get_logger()

router = APIRouter()


def get_pool() -> Pool:
    """Dependency provider for the pool instance.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_pool] = lambda: pool

    Returns:
        The pool served by this process.
    """
    return get_default_pool()


def _price_of(reserve_a: int, reserve_b: int) -> PriceResponse | None:
    if reserve_a == 0:
        return None
    return PriceResponse.from_fraction(
        price_oracle.get_price(reserve_a, reserve_b),
        truncated=price_oracle.get_price_truncated(reserve_a, reserve_b),
        scaled=price_oracle.get_price_scaled(reserve_a, reserve_b),
    )


def _dev_ledger(pool: Pool) -> InMemoryLedger:
    if not isinstance(pool.ledger, InMemoryLedger):
        raise HTTPException(status_code=404, detail="Ledger endpoints require the in-memory ledger")
    return pool.ledger


@router.get("/pool")
def read_pool(pool: Pool = Depends(get_pool)) -> PoolResponse:
    """Reserves, total liquidity and spot price from one consistent snapshot."""
    snapshot = pool.snapshot()
    return PoolResponse(
        address=pool.address,
        token_a=pool.token_a,
        token_b=pool.token_b,
        fee_bps=pool.config.fee_bps,
        reserve_a=str(snapshot.reserve_a),
        reserve_b=str(snapshot.reserve_b),
        total_liquidity=str(snapshot.total_shares),
        price=_price_of(snapshot.reserve_a, snapshot.reserve_b),
    )


@router.get("/pool/price")
def read_price(pool: Pool = Depends(get_pool)) -> PriceResponse:
    """Spot price. Responds 400 NoLiquidity while the pool is empty."""
    reserve_a, reserve_b = pool.get_reserves()
    price = _price_of(reserve_a, reserve_b)
    if price is None:
        raise NoLiquidity()
    return price


@router.get("/pool/liquidity/{holder}")
def read_liquidity(holder: str, pool: Pool = Depends(get_pool)) -> LiquidityResponse:
    return LiquidityResponse(holder=holder, shares=str(pool.liquidity(holder)))


@router.post("/pool/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest, pool: Pool = Depends(get_pool)
) -> AddLiquidityResponse:
    minted = pool.add_liquidity(request.provider, int(request.amount_a), int(request.amount_b))
    return AddLiquidityResponse(
        shares_minted=str(minted),
        total_liquidity=str(pool.total_liquidity()),
    )


@router.post("/pool/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest, pool: Pool = Depends(get_pool)
) -> RemoveLiquidityResponse:
    payout_a, payout_b = pool.remove_liquidity(request.provider, int(request.shares))
    return RemoveLiquidityResponse(amount_a=str(payout_a), amount_b=str(payout_b))


@router.post("/pool/swap")
def swap(request: SwapRequest, pool: Pool = Depends(get_pool)) -> SwapResponse:
    result = pool.swap(
        request.direction,
        request.trader,
        int(request.amount_in),
        int(request.min_amount_out),
    )
    return SwapResponse.from_result(result)


@router.post("/quote")
def quote(request: QuoteRequest, pool: Pool = Depends(get_pool)) -> QuoteResponse:
    """Quote against caller-supplied reserves using the pool's fee.

    With amountIn, returns the exact-input output. With amountOut, returns
    the minimum input that buys it.
    """
    reserve_in = int(request.reserve_in)
    reserve_out = int(request.reserve_out)
    if request.amount_in is not None:
        amount_in = int(request.amount_in)
        amount_out = pool.get_amount_out(amount_in, reserve_in, reserve_out)
    else:
        amount_out = int(request.amount_out)  # type: ignore[arg-type]
        amount_in = pool.get_amount_in(amount_out, reserve_in, reserve_out)
    return QuoteResponse(amount_in=str(amount_in), amount_out=str(amount_out))


@router.post("/ledger/mint")
def mint(request: MintRequest, pool: Pool = Depends(get_pool)) -> BalanceResponse:
    """Fund an account on the development ledger."""
    ledger = _dev_ledger(pool)
    ledger.mint(request.asset, request.account, int(request.amount))
    logger.info("ledger_mint", asset=request.asset, account=request.account, amount=request.amount)
    return _balance(ledger, request.asset, request.account)


@router.post("/ledger/approve")
def approve(request: ApproveRequest, pool: Pool = Depends(get_pool)) -> BalanceResponse:
    ledger = _dev_ledger(pool)
    ledger.approve(request.asset, request.owner, int(request.amount))
    return _balance(ledger, request.asset, request.owner)


@router.get("/ledger/{asset}/{account}")
def read_balance(asset: str, account: str, pool: Pool = Depends(get_pool)) -> BalanceResponse:
    return _balance(_dev_ledger(pool), asset, account)


def _balance(ledger: InMemoryLedger, asset: str, account: str) -> BalanceResponse:
    return BalanceResponse(
        asset=asset,
        account=account,
        balance=str(ledger.balance_of(asset, account)),
        allowance=str(ledger.allowance(asset, account)),
    )
