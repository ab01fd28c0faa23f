"""Two-asset constant-product pool.

Pool is the single entry point for deposits, withdrawals, swaps and price
queries. It owns one PoolState and serializes every operation behind a
lock, so each public call is one indivisible state transition and reads
always see a consistent snapshot. The lock is re-entrant so that ledger
callbacks can read the pool, but a callback that starts another mutating
operation is rejected with ReentrantCall.

Every mutating operation runs in the same order:

1. validate and quote against the current state (no mutation)
2. pull inbound assets through the ledger (refusal: abort, nothing changed)
3. commit the state change and check invariants
4. pay outbound assets through the ledger (refusal: restore the snapshot
   and return the inbound assets)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from fractions import Fraction

import structlog

from dex.amm.base import AMM, SwapDirection, SwapResult
from dex.amm.constant_product import constant_product
from dex.config import DEFAULT_POOL_CONFIG, PoolConfig
from dex.errors import (
    InvariantViolation,
    NoLiquidity,
    PoolError,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
    ZeroInput,
    ZeroOutput,
)
from dex.ledger import AssetLedger
from dex.liquidity import LiquidityManager, liquidity_manager
from dex.oracle import PriceOracle, price_oracle
from dex.safe_int import S
from dex.state import PoolSnapshot, PoolState

logger = structlog.get_logger()

# (asset, amount) pairs moved through the ledger in one operation
Legs = list[tuple[str, int]]


class Pool:
    """A constant-product pool over one asset pair.

    Args:
        ledger: Asset custody collaborator
        config: Pool identity and fee (default: TKA/TKB, 0.3%)
        amm: Swap pricing (default: constant_product singleton)
        liquidity: Deposit/withdrawal rules (default: liquidity_manager singleton)
        oracle: Price queries (default: price_oracle singleton)
    """

    def __init__(
        self,
        ledger: AssetLedger,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        amm: AMM | None = None,
        liquidity: LiquidityManager | None = None,
        oracle: PriceOracle | None = None,
    ) -> None:
        self.ledger = ledger
        self.config = config
        self.amm = amm or constant_product
        self.liquidity_manager = liquidity or liquidity_manager
        self.oracle = oracle or price_oracle
        self._state = PoolState()
        self._lock = threading.RLock()
        # Set while a mutating operation runs; guarded by _lock
        self._in_operation = False

    @property
    def token_a(self) -> str:
        return self.config.token_a

    @property
    def token_b(self) -> str:
        return self.config.token_b

    @property
    def address(self) -> str:
        return self.config.address

    # --- Read-only queries ---

    def get_reserves(self) -> tuple[int, int]:
        with self._lock:
            return self._state.reserve_a, self._state.reserve_b

    @property
    def reserve_a(self) -> int:
        return self.get_reserves()[0]

    @property
    def reserve_b(self) -> int:
        return self.get_reserves()[1]

    def liquidity(self, holder: str) -> int:
        """Share balance of holder (0 if they never deposited)."""
        with self._lock:
            return self._state.share_of(holder)

    def total_liquidity(self) -> int:
        with self._lock:
            return self._state.total_shares

    def snapshot(self) -> PoolSnapshot:
        """Consistent copy of reserves and all share balances."""
        with self._lock:
            return self._state.snapshot()

    def get_price(self) -> Fraction:
        """Spot price reserve_b / reserve_a as an exact fraction.

        Raises:
            NoLiquidity: If the pool is empty
        """
        reserve_a, reserve_b = self.get_reserves()
        return self.oracle.get_price(reserve_a, reserve_b)

    def get_price_truncated(self) -> int:
        reserve_a, reserve_b = self.get_reserves()
        return self.oracle.get_price_truncated(reserve_a, reserve_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Quote a swap against arbitrary reserves using this pool's fee."""
        return self.amm.get_amount_out(
            amount_in, reserve_in, reserve_out, self.config.fee_multiplier
        )

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        return self.amm.get_amount_in(
            amount_out, reserve_in, reserve_out, self.config.fee_multiplier
        )

    # --- Liquidity ---

    def add_liquidity(self, caller: str, amount_a: int, amount_b: int) -> int:
        """Deposit a matched pair of assets and receive pool shares.

        The first deposit sets the reserve ratio. Later deposits must match
        it exactly.

        Returns:
            Number of shares minted to caller

        Raises:
            ZeroAmount: If either amount is not positive
            RatioMismatch: If the deposit does not match the reserve ratio
            TransferFailed: If the ledger refuses to pull either asset
            ReentrantCall: If invoked from a ledger callback of another operation
        """
        with self._operation("add_liquidity", caller):
            try:
                minted = self.liquidity_manager.quote_deposit(self._state, amount_a, amount_b)
                legs = [(self.token_a, amount_a), (self.token_b, amount_b)]
                self._pull(legs, caller)

                snapshot = self._state.snapshot()
                try:
                    self.liquidity_manager.apply_deposit(
                        self._state, caller, amount_a, amount_b, minted
                    )
                    self._state.check_invariants()
                except InvariantViolation:
                    self._state.restore(snapshot)
                    self._refund(legs, caller)
                    raise
            except PoolError as exc:
                self._log_rejection("add_liquidity", caller, exc)
                raise

            logger.info(
                "liquidity_added",
                pool=self.address,
                provider=caller,
                amount_a=amount_a,
                amount_b=amount_b,
                shares_minted=minted,
                total_shares=self._state.total_shares,
            )
            return minted

    def remove_liquidity(self, caller: str, share_amount: int) -> tuple[int, int]:
        """Burn shares and receive the proportional slice of both reserves.

        Returns:
            (payout_a, payout_b)

        Raises:
            InsufficientShares: If share_amount is not positive or exceeds
                the caller's balance
            TransferFailed: If the ledger refuses to pay either asset
            InvariantViolation: If a partial payout could not be pulled back
            ReentrantCall: If invoked from a ledger callback of another operation
        """
        with self._operation("remove_liquidity", caller):
            try:
                payout_a, payout_b = self.liquidity_manager.quote_withdrawal(
                    self._state, caller, share_amount
                )

                snapshot = self._state.snapshot()
                try:
                    self.liquidity_manager.apply_withdrawal(
                        self._state, caller, share_amount, payout_a, payout_b
                    )
                    self._state.check_invariants()
                except InvariantViolation:
                    self._state.restore(snapshot)
                    raise

                try:
                    self._push([(self.token_a, payout_a), (self.token_b, payout_b)], caller)
                except PoolError:
                    self._state.restore(snapshot)
                    raise
            except PoolError as exc:
                self._log_rejection("remove_liquidity", caller, exc)
                raise

            logger.info(
                "liquidity_removed",
                pool=self.address,
                provider=caller,
                shares_burned=share_amount,
                amount_a=payout_a,
                amount_b=payout_b,
                total_shares=self._state.total_shares,
            )
            return payout_a, payout_b

    # --- Swaps ---

    def swap_a_for_b(self, caller: str, amount_in: int, min_amount_out: int = 0) -> int:
        """Sell amount_in of asset A for asset B. Returns the B received."""
        return self.swap(SwapDirection.A_TO_B, caller, amount_in, min_amount_out).amount_out

    def swap_b_for_a(self, caller: str, amount_in: int, min_amount_out: int = 0) -> int:
        """Sell amount_in of asset B for asset A. Returns the A received."""
        return self.swap(SwapDirection.B_TO_A, caller, amount_in, min_amount_out).amount_out

    def swap(
        self,
        direction: SwapDirection,
        caller: str,
        amount_in: int,
        min_amount_out: int = 0,
    ) -> SwapResult:
        """Execute an exact-input swap.

        Args:
            direction: Which asset is sold into the pool
            caller: Trader paying amount_in and receiving the output
            amount_in: Exact amount sold
            min_amount_out: Reject the swap if it would pay less than this

        Raises:
            ZeroInput: If amount_in is not positive
            NoLiquidity: If the pool is empty
            ZeroOutput: If the quoted output rounds down to zero
            SlippageExceeded: If the output is below min_amount_out
            TransferFailed: If the ledger refuses either leg
            InvariantViolation: If the reserve product would decrease
            ReentrantCall: If invoked from a ledger callback of another operation
        """
        direction = SwapDirection(direction)
        with self._operation("swap", caller):
            try:
                result = self._swap(direction, caller, amount_in, min_amount_out)
            except PoolError as exc:
                self._log_rejection("swap", caller, exc, direction=direction.value)
                raise

            logger.info(
                "swap_executed",
                pool=self.address,
                trader=caller,
                direction=direction.value,
                amount_in=result.amount_in,
                amount_out=result.amount_out,
                reserve_a=self._state.reserve_a,
                reserve_b=self._state.reserve_b,
            )
            return result

    def _swap(
        self,
        direction: SwapDirection,
        caller: str,
        amount_in: int,
        min_amount_out: int,
    ) -> SwapResult:
        state = self._state
        if S(amount_in) <= 0:
            raise ZeroInput()
        if state.is_empty:
            raise NoLiquidity()

        if direction is SwapDirection.A_TO_B:
            token_in, token_out = self.token_a, self.token_b
            reserve_in, reserve_out = state.reserve_a, state.reserve_b
        else:
            token_in, token_out = self.token_b, self.token_a
            reserve_in, reserve_out = state.reserve_b, state.reserve_a

        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out)
        if amount_out == 0:
            raise ZeroOutput()
        if amount_out < min_amount_out:
            raise SlippageExceeded(f"Output {amount_out} below minimum {min_amount_out}")

        inbound = [(token_in, amount_in)]
        self._pull(inbound, caller)

        snapshot = state.snapshot()
        try:
            if direction is SwapDirection.A_TO_B:
                state.credit_reserves(amount_in, 0)
                state.debit_reserves(0, amount_out)
            else:
                state.credit_reserves(0, amount_in)
                state.debit_reserves(amount_out, 0)

            if state.k < snapshot.k:
                logger.error(
                    "invariant_violation",
                    pool=self.address,
                    k_before=snapshot.k,
                    k_after=state.k,
                )
                raise InvariantViolation(f"Reserve product decreased: {snapshot.k} -> {state.k}")
            state.check_invariants()

            self._push([(token_out, amount_out)], caller)
        except PoolError:
            state.restore(snapshot)
            self._refund(inbound, caller)
            raise

        return SwapResult(
            direction=direction,
            amount_in=amount_in,
            amount_out=amount_out,
            token_in=token_in,
            token_out=token_out,
            k_before=snapshot.k,
            k_after=state.k,
        )

    @contextmanager
    def _operation(self, name: str, caller: str) -> Iterator[None]:
        """Hold the lock for one mutating operation, rejecting nested ones."""
        with self._lock:
            if self._in_operation:
                exc = ReentrantCall(f"{name} called during another pool operation")
                self._log_rejection(name, caller, exc)
                raise exc
            self._in_operation = True
            try:
                yield
            finally:
                self._in_operation = False

    # --- Ledger legs ---

    def _pull(self, legs: Legs, sender: str) -> None:
        """Transfer every leg from sender into custody, or none of them."""
        completed: Legs = []
        for asset, amount in legs:
            if amount == 0:
                continue
            try:
                self.ledger.transfer_in(asset, sender, amount)
            except PoolError:
                self._refund(completed, sender)
                raise
            completed.append((asset, amount))

    def _push(self, legs: Legs, recipient: str) -> None:
        """Transfer every leg from custody to recipient, or none of them."""
        completed: Legs = []
        for asset, amount in legs:
            if amount == 0:
                continue
            try:
                self.ledger.transfer_out(asset, recipient, amount)
            except PoolError:
                logger.warning(
                    "transfer_failed",
                    pool=self.address,
                    asset=asset,
                    recipient=recipient,
                    amount=amount,
                )
                self._reclaim(completed, recipient)
                raise
            completed.append((asset, amount))

    def _refund(self, legs: Legs, account: str) -> None:
        """Return inbound legs already pulled from account."""
        for asset, amount in reversed(legs):
            if amount == 0:
                continue
            try:
                self.ledger.transfer_out(asset, account, amount)
            except TransferFailed as exc:
                logger.error(
                    "refund_failed", pool=self.address, asset=asset, account=account, amount=amount
                )
                raise InvariantViolation(f"Could not refund {amount} {asset} to {account}") from exc

    def _reclaim(self, legs: Legs, account: str) -> None:
        """Pull back outbound legs already paid to account."""
        for asset, amount in reversed(legs):
            try:
                self.ledger.transfer_in(asset, account, amount)
            except TransferFailed as exc:
                logger.error(
                    "reclaim_failed", pool=self.address, asset=asset, account=account, amount=amount
                )
                raise InvariantViolation(
                    f"Could not reclaim {amount} {asset} from {account}"
                ) from exc

    def _log_rejection(
        self, operation: str, caller: str, exc: PoolError, **context: object
    ) -> None:
        log = logger.error if isinstance(exc, InvariantViolation) else logger.info
        log(
            "operation_rejected",
            pool=self.address,
            operation=operation,
            caller=caller,
            error=exc.code,
            reason=exc.reason,
            **context,
        )


def _create_default_pool() -> Pool:
    """Create a pool backed by an in-memory ledger, configured from the environment."""
    from dex.ledger import InMemoryLedger

    config = PoolConfig.from_env()
    logger.info(
        "pool_created",
        pool=config.address,
        token_a=config.token_a,
        token_b=config.token_b,
        fee_bps=config.fee_bps,
    )
    return Pool(ledger=InMemoryLedger(custodian=config.address), config=config)


_default_pool: Pool | None = None
_default_pool_lock = threading.Lock()


def get_default_pool() -> Pool:
    """Process-wide pool used by the HTTP service."""
    global _default_pool
    with _default_pool_lock:
        if _default_pool is None:
            _default_pool = _create_default_pool()
        return _default_pool
