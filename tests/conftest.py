"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from dex.errors import TransferFailed
from dex.ledger import InMemoryLedger
from dex.pool import Pool
from tests.helpers import (
    ADDR1,
    ADDR2,
    OWNER,
    POOL_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    ether,
    make_funded_ledger,
    make_pool,
)

# =============================================================================
# Mock ledgers for dependency injection
# =============================================================================


class FailingLedger(InMemoryLedger):
    """In-memory ledger that refuses selected transfers.

    Usage:
        # Refuse every pull of TKB into custody
        ledger = FailingLedger(fail_in={"TKB"})

        # Refuse paying TKA out of custody
        ledger = FailingLedger(fail_out={"TKA"})

    Failures can be switched on after funding the pool by mutating
    fail_in / fail_out.
    """

    def __init__(
        self,
        custodian: str = POOL_ADDRESS,
        fail_in: set[str] | None = None,
        fail_out: set[str] | None = None,
    ) -> None:
        super().__init__(custodian)
        self.fail_in = fail_in or set()
        self.fail_out = fail_out or set()
        self.calls: list[tuple[str, str, str, int]] = []  # Track calls for assertions

    def transfer_in(self, asset: str, sender: str, amount: int) -> None:
        self.calls.append(("in", asset, sender, amount))
        if asset in self.fail_in:
            raise TransferFailed(f"Mock refusal of {asset} from {sender}")
        super().transfer_in(asset, sender, amount)

    def transfer_out(self, asset: str, recipient: str, amount: int) -> None:
        self.calls.append(("out", asset, recipient, amount))
        if asset in self.fail_out:
            raise TransferFailed(f"Mock refusal of {asset} to {recipient}")
        super().transfer_out(asset, recipient, amount)


class ReenteringLedger(InMemoryLedger):
    """In-memory ledger that runs a callback before each pull into custody.

    Usage:
        ledger = ReenteringLedger()
        ledger.on_transfer_in = lambda: pool.swap_a_for_b(ADDR2, ether(1))

    The callback runs once, on the first pull after it is set. Errors it
    raises propagate out of transfer_in unless catch_errors is set, in which
    case they are recorded in errors and the transfer goes ahead.
    """

    def __init__(self, custodian: str = POOL_ADDRESS, catch_errors: bool = False) -> None:
        super().__init__(custodian)
        self.on_transfer_in: Callable[[], object] | None = None
        self.catch_errors = catch_errors
        self.errors: list[Exception] = []

    def transfer_in(self, asset: str, sender: str, amount: int) -> None:
        callback, self.on_transfer_in = self.on_transfer_in, None
        if callback is not None:
            try:
                callback()
            except Exception as exc:
                if not self.catch_errors:
                    raise
                self.errors.append(exc)
        super().transfer_in(asset, sender, amount)


def _fund(ledger: InMemoryLedger, balance: int) -> None:
    for asset in (TOKEN_A, TOKEN_B):
        for account in (OWNER, ADDR1, ADDR2):
            ledger.mint(asset, account, balance)
            ledger.approve(asset, account, balance)


def make_failing_ledger(balance: int = ether(1_000_000)) -> FailingLedger:
    """FailingLedger with the standard test accounts funded and approved."""
    ledger = FailingLedger(custodian=POOL_ADDRESS)
    _fund(ledger, balance)
    return ledger


def make_reentering_ledger(
    catch_errors: bool = False, balance: int = ether(1_000_000)
) -> ReenteringLedger:
    """ReenteringLedger with the standard test accounts funded and approved."""
    ledger = ReenteringLedger(custodian=POOL_ADDRESS, catch_errors=catch_errors)
    _fund(ledger, balance)
    return ledger


# =============================================================================
# Pytest fixtures
# =============================================================================


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Ledger where owner, addr1 and addr2 hold and approved 1M of each asset."""
    return make_funded_ledger()


@pytest.fixture
def pool(ledger: InMemoryLedger) -> Pool:
    """An empty TKA/TKB pool with the default 0.3% fee."""
    return make_pool(ledger)


@pytest.fixture
def seeded_pool(pool: Pool) -> Pool:
    """A pool holding 100 TKA / 200 TKB, all shares owned by owner."""
    pool.add_liquidity(OWNER, ether(100), ether(200))
    return pool


@pytest.fixture
def failing_ledger() -> FailingLedger:
    return make_failing_ledger()


@pytest.fixture
def failing_pool(failing_ledger: FailingLedger) -> Pool:
    """Pool over a FailingLedger, seeded with 100 TKA / 200 TKB by owner."""
    pool = make_pool(failing_ledger)
    pool.add_liquidity(OWNER, ether(100), ether(200))
    return pool


@pytest.fixture
def reentering_ledger() -> ReenteringLedger:
    return make_reentering_ledger()


@pytest.fixture
def reentering_pool(reentering_ledger: ReenteringLedger) -> Pool:
    """Pool over a ReenteringLedger, seeded with 100 TKA / 200 TKB by owner."""
    pool = make_pool(reentering_ledger)
    pool.add_liquidity(OWNER, ether(100), ether(200))
    return pool
