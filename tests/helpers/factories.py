"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool

    pool = make_pool()
    pool.add_liquidity(OWNER, ether(100), ether(200))
"""

from dex.config import PoolConfig
from dex.ledger import InMemoryLedger
from dex.pool import Pool
from tests.helpers.constants import ADDR1, ADDR2, ETHER, OWNER, POOL_ADDRESS, TOKEN_A, TOKEN_B


def ether(amount: int) -> int:
    """Whole tokens to base units (18 decimals)."""
    return amount * ETHER


def make_funded_ledger(
    accounts: tuple[str, ...] = (OWNER, ADDR1, ADDR2),
    balance: int = ether(1_000_000),
    allowance: int | None = None,
) -> InMemoryLedger:
    """In-memory ledger where every account holds and has approved balance of both assets."""
    ledger = InMemoryLedger(custodian=POOL_ADDRESS)
    for account in accounts:
        for asset in (TOKEN_A, TOKEN_B):
            ledger.mint(asset, account, balance)
            ledger.approve(asset, account, balance if allowance is None else allowance)
    return ledger


def make_pool(ledger=None, fee_bps: int = 30) -> Pool:
    """Empty pool over TOKEN_A/TOKEN_B backed by a funded in-memory ledger."""
    config = PoolConfig(token_a=TOKEN_A, token_b=TOKEN_B, address=POOL_ADDRESS, fee_bps=fee_bps)
    return Pool(ledger=ledger if ledger is not None else make_funded_ledger(), config=config)
