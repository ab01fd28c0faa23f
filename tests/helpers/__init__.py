"""Test helpers module for shared test utilities.

- constants: account names, assets and common amounts
- factories: ledger and pool factory functions
"""

from tests.helpers.constants import ADDR1, ADDR2, ETHER, OWNER, POOL_ADDRESS, TOKEN_A, TOKEN_B
from tests.helpers.factories import ether, make_funded_ledger, make_pool

__all__ = [
    "ADDR1",
    "ADDR2",
    "ETHER",
    "OWNER",
    "POOL_ADDRESS",
    "TOKEN_A",
    "TOKEN_B",
    "ether",
    "make_funded_ledger",
    "make_pool",
]
