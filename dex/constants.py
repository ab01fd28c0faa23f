"""Pool constants.

Centralizes fee parameters and fixed-point scales.
"""

# Fees are expressed in basis points of this base (10000 = 100%)
FEE_BASIS = 10_000

# 0.3% swap fee, the standard constant-product fee tier
DEFAULT_FEE_BPS = 30

# Fixed-point scale for prices exposed as integers (18 decimals)
PRICE_SCALE = 10**18

# Default asset and custody identifiers for a standalone pool
DEFAULT_TOKEN_A = "TKA"
DEFAULT_TOKEN_B = "TKB"
DEFAULT_POOL_ADDRESS = "pool"
