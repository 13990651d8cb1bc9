"""
fixedswap: two-asset fixed-peg liquidity pool with integer fixed-point pricing.
"""

from .core.pool import FixedRatePool
from .core.access import OwnerAuthorizer
from .state.balances import TokenLedger
from .state.lp import ShareLedger
from .state.pools import PoolConfig, PoolState

__all__ = [
    "FixedRatePool",
    "OwnerAuthorizer",
    "TokenLedger",
    "ShareLedger",
    "PoolConfig",
    "PoolState",
]
