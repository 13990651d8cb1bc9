"""
State management for fixedswap pools
"""

from .balances import TokenLedger
from .lp import ShareLedger
from .pools import PoolConfig, PoolState, compute_pool_id
from .snapshot import PoolSnapshot, compute_pool_state_root, pool_from_dict, pool_to_dict

__all__ = [
    "TokenLedger",
    "ShareLedger",
    "PoolConfig",
    "PoolState",
    "compute_pool_id",
    "PoolSnapshot",
    "compute_pool_state_root",
    "pool_from_dict",
    "pool_to_dict",
]
