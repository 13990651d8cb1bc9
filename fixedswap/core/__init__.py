"""
Core pool algorithms
"""

from .decimals import to_canonical, from_canonical
from .engine import quote, swap_exact_in, SwapExactInResult
from .fees import CurveImplicitFee, FlatRateFee, make_fee_policy
from .liquidity import (
    compute_deposit,
    compute_withdraw,
    compute_withdraw_with_ratio,
    DepositResult,
    WithdrawResult,
)
from .errors import (
    PoolError,
    EmptyDeposit,
    Unauthorized,
    InputTooLarge,
    InsufficientOutput,
    BurnExceedsBalance,
    AmountExceedsBalance,
    TransferFailed,
)

__all__ = [
    "to_canonical",
    "from_canonical",
    "quote",
    "swap_exact_in",
    "SwapExactInResult",
    "CurveImplicitFee",
    "FlatRateFee",
    "make_fee_policy",
    "compute_deposit",
    "compute_withdraw",
    "compute_withdraw_with_ratio",
    "DepositResult",
    "WithdrawResult",
    "PoolError",
    "EmptyDeposit",
    "Unauthorized",
    "InputTooLarge",
    "InsufficientOutput",
    "BurnExceedsBalance",
    "AmountExceedsBalance",
    "TransferFailed",
]
