"""
Fee policies: the two interchangeable pricing strategies of a pool.

- `CurveImplicitFee` prices with the fixed-rate curve; there is no explicit fee
  term, the curvature itself is retained by the pool.
- `FlatRateFee` prices at the peg minus a constant proportional fee.

The policy is chosen from the pool's curve tag at construction and is the only
pricing surface liquidity accounting sees (`get_return`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from ..kernels.python import fixed_rate_swap_v1
from ..kernels.python import flat_fee_swap_v1


CURVE_TAG_FIXED_RATE_V1 = "FIXED_RATE_V1"
CURVE_TAG_FLAT_FEE_V1 = "FLAT_FEE_V1"

FEE_SCALE = 10**18


class FeePolicy(Protocol):
    curve_tag: str

    def get_return(self, from_balance: int, to_balance: int, amount_in: int) -> int:
        ...


@dataclass(frozen=True)
class CurveImplicitFee:
    curve_tag: str = CURVE_TAG_FIXED_RATE_V1

    def get_return(self, from_balance: int, to_balance: int, amount_in: int) -> int:
        return fixed_rate_swap_v1.get_return(from_balance, to_balance, amount_in)


@dataclass(frozen=True)
class FlatRateFee:
    fee_rate: int
    curve_tag: str = CURVE_TAG_FLAT_FEE_V1

    def __post_init__(self) -> None:
        flat_fee_swap_v1.validate_fee_rate(self.fee_rate)

    def get_return(self, from_balance: int, to_balance: int, amount_in: int) -> int:
        # Constant sum: reserves only bound the trade, they do not price it.
        return flat_fee_swap_v1.get_return(amount_in, self.fee_rate)


AnyFeePolicy = Union[CurveImplicitFee, FlatRateFee]


def normalize_curve_tag(curve_tag: object) -> str:
    if not isinstance(curve_tag, str) or not curve_tag.strip():
        raise ValueError("curve_tag must be a non-empty string")
    tag = curve_tag.strip().upper()
    if tag not in (CURVE_TAG_FIXED_RATE_V1, CURVE_TAG_FLAT_FEE_V1):
        raise ValueError(f"unsupported curve_tag: {tag!r}")
    return tag


def make_fee_policy(curve_tag: str, fee_rate: int = 0) -> AnyFeePolicy:
    """Build the policy for a curve tag (fail-closed on unknown tags)."""
    tag = normalize_curve_tag(curve_tag)
    if tag == CURVE_TAG_FIXED_RATE_V1:
        if fee_rate != 0:
            raise ValueError(f"{tag} pools must not specify fee_rate")
        return CurveImplicitFee()
    return FlatRateFee(fee_rate=fee_rate)
