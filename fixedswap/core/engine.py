"""
Invariant engine: swap pricing against canonical reserves.

This module wraps a fee policy with the safety rules every swap obeys,
independent of the curve family:

- the destination reserve must be non-empty,
- the output may never reach the destination reserve (no full drain).

The curve policy additionally requires the input not to exceed the destination
reserve, the domain of its kernel. Constant-sum pricing has no such bound.

All amounts are canonical (1e18-scaled) integers.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InputTooLarge
from .fees import AnyFeePolicy, CurveImplicitFee


@dataclass(frozen=True)
class SwapExactInResult:
    amount_in: int
    amount_out: int
    fee_total: int
    new_reserve_in: int
    new_reserve_out: int


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def quote(policy: AnyFeePolicy, reserve_in: int, reserve_out: int, amount_in: int) -> int:
    """
    Output amount for selling `amount_in` into a pool holding `(reserve_in, reserve_out)`.

    Raises:
        ValueError: non-positive input or negative reserves
        InputTooLarge: the trade cannot be priced or would drain `reserve_out`
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
    ):
        _require_int(name, v)
    if reserve_in < 0 or reserve_out < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve_in}, {reserve_out})")
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")
    if reserve_out == 0:
        raise InputTooLarge("destination reserve is empty")
    if isinstance(policy, CurveImplicitFee) and amount_in > reserve_out:
        raise InputTooLarge(f"amount_in ({amount_in}) exceeds destination reserve ({reserve_out})")

    amount_out = policy.get_return(reserve_in, reserve_out, amount_in)
    if amount_out >= reserve_out:
        raise InputTooLarge(f"amount_out ({amount_out}) would drain destination reserve ({reserve_out})")
    return amount_out


def swap_exact_in(
    policy: AnyFeePolicy,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
) -> SwapExactInResult:
    """
    Quote an exact-in swap and return the post-swap reserves.

    The whole input stays in the pool; `fee_total` is the part of the input the
    trader did not receive back at the 1:1 peg.
    """
    amount_out = quote(policy, reserve_in, reserve_out, amount_in)
    return SwapExactInResult(
        amount_in=amount_in,
        amount_out=amount_out,
        fee_total=amount_in - amount_out,
        new_reserve_in=reserve_in + amount_in,
        new_reserve_out=reserve_out - amount_out,
    )


def get_return_or_zero(policy: AnyFeePolicy, reserve_in: int, reserve_out: int, amount_in: int) -> int:
    """Unchecked policy return with `0 -> 0`; callers keep `amount_in <= reserve_out`."""
    if amount_in == 0:
        return 0
    return policy.get_return(reserve_in, reserve_out, amount_in)
