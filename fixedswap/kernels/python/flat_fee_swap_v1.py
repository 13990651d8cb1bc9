"""
Flat-fee constant-sum swap kernel (v1 semantics).

    amount_out = floor(amount_in * (1e18 - fee_rate) / 1e18)

There is no curvature: the rate is the peg minus a fixed proportional fee, and
the fee portion of the input stays in the pool.
"""

from __future__ import annotations


ONE = 10**18


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def validate_fee_rate(fee_rate: int) -> None:
    _require_int("fee_rate", fee_rate)
    if not (0 <= fee_rate < ONE):
        raise ValueError(f"fee_rate must be in [0, {ONE}): {fee_rate}")


def get_return(amount_in: int, fee_rate: int) -> int:
    _require_int("amount_in", amount_in)
    validate_fee_rate(fee_rate)
    if amount_in <= 0:
        raise ValueError("amount_in must be positive")
    return amount_in * (ONE - fee_rate) // ONE
