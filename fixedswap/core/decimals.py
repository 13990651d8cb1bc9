"""
Decimal normalization between native token units and the canonical 1e18 scale.

Scale-up is exact. Scale-down floors, losing at most one raw unit; that loss is
permanent and is never credited back anywhere else.
"""

from __future__ import annotations


CANONICAL_DECIMALS = 18
MAX_DECIMALS = 36


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def validate_decimals(decimals: int) -> None:
    _require_int("decimals", decimals)
    if not (0 <= decimals <= MAX_DECIMALS):
        raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}]: {decimals}")


def to_canonical(raw_amount: int, decimals: int) -> int:
    """Convert a native amount to canonical (18-decimal) units."""
    _require_int("raw_amount", raw_amount)
    validate_decimals(decimals)
    if raw_amount < 0:
        raise ValueError(f"amount must be non-negative: {raw_amount}")
    if decimals <= CANONICAL_DECIMALS:
        return raw_amount * 10 ** (CANONICAL_DECIMALS - decimals)
    return raw_amount // 10 ** (decimals - CANONICAL_DECIMALS)


def from_canonical(canonical_amount: int, decimals: int) -> int:
    """Convert a canonical amount back to native units (floor)."""
    _require_int("canonical_amount", canonical_amount)
    validate_decimals(decimals)
    if canonical_amount < 0:
        raise ValueError(f"amount must be non-negative: {canonical_amount}")
    if decimals <= CANONICAL_DECIMALS:
        return canonical_amount // 10 ** (CANONICAL_DECIMALS - decimals)
    return canonical_amount * 10 ** (decimals - CANONICAL_DECIMALS)
