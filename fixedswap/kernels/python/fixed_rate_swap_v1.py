"""
Fixed-rate stable swap kernel (v1 semantics).

Marginal rate at normalized pool position `z = x / (x + y)`:

    rate(z) = 0.9999 + (0.5817091329374359 - 1.2734233188154198 * z) ** 17

Swapping `dx` moves the position from `z0 = x / T` to `z1 = (x + dx) / T`
(`T = x + y`), so the average rate is the integral of `rate` over `[z0, z1]`
divided by `z1 - z0`:

    avg(z0, z1) = (0.9999 * (z1 - z0) + C2 * ((z0 - C3) ** 18 - (z1 - C3) ** 18)) / (z1 - z0)

with `C2 = 1.2734233188154198 ** 17 / 18` and `C3 = 0.5817091329374359 / 1.2734233188154198`.

Everything is integer fixed point at 1e18 scale; the sequence of floor divisions
below is part of the contract (outputs are bit-exact).
"""

from __future__ import annotations


ONE = 10**18
C1 = 999_900_000_000_000_000  # 0.9999
C2 = 3_382_712_334_998_325_432
C3 = 456_807_350_974_663_119


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def power_helper(x: int) -> int:
    """
    Compute `|x - C3| ** 18` in 1e18 fixed point (floor rounding at each step).
    """
    if x > C3:
        p = x - C3
    else:
        p = C3 - x
    p = p * p // ONE  # p^2
    pp = p * p // ONE  # p^4
    pp = pp * pp // ONE  # p^8
    pp = pp * pp // ONE  # p^16
    return p * pp // ONE  # p^18


def get_return(from_balance: int, to_balance: int, amount_in: int) -> int:
    """
    Output amount for selling `amount_in` against `(from_balance, to_balance)`.

    Domain: `0 < amount_in <= to_balance`. The amount multiplier is clamped to
    `[0, 1]`: the output never exceeds the input and is never negative.
    """
    for name, v in (
        ("from_balance", from_balance),
        ("to_balance", to_balance),
        ("amount_in", amount_in),
    ):
        _require_int(name, v)
    if from_balance < 0 or to_balance < 0:
        raise ValueError("balances must be non-negative")
    if amount_in <= 0:
        raise ValueError("amount_in must be positive")
    if amount_in > to_balance:
        raise ValueError("amount_in exceeds to_balance")

    total_balance = from_balance + to_balance
    x0 = ONE * from_balance // total_balance
    x1 = ONE * (from_balance + amount_in) // total_balance
    scaled_amount_in = ONE * amount_in
    amount_multiplier = (
        C1 * scaled_amount_in // total_balance
        + C2 * power_helper(x0)
        - C2 * power_helper(x1)
    ) * total_balance // scaled_amount_in
    # When amount_in is tiny relative to total_balance, flooring in power_helper
    # can outweigh the linear term and drive the multiplier below zero.
    amount_multiplier = max(amount_multiplier, 0)
    return amount_in * min(amount_multiplier, ONE) // ONE
