"""
Liquidity accounting: shares minted on deposit, assets released on withdrawal.

All amounts here are canonical (1e18-scaled) integers; the pool converts to and
from native token units at its boundary.

Deposit:
    First deposit:   shares = amount0 + amount1
    Later deposits:  the deposit is split into a virtual proportional deposit
                     plus an implicit swap of the surplus side at the engine's
                     posted rate; shares are minted for the virtual amounts only:

        shares = floor((virtual0 + virtual1) * total_shares / (reserve0 + reserve1))

Withdraw:
    amount_i = floor(shares * reserve_i / total_shares)

Withdraw with ratio:
    `withdraw(shares)` followed by a swap of the surplus leg against the
    post-withdrawal reserves, solved in one pass (no intermediate state).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .engine import get_return_or_zero
from .errors import AmountExceedsBalance, EmptyDeposit
from .fees import AnyFeePolicy


ONE = 10**18


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class DepositResult:
    shares: int
    virtual_amount0: int
    virtual_amount1: int
    implicit_swap_in: int  # surplus sold to the pool (in the surplus asset)


@dataclass(frozen=True)
class WithdrawResult:
    amount0: int
    amount1: int
    implicit_swap_in: int  # surplus leg sold back to the pool
    implicit_swap_out: int


def _deposit_imbalance(
    policy: AnyFeePolicy,
    dx: int,
    x: int,
    y: int,
    x_reserve: int,
    y_reserve: int,
) -> int:
    """
    Sign of the mismatch between `(x - dx, y + dy)` and the reserve ratio.

    Positive: still too much `x`. Negative: swapped too much. Monotone
    non-increasing in `dx`.
    """
    dy = get_return_or_zero(policy, x_reserve, y_reserve, dx)
    return (x - dx) * y_reserve - (y + dy) * x_reserve


def _virtual_amounts_for_deposit(
    policy: AnyFeePolicy,
    x: int,
    y: int,
    x_reserve: int,
    y_reserve: int,
) -> Tuple[int, int, int]:
    """
    Find the implicit swap of surplus `x` that makes the deposit proportional.

    Returns `(virtual_x, virtual_y, dx)` where `dx` is the largest swap that does
    not overshoot the reserve ratio (bisection, integer-exact).
    """
    lo = 0
    hi = min(x, y_reserve)
    if _deposit_imbalance(policy, hi, x, y, x_reserve, y_reserve) >= 0:
        # Either the exact root, or the pool cannot absorb a larger implicit swap.
        lo = hi
    else:
        while hi - lo > 1:
            mid = (lo + hi) // 2
            shift = _deposit_imbalance(policy, mid, x, y, x_reserve, y_reserve)
            if shift > 0:
                lo = mid
            elif shift < 0:
                hi = mid
            else:
                lo = mid
                break
    dy = get_return_or_zero(policy, x_reserve, y_reserve, lo)
    return x - lo, y + dy, lo


def compute_deposit(
    policy: AnyFeePolicy,
    reserve0: int,
    reserve1: int,
    amount0: int,
    amount1: int,
    total_shares: int,
) -> DepositResult:
    """
    Compute shares to mint for depositing `(amount0, amount1)`.

    Raises:
        EmptyDeposit: both amounts are zero
        ValueError: invalid inputs, or shares outstanding against empty reserves
    """
    for name, v in (
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("amount0", amount0),
        ("amount1", amount1),
        ("total_shares", total_shares),
    ):
        _require_int(name, v)
    if reserve0 < 0 or reserve1 < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve0}, {reserve1})")
    if amount0 < 0 or amount1 < 0:
        raise ValueError(f"Deposit amounts must be non-negative: ({amount0}, {amount1})")
    if total_shares < 0:
        raise ValueError(f"total_shares must be non-negative: {total_shares}")
    if amount0 == 0 and amount1 == 0:
        raise EmptyDeposit("Empty deposit is not allowed")

    if total_shares == 0:
        return DepositResult(
            shares=amount0 + amount1,
            virtual_amount0=amount0,
            virtual_amount1=amount1,
            implicit_swap_in=0,
        )

    total_reserve = reserve0 + reserve1
    if total_reserve == 0:
        raise ValueError("pool has outstanding shares but no reserves")

    shift = amount0 * reserve1 - amount1 * reserve0
    if shift > 0:
        virtual0, virtual1, swapped = _virtual_amounts_for_deposit(policy, amount0, amount1, reserve0, reserve1)
    elif shift < 0:
        virtual1, virtual0, swapped = _virtual_amounts_for_deposit(policy, amount1, amount0, reserve1, reserve0)
    else:
        virtual0, virtual1, swapped = amount0, amount1, 0

    shares = (virtual0 + virtual1) * total_shares // total_reserve
    return DepositResult(
        shares=shares,
        virtual_amount0=virtual0,
        virtual_amount1=virtual1,
        implicit_swap_in=swapped,
    )


def compute_withdraw(
    shares: int,
    reserve0: int,
    reserve1: int,
    total_shares: int,
) -> Tuple[int, int]:
    """
    Proportional redemption (floor rounding).

    Raises:
        ValueError: if inputs are invalid
    """
    for name, v in (
        ("shares", shares),
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_shares", total_shares),
    ):
        _require_int(name, v)
    if shares <= 0:
        raise ValueError(f"shares must be positive: {shares}")
    if total_shares <= 0:
        raise ValueError(f"total_shares must be positive: {total_shares}")
    if shares > total_shares:
        raise ValueError(f"Cannot burn more shares than supply: {shares} > {total_shares}")
    if reserve0 < 0 or reserve1 < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve0}, {reserve1})")

    amount0 = (shares * reserve0) // total_shares
    amount1 = (shares * reserve1) // total_shares
    return amount0, amount1


def _ratio_swap_amount(
    policy: AnyFeePolicy,
    have_in: int,
    have_out: int,
    reserve_in: int,
    reserve_out: int,
    out_share: int,
) -> Tuple[int, int]:
    """
    Smallest `d` of the surplus leg to sell so that the output leg reaches `out_share`.

    Solves `(have_out + q(d)) * (ONE - out_share) >= (have_in - d) * out_share`
    for `d` in `[0, min(have_in, reserve_out)]`, where `q` prices a sale of `d`
    against `(reserve_in, reserve_out)`. Returns `(d, q(d))`.
    """

    def reached(d: int) -> bool:
        q = get_return_or_zero(policy, reserve_in, reserve_out, d)
        return (have_out + q) * (ONE - out_share) >= (have_in - d) * out_share

    hi = min(have_in, reserve_out)
    if not reached(hi):
        raise AmountExceedsBalance(
            f"pool reserve ({reserve_out}) cannot cover the requested ratio"
        )
    lo = 0
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if reached(mid):
            hi = mid
        else:
            lo = mid
    d = hi
    q = get_return_or_zero(policy, reserve_in, reserve_out, d)
    if d > 0 and q >= reserve_out:
        raise AmountExceedsBalance(f"pool reserve ({reserve_out}) would be drained")
    return d, q


def compute_withdraw_with_ratio(
    policy: AnyFeePolicy,
    shares: int,
    ratio0: int,
    reserve0: int,
    reserve1: int,
    total_shares: int,
) -> WithdrawResult:
    """
    Redeem `shares` with `ratio0` (1e18-scaled) of the value taken as asset 0.

    Equivalent to `compute_withdraw` followed by a swap of the surplus leg at
    the engine's rate against the post-withdrawal reserves.

    Raises:
        ValueError: ratio outside [0, 1e18] or invalid inputs
        AmountExceedsBalance: the pool cannot supply the requested asset
    """
    _require_int("ratio0", ratio0)
    if not (0 <= ratio0 <= ONE):
        raise ValueError(f"ratio0 must be in [0, {ONE}]: {ratio0}")

    amount0, amount1 = compute_withdraw(shares, reserve0, reserve1, total_shares)
    left0 = reserve0 - amount0
    left1 = reserve1 - amount1

    shift = amount0 * (ONE - ratio0) - amount1 * ratio0
    if shift < 0:
        # Too little asset 0: sell part of the asset-1 leg for asset 0.
        d, q = _ratio_swap_amount(policy, amount1, amount0, left1, left0, ratio0)
        return WithdrawResult(
            amount0=amount0 + q,
            amount1=amount1 - d,
            implicit_swap_in=d,
            implicit_swap_out=q,
        )
    if shift > 0:
        d, q = _ratio_swap_amount(policy, amount0, amount1, left0, left1, ONE - ratio0)
        return WithdrawResult(
            amount0=amount0 - d,
            amount1=amount1 + q,
            implicit_swap_in=d,
            implicit_swap_out=q,
        )
    return WithdrawResult(amount0=amount0, amount1=amount1, implicit_swap_in=0, implicit_swap_out=0)
