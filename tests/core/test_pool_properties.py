# [TESTER] v1

from __future__ import annotations

import importlib.util
from typing import Tuple

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from fixedswap.core.access import OwnerAuthorizer
from fixedswap.core.decimals import from_canonical, to_canonical
from fixedswap.core.engine import quote
from fixedswap.core.errors import AmountExceedsBalance, InputTooLarge, PoolError
from fixedswap.core.fees import CurveImplicitFee, FlatRateFee
from fixedswap.core.liquidity import compute_withdraw, compute_withdraw_with_ratio
from fixedswap.core.pool import FixedRatePool
from fixedswap.kernels.python.fixed_rate_swap_v1 import get_return
from fixedswap.state.balances import TokenLedger
from fixedswap.state.pools import PoolConfig


ONE = 10**18
OWNER = "owner"
TRADER = "trader"
POLICIES = [CurveImplicitFee(), FlatRateFee(fee_rate=300_000_000_000_000)]

reserves = st.integers(min_value=10**15, max_value=10**27)


def _pool(amount0: int, amount1: int) -> Tuple[FixedRatePool, TokenLedger, TokenLedger]:
    token0 = TokenLedger("a", 18)
    token1 = TokenLedger("b", 18)
    pool = FixedRatePool(PoolConfig("a", "b", 18, 18, "FIXED_RATE_V1"), token0, token1, OwnerAuthorizer(OWNER))
    for ledger in (token0, token1):
        for holder in (OWNER, TRADER):
            ledger.mint(holder, 10**30)
            ledger.approve(holder, pool.address, 10**30)
    pool.deposit(OWNER, amount0, amount1)
    return pool, token0, token1


@settings(max_examples=200, deadline=None)
@given(x=st.integers(min_value=0, max_value=10**30), y=st.integers(min_value=1, max_value=10**30), data=st.data())
def test_curve_output_is_bounded_by_input(x: int, y: int, data: st.DataObject) -> None:
    dx = data.draw(st.integers(min_value=1, max_value=y))
    out = get_return(x, y, dx)
    assert 0 <= out <= dx


@settings(max_examples=50, deadline=None)
@given(a=reserves, b=reserves, data=st.data())
def test_mirrored_pools_swap_identically(a: int, b: int, data: st.DataObject) -> None:
    dx = data.draw(st.integers(min_value=1, max_value=min(a, b)))
    left, _, _ = _pool(a, b)
    right, _, _ = _pool(b, a)
    try:
        out_left = left.swap0_to_1(TRADER, dx)
    except InputTooLarge:
        with pytest.raises(InputTooLarge):
            right.swap1_to_0(TRADER, dx)
        return
    assert right.swap1_to_0(TRADER, dx) == out_left
    assert (left.state.reserve0, left.state.reserve1) == (right.state.reserve1, right.state.reserve0)


@given(raw=st.integers(min_value=0, max_value=10**40), decimals=st.integers(min_value=0, max_value=36))
def test_decimal_round_trip_loses_at_most_one_step(raw: int, decimals: int) -> None:
    back = from_canonical(to_canonical(raw, decimals), decimals)
    assert back <= raw
    if decimals <= 18:
        assert back == raw
    else:
        assert raw - back < 10 ** (decimals - 18)


@settings(max_examples=200, deadline=None)
@given(
    r0=reserves,
    r1=reserves,
    ratio0=st.integers(min_value=0, max_value=ONE),
    policy=st.sampled_from(POLICIES),
    data=st.data(),
)
def test_ratio_withdraw_equals_withdraw_then_swap(r0: int, r1: int, ratio0: int, policy, data: st.DataObject) -> None:
    total = r0 + r1
    shares = data.draw(st.integers(min_value=1, max_value=total - 1))
    try:
        res = compute_withdraw_with_ratio(policy, shares, ratio0, r0, r1, total)
    except AmountExceedsBalance:
        assume(False)
    a0, a1 = compute_withdraw(shares, r0, r1, total)
    left0, left1 = r0 - a0, r1 - a1
    if res.implicit_swap_in == 0:
        assert (res.amount0, res.amount1) == (a0, a1)
    elif res.amount1 < a1:
        assert res.amount1 == a1 - res.implicit_swap_in
        assert res.amount0 == a0 + quote(policy, left1, left0, res.implicit_swap_in)
    else:
        assert res.amount0 == a0 - res.implicit_swap_in
        assert res.amount1 == a1 + quote(policy, left0, left1, res.implicit_swap_in)
    assert res.amount0 >= 0 and res.amount1 >= 0


@settings(max_examples=50, deadline=None)
@given(
    seed0=reserves,
    seed1=reserves,
    ops=st.lists(
        st.tuples(
            st.sampled_from(["deposit", "withdraw", "ratio", "swap0", "swap1"]),
            st.integers(min_value=1, max_value=10**24),
            st.integers(min_value=0, max_value=ONE),
        ),
        max_size=12,
    ),
)
def test_operation_sequences_keep_books_consistent(seed0: int, seed1: int, ops) -> None:
    pool, token0, token1 = _pool(seed0, seed1)
    for kind, amount, ratio in ops:
        held = pool.balance_of(OWNER)
        if kind in ("withdraw", "ratio") and held == 0:
            continue
        try:
            if kind == "deposit":
                pool.deposit(OWNER, amount, amount * ratio // ONE)
            elif kind == "withdraw":
                pool.withdraw(OWNER, min(amount, held))
            elif kind == "ratio":
                pool.withdraw_with_ratio(OWNER, min(amount, held), ratio)
            elif kind == "swap0":
                pool.swap0_to_1(TRADER, amount)
            else:
                pool.swap1_to_0(TRADER, amount)
        except PoolError:
            pass
        assert pool.total_shares == sum(pool.share_ledger.get_all_balances().values())
        assert token0.balance_of(pool.address) == pool.state.reserve0
        assert token1.balance_of(pool.address) == pool.state.reserve1
        assert pool.state.verify_invariant()
