# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.core.fees import FlatRateFee
from fixedswap.state.pools import PoolConfig, PoolState, compute_pool_id


def test_pool_id_is_deterministic_and_parameter_sensitive() -> None:
    a = PoolConfig("usdc", "usdt", 6, 6, "FIXED_RATE_V1")
    b = PoolConfig("usdc", "usdt", 6, 6, "fixed_rate_v1")
    c = PoolConfig("usdc", "usdt", 6, 18, "FIXED_RATE_V1")
    assert a.pool_id == b.pool_id
    assert a.pool_id != c.pool_id
    assert a.pool_id.startswith("0x") and len(a.pool_id) == 66
    assert a.pool_id == compute_pool_id("usdc", "usdt", 6, 6, curve_tag="FIXED_RATE_V1")


def test_config_normalizes_and_exposes_policy() -> None:
    cfg = PoolConfig("usdc", "usdt", 18, 18, " flat_fee_v1 ", fee_rate=300_000_000_000_000)
    assert cfg.curve_tag == "FLAT_FEE_V1"
    assert cfg.share_decimals == 18
    assert cfg.fee_policy() == FlatRateFee(fee_rate=300_000_000_000_000)
    assert cfg.decimals_of("usdt") == 18


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(asset0="usdc", asset1="usdc", decimals0=6, decimals1=6, curve_tag="FIXED_RATE_V1"),
        dict(asset0="usdc", asset1="usdt", decimals0=37, decimals1=6, curve_tag="FIXED_RATE_V1"),
        dict(asset0="usdc", asset1="usdt", decimals0=6, decimals1=6, curve_tag="CPMM"),
        dict(asset0="usdc", asset1="usdt", decimals0=6, decimals1=6, curve_tag="FIXED_RATE_V1", fee_rate=1),
        dict(asset0="usdc", asset1="usdt", decimals0=6, decimals1=6, curve_tag="FLAT_FEE_V1", fee_rate=10**18),
    ],
)
def test_invalid_configs_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        PoolConfig(**kwargs)


def test_pool_state_validation() -> None:
    with pytest.raises(ValueError):
        PoolState(reserve0=-1)
    with pytest.raises(ValueError):
        PoolState(reserve0=0, reserve1=0, total_shares=1)
    state = PoolState(reserve0=1, reserve1=0, total_shares=5)
    assert state.verify_invariant()


def test_pool_state_copy_and_restore() -> None:
    state = PoolState(10, 20, 30)
    saved = state.copy()
    state.reserve0 = 0
    state.restore(saved)
    assert (state.reserve0, state.reserve1, state.total_shares) == (10, 20, 30)
