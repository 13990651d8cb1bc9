# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.core.fees import (
    CURVE_TAG_FIXED_RATE_V1,
    CURVE_TAG_FLAT_FEE_V1,
    CurveImplicitFee,
    FlatRateFee,
    make_fee_policy,
    normalize_curve_tag,
)


ONE = 10**18


def test_curve_tag_is_normalized() -> None:
    assert normalize_curve_tag(" flat_fee_v1 ") == CURVE_TAG_FLAT_FEE_V1


def test_unknown_curve_tag_fails_closed() -> None:
    with pytest.raises(ValueError):
        make_fee_policy("CPMM")


def test_curve_policy_rejects_explicit_fee() -> None:
    with pytest.raises(ValueError):
        make_fee_policy(CURVE_TAG_FIXED_RATE_V1, fee_rate=1)


def test_policy_selection() -> None:
    assert isinstance(make_fee_policy(CURVE_TAG_FIXED_RATE_V1), CurveImplicitFee)
    flat = make_fee_policy(CURVE_TAG_FLAT_FEE_V1, fee_rate=300_000_000_000_000)
    assert isinstance(flat, FlatRateFee)
    assert flat.fee_rate == 300_000_000_000_000


def test_flat_policy_ignores_reserves() -> None:
    flat = FlatRateFee(fee_rate=300_000_000_000_000)
    assert flat.get_return(ONE, ONE, ONE) == flat.get_return(5 * ONE, 50 * ONE, ONE) == 999_700_000_000_000_000


def test_curve_policy_delegates_to_kernel() -> None:
    assert CurveImplicitFee().get_return(ONE, ONE, ONE) == 999_785_325_996_316_875


def test_flat_policy_validates_fee_rate() -> None:
    with pytest.raises(ValueError):
        FlatRateFee(fee_rate=ONE)
