# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.core.decimals import from_canonical, to_canonical, validate_decimals


def test_six_decimals_scale_up_exactly() -> None:
    assert to_canonical(1_000_000, 6) == 10**18
    assert from_canonical(10**18, 6) == 1_000_000


def test_eighteen_decimals_is_identity() -> None:
    assert to_canonical(123, 18) == 123
    assert from_canonical(123, 18) == 123


def test_scale_down_floors() -> None:
    # one canonical unit short of 1 USDC
    assert from_canonical(10**18 - 1, 6) == 999_999


def test_more_than_eighteen_decimals_floors_on_the_way_in() -> None:
    assert to_canonical(10**20 + 99, 20) == 10**18
    assert from_canonical(10**18, 20) == 10**20


@pytest.mark.parametrize("decimals", [-1, 37])
def test_decimals_out_of_range(decimals: int) -> None:
    with pytest.raises(ValueError):
        validate_decimals(decimals)


def test_negative_amount_is_rejected() -> None:
    with pytest.raises(ValueError):
        to_canonical(-1, 6)
    with pytest.raises(ValueError):
        from_canonical(-1, 6)
