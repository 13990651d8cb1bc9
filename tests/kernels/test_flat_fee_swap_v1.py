# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.kernels.python.flat_fee_swap_v1 import ONE, get_return, validate_fee_rate


FEE_3_BPS = 300_000_000_000_000


def test_three_bps_on_one_unit() -> None:
    assert get_return(ONE, FEE_3_BPS) == 999_700_000_000_000_000


def test_zero_fee_is_identity() -> None:
    assert get_return(12345, 0) == 12345


def test_output_floors() -> None:
    # 3 * 0.9997 = 2.9991 -> 2
    assert get_return(3, FEE_3_BPS) == 2


@pytest.mark.parametrize("fee_rate", [-1, ONE, ONE + 1])
def test_fee_rate_out_of_range_is_rejected(fee_rate: int) -> None:
    with pytest.raises(ValueError):
        validate_fee_rate(fee_rate)


def test_rejects_non_positive_input() -> None:
    with pytest.raises(ValueError):
        get_return(0, FEE_3_BPS)
