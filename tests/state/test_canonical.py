# [TESTER] v1

from __future__ import annotations

import pytest

from fixedswap.state.canonical import canonical_json_bytes, commitment


def test_encoding_is_compact_and_key_sorted() -> None:
    assert canonical_json_bytes({"b": 1, "a": [2, "x"]}) == b'{"a":[2,"x"],"b":1}'


def test_commitment_ignores_key_order_but_not_kind() -> None:
    left = commitment("pool_id", {"asset0": "usdc", "asset1": "usdt"})
    right = commitment("pool_id", {"asset1": "usdt", "asset0": "usdc"})
    assert left == right
    assert left.startswith("0x") and len(left) == 66
    assert commitment("pool_snapshot", {"asset0": "usdc", "asset1": "usdt"}) != left
    assert commitment("pool_id", {"asset0": "usdc", "asset1": "usdt"}, version=2) != left


def test_float_amounts_are_rejected() -> None:
    with pytest.raises(TypeError, match=r"\$\.state\.reserve0"):
        canonical_json_bytes({"state": {"reserve0": 1.5}})
    with pytest.raises(TypeError):
        commitment("pool_snapshot", {"shares": [{"shares": 0.1}]})


def test_non_string_keys_are_rejected() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "x"})


def test_bad_kind_or_version_is_rejected() -> None:
    with pytest.raises(ValueError):
        commitment("pool id", {})
    with pytest.raises(ValueError):
        commitment("pool_id", {}, version=0)
