"""
Pool snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / audit.
- Round-trippable into `PoolConfig`, `PoolState` and `ShareLedger`.
- Explicit versioning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from .canonical import commitment
from .lp import ShareLedger, ShareLedgerLike
from .pools import PoolConfig, PoolState


POOL_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Deterministic, versioned snapshot of one pool.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def commitment_hex(self) -> str:
        return commitment("pool_snapshot", self.data, version=self.version)


def pool_to_dict(config: PoolConfig, state: PoolState, shares: ShareLedgerLike) -> Dict[str, Any]:
    holders = [
        {"holder": holder, "shares": int(amount)}
        for holder, amount in sorted(shares.get_all_balances().items())
    ]
    return {
        "version": POOL_SNAPSHOT_VERSION,
        "config": {
            "asset0": config.asset0,
            "asset1": config.asset1,
            "decimals0": config.decimals0,
            "decimals1": config.decimals1,
            "curve_tag": config.curve_tag,
            "fee_rate": config.fee_rate,
            "pool_id": config.pool_id,
        },
        "state": {
            "reserve0": state.reserve0,
            "reserve1": state.reserve1,
            "total_shares": state.total_shares,
        },
        "shares": holders,
    }


def pool_from_dict(data: Mapping[str, Any]) -> Tuple[PoolConfig, PoolState, ShareLedger]:
    """
    Rebuild pool objects from `pool_to_dict` output.

    Raises:
        ValueError: version mismatch, pool_id mismatch, or inconsistent share totals
    """
    if not isinstance(data, Mapping):
        raise TypeError("snapshot must be a mapping")
    version = _require_int(data.get("version"), name="version")
    if version != POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    cfg = data.get("config")
    if not isinstance(cfg, Mapping):
        raise TypeError("config must be a mapping")
    config = PoolConfig(
        asset0=_require_str(cfg.get("asset0"), name="config.asset0"),
        asset1=_require_str(cfg.get("asset1"), name="config.asset1"),
        decimals0=_require_int(cfg.get("decimals0"), name="config.decimals0"),
        decimals1=_require_int(cfg.get("decimals1"), name="config.decimals1"),
        curve_tag=_require_str(cfg.get("curve_tag"), name="config.curve_tag"),
        fee_rate=_require_int(cfg.get("fee_rate", 0), name="config.fee_rate"),
    )
    expected_id = cfg.get("pool_id")
    if expected_id is not None and expected_id != config.pool_id:
        raise ValueError(f"pool_id mismatch: {expected_id} != {config.pool_id}")

    st = data.get("state")
    if not isinstance(st, Mapping):
        raise TypeError("state must be a mapping")
    state = PoolState(
        reserve0=_require_int(st.get("reserve0"), name="state.reserve0"),
        reserve1=_require_int(st.get("reserve1"), name="state.reserve1"),
        total_shares=_require_int(st.get("total_shares"), name="state.total_shares"),
    )

    ledger = ShareLedger()
    seen = set()
    for entry in data.get("shares", []):
        if not isinstance(entry, Mapping):
            raise TypeError("shares entries must be mappings")
        holder = _require_str(entry.get("holder"), name="shares.holder")
        if holder in seen:
            raise ValueError(f"duplicate share holder: {holder}")
        seen.add(holder)
        ledger.mint(holder, _require_int(entry.get("shares"), name="shares.shares"))

    if ledger.total_supply() != state.total_shares:
        raise ValueError(
            f"share balances ({ledger.total_supply()}) != total_shares ({state.total_shares})"
        )
    return config, state, ledger


def snapshot_pool(config: PoolConfig, state: PoolState, shares: ShareLedgerLike) -> PoolSnapshot:
    return PoolSnapshot(version=POOL_SNAPSHOT_VERSION, data=pool_to_dict(config, state, shares))


def compute_pool_state_root(config: PoolConfig, state: PoolState, shares: ShareLedgerLike) -> str:
    """Deterministic 0x-prefixed sha256 commitment to config, reserves and share balances."""
    return snapshot_pool(config, state, shares).commitment_hex()
