"""
Deployment profiles: per-network token identifiers, decimals and pricing family.

Profiles are read from YAML (`networks.yaml` ships with the package). Fee rates
are written as decimal strings (e.g. "0.0003") and converted exactly to 1e18
fixed point; floats are rejected because they cannot represent most rates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..core.fees import FEE_SCALE, normalize_curve_tag
from ..state.pools import PoolConfig


logger = logging.getLogger(__name__)

NETWORKS_SCHEMA = "fixedswap/networks/v1"
DEFAULT_NETWORKS_PATH = Path(__file__).resolve().with_name("networks.yaml")


class ConfigError(ValueError):
    pass


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{name} must be a mapping")
    return value


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{name} must be a non-empty string")
    return value.strip()


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{name} must be an int")
    return value


def parse_fee_rate(value: Any) -> int:
    """
    Convert a decimal fee string (fraction of 1) to a 1e18-scaled int.

    `"0.0003"` -> `300_000_000_000_000`. The conversion must be exact.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ConfigError(f"fee_rate must be a decimal string, got {value!r}")
    if isinstance(value, int):
        if value != 0:
            raise ConfigError("integer fee_rate is ambiguous; write it as a decimal string")
        return 0
    if not isinstance(value, str):
        raise ConfigError(f"fee_rate must be a decimal string, got {value!r}")
    try:
        rate = Decimal(value.strip())
    except InvalidOperation as exc:
        raise ConfigError(f"invalid fee_rate: {value!r}") from exc
    if not rate.is_finite():
        raise ConfigError(f"fee_rate must be finite: {value!r}")
    scaled = rate * FEE_SCALE
    if scaled != scaled.to_integral_value():
        raise ConfigError(f"fee_rate {value!r} is finer than 1e-18")
    fee_rate = int(scaled)
    if not (0 <= fee_rate < FEE_SCALE):
        raise ConfigError(f"fee_rate must be in [0, 1): {value!r}")
    return fee_rate


@dataclass(frozen=True)
class TokenProfile:
    symbol: str
    address: str


@dataclass(frozen=True)
class NetworkProfile:
    name: str
    chain_id: int
    asset0: TokenProfile
    asset1: TokenProfile
    decimals: int
    curve_tag: str
    fee_rate: int

    def pool_config(self) -> PoolConfig:
        return PoolConfig(
            asset0=self.asset0.address,
            asset1=self.asset1.address,
            decimals0=self.decimals,
            decimals1=self.decimals,
            curve_tag=self.curve_tag,
            fee_rate=self.fee_rate,
        )


def _parse_token(value: Any, *, name: str) -> TokenProfile:
    obj = _require_mapping(value, name=name)
    return TokenProfile(
        symbol=_require_str(obj.get("symbol"), name=f"{name}.symbol"),
        address=_require_str(obj.get("address"), name=f"{name}.address"),
    )


def _parse_network(name: str, value: Any, defaults: Mapping[str, Any]) -> NetworkProfile:
    obj = _require_mapping(value, name=f"networks.{name}")
    merged: Dict[str, Any] = dict(defaults)
    merged.update(obj)
    try:
        curve_tag = normalize_curve_tag(merged.get("curve_tag"))
    except ValueError as exc:
        raise ConfigError(f"networks.{name}.curve_tag: {exc}") from exc
    decimals = _require_int(merged.get("decimals"), name=f"networks.{name}.decimals")
    profile = NetworkProfile(
        name=name,
        chain_id=_require_int(merged.get("chain_id"), name=f"networks.{name}.chain_id"),
        asset0=_parse_token(merged.get("asset0"), name=f"networks.{name}.asset0"),
        asset1=_parse_token(merged.get("asset1"), name=f"networks.{name}.asset1"),
        decimals=decimals,
        curve_tag=curve_tag,
        fee_rate=parse_fee_rate(merged.get("fee_rate", "0")),
    )
    # Fail-closed: the profile must produce a valid pool configuration.
    try:
        profile.pool_config()
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"networks.{name}: {exc}") from exc
    return profile


def parse_networks(root: Any) -> Dict[str, NetworkProfile]:
    root = _require_mapping(root, name="networks file")
    schema = _require_str(root.get("schema"), name="schema")
    if schema != NETWORKS_SCHEMA:
        raise ConfigError(f"unsupported schema: {schema}")
    defaults = _require_mapping(root.get("defaults", {}), name="defaults")
    networks = _require_mapping(root.get("networks"), name="networks")
    return {name: _parse_network(name, value, defaults) for name, value in networks.items()}


def load_networks(path: Optional[Path] = None) -> Dict[str, NetworkProfile]:
    p = DEFAULT_NETWORKS_PATH if path is None else Path(path)
    raw = p.read_text(encoding="utf-8")
    try:
        root = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {p}: {exc}") from exc
    return parse_networks(root)


def load_network(name: str, path: Optional[Path] = None) -> NetworkProfile:
    networks = load_networks(path)
    if name not in networks:
        raise ConfigError(f"unknown network {name!r} (known: {', '.join(sorted(networks))})")
    profile = networks[name]
    logger.info(
        "loaded network %s: %s/%s decimals=%d curve=%s",
        name,
        profile.asset0.symbol,
        profile.asset1.symbol,
        profile.decimals,
        profile.curve_tag,
    )
    return profile
