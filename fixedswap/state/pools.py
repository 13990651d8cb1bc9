"""
Pool configuration and state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.decimals import CANONICAL_DECIMALS, validate_decimals
from ..core.fees import AnyFeePolicy, make_fee_policy, normalize_curve_tag
from .balances import Amount, AssetId
from .canonical import commitment


def compute_pool_id(
    asset0: AssetId,
    asset1: AssetId,
    decimals0: int,
    decimals1: int,
    *,
    curve_tag: str,
    fee_rate: int = 0,
) -> str:
    """
    Deterministically compute a pool_id for the given pool parameters.

    The id doubles as the pool's custody account in the asset ledgers.
    """
    if not isinstance(asset0, str) or not asset0:
        raise ValueError("asset0 must be a non-empty string")
    if not isinstance(asset1, str) or not asset1:
        raise ValueError("asset1 must be a non-empty string")
    if asset0 == asset1:
        raise ValueError(f"Pool assets must be distinct: {asset0}")
    tag = normalize_curve_tag(curve_tag)
    payload = {
        "asset0": asset0,
        "asset1": asset1,
        "curve_tag": tag,
        "decimals0": int(decimals0),
        "decimals1": int(decimals1),
        # Decimal string keeps the payload free of big-int interop issues.
        "fee_rate": str(int(fee_rate)),
    }
    return commitment("pool_id", payload)


@dataclass(frozen=True)
class PoolConfig:
    """
    Immutable configuration of a two-asset pool.

    Attributes:
        asset0: First asset identifier
        asset1: Second asset identifier (distinct from asset0)
        decimals0: Native decimals of asset0 (0-36)
        decimals1: Native decimals of asset1 (0-36)
        curve_tag: Pricing family ("FIXED_RATE_V1" or "FLAT_FEE_V1")
        fee_rate: 1e18-scaled flat fee; must be 0 for FIXED_RATE_V1
        share_decimals: Decimals of pool shares (always canonical)
        pool_id: Derived identifier, also the pool's custody account
    """
    asset0: AssetId
    asset1: AssetId
    decimals0: int
    decimals1: int
    curve_tag: str
    fee_rate: int = 0
    share_decimals: int = field(default=CANONICAL_DECIMALS, init=False)
    pool_id: str = field(default="", init=False)

    def __post_init__(self) -> None:
        validate_decimals(self.decimals0)
        validate_decimals(self.decimals1)
        tag = normalize_curve_tag(self.curve_tag)
        # Validates the fee against the curve family (fail-closed).
        make_fee_policy(tag, self.fee_rate)
        object.__setattr__(self, "curve_tag", tag)
        object.__setattr__(
            self,
            "pool_id",
            compute_pool_id(
                self.asset0,
                self.asset1,
                self.decimals0,
                self.decimals1,
                curve_tag=tag,
                fee_rate=self.fee_rate,
            ),
        )

    @property
    def address(self) -> str:
        return self.pool_id

    def fee_policy(self) -> AnyFeePolicy:
        return make_fee_policy(self.curve_tag, self.fee_rate)

    def decimals_of(self, asset: AssetId) -> int:
        if asset == self.asset0:
            return self.decimals0
        if asset == self.asset1:
            return self.decimals1
        raise ValueError(f"Asset {asset} not in pool {self.pool_id}")


@dataclass
class PoolState:
    """
    Mutable reserves and share supply of a pool.

    Attributes:
        reserve0: Reserve of asset0 in native units
        reserve1: Reserve of asset1 in native units
        total_shares: Outstanding shares (canonical units)
    """
    reserve0: Amount = 0
    reserve1: Amount = 0
    total_shares: Amount = 0

    def __post_init__(self) -> None:
        """Validate pool state invariants."""
        for name in ("reserve0", "reserve1", "total_shares"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve0}, {self.reserve1})"
            )
        if self.total_shares < 0:
            raise ValueError(f"total_shares must be non-negative: {self.total_shares}")
        if not self.verify_invariant():
            raise ValueError("outstanding shares require a non-empty reserve")

    def verify_invariant(self) -> bool:
        """
        Verify the backing invariant: outstanding shares imply a non-empty reserve.
        """
        if self.reserve0 < 0 or self.reserve1 < 0 or self.total_shares < 0:
            return False
        return self.total_shares == 0 or self.reserve0 > 0 or self.reserve1 > 0

    def copy(self) -> "PoolState":
        return PoolState(self.reserve0, self.reserve1, self.total_shares)

    def restore(self, other: "PoolState") -> None:
        self.reserve0 = other.reserve0
        self.reserve1 = other.reserve1
        self.total_shares = other.total_shares

    def __repr__(self) -> str:
        return (
            f"PoolState(reserves=({self.reserve0}, {self.reserve1}), "
            f"total_shares={self.total_shares})"
        )
