"""
Two-asset fixed-peg pool.

`FixedRatePool` composes the pieces of the system:

- a `PoolConfig` (immutable) and a `PoolState` it owns,
- one fee policy chosen from the config's curve tag,
- two asset ledgers and a share ledger (collaborators),
- an `Authorizer` gating deposits.

Amounts at this surface are native token units. Pricing and share math run on
canonical (1e18-scaled) units and are converted back with floor rounding, so
conversion dust always stays in the pool.

Every mutating call is all-or-nothing: checks run first, then the pool state and
share ledger are updated, then assets move. If any of those steps raises,
state and all three ledgers are rolled back and `TransferFailed` is raised.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from ..state.balances import AssetLedger, Holder
from ..state.lp import ShareLedger, ShareLedgerLike
from ..state.pools import PoolConfig, PoolState
from .access import Authorizer, require_deposit_access
from .decimals import from_canonical, to_canonical
from .engine import quote, swap_exact_in
from .errors import BurnExceedsBalance, InsufficientOutput, TransferFailed
from .liquidity import compute_deposit, compute_withdraw, compute_withdraw_with_ratio


logger = logging.getLogger(__name__)


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_min(name: str, actual: int, minimum: int) -> None:
    if actual < minimum:
        raise InsufficientOutput(name, actual, minimum)


class FixedRatePool:
    def __init__(
        self,
        config: PoolConfig,
        token0: AssetLedger,
        token1: AssetLedger,
        authorizer: Authorizer,
        *,
        shares: Optional[ShareLedgerLike] = None,
        state: Optional[PoolState] = None,
    ) -> None:
        self._config = config
        self._policy = config.fee_policy()
        self._token0 = token0
        self._token1 = token1
        self._authorizer = authorizer
        self._shares = shares if shares is not None else ShareLedger()
        self._state = state if state is not None else PoolState()
        if self._state.total_shares != self._shares.total_supply():
            raise ValueError(
                f"total_shares ({self._state.total_shares}) != share ledger supply "
                f"({self._shares.total_supply()})"
            )

    # ------------------------------------------------------------------ #
    # Read accessors
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def address(self) -> str:
        return self._config.address

    @property
    def total_shares(self) -> int:
        return self._state.total_shares

    @property
    def share_ledger(self) -> ShareLedgerLike:
        return self._shares

    def balance_of(self, holder: Holder) -> int:
        return self._shares.balance_of(holder)

    # ------------------------------------------------------------------ #
    # Unit conversion
    # ------------------------------------------------------------------ #

    def _canonical_reserves(self) -> Tuple[int, int]:
        return (
            to_canonical(self._state.reserve0, self._config.decimals0),
            to_canonical(self._state.reserve1, self._config.decimals1),
        )

    @staticmethod
    def _canonical_input(amount_in: int, decimals: int) -> int:
        canonical = to_canonical(amount_in, decimals)
        if canonical == 0:
            raise ValueError(
                f"amount_in ({amount_in}) is below one canonical unit for {decimals} decimals"
            )
        return canonical

    def _check_recipient(self, to: Holder) -> None:
        if not isinstance(to, str) or not to:
            raise ValueError("recipient must be a non-empty string")
        if to == self.address:
            raise ValueError("recipient must not be the pool itself")

    # ------------------------------------------------------------------ #
    # Atomicity
    # ------------------------------------------------------------------ #

    @contextmanager
    def _transaction(self, op: str) -> Iterator[None]:
        saved = (
            self._state.copy(),
            self._shares.checkpoint(),
            self._token0.checkpoint(),
            self._token1.checkpoint(),
        )
        try:
            yield
        except Exception as exc:
            state, shares, ledger0, ledger1 = saved
            self._state.restore(state)
            self._shares.rollback(shares)
            self._token0.rollback(ledger0)
            self._token1.rollback(ledger1)
            logger.warning("%s on pool %s rolled back: %s", op, self.address, exc)
            raise TransferFailed(f"{op} failed: {exc}") from exc

    def _pull(self, ledger: AssetLedger, owner: Holder, amount: int) -> None:
        if amount > 0:
            ledger.transfer_from(self.address, owner, self.address, amount)

    def _push(self, ledger: AssetLedger, to: Holder, amount: int) -> None:
        if amount > 0:
            ledger.transfer(self.address, to, amount)

    # ------------------------------------------------------------------ #
    # Deposit
    # ------------------------------------------------------------------ #

    def deposit(self, caller: Holder, amount0: int, amount1: int, min_shares_out: int = 0) -> int:
        return self.deposit_for(caller, caller, amount0, amount1, min_shares_out)

    def deposit_for(
        self,
        caller: Holder,
        to: Holder,
        amount0: int,
        amount1: int,
        min_shares_out: int = 0,
    ) -> int:
        """
        Add `(amount0, amount1)` (native units) and mint shares to `to`.

        Raises:
            Unauthorized: caller may not deposit
            EmptyDeposit: both amounts are zero
            InsufficientOutput: fewer shares than `min_shares_out`, or none at all
            TransferFailed: pulling the assets from `caller` was rejected
        """
        require_deposit_access(self._authorizer, caller)
        self._check_recipient(to)
        for name, v in (("amount0", amount0), ("amount1", amount1), ("min_shares_out", min_shares_out)):
            _require_int(name, v)
        if amount0 < 0 or amount1 < 0:
            raise ValueError(f"Deposit amounts must be non-negative: ({amount0}, {amount1})")

        r0, r1 = self._canonical_reserves()
        result = compute_deposit(
            self._policy,
            r0,
            r1,
            to_canonical(amount0, self._config.decimals0),
            to_canonical(amount1, self._config.decimals1),
            self._state.total_shares,
        )
        _require_min("shares", result.shares, max(min_shares_out, 1))

        with self._transaction("deposit"):
            self._state.reserve0 += amount0
            self._state.reserve1 += amount1
            self._state.total_shares += result.shares
            self._shares.mint(to, result.shares)
            self._pull(self._token0, caller, amount0)
            self._pull(self._token1, caller, amount1)

        logger.debug(
            "deposit %s -> %s: amounts=(%d, %d) shares=%d implicit_swap=%d",
            caller,
            to,
            amount0,
            amount1,
            result.shares,
            result.implicit_swap_in,
        )
        return result.shares

    # ------------------------------------------------------------------ #
    # Withdraw
    # ------------------------------------------------------------------ #

    def _require_shares(self, caller: Holder, shares: int) -> None:
        _require_int("shares", shares)
        if shares <= 0:
            raise ValueError(f"shares must be positive: {shares}")
        held = self._shares.balance_of(caller)
        if held < shares:
            raise BurnExceedsBalance(f"burn amount ({shares}) exceeds balance ({held})")

    def _settle_withdraw(self, op: str, caller: Holder, to: Holder, shares: int, amount0: int, amount1: int) -> None:
        with self._transaction(op):
            self._state.reserve0 -= amount0
            self._state.reserve1 -= amount1
            self._state.total_shares -= shares
            self._shares.burn(caller, shares)
            self._push(self._token0, to, amount0)
            self._push(self._token1, to, amount1)
        logger.debug(
            "%s %s -> %s: shares=%d amounts=(%d, %d)", op, caller, to, shares, amount0, amount1
        )

    def withdraw(
        self,
        caller: Holder,
        shares: int,
        min_amount0_out: int = 0,
        min_amount1_out: int = 0,
    ) -> Tuple[int, int]:
        return self.withdraw_for(caller, caller, shares, min_amount0_out, min_amount1_out)

    def withdraw_for(
        self,
        caller: Holder,
        to: Holder,
        shares: int,
        min_amount0_out: int = 0,
        min_amount1_out: int = 0,
    ) -> Tuple[int, int]:
        """
        Burn `shares` of `caller` and pay the proportional reserves to `to`.

        Raises:
            BurnExceedsBalance: caller holds fewer shares
            InsufficientOutput: an amount falls below its minimum
        """
        self._check_recipient(to)
        self._require_shares(caller, shares)
        amount0, amount1 = compute_withdraw(
            shares, self._state.reserve0, self._state.reserve1, self._state.total_shares
        )
        _require_min("amount0", amount0, min_amount0_out)
        _require_min("amount1", amount1, min_amount1_out)
        self._settle_withdraw("withdraw", caller, to, shares, amount0, amount1)
        return amount0, amount1

    def withdraw_with_ratio(
        self,
        caller: Holder,
        shares: int,
        ratio0: int,
        min_amount0_out: int = 0,
        min_amount1_out: int = 0,
    ) -> Tuple[int, int]:
        return self.withdraw_with_ratio_for(caller, caller, shares, ratio0, min_amount0_out, min_amount1_out)

    def withdraw_with_ratio_for(
        self,
        caller: Holder,
        to: Holder,
        shares: int,
        ratio0: int,
        min_amount0_out: int = 0,
        min_amount1_out: int = 0,
    ) -> Tuple[int, int]:
        """
        Burn `shares` and take `ratio0` (1e18-scaled) of the value as asset 0.

        Raises:
            ValueError: ratio0 outside [0, 1e18]
            BurnExceedsBalance: caller holds fewer shares
            AmountExceedsBalance: the pool cannot supply the requested asset
            InsufficientOutput: an amount falls below its minimum
        """
        self._check_recipient(to)
        self._require_shares(caller, shares)
        r0, r1 = self._canonical_reserves()
        result = compute_withdraw_with_ratio(
            self._policy, shares, ratio0, r0, r1, self._state.total_shares
        )
        amount0 = from_canonical(result.amount0, self._config.decimals0)
        amount1 = from_canonical(result.amount1, self._config.decimals1)
        _require_min("amount0", amount0, min_amount0_out)
        _require_min("amount1", amount1, min_amount1_out)
        self._settle_withdraw("withdraw_with_ratio", caller, to, shares, amount0, amount1)
        return amount0, amount1

    # ------------------------------------------------------------------ #
    # Swap
    # ------------------------------------------------------------------ #

    def _swap(self, zero_for_one: bool, caller: Holder, to: Holder, amount_in: int, min_amount_out: int) -> int:
        self._check_recipient(to)
        _require_int("amount_in", amount_in)
        _require_int("min_amount_out", min_amount_out)
        if zero_for_one:
            ledger_in, ledger_out = self._token0, self._token1
            dec_in, dec_out = self._config.decimals0, self._config.decimals1
            reserve_in, reserve_out = self._state.reserve0, self._state.reserve1
        else:
            ledger_in, ledger_out = self._token1, self._token0
            dec_in, dec_out = self._config.decimals1, self._config.decimals0
            reserve_in, reserve_out = self._state.reserve1, self._state.reserve0
        if amount_in <= 0:
            raise ValueError(f"amount_in must be positive: {amount_in}")

        res = swap_exact_in(
            self._policy,
            to_canonical(reserve_in, dec_in),
            to_canonical(reserve_out, dec_out),
            self._canonical_input(amount_in, dec_in),
        )
        amount_out = from_canonical(res.amount_out, dec_out)
        _require_min("amount_out", amount_out, min_amount_out)

        op = "swap0_to_1" if zero_for_one else "swap1_to_0"
        with self._transaction(op):
            if zero_for_one:
                self._state.reserve0 += amount_in
                self._state.reserve1 -= amount_out
            else:
                self._state.reserve1 += amount_in
                self._state.reserve0 -= amount_out
            self._pull(ledger_in, caller, amount_in)
            self._push(ledger_out, to, amount_out)

        logger.debug("%s %s -> %s: in=%d out=%d", op, caller, to, amount_in, amount_out)
        return amount_out

    def swap0_to_1(self, caller: Holder, amount_in: int, min_amount_out: int = 0) -> int:
        return self._swap(True, caller, caller, amount_in, min_amount_out)

    def swap1_to_0(self, caller: Holder, amount_in: int, min_amount_out: int = 0) -> int:
        return self._swap(False, caller, caller, amount_in, min_amount_out)

    def swap0_to_1_for(self, caller: Holder, to: Holder, amount_in: int, min_amount_out: int = 0) -> int:
        return self._swap(True, caller, to, amount_in, min_amount_out)

    def swap1_to_0_for(self, caller: Holder, to: Holder, amount_in: int, min_amount_out: int = 0) -> int:
        return self._swap(False, caller, to, amount_in, min_amount_out)

    # ------------------------------------------------------------------ #
    # Read-only simulation / maintenance
    # ------------------------------------------------------------------ #

    def get_return(self, asset_in: str, asset_out: str, amount_in: int) -> int:
        """
        Quote a swap of `amount_in` (native units) without mutating anything.

        Raises:
            ValueError: unknown asset, identical assets, or non-positive amount
            InputTooLarge: the destination reserve cannot cover the trade
        """
        cfg = self._config
        if asset_in == asset_out:
            raise ValueError(f"asset_in and asset_out must differ: {asset_in}")
        if (asset_in, asset_out) == (cfg.asset0, cfg.asset1):
            reserve_in, reserve_out = self._state.reserve0, self._state.reserve1
        elif (asset_in, asset_out) == (cfg.asset1, cfg.asset0):
            reserve_in, reserve_out = self._state.reserve1, self._state.reserve0
        else:
            raise ValueError(f"unsupported asset pair: ({asset_in}, {asset_out})")
        _require_int("amount_in", amount_in)
        if amount_in <= 0:
            raise ValueError(f"amount_in must be positive: {amount_in}")
        dec_in = cfg.decimals_of(asset_in)
        dec_out = cfg.decimals_of(asset_out)
        amount_out = quote(
            self._policy,
            to_canonical(reserve_in, dec_in),
            to_canonical(reserve_out, dec_out),
            self._canonical_input(amount_in, dec_in),
        )
        return from_canonical(amount_out, dec_out)

    def sync(self, caller: Holder) -> Tuple[int, int]:
        """
        Reset reserves to the pool's actual asset holdings (absorbs direct transfers).
        """
        require_deposit_access(self._authorizer, caller)
        new_state = PoolState(
            reserve0=self._token0.balance_of(self.address),
            reserve1=self._token1.balance_of(self.address),
            total_shares=self._state.total_shares,
        )
        self._state.restore(new_state)
        logger.debug("sync pool %s: reserves=(%d, %d)", self.address, new_state.reserve0, new_state.reserve1)
        return new_state.reserve0, new_state.reserve1

    def __repr__(self) -> str:
        return (
            f"FixedRatePool({self._config.asset0}/{self._config.asset1}, "
            f"{self._config.curve_tag}, {self._state!r})"
        )
