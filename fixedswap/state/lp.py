"""
Pool share balance tracking.

Shares are canonical (18-decimal) units and are tracked separately from asset
balances. The pool keeps `PoolState.total_shares` equal to `total_supply()`.
"""

from __future__ import annotations

from typing import Dict, Protocol

from .balances import Amount, Holder


class ShareLedgerLike(Protocol):
    def balance_of(self, holder: Holder) -> Amount:
        ...

    def mint(self, holder: Holder, amount: Amount) -> None:
        ...

    def burn(self, holder: Holder, amount: Amount) -> None:
        ...

    def total_supply(self) -> Amount:
        ...

    def get_all_balances(self) -> Dict[Holder, Amount]:
        ...

    def checkpoint(self) -> object:
        ...

    def rollback(self, checkpoint: object) -> None:
        ...


class ShareLedger:
    """
    Deterministic share balance table mapping holder -> shares.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Holder, Amount] = {}

    def balance_of(self, holder: Holder) -> Amount:
        """Get share balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def _set(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def mint(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self._set(holder, self.balance_of(holder) + amount)

    def burn(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        current = self.balance_of(holder)
        if current < amount:
            raise ValueError(f"Insufficient share balance: {current} < {amount}")
        self._set(holder, current - amount)

    def total_supply(self) -> Amount:
        return sum(self._balances.values())

    def get_all_balances(self) -> Dict[Holder, Amount]:
        """Return all share balances."""
        return dict(self._balances)

    def checkpoint(self) -> Dict[Holder, Amount]:
        return dict(self._balances)

    def rollback(self, checkpoint: Dict[Holder, Amount]) -> None:
        self._balances = dict(checkpoint)

    def __repr__(self) -> str:
        return f"ShareLedger({len(self._balances)} holders)"
