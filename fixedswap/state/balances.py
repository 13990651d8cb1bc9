"""
In-process asset ledger (the token-transfer collaborator of a pool).

Implements TokenLedger[Holder] -> Amount plus ERC-20 style allowances.
"""

from __future__ import annotations

from typing import Dict, Protocol, Tuple


# Type aliases
Holder = str  # account identifier (address-like string)
AssetId = str  # token identifier, e.g. "USDC"
Amount = int  # Non-negative integer in the token's native decimals


class AssetLedger(Protocol):
    """Capabilities a pool needs from an asset it holds."""

    def balance_of(self, holder: Holder) -> Amount:
        ...

    def transfer(self, sender: Holder, recipient: Holder, amount: Amount) -> None:
        ...

    def transfer_from(self, spender: Holder, owner: Holder, recipient: Holder, amount: Amount) -> None:
        ...

    def checkpoint(self) -> object:
        ...

    def rollback(self, checkpoint: object) -> None:
        ...


class TokenLedger:
    """
    Deterministic balance table mapping holder -> amount for one asset.

    Notes:
    - Balances and allowances are always non-negative.
    - Zero entries are omitted to keep the tables sparse.
    - `checkpoint()` / `rollback()` give callers all-or-nothing multi-step updates.
    """

    def __init__(self, asset: AssetId, decimals: int) -> None:
        if not isinstance(asset, str) or not asset:
            raise ValueError("asset must be a non-empty string")
        if not isinstance(decimals, int) or isinstance(decimals, bool) or decimals < 0:
            raise ValueError(f"decimals must be a non-negative int: {decimals!r}")
        self.asset = asset
        self.decimals = decimals
        self._balances: Dict[Holder, Amount] = {}
        self._allowances: Dict[Tuple[Holder, Holder], Amount] = {}

    def balance_of(self, holder: Holder) -> Amount:
        """Get balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def _set(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def _add(self, holder: Holder, delta: int) -> None:
        current = self.balance_of(holder)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient {self.asset} balance: {current} + {delta} = {new_balance} < 0"
            )
        self._set(holder, new_balance)

    @staticmethod
    def _require_amount(amount: Amount) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("amount must be an int")
        if amount < 0:
            raise ValueError(f"Amount must be non-negative: {amount}")

    def mint(self, holder: Holder, amount: Amount) -> None:
        self._require_amount(amount)
        self._add(holder, amount)

    def burn(self, holder: Holder, amount: Amount) -> None:
        self._require_amount(amount)
        self._add(holder, -amount)

    def transfer(self, sender: Holder, recipient: Holder, amount: Amount) -> None:
        """
        Move `amount` from `sender` to `recipient`.

        Raises:
            ValueError: If amount is negative or sender's balance is insufficient
        """
        self._require_amount(amount)
        if amount == 0:
            return
        self._add(sender, -amount)
        self._add(recipient, amount)

    def allowance(self, owner: Holder, spender: Holder) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: Holder, spender: Holder, amount: Amount) -> None:
        self._require_amount(amount)
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount

    def transfer_from(self, spender: Holder, owner: Holder, recipient: Holder, amount: Amount) -> None:
        """
        Move `amount` from `owner` to `recipient` on behalf of `spender`.

        Raises:
            ValueError: If the allowance or owner's balance is insufficient
        """
        self._require_amount(amount)
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise ValueError(
                f"Insufficient {self.asset} allowance: {allowed} < {amount} ({owner} -> {spender})"
            )
        self.transfer(owner, recipient, amount)
        self.approve(owner, spender, allowed - amount)

    def total_supply(self) -> Amount:
        return sum(self._balances.values())

    def get_all_balances(self) -> Dict[Holder, Amount]:
        return dict(self._balances)

    def checkpoint(self) -> Tuple[Dict[Holder, Amount], Dict[Tuple[Holder, Holder], Amount]]:
        return dict(self._balances), dict(self._allowances)

    def rollback(self, checkpoint: Tuple[Dict[Holder, Amount], Dict[Tuple[Holder, Holder], Amount]]) -> None:
        balances, allowances = checkpoint
        self._balances = dict(balances)
        self._allowances = dict(allowances)

    def __repr__(self) -> str:
        return f"TokenLedger({self.asset}, {len(self._balances)} holders)"

