"""
Deposit authorization.

Deposits are gated by an `Authorizer`; swaps and withdrawals are open to any
holder with the required assets or shares.
"""

from __future__ import annotations

from typing import Protocol

from .errors import Unauthorized


class Authorizer(Protocol):
    def can_deposit(self, caller: str) -> bool:
        ...


class OwnerAuthorizer:
    """Single-owner gate: only the current owner may add liquidity."""

    def __init__(self, owner: str) -> None:
        if not isinstance(owner, str) or not owner:
            raise ValueError("owner must be a non-empty string")
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def can_deposit(self, caller: str) -> bool:
        return caller == self._owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        if caller != self._owner:
            raise Unauthorized(f"caller {caller} is not the owner")
        if not isinstance(new_owner, str) or not new_owner:
            raise ValueError("new_owner must be a non-empty string")
        self._owner = new_owner


def require_deposit_access(authorizer: Authorizer, caller: str) -> None:
    if not authorizer.can_deposit(caller):
        raise Unauthorized(f"caller {caller} may not deposit")
