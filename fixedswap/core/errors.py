"""Exception types for pool operations.

All pool failures derive from ``PoolError`` (a ``ValueError``), so callers that
only care about "the operation was rejected" can catch one type. Every one of
them is raised before, or in place of, any committed state change.
"""

from __future__ import annotations


class PoolError(ValueError):
    """Base class for rejected pool operations."""


class EmptyDeposit(PoolError):
    """Raised when both deposit amounts are zero."""


class Unauthorized(PoolError):
    """Raised when the caller is not permitted to perform a gated operation."""


class InputTooLarge(PoolError):
    """Raised when a swap would deplete or cannot be priced against the destination reserve."""


class InsufficientOutput(PoolError):
    """Raised when a result falls below the caller's declared minimum."""

    def __init__(self, name: str, actual: int, minimum: int) -> None:
        self.name = name
        self.actual = actual
        self.minimum = minimum
        super().__init__(f"{name} ({actual}) < minimum ({minimum})")


class BurnExceedsBalance(PoolError):
    """Raised when redeeming more shares than the caller holds."""


class AmountExceedsBalance(PoolError):
    """Raised when a ratio withdrawal needs more of one asset than the pool holds."""


class TransferFailed(PoolError):
    """Raised when an underlying asset movement is rejected."""
