"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI (or any chat front-end) can catch them uniformly.  Every error
carries an ``ErrorCategory`` so callers can pick user guidance ("reduce the
quantity", "try again later") without inspecting internal state.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    REDUCE_QUANTITY = "REDUCE_QUANTITY"
    ITEM_REMOVED = "ITEM_REMOVED"
    NOTHING_TO_DO = "NOTHING_TO_DO"
    TRY_AGAIN_LATER = "TRY_AGAIN_LATER"


class DomainException(Exception):
    """Base class for all domain errors."""

    category = ErrorCategory.INVALID_INPUT


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A quantity was not a positive integer."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    category = ErrorCategory.NOT_FOUND


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock available at commit time."""

    category = ErrorCategory.REDUCE_QUANTITY

    def __init__(self, item_id: str, available: int, requested: int | None = None) -> None:
        self.item_id = item_id
        self.available = available
        self.requested = requested
        msg = f"Insufficient stock for '{item_id}' ({available} available"
        if requested is not None:
            msg += f", {requested} requested"
        super().__init__(msg + ")")


class ItemUnavailableError(DomainException):
    """An item in the cart was removed from the catalog before checkout."""

    category = ErrorCategory.ITEM_REMOVED

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item '{item_id}' is no longer available")


class EmptyOrderError(DomainException):
    """An order was attempted with no line items."""

    category = ErrorCategory.NOTHING_TO_DO


class StorageUnavailableError(DomainException):
    """The storage backend failed transiently."""

    category = ErrorCategory.TRY_AGAIN_LATER
