"""Abstract repository for the Product aggregate (the catalog store).

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations live in the infrastructure
layer (JSON) and in the test suite (in-memory).

Implementations must make ``decrement_stock`` a conditional, atomic
operation: the stock check and the write happen under the same lock so
concurrent decrements can never take stock below zero.  The stock change
and its ledger entry for ``ref`` are applied together.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopbot.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, in a stable order."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock(self, item_id: str, quantity: int, ref: str | None = None) -> int:
        """Atomically take stock and return the new level.

        Raises InsufficientStockError or EntityNotFoundError without
        changing anything.
        """

    @abstractmethod
    def increment_stock(self, item_id: str, quantity: int, ref: str | None = None) -> int:
        """Atomically add stock and return the new level."""

    @abstractmethod
    def net_movements(self, ref: str) -> dict[str, int]:
        """Return the net stock delta per item recorded under *ref*."""
