"""Product aggregate.

Products are created and restocked by the catalog-management side of the
shop.  Inside the checkout core the only mutation is a stock change, and the
price never changes once a product exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopbot.domain.exceptions import InsufficientStockError, ValidationError
from shopbot.domain.model.value_objects import Money, Quantity


@dataclass
class Product:
    """A sellable item and its current stock.

    Invariant: ``stock`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID is required")
        if self.stock < 0:
            raise ValidationError(
                f"Stock for '{self.id}' cannot be negative, got {self.stock}"
            )

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock

    def decrement_stock(self, quantity: int) -> int:
        """Take *quantity* units out of stock and return the new level.

        Raises InsufficientStockError when fewer units are on hand.
        """
        qty = Quantity(quantity).value
        if qty > self.stock:
            raise InsufficientStockError(self.id, self.stock, requested=qty)
        self.stock -= qty
        return self.stock

    def increment_stock(self, quantity: int) -> int:
        """Put *quantity* units back (compensation or restock)."""
        self.stock += Quantity(quantity).value
        return self.stock
