"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the chat/CLI front-end and the application layer
without exposing domain internals.  Money is carried both as the raw
integer amount and as a formatted string for display.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopbot.domain.model.order import Order
from shopbot.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str  # formatted, e.g. "NT$680"
    price_amount: int
    stock: int

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            price_amount=product.price.amount,
            stock=product.stock,
        )


@dataclass(frozen=True)
class CartLineDTO:
    """One item in the aggregated cart (quantities summed across lines)."""

    item_id: str
    item_name: str
    quantity: int
    unit_price: str
    line_total: str
    available: bool = True


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartLineDTO]
    total: str
    total_amount: int

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def quantities(self) -> dict[str, int]:
        return {line.item_id: line.quantity for line in self.items}


@dataclass(frozen=True)
class OrderLineDTO:
    item_id: str
    item_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    user_id: str
    status: str
    items: list[OrderLineDTO]
    total: str
    total_amount: int
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            items=[
                OrderLineDTO(
                    item_id=item.item_id,
                    item_name=item.item_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total),
            total_amount=order.total.amount,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    """Outcome of a checkout: PLACED with an order, or EMPTY_CART."""

    status: str
    order: OrderDTO | None = None

    PLACED = "PLACED"
    EMPTY_CART = "EMPTY_CART"

    @property
    def is_empty_cart(self) -> bool:
        return self.status == self.EMPTY_CART
