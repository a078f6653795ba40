"""Order aggregate.

An Order owns its line items, each carrying the name and price snapshot
read at checkout.  Line items never change after creation; the only
mutation is the status moving out of PENDING.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shopbot.domain.exceptions import EmptyOrderError, ValidationError
from shopbot.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    VOIDED = "VOIDED"


@dataclass(frozen=True)
class OrderLine:
    """Captures the product name and price at checkout time."""

    item_id: str
    item_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def generate_order_id(now: datetime | None = None) -> str:
    """Time-derived order id with a random suffix, e.g. ``20261017093015-3f9a1c``."""
    now = now or datetime.now(timezone.utc)
    return f"{now:%Y%m%d%H%M%S}-{uuid.uuid4().hex[:6]}"


@dataclass
class Order:
    """Aggregate root for orders.

    Use the ``Order.create()`` factory for new orders; ``__init__`` stays
    simple so the repository can reconstitute persisted orders.
    ``cart_line_ids`` records which cart lines the order consumed.
    """

    id: str
    user_id: str
    items: list[OrderLine]
    cart_line_ids: frozenset[str] = frozenset()
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        user_id: str,
        items: list[OrderLine],
        total: Money,
        cart_line_ids: frozenset[str] = frozenset(),
    ) -> Order:
        """Create a PENDING order, enforcing all invariants."""
        if not items:
            raise EmptyOrderError("Order must contain at least one item")
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")

        order = Order(
            id=order_id,
            user_id=user_id,
            items=list(items),
            cart_line_ids=frozenset(cart_line_ids),
        )
        if order.total != total:
            raise ValidationError(
                f"Order total {total} does not match line items ({order.total})"
            )
        return order

    # --- State transitions ----------------------------------------------------

    def mark_paid(self) -> None:
        """Transition PENDING -> PAID."""
        self._leave_pending(OrderStatus.PAID)

    def void(self) -> None:
        """Transition PENDING -> VOIDED (checkout aborted and compensated)."""
        self._leave_pending(OrderStatus.VOIDED)

    def _leave_pending(self, target: OrderStatus) -> None:
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot move order {self.id} to {target.value}: "
                f"current status is {self.status.value}, expected PENDING"
            )
        self.status = target

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def quantities(self) -> dict[str, int]:
        return {item.item_id: item.quantity.value for item in self.items}
