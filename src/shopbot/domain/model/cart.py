"""Cart model: append-only cart lines and the aggregated active cart.

A user's cart is not a single record.  Every ``add to cart`` appends a new
CartLine; reading the cart sums the active lines per item.  Checkout retires
exactly the lines it read, so lines added while a checkout is running stay
active for the next one.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shopbot.domain.exceptions import ValidationError
from shopbot.domain.model.value_objects import Quantity


class CartLineStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass
class CartLine:
    """One ``add to cart`` action.

    Use ``CartLine.create()`` for new lines; ``__init__`` stays simple so
    repositories can reconstitute stored lines.
    """

    id: str
    user_id: str
    item_id: str
    quantity: Quantity
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: CartLineStatus = CartLineStatus.ACTIVE

    @staticmethod
    def create(user_id: str, item_id: str, quantity: int) -> CartLine:
        qty = Quantity(quantity)
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        if not item_id or not item_id.strip():
            raise ValidationError("Item ID is required")
        return CartLine(
            id=uuid.uuid4().hex,
            user_id=user_id,
            item_id=item_id,
            quantity=qty,
        )

    @property
    def is_active(self) -> bool:
        return self.status == CartLineStatus.ACTIVE

    def retire(self) -> bool:
        """Mark the line INACTIVE.

        Returns False if it already was; retiring twice is not an error.
        """
        if not self.is_active:
            return False
        self.status = CartLineStatus.INACTIVE
        return True


@dataclass(frozen=True)
class ActiveCart:
    """Aggregated view of a user's active lines.

    ``items`` maps item id to summed quantity, ordered by when the item was
    first added.  ``line_ids`` are the lines that make up the aggregate.
    """

    user_id: str
    items: dict[str, int]
    line_ids: frozenset[str]

    @staticmethod
    def from_lines(user_id: str, lines: list[CartLine]) -> ActiveCart:
        items: dict[str, int] = {}
        line_ids: set[str] = set()
        for line in sorted(lines, key=lambda line: line.created_at):
            if not line.is_active:
                continue
            items[line.item_id] = items.get(line.item_id, 0) + line.quantity.value
            line_ids.add(line.id)
        return ActiveCart(user_id=user_id, items=items, line_ids=frozenset(line_ids))

    @property
    def is_empty(self) -> bool:
        return not self.items
