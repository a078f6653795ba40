"""JSON-file-backed implementation of OrderRepository.

File layout::

    {
      "orders": {"<order_id>": {...}},
      "by_user": {"<user_id>": ["<order_id>", ...]}
    }

``by_user`` keeps each user's order ids in creation order.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from threading import RLock

from shopbot.domain.exceptions import (
    EntityNotFoundError,
    ValidationError,
)
from shopbot.domain.model.order import Order, OrderLine, OrderStatus, generate_order_id
from shopbot.domain.model.value_objects import Money, Quantity
from shopbot.domain.repository.order_repository import OrderRepository
from shopbot.infrastructure.persistence.json_file import read_json, write_json


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = RLock()
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        orders = self._load_raw()["orders"]
        order_id = generate_order_id()
        while order_id in orders:
            order_id = generate_order_id()
        return order_id

    def add(self, order: Order) -> None:
        with self._lock:
            data = self._load_raw()
            if order.id in data["orders"]:
                raise ValidationError(f"Order #{order.id} already exists")
            data["orders"][order.id] = self._to_raw(order)
            data["by_user"].setdefault(order.user_id, []).append(order.id)
            self._persist_raw(data)

    def set_status(self, order_id: str, status: OrderStatus) -> None:
        with self._lock:
            data = self._load_raw()
            raw = data["orders"].get(order_id)
            if raw is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            raw["status"] = status.value
            self._persist_raw(data)

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._load_raw()["orders"].get(order_id)
        return self._to_domain(raw) if raw is not None else None

    def list_for_user(self, user_id: str) -> list[Order]:
        data = self._load_raw()
        return [
            self._to_domain(data["orders"][order_id])
            for order_id in reversed(data["by_user"].get(user_id, []))
        ]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()["orders"].values()
            if raw["status"] == status.value
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "total": order.total.amount,
            "created_at": order.created_at.isoformat(),
            "cart_line_ids": sorted(order.cart_line_ids),
            "items": [
                {
                    "item_id": item.item_id,
                    "item_name": item.item_name,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.amount,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLine(
                item_id=i["item_id"],
                item_name=i["item_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(i["unit_price"]),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            cart_line_ids=frozenset(raw.get("cart_line_ids", [])),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        with self._lock:
            return read_json(self._file_path)

    def _persist_raw(self, data: dict) -> None:
        write_json(self._file_path, data)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw({"orders": {}, "by_user": {}})
