"""JSON-file-backed implementation of CartRepository.

Lines are stored per user (``{"<user_id>": [line, ...]}``) so reading a
cart never scans other users' lines.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from threading import RLock

from shopbot.domain.model.cart import ActiveCart, CartLine, CartLineStatus
from shopbot.domain.model.value_objects import Quantity
from shopbot.domain.repository.cart_repository import CartRepository
from shopbot.infrastructure.persistence.json_file import read_json, write_json


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = RLock()
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def add_line(self, line: CartLine) -> None:
        with self._lock:
            carts = self._load_raw()
            carts.setdefault(line.user_id, []).append(self._to_raw(line))
            self._persist_raw(carts)

    def get_active_cart(self, user_id: str) -> ActiveCart:
        lines = [self._to_domain(user_id, raw) for raw in self._load_raw().get(user_id, [])]
        return ActiveCart.from_lines(user_id, lines)

    def retire(self, user_id: str, line_ids: Iterable[str]) -> int:
        wanted = set(line_ids)
        with self._lock:
            carts = self._load_raw()
            retired = 0
            for raw in carts.get(user_id, []):
                if raw["id"] in wanted and raw["status"] == CartLineStatus.ACTIVE.value:
                    raw["status"] = CartLineStatus.INACTIVE.value
                    retired += 1
            if retired:
                self._persist_raw(carts)
            return retired

    def count_active(self, user_id: str, line_ids: Iterable[str]) -> int:
        wanted = set(line_ids)
        return sum(
            1
            for raw in self._load_raw().get(user_id, [])
            if raw["id"] in wanted and raw["status"] == CartLineStatus.ACTIVE.value
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "id": line.id,
            "item_id": line.item_id,
            "quantity": line.quantity.value,
            "created_at": line.created_at.isoformat(),
            "status": line.status.value,
        }

    @staticmethod
    def _to_domain(user_id: str, raw: dict) -> CartLine:
        return CartLine(
            id=raw["id"],
            user_id=user_id,
            item_id=raw["item_id"],
            quantity=Quantity(raw["quantity"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            status=CartLineStatus(raw["status"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, list[dict]]:
        with self._lock:
            return read_json(self._file_path)

    def _persist_raw(self, carts: dict[str, list[dict]]) -> None:
        write_json(self._file_path, carts)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw({})
