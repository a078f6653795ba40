"""JSON-file-backed implementation of ProductRepository.

File layout::

    {
      "products": {"<item_id>": {"name": ..., "price": ..., ...}},
      "movements": {"<ref>": {"<item_id>": <net delta>}}
    }

Every read-modify-write runs under one re-entrant lock, so a stock check
and the write that follows it cannot interleave with another decrement in
this process.
"""

from __future__ import annotations

from pathlib import Path
from threading import RLock

from shopbot.domain.exceptions import EntityNotFoundError
from shopbot.domain.model.product import Product
from shopbot.domain.model.value_objects import Money
from shopbot.domain.repository.product_repository import ProductRepository
from shopbot.infrastructure.persistence.json_file import read_json, write_json


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = RLock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, item_id: str) -> Product | None:
        raw = self._load_raw()["products"].get(item_id)
        return self._to_domain(item_id, raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [
            self._to_domain(item_id, raw)
            for item_id, raw in self._load_raw()["products"].items()
        ]

    def save(self, product: Product) -> None:
        with self._lock:
            data = self._load_raw()
            data["products"][product.id] = self._to_raw(product)
            self._persist_raw(data)

    def decrement_stock(self, item_id: str, quantity: int, ref: str | None = None) -> int:
        with self._lock:
            data = self._load_raw()
            product = self._require(data, item_id)
            stock = product.decrement_stock(quantity)
            self._apply(data, product, ref, -quantity)
            return stock

    def increment_stock(self, item_id: str, quantity: int, ref: str | None = None) -> int:
        with self._lock:
            data = self._load_raw()
            product = self._require(data, item_id)
            stock = product.increment_stock(quantity)
            self._apply(data, product, ref, quantity)
            return stock

    def net_movements(self, ref: str) -> dict[str, int]:
        return dict(self._load_raw()["movements"].get(ref, {}))

    # --- Stock helpers --------------------------------------------------------

    def _require(self, data: dict, item_id: str) -> Product:
        raw = data["products"].get(item_id)
        if raw is None:
            raise EntityNotFoundError(f"Product not found: '{item_id}'")
        return self._to_domain(item_id, raw)

    def _apply(self, data: dict, product: Product, ref: str | None, delta: int) -> None:
        data["products"][product.id] = self._to_raw(product)
        if ref is not None:
            movements = data["movements"].setdefault(ref, {})
            movements[product.id] = movements.get(product.id, 0) + delta
        self._persist_raw(data)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "name": product.name,
            "price": product.price.amount,
            "description": product.description,
            "stock": product.stock,
        }

    @staticmethod
    def _to_domain(item_id: str, raw: dict) -> Product:
        return Product(
            id=item_id,
            name=raw["name"],
            price=Money(raw["price"]),
            stock=raw.get("stock", 0),
            description=raw.get("description", ""),
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
            self._persist_raw({"products": {}, "movements": {}})
