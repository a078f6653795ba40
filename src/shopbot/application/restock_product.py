"""Application service: Restock Product use case (catalog management)."""

from __future__ import annotations

import structlog

from shopbot.domain.exceptions import EntityNotFoundError
from shopbot.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, item_id: str, quantity: int) -> int:
        """Add *quantity* units to a product's stock and return the new level."""
        if self._product_repo.get_by_id(item_id) is None:
            raise EntityNotFoundError(f"Product not found: '{item_id}'")

        stock = self._product_repo.increment_stock(item_id, quantity)
        logger.info("Product restocked", item_id=item_id, quantity=quantity, stock=stock)
        return stock
