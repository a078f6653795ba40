"""Application service: Add To Cart use case.

Stock is deliberately not checked here; it is enforced at checkout,
against the stock on hand at that moment.
"""

from __future__ import annotations

import structlog

from shopbot.application.dto import CartDTO
from shopbot.application.view_cart import ViewCartHandler
from shopbot.domain.exceptions import EntityNotFoundError
from shopbot.domain.model.cart import CartLine
from shopbot.domain.repository.cart_repository import CartRepository
from shopbot.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, item_id: str, quantity: int) -> CartDTO:
        """Append a cart line and return the updated cart."""
        line = CartLine.create(user_id=user_id, item_id=item_id, quantity=quantity)

        if self._product_repo.get_by_id(item_id) is None:
            raise EntityNotFoundError(f"Product not found: '{item_id}'")

        self._cart_repo.add_line(line)
        logger.info(
            "Added to cart",
            user_id=user_id,
            item_id=item_id,
            quantity=line.quantity.value,
        )
        return ViewCartHandler(self._cart_repo, self._product_repo).handle(user_id)
