"""Application service: Show Order use case (query)."""

from __future__ import annotations

from shopbot.application.dto import OrderDTO
from shopbot.domain.exceptions import EntityNotFoundError
from shopbot.domain.model.order import OrderStatus
from shopbot.domain.repository.order_repository import OrderRepository
from shopbot.domain.service.checkout_service import CheckoutService


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        checkout_service: CheckoutService | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._checkout_service = checkout_service

    def handle(self, user_id: str, order_id: str) -> OrderDTO:
        if self._checkout_service is not None:
            self._checkout_service.resolve_pending(user_id)
        order = self._order_repo.get_by_id(order_id)
        # Another user's order is reported exactly like a missing one.
        if order is None or order.user_id != user_id or order.status != OrderStatus.PAID:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)
