"""Application service: View Orders use case (query).

Only PAID orders are shown; PENDING and VOIDED orders are internal
bookkeeping of the checkout.  When a CheckoutService is supplied, the
user's PENDING orders are settled first so an order whose final status
write was lost still shows up.
"""

from __future__ import annotations

from shopbot.application.dto import OrderDTO
from shopbot.domain.model.order import OrderStatus
from shopbot.domain.repository.order_repository import OrderRepository
from shopbot.domain.service.checkout_service import CheckoutService


class ViewOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        checkout_service: CheckoutService | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._checkout_service = checkout_service

    def handle(self, user_id: str) -> list[OrderDTO]:
        if self._checkout_service is not None:
            self._checkout_service.resolve_pending(user_id)
        return [
            OrderDTO.from_order(order)
            for order in self._order_repo.list_for_user(user_id)
            if order.status == OrderStatus.PAID
        ]
