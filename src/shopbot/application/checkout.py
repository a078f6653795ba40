"""Application service: Checkout use case.

Delegates the transaction to the CheckoutService domain service and maps
the outcome to a CheckoutResultDTO.  Failures (ItemUnavailableError,
InsufficientStockError, StorageUnavailableError) propagate unchanged.
"""

from __future__ import annotations

from shopbot.application.dto import CheckoutResultDTO, OrderDTO
from shopbot.domain.service.checkout_service import CheckoutService


class CheckoutHandler:

    def __init__(self, checkout_service: CheckoutService) -> None:
        self._checkout_service = checkout_service

    def handle(self, user_id: str) -> CheckoutResultDTO:
        order = self._checkout_service.checkout(user_id)
        if order is None:
            return CheckoutResultDTO(status=CheckoutResultDTO.EMPTY_CART)
        return CheckoutResultDTO(
            status=CheckoutResultDTO.PLACED,
            order=OrderDTO.from_order(order),
        )
