"""Application service: Recover Checkouts use case.

Run on startup (or on demand) to settle checkouts interrupted between the
stock decrement and the final PAID status.
"""

from __future__ import annotations

from shopbot.domain.service.checkout_service import CheckoutService, RecoveryReport


class RecoverCheckoutsHandler:

    def __init__(self, checkout_service: CheckoutService) -> None:
        self._checkout_service = checkout_service

    def handle(self) -> RecoveryReport:
        return self._checkout_service.recover_pending()
