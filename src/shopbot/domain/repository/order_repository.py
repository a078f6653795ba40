"""Abstract repository for the Order aggregate.

Orders are append-only: there is no delete, and the only update is a
status transition already validated by the aggregate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopbot.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique order ID."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order.  Raises ValidationError if the ID exists."""

    @abstractmethod
    def set_status(self, order_id: str, status: OrderStatus) -> None:
        """Persist a status transition for an existing order."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return every order currently in *status*."""
