"""Abstract repository for cart lines, indexed by user."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from shopbot.domain.model.cart import ActiveCart, CartLine


class CartRepository(ABC):

    @abstractmethod
    def add_line(self, line: CartLine) -> None:
        """Append a new line; never merges with existing lines."""

    @abstractmethod
    def get_active_cart(self, user_id: str) -> ActiveCart:
        """Return the aggregated active cart (possibly empty)."""

    @abstractmethod
    def retire(self, user_id: str, line_ids: Iterable[str]) -> int:
        """Mark exactly the given lines INACTIVE.

        Idempotent.  Returns how many lines actually changed state.
        """

    @abstractmethod
    def count_active(self, user_id: str, line_ids: Iterable[str]) -> int:
        """Return how many of the given lines are still ACTIVE."""
