"""Domain service: Checkout.

Turns a user's active cart into a PAID order while keeping three promises:
stock never goes negative, an order's total matches the cart at the moment
of commit, and a cart is never spent twice.

The sequence runs under a per-user lock:

  Phase 1 (snapshot and validate): read the active cart, fetch every
            product fresh and check stock.  Fails fast before any write.
  Phase 2 (write-ahead): persist the order as PENDING.
  Phase 3 (apply): conditionally decrement stock per line (the repository
            makes each decrement atomic and records it under the order id),
            then retire exactly the cart lines read in phase 1.  Retiring
            the lines is the commit point.
  Phase 4 (finalize): mark the order PAID.

If phase 3 fails, every decrement recorded for the order is put back and
the order is VOIDED; the cart is left untouched so the user can retry.
A PENDING order left behind (the process died, or putting stock back
failed) is resolved before the same user checks out again, or by
``recover_pending()``.  It is only marked PAID when its cart lines are
retired, its full decrement is on the ledger and no other order has
claimed the same lines; otherwise its stock is put back and it is VOIDED.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from shopbot.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ItemUnavailableError,
    StorageUnavailableError,
)
from shopbot.domain.model.cart import ActiveCart
from shopbot.domain.model.order import Order, OrderLine, OrderStatus
from shopbot.domain.model.product import Product
from shopbot.domain.model.value_objects import Money, Quantity
from shopbot.domain.repository.cart_repository import CartRepository
from shopbot.domain.repository.order_repository import OrderRepository
from shopbot.domain.repository.product_repository import ProductRepository
from shopbot.domain.service.keyed_lock import KeyedLock

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecoveryReport:
    paid: list[str] = field(default_factory=list)
    voided: list[str] = field(default_factory=list)


class CheckoutService:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        user_locks: KeyedLock | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._user_locks = user_locks or KeyedLock()

    def checkout(self, user_id: str) -> Order | None:
        """Check out the user's active cart.

        Returns the PAID order, or None when the cart is empty (including
        when a concurrent checkout for the same user already spent it).
        """
        with self._user_locks.hold(user_id):
            self._resolve_pending_for(user_id, RecoveryReport())

            cart = self._cart_repo.get_active_cart(user_id)
            if cart.is_empty:
                logger.info("Checkout skipped, cart is empty", user_id=user_id)
                return None

            # Phase 1: snapshot and validate
            lines = self._snapshot_lines(cart)
            total = Money.zero()
            for line in lines:
                total = total + line.line_total

            order = Order.create(
                order_id=self._order_repo.next_id(),
                user_id=user_id,
                items=lines,
                total=total,
                cart_line_ids=cart.line_ids,
            )

            # Phase 2: write-ahead
            self._order_repo.add(order)
            logger.debug("Order intent written", user_id=user_id, order_id=order.id)

            # Phase 3: apply
            try:
                for line in order.items:
                    self._decrement(line, order.id)
                self._cart_repo.retire(user_id, cart.line_ids)
            except Exception as exc:
                logger.warning(
                    "Checkout aborted, compensating stock",
                    user_id=user_id,
                    order_id=order.id,
                    error=str(exc),
                )
                self._abort(order)
                raise

            # Phase 4: finalize
            self._finalize(order)

        logger.info(
            "Order placed",
            user_id=user_id,
            order_id=order.id,
            total=order.total.amount,
            lines=len(order.items),
        )
        return order

    def recover_pending(self) -> RecoveryReport:
        """Resolve every PENDING order left behind by an interrupted checkout."""
        report = RecoveryReport()
        for pending in self._order_repo.list_by_status(OrderStatus.PENDING):
            with self._user_locks.hold(pending.user_id):
                order = self._order_repo.get_by_id(pending.id)
                if order is None or order.status != OrderStatus.PENDING:
                    continue
                self._resolve(order, report)

        self._log_recovery(report)
        return report

    def resolve_pending(self, user_id: str) -> RecoveryReport:
        """Resolve one user's PENDING orders, e.g. before showing their history."""
        report = RecoveryReport()
        with self._user_locks.hold(user_id):
            self._resolve_pending_for(user_id, report)
        return report

    # --- Pending order resolution ---------------------------------------------

    def _resolve_pending_for(self, user_id: str, report: RecoveryReport) -> None:
        # Caller holds the user lock.
        for order in self._order_repo.list_for_user(user_id):
            if order.status == OrderStatus.PENDING:
                self._resolve(order, report)
        self._log_recovery(report, user_id=user_id)

    def _resolve(self, order: Order, report: RecoveryReport) -> None:
        if self._reached_commit(order):
            order.mark_paid()
            self._order_repo.set_status(order.id, order.status)
            report.paid.append(order.id)
        else:
            self._compensate(order)
            order.void()
            self._order_repo.set_status(order.id, order.status)
            report.voided.append(order.id)

    def _reached_commit(self, order: Order) -> bool:
        """True when the order retired its cart lines with its full decrement applied."""
        if self._cart_repo.count_active(order.user_id, order.cart_line_ids):
            return False
        expected = {item_id: -qty for item_id, qty in order.quantities.items()}
        if self._product_repo.net_movements(order.id) != expected:
            return False
        return not any(
            other.id != order.id
            and other.status == OrderStatus.PAID
            and other.cart_line_ids & order.cart_line_ids
            for other in self._order_repo.list_for_user(order.user_id)
        )

    @staticmethod
    def _log_recovery(report: RecoveryReport, **context) -> None:
        if report.paid or report.voided:
            logger.info(
                "Recovered pending orders",
                paid=len(report.paid),
                voided=len(report.voided),
                **context,
            )

    # --- Internal helpers -----------------------------------------------------

    def _snapshot_lines(self, cart: ActiveCart) -> list[OrderLine]:
        products: list[tuple[Product, int]] = []
        for item_id, qty in cart.items.items():
            product = self._product_repo.get_by_id(item_id)
            if product is None:
                raise ItemUnavailableError(item_id)
            products.append((product, qty))

        for product, qty in products:
            if not product.has_stock_for(qty):
                raise InsufficientStockError(product.id, product.stock, requested=qty)

        return [
            OrderLine(
                item_id=product.id,
                item_name=product.name,
                quantity=Quantity(qty),
                unit_price=product.price,  # <-- price snapshot
            )
            for product, qty in products
        ]

    def _decrement(self, line: OrderLine, order_id: str) -> None:
        try:
            self._product_repo.decrement_stock(
                line.item_id, line.quantity.value, ref=order_id
            )
        except EntityNotFoundError as exc:
            raise ItemUnavailableError(line.item_id) from exc

    def _compensate(self, order: Order) -> None:
        """Put back every decrement recorded under the order id."""
        for item_id, delta in self._product_repo.net_movements(order.id).items():
            if delta >= 0:
                continue
            try:
                self._product_repo.increment_stock(item_id, -delta, ref=order.id)
            except EntityNotFoundError:
                logger.warning(
                    "Cannot restore stock for removed item",
                    order_id=order.id,
                    item_id=item_id,
                    quantity=-delta,
                )

    def _abort(self, order: Order) -> None:
        try:
            self._compensate(order)
            order.void()
            self._order_repo.set_status(order.id, order.status)
        except Exception:
            # The checkout error being handled is re-raised by the caller.
            logger.error(
                "Compensation incomplete, order left pending for recovery",
                user_id=order.user_id,
                order_id=order.id,
                exc_info=True,
            )

    def _finalize(self, order: Order) -> None:
        order.mark_paid()
        try:
            self._order_repo.set_status(order.id, order.status)
        except StorageUnavailableError:
            # Cart lines are already retired; recovery persists PAID.
            logger.error(
                "Order committed but PAID status not persisted",
                user_id=order.user_id,
                order_id=order.id,
                exc_info=True,
            )
