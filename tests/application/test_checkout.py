"""Integration tests for the Checkout use case (end-to-end scenarios)."""

import pytest

from shopbot.application.add_to_cart import AddToCartHandler
from shopbot.application.checkout import CheckoutHandler
from shopbot.application.dto import CheckoutResultDTO
from shopbot.application.view_cart import ViewCartHandler
from shopbot.application.view_orders import ViewOrdersHandler
from shopbot.domain.exceptions import ErrorCategory, InsufficientStockError
from shopbot.domain.model.product import Product
from shopbot.domain.model.value_objects import Money
from shopbot.domain.service.checkout_service import CheckoutService
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository


def _setup():
    product_repo = FakeProductRepository([
        Product(id="coffee001", name="Drip Coffee", price=Money(680), stock=2),
    ])
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    service = CheckoutService(product_repo, cart_repo, order_repo)
    return (
        AddToCartHandler(cart_repo, product_repo),
        CheckoutHandler(service),
        cart_repo,
        product_repo,
        order_repo,
    )


class TestCheckoutScenarios:

    def test_second_buyer_finds_item_sold_out(self):
        add, checkout, cart_repo, product_repo, order_repo = _setup()

        add.handle("A", "coffee001", 2)
        result = checkout.handle("A")

        assert result.status == CheckoutResultDTO.PLACED
        assert result.order.total_amount == 1360
        assert result.order.status == "PAID"
        assert product_repo.get_by_id("coffee001").stock == 0

        add.handle("B", "coffee001", 1)
        with pytest.raises(InsufficientStockError) as exc_info:
            checkout.handle("B")

        assert exc_info.value.item_id == "coffee001"
        assert exc_info.value.available == 0
        assert exc_info.value.category == ErrorCategory.REDUCE_QUANTITY
        cart = ViewCartHandler(cart_repo, product_repo).handle("B")
        assert cart.quantities == {"coffee001": 1}
        assert ViewOrdersHandler(order_repo).handle("B") == []

    def test_empty_cart_checkout(self):
        _, checkout, _, _, order_repo = _setup()

        result = checkout.handle("A")

        assert result.is_empty_cart
        assert result.order is None
        assert order_repo.all() == []

    def test_order_dto_lines(self):
        add, checkout, _, _, _ = _setup()
        add.handle("A", "coffee001", 1)

        order = checkout.handle("A").order

        [line] = order.items
        assert line.item_name == "Drip Coffee"
        assert line.unit_price == "NT$680"
        assert line.line_total == "NT$680"
        assert order.total == "NT$680"
