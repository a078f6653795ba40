"""Concurrency tests for CheckoutService.

Checkouts run on real threads against the thread-safe fakes.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from shopbot.domain.exceptions import InsufficientStockError
from shopbot.domain.model.cart import CartLine
from shopbot.domain.model.order import OrderStatus
from shopbot.domain.model.product import Product
from shopbot.domain.model.value_objects import Money
from shopbot.domain.service.checkout_service import CheckoutService
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository


def _setup(stock: int):
    product_repo = FakeProductRepository([
        Product(id="coffee001", name="Drip Coffee", price=Money(680), stock=stock),
    ])
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    svc = CheckoutService(product_repo, cart_repo, order_repo)
    return svc, product_repo, cart_repo, order_repo


def _attempt(svc: CheckoutService, user_id: str, start: threading.Barrier):
    start.wait(timeout=5)
    try:
        return svc.checkout(user_id)
    except InsufficientStockError as exc:
        return exc


def _paid(order_repo: FakeOrderRepository):
    return [o for o in order_repo.all() if o.status == OrderStatus.PAID]


class TestSameUserConcurrentCheckout:

    def test_cart_is_spent_only_once(self):
        svc, product_repo, cart_repo, order_repo = _setup(stock=10)
        cart_repo.add_line(CartLine.create("U1", "coffee001", 2))
        start = threading.Barrier(2)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: _attempt(svc, "U1", start), range(2)))

        orders = [r for r in results if r is not None]
        assert len(orders) == 1
        assert results.count(None) == 1
        assert len(_paid(order_repo)) == 1
        assert product_repo.get_by_id("coffee001").stock == 8


class TestDifferentUsersCompetingForStock:

    def test_both_pass_precheck_but_only_one_wins(self):
        svc, product_repo, cart_repo, order_repo = _setup(stock=1)
        cart_repo.add_line(CartLine.create("A", "coffee001", 1))
        cart_repo.add_line(CartLine.create("B", "coffee001", 1))

        # Hold both checkouts after they have read stock=1.
        both_read = threading.Barrier(2)
        product_repo.on_read = lambda item_id: both_read.wait(timeout=5)
        start = threading.Barrier(2)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda user: _attempt(svc, user, start), ["A", "B"]))
        product_repo.on_read = None

        failures = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(failures) == 1
        assert failures[0].item_id == "coffee001"
        assert failures[0].available == 0
        assert len(_paid(order_repo)) == 1
        assert product_repo.get_by_id("coffee001").stock == 0

    def test_loser_keeps_cart_active(self):
        svc, product_repo, cart_repo, _ = _setup(stock=1)
        cart_repo.add_line(CartLine.create("A", "coffee001", 1))
        cart_repo.add_line(CartLine.create("B", "coffee001", 1))
        both_read = threading.Barrier(2)
        product_repo.on_read = lambda item_id: both_read.wait(timeout=5)
        start = threading.Barrier(2)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = dict(zip(["A", "B"], pool.map(lambda u: _attempt(svc, u, start), ["A", "B"])))

        loser = next(u for u, r in results.items() if isinstance(r, InsufficientStockError))
        assert cart_repo.get_active_cart(loser).items == {"coffee001": 1}

    def test_no_oversell_under_load(self):
        svc, product_repo, cart_repo, order_repo = _setup(stock=5)
        users = [f"user-{i}" for i in range(20)]
        for user in users:
            cart_repo.add_line(CartLine.create(user, "coffee001", 1))
        start = threading.Barrier(len(users))

        with ThreadPoolExecutor(max_workers=len(users)) as pool:
            results = list(pool.map(lambda u: _attempt(svc, u, start), users))

        paid = _paid(order_repo)
        sold = sum(o.quantities["coffee001"] for o in paid)
        assert sold == 5
        assert len(paid) == 5
        assert sum(isinstance(r, InsufficientStockError) for r in results) == 15
        assert product_repo.get_by_id("coffee001").stock == 0
        for order in paid:
            assert order.total == Money(680) * order.quantities["coffee001"]
