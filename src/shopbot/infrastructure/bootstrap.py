"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Repositories and the checkout service are built once per data directory
so every handler in the process shares the same file locks and the same
per-user checkout locks.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from shopbot.domain.service.checkout_service import CheckoutService
from shopbot.infrastructure.config import Settings
from shopbot.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shopbot.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from shopbot.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _data_dir() -> Path:
    return Settings().data_dir


@lru_cache(maxsize=None)
def _product_repository(data_dir: Path) -> JsonProductRepository:
    return JsonProductRepository(data_dir / "products.json")


@lru_cache(maxsize=None)
def _cart_repository(data_dir: Path) -> JsonCartRepository:
    return JsonCartRepository(data_dir / "carts.json")


@lru_cache(maxsize=None)
def _order_repository(data_dir: Path) -> JsonOrderRepository:
    return JsonOrderRepository(data_dir / "orders.json")


@lru_cache(maxsize=None)
def _checkout_service(data_dir: Path) -> CheckoutService:
    return CheckoutService(
        product_repo=_product_repository(data_dir),
        cart_repo=_cart_repository(data_dir),
        order_repo=_order_repository(data_dir),
    )


def product_repository() -> JsonProductRepository:
    return _product_repository(_data_dir())


def cart_repository() -> JsonCartRepository:
    return _cart_repository(_data_dir())


def order_repository() -> JsonOrderRepository:
    return _order_repository(_data_dir())


def checkout_service() -> CheckoutService:
    return _checkout_service(_data_dir())
