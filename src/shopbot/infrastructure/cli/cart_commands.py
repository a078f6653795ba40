"""CLI commands for the cart and checkout."""

from __future__ import annotations

import click

from shopbot.application.add_to_cart import AddToCartHandler
from shopbot.application.checkout import CheckoutHandler
from shopbot.application.dto import CartDTO
from shopbot.application.view_cart import ViewCartHandler
from shopbot.domain.exceptions import DomainException
from shopbot.infrastructure.bootstrap import (
    cart_repository,
    checkout_service,
    product_repository,
)
from shopbot.infrastructure.cli.errors import fail
from shopbot.infrastructure.cli.order_commands import display_order


def _display_cart(dto: CartDTO) -> None:
    if dto.is_empty:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        name = item.item_name if item.available else f"{item.item_name} (unavailable)"
        click.echo(
            f"  {name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>20}")


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--qty", "quantity", default=1, type=int, help="Quantity to add.")
def cart_add(user_id: str, item_id: str, quantity: int) -> None:
    """Add an item to a user's cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(user_id=user_id, item_id=item_id, quantity=quantity)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Added {quantity} x {item_id} to the cart.")
    _display_cart(dto)


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_show(user_id: str) -> None:
    """Show a user's cart."""
    handler = ViewCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise fail(exc)

    _display_cart(dto)


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="User ID.")
def checkout(user_id: str) -> None:
    """Turn a user's cart into a paid order."""
    handler = CheckoutHandler(checkout_service=checkout_service())

    try:
        result = handler.handle(user_id)
    except DomainException as exc:
        raise fail(exc)

    if result.is_empty_cart:
        click.echo("Your cart is empty, nothing to check out.")
        return

    click.echo("Order placed.")
    display_order(result.order)
