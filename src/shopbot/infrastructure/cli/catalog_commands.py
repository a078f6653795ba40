"""CLI commands for browsing and managing the catalog."""

from __future__ import annotations

import click

from shopbot.application.add_product import AddProductHandler
from shopbot.application.browse import BrowseHandler
from shopbot.application.restock_product import RestockProductHandler
from shopbot.domain.exceptions import DomainException
from shopbot.infrastructure.bootstrap import product_repository
from shopbot.infrastructure.cli.errors import fail


@click.command("browse")
def browse() -> None:
    """List all products in the catalog."""
    products = BrowseHandler(product_repo=product_repository()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 51)
    for p in products:
        click.echo(f"{p.id:<12} {p.name:<20} {p.price:>10} {p.stock:>6}")


@click.command("add")
@click.option("--id", "item_id", required=True, help="Item ID, e.g. coffee001.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price in the smallest currency unit.")
@click.option("--stock", default=0, type=int, help="Initial stock.")
@click.option("--description", default="", help="Short description.")
def product_add(item_id: str, name: str, price: str, stock: int, description: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            item_id=item_id,
            name=name,
            price=price,
            stock=stock,
            description=description,
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product {product.id} '{product.name}' added at {product.price} (stock {product.stock})")


@click.command("restock")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Units to add.")
def product_restock(item_id: str, quantity: int) -> None:
    """Add stock to an existing product."""
    handler = RestockProductHandler(product_repo=product_repository())

    try:
        stock = handler.handle(item_id=item_id, quantity=quantity)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product {item_id} restocked, {stock} in stock.")
