import click

from shopbot.infrastructure.cli.cart_commands import cart_add, cart_show, checkout
from shopbot.infrastructure.cli.catalog_commands import (
    browse,
    product_add,
    product_restock,
)
from shopbot.infrastructure.cli.order_commands import order_list, order_show, recover
from shopbot.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """shopbot: cart, inventory and orders for the chat shop"""
    configure_logging()


@cli.group()
def cart() -> None:
    """Manage a user's cart."""


@cli.group()
def orders() -> None:
    """View orders."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


# Register subcommands
cli.add_command(browse)
cli.add_command(checkout)
cli.add_command(recover)
cart.add_command(cart_add)
cart.add_command(cart_show)
orders.add_command(order_list)
orders.add_command(order_show)
product.add_command(product_add)
product.add_command(product_restock)
