"""CLI commands for orders."""

from __future__ import annotations

import click

from shopbot.application.dto import OrderDTO
from shopbot.application.recover_checkouts import RecoverCheckoutsHandler
from shopbot.application.show_order import ShowOrderHandler
from shopbot.application.view_orders import ViewOrdersHandler
from shopbot.domain.exceptions import DomainException
from shopbot.infrastructure.bootstrap import checkout_service, order_repository
from shopbot.infrastructure.cli.errors import fail


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.item_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("list")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_list(user_id: str) -> None:
    """List a user's orders, newest first."""
    handler = ViewOrdersHandler(
        order_repo=order_repository(), checkout_service=checkout_service()
    )

    try:
        orders = handler.handle(user_id)
    except DomainException as exc:
        raise fail(exc)

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"{'Order':<24} {'Created':<22} {'Total':>10}")
    click.echo("-" * 58)
    for dto in orders:
        click.echo(f"{dto.id:<24} {dto.created_at:<22} {dto.total:>10}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(user_id: str, order_id: str) -> None:
    """Show details of one of a user's orders."""
    handler = ShowOrderHandler(
        order_repo=order_repository(), checkout_service=checkout_service()
    )

    try:
        dto = handler.handle(user_id, order_id)
    except DomainException as exc:
        raise fail(exc)

    display_order(dto)


@click.command("recover")
def recover() -> None:
    """Settle checkouts that were interrupted before completing."""
    handler = RecoverCheckoutsHandler(checkout_service=checkout_service())

    try:
        report = handler.handle()
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Recovered {len(report.paid)} paid, {len(report.voided)} voided.")
