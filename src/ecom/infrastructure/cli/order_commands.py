"""CLI commands for orders."""

from __future__ import annotations

import click

from ecom.application.cancel_order import CancelOrderHandler
from ecom.application.create_order_from_cart import CreateOrderFromCartHandler
from ecom.application.dto import OrderDTO
from ecom.application.show_order import ShowOrderHandler
from ecom.application.update_order_status import UpdateOrderStatusHandler
from ecom.domain.exceptions import DomainException
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import domain_error


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}  [{dto.status}]  placed {dto.created_at}")
    if dto.user_id:
        click.echo(f"  Customer: {dto.user_id}")
    if dto.tracking_number:
        click.echo(f"  Tracking: {dto.tracking_number}")
    click.echo()
    click.echo(f"  {'Product':<24} {'SKU':<14} {'Qty':>5} {'Unit':>14} {'Total':>14}")
    click.echo(f"  {'-'*75}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.sku or '-':<14} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*75}")
    click.echo(f"  {'Total':<59} {dto.total:>14}")


@click.command("create")
@click.option("--cart", "cart_id", required=True, help="Cart to check out.")
@click.option("--user", "user_id", default=None, help="Customer (defaults to the cart owner).")
def order_create(cart_id: str, user_id: str | None) -> None:
    """Place an order from a cart."""
    handler = CreateOrderFromCartHandler(unit_of_work())

    try:
        dto = handler.handle(cart_id, user_id)
    except DomainException as exc:
        raise domain_error(exc)

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID.")
def order_show(order_id: str) -> None:
    """Show an order."""
    handler = ShowOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise domain_error(exc)

    _display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID.")
def order_cancel(order_id: str) -> None:
    """Cancel an order and restock its items."""
    handler = CancelOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Order {dto.id} is now {dto.status}")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, help="PROCESSING, SHIPPED, DELIVERED or RETURNED.")
@click.option("--tracking", "tracking_number", default=None, help="Tracking number when shipping.")
def order_status(order_id: str, status: str, tracking_number: str | None) -> None:
    """Move an order to its next status."""
    handler = UpdateOrderStatusHandler(unit_of_work())

    try:
        dto = handler.handle(order_id, status, tracking_number)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Order {dto.id} is now {dto.status}")
