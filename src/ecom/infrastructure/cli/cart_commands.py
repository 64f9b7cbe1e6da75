"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from ecom.application.add_to_cart import AddToCartHandler
from ecom.application.clear_cart import ClearCartHandler
from ecom.application.dto import CartDTO
from ecom.application.remove_cart_item import RemoveCartItemHandler
from ecom.application.show_cart import ShowCartHandler
from ecom.application.update_cart_item import UpdateCartItemHandler
from ecom.domain.exceptions import DomainException
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import domain_error


def _display_cart(dto: CartDTO) -> None:
    owner = dto.user_id or "guest"
    click.echo(f"Cart {dto.id}  ({owner}, {dto.total_quantity} item(s))")
    if not dto.items:
        click.echo("  (empty)")
        return
    click.echo(f"  {'Item':<34} {'Product':<34} {'Variant':<34} {'Qty':>5}")
    click.echo(f"  {'-'*110}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<34} {item.product_id:<34} {item.variant_id or '-':<34} {item.quantity:>5}"
        )


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--variant", "variant_id", default=None, help="Variant ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Quantity.")
@click.option("--cart", "cart_id", default=None, help="Existing cart (a new one is created if omitted).")
@click.option("--user", "user_id", default=None, help="Owner of a new cart.")
def cart_add(
    product_id: str,
    variant_id: str | None,
    quantity: int,
    cart_id: str | None,
    user_id: str | None,
) -> None:
    """Add a product to a cart."""
    handler = AddToCartHandler(unit_of_work())

    try:
        dto = handler.handle(
            product_id=product_id,
            quantity=quantity,
            variant_id=variant_id,
            cart_id=cart_id,
            user_id=user_id,
        )
    except DomainException as exc:
        raise domain_error(exc)

    _display_cart(dto)


@click.command("update")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(cart_id: str, item_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(unit_of_work())

    try:
        dto = handler.handle(cart_id, item_id, quantity)
    except DomainException as exc:
        raise domain_error(exc)

    _display_cart(dto)


@click.command("remove")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
def cart_remove(cart_id: str, item_id: str) -> None:
    """Remove a line from a cart."""
    handler = RemoveCartItemHandler(unit_of_work())

    try:
        dto = handler.handle(cart_id, item_id)
    except DomainException as exc:
        raise domain_error(exc)

    _display_cart(dto)


@click.command("clear")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_clear(cart_id: str) -> None:
    """Empty a cart."""
    handler = ClearCartHandler(unit_of_work())

    try:
        dto = handler.handle(cart_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Cart {dto.id} cleared.")


@click.command("show")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_show(cart_id: str) -> None:
    """Show a cart's contents."""
    handler = ShowCartHandler(unit_of_work())

    try:
        dto = handler.handle(cart_id)
    except DomainException as exc:
        raise domain_error(exc)

    _display_cart(dto)
