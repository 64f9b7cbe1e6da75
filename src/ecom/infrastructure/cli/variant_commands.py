"""CLI commands for product variants."""

from __future__ import annotations

import click

from ecom.application.add_product_variant import AddProductVariantHandler
from ecom.application.delete_product_variant import DeleteProductVariantHandler
from ecom.application.dto import ProductVariantDTO
from ecom.application.update_product_variant import UpdateProductVariantHandler
from ecom.application.update_variant_status import UpdateVariantStatusHandler
from ecom.application.update_variant_stock import STOCK_MODES, UpdateVariantStockHandler
from ecom.domain.exceptions import DomainException
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import domain_error, parse_pairs
from ecom.infrastructure.cli.product_commands import resolve_attribute_keys


def _display_variant(dto: ProductVariantDTO) -> None:
    status = "active" if dto.is_active else "inactive"
    price = dto.price if dto.has_price_override else f"{dto.price} (base)"
    click.echo(f"Variant {dto.id}  ({status}, v{dto.version})")
    click.echo(f"  Product: {dto.product_id}")
    click.echo(f"  SKU:     {dto.sku or '-'}")
    click.echo(f"  Price:   {price}")
    click.echo(f"  Stock:   {dto.stock_quantity}")
    for attribute_id, value in dto.attribute_values.items():
        click.echo(f"  {attribute_id}: {value}")


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--sku", default=None, help="Variant SKU.")
@click.option("--price", default=None, help="Price (the product's base price if omitted).")
@click.option("--stock", "stock_quantity", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--value", "values", multiple=True, help="Variant attribute 'attribute=value' (repeatable).")
@click.option("--inactive", is_flag=True, default=False, help="Create as inactive.")
def variant_add(
    product_id: str,
    sku: str | None,
    price: str | None,
    stock_quantity: int,
    values: tuple[str, ...],
    inactive: bool,
) -> None:
    """Add a variant to a product."""
    uow = unit_of_work()

    try:
        attribute_values = resolve_attribute_keys(uow, parse_pairs(values, "--value"))
        dto = AddProductVariantHandler(uow).handle(
            product_id=product_id,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            attribute_values=attribute_values,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise domain_error(exc)

    _display_variant(dto)


@click.command("update")
@click.option("--id", "variant_id", required=True, help="Variant ID.")
@click.option("--sku", default=None, help="New SKU.")
@click.option("--price", default=None, help="New price.")
@click.option("--value", "values", multiple=True, help="Set 'attribute=value' (repeatable).")
@click.option("--replace-values", is_flag=True, default=False, help="Drop values not given with --value.")
def variant_update(
    variant_id: str,
    sku: str | None,
    price: str | None,
    values: tuple[str, ...],
    replace_values: bool,
) -> None:
    """Change a variant's SKU, price or attribute values."""
    uow = unit_of_work()

    try:
        attribute_values = resolve_attribute_keys(uow, parse_pairs(values, "--value"))
        dto = UpdateProductVariantHandler(uow).handle(
            variant_id=variant_id,
            sku=sku,
            price=price,
            attribute_values=attribute_values if values or replace_values else None,
            replace_attributes=replace_values,
        )
    except DomainException as exc:
        raise domain_error(exc)

    _display_variant(dto)


@click.command("stock")
@click.option("--id", "variant_id", required=True, help="Variant ID.")
@click.option("--quantity", required=True, type=int, help="Quantity.")
@click.option(
    "--mode",
    type=click.Choice(STOCK_MODES),
    default="set",
    show_default=True,
    help="Set the level, or add/remove that many units.",
)
def variant_stock(variant_id: str, quantity: int, mode: str) -> None:
    """Adjust a variant's stock level."""
    handler = UpdateVariantStockHandler(unit_of_work())

    try:
        dto = handler.handle(variant_id, quantity, mode)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Variant {dto.id} stock: {dto.stock_quantity}")


@click.command("status")
@click.option("--id", "variant_id", required=True, help="Variant ID.")
@click.option("--active/--inactive", required=True, help="New status.")
def variant_status(variant_id: str, active: bool) -> None:
    """Activate or deactivate a variant."""
    handler = UpdateVariantStatusHandler(unit_of_work())

    try:
        dto = handler.handle(variant_id, active)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Variant {dto.id} is now {'active' if dto.is_active else 'inactive'}")


@click.command("delete")
@click.option("--id", "variant_id", required=True, help="Variant ID.")
def variant_delete(variant_id: str) -> None:
    """Delete a variant."""
    handler = DeleteProductVariantHandler(unit_of_work())

    try:
        handler.handle(variant_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Variant {variant_id} deleted.")
