"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ecom.application.clear_product_attributes import ClearProductAttributesHandler
from ecom.application.create_product import CreateProductHandler
from ecom.application.delete_product import DeleteProductHandler
from ecom.application.dto import DataTableRequest, ProductDetailDTO
from ecom.application.get_product_detail import GetProductDetailHandler
from ecom.application.product_datatable import ProductDataTableHandler
from ecom.application.set_product_attribute import SetProductAttributeHandler
from ecom.application.update_product import UpdateProductHandler
from ecom.application.update_product_status import UpdateProductStatusHandler
from ecom.domain.exceptions import DomainException
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.config import load_settings
from ecom.infrastructure.cli.formatting import (
    datatable_options,
    domain_error,
    echo_json,
    parse_order,
    parse_pairs,
    parse_value,
)


def resolve_attribute_keys(uow: UnitOfWork, values: dict) -> dict:
    """Let users name attributes by system name as well as by ID."""
    resolved = {}
    for key, value in values.items():
        attribute = uow.attributes.get_by_id(key) or uow.attributes.get_by_name(key)
        resolved[attribute.id if attribute else key] = value
    uow.rollback()
    return resolved


def _display_product(detail: ProductDetailDTO) -> None:
    dto = detail.product
    status = "active" if dto.is_active else "inactive"
    click.echo(f"Product {dto.id}  ({status}, v{dto.version})")
    click.echo(f"  Name:  {dto.name}")
    click.echo(f"  Slug:  {dto.slug}")
    click.echo(f"  SKU:   {dto.sku or '-'}")
    click.echo(f"  Price: {dto.base_price}")
    if detail.category_names:
        click.echo(f"  Categories: {', '.join(detail.category_names)}")
    for attribute_id, value in dto.attributes.items():
        click.echo(f"  {attribute_id}: {value}")
    click.echo()

    if not detail.variants:
        click.echo("  No variants.")
        return
    click.echo(f"  {'Variant':<34} {'SKU':<16} {'Price':>12} {'Stock':>6}")
    click.echo(f"  {'-'*71}")
    for v in detail.variants:
        click.echo(f"  {v.id:<34} {v.sku or '-':<16} {v.price:>12} {v.stock_quantity:>6}")


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Base price (e.g. 15.00).")
@click.option("--slug", default=None, help="URL slug (derived from the name if omitted).")
@click.option("--sku", default=None, help="Stock keeping unit.")
@click.option("--description", default="", help="Description.")
@click.option("--currency", default=None, help="3-letter currency (defaults to ECOM_DEFAULT_CURRENCY).")
@click.option("--category", "category_ids", multiple=True, help="Category ID (repeatable).")
@click.option("--value", "values", multiple=True, help="Attribute value 'attribute=value' (repeatable).")
@click.option("--inactive", is_flag=True, default=False, help="Create as inactive.")
def product_create(
    name: str,
    price: str,
    slug: str | None,
    sku: str | None,
    description: str,
    currency: str | None,
    category_ids: tuple[str, ...],
    values: tuple[str, ...],
    inactive: bool,
) -> None:
    """Add a new product to the catalog."""
    uow = unit_of_work()
    handler = CreateProductHandler(uow, default_currency=load_settings().default_currency)

    try:
        attribute_values = resolve_attribute_keys(uow, parse_pairs(values, "--value"))
        dto = handler.handle(
            name=name,
            base_price=price,
            slug=slug,
            description=description,
            sku=sku,
            currency=currency,
            category_ids=category_ids,
            attribute_values=attribute_values,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.base_price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--slug", default=None, help="New slug.")
@click.option("--price", default=None, help="New base price.")
@click.option("--description", default=None, help="New description.")
@click.option("--sku", default=None, help="New SKU ('' clears it).")
@click.option("--category", "category_ids", multiple=True, help="Replace categories (repeatable).")
def product_update(
    product_id: str,
    name: str | None,
    slug: str | None,
    price: str | None,
    description: str | None,
    sku: str | None,
    category_ids: tuple[str, ...],
) -> None:
    """Update a product's name, slug, price, SKU or categories."""
    uow = unit_of_work()

    try:
        current = GetProductDetailHandler(uow).handle(product_id).product
        dto = UpdateProductHandler(uow).handle(
            product_id=current.id,
            name=name if name is not None else current.name,
            slug=slug if slug is not None else current.slug,
            base_price=price if price is not None else current.base_price.split()[0],
            description=description,
            sku=sku if sku is not None else current.sku,
            category_ids=list(category_ids) if category_ids else None,
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {dto.id} updated (price {dto.base_price})")


@click.command("status")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--active/--inactive", required=True, help="New status.")
def product_status(product_id: str, active: bool) -> None:
    """Activate or deactivate a product."""
    handler = UpdateProductStatusHandler(unit_of_work())

    try:
        dto = handler.handle(product_id, active)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {dto.id} is now {'active' if dto.is_active else 'inactive'}")


@click.command("set-attribute")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--attribute", "attribute_key", required=True, help="Attribute ID or name.")
@click.option("--value", default=None, help="New value (JSON or text).")
@click.option("--remove", is_flag=True, default=False, help="Remove the value instead.")
def product_set_attribute(
    product_id: str, attribute_key: str, value: str | None, remove: bool
) -> None:
    """Assign, change or remove one attribute value of a product."""
    if remove == (value is not None):
        raise click.UsageError("Give exactly one of --value or --remove")

    uow = unit_of_work()

    try:
        attribute_id = next(iter(resolve_attribute_keys(uow, {attribute_key: None})))
        dto = SetProductAttributeHandler(uow).handle(
            product_id, attribute_id, None if remove else parse_value(value)
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {dto.id} attributes: {dto.attributes}")


@click.command("clear-attributes")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_clear_attributes(product_id: str) -> None:
    """Remove every attribute value from a product."""
    handler = ClearProductAttributesHandler(unit_of_work())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {dto.id} attributes cleared.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product and its variants."""
    handler = DeleteProductHandler(unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Product {product_id} deleted.")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID or slug.")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON.")
def product_show(product_id: str, as_json: bool) -> None:
    """Show a product with its variants."""
    handler = GetProductDetailHandler(unit_of_work())

    try:
        detail = handler.handle(product_id)
    except DomainException as exc:
        raise domain_error(exc)

    if as_json:
        echo_json(detail)
        return
    _display_product(detail)


@click.command("list")
@datatable_options
def product_list(
    draw: int, search: str, start: int, length: int, order: tuple[str, ...], as_json: bool
) -> None:
    """List products page by page."""
    handler = ProductDataTableHandler(unit_of_work())
    request = DataTableRequest(
        draw=draw, start=start, length=length, search=search, order=parse_order(order)
    )

    try:
        result = handler.handle(request)
    except DomainException as exc:
        raise domain_error(exc)

    if as_json:
        echo_json(result.to_dict())
        return

    if not result.data:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'SKU':<14} {'Price':>12}")
    click.echo("-" * 83)
    for p in result.data:
        click.echo(f"{p.id:<34} {p.name:<20} {p.sku or '-':<14} {p.base_price:>12}")
    click.echo(f"Showing {len(result.data)} of {result.records_filtered} "
               f"(total {result.records_total})")
