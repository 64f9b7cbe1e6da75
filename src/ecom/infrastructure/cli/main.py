import click

from ecom.infrastructure.cli.attribute_commands import (
    attribute_create,
    attribute_delete,
    attribute_list,
    attribute_update,
)
from ecom.infrastructure.cli.audit_commands import audit_show
from ecom.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from ecom.infrastructure.cli.category_commands import (
    category_children,
    category_create,
    category_delete,
    category_list,
    category_move,
    category_show,
    category_status,
    category_tree,
    category_update,
)
from ecom.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_show,
    order_status,
)
from ecom.infrastructure.cli.product_commands import (
    product_clear_attributes,
    product_create,
    product_delete,
    product_list,
    product_set_attribute,
    product_show,
    product_status,
    product_update,
)
from ecom.infrastructure.cli.variant_commands import (
    variant_add,
    variant_delete,
    variant_status,
    variant_stock,
    variant_update,
)
from ecom.infrastructure.config import configure_logging, load_settings


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Overrides ECOM_LOG_LEVEL.",
)
def cli(log_level: str | None) -> None:
    """ecom: catalog and order administration"""
    configure_logging(log_level or load_settings().log_level)


@cli.group()
def category() -> None:
    """Manage the category tree."""


@cli.group()
def attribute() -> None:
    """Manage product attributes."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def variant() -> None:
    """Manage product variants."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def audit() -> None:
    """Inspect the audit trail."""


# Register subcommands
category.add_command(category_children)
category.add_command(category_create)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_move)
category.add_command(category_show)
category.add_command(category_status)
category.add_command(category_tree)
category.add_command(category_update)
attribute.add_command(attribute_create)
attribute.add_command(attribute_delete)
attribute.add_command(attribute_list)
attribute.add_command(attribute_update)
product.add_command(product_clear_attributes)
product.add_command(product_create)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_set_attribute)
product.add_command(product_show)
product.add_command(product_status)
product.add_command(product_update)
variant.add_command(variant_add)
variant.add_command(variant_delete)
variant.add_command(variant_status)
variant.add_command(variant_stock)
variant.add_command(variant_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_status)
audit.add_command(audit_show)
