"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any


# --- Catalog ------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryDTO:
    id: str
    name: str
    slug: str
    description: str
    parent_id: str | None
    level: int
    path: str
    is_active: bool
    version: int


@dataclass(frozen=True)
class CategoryTreeNode:
    """One node of the category selector tree; children sorted by name."""

    id: str
    name: str
    slug: str
    level: int
    path: str
    is_active: bool
    children: list[CategoryTreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class AttributeDTO:
    id: str
    name: str
    display_name: str
    type: str
    filterable: bool
    searchable: bool
    is_variant: bool
    configuration: dict[str, Any]
    version: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    slug: str
    sku: str | None
    base_price: str  # formatted, e.g. "15.00 USD"
    description: str
    is_active: bool
    category_ids: list[str]
    attributes: dict[str, Any]  # attribute_id -> value
    metadata: dict[str, Any]
    version: int


@dataclass(frozen=True)
class ProductVariantDTO:
    id: str
    product_id: str
    sku: str | None
    price: str  # own price, or the product's base price when not set
    has_price_override: bool
    stock_quantity: int
    is_active: bool
    attribute_values: dict[str, Any]  # attribute_id -> value
    metadata: dict[str, Any]
    version: int


@dataclass(frozen=True)
class ProductDetailDTO:
    """Output: a product together with its variants and category names."""

    product: ProductDTO
    category_names: list[str]
    variants: list[ProductVariantDTO]


# --- Cart / Order -------------------------------------------------------------


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    variant_id: str | None
    quantity: int


@dataclass(frozen=True)
class CartDTO:
    id: str
    user_id: str | None
    items: list[CartItemDTO]
    total_quantity: int
    version: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    sku: str | None
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    user_id: str | None
    status: str
    items: list[OrderLineItemDTO]
    total: str
    tracking_number: str | None
    created_at: str
    version: int


@dataclass(frozen=True)
class AuditLogDTO:
    id: str
    entity_type: str
    entity_id: str
    action: str
    changed_fields: list[str]
    old_values: dict[str, Any]
    new_values: dict[str, Any]
    created_at: str


# --- Paged admin queries ------------------------------------------------------


@dataclass(frozen=True)
class DataTableOrder:
    """One sort key: ``column`` is a column index or name, direction asc/desc."""

    column: int | str
    direction: str = "asc"


@dataclass(frozen=True)
class DataTableRequest:
    draw: int = 1
    start: int = 0
    length: int = 10  # -1 returns every filtered row
    search: str = ""
    order: tuple[DataTableOrder, ...] = ()


@dataclass(frozen=True)
class DataTableResult:
    draw: int
    records_total: int
    records_filtered: int
    data: list[Any]

    def to_dict(self) -> dict[str, Any]:
        """Wire shape with the exact field names admin tables bind to."""
        return {
            "draw": self.draw,
            "recordsTotal": self.records_total,
            "recordsFiltered": self.records_filtered,
            "data": [asdict(row) if is_dataclass(row) else row for row in self.data],
        }
