"""Product aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.aggregate import AggregateRoot
from ecom.domain.model.attribute import Attribute
from ecom.domain.model.value_objects import Money, Slug


@dataclass
class Product(AggregateRoot):
    """Aggregate root for catalog products.

    Attribute assignments are stored as ``{attribute_id: {"value": v}}``.
    Variants are separate aggregates that reference the product by id.
    """

    id: str
    name: str
    slug: Slug
    base_price: Money
    description: str = ""
    sku: str | None = None
    is_active: bool = True
    category_ids: list[str] = field(default_factory=list)
    attributes: dict[str, dict[str, Any]] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    version: int = 0

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        name: str,
        slug: str | Slug | None,
        base_price: Money,
        description: str = "",
        sku: str | None = None,
    ) -> Product:
        name = _require_name(name)
        return Product(
            id=id,
            name=name,
            slug=_resolve_slug(name, slug),
            base_price=_require_price(base_price),
            description=(description or "").strip(),
            sku=_normalize_sku(sku),
        )

    @staticmethod
    def create_inactive(
        id: str,
        name: str,
        slug: str | Slug | None,
        base_price: Money,
        description: str = "",
        sku: str | None = None,
    ) -> Product:
        product = Product.create(id, name, slug, base_price, description, sku)
        product.is_active = False
        return product

    # --- Mutations ------------------------------------------------------------

    def update(
        self,
        name: str,
        slug: str | Slug,
        base_price: Money,
        description: str | None = None,
        sku: str | None = None,
    ) -> None:
        self.name = _require_name(name)
        if slug is None or not str(slug).strip():
            raise ValidationError("Product slug is required", code="Product.SlugRequired")
        self.slug = _resolve_slug(self.name, slug)
        self.base_price = _require_price(base_price)
        if description is not None:
            self.description = description.strip()
        self.sku = _normalize_sku(sku)

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def set_active(self, is_active: bool) -> None:
        if is_active:
            self.activate()
        else:
            self.deactivate()

    def add_category(self, category_id: str) -> None:
        if category_id not in self.category_ids:
            self.category_ids.append(category_id)

    def remove_category(self, category_id: str) -> None:
        if category_id in self.category_ids:
            self.category_ids.remove(category_id)

    def add_attribute(self, attribute: Attribute, value: Any) -> None:
        """Assign a value for *attribute*; already-assigned attributes are kept."""
        if attribute.id in self.attributes:
            return
        self.attributes[attribute.id] = {"value": attribute.validate_value(value)}

    def update_attribute_value(self, attribute: Attribute, value: Any) -> None:
        if attribute.id not in self.attributes:
            raise ValidationError(
                f"Attribute '{attribute.name}' is not assigned to this product",
                code="Product.AttributeNotAssigned",
            )
        self.attributes[attribute.id] = {"value": attribute.validate_value(value)}

    def remove_attribute(self, attribute_id: str) -> None:
        self.attributes.pop(attribute_id, None)

    def clear_attributes(self) -> None:
        self.attributes.clear()

    def update_metadata(self, key: str, value: Any) -> None:
        if not key or not key.strip():
            raise ValidationError("Metadata key is required", code="Product.MetadataKeyRequired")
        self.metadata[key.strip()] = value

    # --- Queries --------------------------------------------------------------

    def attribute_value(self, attribute_id: str) -> Any:
        envelope = self.attributes.get(attribute_id)
        return None if envelope is None else envelope.get("value")


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required", code="Product.NameRequired")
    return name.strip()


def _require_price(price: Money) -> Money:
    if not isinstance(price, Money):
        raise ValidationError("Product base price is required", code="Product.PriceRequired")
    if price.amount < 0:
        raise ValidationError("Product price cannot be negative", code="Product.NegativePrice")
    return price


def _resolve_slug(name: str, slug: str | Slug | None) -> Slug:
    if isinstance(slug, Slug):
        return slug
    if slug is None or not slug.strip():
        return Slug.from_name(name)
    return Slug(slug.strip())


def _normalize_sku(sku: str | None) -> str | None:
    if sku is None or not sku.strip():
        return None
    return sku.strip()
