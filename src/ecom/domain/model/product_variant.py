"""ProductVariant aggregate.

A variant is one purchasable configuration of a product (e.g. "Red / XL").
It owns its SKU, price snapshot, stock and the values of the product's
variant-flagged attributes.  Combination uniqueness across siblings is a
cross-aggregate rule enforced by ``VariantCompositionService``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ecom.domain.exceptions import (
    InsufficientStockError,
    NegativeStockError,
    NotVariantAttributeError,
    ValidationError,
)
from ecom.domain.model.aggregate import AggregateRoot
from ecom.domain.model.attribute import Attribute, canonical_value
from ecom.domain.model.value_objects import Money

CombinationKey = tuple[tuple[str, str], ...]


def combination_key_of(values: Mapping[str, Any]) -> CombinationKey:
    """Sorted ``(attribute_id, canonical value)`` pairs for a value mapping."""
    return tuple(sorted((attr_id, canonical_value(v)) for attr_id, v in values.items()))


@dataclass
class ProductVariant(AggregateRoot):

    id: str
    product_id: str
    sku: str | None = None
    price: Money | None = None
    stock_quantity: int = 0
    is_active: bool = True
    attribute_values: dict[str, dict[str, Any]] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    version: int = 0

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        product_id: str,
        sku: str | None = None,
        price: Money | None = None,
        stock_quantity: int = 0,
    ) -> ProductVariant:
        if not product_id:
            raise ValidationError("Variant must belong to a product", code="ProductVariant.ProductRequired")
        _check_stock(stock_quantity)
        return ProductVariant(
            id=id,
            product_id=product_id,
            sku=_normalize_sku(sku),
            price=_check_price(price),
            stock_quantity=stock_quantity,
        )

    @staticmethod
    def create_inactive(
        id: str,
        product_id: str,
        sku: str | None = None,
        price: Money | None = None,
        stock_quantity: int = 0,
    ) -> ProductVariant:
        variant = ProductVariant.create(id, product_id, sku, price, stock_quantity)
        variant.is_active = False
        return variant

    @staticmethod
    def create_out_of_stock(
        id: str,
        product_id: str,
        sku: str | None = None,
        price: Money | None = None,
    ) -> ProductVariant:
        return ProductVariant.create(id, product_id, sku, price, stock_quantity=0)

    # --- Mutations ------------------------------------------------------------

    def update(self, sku: str | None, price: Money | None) -> None:
        self.sku = _normalize_sku(sku)
        self.price = _check_price(price)

    def set_stock_quantity(self, quantity: int) -> None:
        _check_stock(quantity)
        self.stock_quantity = quantity

    def add_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity to add must be positive", code="ProductVariant.InvalidQuantity")
        self.stock_quantity += quantity

    def remove_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity to remove must be positive", code="ProductVariant.InvalidQuantity")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(quantity, self.stock_quantity)
        self.stock_quantity -= quantity

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def set_active(self, is_active: bool) -> None:
        if is_active:
            self.activate()
        else:
            self.deactivate()

    def set_attribute_value(self, attribute: Attribute, value: Any) -> None:
        """Assign a single variant-attribute value (no sibling check)."""
        if not attribute.is_variant:
            raise NotVariantAttributeError(attribute.name)
        self.attribute_values[attribute.id] = {"value": attribute.validate_value(value)}

    def remove_attribute_value(self, attribute_id: str) -> None:
        self.attribute_values.pop(attribute_id, None)

    def update_metadata(self, key: str, value: Any) -> None:
        if not key or not key.strip():
            raise ValidationError("Metadata key is required", code="ProductVariant.MetadataKeyRequired")
        self.metadata[key.strip()] = value

    # --- Queries --------------------------------------------------------------

    def values(self) -> dict[str, Any]:
        return {attr_id: env.get("value") for attr_id, env in self.attribute_values.items()}

    @property
    def combination_key(self) -> CombinationKey:
        return combination_key_of(self.values())

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    def effective_price(self, base_price: Money) -> Money:
        """The variant's own price, or the product's current base price."""
        return self.price if self.price is not None else base_price


def _check_stock(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError("Stock quantity must be an integer", code="ProductVariant.InvalidQuantity")
    if quantity < 0:
        raise NegativeStockError()


def _check_price(price: Money | None) -> Money | None:
    if price is not None and price.amount < 0:
        raise ValidationError("Variant price cannot be negative", code="ProductVariant.NegativePrice")
    return price


def _normalize_sku(sku: str | None) -> str | None:
    if sku is None or not sku.strip():
        return None
    return sku.strip()
