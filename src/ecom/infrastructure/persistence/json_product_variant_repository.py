"""JSON-document implementation of ProductVariantRepository."""

from __future__ import annotations

from decimal import Decimal

from ecom.domain.model.aggregate import to_json_value
from ecom.domain.model.product_variant import ProductVariant
from ecom.domain.model.value_objects import Money
from ecom.domain.repository.product_variant_repository import (
    ProductVariantRepository,
)
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonProductVariantRepository(
    JsonRepository[ProductVariant], ProductVariantRepository
):

    collection = "variants"

    # --- ProductVariantRepository interface -----------------------------------

    def list_by_product(self, product_id: str) -> list[ProductVariant]:
        return [v for v in self._all() if v.product_id == product_id]

    def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        return any(v.sku == sku and v.id != exclude_id for v in self._all())

    def is_attribute_in_use(self, attribute_id: str) -> bool:
        return any(attribute_id in v.attribute_values for v in self._all())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(variant: ProductVariant) -> dict:
        return {
            "id": variant.id,
            "product_id": variant.product_id,
            "sku": variant.sku,
            "price": None if variant.price is None else str(variant.price.amount),
            "currency": None if variant.price is None else variant.price.currency,
            "stock_quantity": variant.stock_quantity,
            "is_active": variant.is_active,
            "attribute_values": to_json_value(variant.attribute_values),
            "metadata": to_json_value(variant.metadata),
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductVariant:
        price = None
        if raw.get("price") is not None:
            price = Money(Decimal(raw["price"]), raw.get("currency") or "USD")
        return ProductVariant(
            id=raw["id"],
            product_id=raw["product_id"],
            sku=raw.get("sku"),
            price=price,
            stock_quantity=raw.get("stock_quantity", 0),
            is_active=raw.get("is_active", True),
            attribute_values=dict(raw.get("attribute_values", {})),
            metadata=dict(raw.get("metadata", {})),
        )
