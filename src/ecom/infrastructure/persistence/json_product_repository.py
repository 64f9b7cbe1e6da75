"""JSON-document implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from ecom.domain.model.aggregate import to_json_value
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Money, Slug
from ecom.domain.repository.product_repository import ProductRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonProductRepository(JsonRepository[Product], ProductRepository):

    collection = "products"

    # --- ProductRepository interface ------------------------------------------

    def get_by_slug(self, slug: str) -> Product | None:
        for product in self._all():
            if product.slug.value == slug:
                return product
        return None

    def list_all(self) -> list[Product]:
        return sorted(self._all(), key=lambda p: p.name.lower())

    def list_by_category(self, category_id: str) -> list[Product]:
        return [p for p in self.list_all() if category_id in p.category_ids]

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        return any(
            p.slug.value == slug and p.id != exclude_id for p in self._all()
        )

    def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        return any(p.sku == sku and p.id != exclude_id for p in self._all())

    def is_attribute_in_use(self, attribute_id: str) -> bool:
        return any(attribute_id in p.attributes for p in self._all())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "slug": product.slug.value,
            "sku": product.sku,
            "base_price": str(product.base_price.amount),
            "currency": product.base_price.currency,
            "description": product.description,
            "is_active": product.is_active,
            "category_ids": list(product.category_ids),
            "attributes": to_json_value(product.attributes),
            "metadata": to_json_value(product.metadata),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            slug=Slug(raw["slug"]),
            base_price=Money(Decimal(raw["base_price"]), raw.get("currency", "USD")),
            description=raw.get("description", ""),
            sku=raw.get("sku"),
            is_active=raw.get("is_active", True),
            category_ids=list(raw.get("category_ids", [])),
            attributes=dict(raw.get("attributes", {})),
            metadata=dict(raw.get("metadata", {})),
        )
