"""Abstract repository for the ProductVariant aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.product_variant import ProductVariant


class ProductVariantRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique variant ID."""

    @abstractmethod
    def get_by_id(self, variant_id: str) -> ProductVariant | None:
        """Return a variant by its ID, or None if not found."""

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[ProductVariant]:
        """Return every variant of *product_id*."""

    @abstractmethod
    def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        """True if a variant other than *exclude_id* holds *sku*."""

    @abstractmethod
    def is_attribute_in_use(self, attribute_id: str) -> bool:
        """True if any variant has a value for *attribute_id*."""

    @abstractmethod
    def add(self, variant: ProductVariant) -> None:
        """Register a new variant with the unit of work."""

    @abstractmethod
    def update(self, variant: ProductVariant) -> None:
        """Register a changed variant with the unit of work."""

    @abstractmethod
    def delete(self, variant: ProductVariant) -> None:
        """Register a variant for deletion with the unit of work."""
