"""Abstract repository for the Product aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return the product holding *slug*, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product."""

    @abstractmethod
    def list_by_category(self, category_id: str) -> list[Product]:
        """Return the products assigned to *category_id*."""

    @abstractmethod
    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """True if a product other than *exclude_id* holds *slug*."""

    @abstractmethod
    def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        """True if a product other than *exclude_id* holds *sku*."""

    @abstractmethod
    def is_attribute_in_use(self, attribute_id: str) -> bool:
        """True if any product has a value for *attribute_id*."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Register a new product with the unit of work."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Register a changed product with the unit of work."""

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Register a product for deletion with the unit of work."""
