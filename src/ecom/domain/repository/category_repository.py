"""Abstract repository for the Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique category ID."""

    @abstractmethod
    def get_by_id(self, category_id: str) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Category | None:
        """Return the category holding *slug*, or None."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category."""

    @abstractmethod
    def list_children(self, parent_id: str | None) -> list[Category]:
        """Return the direct children of *parent_id* (roots when None)."""

    @abstractmethod
    def list_descendants(self, category: Category) -> list[Category]:
        """Return every category below *category*, at any depth."""

    @abstractmethod
    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """True if a category other than *exclude_id* holds *slug*."""

    @abstractmethod
    def add(self, category: Category) -> None:
        """Register a new category with the unit of work."""

    @abstractmethod
    def update(self, category: Category) -> None:
        """Register a changed category with the unit of work."""

    @abstractmethod
    def delete(self, category: Category) -> None:
        """Register a category for deletion with the unit of work."""
