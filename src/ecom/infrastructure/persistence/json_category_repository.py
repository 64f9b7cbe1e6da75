"""JSON-document implementation of CategoryRepository."""

from __future__ import annotations

from ecom.domain.model.category import Category
from ecom.domain.model.value_objects import Slug
from ecom.domain.repository.category_repository import CategoryRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonCategoryRepository(JsonRepository[Category], CategoryRepository):

    collection = "categories"

    # --- CategoryRepository interface -----------------------------------------

    def get_by_slug(self, slug: str) -> Category | None:
        for category in self._all():
            if category.slug.value == slug:
                return category
        return None

    def list_all(self) -> list[Category]:
        return sorted(self._all(), key=lambda c: (c.path, c.name.lower()))

    def list_children(self, parent_id: str | None) -> list[Category]:
        children = [c for c in self._all() if c.parent_id == parent_id]
        return sorted(children, key=lambda c: c.name.lower())

    def list_descendants(self, category: Category) -> list[Category]:
        prefix = category.path + "/"
        descendants = [c for c in self._all() if c.path.startswith(prefix)]
        return sorted(descendants, key=lambda c: (c.level, c.path))

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        return any(
            c.slug.value == slug and c.id != exclude_id for c in self._all()
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "slug": category.slug.value,
            "description": category.description,
            "parent_id": category.parent_id,
            "level": category.level,
            "path": category.path,
            "is_active": category.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            slug=Slug(raw["slug"]),
            description=raw.get("description", ""),
            parent_id=raw.get("parent_id"),
            level=raw.get("level", 0),
            path=raw.get("path", ""),
            is_active=raw.get("is_active", True),
        )
