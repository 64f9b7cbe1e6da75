"""Domain service: Category Hierarchy.

Moving or renaming a category changes the materialized path of every
category below it.  Those descendants are separate aggregates, so the
rewrite is coordinated here rather than inside ``Category``.

Descendants are collected *before* the node is changed, because the
lookup is a prefix match on the node's old path.
"""

from __future__ import annotations

from ecom.domain.exceptions import (
    CannotDeleteWithChildrenError,
    CannotDeleteWithProductsError,
    CircularReferenceError,
    DuplicateSlugError,
    EntityNotFoundError,
    ValidationError,
)
from ecom.domain.model.category import Category
from ecom.domain.repository.category_repository import CategoryRepository
from ecom.domain.repository.product_repository import ProductRepository


class CategoryHierarchyService:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def reparent(self, category: Category, new_parent_id: str | None) -> list[Category]:
        """Move *category* under *new_parent_id* (or to the root).

        Returns the descendants whose level/path were rewritten.
        """
        parent = None
        if new_parent_id is not None:
            if new_parent_id == category.id:
                raise CircularReferenceError("Category cannot be its own parent")
            parent = self._category_repo.get_by_id(new_parent_id)
            if parent is None:
                raise EntityNotFoundError("Category", new_parent_id)

        old_path, old_level = category.path, category.level
        descendants = self._category_repo.list_descendants(category)

        category.reparent(parent)
        self._category_repo.update(category)
        return self._cascade(category, old_path, old_level, descendants)

    def rename(
        self,
        category: Category,
        name: str,
        slug: str,
        description: str | None = None,
    ) -> list[Category]:
        """Rename *category*; descendants pick up the new path segment.

        The slug is only checked for uniqueness when it actually changes.
        """
        if not slug or not slug.strip():
            raise ValidationError("Category slug is required", code="Category.SlugRequired")
        slug = slug.strip()
        if slug != category.slug.value and self._category_repo.slug_exists(
            slug, exclude_id=category.id
        ):
            raise DuplicateSlugError("Category", slug)

        old_path, old_level = category.path, category.level
        descendants = self._category_repo.list_descendants(category)

        category.update(name, slug, description)
        self._category_repo.update(category)
        return self._cascade(category, old_path, old_level, descendants)

    def ensure_deletable(self, category: Category) -> None:
        """Raise if *category* still has children or products."""
        if self._category_repo.list_children(category.id):
            raise CannotDeleteWithChildrenError()
        if self._product_repo.list_by_category(category.id):
            raise CannotDeleteWithProductsError()

    # --- Internal helpers -----------------------------------------------------

    def _cascade(
        self,
        category: Category,
        old_path: str,
        old_level: int,
        descendants: list[Category],
    ) -> list[Category]:
        if category.path == old_path and category.level == old_level:
            return []
        level_shift = category.level - old_level
        for descendant in descendants:
            descendant.set_hierarchy(
                descendant.parent_id,
                descendant.level + level_shift,
                category.path + descendant.path[len(old_path):],
            )
            self._category_repo.update(descendant)
        return descendants

