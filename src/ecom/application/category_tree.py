"""Application service: the whole category tree for hierarchical selectors."""

from __future__ import annotations

from ecom.application.dto import CategoryTreeNode
from ecom.application.handler_boundary import handler_boundary
from ecom.domain.model.category import Category
from ecom.domain.repository.unit_of_work import UnitOfWork


class CategoryTreeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.TreeFailed")
    def handle(self, active_only: bool = False) -> list[CategoryTreeNode]:
        """Root nodes with nested children, sorted by name at every level.

        With ``active_only`` an inactive category is left out together
        with everything below it.
        """
        with self._uow:
            categories = self._uow.categories.list_all()

        by_parent: dict[str | None, list[Category]] = {}
        for category in categories:
            if active_only and not category.is_active:
                continue
            by_parent.setdefault(category.parent_id, []).append(category)
        return self._build(None, by_parent)

    def _build(
        self, parent_id: str | None, by_parent: dict[str | None, list[Category]]
    ) -> list[CategoryTreeNode]:
        children = sorted(by_parent.get(parent_id, []), key=lambda c: c.name.lower())
        return [
            CategoryTreeNode(
                id=c.id,
                name=c.name,
                slug=c.slug.value,
                level=c.level,
                path=c.path,
                is_active=c.is_active,
                children=self._build(c.id, by_parent),
            )
            for c in children
        ]
