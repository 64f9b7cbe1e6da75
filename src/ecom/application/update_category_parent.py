"""Application service: move a Category in the tree."""

from __future__ import annotations

import logging

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.category_hierarchy_service import CategoryHierarchyService

logger = logging.getLogger(__name__)


class UpdateCategoryParentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.UpdateParentFailed")
    def handle(self, category_id: str, parent_id: str | None) -> CategoryDTO:
        """Reparent a category; ``parent_id=None`` makes it a root.

        Every descendant's level and path is rewritten in the same commit.
        """
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)

            hierarchy = CategoryHierarchyService(self._uow.categories, self._uow.products)
            moved = hierarchy.reparent(category, parent_id)
            self._uow.commit()

        logger.info(
            "Category %s moved under %s (%d descendant(s) updated)",
            category.id,
            parent_id or "root",
            len(moved),
        )
        return category_to_dto(category)
