"""Application service: Update (rename) Category use case."""

from __future__ import annotations

import logging

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.category_hierarchy_service import CategoryHierarchyService

logger = logging.getLogger(__name__)


class UpdateCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.UpdateFailed")
    def handle(
        self,
        category_id: str,
        name: str,
        slug: str,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> CategoryDTO:
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)

            hierarchy = CategoryHierarchyService(self._uow.categories, self._uow.products)
            moved = hierarchy.rename(category, name, slug, description)
            if is_active is not None:
                category.set_active(is_active)

            self._uow.commit()

        logger.info(
            "Category %s updated (%d descendant path(s) rewritten)", category.id, len(moved)
        )
        return category_to_dto(category)
