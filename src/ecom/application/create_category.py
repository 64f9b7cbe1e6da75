"""Application service: Create Category use case."""

from __future__ import annotations

import logging

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import DuplicateSlugError
from ecom.domain.model.category import Category
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.category_hierarchy_service import CategoryHierarchyService

logger = logging.getLogger(__name__)


class CreateCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.CreateFailed")
    def handle(
        self,
        name: str,
        slug: str | None = None,
        description: str = "",
        parent_id: str | None = None,
        is_active: bool = True,
    ) -> CategoryDTO:
        """Create a category, as a root or directly under *parent_id*.

        Steps:
        1. Build the category (slug derived from the name when omitted).
        2. Reject the slug if another category already holds it.
        3. Place it under the parent, which computes level and path.
        4. Commit and return a DTO.
        """
        with self._uow:
            factory = Category.create if is_active else Category.create_inactive
            category = factory(self._uow.categories.next_id(), name, slug, description)

            if self._uow.categories.slug_exists(category.slug.value):
                raise DuplicateSlugError("Category", category.slug.value)

            if parent_id is not None:
                hierarchy = CategoryHierarchyService(
                    self._uow.categories, self._uow.products
                )
                hierarchy.reparent(category, parent_id)

            self._uow.categories.add(category)
            self._uow.commit()

        logger.info("Category created with ID: %s", category.id)
        return category_to_dto(category)
