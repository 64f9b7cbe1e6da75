"""Application service: Delete Category use case."""

from __future__ import annotations

import logging

from ecom.application.handler_boundary import handler_boundary
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.domain.service.category_hierarchy_service import CategoryHierarchyService

logger = logging.getLogger(__name__)


class DeleteCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.DeleteFailed")
    def handle(self, category_id: str) -> None:
        """Delete a leaf category that no product references."""
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)

            CategoryHierarchyService(
                self._uow.categories, self._uow.products
            ).ensure_deletable(category)

            self._uow.categories.delete(category)
            self._uow.commit()

        logger.info("Category deleted with ID: %s", category_id)
