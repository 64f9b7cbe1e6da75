"""Application service: activate or deactivate a Category."""

from __future__ import annotations

import logging

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateCategoryStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.UpdateStatusFailed")
    def handle(self, category_id: str, is_active: bool) -> CategoryDTO:
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)

            category.set_active(is_active)
            self._uow.categories.update(category)
            self._uow.commit()

        logger.info("Category %s is_active=%s", category.id, category.is_active)
        return category_to_dto(category)
