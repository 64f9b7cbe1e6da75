"""Application service: show one Category."""

from __future__ import annotations

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork


class GetCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.GetFailed")
    def handle(self, category_id: str) -> CategoryDTO:
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                category = self._uow.categories.get_by_slug(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)
            return category_to_dto(category)
