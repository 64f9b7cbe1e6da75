"""Application service: list the children of a Category."""

from __future__ import annotations

from ecom.application.dto import CategoryDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.exceptions import EntityNotFoundError
from ecom.domain.repository.unit_of_work import UnitOfWork


class ListChildCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.ListChildrenFailed")
    def handle(self, parent_id: str | None = None) -> list[CategoryDTO]:
        """Direct children sorted by name; root categories when no parent."""
        with self._uow:
            if parent_id is not None and self._uow.categories.get_by_id(parent_id) is None:
                raise EntityNotFoundError("Category", parent_id)
            children = self._uow.categories.list_children(parent_id)
            return [category_to_dto(c) for c in children]
