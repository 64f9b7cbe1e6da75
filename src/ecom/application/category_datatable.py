"""Application service: paged category listing for the admin table."""

from __future__ import annotations

from ecom.application.datatable import apply_datatable
from ecom.application.dto import DataTableRequest, DataTableResult
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import category_to_dto
from ecom.domain.repository.unit_of_work import UnitOfWork

COLUMNS = ("name", "slug", "path", "level", "is_active")
SEARCH_FIELDS = ("name", "slug", "description")


class CategoryDataTableHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Category.DataTableFailed")
    def handle(self, request: DataTableRequest) -> DataTableResult:
        with self._uow:
            rows = [category_to_dto(c) for c in self._uow.categories.list_all()]
        return apply_datatable(request, rows, COLUMNS, SEARCH_FIELDS)
