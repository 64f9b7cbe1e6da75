"""Application service: paged attribute listing for the admin table."""

from __future__ import annotations

from ecom.application.datatable import apply_datatable
from ecom.application.dto import DataTableRequest, DataTableResult
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import attribute_to_dto
from ecom.domain.repository.unit_of_work import UnitOfWork

COLUMNS = ("name", "display_name", "type", "filterable", "searchable", "is_variant")
SEARCH_FIELDS = ("name", "display_name", "type")


class AttributeDataTableHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Attribute.DataTableFailed")
    def handle(self, request: DataTableRequest) -> DataTableResult:
        with self._uow:
            rows = [attribute_to_dto(a) for a in self._uow.attributes.list_all()]
        return apply_datatable(request, rows, COLUMNS, SEARCH_FIELDS)
