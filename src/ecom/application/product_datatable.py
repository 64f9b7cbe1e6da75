"""Application service: paged product listing for the admin table."""

from __future__ import annotations

from ecom.application.datatable import apply_datatable
from ecom.application.dto import DataTableRequest, DataTableResult
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import product_to_dto
from ecom.domain.repository.unit_of_work import UnitOfWork

COLUMNS = ("name", "slug", "sku", "base_price", "is_active")
SEARCH_FIELDS = ("name", "slug", "sku", "description")


class ProductDataTableHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("Product.DataTableFailed")
    def handle(self, request: DataTableRequest) -> DataTableResult:
        with self._uow:
            products = self._uow.products.list_all()
        prices = {p.id: p.base_price.amount for p in products}
        rows = [product_to_dto(p) for p in products]
        return apply_datatable(
            request,
            rows,
            COLUMNS,
            SEARCH_FIELDS,
            sort_keys={"base_price": lambda row: prices[row.id]},
        )
