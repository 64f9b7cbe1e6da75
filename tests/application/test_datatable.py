"""Tests for the paged DataTable queries."""

from dataclasses import dataclass

import pytest

from ecom.application.attribute_datatable import AttributeDataTableHandler
from ecom.application.category_datatable import CategoryDataTableHandler
from ecom.application.datatable import apply_datatable
from ecom.application.dto import DataTableOrder, DataTableRequest
from ecom.application.product_datatable import ProductDataTableHandler
from ecom.domain.exceptions import ValidationError
from tests.fakes import make_uow, seed_attribute, seed_category, seed_product


@dataclass(frozen=True)
class Row:
    name: str
    rank: int | None


ROWS = [Row("beta", 2), Row("Alpha", 1), Row("gamma", None), Row("alphabet", 3)]


class TestApplyDataTable:

    def test_paging_and_counts(self):
        result = apply_datatable(
            DataTableRequest(draw=7, start=1, length=2), ROWS, ("name", "rank"), ("name",)
        )
        assert result.draw == 7
        assert result.records_total == 4
        assert result.records_filtered == 4
        assert [r.name for r in result.data] == ["Alpha", "gamma"]

    def test_search_is_case_insensitive_substring(self):
        result = apply_datatable(
            DataTableRequest(search="ALPHA"), ROWS, ("name", "rank"), ("name",)
        )
        assert result.records_filtered == 2
        assert result.records_total == 4

    def test_sort_by_column_index_and_name(self):
        by_index = apply_datatable(
            DataTableRequest(order=(DataTableOrder(0),)), ROWS, ("name", "rank"), ("name",)
        )
        assert [r.name for r in by_index.data] == ["Alpha", "alphabet", "beta", "gamma"]

        by_name = apply_datatable(
            DataTableRequest(order=(DataTableOrder("rank", "desc"),)),
            ROWS,
            ("name", "rank"),
            ("name",),
        )
        assert [r.rank for r in by_name.data] == [None, 3, 2, 1]

    def test_none_sorts_last_ascending(self):
        result = apply_datatable(
            DataTableRequest(order=(DataTableOrder("rank"),)), ROWS, ("name", "rank"), ()
        )
        assert [r.rank for r in result.data] == [1, 2, 3, None]

    def test_length_minus_one_returns_all(self):
        result = apply_datatable(
            DataTableRequest(start=1, length=-1), ROWS, ("name",), ("name",)
        )
        assert len(result.data) == 3

    @pytest.mark.parametrize(
        "request_, code",
        [
            (DataTableRequest(start=-1), "DataTable.InvalidStart"),
            (DataTableRequest(length=0), "DataTable.InvalidLength"),
            (DataTableRequest(length=-2), "DataTable.InvalidLength"),
            (DataTableRequest(order=(DataTableOrder(5),)), "DataTable.InvalidColumn"),
            (DataTableRequest(order=(DataTableOrder("secret"),)), "DataTable.InvalidColumn"),
        ],
    )
    def test_invalid_requests(self, request_, code):
        with pytest.raises(ValidationError) as exc_info:
            apply_datatable(request_, ROWS, ("name", "rank"), ("name",))
        assert exc_info.value.code == code

    def test_to_dict_wire_names(self):
        result = apply_datatable(DataTableRequest(length=1), ROWS, ("name",), ("name",))
        assert result.to_dict() == {
            "draw": 1,
            "recordsTotal": 4,
            "recordsFiltered": 4,
            "data": [{"name": "beta", "rank": 2}],
        }


class TestDataTableHandlers:

    def test_categories(self):
        uow = make_uow()
        parent = seed_category(uow, "Electronics")
        seed_category(uow, "Phones", parent_id=parent)
        seed_category(uow, "Books")
        result = CategoryDataTableHandler(uow).handle(
            DataTableRequest(order=(DataTableOrder("path"),))
        )
        assert [c.path for c in result.data] == ["/books", "/electronics", "/electronics/phones"]

    def test_products_sort_by_numeric_price(self):
        uow = make_uow()
        seed_product(uow, "Cheap", "9.00")
        seed_product(uow, "Pricey", "100.00")
        seed_product(uow, "Middle", "20.00")
        result = ProductDataTableHandler(uow).handle(
            DataTableRequest(order=(DataTableOrder("base_price", "desc"),))
        )
        assert [p.name for p in result.data] == ["Pricey", "Middle", "Cheap"]

    def test_products_search(self):
        uow = make_uow()
        seed_product(uow, "Red Shirt", "1", sku="RS-1")
        seed_product(uow, "Hoodie", "1")
        result = ProductDataTableHandler(uow).handle(DataTableRequest(search="rs-"))
        assert [p.name for p in result.data] == ["Red Shirt"]

    def test_attributes(self):
        uow = make_uow()
        seed_attribute(uow, "size", "Select")
        seed_attribute(uow, "color", "Color")
        result = AttributeDataTableHandler(uow).handle(DataTableRequest(search="select"))
        assert [a.name for a in result.data] == ["size"]
