"""Search, sort and page rows for the admin DataTable queries."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from ecom.application.dto import DataTableRequest, DataTableResult
from ecom.domain.exceptions import ValidationError


def apply_datatable(
    request: DataTableRequest,
    rows: Sequence[Any],
    columns: Sequence[str],
    search_fields: Sequence[str],
    sort_keys: Mapping[str, Callable[[Any], Any]] | None = None,
) -> DataTableResult:
    """Filter *rows* by ``request.search``, sort by ``request.order`` and page.

    ``columns`` maps a numeric column index to a row attribute name;
    ``sort_keys`` overrides how a column's value is read for sorting.
    ``recordsFiltered`` counts rows after search but before paging.
    """
    if request.start < 0:
        raise ValidationError("DataTable start cannot be negative", code="DataTable.InvalidStart")
    if request.length == 0 or request.length < -1:
        raise ValidationError("DataTable length must be positive or -1", code="DataTable.InvalidLength")

    filtered = list(rows)
    term = (request.search or "").strip().lower()
    if term:
        filtered = [row for row in filtered if _matches(row, search_fields, term)]

    # Apply the least significant sort first; list.sort is stable.
    for entry in reversed(request.order):
        name = _column_name(entry.column, columns)
        descending = entry.direction.lower() == "desc"
        filtered.sort(key=_sort_key(name, (sort_keys or {}).get(name)), reverse=descending)

    if request.length == -1:
        page = filtered[request.start:]
    else:
        page = filtered[request.start:request.start + request.length]

    return DataTableResult(
        draw=request.draw,
        records_total=len(rows),
        records_filtered=len(filtered),
        data=page,
    )


def _matches(row: Any, fields: Sequence[str], term: str) -> bool:
    for name in fields:
        value = getattr(row, name, None)
        if value is not None and term in str(value).lower():
            return True
    return False


def _column_name(column: int | str, columns: Sequence[str]) -> str:
    if isinstance(column, int):
        if not 0 <= column < len(columns):
            raise ValidationError(
                f"Unknown DataTable column index {column}", code="DataTable.InvalidColumn"
            )
        return columns[column]
    if column not in columns:
        raise ValidationError(
            f"Unknown DataTable column '{column}'", code="DataTable.InvalidColumn"
        )
    return column


def _sort_key(
    name: str, reader: Callable[[Any], Any] | None
) -> Callable[[Any], tuple]:
    def key(row: Any) -> tuple:
        value = reader(row) if reader else getattr(row, name, None)
        if isinstance(value, str):
            value = value.lower()
        # None sorts last in ascending order
        return (value is None, value if value is not None else 0)

    return key
