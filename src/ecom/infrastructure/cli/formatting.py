"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any

import click

from ecom.application.dto import DataTableOrder
from ecom.domain.exceptions import DomainException


def domain_error(exc: DomainException) -> click.ClickException:
    """Map a domain error to the ``[code] message`` line shown to users."""
    return click.ClickException(f"[{exc.code}] {exc.message}")


def parse_value(raw: str) -> Any:
    """JSON when it parses (numbers, booleans, objects), the raw text otherwise."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_pairs(pairs: tuple[str, ...], option: str) -> dict[str, Any]:
    """Parse repeated ``KEY=VALUE`` options into a dict."""
    result: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid format '{pair}'. Expected 'KEY=VALUE'.", param_hint=option
            )
        key, raw = pair.split("=", 1)
        result[key.strip()] = parse_value(raw.strip())
    return result


def parse_order(options: tuple[str, ...]) -> tuple[DataTableOrder, ...]:
    """Parse repeated ``COLUMN[:asc|desc]`` options."""
    orders = []
    for entry in options:
        column, _, direction = entry.partition(":")
        direction = (direction or "asc").lower()
        if direction not in ("asc", "desc"):
            raise click.BadParameter(
                f"Invalid direction '{direction}'. Expected 'asc' or 'desc'.",
                param_hint="--order",
            )
        key: int | str = int(column) if column.isdigit() else column
        orders.append(DataTableOrder(column=key, direction=direction))
    return tuple(orders)


def echo_json(payload: Any) -> None:
    if is_dataclass(payload) and not isinstance(payload, type):
        payload = asdict(payload)
    click.echo(json.dumps(payload, indent=2, default=str))


def datatable_options(func):
    """Common ``--search/--start/--length/--order/--draw/--json`` options."""
    func = click.option("--json", "as_json", is_flag=True, help="Print the raw DataTable response.")(func)
    func = click.option("--order", "order", multiple=True, help="Sort as 'column[:asc|desc]' (repeatable).")(func)
    func = click.option("--length", default=10, show_default=True, help="Page size (-1 for all).")(func)
    func = click.option("--start", default=0, show_default=True, help="Offset of the first row.")(func)
    func = click.option("--search", default="", help="Free-text filter.")(func)
    func = click.option("--draw", default=1, hidden=True)(func)
    return func
