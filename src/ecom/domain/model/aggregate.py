"""Behaviour shared by every versioned aggregate root.

Each aggregate dataclass declares its own ``id`` and ``version`` fields;
``version`` is the value captured when the aggregate was loaded (0 for an
aggregate that was never persisted) and is only advanced by the unit of
work after a successful commit.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from ecom.domain.model.value_objects import Money, Slug

# Fields that describe persistence bookkeeping rather than aggregate state.
_UNAUDITED_FIELDS = frozenset({"version"})


class AggregateRoot:

    id: str
    version: int

    @property
    def entity_name(self) -> str:
        return type(self).__name__

    def snapshot(self) -> dict[str, object]:
        """Return the aggregate's state as a flat, JSON-safe mapping.

        Used by the audit interceptor to diff old and new values.
        """
        return {
            f.name: to_json_value(getattr(self, f.name))
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
            if f.name not in _UNAUDITED_FIELDS
        }


def to_json_value(value: object) -> object:
    """Convert domain values (Money, Slug, enums, ...) into JSON-safe data."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Money):
        return {"amount": str(value.amount), "currency": value.currency}
    if isinstance(value, Slug):
        return value.value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_json_value(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(v) for v in value]
    return str(value)
