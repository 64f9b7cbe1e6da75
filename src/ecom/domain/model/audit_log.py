"""Audit log record.

An AuditLog is written by the unit of work for every committed change to
another aggregate.  It is never itself audited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ecom.domain.model.aggregate import AggregateRoot


class AuditAction(Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass
class AuditLog(AggregateRoot):

    id: str
    entity_type: str
    entity_id: str
    action: AuditAction
    old_values: dict[str, Any] = field(default_factory=dict)
    new_values: dict[str, Any] = field(default_factory=dict)
    changed_fields: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0
