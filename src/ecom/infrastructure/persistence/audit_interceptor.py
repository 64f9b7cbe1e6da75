"""Builds AuditLog records for the changes about to be committed."""

from __future__ import annotations

import logging
import uuid

from ecom.domain.model.audit_log import AuditAction, AuditLog
from ecom.infrastructure.persistence.json_repository import ChangeAction, PendingChange

logger = logging.getLogger(__name__)

_ACTIONS = {
    ChangeAction.ADD: AuditAction.CREATE,
    ChangeAction.UPDATE: AuditAction.UPDATE,
    ChangeAction.DELETE: AuditAction.DELETE,
}


class AuditInterceptor:
    """Turns pending changes into audit records.

    CREATE keeps the full new snapshot, DELETE the full old one, and
    UPDATE only the fields whose values differ.  An update that changed
    nothing produces no record.
    """

    def build(self, changes: list[PendingChange]) -> list[AuditLog]:
        logs: list[AuditLog] = []
        for change in changes:
            # Auditing an audit record would recurse forever.
            if isinstance(change.aggregate, AuditLog):
                continue
            log = self._build_one(change)
            if log is not None:
                logs.append(log)
        logger.debug("Built %d audit record(s) for %d change(s)", len(logs), len(changes))
        return logs

    def _build_one(self, change: PendingChange) -> AuditLog | None:
        before = change.before or {}
        if change.action is ChangeAction.DELETE:
            old_values, new_values = before, {}
            changed = sorted(before)
        elif change.action is ChangeAction.ADD:
            after = change.aggregate.snapshot()
            old_values, new_values = {}, after
            changed = sorted(after)
        else:
            after = change.aggregate.snapshot()
            changed = sorted(k for k in after if before.get(k) != after[k])
            if not changed:
                return None
            old_values = {k: before.get(k) for k in changed}
            new_values = {k: after[k] for k in changed}

        return AuditLog(
            id=uuid.uuid4().hex,
            entity_type=change.aggregate.entity_name,
            entity_id=change.aggregate.id,
            action=_ACTIONS[change.action],
            old_values=old_values,
            new_values=new_values,
            changed_fields=changed,
        )
