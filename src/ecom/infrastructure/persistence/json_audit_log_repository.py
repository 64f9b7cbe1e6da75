"""JSON-document implementation of AuditLogRepository."""

from __future__ import annotations

from datetime import datetime

from ecom.domain.model.audit_log import AuditAction, AuditLog
from ecom.domain.repository.audit_log_repository import AuditLogRepository
from ecom.infrastructure.persistence.json_repository import JsonRepository


class JsonAuditLogRepository(JsonRepository[AuditLog], AuditLogRepository):

    collection = "audit_logs"

    def list_all(self) -> list[AuditLog]:
        return sorted(self._all(), key=lambda log: log.created_at)

    def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        return [
            log
            for log in self.list_all()
            if log.entity_type == entity_type and log.entity_id == entity_id
        ]

    @staticmethod
    def _to_raw(audit_log: AuditLog) -> dict:
        return {
            "id": audit_log.id,
            "entity_type": audit_log.entity_type,
            "entity_id": audit_log.entity_id,
            "action": audit_log.action.value,
            "old_values": audit_log.old_values,
            "new_values": audit_log.new_values,
            "changed_fields": list(audit_log.changed_fields),
            "created_at": audit_log.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> AuditLog:
        return AuditLog(
            id=raw["id"],
            entity_type=raw["entity_type"],
            entity_id=raw["entity_id"],
            action=AuditAction(raw["action"]),
            old_values=raw.get("old_values", {}),
            new_values=raw.get("new_values", {}),
            changed_fields=list(raw.get("changed_fields", [])),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
