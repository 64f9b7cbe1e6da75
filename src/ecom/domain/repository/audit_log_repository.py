"""Abstract repository for AuditLog records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.audit_log import AuditLog


class AuditLogRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[AuditLog]:
        """Return every stored audit record, oldest first."""

    @abstractmethod
    def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        """Return the audit trail of one aggregate, oldest first."""

    @abstractmethod
    def add(self, audit_log: AuditLog) -> None:
        """Register an audit record with the unit of work."""
