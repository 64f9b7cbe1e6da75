"""Application service: audit trail of one aggregate."""

from __future__ import annotations

from ecom.application.dto import AuditLogDTO
from ecom.application.handler_boundary import handler_boundary
from ecom.application.mappers import audit_log_to_dto
from ecom.domain.repository.unit_of_work import UnitOfWork


class GetAuditTrailHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @handler_boundary("AuditLog.GetFailed")
    def handle(self, entity_type: str, entity_id: str) -> list[AuditLogDTO]:
        with self._uow:
            logs = self._uow.audit_logs.list_for_entity(entity_type, entity_id)
            return [audit_log_to_dto(log) for log in logs]
