"""Unit of work over a DocumentStore.

``commit()`` runs in two phases:

  Phase 1 loads every affected collection and compares each pending
  change's captured ``version`` with the stored one.  Any mismatch raises
  ``ConcurrencyConflictError`` before anything is written.
  Phase 2 builds the audit records, writes the new records with
  ``version + 1`` and advances the in-memory aggregates' versions.

Both phases run inside ``DocumentStore.locked()``, so two processes
sharing a data directory cannot both pass the version check for the
same record.
"""

from __future__ import annotations

import logging

from ecom.domain.exceptions import ConcurrencyConflictError
from ecom.domain.model.aggregate import AggregateRoot
from ecom.domain.model.audit_log import AuditLog
from ecom.domain.repository.unit_of_work import UnitOfWork
from ecom.infrastructure.persistence.audit_interceptor import AuditInterceptor
from ecom.infrastructure.persistence.document_store import DocumentStore
from ecom.infrastructure.persistence.json_attribute_repository import (
    JsonAttributeRepository,
)
from ecom.infrastructure.persistence.json_audit_log_repository import (
    JsonAuditLogRepository,
)
from ecom.infrastructure.persistence.json_cart_repository import JsonCartRepository
from ecom.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from ecom.infrastructure.persistence.json_order_repository import JsonOrderRepository
from ecom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from ecom.infrastructure.persistence.json_product_variant_repository import (
    JsonProductVariantRepository,
)
from ecom.infrastructure.persistence.json_repository import (
    ChangeAction,
    ChangeTracker,
    JsonRepository,
    PendingChange,
)

logger = logging.getLogger(__name__)


class JsonUnitOfWork(UnitOfWork, ChangeTracker):

    def __init__(
        self,
        store: DocumentStore,
        interceptor: AuditInterceptor | None = None,
    ) -> None:
        self._store = store
        self._interceptor = interceptor or AuditInterceptor()
        self._pending: dict[tuple[str, str], PendingChange] = {}

        self.categories = JsonCategoryRepository(store, self)
        self.attributes = JsonAttributeRepository(store, self)
        self.products = JsonProductRepository(store, self)
        self.variants = JsonProductVariantRepository(store, self)
        self.carts = JsonCartRepository(store, self)
        self.orders = JsonOrderRepository(store, self)
        self.audit_logs = JsonAuditLogRepository(store, self)

    # --- ChangeTracker interface ----------------------------------------------

    def register(
        self, repository: JsonRepository, action: ChangeAction, aggregate: AggregateRoot
    ) -> None:
        key = (repository.collection, aggregate.id)
        current = self._pending.get(key)
        if current is not None and current.action is ChangeAction.ADD:
            if action is ChangeAction.DELETE:
                # Never stored, so there is nothing to delete.
                del self._pending[key]
            return
        if current is not None and current.action is ChangeAction.DELETE:
            return
        self._pending[key] = PendingChange(repository, action, aggregate)

    def pending(self, collection: str) -> list[PendingChange]:
        return [c for c in self._pending.values() if c.collection == collection]

    # --- UnitOfWork interface -------------------------------------------------

    def commit(self) -> None:
        changes = list(self._pending.values())
        if not changes:
            return

        with self._store.locked():
            audit_logs = self._write(changes)

        for change in changes:
            if change.action is ChangeAction.DELETE:
                change.repository.detach(change.aggregate.id)
            else:
                change.aggregate.version += 1
                change.repository.attach(change.aggregate)
        for log in audit_logs:
            log.version = 1

        self._pending.clear()
        logger.info(
            "Committed %d change(s) with %d audit record(s)", len(changes), len(audit_logs)
        )

    def rollback(self) -> None:
        if self._pending:
            logger.debug("Rolling back %d pending change(s)", len(self._pending))
        self._pending.clear()
        for repository in self._repositories():
            repository.clear()

    # --- Internal helpers -----------------------------------------------------

    def _write(self, changes: list[PendingChange]) -> list[AuditLog]:
        """Check versions, then write records and audit logs; return the logs."""
        stored: dict[str, dict[str, dict]] = {}
        for change in changes:
            if change.collection not in stored:
                stored[change.collection] = {
                    raw["id"]: raw for raw in self._store.load(change.collection)
                }

        # Phase 1: version check, nothing written yet
        for change in changes:
            raw = stored[change.collection].get(change.aggregate.id)
            self._check_version(change, raw)
            if raw is not None:
                change.before = change.repository.from_record(raw).snapshot()

        # Phase 2: audit, write
        audit_logs = self._interceptor.build(changes)
        for change in changes:
            records = stored[change.collection]
            if change.action is ChangeAction.DELETE:
                records.pop(change.aggregate.id, None)
            else:
                raw = change.repository.to_record(change.aggregate)
                raw["version"] = change.aggregate.version + 1
                records[change.aggregate.id] = raw

        if audit_logs:
            collection = self.audit_logs.collection
            if collection not in stored:
                stored[collection] = {
                    raw["id"]: raw for raw in self._store.load(collection)
                }
            for log in audit_logs:
                raw = self.audit_logs.to_record(log)
                raw["version"] = 1
                stored[collection][log.id] = raw

        for collection, records in stored.items():
            self._store.save(collection, list(records.values()))
        return audit_logs

    def _check_version(self, change: PendingChange, raw: dict | None) -> None:
        aggregate = change.aggregate
        if change.action is ChangeAction.ADD:
            if raw is None:
                return
            actual: int | None = raw.get("version", 0)
        else:
            actual = None if raw is None else raw.get("version", 0)
            if actual == aggregate.version:
                return
        logger.warning(
            "Concurrency conflict on %s '%s' (expected version %s, stored %s)",
            aggregate.entity_name,
            aggregate.id,
            aggregate.version,
            actual,
        )
        raise ConcurrencyConflictError(
            aggregate.entity_name, aggregate.id, aggregate.version, actual
        )

    def _repositories(self) -> list[JsonRepository]:
        return [
            self.categories,
            self.attributes,
            self.products,
            self.variants,
            self.carts,
            self.orders,
            self.audit_logs,
        ]
