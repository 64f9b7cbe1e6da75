"""Shared plumbing for the JSON-document repositories.

Repositories never write.  ``add`` / ``update`` / ``delete`` register a
``PendingChange`` with the unit of work that created the repository, and
reads see the stored records overlaid with those pending changes.  Loaded
aggregates are kept in an identity map so that one unit of work always
hands out the same object for the same ID.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from ecom.domain.model.aggregate import AggregateRoot
from ecom.infrastructure.persistence.document_store import DocumentStore

T = TypeVar("T", bound=AggregateRoot)


class ChangeAction(Enum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass
class PendingChange:
    repository: JsonRepository
    action: ChangeAction
    aggregate: AggregateRoot
    # Snapshot of the stored record, filled in by the unit of work at commit.
    before: dict | None = field(default=None, compare=False)

    @property
    def collection(self) -> str:
        return self.repository.collection


class ChangeTracker(ABC):

    @abstractmethod
    def register(
        self, repository: JsonRepository, action: ChangeAction, aggregate: AggregateRoot
    ) -> None:
        """Record a change to be written at commit."""

    @abstractmethod
    def pending(self, collection: str) -> list[PendingChange]:
        """Return the uncommitted changes for *collection*."""


class JsonRepository(Generic[T]):

    collection: str = ""

    def __init__(self, store: DocumentStore, tracker: ChangeTracker) -> None:
        self._store = store
        self._tracker = tracker
        self._identity_map: dict[str, T] = {}

    # --- Common repository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, entity_id: str) -> T | None:
        for aggregate in self._all():
            if aggregate.id == entity_id:
                return aggregate
        return None

    def add(self, aggregate: T) -> None:
        self._tracker.register(self, ChangeAction.ADD, aggregate)

    def update(self, aggregate: T) -> None:
        self._tracker.register(self, ChangeAction.UPDATE, aggregate)

    def delete(self, aggregate: T) -> None:
        self._tracker.register(self, ChangeAction.DELETE, aggregate)

    # --- Used by the unit of work ---------------------------------------------

    def to_record(self, aggregate: T) -> dict:
        raw = self._to_raw(aggregate)
        raw["version"] = aggregate.version
        return raw

    def from_record(self, raw: dict) -> T:
        aggregate = self._to_domain(raw)
        aggregate.version = raw.get("version", 0)
        return aggregate

    def attach(self, aggregate: T) -> None:
        self._identity_map[aggregate.id] = aggregate

    def detach(self, entity_id: str) -> None:
        self._identity_map.pop(entity_id, None)

    def clear(self) -> None:
        self._identity_map.clear()

    # --- Serialization (per aggregate) ----------------------------------------

    @staticmethod
    def _to_raw(aggregate) -> dict:
        raise NotImplementedError

    @staticmethod
    def _to_domain(raw: dict):
        raise NotImplementedError

    # --- Internal helpers -----------------------------------------------------

    def _all(self) -> list[T]:
        """Stored aggregates with this unit of work's pending changes applied."""
        aggregates: dict[str, T] = {}
        for raw in self._store.load(self.collection):
            aggregates[raw["id"]] = self._track(raw)
        for change in self._tracker.pending(self.collection):
            if change.action is ChangeAction.DELETE:
                aggregates.pop(change.aggregate.id, None)
            else:
                aggregates[change.aggregate.id] = change.aggregate  # type: ignore[assignment]
        return list(aggregates.values())

    def _track(self, raw: dict) -> T:
        existing = self._identity_map.get(raw["id"])
        if existing is not None:
            return existing
        aggregate = self.from_record(raw)
        self._identity_map[aggregate.id] = aggregate
        return aggregate
