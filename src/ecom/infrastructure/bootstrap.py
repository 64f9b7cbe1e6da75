"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ecom.infrastructure.config import Settings, load_settings
from ecom.infrastructure.persistence.document_store import JsonFileStore
from ecom.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work(settings: Settings | None = None) -> JsonUnitOfWork:
    """A fresh unit of work over the JSON files in the data directory."""
    settings = settings or load_settings()
    return JsonUnitOfWork(JsonFileStore(settings.data_dir))
