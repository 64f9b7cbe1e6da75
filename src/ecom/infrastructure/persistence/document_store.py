"""Document stores: where each collection's JSON records live.

A collection is a list of plain dicts (one per aggregate).  The unit of
work reads and writes whole collections through this interface, so the
same repositories run against files or memory.  ``locked()`` brackets a
commit: the version check and the writes happen while it is held.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = ".commit.lock"


class DocumentStore(ABC):

    @abstractmethod
    def load(self, collection: str) -> list[dict]:
        """Return a fresh copy of every record in *collection*."""

    @abstractmethod
    def save(self, collection: str, records: list[dict]) -> None:
        """Replace the contents of *collection* with *records*."""

    @abstractmethod
    def locked(self) -> Iterator[None]:
        """Context manager held for the whole of one commit."""


class JsonFileStore(DocumentStore):
    """One ``<collection>.json`` file per collection under ``data_dir``.

    Commits from separate processes are serialized through a lock file
    created with ``O_EXCL`` in ``data_dir``.  A process that dies while
    holding it leaves the file behind; delete it by hand to recover.
    """

    def __init__(
        self,
        data_dir: Path,
        lock_timeout: float = 10.0,
        poll_interval: float = 0.05,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._lock_timeout = lock_timeout
        self._poll_interval = poll_interval

    @property
    def lock_path(self) -> Path:
        return self._data_dir / LOCK_FILE_NAME

    def load(self, collection: str) -> list[dict]:
        file_path = self._ensure_file(collection)
        return json.loads(file_path.read_text(encoding="utf-8"))

    def save(self, collection: str, records: list[dict]) -> None:
        file_path = self._ensure_file(collection)
        tmp_path = file_path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(file_path)
        logger.debug("Wrote %d record(s) to %s", len(records), file_path)

    @contextmanager
    def locked(self) -> Iterator[None]:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        deadline = time.monotonic() + self._lock_timeout
        while True:
            try:
                fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                break
            except FileExistsError:
                if time.monotonic() >= deadline:
                    raise TimeoutError(
                        f"Could not acquire {self.lock_path} within "
                        f"{self._lock_timeout} seconds"
                    ) from None
                time.sleep(self._poll_interval)
        try:
            try:
                os.write(fd, str(os.getpid()).encode("ascii"))
            finally:
                os.close(fd)
            yield
        finally:
            self.lock_path.unlink(missing_ok=True)

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self, collection: str) -> Path:
        file_path = self._data_dir / f"{collection}.json"
        if not file_path.exists():
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text("[]", encoding="utf-8")
        return file_path


class MemoryStore(DocumentStore):
    """Keeps collections in a dict; used by tests and throwaway sessions."""

    def __init__(self, collections: dict[str, list[dict]] | None = None) -> None:
        self._collections: dict[str, list[dict]] = copy.deepcopy(collections or {})
        self._lock = threading.Lock()

    def load(self, collection: str) -> list[dict]:
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: list[dict]) -> None:
        self._collections[collection] = copy.deepcopy(records)

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield
