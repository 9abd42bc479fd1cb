from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .interfaces import DocumentBackend
from .json_store import atomic_write_json, read_json
from .locks import GLOBAL_PATH_LOCKS
from .paths import ensure_document_file

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(DocumentBackend):
    """
    Stores a single JSON object on disk at a fixed path.

    - Creates the file with `{}` on first use.
    - Always returns a dict: a missing/empty file, or one whose root is not an object,
      loads as an empty dict.
    - Writes atomically.
    """

    def __init__(self, path: Path, *, indent: int = 2):
        self._path = path
        self._indent = indent

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            if ensure_document_file(self._path):
                logger.debug("created empty document file at %s", self._path)

    def load(self) -> dict[str, Any]:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            raw = read_json(self._path)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning(
                "ignoring %s: root is a %s, expected an object", self._path, type(raw).__name__
            )
            return {}
        logger.debug("loaded %d top-level keys from %s", len(raw), self._path)
        return raw

    def save(self, doc: dict[str, Any]) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            atomic_write_json(self._path, doc, indent=self._indent)
        logger.debug("saved %s", self._path)


