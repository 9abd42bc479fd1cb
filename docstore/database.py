from __future__ import annotations

import contextlib
import copy
import logging
import math
from pathlib import Path
from typing import Any, Iterator, TypedDict

from .disk_store import DiskJsonDocumentStore
from .dotpath import MISSING, resolve_for_read, resolve_for_write
from .errors import KeyNotFound, PersistenceFailure, TypeMismatch
from .json_store import dumps_document
from .locks import GLOBAL_PATH_LOCKS
from .paths import ensure_dir
from .settings import DatabaseOptions
from .snapshots import SnapshotScheduler, write_snapshot
from .values import JsonValue, ValueKind, ensure_json_value, is_number, kind_of, values_equal

logger = logging.getLogger(__name__)


class Entry(TypedDict):
    key: str
    data: JsonValue


class JsonDatabase:
    """
    A JSON document kept in memory and written back to a single file after every change.

    Reads and `set` accept dot-separated paths ("user.settings.theme"). The other
    mutation helpers and `delete` work on top-level keys only.

    If backups are enabled, a background thread writes a snapshot of the document to
    the backup directory every `options.backups.interval` milliseconds until `close()`.
    """

    def __init__(self, file_path: str | Path | None = None, options: DatabaseOptions | None = None):
        options = options or DatabaseOptions()
        if file_path is not None:
            options = options.model_copy(update={"file_path": Path(file_path)})
        self.options = options

        self._store = DiskJsonDocumentStore(Path(options.file_path), indent=options.indent)
        self._lock = GLOBAL_PATH_LOCKS.lock_for(self._store.path)
        self._scheduler: SnapshotScheduler | None = None

        self.data: dict[str, Any] = {}
        with self._lock:
            self._store.initialize()
            self.data = self._store.load()
        logger.debug("opened %s with %d top-level keys", self._store.path, len(self.data))

        if options.backups.enabled:
            backups_dir = Path(options.backups.path)
            try:
                ensure_dir(backups_dir)
            except OSError as exc:
                raise PersistenceFailure(f"could not create backup directory {backups_dir}: {exc}") from exc
            self._scheduler = SnapshotScheduler(self.make_snapshot, options.backups.interval)
            self._scheduler.start()

    @property
    def file_path(self) -> Path:
        return self._store.path

    def __repr__(self) -> str:
        return f"<JsonDatabase@{self.file_path}>"

    def __enter__(self) -> "JsonDatabase":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop the snapshot thread, if any. The document stays usable."""
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None

    # ---------------------
    # Persistence
    # ---------------------
    def save(self) -> None:
        with self._lock:
            self._store.save(self.data)

    def reload(self) -> None:
        """Replace the in-memory document with the backing file's content."""
        with self._lock:
            self.data = self._store.load()

    def make_snapshot(self, path: str | Path | None = None) -> Path:
        """
        Write a copy of the document to `path` (default: the configured backup directory)
        as `backup-<epoch-millis>.json` and return the new file's path.
        """
        directory = Path(path) if path is not None else Path(self.options.backups.path)
        with self._lock:
            text = dumps_document(self.data, indent=self.options.indent)
        return write_snapshot(directory, text)

    # ---------------------
    # Reads
    # ---------------------
    def get(self, path: str, default: Any = None) -> Any:
        with self._lock:
            value = resolve_for_read(self.data, path)
        return default if value is MISSING else value

    def has(self, path: str) -> bool:
        with self._lock:
            value = resolve_for_read(self.data, path)
        return value is not MISSING and value is not None

    def all(self) -> list[Entry]:
        with self._lock:
            return [Entry(key=key, data=value) for key, value in self.data.items()]

    # ---------------------
    # Writes
    # ---------------------
    def set(self, path: str, value: JsonValue) -> None:
        ensure_json_value(value)
        with self._writing():
            resolve_for_write(
                self.data, path, _to_document(value), create_missing=self.options.auto_create_paths
            )

    def delete(self, key: str) -> None:
        """
        Remove a top-level key. Dots are not interpreted: delete("a.b") removes a
        top-level key literally named "a.b".
        """
        with self._writing():
            self.data.pop(key, None)

    def add(self, key: str, amount: int | float) -> None:
        self._accumulate(key, amount, 1)

    def subtract(self, key: str, amount: int | float) -> None:
        self._accumulate(key, amount, -1)

    def push(self, key: str, element: JsonValue) -> None:
        ensure_json_value(element)
        with self._writing():
            self._list_at(key).append(_to_document(element))

    def pull_one(self, key: str, element: JsonValue) -> None:
        """Remove the first element equal to `element` from the list at `key`."""
        with self._writing():
            items = self._list_at(key)
            for i, item in enumerate(items):
                if values_equal(item, element):
                    del items[i]
                    break

    def pull_many(self, key: str, element: JsonValue) -> None:
        """Remove every element equal to `element` from the list at `key`."""
        with self._writing():
            items = self._list_at(key)
            items[:] = [item for item in items if not values_equal(item, element)]

    def clear(self, key: str) -> None:
        with self._writing():
            if key not in self.data:
                raise KeyNotFound(key)
            self.data[key] = {}

    def clear_all(self) -> None:
        with self._writing():
            self.data = {}

    # ---------------------
    # Internal
    # ---------------------
    @contextlib.contextmanager
    def _writing(self) -> Iterator[None]:
        """
        Hold the lock around a mutation and save afterwards. If the save fails, the
        document is put back the way it was so memory never runs ahead of the file.
        """
        with self._lock:
            before = copy.deepcopy(self.data)
            yield
            try:
                self.save()
            except PersistenceFailure:
                self.data = before
                raise

    def _accumulate(self, key: str, amount: int | float, sign: int) -> None:
        _check_top_level(key)
        if not is_number(amount):
            raise TypeMismatch(f"amount must be a number, got {type(amount).__name__}")
        ensure_json_value(amount)
        with self._writing():
            current = self.data.get(key)
            if not current:
                current = 0
            elif not is_number(current):
                raise TypeMismatch(f"{key!r} holds a {kind_of(current).value}, not a number")
            result = current + sign * amount
            if isinstance(result, float) and not math.isfinite(result):
                raise TypeMismatch(f"{key!r} would become {result!r}, which JSON cannot represent")
            self.data[key] = result

    def _list_at(self, key: str) -> list[Any]:
        _check_top_level(key)
        current = self.data.get(key)
        if current is None:
            current = self.data[key] = []
        elif kind_of(current) is not ValueKind.SEQUENCE:
            raise TypeMismatch(f"{key!r} holds a {kind_of(current).value}, not a list")
        return current


def _check_top_level(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError(f"invalid key {key!r}")


def _to_document(value: Any) -> Any:
    # Detach from the caller's objects and normalize tuples to lists.
    if isinstance(value, dict):
        return {k: _to_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_document(v) for v in value]
    return value


