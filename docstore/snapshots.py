from __future__ import annotations

import inspect
import logging
import threading
import weakref
from pathlib import Path
from typing import Callable

from .errors import PersistenceFailure
from .paths import ensure_dir, epoch_millis, snapshot_file_name

logger = logging.getLogger(__name__)

# Upper bound on same-millisecond name collisions before giving up.
MAX_NAME_ATTEMPTS = 1000


def write_snapshot(directory: Path, text: str, *, millis: int | None = None) -> Path:
    """
    Write `text` to a new `backup-<epoch-millis>.json` file inside `directory`.

    Files are created exclusively, so an existing snapshot is never overwritten.
    """
    ms = epoch_millis() if millis is None else millis
    try:
        ensure_dir(directory)
        for attempt in range(MAX_NAME_ATTEMPTS):
            target = directory / snapshot_file_name(ms, attempt)
            try:
                with target.open("x", encoding="utf-8") as f:
                    f.write(text)
            except FileExistsError:
                continue
            logger.debug("wrote snapshot %s", target)
            return target
    except OSError as exc:
        raise PersistenceFailure(f"could not write snapshot in {directory}: {exc}") from exc
    raise PersistenceFailure(f"no free snapshot name in {directory} for {ms}")


class SnapshotScheduler:
    """
    Background thread calling `snapshot()` every `interval_ms` until stopped.

    A failing tick is logged and the loop keeps going. A bound method is held weakly:
    once its owner is garbage collected the thread exits on the next tick.
    """

    def __init__(self, snapshot: Callable[[], object], interval_ms: int, *, name: str = "docstore-snapshots"):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if inspect.ismethod(snapshot):
            self._snapshot_ref: Callable[[], Callable[[], object] | None] = weakref.WeakMethod(snapshot)
        else:
            self._snapshot_ref = lambda: snapshot
        self._interval = interval_ms / 1000.0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._name = name
        self.ticks = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("snapshot scheduler started (every %.3fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            logger.info("snapshot scheduler stopped")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.tick()

    def tick(self) -> None:
        snapshot = self._snapshot_ref()
        if snapshot is None:
            logger.info("snapshot owner is gone, stopping scheduler")
            self._stop.set()
            return
        self.ticks += 1
        try:
            snapshot()
        except Exception:
            self.failures += 1
            logger.exception("periodic snapshot failed")


