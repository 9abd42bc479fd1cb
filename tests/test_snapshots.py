from __future__ import annotations

import gc
import json
import logging
import threading
import time

import pytest

from docstore import BackupsOptions, DatabaseOptions, JsonDatabase
from docstore.errors import PersistenceFailure
from docstore.snapshots import SnapshotScheduler, write_snapshot


def test_make_snapshot_default_dir(tmp_path):
    backups = tmp_path / "backups"
    options = DatabaseOptions(file_path=tmp_path / "db.json", backups=BackupsOptions(path=backups))
    with JsonDatabase(options=options) as db:
        db.set("a.b", [1, 2])
        snap = db.make_snapshot()

    assert snap.parent == backups
    assert snap.name.startswith("backup-") and snap.suffix == ".json"
    assert json.loads(snap.read_text(encoding="utf-8")) == {"a": {"b": [1, 2]}}


def test_make_snapshot_explicit_dir(db, tmp_path):
    db.set("k", "v")
    target = tmp_path / "elsewhere" / "nested"
    snap = db.make_snapshot(target)
    assert snap.parent == target
    assert json.loads(snap.read_text(encoding="utf-8")) == {"k": "v"}


def test_write_snapshot_same_millisecond(tmp_path):
    first = write_snapshot(tmp_path, "{}\n", millis=1700000000000)
    second = write_snapshot(tmp_path, "{}\n", millis=1700000000000)
    assert first.name == "backup-1700000000000.json"
    assert second.name == "backup-1700000000000-1.json"


def test_write_snapshot_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(PersistenceFailure):
        write_snapshot(blocker, "{}\n")


def test_scheduler_keeps_running_after_failure(caplog):
    calls = []
    done = threading.Event()

    def snapshot():
        calls.append(1)
        if len(calls) == 1:
            raise PersistenceFailure("disk full")
        if len(calls) >= 3:
            done.set()

    scheduler = SnapshotScheduler(snapshot, interval_ms=10)
    with caplog.at_level(logging.ERROR, logger="docstore.snapshots"):
        scheduler.start()
        assert done.wait(5)
        scheduler.stop(timeout=5)

    assert scheduler.running is False
    assert scheduler.failures == 1
    assert len(calls) >= 3
    assert "periodic snapshot failed" in caplog.text


def test_scheduler_rejects_bad_interval():
    with pytest.raises(ValueError):
        SnapshotScheduler(lambda: None, interval_ms=0)


def test_backups_enabled_writes_periodic_snapshots(tmp_path):
    backups = tmp_path / "backups"
    options = DatabaseOptions(
        file_path=tmp_path / "db.json",
        backups=BackupsOptions(enabled=True, interval=20, path=backups),
    )
    db = JsonDatabase(options=options)
    try:
        # directory is created up front
        assert backups.is_dir()
        db.set("a", 1)
        for _ in range(250):
            if list(backups.glob("backup-*.json")):
                break
            time.sleep(0.02)
    finally:
        db.close()

    snaps = sorted(backups.glob("backup-*.json"))
    assert snaps
    assert json.loads(snaps[-1].read_text(encoding="utf-8")) in ({}, {"a": 1})


def test_close_stops_scheduler(tmp_path):
    options = DatabaseOptions(
        file_path=tmp_path / "db.json",
        backups=BackupsOptions(enabled=True, interval=60_000, path=tmp_path / "backups"),
    )
    db = JsonDatabase(options=options)
    scheduler = db._scheduler
    assert scheduler is not None and scheduler.running
    db.close()
    assert not scheduler.running
    assert db._scheduler is None
    # still usable after close
    db.set("a", 1)
    assert db.get("a") == 1


def test_backup_dir_setup_failure(tmp_path):
    blocker = tmp_path / "backups"
    blocker.write_text("", encoding="utf-8")
    options = DatabaseOptions(
        file_path=tmp_path / "db.json",
        backups=BackupsOptions(enabled=True, interval=60_000, path=blocker),
    )
    with pytest.raises(PersistenceFailure) as exc_info:
        JsonDatabase(options=options)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_scheduler_stops_when_store_is_collected(tmp_path):
    options = DatabaseOptions(
        file_path=tmp_path / "db.json",
        backups=BackupsOptions(enabled=True, interval=10, path=tmp_path / "backups"),
    )
    db = JsonDatabase(options=options)
    scheduler = db._scheduler
    assert scheduler is not None and scheduler.running

    del db
    gc.collect()
    for _ in range(250):
        if not scheduler.running:
            break
        time.sleep(0.02)
    assert not scheduler.running


