from __future__ import annotations

import time
from pathlib import Path

from .json_store import atomic_write_json

DEFAULT_FILE_PATH = "./my-database.json"
DEFAULT_BACKUPS_PATH = "./backups/"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_document_file(path: Path) -> bool:
    """
    Create `path` holding an empty JSON object if it does not exist yet.

    Returns True when the file was created.
    """
    if path.exists():
        return False
    atomic_write_json(path, {})
    return True


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def snapshot_file_name(millis: int, attempt: int = 0) -> str:
    # attempt > 0 only when another snapshot already took this millisecond
    if attempt:
        return f"backup-{millis}-{attempt}.json"
    return f"backup-{millis}.json"


