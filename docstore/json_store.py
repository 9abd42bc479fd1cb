from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import PersistenceFailure


def dumps_document(payload: Any, *, indent: int = 2) -> str:
    """
    Serialize a document the way it is stored on disk.

    Keys keep insertion order; non-ASCII text is written as-is (files are UTF-8).
    NaN and infinities raise ValueError instead of producing invalid JSON.
    """
    return json.dumps(payload, indent=indent or None, ensure_ascii=False, allow_nan=False) + "\n"


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing or empty files. Unreadable files and invalid JSON raise
    PersistenceFailure: silently treating them as empty would let the next save
    overwrite data we failed to parse.
    """
    try:
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceFailure(f"could not read {path}: {exc}") from exc
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PersistenceFailure(f"{path} does not contain valid JSON: {exc}") from exc


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        text = dumps_document(payload, indent=indent)
    except ValueError as exc:
        raise PersistenceFailure(f"could not serialize document for {path}: {exc}") from exc
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
        tmp_path.replace(path)
    except OSError as exc:
        raise PersistenceFailure(f"could not write {path}: {exc}") from exc


