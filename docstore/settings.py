from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .paths import DEFAULT_BACKUPS_PATH, DEFAULT_FILE_PATH

DEFAULT_BACKUP_INTERVAL_MS = 86_400_000  # 24h


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class BackupsOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    # milliseconds between two snapshots
    interval: int = Field(default=DEFAULT_BACKUP_INTERVAL_MS, gt=0)
    path: Path = Path(DEFAULT_BACKUPS_PATH)


class DatabaseOptions(BaseModel):
    """
    Read once when a JsonDatabase is constructed; immutable afterwards.

    `auto_create_paths` controls what `set("a.b", ...)` does when `a` is missing:
    create an empty mapping there (default) or raise PathNotCreatable.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_path: Path = Path(DEFAULT_FILE_PATH)
    backups: BackupsOptions = Field(default_factory=BackupsOptions)
    auto_create_paths: bool = True
    indent: int = Field(default=2, ge=0)


def options_from_env(env_file: str | Path | None = None) -> DatabaseOptions:
    """
    Build options from DOCSTORE_* environment variables, optionally loading a dotenv
    file first. Variables already set in the environment win over the file.
    """
    if env_file is not None:
        load_dotenv(env_file)

    backups = BackupsOptions(
        enabled=_env_bool("DOCSTORE_BACKUPS_ENABLED", False),
        interval=int(os.getenv("DOCSTORE_BACKUPS_INTERVAL", str(DEFAULT_BACKUP_INTERVAL_MS))),
        path=Path(os.getenv("DOCSTORE_BACKUPS_PATH", DEFAULT_BACKUPS_PATH)),
    )
    return DatabaseOptions(
        file_path=Path(os.getenv("DOCSTORE_FILE_PATH", DEFAULT_FILE_PATH)),
        backups=backups,
        auto_create_paths=_env_bool("DOCSTORE_AUTO_CREATE_PATHS", True),
    )


