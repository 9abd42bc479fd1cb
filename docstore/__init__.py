from __future__ import annotations

from .database import Entry, JsonDatabase
from .dotpath import MISSING, resolve_for_read, resolve_for_write
from .errors import DocStoreError, KeyNotFound, PathNotCreatable, PersistenceFailure, TypeMismatch
from .repositories import AsyncJsonDatabase
from .settings import BackupsOptions, DatabaseOptions, options_from_env
from .values import JsonValue, ValueKind

__all__ = [
    "JsonDatabase",
    "AsyncJsonDatabase",
    "Entry",
    "DatabaseOptions",
    "BackupsOptions",
    "options_from_env",
    "MISSING",
    "resolve_for_read",
    "resolve_for_write",
    "JsonValue",
    "ValueKind",
    "DocStoreError",
    "KeyNotFound",
    "TypeMismatch",
    "PathNotCreatable",
    "PersistenceFailure",
]


