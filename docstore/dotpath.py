from __future__ import annotations

from typing import Any

from .errors import PathNotCreatable


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str) -> list[str]:
    if not isinstance(path, str):
        raise TypeError(f"path must be a string, got {type(path).__name__}")
    segments = path.split(".")
    if not path or any(not s for s in segments):
        raise ValueError(f"invalid path {path!r}")
    return segments


def resolve_for_read(document: dict[str, Any], path: str) -> Any:
    """
    Walk `path` through `document` and return the value found there, or MISSING.

    Stops early as soon as a step lands on nothing (absent or None) or on a value that
    cannot hold keys.
    """
    current: Any = document
    for segment in split_path(path):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def resolve_for_write(
    document: dict[str, Any], path: str, value: Any, *, create_missing: bool = True
) -> None:
    """
    Assign `value` at `path`, walking every segment but the last.

    Missing (or null) intermediate segments become empty mappings when `create_missing`
    is set; otherwise PathNotCreatable is raised. An intermediate holding a non-mapping
    value is never overwritten.
    """
    segments = split_path(path)
    current = document
    for segment in segments[:-1]:
        nxt = current.get(segment)
        if nxt is None:
            if not create_missing:
                raise PathNotCreatable(path, segment, "does not exist")
            nxt = {}
            current[segment] = nxt
        elif not isinstance(nxt, dict):
            raise PathNotCreatable(path, segment, f"holds a {type(nxt).__name__}, not a mapping")
        current = nxt
    current[segments[-1]] = value

