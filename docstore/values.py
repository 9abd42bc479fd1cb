from __future__ import annotations

import math
from enum import Enum
from typing import Any, Union

from .errors import TypeMismatch

JsonValue = Union[dict[str, Any], list[Any], int, float, str, bool, None]


class ValueKind(str, Enum):
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_of(value: Any) -> ValueKind:
    """
    Classify a value into one of the JSON kinds.

    bool is checked before int since bool subclasses int in Python.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    raise TypeMismatch(f"{type(value).__name__} is not a JSON value")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def ensure_json_value(value: Any) -> None:
    """Raise TypeMismatch unless `value` can be stored (and serialized) as JSON."""
    kind = kind_of(value)
    if kind is ValueKind.NUMBER and isinstance(value, float) and not math.isfinite(value):
        raise TypeMismatch(f"{value!r} cannot be represented in JSON")
    if kind is ValueKind.MAPPING:
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeMismatch(f"mapping keys must be strings, got {type(k).__name__}")
            ensure_json_value(v)
    elif kind is ValueKind.SEQUENCE:
        for item in value:
            ensure_json_value(item)


def values_equal(a: Any, b: Any) -> bool:
    """
    Structural equality that also compares kinds, so True != 1 and 0 != False.
    """
    ka, kb = kind_of(a), kind_of(b)
    if ka is not kb:
        return False
    if ka is ValueKind.MAPPING:
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    if ka is ValueKind.SEQUENCE:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b


