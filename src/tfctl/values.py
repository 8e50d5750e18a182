"""Value kinds for dataset cells and the conversions each pipeline stage uses.

Rows hold plain JSON values. Rather than type-switching at every call site,
stages call :func:`classify` once and then one of the explicit conversions
below.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional


class ValueKind(str, Enum):
    """Closed set of value shapes a row cell can take."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"


def classify(value: Any) -> ValueKind:
    """Return the kind of a decoded JSON value.

    ``bool`` is checked before numbers because it subclasses ``int``. Anything
    that is not a JSON scalar, list or mapping is treated as a string.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.MAP
    return ValueKind.STRING


def as_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float when it is a JSON number, else None."""
    if classify(value) is ValueKind.NUMBER:
        return float(value)
    return None


def parse_number(text: str) -> Optional[float]:
    """Parse a user-supplied numeric literal, None if it is not one."""
    try:
        return float(text.strip())
    except ValueError:
        return None


def _json_text(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(value)


def to_text(value: Any) -> str:
    """Canonical string form used for comparisons.

    Examples:
        >>> to_text(True)
        'true'
        >>> to_text(3.0)
        '3'
        >>> to_text(["a", "b"])
        '["a","b"]'
    """
    kind = classify(value)
    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))
            return repr(value)
        return str(value)
    if kind is ValueKind.STRING:
        return str(value)
    return _json_text(value)


def is_zero(value: Any) -> bool:
    """True for null and for the zero value of a scalar kind."""
    kind = classify(value)
    if kind is ValueKind.NULL:
        return True
    if kind in (ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING):
        return not value
    return False


def display(value: Any, empty: str = "") -> str:
    """Render a cell for the text table.

    Zero values (null, false, 0, "") render as ``empty``. Floats are shown
    rounded to whole numbers since none of the record kinds carry real
    fractional data.
    """
    if is_zero(value):
        return empty

    kind = classify(value)
    if kind is ValueKind.STRING:
        return str(value)
    if kind is ValueKind.BOOL:
        return "true"
    if kind is ValueKind.NUMBER:
        if isinstance(value, float):
            return f"{value:.0f}"
        return str(value)
    return _json_text(value)


__all__ = [
    "ValueKind",
    "as_number",
    "classify",
    "display",
    "is_zero",
    "parse_number",
    "to_text",
]
