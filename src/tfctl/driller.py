"""Resolve dotted attribute paths inside decoded JSON documents."""

import re
from typing import Any, List, Optional, Tuple

_SEGMENT = re.compile(r"^(?P<name>[^\[\]]*)(?P<indexes>(?:\[-?\d+\])*)$")
_INDEX = re.compile(r"\[(-?\d+)\]")


def _parse_segment(segment: str) -> Optional[Tuple[str, List[int]]]:
    match = _SEGMENT.match(segment)
    if match is None:
        return None
    indexes = [int(i) for i in _INDEX.findall(match.group("indexes"))]
    return match.group("name"), indexes


def _child(current: Any, name: str) -> Any:
    # A single element list is transparent: items.id reads items[0].id.
    while isinstance(current, list) and len(current) == 1:
        current = current[0]
    if isinstance(current, dict):
        return current.get(name)
    return None


def drill(doc: Any, path: str, unwrap: bool = True) -> Any:
    """Return the value at ``path`` in ``doc`` or None when it does not exist.

    Paths are dot separated keys with optional ``[N]`` indexes, for example
    ``attributes.tags[0]`` or ``resources[1].instances[0].attributes.id``.
    Single element lists are drilled through and unwrapped, so
    ``{"items": ["only"]}`` yields ``"only"`` for ``items``; longer lists are
    returned as lists. With ``unwrap=False`` the value at the end of the path
    keeps its shape, so a one element list stays a list; lists crossed on the
    way to a child key are still drilled through.

    Examples:
        >>> drill({"user": {"name": "alice"}}, "user.name")
        'alice'
        >>> drill({"items": ["a", "b"]}, "items[5]") is None
        True
    """
    if not path:
        return doc

    current = doc
    for segment in path.split("."):
        parsed = _parse_segment(segment)
        if parsed is None:
            return None
        name, indexes = parsed

        if name:
            current = _child(current, name)
            if current is None:
                return None

        for index in indexes:
            if not isinstance(current, list) or not 0 <= index < len(current):
                return None
            current = current[index]

    if unwrap and isinstance(current, list) and len(current) == 1:
        return current[0]
    return current


__all__ = ["drill"]
