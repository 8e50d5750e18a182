"""Multi-key sorting of extracted rows."""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, List

from .values import as_number, to_text


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False
    case_sensitive: bool = False


def parse_sort_spec(spec: str) -> List[SortKey]:
    """Parse ``--sort``: ``-`` means descending, ``!`` case-sensitive.

    Examples:
        >>> parse_sort_spec("count,-!name")
        [SortKey(field='count', descending=False, case_sensitive=False), SortKey(field='name', descending=True, case_sensitive=True)]
    """
    keys: List[SortKey] = []
    for part in (spec or "").split(","):
        field = part.strip()
        descending = case_sensitive = False
        while field[:1] in ("-", "!"):
            if field[0] == "-":
                descending = True
            else:
                case_sensitive = True
            field = field[1:]
        if field:
            keys.append(SortKey(field, descending, case_sensitive))
    return keys


def _compare(a: Any, b: Any, key: SortKey) -> int:
    left, right = as_number(a), as_number(b)
    if left is None or right is None:
        left, right = to_text(a), to_text(b)
        if not key.case_sensitive:
            left, right = left.lower(), right.lower()

    result = (left > right) - (left < right)
    return -result if key.descending else result


def sort_dataset(rows: List[Dict[str, Any]], spec: str) -> List[Dict[str, Any]]:
    """Sort ``rows`` in place by ``spec`` and return them.

    Earlier keys take priority; later keys break ties. The sort is stable, so
    rows equal on every key keep their filtered order.
    """
    keys = parse_sort_spec(spec)
    if not keys:
        return rows

    def compare(a: Dict[str, Any], b: Dict[str, Any]) -> int:
        for key in keys:
            result = _compare(a.get(key.field), b.get(key.field), key)
            if result:
                return result
        return 0

    rows.sort(key=cmp_to_key(compare))
    return rows


__all__ = ["SortKey", "parse_sort_spec", "sort_dataset"]
