"""Post-extraction hooks that reshape rows before sorting and rendering."""

from collections import Counter
from typing import Any, Callable, Dict, List, Optional

Rows = List[Dict[str, Any]]
PostProcess = Callable[[Rows], Optional[Rows]]

CHOP_MARKER = ".."
MIN_COMMON_SEGMENTS = 2


def chop_prefix(rows: Rows, field: str) -> Rows:
    """Replace the dominant leading dot segments of ``field`` with ``..``.

    Segments are kept while the most common segment at that position is
    shared by at least half of the string values. When two or more
    segments qualify, rows starting with that prefix have it elided, e.g.
    ``module.app.module.db.aws_db_instance.main`` becomes
    ``..aws_db_instance.main``.
    """
    values = [
        (i, row[field]) for i, row in enumerate(rows) if isinstance(row.get(field), str)
    ]
    if not values:
        return rows

    threshold = (len(values) + 1) // 2
    segmented = [(i, value, value.split(".")) for i, value in values]
    depth = max(len(segments) for _, _, segments in segmented)

    common: List[str] = []
    for position in range(depth):
        counts = Counter(
            segments[position]
            for _, _, segments in segmented
            if position < len(segments)
        )
        segment, count = counts.most_common(1)[0]
        if count < threshold:
            break
        common.append(segment)

    if len(common) < MIN_COMMON_SEGMENTS:
        return rows

    prefix = ".".join(common) + "."
    for i, value, _ in segmented:
        if value.startswith(prefix):
            rows[i][field] = CHOP_MARKER + value[len(prefix):]
    return rows


def chopper(field: str) -> PostProcess:
    """Return a hook that chops the common prefix of ``field``."""

    def _chop(rows: Rows) -> Rows:
        return chop_prefix(rows, field)

    return _chop


__all__ = ["PostProcess", "chop_prefix", "chopper"]
