"""Flatten Terraform state resources into one row per instance."""

import re
from typing import Any, Dict, Iterable, List

from .values import ValueKind, classify, to_text

MANAGED = "managed"
_MODULE_SEGMENT = re.compile(r"(^module\.)|(\.module\.)")


def is_hierarchical(doc: Any) -> bool:
    """True if ``doc`` is a state document with a ``resources`` list."""
    return isinstance(doc, dict) and isinstance(doc.get("resources"), list)


def index_suffix(index_key: Any) -> str:
    """Format an instance index the way Terraform addresses it.

    Examples:
        >>> index_suffix(0)
        '[0]'
        >>> index_suffix("blue")
        '["blue"]'
    """
    if index_key is None:
        return ""
    if classify(index_key) is ValueKind.NUMBER:
        return f"[{to_text(index_key)}]"
    return f'["{index_key}"]'


def resource_id(row: Dict[str, Any], short: bool = False) -> str:
    """Build the resource address of a flattened instance row.

    ``short`` collapses every ``module.`` segment into ``+`` so that deeply
    nested module paths stay readable in a table.
    """
    module = row.get("module")
    prefix = f"{to_text(module)}." if module else ""

    mode = row.get("mode")
    if mode and mode != MANAGED:
        prefix += f"{to_text(mode)}."

    address = (
        f"{prefix}{to_text(row.get('type'))}.{to_text(row.get('name'))}"
        f"{index_suffix(row.get('index_key'))}"
    )
    if short:
        address = _MODULE_SEGMENT.sub("+", address)
    return address


def flatten_state(resources: Iterable[Dict[str, Any]], short: bool = False) -> List[Dict[str, Any]]:
    """Merge each resource's fields into each of its instances.

    Instance fields win over resource fields. Every row gains a ``resource``
    address. Resources without instances produce no rows.
    """
    rows: List[Dict[str, Any]] = []

    for resource in resources:
        if not isinstance(resource, dict):
            continue

        common = {k: v for k, v in resource.items() if k != "instances"}

        for instance in resource.get("instances") or []:
            row = dict(common)
            if isinstance(instance, dict):
                row.update(instance)
            row["resource"] = resource_id(row, short=short)
            rows.append(row)

    return rows


__all__ = ["flatten_state", "index_suffix", "is_hierarchical", "resource_id"]
