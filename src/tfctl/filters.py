"""Client-side --filter parsing and evaluation.

A filter spec is a delimited list of clauses, each ``key[!]<op>value``:

    =   exact equality           ~   case-insensitive equality
    ^   prefix                   <   less than
    >   greater than             @   contains (substring, list item, map key)
    /   regular expression

A leading ``_`` marks a clause the server already applied; those are ignored
here. Clauses are ANDed together.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import click

from . import driller
from .attrs import Attr, AttrList
from .hungarian import is_hungarian
from .values import ValueKind, classify, parse_number, to_text

logger = logging.getLogger(__name__)

FILTER_DELIM_ENV = "TFCTL_FILTER_DELIM"
DEFAULT_DELIM = ","
HUNGARIAN = "hungarian"

# Optional server-side underscore, key, optional (negated) operand, target.
_CLAUSE = re.compile(r"^(_)?([^!?=^~<>@/]*)(!?[=^~<>@/])?(.*)$", re.DOTALL)

NUMERIC_OPERANDS = ("=", "<", ">")


@dataclass(frozen=True)
class Filter:
    """A single parsed filter clause."""

    key: str
    operand: str = ""
    value: str = ""
    negate: bool = False
    server_side: bool = False


def filter_delimiter() -> str:
    """Clause delimiter, overridable for values that contain commas."""
    return os.environ.get(FILTER_DELIM_ENV, DEFAULT_DELIM)


def parse_clause(text: str) -> Optional[Filter]:
    """Parse one clause, returning None (and logging) when it is unusable.

    Examples:
        >>> parse_clause("name!^prod")
        Filter(key='name', operand='^', value='prod', negate=True, server_side=False)
    """
    match = _CLAUSE.match(text)
    if match is None:
        logger.error("invalid filter: %s", text)
        return None

    server_side, key, operand, value = match.groups()
    key = key.strip()
    if not key:
        logger.error("invalid filter: empty key in %s", text)
        return None

    operand = operand or ""
    negate = operand.startswith("!")
    if negate:
        operand = operand[1:]

    return Filter(
        key=key,
        operand=operand,
        value=value,
        negate=negate,
        server_side=server_side == "_",
    )


def build_filters(spec: str, delim: Optional[str] = None) -> List[Filter]:
    """Parse a filter spec into clauses, skipping the malformed ones."""
    if not spec:
        return []

    filters: List[Filter] = []
    for text in spec.split(delim or filter_delimiter()):
        text = text.strip()
        if not text:
            continue
        clause = parse_clause(text)
        if clause is not None:
            filters.append(clause)
    return filters


def check_string_operand(value: str, clause: Filter) -> bool:
    """Evaluate a string comparison; malformed clauses are False."""
    target = clause.value
    op = clause.operand

    if op == "=":
        result = value == target
    elif op == "~":
        result = value.casefold() == target.casefold()
    elif op == "^":
        result = value.startswith(target)
    elif op == ">":
        result = value > target
    elif op == "<":
        result = value < target
    elif op == "@":
        result = target in value
    elif op == "/":
        try:
            result = re.search(target, value) is not None
        except re.error:
            logger.error("invalid regex: %s", target)
            return False
    else:
        logger.error("unsupported filtering operand: %r", op)
        return False

    return result != clause.negate


def check_numeric_operand(value: float, clause: Filter) -> bool:
    """Evaluate ``=``, ``<`` or ``>`` numerically."""
    target = parse_number(clause.value)
    if target is None:
        logger.error("invalid numeric value: %s", clause.value)
        return False

    if clause.operand == "=":
        result = value == target
    elif clause.operand == ">":
        result = value > target
    elif clause.operand == "<":
        result = value < target
    else:
        logger.error("unsupported numeric operand: %r", clause.operand)
        return False

    return result != clause.negate


def check_contains_operand(value: Any, clause: Filter) -> bool:
    """Evaluate ``@`` against a list (item equality) or map (key exists)."""
    kind = classify(value)
    if kind is ValueKind.LIST:
        result = any(
            item == clause.value
            or (classify(item) is not ValueKind.STRING and to_text(item) == clause.value)
            for item in value
        )
    elif kind is ValueKind.MAP:
        result = clause.value in value
    else:
        logger.error("unsupported type for contains filtering: %s", kind.value)
        return False

    return result != clause.negate


def check_value(value: Any, clause: Filter) -> bool:
    """Dispatch a clause on the kind of the candidate value."""
    kind = classify(value)

    if kind in (ValueKind.STRING, ValueKind.BOOL):
        return check_string_operand(to_text(value), clause)

    if kind is ValueKind.NUMBER:
        if clause.operand in NUMERIC_OPERANDS:
            return check_numeric_operand(float(value), clause)
        return check_string_operand(to_text(value), clause)

    if clause.operand == "@":
        return check_contains_operand(value, clause)
    return check_string_operand(to_text(value), clause)


def check_hungarian(candidate: Any, clause: Filter) -> bool:
    """Evaluate the ``hungarian`` pseudo-filter against a flattened row."""
    type_ = driller.drill(candidate, "type")
    name = driller.drill(candidate, "name")
    if not isinstance(type_, str) or not isinstance(name, str):
        return False

    wanted = clause.value.strip().lower() in ("", "true")
    result = is_hungarian(type_, name) == wanted
    return result != clause.negate


def warn_unknown_key(key: str) -> None:
    msg = f"filter key not found: {key}"
    logger.error(msg)
    click.echo(f"warning: {msg}", err=True)


def _lookup(attrs: AttrList, clause: Filter) -> Optional[Attr]:
    attr = attrs.find_output(clause.key)
    if attr is None or attr.is_wildcard:
        return None
    return attr


def check_filter_keys(attrs: AttrList, filters: Iterable[Filter]) -> None:
    """Warn once for every client-side clause key with no matching attribute."""
    seen = set()
    for clause in filters:
        if clause.server_side or clause.key == HUNGARIAN or clause.key in seen:
            continue
        seen.add(clause.key)
        if _lookup(attrs, clause) is None:
            warn_unknown_key(clause.key)


def apply_filters(candidate: Any, attrs: AttrList, filters: Iterable[Filter]) -> bool:
    """Return True if ``candidate`` satisfies every client-side clause.

    Unknown keys are skipped so one typo does not empty the result set
    (:func:`check_filter_keys` reports them); a known key whose value is
    missing fails the row.
    """
    for clause in filters:
        if clause.server_side:
            continue

        if clause.key == HUNGARIAN:
            if not check_hungarian(candidate, clause):
                return False
            continue

        attr = _lookup(attrs, clause)
        if attr is None:
            continue

        value = driller.drill(candidate, attr.key, unwrap=False)
        if value is None:
            return False

        if not check_value(value, clause):
            return False

    return True


def extract_row(candidate: Any, attrs: AttrList) -> Dict[str, Any]:
    """Build a fresh output row with one field per non-wildcard attribute."""
    return {
        attr.output_key: driller.drill(candidate, attr.key, unwrap=False)
        for attr in attrs.extractable()
    }


def filter_dataset(
    candidates: Iterable[Any], attrs: AttrList, spec: str
) -> List[Dict[str, Any]]:
    """Filter candidates and extract the attribute fields of the survivors.

    Transforms are not applied here; they run at render time.
    """
    filters = build_filters(spec)
    check_filter_keys(attrs, filters)
    return [
        extract_row(candidate, attrs)
        for candidate in candidates
        if apply_filters(candidate, attrs, filters)
    ]


__all__ = [
    "Filter",
    "apply_filters",
    "build_filters",
    "check_contains_operand",
    "check_filter_keys",
    "check_numeric_operand",
    "check_string_operand",
    "check_value",
    "extract_row",
    "filter_dataset",
    "filter_delimiter",
    "parse_clause",
]
