"""Attribute specifications: which fields to extract, rename and format.

An ``--attrs`` value is a comma separated list of
``sourceKey[:outputKey[:transformChain]]`` entries::

    .id,name::u,!internal,created-at:date:t,*::20

Source keys are relative to the ``attributes`` object of each record unless
they start with ``.`` (relative to the record root). ``!`` keeps a field for
filtering and sorting but hides it from output. ``*`` carries a transform
chain applied to every field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from . import transform

logger = logging.getLogger(__name__)

WILDCARD = "*"
ATTRIBUTES_NAMESPACE = "attributes"


@dataclass
class Attr:
    """One compiled attribute entry."""

    key: str
    output_key: str
    include: bool = True
    transform_spec: str = ""

    @property
    def is_wildcard(self) -> bool:
        return self.key == WILDCARD

    def transform(self, value: Any) -> Any:
        """Apply this attribute's transform chain to an extracted value.

        Only strings are transformed. A timestamp that fails to parse is left
        alone and the timezone directive is dropped from this attribute so
        the remaining rows do not retry it.
        """
        if not isinstance(value, str):
            return value

        tokens = transform.tokenize(self.transform_spec)
        result = value

        if transform.wants_timezone(tokens):
            zone = transform.resolve_timezone()
            if zone is not None:
                try:
                    result = transform.convert_timezone(result, zone)
                except ValueError:
                    logger.debug("failed to parse time: %s", result)
                    self.transform_spec = transform.strip_timezone(
                        self.transform_spec
                    )

        result = transform.apply_case(result, transform.resolve_case(tokens))
        return transform.apply_length(result, transform.resolve_length(tokens))

    def __str__(self) -> str:
        return f"{self.key}:{self.output_key}:{self.transform_spec}"


def _parse_entry(entry: str) -> Optional[Attr]:
    fields = entry.split(":")

    key = fields[0].strip()
    include = True
    if key.startswith("!"):
        include = False
        key = key[1:].strip()

    if not key:
        logger.error("invalid attribute: empty key in %r", entry)
        return None

    if key == WILDCARD:
        include = False

    output_key = ""
    if len(fields) > 1:
        output_key = fields[1].strip()
    if not output_key:
        output_key = key.split(".")[-1]

    transform_spec = fields[2].strip() if len(fields) > 2 else ""

    return Attr(
        key=key,
        output_key=output_key,
        include=include,
        transform_spec=transform_spec,
    )


def qualify(key: str) -> str:
    """Resolve a user key against the record.

    Examples:
        >>> qualify("name")
        'attributes.name'
        >>> qualify(".id")
        'id'
    """
    if key.startswith("."):
        return key[1:]
    if key == WILDCARD:
        return key
    return f"{ATTRIBUTES_NAMESPACE}.{key}"


class AttrList:
    """Ordered attribute entries with upsert by source or output key.

    Entries are indexed by both their source key and output key so that
    re-specifying a field (a command default overridden by ``--attrs``, or a
    user typing the same field twice) updates it instead of appending a
    duplicate.
    """

    def __init__(self, entries: Optional[List[Attr]] = None):
        self._entries: List[Attr] = []
        self._by_key: Dict[str, int] = {}
        self._by_output: Dict[str, int] = {}
        self._merged = False
        for attr in entries or []:
            self._append(attr)

    def __iter__(self) -> Iterator[Attr]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Attr:
        return self._entries[index]

    def __str__(self) -> str:
        return ",".join(str(attr) for attr in self._entries)

    def __repr__(self) -> str:
        return f"AttrList({self})"

    def _append(self, attr: Attr) -> None:
        index = len(self._entries)
        self._entries.append(attr)
        self._by_key.setdefault(attr.key, index)
        self._by_output.setdefault(attr.output_key, index)

    def _find(self, raw_key: str) -> Optional[int]:
        for name in (qualify(raw_key), raw_key):
            if name in self._by_key:
                return self._by_key[name]
        return self._by_output.get(raw_key)

    def _reindex(self) -> None:
        self._by_key.clear()
        self._by_output.clear()
        for index, attr in enumerate(self._entries):
            self._by_key.setdefault(attr.key, index)
            self._by_output.setdefault(attr.output_key, index)

    def set(self, spec: str) -> "AttrList":
        """Compile a comma separated ``--attrs`` value into this list."""
        if not spec or spec.strip() == WILDCARD:
            return self

        for entry in spec.split(","):
            if not entry.strip():
                continue

            attr = _parse_entry(entry)
            if attr is None:
                continue

            index = self._find(attr.key)
            if index is not None:
                existing = self._entries[index]
                existing.include = attr.include
                existing.output_key = attr.output_key
                existing.transform_spec = attr.transform_spec
                self._reindex()
                continue

            attr.key = qualify(attr.key)
            self._append(attr)

        return self

    def global_transform(self) -> str:
        """Return the first wildcard chain, or an empty string."""
        index = self._by_key.get(WILDCARD)
        if index is None:
            return ""
        return self._entries[index].transform_spec

    def merge_global(self) -> "AttrList":
        """Prepend the wildcard chain to every entry, once."""
        if self._merged:
            return self
        self._merged = True

        spec = self.global_transform()
        if not spec:
            return self

        for attr in self._entries:
            attr.transform_spec = f"{spec},{attr.transform_spec}"
        return self

    def append_transform(self, spec: str) -> None:
        """Append a directive to every entry's chain (used by --local)."""
        for attr in self._entries:
            attr.transform_spec += spec

    def find_output(self, output_key: str) -> Optional[Attr]:
        index = self._by_output.get(output_key)
        if index is None:
            return None
        return self._entries[index]

    def extractable(self) -> List[Attr]:
        """Entries that produce a row field (everything but the wildcard)."""
        return [attr for attr in self._entries if not attr.is_wildcard]

    def included(self) -> List[Attr]:
        """Entries rendered as output columns, in order."""
        return [attr for attr in self._entries if attr.include]

    def copy(self) -> "AttrList":
        clone = AttrList(
            [
                Attr(a.key, a.output_key, a.include, a.transform_spec)
                for a in self._entries
            ]
        )
        clone._merged = self._merged
        return clone


def compile_attrs(*specs: str) -> AttrList:
    """Build a fresh AttrList from defaults and user specs, globals merged.

    Later specs override earlier ones field by field.

    Examples:
        >>> str(compile_attrs(".id,name", "name::u"))
        'id:id:,attributes.name:name:u'
    """
    attrs = AttrList()
    for spec in specs:
        if spec:
            attrs.set(spec)
    return attrs.merge_global()


__all__ = ["Attr", "AttrList", "WILDCARD", "compile_attrs", "qualify"]
