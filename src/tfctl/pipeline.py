"""Query pipeline: flatten, filter, extract, transform, sort and render.

This is the single entry point every query command funnels into once it has
acquired its raw document::

    attrs = compile_attrs(".id", "name", user_attrs)
    slice_dice_spit(raw, attrs, QueryOptions(filter="name^prod"), parent="data")
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, List, Literal, Optional, TextIO, Union

from pydantic import BaseModel, Field

from . import driller
from .attrs import AttrList
from .errors import DocumentError
from .filters import filter_dataset, filter_delimiter
from .flatten import flatten_state, is_hierarchical
from .postprocess import PostProcess
from .render import (
    ColorScheme,
    render_json,
    render_raw,
    render_yaml,
    table_writer,
)
from .sorting import sort_dataset

logger = logging.getLogger(__name__)

OutputFormat = Literal["text", "json", "yaml", "raw"]

CONCRETE_FILTER = "mode=managed"
LOCAL_TIME_DIRECTIVE = "t"


class QueryOptions(BaseModel):
    """Everything a query needs besides the document and the attributes."""

    filter: str = ""
    sort: str = ""
    output: OutputFormat = "text"
    color: bool = False
    titles: bool = False
    local: bool = False
    concrete: bool = False
    short: bool = False
    padding: int = Field(default=0, ge=0)
    colors: ColorScheme = Field(default_factory=ColorScheme)

    def filter_spec(self) -> str:
        """The user filter plus the implicit concrete-resource clause."""
        if not self.concrete:
            return self.filter
        if self.filter:
            return f"{self.filter}{filter_delimiter()}{CONCRETE_FILTER}"
        return CONCRETE_FILTER


def parse_document(raw: Union[bytes, str]) -> Any:
    """Decode the raw JSON document.

    Raises:
        DocumentError: the buffer is not valid JSON.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DocumentError(f"failed to parse document: {e}") from e


def select_dataset(doc: Any, parent: str = "", short: bool = False) -> List[Any]:
    """Return the candidate records of a decoded document.

    State documents are flattened to one row per instance. Otherwise
    ``parent`` (e.g. ``data`` for JSON:API payloads) selects the root.
    """
    if is_hierarchical(doc):
        return flatten_state(doc["resources"], short=short)

    root = driller.drill(doc, parent) if parent else doc
    if root is None:
        return []
    if isinstance(root, list):
        return root
    return [root]


def transform_rows(rows: List[Dict[str, Any]], attrs: AttrList) -> None:
    """Apply each attribute's transform chain to its field, in place."""
    active = [a for a in attrs.extractable() if a.transform_spec]
    for row in rows:
        for attr in active:
            row[attr.output_key] = attr.transform(row.get(attr.output_key))


def slice_dice_spit(
    raw: Union[bytes, str],
    attrs: AttrList,
    options: Optional[QueryOptions] = None,
    parent: str = "",
    sink: Optional[TextIO] = None,
    post_process: Optional[PostProcess] = None,
) -> None:
    """Run one query over ``raw`` and write the rendered result to ``sink``.

    ``attrs`` is copied before use, so the caller's list is left as compiled.
    ``post_process`` may reshape the rows (in place, or by returning a new
    list) before they are sorted and rendered.

    Raises:
        DocumentError: the document cannot be parsed.
        RenderError: JSON or YAML serialization failed.
    """
    options = options or QueryOptions()
    sink = sink or sys.stdout

    if options.output == "raw":
        render_raw(raw, sink)
        return

    doc = parse_document(raw)
    candidates = select_dataset(doc, parent, short=options.short)
    logger.debug("candidates: %d", len(candidates))

    attrs = attrs.copy()
    rows = filter_dataset(candidates, attrs, options.filter_spec())
    logger.debug("rows after filtering: %d", len(rows))

    # Forces a timezone pass over every field, timestamps or not.
    if options.local:
        attrs.append_transform(LOCAL_TIME_DIRECTIVE)

    transform_rows(rows, attrs)

    if post_process is not None:
        reshaped = post_process(rows)
        if reshaped is not None:
            rows = reshaped

    sort_dataset(rows, options.sort)

    if options.output == "json":
        render_json(rows, attrs, sink)
    elif options.output == "yaml":
        render_yaml(rows, attrs, sink)
    else:
        table_writer(
            rows,
            attrs,
            sink,
            titles=options.titles,
            color=options.color,
            padding=options.padding,
            colors=options.colors,
        )


__all__ = [
    "QueryOptions",
    "parse_document",
    "select_dataset",
    "slice_dice_spit",
    "transform_rows",
]
