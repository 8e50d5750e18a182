"""Render a filtered dataset as a text table, JSON, YAML or the raw document."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, TextIO, Tuple, Union

import click
from pydantic import BaseModel, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from tabulate import DataRow, TableFormat, tabulate

from .attrs import AttrList
from .errors import RenderError
from .values import display

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json", "yaml", "raw")
EMPTY_CELL = "-"

NAMED_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
    "reset",
)

Color = Union[str, Tuple[int, int, int]]


def parse_color(value: str) -> Color:
    """Turn ``#rrggbb`` into an RGB tuple for click; names pass through.

    Examples:
        >>> parse_color("#f6be00")
        (246, 190, 0)
    """
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return value


class ColorScheme(BaseModel):
    """Header and zebra row colors for text output."""

    title: str = "#f6be00"
    even: str = "#ffffff"
    odd: str = "#00c8f0"

    @field_validator("title", "even", "odd")
    @classmethod
    def valid_color(cls, v: str) -> str:
        v = v.strip()
        if v.startswith("#"):
            digits = v[1:]
            if len(digits) not in (3, 6):
                raise ValueError(f"invalid hex color: {v}")
            int(digits, 16)
            return v
        if v not in NAMED_COLORS:
            raise ValueError(f"unknown color: {v}")
        return v


def output_rows(rows: List[Dict[str, Any]], attrs: AttrList) -> List[Dict[str, Any]]:
    """Project rows onto the included attributes, in attribute order."""
    included = attrs.included()
    return [{a.output_key: row.get(a.output_key) for a in included} for row in rows]


def render_raw(raw: Union[bytes, str], sink: TextIO) -> None:
    """Write the original document untouched."""
    if isinstance(raw, bytes):
        buffer = getattr(sink, "buffer", None)
        if buffer is not None:
            sink.flush()
            buffer.write(raw)
            buffer.flush()
            return
        raw = raw.decode("utf-8")
    sink.write(raw)


def render_json(rows: List[Dict[str, Any]], attrs: AttrList, sink: TextIO) -> None:
    try:
        text = json.dumps(output_rows(rows, attrs), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("json render failed: %s", e)
        raise RenderError(f"failed to render json: {e}") from e
    sink.write(text + "\n")


def render_yaml(rows: List[Dict[str, Any]], attrs: AttrList, sink: TextIO) -> None:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.default_flow_style = False
    try:
        yaml.dump(output_rows(rows, attrs), sink)
    except (YAMLError, TypeError, ValueError) as e:
        logger.error("yaml render failed: %s", e)
        raise RenderError(f"failed to render yaml: {e}") from e


def _hidden_border(padding: int) -> TableFormat:
    # No rules and a single blank between columns, widened by the padding.
    row = DataRow("", " " * (1 + max(padding, 0)), "")
    return TableFormat(
        lineabove=None,
        linebelowheader=None,
        linebetweenrows=None,
        linebelow=None,
        headerrow=row,
        datarow=row,
        padding=0,
        with_header_hide=None,
    )


def table_writer(
    rows: List[Dict[str, Any]],
    attrs: AttrList,
    sink: TextIO,
    titles: bool = False,
    color: bool = False,
    padding: int = 0,
    colors: Optional[ColorScheme] = None,
) -> None:
    """Write included attributes as aligned, optionally colored columns."""
    if not rows:
        return

    included = attrs.included()
    colors = colors or ColorScheme()

    body: List[List[str]] = []
    for index, row in enumerate(rows):
        cells = [display(row.get(a.output_key), EMPTY_CELL) for a in included]
        if color:
            fg = parse_color(colors.even if index % 2 == 0 else colors.odd)
            cells = [click.style(cell, fg=fg) for cell in cells]
        body.append(cells)

    headers: List[str] = []
    if titles:
        headers = [a.output_key for a in included]
        if color:
            fg = parse_color(colors.title)
            headers = [click.style(h, fg=fg, bold=True) for h in headers]

    table = tabulate(
        body,
        headers=headers,
        tablefmt=_hidden_border(padding),
        disable_numparse=True,
        stralign="left",
    )
    sink.write(table + "\n")


__all__ = [
    "ColorScheme",
    "OUTPUT_FORMATS",
    "output_rows",
    "parse_color",
    "render_json",
    "render_raw",
    "render_yaml",
    "table_writer",
]
