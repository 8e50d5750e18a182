"""Shared options and helpers for query commands."""

from __future__ import annotations

import sys
from typing import Any, Callable, Optional

import click
from pydantic import ValidationError

from ..attrs import AttrList, compile_attrs
from ..config import Config
from ..errors import ConfigError, TfctlError
from ..pipeline import QueryOptions, slice_dice_spit
from ..postprocess import PostProcess
from ..render import OUTPUT_FORMATS, ColorScheme


def query_options(func: Callable) -> Callable:
    """Attach the flags every query command accepts.

    Flags left unset fall back to tfctl.yaml (``<command>.<flag>`` first,
    then ``<flag>``) and finally to the built-in default.
    """
    decorators = [
        click.option(
            "-a",
            "--attrs",
            default="",
            help="Comma-separated attributes to include: key[:name[:transform]]",
        ),
        click.option(
            "-f",
            "--filter",
            "filter_spec",
            default="",
            help="Comma-separated filters, e.g. 'name^prod,resource-count>0'",
        ),
        click.option(
            "-s",
            "--sort",
            default=None,
            help="Comma-separated sort keys; prefix '-' descending, '!' case-sensitive",
        ),
        click.option(
            "-o",
            "--output",
            type=click.Choice(OUTPUT_FORMATS),
            default=None,
            help="Output format [default: text]",
        ),
        click.option(
            "-c",
            "--color/--no-color",
            default=None,
            help="Enable colored text output",
        ),
        click.option(
            "-t",
            "--titles/--no-titles",
            default=None,
            help="Show column titles with text output",
        ),
        click.option(
            "--local/--no-local",
            default=None,
            help="Convert timestamps to the configured or $TZ timezone",
        ),
        click.option(
            "--padding",
            type=click.IntRange(min=0),
            default=None,
            help="Extra left padding between text columns",
        ),
        click.option(
            "--schema",
            is_flag=True,
            default=False,
            help="Print the attributes available to --attrs and exit",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _pick(flag: Any, cfg: Config, key: str, getter: str, default: Any) -> Any:
    if flag is not None:
        return flag
    return getattr(cfg, getter)(key, default)


def resolve_query_options(
    cfg: Config,
    *,
    filter_spec: str = "",
    sort: Optional[str] = None,
    output: Optional[str] = None,
    color: Optional[bool] = None,
    titles: Optional[bool] = None,
    local: Optional[bool] = None,
    padding: Optional[int] = None,
    concrete: Optional[bool] = None,
    short: Optional[bool] = None,
) -> QueryOptions:
    """Merge command-line flags with config defaults into QueryOptions.

    Raises:
        ConfigError: a config value has the wrong type or is out of range.
    """
    try:
        return QueryOptions(
            filter=filter_spec or "",
            sort=_pick(sort, cfg, "sort", "get_string", ""),
            output=_pick(output, cfg, "output", "get_string", "text"),
            color=_pick(color, cfg, "color", "get_bool", False),
            titles=_pick(titles, cfg, "titles", "get_bool", False),
            local=_pick(local, cfg, "local", "get_bool", False),
            padding=_pick(padding, cfg, "padding", "get_int", 0),
            concrete=_pick(concrete, cfg, "concrete", "get_bool", False),
            short=_pick(short, cfg, "short", "get_bool", False),
            colors=ColorScheme(**(cfg.get("colors") or {})),
        )
    except ValidationError as e:
        raise ConfigError(f"invalid option: {e}") from e
    except TypeError as e:
        raise ConfigError(f"invalid colors: {e}") from e


def build_attrs(defaults, extras: str) -> AttrList:
    """Compile command defaults plus the user's --attrs."""
    return compile_attrs(*defaults, extras)


def read_document(path: str) -> bytes:
    """Read the raw document from ``path`` ('-' for stdin)."""
    try:
        with click.open_file(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise click.FileError(path, hint=e.strerror or str(e)) from e


def run_query(
    raw: bytes,
    attrs: AttrList,
    options: QueryOptions,
    parent: str = "",
    post_process: Optional[PostProcess] = None,
) -> None:
    """Run the pipeline, turning tfctl errors into a clean exit code."""
    try:
        slice_dice_spit(
            raw,
            attrs,
            options,
            parent=parent,
            sink=sys.stdout,
            post_process=post_process,
        )
    except TfctlError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


__all__ = [
    "build_attrs",
    "query_options",
    "read_document",
    "resolve_query_options",
    "run_query",
]
