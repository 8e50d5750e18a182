"""query command - query a saved platform API document."""

import sys

import click

from ...context import pass_context
from ...errors import ConfigError
from ...schema import dump_schema, kind_names, lookup
from ..helpers import (
    build_attrs,
    query_options,
    read_document,
    resolve_query_options,
    run_query,
)


@click.command()
@click.argument(
    "document",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "-k",
    "--kind",
    type=click.Choice(kind_names()),
    default="workspace",
    show_default=True,
    help="Record kind; selects default attributes and --schema output",
)
@click.option(
    "-r",
    "--root",
    default=None,
    help="Path to the records inside the document [default: data]",
)
@query_options
@pass_context
def query(ctx, document, kind, root, attrs, schema, **flags):
    """Query records in a JSON document fetched from the platform API.

    DOCUMENT is a JSON:API payload (or any JSON document) on disk; use '-'
    to read stdin. Records are taken from --root (``data`` by default) and
    their ``attributes`` are addressable by name.

    Examples:

        # Workspaces with more than 10 resources, largest first
        tfctl query workspaces.json -a resource-count -f 'resource-count>10' -s -resource-count

        # Runs, newest first, in local time
        tfctl query runs.json -k run -s -created-at --local

        # Attributes available for organizations
        tfctl query orgs.json -k organization --schema
    """
    record_kind = lookup(kind)

    if schema:
        dump_schema(record_kind, sys.stdout)
        return

    cfg = ctx.scoped(record_kind.command)
    try:
        options = resolve_query_options(cfg, concrete=False, short=False, **flags)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    query_attrs = build_attrs(record_kind.defaults, attrs)
    raw = read_document(document)

    parent = root if root is not None else record_kind.parent
    run_query(raw, query_attrs, options, parent=parent)
