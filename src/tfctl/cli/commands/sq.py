"""sq command - query a Terraform state document."""

import sys

import click

from ...context import pass_context
from ...errors import ConfigError
from ...postprocess import chopper
from ...schema import RESOURCE, dump_schema
from ..helpers import (
    build_attrs,
    query_options,
    read_document,
    resolve_query_options,
    run_query,
)


@click.command()
@click.argument(
    "statefile",
    default="terraform.tfstate",
    type=click.Path(dir_okay=False, allow_dash=True),
)
@click.option(
    "--chop/--no-chop",
    default=None,
    help="Chop the common resource prefix from resource names",
)
@click.option(
    "-k",
    "--concrete/--no-concrete",
    default=None,
    help="Only include concrete (managed) resources",
)
@click.option(
    "--short/--no-short",
    default=None,
    help="Collapse module path segments into '+'",
)
@query_options
@pass_context
def sq(ctx, statefile, chop, concrete, short, attrs, schema, **flags):
    """Query resources in a Terraform state file.

    STATEFILE defaults to ./terraform.tfstate; use '-' to read stdin. Each
    resource instance becomes one row with a synthesized ``resource``
    address; instance attributes are available to --attrs by name and
    top-level fields with a leading dot.

    Examples:

        # Resources and their ids
        tfctl sq

        # Data sources only, with titles
        tfctl sq -t -a '.mode' -f 'mode=data'

        # Buckets whose name embeds their type, sorted by address
        tfctl sq -f 'hungarian,type^aws_s3' -s resource

        # JSON with uppercased names, truncated to 20 characters
        tfctl sq -o json -a 'name::u20'
    """
    if schema:
        dump_schema(RESOURCE, sys.stdout)
        return

    cfg = ctx.scoped(RESOURCE.command)
    try:
        options = resolve_query_options(cfg, concrete=concrete, short=short, **flags)
        chop = chop if chop is not None else cfg.get_bool("chop", False)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    query_attrs = build_attrs(RESOURCE.defaults, attrs)
    raw = read_document(statefile)

    post_process = chopper("resource") if chop else None
    run_query(raw, query_attrs, options, post_process=post_process)
