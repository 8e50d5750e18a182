"""tfctl CLI main entry point with global options."""

import sys

import click

from ..context import TfctlContext
from ..errors import ConfigError
from ..log import init_logger


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="tfctl.yaml path (overrides $TFCTL_CONFIG)",
)
@click.option(
    "--log-level",
    help="Log level (overrides $TFCTL_LOG) [default: ERROR]",
)
@click.version_option(package_name="tfctl")
@click.pass_context
def cli(ctx, config_path, log_level):
    """tfctl - query Terraform state and platform metadata."""
    init_logger(log_level)
    ctx.ensure_object(TfctlContext)

    try:
        ctx.obj.load(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


# Register commands at module level so tests can import cli with commands attached
from .commands.query import query
from .commands.sq import sq

cli.add_command(sq)
cli.add_command(query)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
