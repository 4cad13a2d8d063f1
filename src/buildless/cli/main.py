"""Buildless CLI - lessbuild command."""

import click

from buildless import __version__
from buildless.cli.status import status_command
from buildless.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="lessbuild")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Buildless - remote build cache client."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(status_command, name="status")


if __name__ == "__main__":
    cli()
