"""Substream CLI main entry point with global options."""

import logging
import sys

import click

from ..config import resolve_settings
from ..context import SubstreamContext


@click.group()
@click.option(
    "--scheme", help="Identifier scheme name (overrides $SUBSTREAM_SCHEME)"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, scheme, verbose):
    """substream - read-only byte windows onto seekable files."""
    ctx.ensure_object(SubstreamContext)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        ctx.obj.settings = resolve_settings(scheme=scheme)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    ctx.obj.verbose = verbose


# Register commands at module level so tests can import cli with commands attached
from .commands.cat import cat
from .commands.parse import parse
from .commands.stat import stat
from .commands.url import url

cli.add_command(cat)
cli.add_command(stat)
cli.add_command(parse)
cli.add_command(url)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
