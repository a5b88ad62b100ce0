"""Url command - build an identifier string."""

import sys

import click

from ...addressing import format_identifier
from ...context import pass_context


@click.command()
@click.argument("offset", type=int)
@click.argument("length", type=int)
@click.argument("resource_id")
@pass_context
def url(ctx, offset, length, resource_id):
    """Print the identifier for OFFSET, LENGTH and RESOURCE_ID."""
    try:
        click.echo(
            format_identifier(offset, length, resource_id, scheme=ctx.settings.scheme)
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
