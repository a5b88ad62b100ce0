"""Stat command - report the size of a window."""

import click

from ...context import pass_context
from ..helpers import open_source, open_window_or_exit


@click.command()
@click.argument("source")
@click.option("--offset", type=click.IntRange(min=0), required=True)
@click.option("--length", type=click.IntRange(min=1), required=True)
@pass_context
def stat(ctx, source, offset, length):
    """Print the window size of SOURCE as JSON."""
    with open_source(source, memory=False) as fileobj:
        stream = open_window_or_exit(fileobj, offset, length, ctx.settings)

    with stream:
        click.echo(stream.stat().model_dump_json())
