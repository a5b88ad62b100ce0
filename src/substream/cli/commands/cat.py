"""Cat command - write a window's bytes to stdout."""

import sys

import click

from ...context import pass_context
from ..helpers import open_source, open_window_or_exit


@click.command()
@click.argument("source")
@click.option("--offset", type=click.IntRange(min=0), required=True, help="Absolute start offset")
@click.option("--length", type=click.IntRange(min=1), required=True, help="Window length in bytes")
@click.option(
    "--memory",
    is_flag=True,
    help="Load SOURCE into memory so the window is served from a copy",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=64 * 1024,
    show_default=True,
    help="Bytes per read call",
)
@pass_context
def cat(ctx, source, offset, length, memory, chunk_size):
    """Write LENGTH bytes of SOURCE starting at OFFSET to stdout.

    Examples:
        substream cat archive.bin --offset 512 --length 128
        cat archive.bin | substream cat - --offset 0 --length 16
    """
    out = click.get_binary_stream("stdout")
    with open_source(source, memory) as fileobj:
        stream = open_window_or_exit(fileobj, offset, length, ctx.settings)

    with stream:
        while True:
            data = stream.read(chunk_size)
            if data is None:
                click.echo(f"Error: {stream.error}", err=True)
                sys.exit(1)
            if not data:
                break
            out.write(data)
    out.flush()
