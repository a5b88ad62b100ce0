"""CLI helper utilities shared across commands."""

import io
import sys
from contextlib import contextmanager

import click

from ..errors import SubStreamOpenError
from ..host import window_for
from ..registry import LiveResourceRegistry


@contextmanager
def open_source(source: str, memory: bool):
    """Open SOURCE for windowing.

    ``-`` reads stdin into memory. With ``memory`` the file is loaded into a
    BytesIO so the window is served from a materialized copy.
    """
    if source == "-":
        yield io.BytesIO(click.get_binary_stream("stdin").read())
        return

    try:
        fh = open(source, "rb")
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    with fh:
        if memory:
            yield io.BytesIO(fh.read())
        else:
            yield fh


def open_window_or_exit(fileobj, offset: int, length: int, settings):
    """Open a window on fileobj or exit with an error message."""
    try:
        return window_for(
            fileobj, offset, length, registry=LiveResourceRegistry(), settings=settings
        )
    except (SubStreamOpenError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
