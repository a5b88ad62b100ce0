"""Parse command - show the components of an identifier."""

import json
import sys

import click

from ...addressing import parse_identifier
from ...errors import ParseError


@click.command()
@click.argument("identifier")
def parse(identifier):
    """Parse IDENTIFIER and print its components as JSON.

    Example:
        substream parse substream://512:64/3
    """
    try:
        parsed = parse_identifier(identifier)
    except ParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        json.dumps(
            {
                "scheme": parsed.scheme,
                "offset": parsed.offset,
                "length": parsed.length,
                "resource_id": parsed.resource_id,
            }
        )
    )
