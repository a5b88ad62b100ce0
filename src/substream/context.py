"""Substream CLI context for passing state between commands."""

from typing import Optional

import click

from .config import Settings


class SubstreamContext:
    def __init__(self):
        self.settings: Optional[Settings] = None
        self.verbose = False


pass_context = click.make_pass_decorator(SubstreamContext, ensure=True)
