"""Command-line interface for substream.

``cli`` and ``main`` resolve on first access, so ``substream.cli.main`` is
only imported when a command actually runs.
"""

__all__ = ["cli", "main"]


def __getattr__(name):
    if name == "cli":
        from .main import cli

        return cli
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
