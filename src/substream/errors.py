"""Exceptions raised while resolving a window."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Error


class SubStreamError(Exception):
    """Base error for window resolution."""

    kind = "error"


class ParseError(SubStreamError):
    """Identifier does not match the grammar."""

    kind = "parse"


class InvalidSchemeError(SubStreamError):
    """Identifier scheme is not the configured one."""

    kind = "invalid_scheme"


class ResourceNotFoundError(SubStreamError):
    """Resource id is not present in the registry."""

    kind = "resource_not_found"


class NotSeekableError(SubStreamError):
    """Underlying resource cannot be seeked."""

    kind = "not_seekable"


class IoError(SubStreamError):
    """Copy, open, seek or read against a handle failed."""

    kind = "io"


class SubStreamOpenError(Exception):
    """Raised by the host helpers when an open fails in loud mode."""

    def __init__(self, error: "Error"):
        super().__init__(error.message)
        self.error = error


__all__ = [
    "InvalidSchemeError",
    "IoError",
    "NotSeekableError",
    "ParseError",
    "ResourceNotFoundError",
    "SubStreamError",
    "SubStreamOpenError",
]
