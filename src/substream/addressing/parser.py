"""Identifier parsing.

This module implements parsing for the identifier syntax:
    <scheme>://<offset>:<length>/<resource_id>

Where:
    - scheme: one or more of [A-Za-z0-9.-]
    - offset, length, resource_id: one or more ASCII decimal digits

No other characters are permitted and no escaping is defined.
"""

import re
from typing import Optional

from ..errors import ParseError
from .types import Identifier

_IDENTIFIER_RE = re.compile(
    r"^([A-Za-z0-9.-]+)" + re.escape("://") + r"(\d+):(\d+)/(\d+)$",
    re.ASCII,
)


def parse_identifier(path: str) -> Identifier:
    """Parse <scheme>://<offset>:<length>/<resource_id>.

    Args:
        path: Raw identifier string

    Returns:
        Parsed Identifier

    Raises:
        ParseError: If the string does not match the grammar

    Examples:
        >>> parse_identifier("substream://4:16/2")
        Identifier(raw='substream://4:16/2', scheme='substream', offset=4, length=16, resource_id='2')
    """
    if not isinstance(path, str):
        raise ParseError(f"Identifier must be a string, got {type(path).__name__}")

    # fullmatch so a trailing newline is not accepted by "$"
    match = _IDENTIFIER_RE.fullmatch(path)
    if not match:
        raise ParseError(f"Failed to parse identifier: {path!r}")

    scheme, offset, length, resource_id = match.groups()
    return Identifier(
        raw=path,
        scheme=scheme,
        offset=int(offset),
        length=int(length),
        resource_id=resource_id,
    )


def format_identifier(
    offset: int, length: int, resource_id, scheme: Optional[str] = None
) -> str:
    """Build an identifier string.

    Args:
        offset: Absolute start offset (>= 0)
        length: Window length (> 0)
        resource_id: Registry key (digits only)
        scheme: Scheme name (default: configured scheme)

    Raises:
        ValueError: If any component would not parse back
    """
    if scheme is None:
        from ..config import resolve_settings

        scheme = resolve_settings().scheme

    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")
    resource_id = str(resource_id)
    if not resource_id.isascii() or not resource_id.isdigit():
        raise ValueError(f"resource_id must be decimal digits, got {resource_id!r}")

    text = f"{scheme}://{offset}:{length}/{resource_id}"
    # Validate the scheme by round-tripping through the grammar
    if not _IDENTIFIER_RE.fullmatch(text):
        raise ValueError(f"Invalid scheme name: {scheme!r}")
    return text
