"""Identifier addressing for substream windows.

Syntax:
    <scheme>://<offset>:<length>/<resource_id>

Examples:
    substream://0:1024/1            # First KiB of resource 1
    substream://4096:512/7          # 512 bytes at offset 4096 of resource 7
"""

from .parser import format_identifier, parse_identifier
from .types import Identifier

__all__ = [
    "Identifier",
    "format_identifier",
    "parse_identifier",
]
