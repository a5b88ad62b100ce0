"""Identifier types for window addressing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identifier:
    """Parsed window identifier.

    The Identifier represents a string following the syntax:
        <scheme>://<offset>:<length>/<resource_id>

    Examples:
        "substream://0:10/3" → Identifier(scheme="substream", offset=0, length=10, resource_id="3")
        "iqb.substream://512:64/17" → Identifier(scheme="iqb.substream", offset=512, length=64, resource_id="17")
    """

    raw: str
    """Original identifier string."""

    scheme: str
    """Scheme name. Not checked by the parser; the resolver compares it."""

    offset: int
    """Absolute start offset in the underlying resource."""

    length: int
    """Number of bytes visible through the window."""

    resource_id: str
    """Decimal key of an already-open resource in the registry."""

    @property
    def end(self) -> int:
        """Absolute offset one past the last byte of the window."""
        return self.offset + self.length

    def __str__(self) -> str:
        return f"{self.scheme}://{self.offset}:{self.length}/{self.resource_id}"
