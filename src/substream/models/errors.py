"""Result and error models returned across the stream API."""

from __future__ import annotations

from pydantic import BaseModel

from ..errors import SubStreamError


class Error(BaseModel):
    """Error result from a failed open or I/O call."""

    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc: SubStreamError) -> "Error":
        return cls(kind=exc.kind, message=str(exc))

    def __str__(self) -> str:
        return self.message


class StreamStat(BaseModel):
    """Size of a window. No timestamps or permissions are reported."""

    size: int


__all__ = ["Error", "StreamStat"]
