"""Pydantic models for stream results."""

from .errors import Error, StreamStat

__all__ = ["Error", "StreamStat"]
