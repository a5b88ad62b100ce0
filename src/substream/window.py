"""Window bounds and cursor arithmetic (no I/O)."""

import io
import logging
from enum import IntEnum
from typing import Optional

logger = logging.getLogger(__name__)


class Whence(IntEnum):
    SET = io.SEEK_SET
    CUR = io.SEEK_CUR
    END = io.SEEK_END


class WindowState:
    """Absolute bounds [enforce_min, enforce_max) and the absolute cursor.

    The cursor always satisfies enforce_min <= offset <= enforce_max and the
    window length never changes after construction.
    """

    __slots__ = ("enforce_min", "enforce_max", "offset")

    def __init__(self, enforce_min: int, enforce_max: int, offset: Optional[int] = None):
        if enforce_min < 0 or enforce_max < enforce_min:
            raise ValueError(
                f"Invalid window bounds [{enforce_min}, {enforce_max})"
            )
        if offset is None:
            offset = enforce_min
        if not enforce_min <= offset <= enforce_max:
            raise ValueError(
                f"Cursor {offset} outside window [{enforce_min}, {enforce_max})"
            )
        self.enforce_min = enforce_min
        self.enforce_max = enforce_max
        self.offset = offset

    @property
    def length(self) -> int:
        return self.enforce_max - self.enforce_min

    @property
    def remaining(self) -> int:
        return self.enforce_max - self.offset

    def is_eof(self) -> bool:
        return self.offset >= self.enforce_max

    def relative_position(self) -> Optional[int]:
        """Cursor relative to the window start, or None outside [min, max)."""
        if self.enforce_min <= self.offset < self.enforce_max:
            return self.offset - self.enforce_min
        return None

    def advance(self, count: int) -> None:
        self.offset = min(self.offset + count, self.enforce_max)

    def resolve_seek(self, requested: int, whence: int = Whence.SET) -> Optional[int]:
        """Move the cursor and return the new absolute offset.

        Returns None (cursor unchanged) when whence is unknown or the
        candidate falls outside [enforce_min, enforce_max). The upper bound
        is strict: seeking to exactly enforce_max is rejected.
        """
        if whence == Whence.SET:
            candidate = self.enforce_min + requested
        elif whence == Whence.CUR:
            candidate = self.offset + requested
        elif whence == Whence.END:
            candidate = self.enforce_max + requested
        else:
            logger.debug("Rejected seek with unknown whence %r", whence)
            return None

        if candidate < self.enforce_min or candidate >= self.enforce_max:
            logger.debug(
                "Rejected seek to %d outside [%d, %d)",
                candidate,
                self.enforce_min,
                self.enforce_max,
            )
            return None

        self.offset = candidate
        return candidate

    def __repr__(self) -> str:
        return (
            f"WindowState(enforce_min={self.enforce_min}, "
            f"enforce_max={self.enforce_max}, offset={self.offset})"
        )
