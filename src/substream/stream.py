"""Read-only window stream.

A SubStream exposes the range [offset, offset+length) of an already-open,
seekable resource as a stream addressed [0, length). The resource is named by
an identifier of the form ``<scheme>://<offset>:<length>/<resource_id>``.

Failures never raise after construction: ``open`` returns False, ``read``
returns None, ``seek`` returns False. ``read`` returns ``b""`` at the end of
the window.
"""

import logging
from enum import Enum
from typing import BinaryIO, Optional

from .addressing import Identifier, parse_identifier
from .config import Settings
from .errors import IoError, SubStreamError
from .models import Error, StreamStat
from .registry import BackingKind, ResourceRegistry
from .resolver import WindowResolver
from .window import WindowState, Whence

logger = logging.getLogger(__name__)

_WRITE_MODE_CHARS = set("wax+")


class StreamState(str, Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class SubStream:
    """Bounded, read-only view onto a registered resource.

    Example usage:
        registry = LiveResourceRegistry()
        resource_id = registry.register(open("archive.bin", "rb"))

        stream = SubStream(registry)
        if stream.open(f"substream://128:64/{resource_id}"):
            data = stream.read(64)
            stream.close()
    """

    def __init__(
        self,
        registry: Optional[ResourceRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self._resolver = WindowResolver(registry, settings)
        self._handle: Optional[BinaryIO] = None
        self._window: Optional[WindowState] = None
        self.identifier: Optional[Identifier] = None
        self.backing_kind: Optional[BackingKind] = None
        self.state = StreamState.UNOPENED
        self.error: Optional[Error] = None

    @property
    def is_open(self) -> bool:
        return self.state is StreamState.OPEN

    def open(self, path: str, mode: str = "rb", report_errors: bool = False) -> bool:
        """Open the window named by path.

        Args:
            path: Identifier string
            mode: Open mode; only read access is ever granted
            report_errors: Log the failure at ERROR level

        Returns:
            True on success. On failure, False with ``error`` set.
        """
        if self.state is not StreamState.UNOPENED:
            return self._fail(
                Error(kind="state", message=f"Stream is already {self.state.value}"),
                report_errors,
            )
        if _WRITE_MODE_CHARS & set(mode):
            return self._fail(
                Error(kind="mode", message=f"Windows are read-only, got mode {mode!r}"),
                report_errors,
            )

        try:
            identifier = parse_identifier(path)
            resolved = self._resolver.resolve(identifier)
        except SubStreamError as e:
            return self._fail(Error.from_exception(e), report_errors)

        self.identifier = identifier
        self.backing_kind = resolved.backing_kind
        self._handle = resolved.handle
        self._window = resolved.state
        self.state = StreamState.OPEN
        self.error = None
        return True

    def _fail(self, error: Error, report_errors: bool) -> bool:
        self.error = error
        if report_errors:
            logger.error("Failed to open window: %s", error.message)
        else:
            logger.debug("Failed to open window: %s", error.message)
        return False

    def read(self, count: int) -> Optional[bytes]:
        """Read up to count bytes.

        Returns ``b""`` at the end of the window, None on failure. Short
        reads are possible; callers loop until ``b""``.
        """
        if not self.is_open:
            return None

        window = self._window
        remaining = window.remaining
        if remaining <= 0 or count <= 0:
            return b""

        try:
            self._handle.seek(window.offset)
            data = self._handle.read(min(count, remaining))
        except (OSError, ValueError) as e:
            self.error = Error.from_exception(IoError(f"Read failed: {e}"))
            logger.debug("Read failed at %d: %s", window.offset, e)
            return None

        if data is None:
            data = b""
        window.advance(len(data))
        return data

    def seek(self, offset: int, whence: int = Whence.SET) -> bool:
        if not self.is_open:
            return False
        return self._window.resolve_seek(offset, whence) is not None

    def tell(self) -> Optional[int]:
        if not self.is_open:
            return None
        return self._window.relative_position()

    def eof(self) -> bool:
        if not self.is_open:
            return True
        return self._window.is_eof()

    def stat(self) -> Optional[StreamStat]:
        if not self.is_open:
            return None
        return StreamStat(size=self._window.length)

    def close(self) -> None:
        """Release the handle owned by this window. Safe to call repeatedly."""
        handle, self._handle = self._handle, None
        if self.state is StreamState.OPEN:
            self.state = StreamState.CLOSED
        if handle is not None:
            handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"SubStream(identifier={self.identifier}, state={self.state.value}, window={self._window!r})"
