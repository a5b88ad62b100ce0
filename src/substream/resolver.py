"""Window resolution - turn a parsed identifier into an owned handle and bounds."""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from .addressing import Identifier
from .config import Settings, resolve_settings
from .errors import (
    InvalidSchemeError,
    IoError,
    NotSeekableError,
    ParseError,
    ResourceNotFoundError,
)
from .registry import BackingKind, ResourceRegistry, default_registry
from .window import WindowState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedWindow:
    """Handle owned by a window plus its initial bounds.

    Attributes:
        handle: File object the window reads from; the window must close it
        state: Initial bounds and cursor in the handle's coordinates
        backing_kind: Classification the strategy was chosen from
    """

    handle: BinaryIO
    state: WindowState
    backing_kind: BackingKind


@dataclass(frozen=True)
class FileBackedSource:
    """Source with a stable address that can be opened a second time."""

    address: str

    def materialize(self, identifier: Identifier, settings: Settings) -> ResolvedWindow:
        try:
            handle = open(self.address, "rb")
        except OSError as e:
            raise IoError(f"Failed to open {self.address}: {e}") from e

        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            handle.close()
            raise IoError(f"Cannot stat {self.address}: {e}") from e
        if size < identifier.end:
            handle.close()
            raise IoError(
                f"Window [{identifier.offset}, {identifier.end}) exceeds "
                f"size {size} of {self.address}"
            )

        logger.debug(
            "Opened independent handle on %s for [%d, %d)",
            self.address,
            identifier.offset,
            identifier.end,
        )
        state = WindowState(identifier.offset, identifier.end, identifier.offset)
        return ResolvedWindow(handle, state, BackingKind.FILE)


@dataclass(frozen=True)
class MemoryBackedSource:
    """Source without a reopenable address; the range is copied out."""

    handle: BinaryIO
    backing_kind: BackingKind = BackingKind.MEMORY

    def materialize(self, identifier: Identifier, settings: Settings) -> ResolvedWindow:
        copy = tempfile.SpooledTemporaryFile(max_size=settings.spool_max_size)
        try:
            copied = self._copy_range(copy, identifier, settings.copy_chunk_size)
            if copied != identifier.length:
                raise IoError(
                    f"Short copy from resource {identifier.resource_id}: "
                    f"expected {identifier.length} bytes, got {copied}"
                )
            copy.seek(0)
        except BaseException:
            copy.close()
            raise

        logger.debug(
            "Materialized %d bytes from resource %s",
            copied,
            identifier.resource_id,
        )
        state = WindowState(0, identifier.length, 0)
        return ResolvedWindow(copy, state, self.backing_kind)

    def _copy_range(self, dest, identifier: Identifier, chunk_size: int) -> int:
        source = self.handle
        try:
            saved = source.tell()
        except (OSError, ValueError) as e:
            raise IoError(f"Cannot read position of source: {e}") from e

        copied = 0
        try:
            source.seek(identifier.offset)
            while copied < identifier.length:
                chunk = source.read(min(chunk_size, identifier.length - copied))
                if not chunk:
                    break
                dest.write(chunk)
                copied += len(chunk)
        except (OSError, ValueError) as e:
            raise IoError(f"Failed to copy from source: {e}") from e
        finally:
            try:
                source.seek(saved)
            except (OSError, ValueError):
                logger.warning("Could not restore source position to %d", saved)
        return copied


def _flush_pending_writes(handle) -> None:
    """Push buffered writes to the OS so a second handle sees them."""
    writable = getattr(handle, "writable", None)
    if writable is None:
        return
    try:
        if not writable():
            return
        handle.flush()
    except (OSError, ValueError) as e:
        raise IoError(f"Failed to flush source: {e}") from e


Source = Union[FileBackedSource, MemoryBackedSource]


class WindowResolver:
    """Resolve identifiers against a resource registry.

    Example usage:
        resolver = WindowResolver(registry)
        resolved = resolver.resolve(parse_identifier("substream://0:16/1"))
        resolved.handle.seek(resolved.state.offset)
    """

    def __init__(
        self,
        registry: Optional[ResourceRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.settings = settings if settings is not None else resolve_settings()

    def classify(self, identifier: Identifier) -> Source:
        """Check scheme, registry and seekability, then pick a strategy.

        Raises:
            ParseError: If the window length is zero
            InvalidSchemeError: If the scheme is not the configured one
            ResourceNotFoundError: If the resource id is not registered
            NotSeekableError: If the resource cannot seek
        """
        if identifier.scheme != self.settings.scheme:
            raise InvalidSchemeError(
                f"Invalid scheme {identifier.scheme!r}, expected {self.settings.scheme!r}"
            )
        if identifier.length <= 0:
            raise ParseError("Window length must be greater than zero")

        resource = self.registry.lookup(identifier.resource_id)
        if resource is None:
            raise ResourceNotFoundError(
                f"Resource {identifier.resource_id} not available"
            )
        if not resource.seekable:
            raise NotSeekableError("Can only wrap seekable resources")

        if resource.backing_kind is BackingKind.FILE and resource.backing_address:
            _flush_pending_writes(resource.handle)
            return FileBackedSource(resource.backing_address)
        return MemoryBackedSource(resource.handle, resource.backing_kind)

    def resolve(self, identifier: Identifier) -> ResolvedWindow:
        """Resolve an identifier to an owned handle and window bounds."""
        source = self.classify(identifier)
        logger.debug(
            "Resolving %s with %s", identifier, type(source).__name__
        )
        return source.materialize(identifier, self.settings)
