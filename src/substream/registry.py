"""Live resource registry (injected into the resolver).

The registry maps a decimal resource id to an already-open file object and
describes it: whether it can seek, and whether it has a stable backing
address that can be opened a second time.
"""

import io
import itertools
import logging
import os
import threading
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class BackingKind(str, Enum):
    FILE = "file"
    MEMORY = "memory"
    OTHER = "other"


@dataclass(frozen=True)
class UnderlyingResource:
    """Read-only view of a registered resource and its metadata."""

    handle: BinaryIO
    seekable: bool
    backing_kind: BackingKind
    backing_address: Optional[str] = None


class ResourceRegistry(Protocol):
    def lookup(self, resource_id: str) -> Optional[UnderlyingResource]:
        ...


def _is_seekable(handle) -> bool:
    try:
        return bool(handle.seekable())
    except (AttributeError, ValueError, OSError):
        # closed files raise ValueError
        return False


def describe(handle) -> UnderlyingResource:
    """Classify a file object.

    - FILE: has a ``name`` that is an existing regular file path naming the
      same file the handle has open
    - MEMORY: an in-memory buffer (io.BytesIO)
    - OTHER: anything else (raw descriptors, sockets, custom objects)
    """
    seekable = _is_seekable(handle)

    if isinstance(handle, io.BytesIO):
        return UnderlyingResource(handle, seekable, BackingKind.MEMORY)

    name = getattr(handle, "name", None)
    if isinstance(name, (str, bytes, os.PathLike)):
        path = os.fsdecode(name)
        if os.path.isfile(path) and _same_file(handle, path):
            return UnderlyingResource(
                handle, seekable, BackingKind.FILE, os.path.abspath(path)
            )

    return UnderlyingResource(handle, seekable, BackingKind.OTHER)


def _same_file(handle, path: str) -> bool:
    """True when path (resolved now) still names the file handle has open.

    A relative name goes stale after a chdir, and a path can be replaced
    after the handle was opened.
    """
    try:
        return os.path.samestat(os.fstat(handle.fileno()), os.stat(path))
    except (AttributeError, OSError, ValueError):
        # io.UnsupportedOperation is both OSError and ValueError
        return False


class LiveResourceRegistry:
    """Thread-safe registry of open file objects keyed by decimal id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._resources: Dict[str, BinaryIO] = {}
        self._ids = itertools.count(1)

    def register(self, handle: BinaryIO) -> str:
        """Register an open file object and return its resource id."""
        with self._lock:
            resource_id = str(next(self._ids))
            self._resources[resource_id] = handle
        logger.debug("Registered resource %s (%r)", resource_id, handle)
        return resource_id

    def unregister(self, resource_id: str) -> None:
        with self._lock:
            self._resources.pop(resource_id, None)

    def lookup(self, resource_id: str) -> Optional[UnderlyingResource]:
        with self._lock:
            handle = self._resources.get(resource_id)
        if handle is None:
            return None
        return describe(handle)

    def __contains__(self, resource_id: str) -> bool:
        with self._lock:
            return resource_id in self._resources

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)


default_registry = LiveResourceRegistry()
