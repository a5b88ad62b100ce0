"""substream: read-only, bounded windows onto seekable byte streams."""

from .addressing import Identifier, format_identifier, parse_identifier
from .errors import (
    InvalidSchemeError,
    IoError,
    NotSeekableError,
    ParseError,
    ResourceNotFoundError,
    SubStreamError,
    SubStreamOpenError,
)
from .fileobj import SubStreamFile
from .host import open_window, window_for
from .models import Error, StreamStat
from .registry import (
    BackingKind,
    LiveResourceRegistry,
    ResourceRegistry,
    UnderlyingResource,
    default_registry,
)
from .resolver import ResolvedWindow, WindowResolver
from .stream import StreamState, SubStream
from .window import Whence, WindowState

__all__ = [
    "BackingKind",
    "Error",
    "Identifier",
    "InvalidSchemeError",
    "IoError",
    "LiveResourceRegistry",
    "NotSeekableError",
    "ParseError",
    "ResolvedWindow",
    "ResourceNotFoundError",
    "ResourceRegistry",
    "StreamStat",
    "StreamState",
    "SubStream",
    "SubStreamError",
    "SubStreamFile",
    "SubStreamOpenError",
    "UnderlyingResource",
    "Whence",
    "WindowResolver",
    "WindowState",
    "__version__",
    "default_registry",
    "format_identifier",
    "open_window",
    "parse_identifier",
]

__version__ = "0.1.0"
