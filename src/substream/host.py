"""Host-side helpers: decide whether open failures are loud or silent."""

import logging
from typing import BinaryIO, Optional

from .addressing import format_identifier
from .config import Settings, resolve_settings
from .errors import SubStreamOpenError
from .registry import LiveResourceRegistry, ResourceRegistry, default_registry
from .stream import SubStream

logger = logging.getLogger(__name__)


def open_window(
    path: str,
    registry: Optional[ResourceRegistry] = None,
    report_errors: bool = False,
    settings: Optional[Settings] = None,
) -> Optional[SubStream]:
    """Open a window by identifier.

    Args:
        path: Identifier string
        registry: Registry to resolve against (default: process registry)
        report_errors: Raise SubStreamOpenError instead of returning None
        settings: Resolved settings (default: from environment)

    Returns:
        The open SubStream, or None on failure in silent mode

    Raises:
        SubStreamOpenError: On failure when report_errors is set
    """
    stream = SubStream(registry, settings)
    if stream.open(path, "rb", report_errors=report_errors):
        return stream
    if report_errors:
        raise SubStreamOpenError(stream.error)
    return None


def window_for(
    fileobj: BinaryIO,
    offset: int,
    length: int,
    registry: Optional[LiveResourceRegistry] = None,
    settings: Optional[Settings] = None,
) -> SubStream:
    """Register fileobj, open a window on it and drop the registration.

    The window owns its own handle (or copy) once open, so the registration
    is only needed while resolving.

    Raises:
        ValueError: If offset or length are out of range
        SubStreamOpenError: If the window cannot be opened
    """
    if registry is None:
        registry = default_registry
    if settings is None:
        settings = resolve_settings()

    resource_id = registry.register(fileobj)
    try:
        path = format_identifier(offset, length, resource_id, scheme=settings.scheme)
        return open_window(path, registry, report_errors=True, settings=settings)
    finally:
        registry.unregister(resource_id)
