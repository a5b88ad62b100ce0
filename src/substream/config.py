"""Runtime settings for substream."""

import os
import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_SCHEME = "substream"
DEFAULT_SPOOL_MAX_SIZE = 8 * 1024 * 1024
DEFAULT_COPY_CHUNK_SIZE = 64 * 1024

_SCHEME_RE = re.compile(r"^[A-Za-z0-9.-]+$")


@dataclass(frozen=True)
class Settings:
    """Resolved settings for parsing identifiers and materializing copies."""

    scheme: str = DEFAULT_SCHEME
    spool_max_size: int = DEFAULT_SPOOL_MAX_SIZE
    copy_chunk_size: int = DEFAULT_COPY_CHUNK_SIZE


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def resolve_settings(
    scheme: Optional[str] = None,
    spool_max_size: Optional[int] = None,
    copy_chunk_size: Optional[int] = None,
) -> Settings:
    """Resolve settings.

    Resolution order for each field:
    1. Explicit argument
    2. Environment variable ($SUBSTREAM_SCHEME, $SUBSTREAM_SPOOL_MAX_SIZE,
       $SUBSTREAM_COPY_CHUNK_SIZE)
    3. Built-in default

    Reads fresh from the environment each time.

    Raises:
        ValueError: If a value is malformed
    """
    if scheme is None:
        scheme = os.environ.get("SUBSTREAM_SCHEME") or DEFAULT_SCHEME
    if not _SCHEME_RE.match(scheme):
        raise ValueError(f"Invalid scheme name: {scheme!r}")

    if spool_max_size is None:
        spool_max_size = _env_int(
            "SUBSTREAM_SPOOL_MAX_SIZE", DEFAULT_SPOOL_MAX_SIZE
        )
    if copy_chunk_size is None:
        copy_chunk_size = _env_int(
            "SUBSTREAM_COPY_CHUNK_SIZE", DEFAULT_COPY_CHUNK_SIZE
        )
    if copy_chunk_size <= 0:
        raise ValueError(f"copy_chunk_size must be positive, got {copy_chunk_size}")

    return Settings(
        scheme=scheme,
        spool_max_size=spool_max_size,
        copy_chunk_size=copy_chunk_size,
    )
