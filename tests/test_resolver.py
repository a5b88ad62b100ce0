"""Tests for window resolution strategies."""

import io
import os
import tempfile

import pytest

from substream.addressing import parse_identifier
from substream.config import resolve_settings
from substream.errors import (
    InvalidSchemeError,
    IoError,
    NotSeekableError,
    ParseError,
    ResourceNotFoundError,
)
from substream.registry import BackingKind, UnderlyingResource
from substream.resolver import FileBackedSource, MemoryBackedSource, WindowResolver


class FakeRegistry:
    """Registry returning fixed metadata for one id."""

    def __init__(self, resources):
        self.resources = resources

    def lookup(self, resource_id):
        return self.resources.get(resource_id)


class FailingReader(io.BytesIO):
    def read(self, size=-1):
        raise OSError("device gone")


def test_invalid_scheme(registry, memory_resource):
    _, resource_id = memory_resource
    resolver = WindowResolver(registry)
    with pytest.raises(InvalidSchemeError):
        resolver.resolve(parse_identifier(f"other://0:4/{resource_id}"))


def test_configured_scheme(registry, memory_resource):
    _, resource_id = memory_resource
    resolver = WindowResolver(registry, resolve_settings(scheme="iqb.substream"))
    resolved = resolver.resolve(parse_identifier(f"iqb.substream://0:4/{resource_id}"))
    assert resolved.handle.read() == bytes(range(4))
    resolved.handle.close()


def test_resource_not_found(registry):
    with pytest.raises(ResourceNotFoundError):
        WindowResolver(registry).resolve(parse_identifier("substream://0:4/42"))


def test_zero_length_rejected(registry, memory_resource):
    _, resource_id = memory_resource
    with pytest.raises(ParseError):
        WindowResolver(registry).resolve(parse_identifier(f"substream://0:0/{resource_id}"))


def test_not_seekable():
    registry = FakeRegistry(
        {"1": UnderlyingResource(io.BytesIO(b"x"), False, BackingKind.OTHER)}
    )
    with pytest.raises(NotSeekableError):
        WindowResolver(registry).resolve(parse_identifier("substream://0:1/1"))


def test_file_backed_opens_independent_handle(registry, file_resource, sample_bytes):
    original, resource_id = file_resource
    original.seek(7)

    resolved = WindowResolver(registry).resolve(
        parse_identifier(f"substream://100:20/{resource_id}")
    )
    try:
        assert resolved.backing_kind is BackingKind.FILE
        assert resolved.handle is not original
        assert (resolved.state.enforce_min, resolved.state.enforce_max) == (100, 120)
        assert resolved.state.offset == 100
        resolved.handle.seek(100)
        assert resolved.handle.read(20) == sample_bytes[100:120]
        assert original.tell() == 7
    finally:
        resolved.handle.close()
    assert not original.closed


def test_file_backed_classification(registry, file_resource):
    _, resource_id = file_resource
    source = WindowResolver(registry).classify(
        parse_identifier(f"substream://0:1/{resource_id}")
    )
    assert isinstance(source, FileBackedSource)


def test_file_backed_missing_address():
    registry = FakeRegistry(
        {"1": UnderlyingResource(io.BytesIO(), True, BackingKind.FILE, "/nonexistent/x.bin")}
    )
    with pytest.raises(IoError):
        WindowResolver(registry).resolve(parse_identifier("substream://0:1/1"))


def test_memory_backed_copies_and_restores_cursor(registry, memory_resource, sample_bytes):
    buf, resource_id = memory_resource
    buf.seek(33)

    resolved = WindowResolver(registry).resolve(
        parse_identifier(f"substream://300:50/{resource_id}")
    )
    try:
        assert resolved.backing_kind is BackingKind.MEMORY
        assert (resolved.state.enforce_min, resolved.state.enforce_max) == (0, 50)
        assert resolved.state.offset == 0
        assert resolved.handle.read() == sample_bytes[300:350]
        assert buf.tell() == 33
    finally:
        resolved.handle.close()


def test_memory_backed_copy_is_private(registry, memory_resource, sample_bytes):
    buf, resource_id = memory_resource
    resolved = WindowResolver(registry).resolve(
        parse_identifier(f"substream://0:8/{resource_id}")
    )
    buf.seek(0)
    buf.write(b"\xff" * 8)
    assert resolved.handle.read() == sample_bytes[:8]
    resolved.handle.close()


def test_memory_backed_small_chunks(registry, memory_resource, sample_bytes):
    _, resource_id = memory_resource
    settings = resolve_settings(copy_chunk_size=3, spool_max_size=10)
    resolved = WindowResolver(registry, settings).resolve(
        parse_identifier(f"substream://5:100/{resource_id}")
    )
    assert resolved.handle.read() == sample_bytes[5:105]
    resolved.handle.close()


def test_other_backing_uses_copy(registry, sample_file, sample_bytes):
    # a descriptor-only file object has no reopenable path
    fd = os.open(sample_file, os.O_RDONLY)
    with os.fdopen(fd, "rb") as fh:
        resource_id = registry.register(fh)
        identifier = parse_identifier(f"substream://16:32/{resource_id}")
        resolver = WindowResolver(registry)
        assert isinstance(resolver.classify(identifier), MemoryBackedSource)

        resolved = resolver.resolve(identifier)
        assert resolved.backing_kind is BackingKind.OTHER
        assert resolved.handle.read() == sample_bytes[16:48]
        resolved.handle.close()


def test_short_copy_is_io_error(registry):
    resource_id = registry.register(io.BytesIO(b"0123456789"))
    with pytest.raises(IoError):
        WindowResolver(registry).resolve(parse_identifier(f"substream://8:5/{resource_id}"))


def test_copy_failure_restores_cursor(registry):
    buf = FailingReader(b"0123456789")
    buf.seek(4)
    resource_id = registry.register(buf)
    with pytest.raises(IoError):
        WindowResolver(registry).resolve(parse_identifier(f"substream://0:5/{resource_id}"))
    assert buf.tell() == 4


def test_file_backed_sees_unflushed_writes(registry):
    payload = os.urandom(100)
    with tempfile.NamedTemporaryFile("w+b") as fh:
        fh.write(b"\x00" * 10 + payload)
        resource_id = registry.register(fh)
        identifier = parse_identifier(f"substream://10:100/{resource_id}")

        resolved = WindowResolver(registry).resolve(identifier)
        try:
            assert resolved.backing_kind is BackingKind.FILE
            resolved.handle.seek(10)
            assert resolved.handle.read(100) == payload
        finally:
            resolved.handle.close()


def test_file_backed_flush_failure_is_io_error():
    class BrokenFlush(io.BytesIO):
        def flush(self):
            raise OSError("disk full")

    registry = FakeRegistry(
        {"1": UnderlyingResource(BrokenFlush(), True, BackingKind.FILE, "/tmp/x.bin")}
    )
    with pytest.raises(IoError, match="flush"):
        WindowResolver(registry).resolve(parse_identifier("substream://0:1/1"))


def test_file_backed_window_past_end_is_io_error(registry, tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"abc")
    with open(path, "rb") as fh:
        resource_id = registry.register(fh)
        with pytest.raises(IoError, match="exceeds"):
            WindowResolver(registry).resolve(
                parse_identifier(f"substream://1:10/{resource_id}")
            )


def test_file_backed_window_ending_at_file_end(registry, tmp_path):
    path = tmp_path / "exact.bin"
    path.write_bytes(b"abc")
    with open(path, "rb") as fh:
        resource_id = registry.register(fh)
        resolved = WindowResolver(registry).resolve(
            parse_identifier(f"substream://1:2/{resource_id}")
        )
    resolved.handle.seek(1)
    assert resolved.handle.read() == b"bc"
    resolved.handle.close()
