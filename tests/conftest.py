"""Pytest configuration and shared fixtures."""

import io
import os

import pytest
from click.testing import CliRunner

from substream.cli import cli
from substream.config import resolve_settings
from substream.registry import LiveResourceRegistry

SAMPLE = bytes(range(256)) * 4


@pytest.fixture(autouse=True)
def clean_substream_env(monkeypatch):
    """Keep SUBSTREAM_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("SUBSTREAM_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_bytes():
    return SAMPLE


@pytest.fixture
def sample_file(tmp_path):
    """Provide path to a 1 KiB file with a known byte pattern."""
    path = tmp_path / "sample.bin"
    path.write_bytes(SAMPLE)
    return path


@pytest.fixture
def registry():
    return LiveResourceRegistry()


@pytest.fixture
def settings():
    return resolve_settings()


@pytest.fixture
def file_resource(sample_file, registry):
    """Register an open file and yield (handle, resource_id)."""
    with open(sample_file, "rb") as fh:
        yield fh, registry.register(fh)


@pytest.fixture
def memory_resource(registry):
    """Register a BytesIO and return (buffer, resource_id)."""
    buf = io.BytesIO(SAMPLE)
    return buf, registry.register(buf)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["cat", "file.bin", "--offset", "0", "--length", "4"])
        result.stdout_bytes  # raw window bytes
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke
