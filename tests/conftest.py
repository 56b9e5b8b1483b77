"""Pytest configuration and shared fixtures."""

import io
import shutil
import tempfile
from pathlib import Path

import pytest

from geomio.infrastructure.io.formats import FormatRegistry
from geomio.shared.settings import GeometryIOSettings, configure


class TrackingResource:
    """In-memory binary stream that counts ``close()`` calls.

    ``close()`` is deliberately not idempotent: every call is counted and,
    when ``close_error`` is set, every call raises it.
    """

    def __init__(self, data: bytes = b"", close_error: BaseException | None = None):
        self._buffer = io.BytesIO(data)
        self.close_calls = 0
        self.close_error = close_error

    @property
    def closed(self) -> bool:
        return self._buffer.closed

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    def readline(self, size: int = -1) -> bytes:
        return self._buffer.readline(size)

    def __iter__(self):
        return iter(self._buffer)

    def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error
        self._buffer.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_resource():
    """Factory fixture for TrackingResource instances."""
    return TrackingResource


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings and restore them afterwards."""
    previous = configure(GeometryIOSettings())
    yield
    configure(previous)


@pytest.fixture
def clean_registry():
    """Empty format registry with entry point discovery disabled."""
    FormatRegistry.clear()
    FormatRegistry._entry_points_loaded = True
    yield FormatRegistry
    FormatRegistry.clear()
