"""
Geometry input and output descriptors.

Readers and writers receive one of these instead of a raw path or stream.
Each descriptor knows its file name (used for format detection), its text
encoding, and how to open the underlying binary stream.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any

from geomio.infrastructure.io.names import file_name_of
from geomio.shared.settings import get_settings

logger = logging.getLogger(__name__)


class CloseShieldStream:
    """
    View of a binary stream whose ``close()`` does not close the wrapped stream.

    After ``close()`` the view rejects further I/O with ``ValueError``, like a
    closed file, while the wrapped stream stays open for its owner.
    """

    def __init__(self, stream: IO[bytes]):
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self._stream.closed

    def close(self) -> None:
        self._closed = True

    def __getattr__(self, name: str) -> Any:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return getattr(self._stream, name)

    def __iter__(self):
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return iter(self._stream)

    def __enter__(self) -> CloseShieldStream:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class _Descriptor(ABC):
    """Common file name / encoding handling."""

    def __init__(self, file_name: str | None, encoding: str | None):
        self._file_name = file_name
        self._encoding = encoding

    @property
    def file_name(self) -> str | None:
        """File name used to detect the data format, if known."""
        return self._file_name

    @property
    def encoding(self) -> str:
        """Text encoding for text-based formats."""
        return self._encoding or get_settings().default_encoding

    @abstractmethod
    def open(self) -> IO[bytes]:
        """Open a binary stream; the caller owns and must close it."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(file_name={self.file_name!r}, encoding={self.encoding!r})"


class GeometryInput(_Descriptor):
    """Source of geometry data."""


class GeometryOutput(_Descriptor):
    """Destination for geometry data."""


class FileGeometryInput(GeometryInput):
    """
    Geometry input backed by a local file.

    Parameters
    ----------
    path : str | os.PathLike
        Path of the file to read
    encoding : str | None
        Text encoding; defaults to the active settings' ``default_encoding``
    """

    def __init__(self, path: str | os.PathLike, encoding: str | None = None):
        self.path = Path(path)
        super().__init__(file_name_of(self.path), encoding)

    def open(self) -> IO[bytes]:
        logger.debug("Opening %s for reading", self.path)
        return open(self.path, "rb")


class FileGeometryOutput(GeometryOutput):
    """Geometry output written to a local file (truncated on open)."""

    def __init__(self, path: str | os.PathLike, encoding: str | None = None):
        self.path = Path(path)
        super().__init__(file_name_of(self.path), encoding)

    def open(self) -> IO[bytes]:
        logger.debug("Opening %s for writing", self.path)
        return open(self.path, "wb")


class StreamGeometryInput(GeometryInput):
    """
    Geometry input reading from a stream owned by the caller.

    ``open()`` returns a close-shielded view, so readers closing what they
    opened leave the caller's stream open.
    """

    def __init__(
        self,
        stream: IO[bytes],
        file_name: str | None = None,
        encoding: str | None = None,
    ):
        self.stream = stream
        super().__init__(file_name_of(file_name), encoding)

    def open(self) -> IO[bytes]:
        return CloseShieldStream(self.stream)  # type: ignore[return-value]


class StreamGeometryOutput(GeometryOutput):
    """Geometry output writing to a stream owned by the caller."""

    def __init__(
        self,
        stream: IO[bytes],
        file_name: str | None = None,
        encoding: str | None = None,
    ):
        self.stream = stream
        super().__init__(file_name_of(file_name), encoding)

    def open(self) -> IO[bytes]:
        return CloseShieldStream(self.stream)  # type: ignore[return-value]
