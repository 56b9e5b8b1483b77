"""Infrastructure I/O helpers (names, resources, streams, formats)."""

from .formats import FormatRegistry, GeometryFormat
from .inputs import (
    FileGeometryInput,
    FileGeometryOutput,
    GeometryInput,
    GeometryOutput,
    StreamGeometryInput,
    StreamGeometryOutput,
)
from .lines import read_lines
from .names import file_extension_of, file_name_of
from .resources import close_as_unchecked, create_closeable_stream, try_apply_closeable
from .streams import CloseableStream, as_closeable_stream


__all__ = [
    "CloseableStream",
    "FileGeometryInput",
    "FileGeometryOutput",
    "FormatRegistry",
    "GeometryFormat",
    "GeometryInput",
    "GeometryOutput",
    "StreamGeometryInput",
    "StreamGeometryOutput",
    "as_closeable_stream",
    "close_as_unchecked",
    "create_closeable_stream",
    "file_extension_of",
    "file_name_of",
    "read_lines",
    "try_apply_closeable",
]
