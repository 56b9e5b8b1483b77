"""geomio: I/O core utilities for geometry file-format readers and writers."""

from geomio.infrastructure.io import (
    CloseableStream,
    FileGeometryInput,
    FileGeometryOutput,
    FormatRegistry,
    GeometryFormat,
    GeometryInput,
    GeometryOutput,
    StreamGeometryInput,
    StreamGeometryOutput,
    create_closeable_stream,
    file_extension_of,
    file_name_of,
    read_lines,
    try_apply_closeable,
)
from geomio.shared import (
    GeometryIOError,
    GeometryIOSettings,
    UncheckedIOError,
    configure,
    create_unchecked,
    get_settings,
)

__version__ = "0.1.0"

__all__ = [
    "CloseableStream",
    "FileGeometryInput",
    "FileGeometryOutput",
    "FormatRegistry",
    "GeometryFormat",
    "GeometryIOError",
    "GeometryIOSettings",
    "GeometryInput",
    "GeometryOutput",
    "StreamGeometryInput",
    "StreamGeometryOutput",
    "UncheckedIOError",
    "configure",
    "create_closeable_stream",
    "create_unchecked",
    "file_extension_of",
    "file_name_of",
    "get_settings",
    "read_lines",
    "try_apply_closeable",
]
