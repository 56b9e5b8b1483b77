"""Lazy line reading for text-based geometry formats."""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from typing import IO

from geomio.infrastructure.io.inputs import GeometryInput
from geomio.infrastructure.io.resources import create_closeable_stream
from geomio.infrastructure.io.streams import CloseableStream

CHUNK_SIZE = 64 * 1024


def iter_decoded_lines(
    stream: IO[bytes], encoding: str, chunk_size: int = CHUNK_SIZE
) -> Iterator[str]:
    """Yield lines from a binary stream, decoded and without line terminators."""
    decoder = codecs.getincrementaldecoder(encoding)()
    # Text of the current, unterminated line
    parts: list[str] = []

    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        text = decoder.decode(chunk)
        if "\n" not in text:
            parts.append(text)
            continue

        lines = text.split("\n")
        parts.append(lines[0])
        yield "".join(parts).removesuffix("\r")
        for line in lines[1:-1]:
            yield line.removesuffix("\r")
        parts = [lines[-1]]

    parts.append(decoder.decode(b"", final=True))
    tail = "".join(parts)
    if tail:
        yield tail.removesuffix("\r")


def read_lines(
    geometry_input: GeometryInput, encoding: str | None = None
) -> CloseableStream[str]:
    """
    Open ``geometry_input`` and return a lazy stream of its lines.

    The input is opened immediately and closed when the returned stream is
    closed (or exhausted).

    Parameters
    ----------
    geometry_input : GeometryInput
        Input to read
    encoding : str | None
        Overrides the input's encoding

    Returns
    -------
    CloseableStream[str]
        Lines without trailing ``"\\n"`` / ``"\\r\\n"``
    """
    text_encoding = encoding or geometry_input.encoding
    # Fail fast on unknown encodings, before the input is opened
    codecs.lookup(text_encoding)

    return create_closeable_stream(
        lambda stream: iter_decoded_lines(stream, text_encoding),
        geometry_input.open,
    )
