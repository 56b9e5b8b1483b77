"""
Resource-safe composition helpers.

These helpers tie the lifetime of a closeable resource (usually an open
binary stream) to the success or failure of the code that consumes it:

- :func:`try_apply_closeable` closes the resource only if the consumer fails.
- :func:`create_closeable_stream` hands ownership of the resource to the
  returned :class:`CloseableStream`, which closes it when it is closed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import IO, Protocol, TypeVar

from geomio.infrastructure.io.streams import CloseableStream, as_closeable_stream
from geomio.shared.exceptions import add_suppressed, create_unchecked
from geomio.shared.settings import get_settings

logger = logging.getLogger(__name__)


class Closeable(Protocol):
    """Anything with a ``close()`` method."""

    def close(self) -> None:
        ...


T = TypeVar("T")
C = TypeVar("C", bound=Closeable)
S = TypeVar("S", bound=IO[bytes])

# Errors after which the resource state is not trusted enough to close it
FATAL_ERRORS: tuple[type[BaseException], ...] = (MemoryError, RecursionError)


def try_apply_closeable(
    function: Callable[[C], T],
    closeable_supplier: Callable[[], C],
) -> T:
    """
    Pass a supplied closeable resource to ``function`` and return the result.

    The resource is closed if ``function`` fails, otherwise it is returned to
    the caller (through the result) still open.

    Parameters
    ----------
    function : Callable[[C], T]
        Function called with the supplied resource
    closeable_supplier : Callable[[], C]
        Factory for the resource. Its errors propagate unchanged and
        ``function`` is not called.

    Returns
    -------
    T
        Result of ``function(resource)``

    Raises
    ------
    Exception
        Whatever ``function`` raised. If closing the resource fails too, the
        close error is attached as a suppressed error instead of replacing it.
    """
    closeable = closeable_supplier()
    try:
        return function(closeable)
    except FATAL_ERRORS:
        raise
    except Exception as exc:
        try:
            closeable.close()
        except Exception as suppressed:
            if get_settings().log_close_failures:
                logger.warning(
                    "Failed to close %r after %s: %s",
                    closeable,
                    type(exc).__name__,
                    suppressed,
                )
            add_suppressed(exc, suppressed)
        else:
            logger.debug("Closed %r after %s", closeable, type(exc).__name__)
        raise


def close_as_unchecked(closeable: Closeable) -> Callable[[], None]:
    """
    Return a callback that closes ``closeable``.

    ``OSError`` raised by ``close()`` is re-raised as
    :class:`~geomio.shared.exceptions.UncheckedIOError`.
    """

    def close() -> None:
        try:
            closeable.close()
        except OSError as exc:
            raise create_unchecked(exc) from exc

    return close


def create_closeable_stream(
    stream_function: Callable[[S], Iterable[T]],
    input_stream_supplier: Callable[[], S],
) -> CloseableStream[T]:
    """
    Create a lazy stream associated with an input stream.

    The input stream is closed when the returned stream is closed, and
    immediately if stream creation fails. ``OSError`` raised while closing
    the input stream after this function returns is wrapped in
    :class:`~geomio.shared.exceptions.UncheckedIOError`.

    Parameters
    ----------
    stream_function : Callable[[S], Iterable[T]]
        Function accepting the input stream and returning its elements lazily
    input_stream_supplier : Callable[[], S]
        Factory for the input stream

    Returns
    -------
    CloseableStream[T]
        Stream owning the input stream
    """
    return try_apply_closeable(
        lambda inp: as_closeable_stream(stream_function(inp)).on_close(close_as_unchecked(inp)),
        input_stream_supplier,
    )
