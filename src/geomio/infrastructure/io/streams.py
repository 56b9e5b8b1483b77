"""
Closeable lazy streams.

A :class:`CloseableStream` is a forward-only iterator that owns whatever
resources were registered on it with :meth:`CloseableStream.on_close`. The
resources are released the first time the stream is closed: explicitly,
on ``with`` exit, or (with ``close_on_exhaustion`` enabled) when iteration
ends or fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from geomio.shared.exceptions import add_suppressed
from geomio.shared.settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

CloseHandler = Callable[[], None]


class _CloseState:
    """Close handlers shared by a stream and the streams derived from it."""

    def __init__(self) -> None:
        self.handlers: list[CloseHandler] = []
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True

        handlers, self.handlers = self.handlers, []
        # Every handler runs, even after a KeyboardInterrupt from an earlier one
        error: BaseException | None = None
        for handler in handlers:
            try:
                handler()
            except BaseException as e:
                if error is None:
                    error = e
                else:
                    add_suppressed(error, e)

        if error is not None:
            raise error


class CloseableStream(Generic[T]):
    """
    Lazy, forward-only sequence tied to the lifetime of its resources.

    Parameters
    ----------
    iterable : Iterable[T]
        Source of elements; iterated lazily
    close_on_exhaustion : bool | None
        Close when iteration ends or raises. Defaults to the active
        settings' ``close_on_exhaustion``.

    Examples
    --------
    >>> stream = CloseableStream(iter([1, 2, 3])).on_close(lambda: print("closed"))
    >>> with stream:
    ...     next(stream)
    1
    closed
    """

    def __init__(
        self,
        iterable: Iterable[T],
        close_on_exhaustion: bool | None = None,
        *,
        _state: _CloseState | None = None,
    ):
        self._iterator: Iterator[T] = iter(iterable)
        if close_on_exhaustion is None:
            close_on_exhaustion = get_settings().close_on_exhaustion
        self._close_on_exhaustion = close_on_exhaustion
        self._state = _state if _state is not None else _CloseState()

        # Generators hold frames (and possibly files); close them with the stream
        close_iterator = getattr(self._iterator, "close", None)
        if callable(close_iterator) and _state is None:
            self._state.handlers.append(close_iterator)

    @property
    def closed(self) -> bool:
        """Whether the stream has been closed."""
        return self._state.closed

    def on_close(self, handler: CloseHandler) -> CloseableStream[T]:
        """
        Register a handler to run when the stream is closed.

        Handlers run once, in registration order.

        Returns
        -------
        CloseableStream[T]
            This stream, for chaining
        """
        if self._state.closed:
            raise ValueError("Cannot register a close handler on a closed stream")
        self._state.handlers.append(handler)
        return self

    def close(self) -> None:
        """
        Close the stream, running every registered handler at most once.

        If several handlers fail, the first error is raised with the others
        attached as suppressed errors.
        """
        if not self._state.closed:
            logger.debug("Closing stream (%d handlers)", len(self._state.handlers))
        self._state.close()

    def __iter__(self) -> CloseableStream[T]:
        return self

    def __next__(self) -> T:
        if self._state.closed:
            raise StopIteration
        try:
            return next(self._iterator)
        except StopIteration:
            if self._close_on_exhaustion:
                self.close()
            raise
        except Exception as e:
            if self._close_on_exhaustion:
                try:
                    self.close()
                except Exception as close_error:
                    add_suppressed(e, close_error)
            raise

    def __enter__(self) -> CloseableStream[T]:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_val is None:
            self.close()
            return
        try:
            self.close()
        except Exception as close_error:
            add_suppressed(exc_val, close_error)

    def map(self, func: Callable[[T], R]) -> CloseableStream[R]:
        """Return a stream of ``func(item)`` sharing this stream's resources."""
        return CloseableStream(
            (func(item) for item in self),
            self._close_on_exhaustion,
            _state=self._state,
        )

    def filter(self, predicate: Callable[[T], bool]) -> CloseableStream[T]:
        """Return a stream of the items matching ``predicate``, sharing resources."""
        return CloseableStream(
            (item for item in self if predicate(item)),
            self._close_on_exhaustion,
            _state=self._state,
        )

    def to_list(self) -> list[T]:
        """Consume the remaining items into a list, then close the stream."""
        with self:
            return list(self)


def as_closeable_stream(iterable: Iterable[T]) -> CloseableStream[T]:
    """Wrap ``iterable`` in a :class:`CloseableStream` unless it already is one."""
    if isinstance(iterable, CloseableStream):
        return iterable
    return CloseableStream(iterable)
