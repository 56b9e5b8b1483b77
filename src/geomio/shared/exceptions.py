"""
Custom exceptions for geomio.

This module provides the library's exception hierarchy together with the
helpers used to normalize I/O failures at boundaries that cannot raise them.

Clean Architecture Note:
- This file belongs to the Shared layer (cross-cutting concerns)
- Can be imported by any layer (infrastructure, readers, writers)
"""

from __future__ import annotations


_SUPPRESSED_ATTR = "__suppressed__"


class GeometryIOError(Exception):
    """Base exception for all geomio errors."""

    pass


class UncheckedIOError(GeometryIOError, RuntimeError):
    """Raised in place of an ``OSError`` where callers cannot expect one.

    The original error is available as ``cause`` and is chained as
    ``__cause__`` when raised with :func:`create_unchecked`.
    """

    def __init__(self, message: str, cause: OSError):
        """
        Initialize UncheckedIOError.

        Parameters
        ----------
        message : str
            Error message
        cause : OSError
            The I/O error being wrapped
        """
        self.cause = cause
        # Both arguments kept in args so copy and pickle can rebuild the error
        super().__init__(message, cause)
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.args[0])


class FormatNotFoundError(GeometryIOError, LookupError):
    """Raised when no registered geometry format matches a request."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        extension: str | None = None,
    ):
        """
        Initialize FormatNotFoundError.

        Parameters
        ----------
        message : str
            Error message
        file_name : str | None
            File name used for the lookup
        extension : str | None
            Extension used for the lookup
        """
        self.file_name = file_name
        self.extension = extension

        full_message = message
        if extension is not None:
            full_message = f"{full_message} (extension: {extension!r})"
        if file_name:
            full_message = f"{full_message} (file: {file_name})"

        super().__init__(full_message)


class ConfigError(GeometryIOError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        field_name: str | None = None,
    ):
        """
        Initialize ConfigError.

        Parameters
        ----------
        message : str
            Error message
        config_path : str | None
            Path to the config file
        field_name : str | None
            Name of the invalid/missing config field
        """
        self.config_path = config_path
        self.field_name = field_name

        full_message = message
        if field_name:
            full_message = f"{full_message} (field: {field_name})"
        if config_path:
            full_message = f"{full_message} (config: {config_path})"

        super().__init__(full_message)


def create_unchecked(exc: OSError) -> UncheckedIOError:
    """Create an unchecked error from the given I/O error.

    The message of the returned error contains the original error's type
    name and message, e.g. ``"FileNotFoundError: [Errno 2] ..."``.

    Parameters
    ----------
    exc : OSError
        I/O error to wrap

    Returns
    -------
    UncheckedIOError
        Wrapper chained to ``exc``
    """
    msg = f"{type(exc).__name__}: {exc}"
    return UncheckedIOError(msg, exc)


def add_suppressed(exc: BaseException, suppressed: BaseException) -> None:
    """Attach ``suppressed`` to ``exc`` without replacing it.

    The suppressed error is kept in a list readable with
    :func:`suppressed_of` and summarized as a note on ``exc`` so it shows up
    in tracebacks.
    """
    if suppressed is exc:
        return
    errors = getattr(exc, _SUPPRESSED_ATTR, None)
    if errors is None:
        errors = []
        setattr(exc, _SUPPRESSED_ATTR, errors)
    errors.append(suppressed)
    exc.add_note(f"Suppressed: {type(suppressed).__name__}: {suppressed}")


def suppressed_of(exc: BaseException) -> tuple[BaseException, ...]:
    """Return the errors suppressed while ``exc`` was propagating."""
    return tuple(getattr(exc, _SUPPRESSED_ATTR, ()))
