"""
File name and extension helpers.

Both ``/`` and ``\\`` are treated as path separators on every platform, so
Windows paths parse the same way on POSIX hosts and vice versa.
"""

from __future__ import annotations

import os
from urllib.parse import ParseResult, SplitResult

UNIX_PATH_SEP = "/"
WINDOWS_PATH_SEP = "\\"

PathLikeInput = str | os.PathLike | ParseResult | SplitResult | None


def _path_string(path: str | os.PathLike | ParseResult | SplitResult) -> str:
    """Return the string form of a path-like value (URL path component for URLs)."""
    if isinstance(path, str):
        return path
    if isinstance(path, (ParseResult, SplitResult)):
        return path.path
    if isinstance(path, os.PathLike):
        name = os.fspath(path)
        if isinstance(name, bytes):
            name = os.fsdecode(name)
        return name
    raise TypeError(f"Expected str, path-like or parsed URL, got {type(path).__name__}")


def file_name_of(path: PathLikeInput) -> str | None:
    """
    Get the file name of a path, defined as the text after the last separator.

    Parameters
    ----------
    path : str | os.PathLike | ParseResult | SplitResult | None
        Raw path string, path object, or parsed URL (only its path
        component is used)

    Returns
    -------
    str | None
        File name, or None if ``path`` is None or ends with a separator

    Examples
    --------
    >>> file_name_of("/a/b/file.tar.gz")
    'file.tar.gz'
    >>> file_name_of("C:\\\\data\\\\") is None
    True
    """
    if path is None:
        return None

    path_str = _path_string(path)
    last_sep = max(path_str.rfind(UNIX_PATH_SEP), path_str.rfind(WINDOWS_PATH_SEP))

    if last_sep < len(path_str) - 1:
        return path_str[last_sep + 1:]

    # Empty string has no separator: it is its own (empty) file name
    if last_sep == -1:
        return path_str
    return None


def file_extension_of(file_name: str | None) -> str | None:
    """
    Get the part of a file name after the last dot.

    Returns the empty string if the name contains no dot, and None if
    ``file_name`` is None.
    """
    if file_name is None:
        return None

    idx = file_name.rfind(".")
    if idx > -1:
        return file_name[idx + 1:]
    return ""
