"""Shared layer: exceptions and settings used across geomio."""

from .exceptions import (
    ConfigError,
    FormatNotFoundError,
    GeometryIOError,
    UncheckedIOError,
    add_suppressed,
    create_unchecked,
    suppressed_of,
)
from .settings import GeometryIOSettings, configure, get_settings, load_settings, save_settings


__all__ = [
    "ConfigError",
    "FormatNotFoundError",
    "GeometryIOError",
    "GeometryIOSettings",
    "UncheckedIOError",
    "add_suppressed",
    "configure",
    "create_unchecked",
    "get_settings",
    "load_settings",
    "save_settings",
    "suppressed_of",
]
