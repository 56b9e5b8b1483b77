"""
Runtime settings for geomio.

Settings are a plain dataclass that can be exported to and imported from a
YAML file. A process-wide active instance is returned by :func:`get_settings`
and replaced with :func:`configure`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from geomio.shared.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometryIOSettings:
    """Settings shared by geometry inputs, outputs and streams.

    Parameters
    ----------
    default_encoding : str
        Text encoding used when an input/output does not specify one.
    close_on_exhaustion : bool
        Close a closeable stream (and its resource) as soon as iteration
        reaches the end or fails.
    log_close_failures : bool
        Log close failures that are suppressed behind another error.
    """

    default_encoding: str = "utf-8"
    close_on_exhaustion: bool = True
    log_close_failures: bool = True

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], config_path: str | None = None
    ) -> GeometryIOSettings:
        """Build settings from a mapping, validating keys and value types."""
        known = {f.name: f for f in fields(cls)}
        defaults = cls()
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                raise ConfigError(
                    "Unknown setting", config_path=config_path, field_name=key
                )
            expected = type(getattr(defaults, key))
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Expected {expected.__name__}, got {type(value).__name__}",
                    config_path=config_path,
                    field_name=key,
                )
            values[key] = value

        return cls(**values)


_active_settings = GeometryIOSettings()


def get_settings() -> GeometryIOSettings:
    """Return the active settings."""
    return _active_settings


def configure(
    settings: GeometryIOSettings | None = None, **overrides: Any
) -> GeometryIOSettings:
    """
    Replace the active settings.

    Parameters
    ----------
    settings : GeometryIOSettings | None
        New base settings; the current ones are used if None
    **overrides
        Individual fields to override on top of the base settings

    Returns
    -------
    GeometryIOSettings
        The previous settings, so callers can restore them
    """
    global _active_settings

    previous = _active_settings
    base = settings if settings is not None else previous
    if overrides:
        merged = base.to_dict()
        merged.update(overrides)
        base = GeometryIOSettings.from_dict(merged)
    _active_settings = base
    logger.debug("Active geomio settings: %s", base)
    return previous


def load_settings(path: Path | str) -> GeometryIOSettings:
    """
    Load settings from a YAML file.

    Missing keys keep their defaults. An empty file yields default settings.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ConfigError
        If the file is not a YAML mapping or holds invalid values
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", config_path=str(path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Settings file must contain a mapping", config_path=str(path))

    settings = GeometryIOSettings.from_dict(data, config_path=str(path))
    logger.info("Loaded geomio settings from %s", path)
    return settings


def save_settings(settings: GeometryIOSettings, path: Path | str) -> None:
    """Write settings to a YAML file, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
    logger.info("Saved geomio settings to %s", path)

