"""Registry of geometry data formats, keyed by name and file extension.

Formats can be registered directly or discovered from the
``geomio.formats`` entry point group. Lookups by name and by extension are
case-insensitive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points

from geomio.infrastructure.io.inputs import GeometryInput, GeometryOutput
from geomio.infrastructure.io.names import file_extension_of, file_name_of
from geomio.shared.exceptions import FormatNotFoundError


logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "geomio.formats"


@dataclass(frozen=True)
class GeometryFormat:
    """A named data format and the file extensions it uses.

    The first extension is the default one used when writing.
    """

    name: str
    file_extensions: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.file_extensions, str):
            raise TypeError(
                f"Format '{self.name}' file_extensions must be a sequence of strings, "
                f"not a single string"
            )
        if not self.file_extensions:
            raise ValueError(f"Format '{self.name}' must declare at least one file extension")
        # Store as a tuple without leading dots (".stl" -> "stl")
        object.__setattr__(
            self,
            "file_extensions",
            tuple(ext.lstrip(".") for ext in self.file_extensions),
        )

    @property
    def default_file_extension(self) -> str:
        return self.file_extensions[0]


class FormatRegistry:
    """Registry of known geometry formats.

    Example
    -------
    >>> FormatRegistry.register(GeometryFormat("stl", ("stl",)))
    >>> FormatRegistry.find_for_file_name("/models/Part.STL").name
    'stl'
    """

    _formats: dict[str, GeometryFormat] = {}
    _extensions: dict[str, GeometryFormat] = {}
    _entry_points_loaded: bool = False

    @classmethod
    def register(cls, fmt: GeometryFormat) -> None:
        """Register a format, replacing any format of the same name.

        An extension already claimed by another format is remapped to
        ``fmt``.
        """
        key = fmt.name.lower()
        previous = cls._formats.get(key)
        if previous is not None:
            cls._drop_extensions(previous)

        cls._formats[key] = fmt
        for ext in fmt.file_extensions:
            ext_key = ext.lower()
            claimed = cls._extensions.get(ext_key)
            if claimed is not None and claimed.name.lower() != key:
                logger.warning(
                    "Extension '%s' moved from format '%s' to '%s'",
                    ext,
                    claimed.name,
                    fmt.name,
                )
            cls._extensions[ext_key] = fmt

        logger.info("Registered format: %s - extensions: %s", fmt.name, fmt.file_extensions)

    @classmethod
    def _drop_extensions(cls, fmt: GeometryFormat) -> None:
        for ext in fmt.file_extensions:
            if cls._extensions.get(ext.lower()) is fmt:
                del cls._extensions[ext.lower()]

    @classmethod
    def get(cls, name: str) -> GeometryFormat | None:
        """Get a registered format by name, or None."""
        cls._load_entry_points()
        return cls._formats.get(name.lower())

    @classmethod
    def find_for_extension(cls, extension: str | None) -> GeometryFormat | None:
        """Get the format registered for a file extension (without dot), or None."""
        if not extension:
            return None
        cls._load_entry_points()
        return cls._extensions.get(extension.lower())

    @classmethod
    def find_for_file_name(cls, file_name: str | None) -> GeometryFormat | None:
        """Get the format matching the extension of a file name or path, or None."""
        return cls.find_for_extension(file_extension_of(file_name_of(file_name)))

    @classmethod
    def require_for(
        cls,
        target: GeometryInput | GeometryOutput,
        fmt: GeometryFormat | str | None = None,
    ) -> GeometryFormat:
        """
        Resolve the format for an input or output.

        Parameters
        ----------
        target : GeometryInput | GeometryOutput
            Input or output to be read or written
        fmt : GeometryFormat | str | None
            Explicit format or format name; detected from the file name if None

        Raises
        ------
        FormatNotFoundError
            If no format is given and none matches the file name
        """
        if isinstance(fmt, GeometryFormat):
            return fmt
        if fmt is not None:
            found = cls.get(fmt)
            if found is None:
                raise FormatNotFoundError(
                    f"Unknown format '{fmt}'. Available: {', '.join(cls.names())}"
                )
            return found

        file_name = target.file_name
        if file_name is None:
            raise FormatNotFoundError("Cannot determine format: no file name and no format given")

        extension = file_extension_of(file_name)
        found = cls.find_for_extension(extension)
        if found is None:
            raise FormatNotFoundError(
                "No format registered for file",
                file_name=file_name,
                extension=extension,
            )
        return found

    @classmethod
    def names(cls) -> list[str]:
        """Sorted names of the registered formats."""
        cls._load_entry_points()
        return sorted(fmt.name for fmt in cls._formats.values())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered formats (for testing)."""
        cls._formats.clear()
        cls._extensions.clear()
        cls._entry_points_loaded = False

    # Entry point discovery

    @classmethod
    def _load_entry_points(cls) -> None:
        """Load formats from entry_points (lazy, called once)."""
        if cls._entry_points_loaded:
            return

        cls._entry_points_loaded = True

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                fmt = ep.load()
            except Exception as e:
                logger.warning("Failed to load format entry_point '%s': %s", ep.name, e)
                continue

            if not isinstance(fmt, GeometryFormat):
                logger.warning(
                    "Entry point '%s' is not a GeometryFormat (got %s)",
                    ep.name,
                    type(fmt).__name__,
                )
                continue

            # Explicit registrations win over discovered ones
            if fmt.name.lower() not in cls._formats:
                cls.register(fmt)
                logger.debug("Loaded format from entry_point: %s", ep.name)


__all__ = ["FormatRegistry", "GeometryFormat"]
