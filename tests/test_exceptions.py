"""Tests for geomio exceptions and failure normalization."""

import copy
import pickle

from geomio.shared.exceptions import (
    ConfigError,
    FormatNotFoundError,
    GeometryIOError,
    UncheckedIOError,
    add_suppressed,
    create_unchecked,
    suppressed_of,
)


class TestCreateUnchecked:
    """Test create_unchecked function."""

    def test_message_contains_kind_and_message(self):
        """Test the "<Kind>: <message>" message format."""
        exc = FileNotFoundError("mesh.stl")

        unchecked = create_unchecked(exc)

        assert str(unchecked) == "FileNotFoundError: mesh.stl"

    def test_keeps_cause(self):
        """Test that the original error is retained as cause."""
        exc = OSError("disk error")

        unchecked = create_unchecked(exc)

        assert unchecked.cause is exc
        assert unchecked.__cause__ is exc

    def test_is_unchecked(self):
        """Test that the wrapper is not an OSError."""
        unchecked = create_unchecked(OSError("x"))

        assert isinstance(unchecked, UncheckedIOError)
        assert isinstance(unchecked, RuntimeError)
        assert isinstance(unchecked, GeometryIOError)
        assert not isinstance(unchecked, OSError)

    def test_errno_message(self):
        """Test errno-style OSError messages are preserved."""
        exc = OSError(28, "No space left on device")

        assert str(create_unchecked(exc)) == "OSError: [Errno 28] No space left on device"


class TestSuppressed:
    """Test suppressed error bookkeeping."""

    def test_empty_by_default(self):
        """Test that fresh errors have nothing suppressed."""
        assert suppressed_of(ValueError("x")) == ()

    def test_add_suppressed(self):
        """Test attaching several suppressed errors."""
        primary = ValueError("primary")
        first = OSError("first")
        second = OSError("second")

        add_suppressed(primary, first)
        add_suppressed(primary, second)

        assert suppressed_of(primary) == (first, second)
        assert primary.__notes__ == ["Suppressed: OSError: first", "Suppressed: OSError: second"]

    def test_self_suppression_ignored(self):
        """Test that an error is never suppressed behind itself."""
        primary = ValueError("primary")

        add_suppressed(primary, primary)

        assert suppressed_of(primary) == ()


class TestErrorMessages:
    """Test context fields in error messages."""

    def test_format_not_found(self):
        """Test FormatNotFoundError message and attributes."""
        exc = FormatNotFoundError("No format", file_name="a.xyz", extension="xyz")

        assert str(exc) == "No format (extension: 'xyz') (file: a.xyz)"
        assert exc.extension == "xyz"
        assert isinstance(exc, LookupError)

    def test_config_error(self):
        """Test ConfigError message and attributes."""
        exc = ConfigError("Bad value", config_path="io.yaml", field_name="default_encoding")

        assert str(exc) == "Bad value (field: default_encoding) (config: io.yaml)"
        assert exc.field_name == "default_encoding"


class TestUncheckedCopy:
    """Test that unchecked errors survive copying and pickling."""

    def test_copy(self):
        """Test copy.copy keeps message and cause."""
        unchecked = create_unchecked(OSError("disk"))

        copied = copy.copy(unchecked)

        assert str(copied) == "OSError: disk"
        assert copied.cause is unchecked.cause

    def test_pickle_round_trip(self):
        """Test that a pickled error rebuilds with its message and cause."""
        unchecked = create_unchecked(FileNotFoundError(2, "No such file", "mesh.stl"))

        restored = pickle.loads(pickle.dumps(unchecked))

        assert isinstance(restored, UncheckedIOError)
        assert str(restored) == str(unchecked)
        assert isinstance(restored.cause, FileNotFoundError)
        assert restored.cause.filename == "mesh.stl"
        assert restored.__cause__ is restored.cause
