"""Tests for lazy line reading."""

import io
import logging
import time

import pytest

from geomio.infrastructure.io.inputs import FileGeometryInput, StreamGeometryInput
from geomio.infrastructure.io.lines import iter_decoded_lines, read_lines


class TestIterDecodedLines:
    """Test iter_decoded_lines function."""

    def test_line_endings(self):
        """Test that LF and CRLF terminators are removed."""
        data = b"a\nb\r\nc"

        assert list(iter_decoded_lines(io.BytesIO(data), "utf-8")) == ["a", "b", "c"]

    def test_multibyte_across_chunks(self):
        """Test that characters split across chunks decode correctly."""
        data = "été\nhéllo\n".encode("utf-8")

        lines = list(iter_decoded_lines(io.BytesIO(data), "utf-8", chunk_size=1))

        assert lines == ["été", "héllo"]

    def test_crlf_across_chunks(self):
        """Test CRLF split between two chunks."""
        assert list(iter_decoded_lines(io.BytesIO(b"ab\r\ncd\r\n"), "ascii", chunk_size=3)) == [
            "ab",
            "cd",
        ]

    def test_empty(self):
        """Test an empty stream."""
        assert list(iter_decoded_lines(io.BytesIO(b""), "utf-8")) == []

    def test_blank_lines_kept(self):
        """Test that blank lines are preserved."""
        assert list(iter_decoded_lines(io.BytesIO(b"\n\nx\n"), "utf-8")) == ["", "", "x"]

    def test_long_line_small_chunks(self):
        """Test that a multi-megabyte line is read in linear time."""
        size = 8 * 1024 * 1024
        data = b"x" * size + b"\nend"

        start = time.perf_counter()
        lines = list(iter_decoded_lines(io.BytesIO(data), "ascii", chunk_size=1024))
        elapsed = time.perf_counter() - start

        assert [len(line) for line in lines] == [size, 3]
        assert lines[1] == "end"
        assert elapsed < 5.0


class TestReadLines:
    """Test read_lines function."""

    def test_reads_file(self, temp_dir):
        """Test reading lines from a file input."""
        path = temp_dir / "cube.obj"
        path.write_bytes(b"v 0 0 0\nv 1 0 0\nf 1 2 3\n")

        with read_lines(FileGeometryInput(path)) as lines:
            assert list(lines) == ["v 0 0 0", "v 1 0 0", "f 1 2 3"]

    def test_file_closed_with_stream(self, temp_dir):
        """Test that the file stays open while lines are consumed."""
        path = temp_dir / "data.txt"
        path.write_bytes(b"1\n2\n3\n")
        opened = []

        class _Input(FileGeometryInput):
            def open(self):
                stream = super().open()
                opened.append(stream)
                return stream

        lines = read_lines(_Input(path))
        assert next(lines) == "1"
        assert not opened[0].closed

        lines.close()
        assert opened[0].closed

    def test_encoding(self, temp_dir):
        """Test input encodings and explicit overrides."""
        path = temp_dir / "latin.txt"
        path.write_bytes("café\n".encode("latin-1"))

        assert read_lines(FileGeometryInput(path, encoding="latin-1")).to_list() == ["café"]
        assert read_lines(FileGeometryInput(path), encoding="latin-1").to_list() == ["café"]

    def test_decode_error_closes_input(self, temp_dir):
        """Test that a decoding failure releases the file."""
        path = temp_dir / "bad.txt"
        path.write_bytes(b"\xff\xfe\n")

        lines = read_lines(FileGeometryInput(path, encoding="ascii"))

        with pytest.raises(UnicodeDecodeError):
            next(lines)
        assert lines.closed

    def test_unknown_encoding(self, temp_dir):
        """Test that an unknown encoding fails before opening the input."""
        opened = []

        class _Input(FileGeometryInput):
            def open(self):
                opened.append(True)
                return super().open()

        with pytest.raises(LookupError):
            read_lines(_Input(temp_dir / "x.txt", encoding="no-such-codec"))

        assert opened == []

    def test_missing_file(self, temp_dir):
        """Test that a missing file propagates FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_lines(FileGeometryInput(temp_dir / "missing.obj"))

    def test_stream_input_left_open(self, caplog):
        """Test that closing lines from a stream input leaves the caller's stream open."""
        stream = io.BytesIO(b"a\nb\n")

        with caplog.at_level(logging.DEBUG, logger="geomio"):
            assert read_lines(StreamGeometryInput(stream, file_name="a.txt")).to_list() == ["a", "b"]

        assert not stream.closed
        assert "Closing stream" in caplog.text
