"""Test the print content demultiplexer."""

import pytest

from p4cmd.content import Binary, Text, decode_content
from p4cmd.errors import DecodeError
from p4cmd.types import FileType

TEXT = FileType.parse("text")
BINARY = FileType.parse("binary")
UNKNOWN = FileType.parse("widget")


class TestContentAccessors:
    """Tests for Content variants."""

    def test_text_accessors(self):
        """Text exposes lines only."""
        content = Text(("a", "b"))
        assert content.as_text() == ("a", "b")
        assert content.as_binary() is None

    def test_binary_accessors(self):
        """Binary exposes bytes only."""
        content = Binary(b"\x00")
        assert content.as_binary() == b"\x00"
        assert content.as_text() is None


class TestTextTypes:
    """Tests for text-class file types."""

    def test_collects_text_lines(self):
        """Consecutive text lines are collected in order."""
        data = b"text: Hello\ntext: World\nexit: 0\n"
        content, end = decode_content(data, 0, TEXT, 494514)
        assert content == Text(("Hello", "World"))
        assert data[end:] == b"exit: 0\n"

    def test_stops_at_first_non_text_line(self):
        """Collection stops at the next record."""
        data = b"text: one\ninfo1: depotFile //depot/b\n"
        content, end = decode_content(data, 0, TEXT, 3)
        assert content == Text(("one",))
        assert data[end:].startswith(b"info1: depotFile")

    def test_empty_file(self):
        """An empty text file has no lines."""
        content, end = decode_content(b"exit: 0\n", 0, TEXT, 0)
        assert content == Text(())
        assert end == 0

    def test_falls_back_to_raw_span(self):
        """Without text lines, a text-class file is read as raw bytes."""
        content, end = decode_content(b"abcexit: 0\n", 0, TEXT, 3)
        assert content == Binary(b"abc")
        assert end == 3


class TestBinaryTypes:
    """Tests for binary file types."""

    def test_raw_span_verbatim(self):
        """Embedded NULs and newlines are kept verbatim."""
        data = b"1\x002\n3exit: 0\n"
        content, end = decode_content(data, 0, BINARY, 5)
        assert content == Binary(b"1\x002\n3")
        assert data[end:] == b"exit: 0\n"

    def test_tag_lookalike_not_interpreted(self):
        """A binary payload that looks like a text line stays binary."""
        data = b"text: hi\nexit: 0\n"
        content, _ = decode_content(data, 0, BINARY, 9)
        assert content == Binary(b"text: hi\n")

    def test_consumes_trailing_terminator(self):
        """One terminator right after the span is framing."""
        data = b"12345\nexit: 0\n"
        content, end = decode_content(data, 0, BINARY, 5)
        assert content == Binary(b"12345")
        assert data[end:] == b"exit: 0\n"

    def test_truncated_span(self):
        """A span shorter than declared is malformed."""
        with pytest.raises(DecodeError, match="expected 10 bytes"):
            decode_content(b"12345", 0, BINARY, 10)


class TestUnknownTypes:
    """Tests for the structural fallback."""

    def test_text_first(self):
        """Unknown types try text lines first."""
        content, _ = decode_content(b"text: x\nexit: 0\n", 0, UNKNOWN, 100)
        assert content == Text(("x",))

    def test_then_raw(self):
        """Unknown types fall back to the raw span."""
        content, _ = decode_content(b"\x89PNGexit: 0\n", 0, UNKNOWN, 4)
        assert content == Binary(b"\x89PNG")
