"""File content returned by `p4 print`: tagged text lines or a raw byte span."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from p4cmd import parser
from p4cmd.types import FileType

logger = logging.getLogger(__name__)


class Content:
    """Printed file content; either Text or Binary."""

    def as_text(self) -> Optional[Tuple[str, ...]]:
        return None

    def as_binary(self) -> Optional[bytes]:
        return None


@dataclass(frozen=True)
class Text(Content):
    """One entry per `text:` line, tag and line terminator stripped."""

    lines: Tuple[str, ...]

    def as_text(self) -> Optional[Tuple[str, ...]]:
        return self.lines


@dataclass(frozen=True)
class Binary(Content):
    """Exactly `fileSize` bytes, verbatim."""

    data: bytes

    def as_binary(self) -> Optional[bytes]:
        return self.data


def _text_lines(data: bytes, pos: int) -> Tuple[Tuple[str, ...], int]:
    lines = []
    while True:
        parsed = parser.text_line(data, pos)
        if parsed is None:
            break
        line, pos = parsed
        lines.append(line)
    return tuple(lines), pos


def _raw_span(data: bytes, pos: int, file_size: int) -> Tuple[Binary, int]:
    payload, pos = parser.take(data, pos, file_size)
    # No tag line starts with a terminator, so one directly after the span
    # belongs to the span's framing.
    end = parser.newline(data, pos, merge_lf_cr=False)
    return Binary(payload), pos if end is None else end


def _after_lf_cr(data: bytes, pos: int) -> int:
    if pos > 0 and data.startswith(b"\n\r", pos - 1):
        return pos + 1
    return pos


def binary_follows(file_type: FileType) -> bool:
    """Whether a record of this type is always followed by a raw span."""
    return file_type.is_binary


def decode_content(
    data: bytes, pos: int, file_type: FileType, file_size: int
) -> Tuple[Content, int]:
    """
    Decode the content that follows a print record's `fileSize` line.

    `pos` is just past the `fileSize` line ending, read without joining
    `\\n\\r`, so a raw span starting with `\\r` is intact. Text lines are
    looked for after the `\\r` half of such a pair as well.

    The already-parsed file type decides first: binary types are read as a
    raw span of `file_size` bytes without looking at them. Text types are
    read as `text:` lines, falling back to a raw span when there are none.
    Unknown types try text lines first, then the raw span.

    Raises:
        DecodeError: If a raw span is shorter than `file_size`
    """
    if binary_follows(file_type):
        return _raw_span(data, pos, file_size)

    line_start = _after_lf_cr(data, pos)
    lines, end = _text_lines(data, line_start)
    if lines:
        return Text(lines), end
    if file_type.is_text and file_size == 0:
        return Text(()), line_start

    logger.debug(f"No text lines for {file_type} content, reading {file_size} raw bytes")
    return _raw_span(data, pos, file_size)
