"""
Field decoders for p4 tagged output (`p4 -s -ztag`).

Every decoder takes the whole buffer and an offset at the start of a line.
It returns `(value, next_offset)` when its tag matches, or None when it does
not; nothing is consumed on a mismatch. Once a tag has matched, malformed
content raises DecodeError instead of falling through to other alternatives.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple, TypeVar

from p4cmd.errors import DecodeError

T = TypeVar("T")
Parsed = Optional[Tuple[T, int]]

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1

_LINE_END = re.compile(rb"[\r\n]")


def newline(data: bytes, pos: int, merge_lf_cr: bool = True) -> Optional[int]:
    """
    Match one line terminator at `pos`.

    Accepts `\\r\\n`, `\\n\\r`, `\\n` and `\\r`; two-byte pairs are consumed
    whole. With `merge_lf_cr=False` a `\\n` is never joined with a following
    `\\r`, which matters when raw bytes come next.

    Returns:
        Offset just past the terminator, or None
    """
    if data.startswith(b"\r\n", pos):
        return pos + 2
    if merge_lf_cr and data.startswith(b"\n\r", pos):
        return pos + 2
    if data.startswith(b"\n", pos) or data.startswith(b"\r", pos):
        return pos + 1
    return None


def line_end(data: bytes, start: int) -> int:
    """Offset of the first `\\r` or `\\n` at or after `start` (or end of buffer)."""
    match = _LINE_END.search(data, start)
    return match.start() if match else len(data)


def _terminate(data: bytes, value_end: int, name: str, merge_lf_cr: bool = True) -> int:
    end = newline(data, value_end, merge_lf_cr)
    if end is None:
        raise DecodeError(f"unterminated {name} line", value_end)
    return end


@dataclass(frozen=True)
class TextField:
    """A `<tag><utf-8 text><newline>` line."""

    name: str
    tag: bytes

    def __call__(self, data: bytes, pos: int) -> Parsed[str]:
        if not data.startswith(self.tag, pos):
            return None
        start = pos + len(self.tag)
        end = line_end(data, start)
        try:
            value = data[start:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"invalid UTF-8 in {self.name} field", start + e.start) from e
        return value, _terminate(data, end, self.name)


@dataclass(frozen=True)
class NumberField:
    """A `<tag><ascii digits><newline>` line, bounded to [minimum, maximum]."""

    name: str
    tag: bytes
    minimum: int
    maximum: int
    signed: bool = False

    def __call__(self, data: bytes, pos: int, merge_lf_cr: bool = True) -> Parsed[int]:
        if not data.startswith(self.tag, pos):
            return None
        start = pos + len(self.tag)
        end = line_end(data, start)
        span = data[start:end]
        digits = span[1:] if self.signed and span.startswith(b"-") else span
        # bytes.isdigit() only accepts ASCII 0-9
        if not digits.isdigit():
            raise DecodeError(f"malformed {self.name} value {span!r}", start)
        value = int(span)
        if not self.minimum <= value <= self.maximum:
            raise DecodeError(f"{self.name} value {value} out of range", start)
        return value, _terminate(data, end, self.name, merge_lf_cr)


# Status lines
exit_line = NumberField("exit", b"exit: ", I32_MIN, I32_MAX, signed=True)
error_line = TextField("error", b"error: ")
warning_line = TextField("warning", b"warning: ")
info_line = TextField("info", b"info: ")
text_line = TextField("text", b"text: ")

# Tagged fields
depot_file = TextField("depotFile", b"info1: depotFile ")
client_file = TextField("clientFile", b"info1: clientFile ")
path = TextField("path", b"info1: path ")
dir_ = TextField("dir", b"info1: dir ")
action = TextField("action", b"info1: action ")
file_type = TextField("type", b"info1: type ")
rev = NumberField("rev", b"info1: rev ", 0, U64_MAX)
change = NumberField("change", b"info1: change ", 0, U64_MAX)
file_size = NumberField("fileSize", b"info1: fileSize ", 0, U64_MAX)
time = NumberField("time", b"info1: time ", 0, I64_MAX)

INFO1_TAG = b"info1: "


def info1_line(data: bytes, pos: int) -> Parsed[str]:
    """
    Match any `info1: <name> <value>` line without interpreting the value.

    Returns:
        (field name, next offset), or None
    """
    if not data.startswith(INFO1_TAG, pos):
        return None
    start = pos + len(INFO1_TAG)
    end = line_end(data, start)
    raw_name = data[start:end].split(b" ", 1)[0]
    try:
        name = raw_name.decode("ascii")
    except UnicodeDecodeError as e:
        raise DecodeError("invalid field name in info1 line", start + e.start) from e
    return name, _terminate(data, end, "info1")


def take(data: bytes, pos: int, size: int) -> Tuple[bytes, int]:
    """
    Take exactly `size` raw bytes, uninterpreted.

    Raises:
        DecodeError: If fewer than `size` bytes remain
    """
    end = pos + size
    if end > len(data):
        raise DecodeError(f"expected {size} bytes, found {len(data) - pos}", pos)
    return data[pos:end], end
