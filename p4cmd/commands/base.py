"""Shared decode loop for every tagged-output command."""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from p4cmd import parser
from p4cmd.errors import DecodeError, ParseFailed
from p4cmd.items import Item, ItemStream, MessageLevel
from p4cmd.parser import Parsed
from p4cmd.types import from_timestamp

logger = logging.getLogger(__name__)

T = TypeVar("T")

RecordDecoder = Callable[[bytes, int], Parsed[T]]
LineDecoder = Callable[[bytes, int], Parsed[Item]]

_MESSAGE_LINES = (
    (parser.error_line, MessageLevel.ERROR),
    (parser.warning_line, MessageLevel.WARNING),
)


def fields(data: bytes, pos: int, decoders: Sequence[Callable]) -> Optional[Tuple[list, int]]:
    """
    Apply field decoders strictly in order.

    Returns:
        (values, next offset) if every field matched, else None. Nothing is
        committed on a partial match.
    """
    values = []
    for decoder in decoders:
        parsed = decoder(data, pos)
        if parsed is None:
            return None
        value, pos = parsed
        values.append(value)
    return values, pos


def timestamp(seconds: int, pos: int) -> datetime:
    """Epoch seconds from a `time` field as UTC datetime."""
    try:
        return from_timestamp(seconds)
    except (OverflowError, OSError, ValueError) as e:
        raise DecodeError(f"time value {seconds} out of range", pos) from e


def message_line(data: bytes, pos: int) -> Parsed[Item]:
    """`error:` / `warning:` lines reported in-stream by p4."""
    for decoder, level in _MESSAGE_LINES:
        parsed = decoder(data, pos)
        if parsed is not None:
            text, pos = parsed
            return Item.message(level, text), pos
    return None


def info_line(data: bytes, pos: int) -> Parsed[Item]:
    """Untagged `info:` lines, kept as informational messages."""
    parsed = parser.info_line(data, pos)
    if parsed is None:
        return None
    text, pos = parsed
    return Item.message(MessageLevel.INFO, text), pos


def decode_items(
    data: bytes,
    record: RecordDecoder[T],
    informational: Optional[LineDecoder] = None,
) -> list[Item[T]]:
    """
    Decode a complete buffer into items, exit item last.

    Repeatedly tries the record pattern, then a message line, then the
    command's informational line, until none matches. A single exit line
    must follow; after it only line terminators may remain.

    Raises:
        DecodeError: If the buffer does not conform
    """
    items: list[Item[T]] = []
    pos = 0
    while pos < len(data):
        parsed_record = record(data, pos)
        if parsed_record is not None:
            value, pos = parsed_record
            items.append(Item.data(value))
            continue

        parsed_line = message_line(data, pos)
        if parsed_line is None and informational is not None:
            parsed_line = informational(data, pos)
        if parsed_line is None:
            break
        item, pos = parsed_line
        items.append(item)

    parsed_exit = parser.exit_line(data, pos)
    if parsed_exit is None:
        raise DecodeError("expected exit line", pos)
    code, pos = parsed_exit
    items.append(Item.error(code))

    trailing = data[pos:].strip(b"\r\n")
    if trailing:
        raise DecodeError("unexpected data after exit line", pos)

    return items


def decode_stream(
    data: bytes,
    invocation: str,
    record: RecordDecoder[T],
    informational: Optional[LineDecoder] = None,
) -> ItemStream[T]:
    """
    Decode a buffer into an ItemStream.

    Args:
        data: Complete standard output of the p4 process
        invocation: Description of the command, used as error context
        record: Decoder for one full record of this command
        informational: Optional decoder for extra ignorable/info lines

    Returns:
        ItemStream ending with the exit item

    Raises:
        ParseFailed: If the buffer does not conform to the grammar
    """
    try:
        items = decode_items(data, record, informational)
    except DecodeError as e:
        logger.debug(f"Decode failed for {invocation}: {e}")
        raise ParseFailed(f"Failed to parse p4 output: {e}", context=invocation) from e

    logger.debug(f"Decoded {len(items)} items from {len(data)} bytes ({invocation})")
    return ItemStream(items)
