"""`p4 print`: retrieve depot file contents."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from p4cmd import parser
from p4cmd.commands.base import decode_stream, fields, timestamp
from p4cmd.commands.files import LISTING_FIELDS
from p4cmd.content import Content, decode_content
from p4cmd.items import ItemStream
from p4cmd.parser import Parsed
from p4cmd.types import Action, FileType


@dataclass(frozen=True)
class PrintedFile:
    """A depot file revision together with its content."""

    depot_file: str
    rev: int
    change: int
    action: str
    file_type: FileType
    time: datetime
    file_size: int
    content: Content

    @property
    def action_kind(self) -> Action:
        return Action.parse(self.action)


def printed_file_record(data: bytes, pos: int) -> Parsed[PrintedFile]:
    parsed = fields(data, pos, LISTING_FIELDS)
    if parsed is None:
        return None
    (depot_file, rev, change, action, raw_type, seconds), end = parsed
    file_type = FileType.parse(raw_type)

    # The terminator before a raw span must not swallow the span's first byte
    parsed_size = parser.file_size(data, end, merge_lf_cr=False)
    if parsed_size is None:
        return None
    file_size, end = parsed_size

    content, end = decode_content(data, end, file_type, file_size)
    record = PrintedFile(
        depot_file=depot_file,
        rev=rev,
        change=change,
        action=action,
        file_type=file_type,
        time=timestamp(seconds, pos),
        file_size=file_size,
        content=content,
    )
    return record, end


def decode_print(data: bytes, invocation: str = "p4 print") -> ItemStream[PrintedFile]:
    """Decode `p4 -s -ztag print` output."""
    return decode_stream(data, invocation, printed_file_record)


def build_args(
    files: tuple[str, ...],
    all_revs: bool = False,
    keyword_expansion: bool = True,
    max_files: Optional[int] = None,
) -> list[str]:
    """
    Arguments for `p4 print`.

    Args:
        files: Files to print; the head revision unless a revision is given
        all_revs: -a, print every revision in the range, not just the highest
        keyword_expansion: When False, pass -k to suppress keyword expansion
        max_files: -m, limit to the first N files
    """
    args = ["print"]
    if all_revs:
        args.append("-a")
    if not keyword_expansion:
        args.append("-k")
    if max_files is not None:
        args.extend(["-m", str(max_files)])
    args.extend(files)
    return args
