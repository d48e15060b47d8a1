"""`p4 files`: list files in the depot."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from p4cmd import parser
from p4cmd.commands.base import decode_stream, fields, info_line, timestamp
from p4cmd.items import ItemStream
from p4cmd.parser import Parsed
from p4cmd.types import Action, FileType

LISTING_FIELDS = (
    parser.depot_file,
    parser.rev,
    parser.change,
    parser.action,
    parser.file_type,
    parser.time,
)


@dataclass(frozen=True)
class File:
    """Head (or selected) revision of a depot file."""

    depot_file: str
    rev: int
    change: int
    action: str
    file_type: FileType
    time: datetime

    @property
    def action_kind(self) -> Action:
        return Action.parse(self.action)


def file_record(data: bytes, pos: int) -> Parsed[File]:
    parsed = fields(data, pos, LISTING_FIELDS)
    if parsed is None:
        return None
    (depot_file, rev, change, action, file_type, seconds), end = parsed
    record = File(
        depot_file=depot_file,
        rev=rev,
        change=change,
        action=action,
        file_type=FileType.parse(file_type),
        time=timestamp(seconds, pos),
    )
    return record, end


def decode_files(data: bytes, invocation: str = "p4 files") -> ItemStream[File]:
    """Decode `p4 -s -ztag files` output."""
    return decode_stream(data, invocation, file_record, informational=info_line)


def build_args(
    files: tuple[str, ...],
    list_revisions: bool = False,
    syncable_only: bool = False,
    ignore_case: bool = False,
    max_files: Optional[int] = None,
) -> list[str]:
    """
    Arguments for `p4 files`.

    Args:
        files: File patterns, optionally with revision specifiers
        list_revisions: -a, list every revision in the range
        syncable_only: -e, skip deleted, purged or archived revisions
        ignore_case: -i, case-insensitive matching
        max_files: -m, limit to the first N files
    """
    args = ["files"]
    if list_revisions:
        args.append("-a")
    if syncable_only:
        args.append("-e")
    if ignore_case:
        args.append("-i")
    if max_files is not None:
        args.extend(["-m", str(max_files)])
    args.extend(files)
    return args
