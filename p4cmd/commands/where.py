"""`p4 where`: show how file names are mapped by the client view."""

from dataclasses import dataclass
from pathlib import Path

from p4cmd import parser
from p4cmd.commands.base import decode_stream, fields
from p4cmd.items import ItemStream
from p4cmd.parser import Parsed

WHERE_FIELDS = (parser.depot_file, parser.client_file, parser.path)


@dataclass(frozen=True)
class MappedFile:
    """One file name in depot, client and local syntax."""

    depot_file: str
    client_file: str
    path: Path


def mapped_file_record(data: bytes, pos: int) -> Parsed[MappedFile]:
    parsed = fields(data, pos, WHERE_FIELDS)
    if parsed is None:
        return None
    (depot_file, client_file, local_path), end = parsed
    return MappedFile(depot_file=depot_file, client_file=client_file, path=Path(local_path)), end


def decode_where(data: bytes, invocation: str = "p4 where") -> ItemStream[MappedFile]:
    """Decode `p4 -s -ztag where` output."""
    return decode_stream(data, invocation, mapped_file_record)


def build_args(files: tuple[str, ...]) -> list[str]:
    """Arguments for `p4 where`; with no files, the current directory is mapped."""
    return ["where", *files]
