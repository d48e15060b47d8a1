"""`p4 dirs`: list depot subdirectories."""

from dataclasses import dataclass
from typing import Optional

from p4cmd import parser
from p4cmd.commands.base import decode_stream
from p4cmd.items import ItemStream
from p4cmd.parser import Parsed


@dataclass(frozen=True)
class Dir:
    """A depot directory."""

    dir: str


def dir_record(data: bytes, pos: int) -> Parsed[Dir]:
    parsed = parser.dir_(data, pos)
    if parsed is None:
        return None
    value, pos = parsed
    return Dir(dir=value), pos


def decode_dirs(data: bytes, invocation: str = "p4 dirs") -> ItemStream[Dir]:
    """Decode `p4 -s -ztag dirs` output."""
    return decode_stream(data, invocation, dir_record)


def build_args(
    dirs: tuple[str, ...],
    client_only: bool = False,
    stream: Optional[str] = None,
    include_deleted: bool = False,
    include_synced: bool = False,
    ignore_case: bool = False,
) -> list[str]:
    """
    Arguments for `p4 dirs`.

    Args:
        dirs: Directory patterns; `...` is not supported, use `*`
        client_only: -C, only directories mapped in the client view
        stream: -S, directories mapped by this stream
        include_deleted: -D, include directories with only deleted files
        include_synced: -H, only directories with files synced to the client
        ignore_case: -i, case-insensitive matching
    """
    args = ["dirs"]
    if client_only:
        args.append("-C")
    if stream is not None:
        args.extend(["-S", stream])
    if include_deleted:
        args.append("-D")
    if include_synced:
        args.append("-H")
    if ignore_case:
        args.append("-i")
    args.extend(dirs)
    return args
