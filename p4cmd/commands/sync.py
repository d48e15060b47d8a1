"""`p4 sync`: synchronize the client with its view of the depot."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from p4cmd import parser
from p4cmd.commands.base import decode_stream, fields, info_line
from p4cmd.items import ItemStream
from p4cmd.parser import Parsed
from p4cmd.types import Action

logger = logging.getLogger(__name__)

SYNC_FIELDS = (
    parser.depot_file,
    parser.client_file,
    parser.rev,
    parser.action,
    parser.file_size,
)

# Field names that can never belong to a trailer
_RECORD_START = frozenset({"depotFile", "change"})


@dataclass(frozen=True)
class SyncedFile:
    """A file updated (or previewed) by sync."""

    depot_file: str
    client_file: Path
    rev: int
    action: str
    file_size: int

    @property
    def action_kind(self) -> Action:
        return Action.parse(self.action)


def _trailer(data: bytes, pos: int) -> Optional[int]:
    """
    Skip the optional summary after a sync record.

    p4 may follow a record with two more `info1:` lines (totalFileSize and
    totalFileCount) and a `change` line. The three are skipped together or
    not at all; their values are discarded.
    """
    start = pos
    for _ in range(2):
        parsed = parser.info1_line(data, pos)
        if parsed is None or parsed[0] in _RECORD_START:
            return None
        _, pos = parsed
    parsed_change = parser.change(data, pos)
    if parsed_change is None:
        return None
    _, pos = parsed_change
    logger.debug(f"Skipped sync trailer at byte {start}")
    return pos


def synced_file_record(data: bytes, pos: int) -> Parsed[SyncedFile]:
    parsed = fields(data, pos, SYNC_FIELDS)
    if parsed is None:
        return None
    (depot_file, client_file, rev, action, file_size), end = parsed
    record = SyncedFile(
        depot_file=depot_file,
        client_file=Path(client_file),
        rev=rev,
        action=action,
        file_size=file_size,
    )
    trailer_end = _trailer(data, end)
    return record, end if trailer_end is None else trailer_end


def decode_sync(data: bytes, invocation: str = "p4 sync") -> ItemStream[SyncedFile]:
    """Decode `p4 -s -ztag sync` output."""
    return decode_stream(data, invocation, synced_file_record, informational=info_line)


def build_args(
    files: tuple[str, ...],
    force: bool = False,
    preview: bool = False,
    server_only: bool = False,
    client_only: bool = False,
    verify: bool = False,
    max_files: Optional[int] = None,
    parallel: Optional[int] = None,
) -> list[str]:
    """
    Arguments for `p4 sync`.

    Args:
        files: Files to sync; the whole client view when empty
        force: -f, resync even if the client already has the file
        preview: -n, preview without updating the workspace
        server_only: -k, update server metadata without transferring files
        client_only: -p, populate the workspace without updating the server
        verify: -s, compare digests before overwriting workspace files
        max_files: -m, limit to the first N files
        parallel: --parallel threads=N for parallel file transfer
    """
    args = ["sync"]
    if force:
        args.append("-f")
    if preview:
        args.append("-n")
    if server_only:
        args.append("-k")
    if client_only:
        args.append("-p")
    if verify:
        args.append("-s")
    if max_files is not None:
        args.extend(["-m", str(max_files)])
    if parallel is not None:
        args.append(f"--parallel=threads={parallel}")
    args.extend(files)
    return args
