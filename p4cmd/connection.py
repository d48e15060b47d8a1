"""Connection settings and command entry points for the p4 client."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from p4cmd.commands import dirs, files, print as print_, sync, where
from p4cmd.commands.dirs import Dir
from p4cmd.commands.files import File
from p4cmd.commands.print import PrintedFile
from p4cmd.commands.sync import SyncedFile
from p4cmd.commands.where import MappedFile
from p4cmd.config import DEFAULT_P4_CMD, P4Config
from p4cmd.items import ItemStream
from p4cmd.process import describe_command, run_command

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Scripting mode: status-prefixed lines (-s) with tagged fields (-ztag)
SCRIPTING_ARGS = ["-s", "-ztag", "-C", "utf8"]


@dataclass(frozen=True)
class P4:
    """
    A p4 client configuration.

    Each field overrides the matching P4* environment setting of the p4
    executable itself; None leaves that setting to p4.
    """

    p4_cmd: Union[str, Path] = DEFAULT_P4_CMD
    port: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    client: Optional[str] = None
    # -r: retries when the network times out during a command
    retries: Optional[int] = None

    @classmethod
    def from_config(cls, config: P4Config) -> "P4":
        return cls(
            p4_cmd=config.p4_cmd,
            port=config.port,
            user=config.user,
            password=config.password,
            client=config.client,
            retries=config.retries,
        )

    def global_args(self) -> list[str]:
        """Executable and global options shared by every command."""
        args = [str(self.p4_cmd), *SCRIPTING_ARGS]
        if self.port is not None:
            args.extend(["-p", self.port])
        if self.user is not None:
            args.extend(["-u", self.user])
        if self.password is not None:
            args.extend(["-P", self.password])
        if self.client is not None:
            args.extend(["-c", self.client])
        if self.retries is not None:
            args.extend(["-r", str(self.retries)])
        return args

    def run(
        self, args: list[str], decode: Callable[[bytes, str], ItemStream[T]]
    ) -> ItemStream[T]:
        """
        Run one p4 command and decode its complete output.

        Raises:
            LaunchFailed: If p4 could not be started
            ParseFailed: If the output does not conform to the tagged format
        """
        cmd = self.global_args() + args
        output = run_command(cmd)
        logger.debug(f"Collected {len(output)} bytes from p4 {args[0]}")
        return decode(output, f"Command: {describe_command(cmd)}")

    def dirs(
        self,
        *dirs_: str,
        client_only: bool = False,
        stream: Optional[str] = None,
        include_deleted: bool = False,
        include_synced: bool = False,
        ignore_case: bool = False,
    ) -> ItemStream[Dir]:
        """
        List depot subdirectories.

        Perforce does not track directories; a path is a directory when any
        undeleted file has it as a prefix.
        """
        args = dirs.build_args(
            dirs_,
            client_only=client_only,
            stream=stream,
            include_deleted=include_deleted,
            include_synced=include_synced,
            ignore_case=ignore_case,
        )
        return self.run(args, dirs.decode_dirs)

    def files(
        self,
        *files_: str,
        list_revisions: bool = False,
        syncable_only: bool = False,
        ignore_case: bool = False,
        max_files: Optional[int] = None,
    ) -> ItemStream[File]:
        """List depot files at their head (or selected) revision."""
        args = files.build_args(
            files_,
            list_revisions=list_revisions,
            syncable_only=syncable_only,
            ignore_case=ignore_case,
            max_files=max_files,
        )
        return self.run(args, files.decode_files)

    def print(
        self,
        *files_: str,
        all_revs: bool = False,
        keyword_expansion: bool = True,
        max_files: Optional[int] = None,
    ) -> ItemStream[PrintedFile]:
        """Retrieve depot file contents without syncing them."""
        args = print_.build_args(
            files_,
            all_revs=all_revs,
            keyword_expansion=keyword_expansion,
            max_files=max_files,
        )
        return self.run(args, print_.decode_print)

    def sync(
        self,
        *files_: str,
        force: bool = False,
        preview: bool = False,
        server_only: bool = False,
        client_only: bool = False,
        verify: bool = False,
        max_files: Optional[int] = None,
        parallel: Optional[int] = None,
    ) -> ItemStream[SyncedFile]:
        """Bring the client workspace up to date with its view of the depot."""
        args = sync.build_args(
            files_,
            force=force,
            preview=preview,
            server_only=server_only,
            client_only=client_only,
            verify=verify,
            max_files=max_files,
            parallel=parallel,
        )
        return self.run(args, sync.decode_sync)

    def where(self, *files_: str) -> ItemStream[MappedFile]:
        """Show how file names map through the client view."""
        return self.run(where.build_args(files_), where.decode_where)
