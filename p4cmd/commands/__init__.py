"""Record grammars and argument builders, one module per p4 command."""

from p4cmd.commands.dirs import Dir, decode_dirs
from p4cmd.commands.files import File, decode_files
from p4cmd.commands.print import PrintedFile, decode_print
from p4cmd.commands.sync import SyncedFile, decode_sync
from p4cmd.commands.where import MappedFile, decode_where

DECODERS = {
    "dirs": decode_dirs,
    "files": decode_files,
    "print": decode_print,
    "sync": decode_sync,
    "where": decode_where,
}

__all__ = [
    "DECODERS",
    "Dir",
    "File",
    "MappedFile",
    "PrintedFile",
    "SyncedFile",
    "decode_dirs",
    "decode_files",
    "decode_print",
    "decode_sync",
    "decode_where",
]
