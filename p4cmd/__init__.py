"""Typed decoding of Perforce (`p4 -s -ztag`) tagged output."""

from p4cmd.commands import (
    Dir,
    File,
    MappedFile,
    PrintedFile,
    SyncedFile,
    decode_dirs,
    decode_files,
    decode_print,
    decode_sync,
    decode_where,
)
from p4cmd.connection import P4
from p4cmd.content import Binary, Content, Text
from p4cmd.errors import DecodeFailed, ErrorKind, LaunchFailed, P4Error, ParseFailed
from p4cmd.items import Item, ItemStream, Message, MessageLevel, OperationError
from p4cmd.types import Action, BaseFileType, FileType, FileTypeModifiers

__all__ = [
    "Action",
    "BaseFileType",
    "Binary",
    "Content",
    "DecodeFailed",
    "Dir",
    "ErrorKind",
    "File",
    "FileType",
    "FileTypeModifiers",
    "Item",
    "ItemStream",
    "LaunchFailed",
    "MappedFile",
    "Message",
    "MessageLevel",
    "OperationError",
    "P4",
    "P4Error",
    "ParseFailed",
    "PrintedFile",
    "SyncedFile",
    "Text",
    "decode_dirs",
    "decode_files",
    "decode_print",
    "decode_sync",
    "decode_where",
]
