"""Plain-text rendering of decoded streams, close to p4's own output."""

from typing import Any

from p4cmd.commands.dirs import Dir
from p4cmd.commands.files import File
from p4cmd.commands.print import PrintedFile
from p4cmd.commands.sync import SyncedFile
from p4cmd.commands.where import MappedFile
from p4cmd.items import Item


def render_record(record: Any) -> str:
    """
    Render one data record.

    Format follows p4's untagged output, e.g.:
      //depot/dir/file#3 - edit change 42 (text)

    Args:
        record: Any decoded record

    Returns:
        Formatted record string (may span several lines for print)
    """
    if isinstance(record, Dir):
        return record.dir
    if isinstance(record, PrintedFile):
        header = (
            f"{record.depot_file}#{record.rev} - {record.action} "
            f"change {record.change} ({record.file_type})"
        )
        lines = record.content.as_text()
        if lines is not None:
            return "\n".join([header, *lines])
        data = record.content.as_binary() or b""
        return f"{header}\n<binary: {len(data)} bytes>"
    if isinstance(record, File):
        return (
            f"{record.depot_file}#{record.rev} - {record.action} "
            f"change {record.change} ({record.file_type}) {record.time:%Y/%m/%d %H:%M:%S}"
        )
    if isinstance(record, SyncedFile):
        return f"{record.depot_file}#{record.rev} - {record.action} {record.client_file}"
    if isinstance(record, MappedFile):
        return f"{record.depot_file} {record.client_file} {record.path}"
    return str(record)


def render_item(item: Item) -> str:
    """Render one stream item; messages keep their p4 prefix."""
    message = item.as_message()
    if message is not None:
        return f"{message.level.value}: {message.text}"
    exit_status = item.as_error()
    if exit_status is not None:
        return f"exit: {exit_status.code}"
    return render_record(item.as_data())

