"""JSON renderer with stable schema and versioning."""

import base64
import dataclasses
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from p4cmd.content import Content
from p4cmd.items import Item
from p4cmd.types import FileType

JSON_VERSION = 1


def _json_value(value: Any) -> Any:
    if isinstance(value, Content):
        lines = value.as_text()
        if lines is not None:
            return {"type": "text", "lines": list(lines)}
        return {"type": "binary", "base64": base64.b64encode(value.as_binary() or b"").decode()}
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (Path, FileType)):
        return str(value)
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """Flatten a decoded record into JSON-ready values."""
    return {
        field.name: _json_value(getattr(record, field.name))
        for field in dataclasses.fields(record)
    }


def item_to_dict(item: Item) -> dict[str, Any]:
    message = item.as_message()
    if message is not None:
        return {"kind": "message", "level": message.level.value, "text": message.text}
    exit_status = item.as_error()
    if exit_status is not None:
        return {"kind": "exit", "code": exit_status.code}
    return {"kind": "data", "data": record_to_dict(item.as_data())}


def render_items_json(command: str, items: Iterable[Item]) -> str:
    """
    Render a decoded stream as JSON.

    Schema version 1:
      {
        "command": "<p4 command>",
        "version": 1,
        "items": [
          {"kind": "data", "data": {...}},
          {"kind": "message", "level": "error", "text": "..."},
          {"kind": "exit", "code": 0}
        ],
        "exit_code": 0
      }

    Binary print content is base64 encoded.

    Args:
        command: Command name (e.g. "files")
        items: Items in stream order

    Returns:
        JSON string with stable key ordering
    """
    rendered = [item_to_dict(item) for item in items]
    output = {
        "command": command,
        "version": JSON_VERSION,
        "items": rendered,
        "exit_code": rendered[-1]["code"] if rendered else None,
    }
    return json.dumps(output, sort_keys=True)
