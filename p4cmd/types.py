"""Perforce value types: actions, file types and timestamps."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Action(Enum):
    """
    Action performed on a file at a given revision.

    Values not listed here map to UNKNOWN; records keep the raw string.
    """

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    BRANCH = "branch"
    MOVE_ADD = "move/add"
    MOVE_DELETE = "move/delete"
    INTEGRATE = "integrate"
    IMPORT = "import"
    PURGE = "purge"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "Action":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class BaseFileType(Enum):
    """Perforce base file type."""

    TEXT = "text"  # RCS deltas, line endings translated
    BINARY = "binary"  # full file, compressed
    SYMLINK = "symlink"
    UNICODE = "unicode"  # translated to P4CHARSET
    UTF8 = "utf8"
    UTF16 = "utf16"
    APPLE = "apple"  # data and resource fork, AppleSingle
    RESOURCE = "resource"  # Mac resource fork
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "BaseFileType":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


TEXT_BASES = frozenset(
    {
        BaseFileType.TEXT,
        BaseFileType.SYMLINK,
        BaseFileType.UNICODE,
        BaseFileType.UTF8,
        BaseFileType.UTF16,
    }
)

BINARY_BASES = frozenset({BaseFileType.BINARY, BaseFileType.APPLE, BaseFileType.RESOURCE})

# flag -> attribute, in canonical render order
_MODIFIER_FLAGS = (
    ("w", "always_writeable"),
    ("x", "executable"),
    ("k", "rcs_expansion"),
    ("l", "exclusive"),
    ("C", "full"),
    ("D", "deltas"),
    ("F", "full_uncompressed"),
    ("S", "head"),
    ("m", "modtime"),
    ("X", "archive"),
)


@dataclass(frozen=True)
class FileTypeModifiers:
    """Perforce file type modifiers (the part after `+`)."""

    always_writeable: bool = False
    executable: bool = False
    rcs_expansion: bool = False
    exclusive: bool = False
    full: bool = False
    deltas: bool = False
    full_uncompressed: bool = False
    head: bool = False
    # Only the most recent n revisions are stored (`S<n>`)
    revisions: Optional[int] = None
    modtime: bool = False
    archive: bool = False
    # Flags this version does not recognise, in order of appearance
    unknown: str = ""

    @classmethod
    def parse(cls, value: str) -> "FileTypeModifiers":
        flags = dict(_MODIFIER_FLAGS)
        values: dict[str, object] = {}
        unknown = []
        i = 0
        while i < len(value):
            flag = value[i]
            i += 1
            if flag == "S":
                digits_end = i
                while digits_end < len(value) and value[digits_end].isdigit():
                    digits_end += 1
                if digits_end > i:
                    values["revisions"] = int(value[i:digits_end])
                    i = digits_end
                    continue
            if flag in flags:
                values[flags[flag]] = True
            else:
                unknown.append(flag)
        return cls(unknown="".join(unknown), **values)  # type: ignore[arg-type]

    def __str__(self) -> str:
        out = []
        for flag, attr in _MODIFIER_FLAGS:
            if getattr(self, attr):
                out.append(flag)
            if flag == "S" and self.revisions is not None:
                out.append(f"S{self.revisions}")
        return "".join(out) + self.unknown


@dataclass(frozen=True)
class FileType:
    """
    Perforce file type, e.g. `text`, `binary+l` or `text+ko`.

    `text` is the value exactly as p4 reported it.
    """

    text: str
    base: BaseFileType = field(compare=False)
    modifiers: Optional[FileTypeModifiers] = field(compare=False, default=None)

    @classmethod
    def parse(cls, text: str) -> "FileType":
        base, sep, mods = text.partition("+")
        modifiers = FileTypeModifiers.parse(mods) if sep else None
        return cls(text=text, base=BaseFileType.parse(base), modifiers=modifiers)

    @property
    def is_text(self) -> bool:
        return self.base in TEXT_BASES

    @property
    def is_binary(self) -> bool:
        return self.base in BINARY_BASES

    def __str__(self) -> str:
        return self.text


def from_timestamp(timestamp: int) -> datetime:
    """Convert epoch seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def to_timestamp(time: datetime) -> int:
    return int(time.timestamp())
