"""Result envelope shared by every decoded command."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, Literal, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

ItemKind = Literal["data", "message", "error"]


class MessageLevel(Enum):
    """Severity of a status line written by p4."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Message:
    """An `error:`, `warning:` or `info:` line from p4."""

    level: MessageLevel
    text: str


@dataclass(frozen=True)
class OperationError:
    """Exit status reported by the trailing `exit:` line."""

    code: int

    @property
    def success(self) -> bool:
        return self.code == 0


@dataclass(frozen=True)
class Item(Generic[T]):
    """One classified entry of a decoded stream."""

    kind: ItemKind
    value: Union[T, Message, OperationError]

    @classmethod
    def data(cls, record: T) -> "Item[T]":
        return cls("data", record)

    @classmethod
    def message(cls, level: MessageLevel, text: str) -> "Item[T]":
        return cls("message", Message(level, text))

    @classmethod
    def error(cls, code: int) -> "Item[T]":
        return cls("error", OperationError(code))

    @property
    def is_data(self) -> bool:
        return self.kind == "data"

    @property
    def is_message(self) -> bool:
        return self.kind == "message"

    @property
    def is_error(self) -> bool:
        return self.kind == "error"

    def as_data(self) -> Optional[T]:
        return self.value if self.kind == "data" else None  # type: ignore[return-value]

    def as_message(self) -> Optional[Message]:
        return self.value if self.kind == "message" else None  # type: ignore[return-value]

    def as_error(self) -> Optional[OperationError]:
        return self.value if self.kind == "error" else None  # type: ignore[return-value]


class ItemStream(Generic[T]):
    """
    Forward-only view over one decoded command output.

    Built from the complete item list, so its length is known up front. The
    last item is always the exit status. Once consumed it cannot be
    restarted; decode the buffer again to re-read it.
    """

    def __init__(self, items: Sequence[Item[T]]):
        if not items or not items[-1].is_error:
            raise ValueError("stream must end with an exit item")
        if any(item.is_error for item in items[:-1]):
            raise ValueError("only the last item may carry an exit status")
        self._exit = items[-1].as_error()
        self._remaining = len(items)
        self._iter = iter(tuple(items))

    def __iter__(self) -> Iterator[Item[T]]:
        return self

    def __next__(self) -> Item[T]:
        item = next(self._iter)
        self._remaining -= 1
        return item

    def __length_hint__(self) -> int:
        return self._remaining

    @property
    def exit_code(self) -> int:
        """Exit status from the trailing `exit:` line."""
        assert self._exit is not None
        return self._exit.code

    def __repr__(self) -> str:
        return f"ItemStream(remaining={self._remaining}, exit_code={self.exit_code})"
