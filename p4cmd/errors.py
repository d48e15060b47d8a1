"""p4cmd exception hierarchy with exit codes and error kinds."""

from enum import Enum
from typing import Optional

# Exit code constants
EXIT_SUCCESS = 0  # Operation succeeded
EXIT_ERROR = 1  # Generic error / failure
EXIT_PARTIAL = 4  # Stream decoded, but carried error messages


class ErrorKind(Enum):
    """Operation-level failure kinds."""

    LAUNCH_FAILED = "launch_failed"
    PARSE_FAILED = "parse_failed"


class P4Error(Exception):
    """Base exception for all p4cmd errors."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        exit_code: int = EXIT_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.exit_code = exit_code

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} ({self.context})"
        return self.message

    @property
    def cause(self) -> Optional[BaseException]:
        """Underlying error, if one was chained."""
        return self.__cause__


class OperationFailed(P4Error):
    """
    The command produced no stream at all.

    Subclasses set `error_kind`; callers branch on `kind()`.
    """

    error_kind: ErrorKind

    def kind(self) -> ErrorKind:
        return self.error_kind


class LaunchFailed(OperationFailed):
    """The p4 executable could not be started."""

    error_kind = ErrorKind.LAUNCH_FAILED

    def __init__(self, message: str = "Failed to launch p4", context: Optional[str] = None):
        super().__init__(message, context=context)


class ParseFailed(OperationFailed):
    """The buffered output does not conform to the tagged grammar."""

    error_kind = ErrorKind.PARSE_FAILED

    def __init__(
        self, message: str = "Failed to parse p4 output", context: Optional[str] = None
    ):
        super().__init__(message, context=context)


DecodeFailed = ParseFailed


class ConfigError(P4Error):
    """Configuration errors (invalid values, unreadable files)."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message, exit_code=EXIT_ERROR)


class DecodeError(Exception):
    """
    Malformed input found by the field grammar.

    Raised only for genuine malformation (bad UTF-8, bad number, truncated
    span). A tag that simply does not match is not an error.
    """

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at byte {offset}")
        self.message = message
        self.offset = offset
