"""Test p4cmd exception hierarchy and error kinds."""

import pytest

from p4cmd.errors import (
    EXIT_ERROR,
    EXIT_PARTIAL,
    EXIT_SUCCESS,
    ConfigError,
    DecodeError,
    DecodeFailed,
    ErrorKind,
    LaunchFailed,
    OperationFailed,
    P4Error,
    ParseFailed,
)


class TestExitCodeConstants:
    """Test exit code constant values."""

    def test_values(self):
        """Exit codes are fixed."""
        assert EXIT_SUCCESS == 0
        assert EXIT_ERROR == 1
        assert EXIT_PARTIAL == 4


class TestP4Error:
    """Test P4Error base exception."""

    def test_has_exit_code(self):
        """P4Error defaults to EXIT_ERROR."""
        assert P4Error("boom").exit_code == EXIT_ERROR

    def test_str_without_context(self):
        """Without context only the message is shown."""
        assert str(P4Error("boom")) == "boom"

    def test_str_with_context(self):
        """Context is appended in parentheses."""
        assert str(P4Error("boom", context="p4 files")) == "boom (p4 files)"

    def test_cause(self):
        """The chained exception is exposed as cause."""
        try:
            try:
                raise ValueError("inner")
            except ValueError as e:
                raise P4Error("outer") from e
        except P4Error as error:
            assert isinstance(error.cause, ValueError)

    def test_no_cause(self):
        """Unchained errors have no cause."""
        assert P4Error("boom").cause is None


class TestOperationFailed:
    """Test the two operation failure kinds."""

    def test_launch_failed(self):
        """LaunchFailed reports its kind."""
        error = LaunchFailed(context="p4 -s -ztag files")
        assert isinstance(error, OperationFailed)
        assert error.kind() is ErrorKind.LAUNCH_FAILED
        assert error.message == "Failed to launch p4"

    def test_parse_failed(self):
        """ParseFailed reports its kind."""
        error = ParseFailed()
        assert error.kind() is ErrorKind.PARSE_FAILED
        assert error.exit_code == EXIT_ERROR

    def test_decode_failed_alias(self):
        """DecodeFailed is the same class as ParseFailed."""
        assert DecodeFailed is ParseFailed

    def test_catch_as_base(self):
        """Both kinds are caught as P4Error."""
        with pytest.raises(P4Error):
            raise LaunchFailed()


class TestConfigError:
    """Test ConfigError."""

    def test_default_message(self):
        """ConfigError has a default message."""
        assert str(ConfigError()) == "Configuration error"


class TestDecodeError:
    """Test the grammar-level error."""

    def test_offset_in_message(self):
        """The byte offset is part of the message."""
        error = DecodeError("malformed rev value", 17)
        assert error.offset == 17
        assert error.message == "malformed rev value"
        assert str(error) == "malformed rev value at byte 17"

    def test_not_a_p4_error(self):
        """DecodeError stays internal to the grammar."""
        assert not issubclass(DecodeError, P4Error)
