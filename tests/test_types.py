"""Test Perforce value types."""

from datetime import datetime, timezone

import pytest

from p4cmd.types import (
    Action,
    BaseFileType,
    FileType,
    FileTypeModifiers,
    from_timestamp,
    to_timestamp,
)


class TestAction:
    """Tests for Action parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("add", Action.ADD),
            ("edit", Action.EDIT),
            ("move/delete", Action.MOVE_DELETE),
            ("archive", Action.ARCHIVE),
        ],
    )
    def test_known_actions(self, value, expected):
        """Known action strings map to members."""
        assert Action.parse(value) is expected
        assert expected.value == value

    def test_unknown_action(self):
        """Unrecognised actions map to UNKNOWN."""
        assert Action.parse("added") is Action.UNKNOWN


class TestFileTypeModifiers:
    """Tests for file type modifier flags."""

    def test_exclusive(self):
        """`l` sets exclusive open."""
        modifiers = FileTypeModifiers.parse("l")
        assert modifiers == FileTypeModifiers(exclusive=True)
        assert str(modifiers) == "l"

    def test_several_flags(self):
        """Flags combine and render in canonical order."""
        modifiers = FileTypeModifiers.parse("kx")
        assert modifiers.executable
        assert modifiers.rcs_expansion
        assert str(modifiers) == "xk"

    def test_revision_count(self):
        """`S<n>` keeps the revision count."""
        modifiers = FileTypeModifiers.parse("S10")
        assert modifiers.revisions == 10
        assert not modifiers.head
        assert str(modifiers) == "S10"

    def test_head_only(self):
        """A bare `S` stores only the head revision."""
        modifiers = FileTypeModifiers.parse("S")
        assert modifiers.head
        assert modifiers.revisions is None

    def test_unknown_flags_kept(self):
        """Unrecognised flags are preserved, not rejected."""
        modifiers = FileTypeModifiers.parse("ko")
        assert modifiers.rcs_expansion
        assert modifiers.unknown == "o"
        assert str(modifiers) == "ko"


class TestFileType:
    """Tests for FileType parsing."""

    def test_plain_base(self):
        """A base without modifiers has no modifiers."""
        ft = FileType.parse("text")
        assert ft.base is BaseFileType.TEXT
        assert ft.modifiers is None
        assert ft.is_text
        assert not ft.is_binary

    def test_base_with_modifiers(self):
        """`binary+l` splits into base and modifiers."""
        ft = FileType.parse("binary+l")
        assert ft.base is BaseFileType.BINARY
        assert ft.modifiers == FileTypeModifiers(exclusive=True)
        assert ft.is_binary
        assert str(ft) == "binary+l"

    def test_unknown_base(self):
        """Unknown bases are neither text nor binary."""
        ft = FileType.parse("widget")
        assert ft.base is BaseFileType.UNKNOWN
        assert not ft.is_text
        assert not ft.is_binary
        assert str(ft) == "widget"

    def test_text_class_bases(self):
        """Unicode-style and symlink bases count as text."""
        for base in ("symlink", "unicode", "utf8", "utf16"):
            assert FileType.parse(base).is_text

    def test_binary_class_bases(self):
        """Mac `apple` and `resource` bases count as binary."""
        assert FileType.parse("apple").base is BaseFileType.APPLE
        for base in ("binary", "apple", "resource+F"):
            ft = FileType.parse(base)
            assert ft.is_binary
            assert not ft.is_text

    def test_equality_uses_raw_text(self):
        """FileTypes compare by the reported string."""
        assert FileType.parse("text+x") == FileType.parse("text+x")
        assert FileType.parse("text+x") != FileType.parse("text+k")


class TestTimestamps:
    """Tests for epoch conversion."""

    def test_from_timestamp_is_utc(self):
        """Epoch seconds convert to an aware UTC datetime."""
        assert from_timestamp(1527128624) == datetime(2018, 5, 24, 2, 23, 44, tzinfo=timezone.utc)

    def test_round_trip(self):
        """to_timestamp reverses from_timestamp."""
        assert to_timestamp(from_timestamp(1527128624)) == 1527128624
