"""Test the p4 connection and its command entry points."""

import pytest

from p4cmd.config import P4Config
from p4cmd.connection import P4
from p4cmd.errors import LaunchFailed, ParseFailed
from p4cmd.items import ItemStream

FILES_OUTPUT = b"""info1: depotFile //depot/a
info1: rev 1
info1: change 10
info1: action add
info1: type text
info1: time 1527128624
exit: 0
"""


class TestGlobalArgs:
    """Tests for the shared command prefix."""

    def test_defaults(self):
        """Only the scripting flags are passed by default."""
        assert P4().global_args() == ["p4", "-s", "-ztag", "-C", "utf8"]

    def test_all_settings(self):
        """Each setting maps to its global option."""
        p4 = P4(
            p4_cmd="/opt/p4",
            port="ssl:perforce:1666",
            user="alice",
            password="secret",
            client="alice-ws",
            retries=2,
        )
        assert p4.global_args() == [
            "/opt/p4",
            "-s",
            "-ztag",
            "-C",
            "utf8",
            "-p",
            "ssl:perforce:1666",
            "-u",
            "alice",
            "-P",
            "secret",
            "-c",
            "alice-ws",
            "-r",
            "2",
        ]

    def test_from_config(self):
        """Connections are built from resolved config."""
        config = P4Config(p4_cmd="p4x", port="1666", user="bob", retries=0)
        p4 = P4.from_config(config)
        assert p4 == P4(p4_cmd="p4x", port="1666", user="bob", retries=0)


class TestCommands:
    """Tests for the command entry points."""

    def test_files(self, p4, mock_run):
        """files runs p4 and decodes its output."""
        mock_run.return_value = FILES_OUTPUT
        stream = p4.files("//depot/...", max_files=1)
        assert isinstance(stream, ItemStream)
        items = list(stream)
        assert items[0].as_data().depot_file == "//depot/a"
        assert mock_run.call_args[0][0] == [
            "p4",
            "-s",
            "-ztag",
            "-C",
            "utf8",
            "-p",
            "ssl:perforce:1666",
            "-u",
            "alice",
            "files",
            "-m",
            "1",
            "//depot/...",
        ]

    def test_dirs(self, p4, mock_run):
        """dirs passes its flags."""
        mock_run.return_value = b"info1: dir //depot/a\nexit: 0\n"
        items = list(p4.dirs("//depot/*", client_only=True))
        assert items[0].as_data().dir == "//depot/a"
        assert mock_run.call_args[0][0][-3:] == ["dirs", "-C", "//depot/*"]

    def test_print(self, p4, mock_run):
        """print disables keyword expansion with -k."""
        mock_run.return_value = b"exit: 0\n"
        list(p4.print("//depot/a", keyword_expansion=False))
        assert mock_run.call_args[0][0][-3:] == ["print", "-k", "//depot/a"]

    def test_sync(self, p4, mock_run):
        """sync passes parallel transfer threads."""
        mock_run.return_value = b"exit: 0\n"
        list(p4.sync(preview=True, parallel=4))
        assert mock_run.call_args[0][0][-3:] == ["sync", "-n", "--parallel=threads=4"]

    def test_where(self, p4, mock_run):
        """where passes files through."""
        mock_run.return_value = b"exit: 0\n"
        assert p4.where("a").exit_code == 0
        assert mock_run.call_args[0][0][-2:] == ["where", "a"]

    def test_parse_failure_names_command(self, mock_run):
        """Parse failures carry the command line, password masked."""
        mock_run.return_value = b"garbage"
        p4 = P4(password="secret")
        with pytest.raises(ParseFailed) as exc_info:
            p4.files("//depot/...")
        context = exc_info.value.context
        assert context.startswith("Command: p4 -s -ztag")
        assert "files //depot/..." in context
        assert "secret" not in context

    def test_launch_failure_propagates(self, p4, mock_run):
        """Launch failures are raised unchanged."""
        mock_run.side_effect = LaunchFailed(context="p4 files")
        with pytest.raises(LaunchFailed):
            p4.files("//depot/...")

    def test_missing_executable(self, tmp_path):
        """A nonexistent p4 executable fails to launch."""
        p4 = P4(p4_cmd=tmp_path / "no-such-p4")
        with pytest.raises(LaunchFailed):
            p4.where()
