"""Test fixtures and utilities."""

from typing import Generator
from unittest.mock import MagicMock, patch

import click.testing
import pytest

from p4cmd.connection import P4

P4_ENV_VARS = ("P4PORT", "P4USER", "P4PASSWD", "P4CLIENT", "P4CMD_P4", "P4CMD_RETRIES", "P4CMD_CONFIG")


@pytest.fixture
def runner() -> click.testing.CliRunner:
    """Click CliRunner for testing CLI commands."""
    return click.testing.CliRunner()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove p4 settings from the environment and point config at an empty dir."""
    for name in P4_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("P4CMD_CONFIG", str(tmp_path / "missing-config"))
    return tmp_path


@pytest.fixture
def mock_run() -> Generator[MagicMock, None, None]:
    """
    Mock the subprocess wrapper at the single point p4 is launched.

    Yields:
        Mock standing in for p4cmd.connection.run_command
    """
    with patch("p4cmd.connection.run_command") as mock:
        yield mock


@pytest.fixture
def p4() -> P4:
    """Connection with a fixed server and user."""
    return P4(p4_cmd="p4", port="ssl:perforce:1666", user="alice")
