"""Coloring of p4 status lines and CLI diagnostics."""

import sys
from typing import Optional, TextIO

import click

from p4cmd.items import MessageLevel

# Same palette for in-stream messages and our own diagnostics
LEVEL_COLORS = {
    MessageLevel.ERROR: "red",
    MessageLevel.WARNING: "yellow",
    MessageLevel.INFO: "blue",
}


def should_color(stream: Optional[TextIO] = None) -> bool:
    """Color only when `stream` (stdout by default) is a terminal."""
    return (stream or sys.stdout).isatty()


def style_level(text: str, level: MessageLevel) -> str:
    """Style a p4 status line by its message level."""
    if should_color():
        return click.style(text, fg=LEVEL_COLORS[level])
    return text


def _echo_diagnostic(message: str, level: MessageLevel) -> None:
    if should_color(sys.stderr):
        click.secho(message, fg=LEVEL_COLORS[level], err=True)
    else:
        click.echo(message, err=True)


def echo_error(message: str) -> None:
    """Print a failure of p4cmd itself to stderr."""
    _echo_diagnostic(message, MessageLevel.ERROR)


def echo_warning(message: str) -> None:
    """Print a warning to stderr."""
    _echo_diagnostic(message, MessageLevel.WARNING)
