"""Logging configuration."""

import logging
import sys

# Every module logger hangs off this one (p4cmd.parser, p4cmd.commands.print, ...)
LOGGER_ROOT = "p4cmd"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the CLI.

    Logs go to stderr so they never mix with decoded records or --json output.
    Verbose mode sets only the p4cmd loggers to DEBUG; other libraries stay
    at WARNING.

    Args:
        verbose: If True, p4cmd logs at DEBUG; otherwise only warnings show.
    """
    logging.basicConfig(
        level=logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger(LOGGER_ROOT).setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a CLI-level component, e.g. get_logger("cli") -> p4cmd.cli."""
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")
