"""Subprocess execution for p4."""

import logging
import shlex
import subprocess
from typing import Optional

from p4cmd.errors import LaunchFailed

logger = logging.getLogger(__name__)

_SECRET_FLAGS = ("-P",)


def describe_command(cmd: list[str]) -> str:
    """
    Render a command line for logs and error context, masking passwords.

    Args:
        cmd: Command and arguments as list

    Returns:
        Shell-quoted command string
    """
    shown = list(cmd)
    for i, arg in enumerate(shown[:-1]):
        if arg in _SECRET_FLAGS:
            shown[i + 1] = "****"
    return shlex.join(shown)


def run_command(cmd: list[str], env: Optional[dict[str, str]] = None) -> bytes:
    """
    Run a command to completion and return its standard output.

    The whole of stdout is collected before returning; both pipes are
    drained concurrently, so large outputs cannot block the child.

    Args:
        cmd: Command and arguments as list (safe, no shell injection)
        env: Environment for the child (inherited when None)

    Returns:
        Raw stdout bytes

    Raises:
        LaunchFailed: If the executable could not be started
    """
    description = describe_command(cmd)
    logger.debug(f"Running: {description}")

    try:
        result = subprocess.run(cmd, capture_output=True, check=False, env=env)
    except OSError as e:
        logger.error(f"Failed to launch: {description}: {e}")
        raise LaunchFailed(f"Failed to launch p4: {e}", context=description) from e

    logger.debug(f"Exit code: {result.returncode}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr.decode('utf-8', errors='replace').strip()}")
    return result.stdout
