"""Configuration loader."""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from p4cmd.errors import ConfigError

DEFAULT_P4_CMD = "p4"
DEFAULT_CONFIG_PATH = Path("~/.p4cmd/config")

logger = logging.getLogger(__name__)


@dataclass
class P4Config:
    """Connection settings for the p4 client."""

    p4_cmd: str = DEFAULT_P4_CMD
    port: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    client: Optional[str] = None
    retries: Optional[int] = None
    config_path: Optional[Path] = None


def get_config_path() -> Path:
    """Config file location (`P4CMD_CONFIG` or ~/.p4cmd/config)."""
    return Path(os.environ.get("P4CMD_CONFIG", str(DEFAULT_CONFIG_PATH))).expanduser()


def _parse_config_file(config_path: Path) -> dict[str, str]:
    """
    Parse INI-style config file.

    Keys from the [p4] section (or DEFAULT) are returned upper-cased.

    Returns:
        Dict of config values
    """
    if not config_path.exists():
        return {}

    parser = configparser.ConfigParser()
    try:
        parser.read(config_path)
    except configparser.Error as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    config = {key.upper(): value for key, value in parser.defaults().items()}
    if parser.has_section("p4"):
        for key, value in parser["p4"].items():
            config[key.upper()] = value

    return config


def _parse_retries(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        retries = int(value)
    except ValueError:
        logger.warning(f"Invalid retries value {value!r}, ignoring")
        return None
    if retries < 0:
        logger.warning(f"Retries must be >=0, ignoring: {retries}")
        return None
    return retries


def get_config() -> P4Config:
    """
    Get current configuration.

    Resolves from:
    1. Defaults
    2. Config file ($P4CMD_CONFIG or ~/.p4cmd/config, [p4] section)
    3. Environment variables (P4PORT, P4USER, P4PASSWD, P4CLIENT,
       P4CMD_P4, P4CMD_RETRIES)

    Returns:
        P4Config with resolved values

    Raises:
        ConfigError: If the config file cannot be parsed
    """
    config_path = get_config_path()
    file_config = _parse_config_file(config_path)

    def lookup(env_var: str, file_key: str) -> Optional[str]:
        return os.environ.get(env_var) or file_config.get(file_key)

    config = P4Config(
        p4_cmd=lookup("P4CMD_P4", "P4") or DEFAULT_P4_CMD,
        port=lookup("P4PORT", "PORT"),
        user=lookup("P4USER", "USER"),
        password=lookup("P4PASSWD", "PASSWORD"),
        client=lookup("P4CLIENT", "CLIENT"),
        retries=_parse_retries(lookup("P4CMD_RETRIES", "RETRIES")),
        config_path=config_path if file_config else None,
    )

    logger.debug(f"Config file: {config_path} ({'loaded' if file_config else 'absent'})")
    logger.debug(f"p4 command: {config.p4_cmd}")
    logger.debug(f"Port: {config.port}")
    logger.debug(f"User: {config.user}")
    logger.debug(f"Client: {config.client}")
    logger.debug(f"Retries: {config.retries}")

    return config
