"""
Configuration module for the Students API.

Settings come from a dotenv-format config file plus the process environment.

Config file location (first match wins):
1. CONFIG_PATH environment variable
2. -config / --config command-line flag

Keys read from the file (an environment variable with the same name
overrides the file value):
- ENV               (default "production")
- STORAGE_PATH      (required)
- HTTP_SERVER_ADDR  (default ":8082", host:port; empty host = all interfaces)
- LOG_LEVEL         (default "INFO"; critical, error, warning, info, debug or trace)

Example config file:
    ENV=development
    STORAGE_PATH=storage/storage.db
    HTTP_SERVER_ADDR=localhost:8082
"""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from dotenv import dotenv_values, load_dotenv
from uvicorn.config import LOG_LEVELS

from students_api.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENV = "production"
DEFAULT_HTTP_SERVER_ADDR = ":8082"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(ValueError):
    """Configuration is missing or invalid."""


@dataclass(frozen=True)
class Config:
    """Resolved, immutable server configuration."""

    env: str
    storage_path: str
    http_server_addr: str
    log_level: str = DEFAULT_LOG_LEVEL


def parse_address(addr: str) -> Tuple[str, int]:
    """
    Split a "host:port" listen address.

    An empty host (":8082") means all interfaces. IPv6 hosts may be
    bracketed ("[::1]:8082").

    Raises:
        ConfigError: If the address has no port or the port is invalid
    """
    host, sep, port_text = addr.rpartition(":")
    if not sep:
        raise ConfigError(f"invalid listen address {addr!r}: missing port")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not host:
        host = "0.0.0.0"

    try:
        port = int(port_text)
    except ValueError:
        raise ConfigError(f"invalid listen address {addr!r}: port must be a number")

    if not 0 <= port <= 65535:
        raise ConfigError(f"invalid listen address {addr!r}: port out of range")

    return host, port


def resolve_config_path(argv: Optional[Sequence[str]] = None) -> str:
    """Find the config file path from CONFIG_PATH or the -config flag."""
    config_path = os.getenv("CONFIG_PATH", "")
    if config_path:
        return config_path

    parser = argparse.ArgumentParser(description="Students API server", add_help=False)
    parser.add_argument(
        "-config",
        "--config",
        dest="config",
        default="",
        help="path to the configuration file",
    )
    args, _ = parser.parse_known_args(argv)

    if not args.config:
        raise ConfigError("config path is not set; set CONFIG_PATH or pass -config")

    return args.config


def _lookup(file_values: Dict[str, Optional[str]], key: str, default: str = "") -> str:
    if key in os.environ:
        return os.environ[key]
    value = file_values.get(key)
    if value is None or value == "":
        return default
    return value


def load_config(argv: Optional[Sequence[str]] = None) -> Config:
    """
    Load and validate configuration.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Fully populated Config

    Raises:
        ConfigError: If the path is unset, the file is missing, STORAGE_PATH
                     is empty, HTTP_SERVER_ADDR is not a valid address,
                     or LOG_LEVEL is not a known level
    """
    # A local .env may provide CONFIG_PATH; it never overrides real env vars
    load_dotenv()

    config_path = resolve_config_path(argv)

    if not Path(config_path).is_file():
        raise ConfigError(f"config file does not exist: {config_path}")

    file_values = dotenv_values(config_path)

    config = Config(
        env=_lookup(file_values, "ENV", DEFAULT_ENV),
        storage_path=_lookup(file_values, "STORAGE_PATH"),
        http_server_addr=_lookup(file_values, "HTTP_SERVER_ADDR", DEFAULT_HTTP_SERVER_ADDR),
        log_level=_lookup(file_values, "LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )

    if not config.storage_path:
        raise ConfigError(
            f"cannot read config file: STORAGE_PATH is required (file: {config_path})"
        )

    parse_address(config.http_server_addr)

    if config.log_level.lower() not in LOG_LEVELS:
        raise ConfigError(
            f"invalid LOG_LEVEL {config.log_level!r}: expected one of {', '.join(LOG_LEVELS)}"
        )

    return config


def must_load(argv: Optional[Sequence[str]] = None) -> Config:
    """Load configuration or terminate the process with exit status 1."""
    try:
        return load_config(argv)
    except ConfigError as e:
        logger.error(str(e))
        raise SystemExit(1)
