"""Configuration loading for the school bus service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "schoolbus.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class LoggingConfig:
    """Log file location and verbosity."""

    dir: str = "logs"
    file: str = "schoolbus.log"
    level: str = "INFO"
    console: bool = True


@dataclass
class ServiceConfig:
    """Service configuration.

    Example schoolbus.yaml:

        db_path: data/schoolbus.db
        host: 0.0.0.0
        port: 8080
        logging:
          dir: /var/log/schoolbus
          level: DEBUG
    """

    db_path: str = "schoolbus.db"
    host: str = "127.0.0.1"
    port: int = 8000
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            raise ConfigError("'logging' must be a mapping")

        defaults = LoggingConfig()
        logging_config = LoggingConfig(
            dir=str(logging_data.get("dir", defaults.dir)),
            file=str(logging_data.get("file", defaults.file)),
            level=str(logging_data.get("level", defaults.level)).upper(),
            console=bool(logging_data.get("console", defaults.console)),
        )

        return cls(
            db_path=str(data.get("db_path", cls.db_path)),
            host=str(data.get("host", cls.host)),
            port=_parse_port(data.get("port", cls.port)),
            logging=logging_config,
        )


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid port: {value!r}") from e
    if not 0 < port < 65536:
        raise ConfigError(f"Invalid port: {port} is out of range")
    return port


def apply_env_overrides(config: ServiceConfig) -> ServiceConfig:
    """Override config values from SCHOOLBUS_* environment variables.

    Args:
        config: Configuration to update in place.

    Returns:
        The same configuration object.

    Raises:
        ConfigError: If SCHOOLBUS_PORT is not a valid port.
    """
    env = os.environ
    if "SCHOOLBUS_DB_PATH" in env:
        config.db_path = env["SCHOOLBUS_DB_PATH"]
    if "SCHOOLBUS_HOST" in env:
        config.host = env["SCHOOLBUS_HOST"]
    if "SCHOOLBUS_PORT" in env:
        config.port = _parse_port(env["SCHOOLBUS_PORT"])
    if "SCHOOLBUS_LOG_DIR" in env:
        config.logging.dir = env["SCHOOLBUS_LOG_DIR"]
    if "SCHOOLBUS_LOG_LEVEL" in env:
        config.logging.level = env["SCHOOLBUS_LOG_LEVEL"].upper()
    return config


def load_config(config_path: Path | str) -> ServiceConfig:
    """Load service configuration from a YAML file.

    Args:
        config_path: Path to schoolbus.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return ServiceConfig.from_dict(data)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find schoolbus.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to schoolbus.yaml, or None if there is none.
    """
    current = Path.cwd() if start_path is None else Path(start_path)
    current = current.resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILENAME
        if config_path.exists():
            return config_path
    return None


def resolve_config(config_path: Path | str | None = None) -> ServiceConfig:
    """Load the given or discovered config file and apply env overrides.

    Falls back to defaults when no config file is given or found.
    """
    if config_path is None:
        config_path = find_config()
    config = load_config(config_path) if config_path is not None else ServiceConfig()
    return apply_env_overrides(config)
