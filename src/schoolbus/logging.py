"""Logging setup for the school bus service.

Service modules log under the ``schoolbus`` logger. When serving, uvicorn's
server and access logs are attached to the same handlers so one rotating file
holds the whole request history.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from schoolbus.config import LoggingConfig

MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVICE_LOGGER = "schoolbus"
# uvicorn.error and uvicorn.access propagate here when uvicorn runs with log_config=None
SERVER_LOGGER = "uvicorn"


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _build_handlers(
    config: LoggingConfig, max_bytes: int, backup_count: int, level: int
) -> tuple[list[logging.Handler], Path]:
    log_dir = Path(config.dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / config.file

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if config.console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers, log_path


def setup_logging(
    config: LoggingConfig | None = None,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
    capture_server_logs: bool = False,
) -> logging.Logger:
    """Install rotating file (and optional console) logging.

    Calling it again replaces the handlers installed by the previous call.
    Environment overrides (SCHOOLBUS_LOG_DIR, SCHOOLBUS_LOG_LEVEL) are applied
    when the config is loaded, see schoolbus.config.apply_env_overrides.

    Args:
        config: Log directory, file name, level and console flag.
            Defaults to LoggingConfig().
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        capture_server_logs: Also route uvicorn's loggers to these handlers.

    Returns:
        The schoolbus logger.
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.upper(), logging.INFO)
    handlers, log_path = _build_handlers(config, max_bytes, backup_count, level)

    names = [SERVICE_LOGGER]
    if capture_server_logs:
        names.append(SERVER_LOGGER)

    for name in names:
        target = logging.getLogger(name)
        _detach_handlers(target)
        target.setLevel(level)
        for handler in handlers:
            target.addHandler(handler)

    logger = logging.getLogger(SERVICE_LOGGER)
    logger.info("Logging initialized (level=%s, file=%s)", config.level, log_path)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a component logger under ``schoolbus``, e.g. get_logger("api")."""
    if not name.startswith(f"{SERVICE_LOGGER}."):
        name = f"{SERVICE_LOGGER}.{name}"
    return logging.getLogger(name)
