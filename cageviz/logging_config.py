"""Logging setup helpers for cageviz.

The library is silent by default: the ``cageviz`` logger only carries a
NullHandler. Hosts opt in with one of the helpers below.

Two kinds of records are produced:

- Diagnostics from ``cageviz.core.*`` and friends (resets, scheduler
  start/stop, failures).
- The story of the game on ``cageviz.narrative``: one INFO line per
  processed event, e.g. "Zeke fights and kills Lacy."

Example usage:
    import cageviz

    cageviz.enable_console_logging(level="DEBUG")
    cageviz.enable_narrative_log("logs/game.txt")
    cageviz.configure_from_env()

Environment variables:
    CAGEVIZ_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CAGEVIZ_LOG_FILE: Path to a rotating log file
    CAGEVIZ_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "enable_narrative_log",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NARRATIVE_FORMAT = "%(message)s"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "cageviz"
NARRATIVE_LOGGER_NAME = f"{LOGGER_NAME}.narrative"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "INFO",
         "logger": "cageviz.narrative", "message": "Zeke fights Lacy to a draw."}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _attach(handler: logging.Handler, level: LogLevel | int, logger_name: str = LOGGER_NAME) -> None:
    logger = logging.getLogger(logger_name)
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    logger.addHandler(handler)


def _clear_handlers() -> None:
    """Remove and close every non-null handler on the cageviz logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Log everything from cageviz to stderr.

    Returns:
        The created StreamHandler.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Log everything from cageviz to a rotating file.

    Parent directories are created as needed.

    Returns:
        The created RotatingFileHandler.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Log everything from cageviz to stderr as JSON lines."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    _attach(handler, level)
    return handler


def enable_narrative_log(path: str | Path | None = None) -> logging.Handler:
    """Write only the game story, one bare line per event.

    Args:
        path: File to write to. Logs to stderr when omitted.

    Returns:
        The created handler.
    """
    if path is None:
        handler: logging.Handler = logging.StreamHandler()
    else:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(NARRATIVE_FORMAT))
    _attach(handler, "INFO", NARRATIVE_LOGGER_NAME)
    return handler


def configure_from_env() -> None:
    """Configure logging from ``CAGEVIZ_LOGGING``, ``CAGEVIZ_LOG_FILE`` and
    ``CAGEVIZ_LOG_JSON``. Does nothing when neither level nor file is set.
    """
    level = os.environ.get("CAGEVIZ_LOGGING", "").upper()
    log_file = os.environ.get("CAGEVIZ_LOG_FILE", "")
    use_json = os.environ.get("CAGEVIZ_LOG_JSON", "") == "1"

    if not level and not log_file:
        return
    level = level or "INFO"

    if log_file:
        handler = enable_file_logging(log_file, level=level)
        if use_json:
            handler.setFormatter(JsonFormatter())
    elif use_json:
        enable_json_logging(level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Set the level of the cageviz root logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the level of one cageviz submodule.

    Example:
        >>> cageviz.set_module_level("narrative", "WARNING")  # hide the story
        >>> cageviz.set_module_level("core.scheduler", "DEBUG")
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove all handlers and silence cageviz entirely."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
