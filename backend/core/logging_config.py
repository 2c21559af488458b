"""Centralized logging configuration for the Deck Probability Calculator."""

import json
import logging
import logging.handlers
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Project root for log directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

APP_LOG_FILE = "deck_calculator.log"
ERROR_LOG_FILE = "errors.log"
ENGINE_LOG_FILE = "engine.log"

# Logger hierarchy that receives the engine-specific log file
ENGINE_LOGGER_NAME = "backend.services"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Context attached through ContextLogger or extra={"extra_data": ...}
        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        extra["extra_data"] = {**self.extra, **extra.get("extra_data", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backup_count: int
) -> logging.handlers.RotatingFileHandler:
    handler = logging.handlers.RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_level: str = "INFO",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        enable_console: Whether to log to console.
        enable_file: Whether to log to rotating JSON files under ``logs/``.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.

    Raises:
        ValueError: If log_level is not a known logging level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    engine_logger = logging.getLogger(ENGINE_LOGGER_NAME)
    engine_logger.handlers.clear()

    # Console handler (human-readable format)
    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if enable_file:
        LOG_DIR.mkdir(exist_ok=True)
        root_logger.addHandler(
            _rotating_handler(APP_LOG_FILE, logging.DEBUG, max_bytes, backup_count)
        )
        # Error-only log for quick debugging
        root_logger.addHandler(
            _rotating_handler(ERROR_LOG_FILE, logging.ERROR, max_bytes, backup_count)
        )
        # Probability engine and validators
        engine_logger.addHandler(
            _rotating_handler(ENGINE_LOG_FILE, logging.DEBUG, max_bytes, backup_count)
        )


def get_logger(name: str, **context: Any) -> ContextLogger:
    """Get a logger with optional context.

    Args:
        name: Logger name (typically __name__).
        **context: Additional context to include in all log messages.

    Returns:
        ContextLogger with the specified context.
    """
    logger = logging.getLogger(name)
    return ContextLogger(logger, context)
