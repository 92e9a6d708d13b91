"""Logging configuration and utilities for the LifeMatch service."""
import json
import logging
import logging.config
import traceback
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

import structlog
from pythonjsonlogger import jsonlogger

from lifematch.core.config import settings


class SensitiveDataFilter(logging.Filter):
    """Filter to remove sensitive information from logs."""

    SENSITIVE_FIELDS = {
        "password",
        "api_key",
        "token",
        "secret",
        "authorization",
        "access_token",
        "refresh_token",
        "private_key",
        "resume",  # Resume blob references
        "picture",  # Profile picture blob references
    }

    def __init__(self) -> None:
        """Initialize filter."""
        super().__init__()
        self.replace_with = "[REDACTED]"

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter sensitive data from log record."""
        if isinstance(record.args, dict):
            record.args = self._filter_dict(record.args)
        elif isinstance(record.args, (list, tuple)):
            record.args = tuple(
                self._filter_dict(arg) if isinstance(arg, dict) else arg
                for arg in record.args
            )

        if hasattr(record, "error_context"):
            record.error_context = self._filter_dict(record.error_context)

        return True

    def _filter_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively filter dictionary values."""
        if not isinstance(data, dict):
            return data

        filtered = {}
        for key, value in data.items():
            if any(sensitive in str(key).lower() for sensitive in self.SENSITIVE_FIELDS):
                filtered[key] = self.replace_with
            elif isinstance(value, dict):
                filtered[key] = self._filter_dict(value)
            elif isinstance(value, (list, tuple)):
                filtered[key] = [
                    self._filter_dict(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                filtered[key] = value
        return filtered


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that merges structlog-rendered messages into the record."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to the log record.

        Args:
            log_record: The log record to add fields to
            record: The original log record
            message_dict: The message dictionary
        """
        super().add_fields(log_record, record, message_dict)

        # structlog renders events as JSON strings; unpack them
        try:
            message = json.loads(record.getMessage())
            if isinstance(message, dict):
                log_record.update(message)
            else:
                log_record["message"] = record.getMessage()
        except (json.JSONDecodeError, TypeError):
            log_record["message"] = record.getMessage()

        log_record.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        log_record["logger"] = record.name
        log_record["level"] = record.levelname
        log_record["environment"] = settings.ENVIRONMENT
        log_record["version"] = settings.VERSION

        if record.exc_info and record.exc_info[0] is not None:
            log_record["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }


def build_logging_config(
    log_level: str = "INFO",
    json_logs: bool = False,
    log_file: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the ``dictConfig`` mapping for the given options.

    Args:
        log_level: Root log level
        json_logs: Render console output as JSON
        log_file: Optional path of a rotating JSON log file

    Returns:
        A logging configuration dictionary
    """
    handlers = ["console"]
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "sensitive": {"()": SensitiveDataFilter},
        },
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "standard",
                "filters": ["sensitive"],
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {},
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filters": ["sensitive"],
            "filename": log_file,
            "maxBytes": settings.LOG_MAX_BYTES,
            "backupCount": settings.LOG_BACKUP_COUNT,
        }
        handlers.append("file")

    config["loggers"] = {
        "": {  # Root logger
            "handlers": handlers,
            "level": log_level,
        },
        "uvicorn": {
            "handlers": handlers,
            "level": log_level,
            "propagate": False,
        },
        "sqlalchemy": {
            "handlers": handlers,
            "level": "INFO" if settings.SQL_DEBUG else "WARNING",
            "propagate": False,
        },
    }
    return config


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Set up stdlib logging and route structlog through it."""
    logging.config.dictConfig(build_logging_config(log_level, json_logs, log_file))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": log_level, "json_logs": json_logs, "log_file": log_file},
    )


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind key/values to every structured log event emitted inside the block."""
    tokens = structlog.contextvars.bind_contextvars(**kwargs)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance for the given name.

    Args:
        name: The name of the logger.

    Returns:
        A configured logger instance.
    """
    return structlog.get_logger(name)
