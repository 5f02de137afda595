"""
Gutory Logging Configuration
Structured logging with JSON output
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pythonjsonlogger.json import JsonFormatter

from .logger import get_logger


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record"""
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = getattr(
            record, "service_name", record.name.split(".")[0]
        )

        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id


def setup_logging(
    service_name: str, log_level: str = "INFO", json_logs: bool = True
) -> logging.Logger:
    """
    Setup logging for the package root logger

    Args:
        service_name: Name of the root logger (e.g., 'gutory')
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to use JSON formatting

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))

    if json_logs:
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(name)s %(message)s",
            rename_fields={
                "levelname": "level",
                "name": "logger",
            },
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    logger.propagate = False

    return logger


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges its context into every record"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(
    name: str, user_id: Optional[str] = None
) -> LoggerAdapter:
    """
    Get logger that tags records with the signed-in user

    Args:
        name: Logger name
        user_id: User ID for tracking

    Returns:
        Logger adapter with context
    """
    logger = get_logger(name)

    extra = {}
    if user_id:
        extra["user_id"] = user_id

    return LoggerAdapter(logger, extra)


def log_error_with_context(
    logger: Union[logging.Logger, logging.LoggerAdapter],
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log error with full context and stack trace

    Args:
        logger: Logger or context adapter
        error: Exception to log
        context: Additional context information
    """
    extra = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        extra.update(context)

    logger.error(
        f"Error occurred: {type(error).__name__}: {str(error)}",
        exc_info=error,
        extra=extra,
    )
