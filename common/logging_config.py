# common/logging_config.py
# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the development-environment bootstrap.

Console output is human-readable and goes to stderr so that command output
on stdout stays machine-consumable. File output, or console output when
``LOG_FORMAT=json`` is set, uses a JSON-structured formatter. Records flagged
``echoed_to_user`` are kept out of the console, which already showed them,
and still reach the log file.
"""

import functools
import json
import logging
import os
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_RECORD_KEYS = frozenset([
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "getMessage",
    "exc_info",
    "exc_text",
    "stack_info",
])


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON with consistent structure including:
    - timestamp (ISO format, UTC)
    - level
    - service name
    - message
    - additional metadata passed through ``extra``
    """

    def __init__(self, service_name: str = "devenv-bootstrap"):
        super().__init__()
        self.service_name = service_name
        self.hostname = os.environ.get("HOSTNAME", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_KEYS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class EchoedMessageFilter(logging.Filter):
    """Drops records whose text was already written straight to the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "echoed_to_user", False)


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    enable_console: bool = True,
    enable_file: bool = False,
    log_file_path: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for the bootstrap process.

    Args:
        service_name: Name of the service (e.g., "devenv-bootstrap")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the ``LOG_LEVEL`` environment variable, then INFO.
        enable_console: Whether to enable console logging
        enable_file: Whether to enable file logging
        log_file_path: Path to log file (if file logging enabled)

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level = "INFO"

    json_formatter = JSONFormatter(service_name)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        if os.environ.get("LOG_FORMAT", "").lower() == "json":
            console_handler.setFormatter(json_formatter)
        else:
            console_handler.setFormatter(console_formatter)
        console_handler.addFilter(EchoedMessageFilter())
        root_logger.addHandler(console_handler)

    if enable_file and log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={
            "log_level": log_level,
            "console_enabled": enable_console,
            "file_enabled": bool(enable_file and log_file_path),
        },
    )
    return logger


def log_performance(func):
    """
    Decorator to log how long a function took and whether it raised.

    Usage:
        @log_performance
        def my_function():
            pass
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        start_time = time.time()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"Function {func.__name__} failed",
                extra={
                    "duration_seconds": round(time.time() - start_time, 3),
                    "status": "error",
                    "error": str(e),
                },
                exc_info=True,
            )
            raise
        logger.debug(
            f"Function {func.__name__} completed successfully",
            extra={
                "duration_seconds": round(time.time() - start_time, 3),
                "status": "success",
            },
        )
        return result

    return wrapper


# Configuration for different environments
LOGGING_CONFIGS: Dict[str, Dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "enable_console": True,
        "enable_file": False,
    },
    "production": {
        "log_level": "INFO",
        "enable_console": True,
        "enable_file": False,
    },
    "testing": {
        "log_level": "WARNING",
        "enable_console": False,
        "enable_file": False,
    },
}


def setup_service_logging(
    service_name: str,
    environment: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file_path: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging with environment-specific defaults.

    Args:
        service_name: Name of the service
        environment: Environment name (development, production, testing).
            Defaults to the ``ENVIRONMENT`` variable, then "production".
        log_level: Overrides the preset level when given.
        log_file_path: Enables JSON file logging to this path when given.

    Returns:
        Configured logger instance
    """
    if environment is None:
        environment = os.environ.get("ENVIRONMENT", "production")

    config = LOGGING_CONFIGS.get(environment, LOGGING_CONFIGS["production"])

    return setup_logging(
        service_name=service_name,
        log_level=log_level or config["log_level"],
        enable_console=config["enable_console"],
        enable_file=bool(log_file_path) or config["enable_file"],
        log_file_path=log_file_path,
    )


def set_log_level(log_level: str) -> None:
    """Changes the level of the root logger and of its handlers."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{log_level}'.")
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)
