"""
Structured JSON Logger
=====================

Bounded Context: Diagnostics Infrastructure

Structured logger for the formatter's own diagnostics.

Design:
- One JSON object per line on stderr (stdout carries the records)
- Field names the formatter understands (timestamp in epoch millis,
  lowercase level), so diagnostics can be piped through it too
- Wraps Python's logging module
- Verbosity from the JLP_LOG_LEVEL environment variable

Example:
    >>> logger = create_logger("transform")
    >>> logger.debug(
    ...     event=LogEvent.LINE_PARSE_FAILED,
    ...     message="Failed to deserialize JSON line",
    ...     metadata={'line': '{oops', 'error': 'Expecting property name'}
    ... )

Output:
    {"timestamp": 1729170645123, "level": "debug", "component": "transform",
     "event": "line.parse_failed", "message": "Failed to deserialize JSON line",
     "metadata": {"line": "{oops", "error": "Expecting property name"}}
"""

import json
import logging
import os
import sys
import time
from typing import Dict, Any, Optional, TextIO

from .events import LogEvent


LOG_LEVEL_ENV = "JLP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
ROOT_LOGGER_NAME = "jsonlogprint"


def level_from_env(environ: Optional[Dict[str, str]] = None) -> int:
    """
    Diagnostic level named by JLP_LOG_LEVEL (default WARNING).

    Accepts level names (debug, INFO, ...) or numbers. Unknown names fall
    back to the default.
    """
    environ = os.environ if environ is None else environ
    name = environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def setup_logging(
    level: Optional[int] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the package logger once per process.

    Args:
        level: Logging level (default: from JLP_LOG_LEVEL)
        stream: Destination (default: sys.stderr)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_from_env() if level is None else level)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        # Diagnostics must never reach stdout through the root logger
        logger.propagate = False

    return logger


class StructuredLogger:
    """
    JSON structured logger for diagnostics.

    Attributes:
        component: Component name (e.g., "transform", "cli")
        logger: Underlying Python logger instance

    Example:
        >>> logger = StructuredLogger("cli")
        >>> logger.info(
        ...     event=LogEvent.STARTUP,
        ...     message="starting up",
        ...     metadata={'color': 'auto'}
        ... )
    """

    def __init__(
        self,
        component: str,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "transform")
            logger_name: Custom logger name (default: jsonlogprint.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"{ROOT_LOGGER_NAME}.{component}"
        self.logger = logging.getLogger(self.logger_name)

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Logging level number
            event: Typed log event
            message: Human-readable message
            metadata: Additional context (line, error, counters)
            exc_info: Exception for ERROR logs
        """
        # Per-line debug events are hot; skip building JSON nobody reads
        if not self.logger.isEnabledFor(level):
            return

        log_entry = {
            'timestamp': int(time.time() * 1000),
            'level': logging.getLevelName(level).lower(),
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(level, json.dumps(log_entry, default=str))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log(logging.DEBUG, event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log INFO level message."""
        self._log(logging.INFO, event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log WARNING level message.

        Example:
            >>> logger.warning(
            ...     event=LogEvent.LINE_READ_FAILED,
            ...     message="Failed to read line from stdin",
            ...     metadata={'error': "'utf-8' codec can't decode byte 0xff"}
            ... )
        """
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance, summarised under "exception"
        """
        self._log(logging.ERROR, event, message, metadata, exc_info)


class JSONFormatter(logging.Formatter):
    """
    Formatter for StructuredLogger records.

    The message from StructuredLogger is already JSON and passes through.
    Plain records from other loggers are wrapped in the same shape.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith("{"):
            return message
        return json.dumps({
            'timestamp': int(record.created * 1000),
            'level': record.levelname.lower(),
            'component': record.name,
            'message': message,
        })


def create_logger(component: str) -> StructuredLogger:
    """
    Factory function to create a StructuredLogger.

    Example:
        >>> logger = create_logger("transform")
    """
    return StructuredLogger(component=component)
