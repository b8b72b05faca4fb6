"""
Diagnostics Logging for jsonlogprint
====================================

Bounded Context: Observability

JSON-structured diagnostics on stderr, kept apart from the formatted
records on stdout.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    setup_logging: One-time handler setup (level from JLP_LOG_LEVEL)

Example:
    >>> from jsonlogprint.logging import create_logger, setup_logging, LogEvent
    >>> setup_logging()
    >>> logger = create_logger("cli")
    >>> logger.info(event=LogEvent.STARTUP, message="starting up")
"""

from .events import LogEvent
from .structured import (
    JSONFormatter,
    StructuredLogger,
    create_logger,
    level_from_env,
    setup_logging,
)

__all__ = [
    'LogEvent',
    'JSONFormatter',
    'StructuredLogger',
    'create_logger',
    'level_from_env',
    'setup_logging',
]
