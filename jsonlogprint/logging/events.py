"""
Structured Log Event Types
==========================

Bounded Context: Diagnostics Event Taxonomy

Typed event names for the formatter's own diagnostics.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (category.action)

Event Naming Convention:
    <category>.<action>

    category: process, line
    action: started, read_failed, parse_failed, render_failed
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for diagnostics.

    Categories:
    - process.*: Process lifecycle
    - line.*: Per-line degradations (the line is still written)
    """

    # ========== Process Events ==========
    STARTUP = "process.started"
    """Configuration resolved, about to read input."""

    SHUTDOWN = "process.finished"
    """Input exhausted; carries per-run counters."""

    # ========== Line Events ==========
    LINE_READ_FAILED = "line.read_failed"
    """Input line could not be read or decoded; an empty record was written."""

    LINE_PARSE_FAILED = "line.parse_failed"
    """Line is not a JSON object; it was passed through unchanged."""

    LINE_RENDER_FAILED = "line.render_failed"
    """Record could not be composed; the raw line was written instead."""

