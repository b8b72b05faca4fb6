"""
Line Transformer
================

Bounded Context: JSON → logfmt Pipeline

Orchestrates per-line processing: parse into the reusable FieldMap,
print priority fields bare in configured order, print the remaining
fields as key=value in source order, and print multi-line strings last,
each on its own line.

Architecture:
    raw line → parse_line → FieldMap → render_value (Styler) → record → out

Lifecycle per line:
    1. Fast path: lines not starting with "{" pass through unchanged
    2. Parse (failure → pass through unchanged)
    3. Priority fields (timestamp / level / bare scalars)
    4. Body fields (key=value, parse order)
    5. Deferred multi-line fields (newline, key=value)
    6. Clear FieldMap and deferred list for the next line

Degradation:
    - Unreadable or undecodable input line → empty record, warning
    - Input that keeps failing → InputReadError to the caller
    - Parse failure → original line, debug
    - Render failure or empty record → blank line + original line, debug
    - Output errors (closed pipe, full disk) propagate to the caller

Example:
    >>> from jsonlogprint.config import Config, ColorOption, TimestampFormat
    >>> transformer = LineTransformer(Config(
    ...     no_key_fields=("timestamp", "level"),
    ...     color=ColorOption.NEVER,
    ...     timestamp_format=TimestampFormat.SECONDS,
    ... ))
    >>> transformer.process_line('{"timestamp":1627494000,"level":"info","a":1}')
    '2021-07-28T17:40:00Z info a=1\\n'
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, TextIO, Union

from .config import Config
from .logging import LogEvent, StructuredLogger, create_logger
from .parser import LineParseError, parse_line
from .render import RenderError, render_value, scalar_text
from .styling import Styler
from .timestamps import format_timestamp
from .values import FieldMap, ValueKind, has_line_break, kind_of


# Consecutive failed reads after which the input is treated as gone
MAX_CONSECUTIVE_READ_FAILURES = 8


class InputReadError(Exception):
    """Input stream kept failing; no further lines can be read."""


@dataclass
class TransformStats:
    """Per-run counters."""

    lines: int = 0
    formatted: int = 0
    passed_through: int = 0
    render_failures: int = 0
    read_failures: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def strip_terminator(line: str) -> str:
    """Remove a trailing \\n or \\r\\n."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class LineTransformer:
    """
    Stateful JSON-to-logfmt line transformer.

    Owns the reusable FieldMap and deferred-field index; both are cleared
    after every line and never shared.

    Attributes:
        config: Immutable configuration
        styler: Styling policy (colour decided once)
        fields: Reusable field arena
        deferred: Positions of multi-line string fields for this line
        stats: Per-run counters

    Example:
        >>> transformer = LineTransformer(config)
        >>> transformer.transform_lines(sys.stdin.buffer, sys.stdout)
    """

    def __init__(
        self,
        config: Config,
        styler: Optional[Styler] = None,
        logger: Optional[StructuredLogger] = None
    ):
        """
        Initialize transformer.

        Args:
            config: Immutable configuration
            styler: Styling policy (default: resolved from config.color
                against sys.stdout)
            logger: Diagnostics logger (default: "transform" component)
        """
        self.config = config
        self.styler = styler or Styler.from_option(config.color)
        self.logger = logger or create_logger("transform")

        self.fields = FieldMap()
        self.deferred: List[int] = []
        self.stats = TransformStats()

    # ─────────────────────────────────────────────────────────────────────
    # Per-line processing
    # ─────────────────────────────────────────────────────────────────────

    def process_line(self, line: str) -> str:
        """
        Transform one line (without terminator) into one output record.

        Returns:
            Record text, always ending in a single "\\n"
        """
        self.stats.lines += 1

        if not line.startswith("{"):
            self.stats.passed_through += 1
            return line + "\n"

        try:
            parse_line(line, self.fields)
        except LineParseError as e:
            self.stats.passed_through += 1
            self.logger.debug(
                event=LogEvent.LINE_PARSE_FAILED,
                message="Failed to deserialize JSON line",
                metadata={'line': line, 'error': str(e), 'type': type(e).__name__}
            )
            return line + "\n"

        try:
            record = self._compose()
        except RenderError as e:
            record = ""
            self.logger.debug(
                event=LogEvent.LINE_RENDER_FAILED,
                message="Failed to format JSON line",
                metadata={'line': line, 'error': str(e)}
            )
        finally:
            self.fields.clear()
            self.deferred.clear()

        if not record:
            self.stats.render_failures += 1
            return "\n" + line + "\n"

        self.stats.formatted += 1
        return record + "\n"

    def _priority_text(self, name: str, index: int) -> Optional[str]:
        """
        Bare text for one priority field.

        Returns None when the field is not printed in the priority phase
        (deferred multi-line string, or object/array left for the body).
        """
        config = self.config
        value = self.fields.values[index]
        kind = kind_of(value)

        if kind is ValueKind.STRING:
            if has_line_break(value):
                self.deferred.append(index)
                self.fields.mark_consumed(index)
                return None
            if name == config.level_field:
                return self.styler.level(value)
            return value

        if kind is ValueKind.NUMBER and name == config.timestamp_field:
            timestamp = value.as_int()
            if timestamp is not None:
                return self.styler.timestamp(
                    format_timestamp(timestamp, config.timestamp_format)
                )

        if kind in (ValueKind.OBJECT, ValueKind.ARRAY):
            return None

        return scalar_text(value)

    def _compose(self) -> str:
        fields = self.fields
        styler = self.styler
        parts: List[str] = []

        for name in self.config.no_key_fields:
            index = fields.index_of(name)
            if index is None or fields.is_consumed(index):
                continue
            text = self._priority_text(name, index)
            if text is None:
                continue
            fields.mark_consumed(index)
            if text:
                parts.append(text)

        for index, key, value in fields.remaining():
            if has_line_break(value):
                self.deferred.append(index)
                continue
            text = render_value(value, key, 0, styler)
            if text:
                parts.append(text)

        record = " ".join(parts)

        for index in self.deferred:
            key, value = fields.get_index(index)
            record += "\n" + render_value(value, key, 0, styler)

        return record

    # ─────────────────────────────────────────────────────────────────────
    # Stream processing
    # ─────────────────────────────────────────────────────────────────────

    def _read_failed(self, error: Exception) -> None:
        self.stats.read_failures += 1
        self.logger.warning(
            event=LogEvent.LINE_READ_FAILED,
            message="Failed to read line from input",
            metadata={'error': str(error), 'type': type(error).__name__}
        )

    def _decode(self, raw: Union[bytes, str]) -> Optional[str]:
        if isinstance(raw, str):
            return strip_terminator(raw)
        try:
            return strip_terminator(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            self._read_failed(e)
            return None

    def transform_lines(self, lines: Iterable[Union[bytes, str]], out: TextIO) -> TransformStats:
        """
        Transform every input line and write one record per line.

        A line that cannot be read (I/O error) or decoded becomes an empty
        record and processing continues with the next line.

        Args:
            lines: Input lines (bytes decoded as UTF-8, or text), with or
                without terminators
            out: Text destination; flushed after every record unless
                config.flush_each_line is False

        Returns:
            Counters for this run

        Raises:
            InputReadError: If MAX_CONSECUTIVE_READ_FAILURES reads fail in
                a row (the input is gone)
            OSError: If writing to ``out`` fails (fatal)
        """
        flush = self.config.flush_each_line
        source = iter(lines)
        failures_in_row = 0

        while True:
            try:
                raw = next(source)
            except StopIteration:
                break
            except OSError as e:
                failures_in_row += 1
                self._read_failed(e)
                if failures_in_row >= MAX_CONSECUTIVE_READ_FAILURES:
                    raise InputReadError(f"cannot read input: {e}") from e
                line = None
            else:
                failures_in_row = 0
                line = self._decode(raw)

            if line is None:
                self.stats.lines += 1
                out.write("\n")
            else:
                out.write(self.process_line(line))
            if flush:
                out.flush()

        out.flush()
        return self.stats


def transform_lines(
    lines: Iterable[Union[bytes, str]],
    out: TextIO,
    config: Config,
    styler: Optional[Styler] = None
) -> TransformStats:
    """Convenience wrapper: one LineTransformer over one input stream."""
    return LineTransformer(config, styler=styler).transform_lines(lines, out)
