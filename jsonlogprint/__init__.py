"""
jsonlogprint - JSON log lines to human-readable logfmt
=====================================================

A stdin-to-stdout filter that sits between a JSON-emitting log producer
and a human reading a terminal. Each JSON object line becomes one compact
``key=value`` record, optionally colourised; anything that is not a JSON
object passes through unchanged.

Architecture:
- values: Value model and reusable FieldMap arena
- parser: Line → FieldMap
- styling: Colour policy (timestamp, level, nesting depth)
- timestamps: Integer timestamp → ISO 8601
- render: Recursive logfmt rendering
- transform: Per-line orchestration (LineTransformer)
- config: Immutable Config (+ YAML loading)
- logging: Structured diagnostics on stderr

Processing Model:
- Single-threaded, one line parsed, rendered, written and flushed
  before the next is read

Example:
    >>> import sys
    >>> from jsonlogprint import Config, LineTransformer
    >>> LineTransformer(Config()).transform_lines(sys.stdin.buffer, sys.stdout)
"""

__version__ = "0.3.0"

from jsonlogprint.config import Config, ColorOption, TimestampFormat
from jsonlogprint.parser import LineParseError, NotAnObjectError, parse_line
from jsonlogprint.render import RenderError, render_value
from jsonlogprint.styling import Style, Styler, resolve_color
from jsonlogprint.timestamps import YEAR_3K_EPOCH, format_timestamp
from jsonlogprint.transform import InputReadError, LineTransformer, TransformStats, transform_lines
from jsonlogprint.values import FieldMap, Number, ValueKind, kind_of

__all__ = [
    "__version__",
    "Config",
    "ColorOption",
    "TimestampFormat",
    "LineParseError",
    "NotAnObjectError",
    "parse_line",
    "RenderError",
    "render_value",
    "Style",
    "Styler",
    "resolve_color",
    "YEAR_3K_EPOCH",
    "format_timestamp",
    "InputReadError",
    "LineTransformer",
    "TransformStats",
    "transform_lines",
    "FieldMap",
    "Number",
    "ValueKind",
    "kind_of",
]
