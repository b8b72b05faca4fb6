"""
Field Renderer
==============

Bounded Context: logfmt Output

Converts one parsed value into logfmt text, recursively.

Syntax:
- Scalars:  key=value (bare value when key is empty)
- Strings:  quoted and escaped when they contain a space, quote or backslash
- Objects:  key{child=value child2=value}
- Arrays:   key[value value]

Structural text (keys, braces, brackets) is styled by nesting depth;
depth 0 is a top-level field.

Example:
    >>> from jsonlogprint.styling import Styler
    >>> from jsonlogprint.values import Number
    >>> render_value({"key": "value", "array": [Number("1"), Number("2")]}, "nested", 0, Styler(False))
    'nested{key=value array[1 2]}'
"""

from typing import List

from .styling import Styler
from .values import Value, ValueKind, kind_of


class RenderError(Exception):
    """A value could not be rendered."""


def quote_string(value: str) -> str:
    """Quote and escape a string if logfmt needs it, else return it bare."""
    if " " in value or '"' in value or "\\" in value:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def scalar_text(value: Value) -> str:
    """Canonical text of a string, number, bool or null."""
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return quote_string(value)
    if kind is ValueKind.NUMBER:
        return value.text
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NULL:
        return "null"
    raise TypeError(f"Not a scalar: {kind.value}")


def _render(parts: List[str], value: Value, key: str, depth: int, styler: Styler) -> None:
    kind = kind_of(value)

    if kind is ValueKind.OBJECT:
        parts.append(styler.depth(key + "{", depth))
        first = True
        for child_key, child in value.items():
            if not first:
                parts.append(" ")
            first = False
            _render(parts, child, child_key, depth + 1, styler)
        parts.append(styler.depth("}", depth))
        return

    if kind is ValueKind.ARRAY:
        parts.append(styler.depth(key + "[", depth))
        first = True
        for child in value:
            if not first:
                parts.append(" ")
            first = False
            _render(parts, child, "", depth + 1, styler)
        parts.append(styler.depth("]", depth))
        return

    if key:
        parts.append(styler.depth(key, depth))
        parts.append("=")
    parts.append(scalar_text(value))


def render_value(value: Value, key: str, depth: int, styler: Styler) -> str:
    """
    Render a value as logfmt text.

    Args:
        value: Parsed JSON value
        key: Field name, or "" for a bare value (array items, priority fields)
        depth: Nesting depth of the value's key (0 for top-level fields)
        styler: Styling policy for the process

    Returns:
        Rendered text

    Raises:
        RenderError: If the value is outside the JSON model or nests too deep
    """
    parts: List[str] = []
    try:
        _render(parts, value, key, depth, styler)
    except (TypeError, RecursionError) as e:
        raise RenderError(f"Cannot render field {key!r}: {e}") from e
    return "".join(parts)
