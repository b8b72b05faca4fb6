"""
JSON Value Model
================

Bounded Context: Parsed Log Record

This module defines how a parsed JSON log line is held in memory between
parsing and rendering.

Design:
- Native containers where they fit (str, bool, None, dict, list)
- Numbers keep their literal JSON text (no precision loss)
- Exhaustive dispatch via ValueKind instead of isinstance chains
- One FieldMap arena per process, cleared and refilled for every line

Types:
- Number: Literal JSON number
- ValueKind: Closed set of value variants
- FieldMap: Reusable, insertion-ordered top-level field container
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union


@dataclass(frozen=True)
class Number:
    """
    Immutable JSON number literal.

    The decoder hands over the exact text it read, so rendering can
    reproduce it byte for byte (``1.50`` stays ``1.50``, ``1e3`` stays
    ``1e3``).

    Attributes:
        text: Number exactly as it appeared in the input

    Example:
        >>> Number("1627494000").as_int()
        1627494000
        >>> Number("1.5").as_int() is None
        True
    """
    text: str

    def as_int(self) -> Optional[int]:
        """Integer value for integral literals, None for fractions/exponents."""
        if any(c in self.text for c in ".eE"):
            return None
        try:
            return int(self.text)
        except ValueError:
            # Beyond the interpreter's int string-conversion limit
            return None

    def __str__(self) -> str:
        return self.text


Value = Union[str, Number, bool, None, Dict[str, Any], List[Any]]


class ValueKind(str, Enum):
    """Variants a JSON value can take."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"


def kind_of(value: Value) -> ValueKind:
    """
    Classify a parsed value.

    Args:
        value: Any value produced by the line parser

    Returns:
        ValueKind of the value

    Raises:
        TypeError: If the value is not part of the JSON model
    """
    # bool before anything numeric: bool is an int subclass
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def has_line_break(value: Value) -> bool:
    """True for string values containing an embedded line break."""
    return isinstance(value, str) and ("\n" in value or "\r" in value)


class FieldMap:
    """
    Reusable, insertion-ordered map of top-level fields.

    One instance lives for the whole process. ``clear()`` empties it at
    the start of each line and the parser refills it, so the hot path
    never builds a new top-level container.

    Slots are addressed by position (parse order). Alongside the slots
    sits a skip-set of positions already printed (or deferred) by the
    transformer; consumed slots keep their value.

    Attributes:
        keys: Field names in parse order
        values: Field values, parallel to keys

    Example:
        >>> fields = FieldMap()
        >>> fields.insert("level", "info")
        >>> fields.insert("msg", "hello")
        >>> fields.mark_consumed(fields.index_of("level"))
        >>> [key for _, key, _ in fields.remaining()]
        ['msg']
    """

    def __init__(self):
        self.keys: List[str] = []
        self.values: List[Value] = []
        self._index: Dict[str, int] = {}
        self._consumed: Set[int] = set()

    def clear(self) -> None:
        """Remove all fields and reset the skip-set."""
        self.keys.clear()
        self.values.clear()
        self._index.clear()
        self._consumed.clear()

    def insert(self, key: str, value: Value) -> None:
        """
        Insert a field.

        A repeated key overwrites the earlier value but keeps the
        earlier position (standard JSON object semantics).
        """
        index = self._index.get(key)
        if index is None:
            self._index[key] = len(self.keys)
            self.keys.append(key)
            self.values.append(value)
        else:
            self.values[index] = value

    def index_of(self, key: str) -> Optional[int]:
        return self._index.get(key)

    def get(self, key: str, default: Value = None) -> Value:
        index = self._index.get(key)
        if index is None:
            return default
        return self.values[index]

    def get_index(self, index: int) -> Tuple[str, Value]:
        """Field (key, value) at a parse-order position."""
        return self.keys[index], self.values[index]

    def mark_consumed(self, index: int) -> None:
        self._consumed.add(index)

    def is_consumed(self, index: int) -> bool:
        return index in self._consumed

    def items(self) -> Iterator[Tuple[int, str, Value]]:
        """All fields as (index, key, value) in parse order."""
        for index, key in enumerate(self.keys):
            yield index, key, self.values[index]

    def remaining(self) -> Iterator[Tuple[int, str, Value]]:
        """Fields not yet consumed, in parse order."""
        for index, key, value in self.items():
            if index not in self._consumed:
                yield index, key, value

    def to_dict(self) -> Dict[str, Value]:
        """Snapshot of the current fields (for diagnostics and tests)."""
        return dict(zip(self.keys, self.values))

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return f"FieldMap({self.to_dict()!r}, consumed={sorted(self._consumed)})"
