"""
Line Parser
===========

Bounded Context: Input Decoding

Deserializes one line of text into the reusable FieldMap.

Design:
- Standard library JSON decoder with hooks (no intermediate re-parse)
- Object key order preserved through object_pairs_hook
- Number literals preserved through parse_int / parse_float
- NaN / Infinity rejected (not JSON)
- Only a top-level object is accepted; anything else is a parse failure

Example:
    >>> from jsonlogprint.values import FieldMap
    >>> fields = FieldMap()
    >>> parse_line('{"level": "info", "n": 1.50}', fields)
    >>> fields.get("n").text
    '1.50'
"""

import json
from typing import Any, List, Tuple

from .values import FieldMap, Number


class LineParseError(ValueError):
    """Line is not a JSON object."""


class NotAnObjectError(LineParseError):
    """Line is valid JSON but its top-level value is not an object."""


class _Pairs(list):
    """Top-level object marker: key/value pairs in source order."""


def _object_pairs(pairs: List[Tuple[str, Any]]) -> _Pairs:
    return _Pairs(pairs)


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def _nested_object(pairs: _Pairs) -> dict:
    return {key: _unwrap(value) for key, value in pairs}


def _unwrap(value: Any) -> Any:
    # Nested objects also come out of the hook as _Pairs; turn them into dicts
    if isinstance(value, _Pairs):
        return _nested_object(value)
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value


_decoder = json.JSONDecoder(
    object_pairs_hook=_object_pairs,
    parse_int=Number,
    parse_float=Number,
    parse_constant=_reject_constant,
)


def parse_line(line: str, fields: FieldMap) -> None:
    """
    Parse a line as one JSON object into ``fields``.

    The map is cleared first. On failure it is left empty.

    Args:
        line: One input line without its terminator
        fields: Reusable map to populate in place

    Raises:
        NotAnObjectError: Valid JSON whose top-level value is not an object
        LineParseError: Anything else that is not valid JSON
    """
    fields.clear()
    try:
        parsed = _decoder.decode(line)
    except (ValueError, RecursionError) as e:
        raise LineParseError(str(e)) from e

    if not isinstance(parsed, _Pairs):
        raise NotAnObjectError(
            f"Expected a JSON object, got {type(_unwrap(parsed)).__name__}"
        )

    try:
        for key, value in parsed:
            fields.insert(key, _unwrap(value))
    except RecursionError as e:
        fields.clear()
        raise LineParseError("JSON nesting too deep") from e
