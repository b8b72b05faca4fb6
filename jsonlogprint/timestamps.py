"""
Timestamp Rendering
===================

Bounded Context: Terminal Presentation

Turns an integer Unix timestamp into ISO 8601 (UTC) text.

Formats:
- SECONDS: 2021-07-28T17:40:00Z
- MILLIS:  2021-07-28T17:40:00.000Z
- AUTO:    MILLIS above YEAR_3K_EPOCH, SECONDS otherwise
- RAW:     integer unchanged

Values that do not map to a calendar date fall back to the raw integer.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from .config import TimestampFormat


# Seconds between 1970-01-01 and 3000-01-01. Any plausible seconds value
# is far below this, any plausible millisecond value far above it.
YEAR_3K_EPOCH = 32503698000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def detect_format(timestamp: int, timestamp_format: TimestampFormat) -> TimestampFormat:
    """Resolve AUTO to SECONDS or MILLIS; other formats pass through."""
    if timestamp_format is not TimestampFormat.AUTO:
        return timestamp_format
    if timestamp > YEAR_3K_EPOCH:
        return TimestampFormat.MILLIS
    return TimestampFormat.SECONDS


def _to_datetime(seconds: int, millis: int = 0) -> Optional[datetime]:
    try:
        return _EPOCH + timedelta(seconds=seconds, milliseconds=millis)
    except OverflowError:
        return None


def _iso(dt: datetime) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )


def convert(timestamp: int, timestamp_format: TimestampFormat) -> Tuple[Optional[datetime], TimestampFormat]:
    """
    Convert a raw timestamp to a UTC datetime.

    Returns:
        (datetime or None if out of range, resolved format)
    """
    resolved = detect_format(timestamp, timestamp_format)
    if resolved is TimestampFormat.SECONDS:
        return _to_datetime(timestamp), resolved
    if resolved is TimestampFormat.MILLIS:
        seconds, millis = divmod(timestamp, 1000)
        return _to_datetime(seconds, millis), resolved
    return None, resolved


def format_timestamp(timestamp: int, timestamp_format: TimestampFormat) -> str:
    """
    Render an integer timestamp as text.

    Args:
        timestamp: Integer read from the timestamp field
        timestamp_format: Configured format policy

    Returns:
        ISO 8601 text, or the integer as text for RAW and out-of-range values

    Example:
        >>> format_timestamp(1627494000, TimestampFormat.SECONDS)
        '2021-07-28T17:40:00Z'
        >>> format_timestamp(1627494000123, TimestampFormat.AUTO)
        '2021-07-28T17:40:00.123Z'
    """
    dt, resolved = convert(timestamp, timestamp_format)
    if dt is None:
        return str(timestamp)
    if resolved is TimestampFormat.MILLIS:
        return f"{_iso(dt)}.{dt.microsecond // 1000:03d}Z"
    return f"{_iso(dt)}Z"
