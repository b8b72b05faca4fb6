"""
Configuration schema for the log formatter.

This module defines the immutable configuration consumed by the line
transformer: which fields print first without a key, colour mode,
timestamp handling and the names of the timestamp and level fields.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple, Union

import yaml


DEFAULT_NO_KEY_FIELDS = ("time", "timestamp", "ts", "level", "msg", "message")


class ColorOption(str, Enum):
    """When to colourise output."""

    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class TimestampFormat(str, Enum):
    """
    How integer timestamps are printed.

    AUTO, SECONDS and MILLIS are converted to ISO 8601 (UTC),
    RAW prints the integer unchanged.
    """

    AUTO = "auto"
    SECONDS = "seconds"
    MILLIS = "millis"
    RAW = "raw"


def _split_fields(value: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, (list, tuple)):
        raise ValueError(
            f"no_key_fields must be a comma-separated string or a list, "
            f"got {type(value).__name__}"
        )
    names = (str(name).strip() for name in value if name is not None)
    return tuple(name for name in names if name)


def _option(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    return enum_cls(str(value).lower())


@dataclass(frozen=True)
class Config:
    """
    Main configuration for the line transformer.

    Built once before processing starts and read-only afterwards
    (frozen dataclass).
    """

    # Fields printed first, in this order, without a key= prefix
    no_key_fields: Tuple[str, ...] = DEFAULT_NO_KEY_FIELDS

    color: ColorOption = ColorOption.AUTO
    timestamp_format: TimestampFormat = TimestampFormat.AUTO

    timestamp_field: str = "timestamp"
    level_field: str = "level"

    # Flush output after every record (line-buffered terminal view)
    flush_each_line: bool = True

    def __post_init__(self):
        """Normalize and validate configuration."""
        object.__setattr__(self, "no_key_fields", _split_fields(self.no_key_fields))

        try:
            object.__setattr__(self, "color", _option(ColorOption, self.color))
        except ValueError:
            raise ValueError(
                f"Invalid color: {self.color}. "
                f"Must be one of {[c.value for c in ColorOption]}"
            )

        try:
            object.__setattr__(
                self, "timestamp_format", _option(TimestampFormat, self.timestamp_format)
            )
        except ValueError:
            raise ValueError(
                f"Invalid timestamp_format: {self.timestamp_format}. "
                f"Must be one of {[f.value for f in TimestampFormat]}"
            )

        if not self.timestamp_field or not isinstance(self.timestamp_field, str):
            raise ValueError("timestamp_field must be a non-empty string")

        if not self.level_field or not isinstance(self.level_field, str):
            raise ValueError("level_field must be a non-empty string")

        if not isinstance(self.flush_each_line, bool):
            raise ValueError(
                f"flush_each_line must be true or false, got {self.flush_each_line!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Build a Config from a plain mapping.

        Unknown keys are rejected so typos in config files surface early.

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown config keys: {sorted(unknown)}. "
                f"Valid keys: {sorted(known)}"
            )
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Example YAML:
            no_key_fields: [timestamp, level, msg]
            color: auto
            timestamp_format: millis
            timestamp_field: timestamp
            level_field: level
            flush_each_line: true

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML is invalid or holds invalid values
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        return cls.from_dict(data)

    def replace(self, **changes: Any) -> "Config":
        """Copy with some fields changed (CLI overrides on top of a file)."""
        values = {name: getattr(self, name) for name in self.__dataclass_fields__}
        values.update(changes)
        return Config(**values)
