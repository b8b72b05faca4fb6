"""
Styling Policy
==============

Bounded Context: Terminal Presentation

Pure decision layer mapping (colour enabled?, role) to a visual style.
The renderer asks for styles; it never decides colours itself.

Roles:
- Timestamp: dimmed
- Level: by severity name (case-insensitive)
- Structure (keys, braces, brackets): cycles on nesting depth mod 6

When colour is disabled every role resolves to the plain style and no
ANSI escape sequence is ever produced.

Example:
    >>> styler = Styler(colorize=True)
    >>> styler.level("info")
    '\\x1b[36minfo\\x1b[0m'
    >>> Styler(colorize=False).level("info")
    'info'
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO, Tuple

from termcolor import colored

from .config import ColorOption


@dataclass(frozen=True)
class Style:
    """
    Immutable set of terminal emphasis attributes.

    Attributes:
        color: termcolor colour name, or None
        dimmed: Faint intensity
        bold: Bold intensity
    """
    color: Optional[str] = None
    dimmed: bool = False
    bold: bool = False

    @property
    def is_plain(self) -> bool:
        return self.color is None and not self.dimmed and not self.bold

    def apply(self, text: str) -> str:
        """Wrap text in the escape sequences for this style."""
        if self.is_plain:
            return text
        attrs = []
        if self.bold:
            attrs.append("bold")
        if self.dimmed:
            attrs.append("dark")
        # force_color: capability was already decided by resolve_color()
        return colored(text, self.color, attrs=attrs or None, force_color=True)


PLAIN = Style()
TIMESTAMP_STYLE = Style(dimmed=True)

LEVEL_STYLES = {
    "crit": Style(color="red", bold=True),
    "critical": Style(color="red", bold=True),
    "error": Style(color="red"),
    "warn": Style(color="yellow"),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "debug": Style(color="blue", dimmed=True),
    "trace": Style(dimmed=True),
}

DEPTH_STYLES: Tuple[Style, ...] = (
    Style(color="blue"),
    Style(color="cyan"),
    Style(color="green"),
    Style(color="blue", dimmed=True),
    Style(color="cyan", dimmed=True),
    Style(color="green", dimmed=True),
)


def timestamp_style(colorize: bool) -> Style:
    return TIMESTAMP_STYLE if colorize else PLAIN


def level_style(colorize: bool, level: str) -> Style:
    if not colorize:
        return PLAIN
    return LEVEL_STYLES.get(level.lower(), PLAIN)


def depth_style(colorize: bool, depth: int) -> Style:
    if not colorize:
        return PLAIN
    return DEPTH_STYLES[depth % len(DEPTH_STYLES)]


def resolve_color(
    option: ColorOption,
    stream: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None
) -> bool:
    """
    Decide once per process whether output is colourised.

    Args:
        option: Configured colour mode
        stream: Output stream whose terminal capability is checked
            (default: sys.stdout)
        environ: Environment mapping (default: os.environ)

    Returns:
        True if ANSI styling should be emitted

    Notes:
        Under ``auto``: ``CI`` or ``FORCE_COLOR`` force colour on,
        ``NO_COLOR`` forces it off, otherwise the stream must be a
        terminal that is not ``TERM=dumb``.
    """
    if option is ColorOption.ALWAYS:
        return True
    if option is ColorOption.NEVER:
        return False

    environ = os.environ if environ is None else environ
    stream = sys.stdout if stream is None else stream

    if "CI" in environ or "FORCE_COLOR" in environ:
        return True
    if "NO_COLOR" in environ:
        return False
    if environ.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Styler:
    """
    Applies the styling policy for one resolved colour decision.

    Attributes:
        colorize: Result of resolve_color(), fixed for the process
    """

    def __init__(self, colorize: bool):
        self.colorize = colorize

    @classmethod
    def from_option(cls, option: ColorOption, stream: Optional[TextIO] = None) -> "Styler":
        return cls(resolve_color(option, stream))

    def timestamp(self, text: str) -> str:
        return timestamp_style(self.colorize).apply(text)

    def level(self, level: str) -> str:
        return level_style(self.colorize, level).apply(level)

    def depth(self, text: str, depth: int) -> str:
        return depth_style(self.colorize, depth).apply(text)
