"""
jsonlogprint CLI - Command-line interface for the log formatter.

This package provides the ``jsonlogprint`` filter command and the
``jsonlogprint-generate`` fixture generator.

Usage:
    my-service | jsonlogprint
    my-service | jsonlogprint -n timestamp,level,msg --color always
    jsonlogprint-generate 1000 --seed 1 | jsonlogprint
"""

from jsonlogprint import __version__

__all__ = ["__version__"]
