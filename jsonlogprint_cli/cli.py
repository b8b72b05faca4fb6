"""
jsonlogprint CLI - Main entry point.

Reads JSON log lines from stdin and writes logfmt records to stdout.
"""

import argparse
import io
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from jsonlogprint import __version__
from jsonlogprint.config import Config, ColorOption, TimestampFormat
from jsonlogprint.logging import LogEvent, create_logger, setup_logging
from jsonlogprint.styling import Styler
from jsonlogprint.transform import InputReadError, LineTransformer


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the jsonlogprint command."""
    parser = argparse.ArgumentParser(
        prog="jsonlogprint",
        description="Convert JSON log lines on stdin to logfmt on stdout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Follow a service's JSON logs
  my-service 2>&1 | jsonlogprint

  # Only timestamp and message first, millisecond timestamps
  my-service | jsonlogprint -n ts,msg --timestamp-field ts --tsfmt millis

  # Defaults from a YAML file, colour forced on for a pager
  my-service | jsonlogprint --config jlp.yaml --color always | less -R

Environment:
  JLP_LOG_LEVEL   Diagnostic verbosity on stderr (default: WARNING)
  CI, FORCE_COLOR Force colour when --color auto
  NO_COLOR        Disable colour when --color auto
"""
    )

    # Options default to None so they only override the config file when given
    parser.add_argument(
        "-n", "--no-key-fields",
        default=None,
        help="Comma-separated fields printed first without a key prefix "
             "(default: time,timestamp,ts,level,msg,message)"
    )
    parser.add_argument(
        "--color",
        choices=[c.value for c in ColorOption],
        default=None,
        help="Color output: always, auto, never (default: auto)"
    )
    parser.add_argument(
        "--timestamp-format", "--tsfmt",
        dest="timestamp_format",
        choices=[f.value for f in TimestampFormat],
        default=None,
        help="auto, seconds or millis convert to ISO 8601, raw prints the "
             "integer unchanged (default: auto)"
    )
    parser.add_argument(
        "--timestamp-field",
        default=None,
        help="Field formatted as a timestamp when it is an integer (default: timestamp)"
    )
    parser.add_argument(
        "--level-field",
        default=None,
        help="Field colourised as a log level when it is a string (default: level)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with defaults; command-line options override it"
    )
    parser.add_argument(
        "--no-flush",
        action="store_true",
        help="Do not flush stdout after every record (higher throughput)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """
    Build the Config from an optional YAML file plus command-line overrides.

    Raises:
        FileNotFoundError: If --config names a missing file
        ValueError: If the file or an option is invalid
    """
    config = Config.from_yaml(args.config) if args.config else Config()

    overrides: Dict[str, Any] = {}
    for name in ("no_key_fields", "color", "timestamp_format",
                 "timestamp_field", "level_field"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.no_flush:
        overrides["flush_each_line"] = False

    return config.replace(**overrides) if overrides else config


def _silence_stdout() -> None:
    # Reader went away; keep the interpreter's exit-time flush quiet
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    finally:
        os.close(devnull)


def main(
    argv: Optional[List[str]] = None,
    stdin=None,
    stdout: Optional[TextIO] = None
) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Arguments (default: sys.argv[1:])
        stdin: Line iterable of bytes or text (default: sys.stdin.buffer)
        stdout: Text destination (default: UTF-8 wrapper over sys.stdout)

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()
    logger = create_logger("cli")

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 2

    real_stdout = stdout is None
    if real_stdout:
        stdout = sys.stdout
        if isinstance(stdout, io.TextIOWrapper):
            # Lone surrogates from \ud800-style escapes must not abort the stream
            stdout.reconfigure(encoding="utf-8", errors="backslashreplace", newline="\n")
    if stdin is None:
        stdin = sys.stdin.buffer

    styler = Styler.from_option(config.color, stream=stdout)
    logger.debug(
        event=LogEvent.STARTUP,
        message="starting up",
        metadata={
            'no_key_fields': list(config.no_key_fields),
            'color': config.color.value,
            'colorize': styler.colorize,
            'timestamp_format': config.timestamp_format.value,
            'timestamp_field': config.timestamp_field,
            'level_field': config.level_field,
            'flush_each_line': config.flush_each_line,
        }
    )

    transformer = LineTransformer(config, styler=styler)
    try:
        stats = transformer.transform_lines(stdin, stdout)
    except KeyboardInterrupt:
        return 130
    except InputReadError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        if real_stdout:
            _silence_stdout()
        return 1
    except OSError as e:
        print(f"❌ Error: cannot write output: {e}", file=sys.stderr)
        return 1

    logger.debug(
        event=LogEvent.SHUTDOWN,
        message="input exhausted",
        metadata=stats.to_dict()
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
