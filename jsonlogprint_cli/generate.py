"""
Synthetic log generator.

Writes a mix of JSON log lines and plain-text lines to stdout, for
feeding jsonlogprint in benchmarks and tests.

Usage:
    jsonlogprint-generate 5000 --seed 7 | jsonlogprint
"""

import argparse
import json
import random
import sys
import time
from typing import Callable, Iterator, List, Optional


MESSAGES = [
    "Application started",
    "Processing request",
    "Database query executed",
    "Cache miss",
    "Cache hit",
    "Request completed",
    "Connection established",
    "Authentication successful",
    "File processed",
    "Task completed",
]

LEVELS = ["INFO", "WARN", "ERROR", "DEBUG"]


def _now_millis() -> int:
    return int(time.time() * 1000)


def generate_lines(
    count: int,
    rng: Optional[random.Random] = None,
    now_millis: Callable[[], int] = _now_millis
) -> Iterator[str]:
    """
    Yield ``count`` synthetic log lines (without terminators).

    Roughly 5% are plain text; the rest are JSON objects with timestamp
    (epoch millis), level, message and request_id, plus duration_ms
    (50%) and user_id (33%).

    Args:
        count: Number of lines
        rng: Random source (seed it for reproducible fixtures)
        now_millis: Clock for the timestamp field
    """
    rng = rng or random.Random()

    for _ in range(count):
        message = rng.choice(MESSAGES)
        level = rng.choice(LEVELS)

        if rng.randrange(20) == 0:
            yield f"Plain text log message: {message}"
            continue

        log = {
            "timestamp": now_millis(),
            "level": level,
            "message": message,
            "request_id": f"req-{rng.randrange(1000, 9999)}",
        }
        if rng.randrange(2) == 0:
            log["duration_ms"] = rng.randrange(1, 1000)
        if rng.randrange(3) == 0:
            log["user_id"] = f"user-{rng.randrange(1, 100)}"

        yield json.dumps(log, separators=(",", ":"))


def main(argv: Optional[List[str]] = None) -> int:
    """Generator CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="jsonlogprint-generate",
        description="Write synthetic JSON log lines to stdout"
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=int,
        default=1000,
        help="Number of lines (default: 1000)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output"
    )
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    try:
        for line in generate_lines(args.count, rng):
            sys.stdout.write(line + "\n")
        sys.stdout.flush()
    except BrokenPipeError:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
