"""Run the filter as ``python -m jsonlogprint_cli``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
