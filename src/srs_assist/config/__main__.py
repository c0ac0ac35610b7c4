"""CLI entry point for configuration introspection.

Usage:
    python -m srs_assist.config
    python -m srs_assist.config --check
    python -m srs_assist.config --json
"""

import sys

from .introspection import main

if __name__ == "__main__":
    sys.exit(main())
