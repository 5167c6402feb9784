"""CLI entry point for pyzod.

Enables invocation via `python -m pyzod`.
"""

import sys

from pyzod.cli.app import app

if __name__ == "__main__":
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)
