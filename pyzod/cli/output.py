"""Output helpers for CLI commands.

This module provides:
- configure_logging: Root logger setup from --log-level/--log-file
- handle_error: Formatted error messages with context and optional stack traces
- print_json: Stable JSON rendering of structured projections
"""

import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any

from pyzod.core.exceptions import ConfigError

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "warning", log_file: Path | None = None) -> None:
    """Configure the root logger for one CLI invocation.

    Args:
        level: One of debug, info, warning, error (case-insensitive)
        log_file: Write log records to this file instead of stderr

    Raises:
        ConfigError: If the level is not recognized
    """
    numeric = LOG_LEVELS.get(level.lower())
    if numeric is None:
        raise ConfigError(
            f"Invalid log level: {level}",
            key="log_level",
            reason=f"expected one of {', '.join(LOG_LEVELS)}",
        )

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=numeric, handlers=[handler], force=True)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display an error message with context.

    Displays error messages to stderr with the context fields of PyzodError
    exceptions. When verbose mode is enabled, also displays the stack trace.

    Args:
        error: Exception to display
        verbose: Whether to show stack trace (default False)
    """
    print(f"Error: {error}", file=sys.stderr)

    context = getattr(error, "context", None)
    if context:
        print("Context:", file=sys.stderr)
        for key, value in context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)


def print_json(data: Any) -> None:
    """Print data as indented JSON; non-JSON values fall back to str()."""
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
