"""CLI command implementations.

This module implements the CLI commands for the pyzod tool:
- render: Finalize raw issues from a file and print a projection
- list_locales: List registered locales
- check_config: Validate configuration files

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from pyzod.cli.config import (
    load_config,
    load_issues,
    merge_config,
    resolve_settings,
    validate_config,
)
from pyzod.cli.exit_codes import ExitCode
from pyzod.cli.output import configure_logging, handle_error, print_json
from pyzod.core.config import Config, get_config
from pyzod.core.context import ParseContext
from pyzod.core.exceptions import ConfigError, PyzodError
from pyzod.issues.errors import (
    ValidationError,
    flatten_error,
    format_error,
    prettify_error,
    treeify_error,
)
from pyzod.issues.finalize import finalize_issue
from pyzod.locales import available_locales

logger = logging.getLogger(__name__)


def project(error: ValidationError, fmt: str) -> Any:
    """Render an error with the named projection.

    Args:
        error: Error to render
        fmt: One of pretty, tree, flat, format

    Returns:
        A string for pretty, otherwise a JSON-ready structure

    Raises:
        ConfigError: If fmt is not a known projection
    """
    if fmt == "pretty":
        return prettify_error(error)
    if fmt == "tree":
        return treeify_error(error).to_dict()
    if fmt == "flat":
        return flatten_error(error).to_dict()
    if fmt == "format":
        return format_error(error)
    raise ConfigError(f"Unknown format: {fmt}", key="format")


def render(
    issues_file: Annotated[Path, Parameter(help="JSON or YAML file with raw issues")],
    format: Annotated[
        str | None, Parameter(help="Projection (pretty, tree, flat, format)")
    ] = None,
    locale: Annotated[str | None, Parameter(help="Locale for messages (e.g., en, de)")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    report_input: Annotated[
        bool | None, Parameter(help="Include offending input in issues")
    ] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str, Parameter(help="Log level (debug, info, warning, error)")] = "warning",
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Finalize raw issues from a file and print them.

    Loads the issues, finalizes them under the chosen locale and prints the
    chosen projection: pretty as a single line, the others as indented JSON.

    Args:
        issues_file: File containing raw issues
        format: Projection to print (default pretty)
        locale: Locale used for messages (default: process-wide config)
        config: Configuration file (CLI arguments take precedence)
        report_input: Whether finalized issues carry the offending input
        verbose: Show stack traces on errors
        log_level: Logging level (debug, info, warning, error)
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 when there are no issues, 2 when issues were rendered)

    Example:
        >>> exit_code = render(Path("issues.json"), format="flat", locale="de")
    """
    try:
        configure_logging(log_level, log_file)

        if not issues_file.exists():
            print(f"Error: Issues file not found: {issues_file}", file=sys.stderr)
            return ExitCode.UNEXPECTED_ERROR

        cfg: dict[str, Any] = load_config(config) if config else {}
        cfg = merge_config(cfg, locale=locale, format=format, report_input=report_input)

        errors = validate_config(cfg)
        if errors:
            for error in errors:
                print(f"Error: {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        settings = resolve_settings(cfg)
        message_config = (
            Config.for_locale(settings["locale"]) if settings["locale"] else get_config()
        )
        ctx = ParseContext(report_input=settings["report_input"])

        raws = load_issues(issues_file)
        finals = [finalize_issue(raw, ctx, message_config) for raw in raws]
        logger.info("Finalized %d issues from %s", len(finals), issues_file)

        if not finals:
            print("No issues found")
            return ExitCode.SUCCESS

        rendered = project(ValidationError(finals), settings["format"])
        if isinstance(rendered, str):
            print(rendered)
        else:
            print_json(rendered)
        return ExitCode.VALIDATION_ERROR

    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except PyzodError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def list_locales() -> int:
    """List registered locales.

    Returns:
        Exit code (always 0 for success)
    """
    print("Available locales:")
    for name in available_locales():
        print(f"  {name}")
    return ExitCode.SUCCESS


def check_config(
    config_path: Annotated[Path, Parameter(help="Configuration file path")],
) -> int:
    """Validate a configuration file.

    Args:
        config_path: Path to configuration file to validate

    Returns:
        Exit code (0 for valid config, 6 for invalid config)

    Example:
        >>> exit_code = check_config(config_path=Path("pyzod.yaml"))
    """
    try:
        config = load_config(config_path)
        errors = validate_config(config)

        if errors:
            print("✗ Configuration validation failed:", file=sys.stderr)
            for error in errors:
                print(f"  {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        print("✓ Configuration is valid")
        settings = resolve_settings(config)
        print(f"  Locale: {settings['locale'] or 'default'}")
        print(f"  Format: {settings['format']}")
        print(f"  Report input: {'yes' if settings['report_input'] else 'no'}")
        return ExitCode.SUCCESS

    except ConfigError as e:
        print("✗ Configuration error:", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR
