"""Configuration and issue file loading.

This module loads configuration from JSON and YAML files, merges CLI arguments
with file-based configuration (with CLI taking precedence) and validates the
result.

Configuration files can specify:
- locale: Registered locale used to render messages (e.g., "en", "de")
- report_input: Whether finalized issues carry the offending input
- format: Projection to print (pretty, tree, flat, format)

The same loader reads issue files: a list of raw issue mappings, or a mapping
with an "issues" list.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from pyzod.core.exceptions import ConfigError, IssueError
from pyzod.issues.types import RawIssue
from pyzod.locales import has_locale

logger = logging.getLogger(__name__)

FORMATS = ("pretty", "tree", "flat", "format")
CONFIG_KEYS = ("locale", "report_input", "format")

DEFAULT_SETTINGS: dict[str, Any] = {
    "locale": None,
    "report_input": True,
    "format": "pretty",
}


def _parse(path: Path, content: str) -> Any:
    if path.suffix == ".json":
        return json.loads(content)
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_load(content)
    # YAML is a superset of JSON, but JSON error messages are clearer
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        return yaml.safe_load(content)


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document.

    Format is determined by file extension (.json, .yaml, .yml) or
    auto-detected when the extension is ambiguous.

    Args:
        path: File to load

    Returns:
        Parsed document

    Raises:
        ConfigError: If the file is missing or has invalid syntax
    """
    if not path.exists():
        raise ConfigError(f"File not found: {path}", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read {path}", path=str(path), reason=str(e)) from e

    try:
        return _parse(path, content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}", path=str(path), reason=str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}", path=str(path), reason=str(e)) from e


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        ConfigError: If the file cannot be loaded or is not a mapping

    Example:
        >>> config = load_config(Path("pyzod.yaml"))
        >>> config["locale"]
        'de'
    """
    document = load_document(path)
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ConfigError(
            f"Configuration in {path} must be a mapping",
            path=str(path),
            reason=f"got {type(document).__name__}",
        )
    logger.debug("Loaded configuration from %s", path)
    return dict(document)


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into base configuration.

    Only non-None override values are applied, so file values are kept when
    the corresponding CLI argument was not given.

    Example:
        >>> merge_config({"locale": "de", "format": "tree"}, format="flat")
        {'locale': 'de', 'format': 'flat'}
    """
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(config: Mapping[str, Any]) -> list[str]:
    """Validate configuration keys and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of validation error messages (empty list if valid)

    Example:
        >>> validate_config({"format": "xml"})
        ['Unknown format: xml (expected one of pretty, tree, flat, format)']
    """
    errors = []

    for key in config:
        if key not in CONFIG_KEYS:
            errors.append(f"Unknown configuration key: {key}")

    locale = config.get("locale")
    if locale is not None and (not isinstance(locale, str) or not has_locale(locale)):
        errors.append(f"Unknown locale: {locale}")

    report_input = config.get("report_input")
    if report_input is not None and not isinstance(report_input, bool):
        errors.append(f"report_input must be true or false, got {report_input!r}")

    fmt = config.get("format")
    if fmt is not None and fmt not in FORMATS:
        errors.append(f"Unknown format: {fmt} (expected one of {', '.join(FORMATS)})")

    return errors


def resolve_settings(config: Mapping[str, Any]) -> dict[str, Any]:
    """Fill in defaults for keys the configuration leaves out."""
    settings = dict(DEFAULT_SETTINGS)
    settings.update({k: v for k, v in config.items() if v is not None})
    return settings


def load_issues(path: Path) -> list[RawIssue]:
    """Load raw issues from a JSON or YAML file.

    Args:
        path: File containing a list of issue mappings, or a mapping with an
              "issues" list

    Returns:
        Raw issues in file order

    Raises:
        ConfigError: If the file is missing or has invalid syntax
        IssueError: If an entry is not a mapping, lacks a code or has a
                    non-list path
    """
    document = load_document(path)
    if isinstance(document, Mapping):
        document = document.get("issues", [])
    if document is None:
        return []
    if not isinstance(document, list):
        raise IssueError(
            f"Issues in {path} must be a list",
            value=type(document).__name__,
        )

    issues = []
    for index, entry in enumerate(document):
        if not isinstance(entry, Mapping) or "code" not in entry:
            raise IssueError(
                f"Entry {index} in {path} is not an issue mapping with a code",
                property="code",
                index=index,
            )
        entry_path = entry.get("path")
        if entry_path is not None and not isinstance(entry_path, list):
            raise IssueError(
                f"Entry {index} in {path} has a path that is not a list",
                property="path",
                value=entry_path,
                index=index,
            )
        issues.append(RawIssue.from_dict(entry))
    logger.debug("Loaded %d issues from %s", len(issues), path)
    return issues
