"""Locale registry.

Locales are error maps keyed by name. A name like "de-AT" falls back to its
language prefix ("de") and finally to English. Install a locale process-wide
with set_config(Config.for_locale("de")).

Example:
    >>> register_locale("de-CH", format_de)
    >>> get_localized_error(issue, "de-CH")
    'Zu klein: erwartet, dass number >=18 ist'
"""

import logging
import threading

from pyzod.core.context import ErrorMap
from pyzod.issues.types import RawIssue
from pyzod.locales.de import format_de
from pyzod.locales.en import format_en

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

_lock = threading.Lock()
_locales: dict[str, ErrorMap] = {
    "en": format_en,
    "de": format_de,
}


def register_locale(name: str, formatter: ErrorMap) -> None:
    """Register or replace a locale formatter."""
    with _lock:
        _locales[name] = formatter
    logger.debug("Registered locale %s", name)


def has_locale(name: str) -> bool:
    """Return True if the name, or its language prefix, is registered."""
    with _lock:
        return name in _locales or name.split("-", 1)[0] in _locales


def get_locale_formatter(name: str) -> ErrorMap:
    """Return the formatter for a locale.

    Args:
        name: Locale name such as "de" or "de-AT"

    Returns:
        The exact match, else the language prefix match, else English
    """
    with _lock:
        if name in _locales:
            return _locales[name]
        language = name.split("-", 1)[0]
        if language in _locales:
            return _locales[language]
        logger.debug("Unknown locale %s, falling back to %s", name, DEFAULT_LOCALE)
        return _locales[DEFAULT_LOCALE]


def available_locales() -> list[str]:
    with _lock:
        return sorted(_locales)


def get_localized_error(issue: RawIssue, name: str) -> str:
    return get_locale_formatter(name)(issue) or ""


def get_localized_errors(issues: list[RawIssue], name: str) -> list[str]:
    formatter = get_locale_formatter(name)
    return [formatter(issue) or "" for issue in issues]


__all__ = [
    "DEFAULT_LOCALE",
    "available_locales",
    "format_de",
    "format_en",
    "get_locale_formatter",
    "get_localized_error",
    "get_localized_errors",
    "has_locale",
    "register_locale",
]
