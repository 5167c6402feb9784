"""Process-wide message configuration.

Config carries the two programmable fallbacks of the message resolution chain:
custom_error (consulted first) and locale_error (consulted second, just before
the default English formatter). A single process-wide Config is kept here for
callers that do not pass one explicitly; it is swapped atomically and handed
out as a copy so the core only ever reads it.
"""

import logging
import threading
from dataclasses import dataclass, replace

from pyzod.core.context import ErrorMap

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Message hooks consulted during finalization.

    Attributes:
        custom_error: Application-wide error map, tried before the locale
        locale_error: Locale formatter, the last programmable fallback

    Example:
        >>> config = Config(custom_error=lambda issue: "Nope")
        >>> set_config(config)
    """

    custom_error: ErrorMap | None = None
    locale_error: ErrorMap | None = None

    @classmethod
    def for_locale(cls, locale: str) -> "Config":
        """Build a config whose locale_error renders messages in a locale.

        Args:
            locale: Registered locale name (e.g., "en", "de", "de-AT")

        Returns:
            Config with locale_error set to the locale's formatter
        """
        # Imported here: the locale formatters depend on the issue package
        from pyzod.locales import get_locale_formatter

        return cls(locale_error=get_locale_formatter(locale))


_lock = threading.Lock()
_global_config = Config()


def set_config(config: Config | None) -> Config:
    """Update the process-wide configuration.

    Hooks that are None in the given config leave the current hooks in place.
    Passing None resets the configuration to its empty state.

    Args:
        config: Hooks to install, or None to reset

    Returns:
        A copy of the resulting configuration
    """
    global _global_config

    with _lock:
        if config is None:
            _global_config = Config()
        else:
            updated = replace(_global_config)
            if config.custom_error is not None:
                updated.custom_error = config.custom_error
            if config.locale_error is not None:
                updated.locale_error = config.locale_error
            _global_config = updated
        current = replace(_global_config)

    logger.debug(
        "Global config updated (custom_error=%s, locale_error=%s)",
        current.custom_error is not None,
        current.locale_error is not None,
    )
    return current


def get_config() -> Config:
    """Return a copy of the process-wide configuration."""
    with _lock:
        return replace(_global_config)
