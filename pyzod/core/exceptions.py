"""Library-internal exception classes for pyzod.

This module defines the exception hierarchy for programmer errors inside the
issue pipeline:
- IssueError: An issue constructor received input it cannot represent
- CheckError: A check definition is malformed
- ConfigError: A configuration file or locale reference is invalid

All exceptions inherit from PyzodError for consistent error handling.

Validation failures are NOT part of this hierarchy. They are described by
pyzod.issues.errors.ValidationError, which carries finalized issues and is a
value for callers rather than a signal of a bug in the library.
"""

from typing import Any


class PyzodError(Exception):
    """Base exception for all library-internal pyzod errors.

    Provides a common base class for programmer errors raised by the issue
    pipeline, enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (issue codes,
                    property names, offending values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class IssueError(PyzodError):
    """Exception raised when an issue cannot be constructed.

    Raised by the issue constructors when they are handed input that has no
    meaningful issue representation (a negative element index, an
    element_error that is not a raw issue, and similar bugs in the caller).

    Context typically includes:
        - code: Issue code being constructed
        - property: Name of the offending property
        - value: Offending value
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        property: str | None = None,
        value: Any = None,
        **extra_context: Any,
    ) -> None:
        """Initialize issue error with construction details.

        Args:
            message: Human-readable error description
            code: Issue code being constructed
            property: Name of the offending property
            value: Offending value
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if code is not None:
            context["code"] = code
        if property is not None:
            context["property"] = property
        if value is not None:
            context["value"] = value
        context.update(extra_context)

        super().__init__(message, context)


class CheckError(PyzodError):
    """Exception raised when a check is defined with invalid parameters.

    Context typically includes:
        - check: Identifier of the check (e.g., "min_length")
        - parameter: Name of the invalid parameter
        - reason: Why the value is invalid
    """

    def __init__(
        self,
        message: str,
        check: str | None = None,
        parameter: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if check is not None:
            context["check"] = check
        if parameter is not None:
            context["parameter"] = parameter
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class ConfigError(PyzodError):
    """Configuration file error.

    Raised when configuration files cannot be loaded or parsed, or when a
    configuration names a locale that is not registered.

    Context typically includes:
        - path: Path of the configuration file
        - key: Configuration key that is invalid
        - reason: Why the configuration is invalid
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        key: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if path is not None:
            context["path"] = path
        if key is not None:
            context["key"] = key
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
