"""Default English message formatter.

The formatter is a total function from a raw issue to a message: every code,
including unknown ones, renders to a non-empty string. It holds no per-call
state and may be shared freely.

Contents:
- MessageFormatter: protocol implemented by anything that renders raw issues
- DefaultMessageFormatter: canonical English rendering
- Shared helpers (stringify_primitive, format_threshold, ...) also used by
  the locale formatters
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from pyzod.core.codes import IssueCode
from pyzod.core.types import parsed_type_name
from pyzod.issues.accessors import (
    get_bool_property,
    get_list_property,
    get_property,
    get_raw_issue_inclusive,
    get_string_property,
    get_strings_property,
)
from pyzod.issues.types import RawIssue


@runtime_checkable
class MessageFormatter(Protocol):
    """Anything that can render a raw issue as a message."""

    def format_message(self, raw: RawIssue) -> str: ...


@dataclass(frozen=True)
class SizingInfo:
    """Unit and verb used when describing the size of a value."""

    unit: str
    verb: str


SIZABLE: dict[str, SizingInfo] = {
    "string": SizingInfo("characters", "to have"),
    "file": SizingInfo("bytes", "to have"),
    "array": SizingInfo("items", "to have"),
    "slice": SizingInfo("items", "to have"),
    "set": SizingInfo("items", "to have"),
    "object": SizingInfo("keys", "to have"),
    "map": SizingInfo("keys", "to have"),
}

FORMAT_NOUNS: dict[str, str] = {
    "regex": "input",
    "email": "email address",
    "url": "URL",
    "emoji": "emoji",
    "uuid": "uuid",
    "uuidv4": "uuid",
    "uuidv6": "uuid",
    "nanoid": "nanoid",
    "guid": "guid",
    "cuid": "cuid",
    "cuid2": "cuid2",
    "ulid": "ulid",
    "xid": "XID",
    "ksuid": "KSUID",
    "datetime": "ISO datetime",
    "date": "ISO date",
    "time": "ISO time",
    "duration": "ISO duration",
    "ipv4": "IPv4 address",
    "ipv6": "IPv6 address",
    "cidrv4": "IPv4 range",
    "cidrv6": "IPv6 range",
    "base64": "base64-encoded string",
    "base64url": "base64url-encoded string",
    "json_string": "JSON string",
    "e164": "E.164 number",
    "jwt": "JWT",
    "template_literal": "input",
    "iso_date": "ISO date format",
    "iso_time": "ISO time format",
    "iso_datetime": "ISO datetime format",
    "iso_duration": "ISO duration",
    "int8": "8-bit integer",
    "int16": "16-bit integer",
    "int32": "32-bit integer",
    "int64": "64-bit integer",
    "uint8": "8-bit unsigned integer",
    "uint16": "16-bit unsigned integer",
    "uint32": "32-bit unsigned integer",
    "uint64": "64-bit unsigned integer",
    "float32": "32-bit float",
    "float64": "64-bit float",
    "complex64": "64-bit complex number",
    "complex128": "128-bit complex number",
}


# =============================================================================
# Shared helpers
# =============================================================================


def get_sizing(origin: str, table: dict[str, SizingInfo] | None = None) -> SizingInfo | None:
    return (SIZABLE if table is None else table).get(origin)


def get_format_noun(format: str, table: dict[str, str] | None = None) -> str:
    """Return the human-readable noun for a format, defaulting to the name itself."""
    return (FORMAT_NOUNS if table is None else table).get(format, format)


def stringify_primitive(value: Any) -> str:
    """Render a value the way it appears inside messages.

    Strings are double-quoted, None is "null", booleans are lowercase and
    integer-valued floats drop their decimals.

    Example:
        >>> stringify_primitive("a"), stringify_primitive(None), stringify_primitive(2.0)
        ('"a"', 'null', '2')
    """
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        number = float(value)
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        if number.is_integer():
            return str(int(number))
        return f"{number:g}"
    return f'"{value}"'


def join_values(values: list[Any], separator: str) -> str:
    return separator.join(stringify_primitive(value) for value in values)


def format_threshold(threshold: Any) -> str:
    """Render a size threshold: integers as-is, other floats with one decimal."""
    if isinstance(threshold, bool):
        return "true" if threshold else "false"
    if isinstance(threshold, int):
        return str(threshold)
    if isinstance(threshold, float):
        if threshold.is_integer():
            return str(int(threshold))
        return f"{threshold:.1f}"
    return str(threshold)


def comparison_text(inclusive: bool, too_small: bool) -> str:
    """Return the adjective phrase for a bound, including its trailing space."""
    if too_small:
        return "at least " if inclusive else "more than "
    return "at most " if inclusive else "less than "


def comparison_operator(inclusive: bool, greater_than: bool) -> str:
    if greater_than:
        return ">=" if inclusive else ">"
    return "<=" if inclusive else "<"


def received_type_name(raw: RawIssue) -> str:
    """Return the received type: the recorded property, else the input's type."""
    received = get_string_property(raw, "received")
    if received:
        return received
    return parsed_type_name(raw.input)


# =============================================================================
# Default formatter
# =============================================================================


class DefaultMessageFormatter:
    """Canonical English rendering of raw issues.

    Dispatches on the issue code; unknown codes render as "Invalid input".

    Example:
        >>> formatter = DefaultMessageFormatter()
        >>> formatter.format_message(create_too_small_issue(18, True, "number", 3))
        'Too small: expected number to be at least 18'
    """

    def __init__(self) -> None:
        self._handlers: dict[IssueCode, Callable[[RawIssue], str]] = {
            IssueCode.INVALID_TYPE: self._invalid_type,
            IssueCode.INVALID_VALUE: self._invalid_value,
            IssueCode.TOO_BIG: lambda raw: self._size_constraint(raw, too_small=False),
            IssueCode.TOO_SMALL: lambda raw: self._size_constraint(raw, too_small=True),
            IssueCode.INVALID_FORMAT: self._invalid_format,
            IssueCode.NOT_MULTIPLE_OF: self._not_multiple_of,
            IssueCode.UNRECOGNIZED_KEYS: self._unrecognized_keys,
            IssueCode.INVALID_KEY: self._invalid_key,
            IssueCode.INVALID_UNION: lambda raw: "Invalid input: no union member matched",
            IssueCode.INVALID_ELEMENT: self._invalid_element,
            IssueCode.MISSING_REQUIRED: self._missing_required,
            IssueCode.TYPE_CONVERSION: self._type_conversion,
            IssueCode.INVALID_SCHEMA: self._invalid_schema,
            IssueCode.INVALID_DISCRIMINATOR: self._invalid_discriminator,
            IssueCode.INCOMPATIBLE_TYPES: self._incompatible_types,
            IssueCode.NIL_POINTER: lambda raw: "Nil pointer encountered",
            IssueCode.CUSTOM: self._custom,
        }

    def format_message(self, raw: RawIssue) -> str:
        handler = self._handlers.get(raw.code)  # type: ignore[arg-type]
        if handler is None:
            return "Invalid input"
        return handler(raw)

    __call__ = format_message

    def _invalid_type(self, raw: RawIssue) -> str:
        expected = get_string_property(raw, "expected")
        if expected == "stringbool":
            expected = "boolean"
        elif expected in ("complex64", "complex128"):
            expected = "complex"
        received = received_type_name(raw)
        if expected == "object" and received in ("string", "map"):
            return f"Type conversion failed: cannot convert {received} to {expected}"
        return f"Invalid input: expected {expected}, received {received}"

    def _invalid_value(self, raw: RawIssue) -> str:
        values = get_list_property(raw, "values")
        if not values:
            return "Invalid value"
        return f"Invalid option: expected one of {join_values(values, '|')}"

    def _size_constraint(self, raw: RawIssue, too_small: bool) -> str:
        origin = get_string_property(raw, "origin") or "value"
        minimum, _ = get_property(raw, "minimum")
        maximum, _ = get_property(raw, "maximum")
        threshold = minimum if too_small else maximum

        if threshold is None:
            return "Too small" if too_small else "Too big"

        if origin == "array":
            if get_bool_property(raw, "is_rest_param"):
                return f"expected at least {format_threshold(minimum)}"
            if (
                minimum is not None
                and maximum is not None
                and format_threshold(minimum) == format_threshold(maximum)
            ):
                return f"expected exactly {format_threshold(minimum)}"

        bound = format_threshold(threshold)
        if origin == "file":
            if too_small:
                return f"File size must be at least {bound} bytes"
            return f"File size must be at most {bound} bytes"

        prefix = "Too small" if too_small else "Too big"
        adj = comparison_text(get_raw_issue_inclusive(raw), too_small)
        sizing = get_sizing(origin)
        if sizing is not None:
            return f"{prefix}: expected {origin} {sizing.verb} {adj}{bound} {sizing.unit}"
        return f"{prefix}: expected {origin} to be {adj}{bound}"

    def _invalid_format(self, raw: RawIssue) -> str:
        format = get_string_property(raw, "format")
        if not format:
            return "Invalid format"
        if format == "starts_with":
            prefix = get_string_property(raw, "prefix")
            if not prefix:
                return "Invalid string: must start with specified prefix"
            return f"Invalid string: must start with {stringify_primitive(prefix)}"
        if format == "ends_with":
            suffix = get_string_property(raw, "suffix")
            if not suffix:
                return "Invalid string: must end with specified suffix"
            return f"Invalid string: must end with {stringify_primitive(suffix)}"
        if format == "includes":
            includes = get_string_property(raw, "includes")
            if not includes:
                return "Invalid string: must include specified substring"
            return f"Invalid string: must include {stringify_primitive(includes)}"
        if format == "regex":
            pattern = get_string_property(raw, "pattern")
            if not pattern:
                return "Invalid string: must match pattern"
            return f"Invalid string: must match pattern {pattern}"
        return f"Invalid {get_format_noun(format)}"

    def _not_multiple_of(self, raw: RawIssue) -> str:
        divisor, _ = get_property(raw, "divisor")
        if divisor is None:
            return "Invalid number: must be a multiple of divisor"
        if isinstance(divisor, (int, float, Decimal)):
            return f"Invalid number: must be a multiple of {stringify_primitive(divisor)}"
        return f"Invalid number: must be a multiple of {divisor}"

    def _unrecognized_keys(self, raw: RawIssue) -> str:
        keys = get_strings_property(raw, "keys")
        if not keys:
            return "Unrecognized key(s) in object"
        noun = "keys" if len(keys) > 1 else "key"
        return f"Unrecognized {noun}: {join_values(list(keys), ', ')}"

    def _invalid_key(self, raw: RawIssue) -> str:
        origin = get_string_property(raw, "origin")
        if not origin:
            return "Invalid key"
        return f"Invalid key in {origin}"

    def _invalid_element(self, raw: RawIssue) -> str:
        origin = get_string_property(raw, "origin")
        index, _ = get_property(raw, "index")
        rest = origin == "array rest"

        element_error, _ = get_property(raw, "element_error")
        if isinstance(element_error, RawIssue):
            message = self.format_message(element_error)
            if index is None:
                return message
            where = "rest element" if rest else "element"
            return f"{message} ({where} at index {index})"

        if not origin:
            return "Invalid element"
        if index is not None:
            where = "rest element" if rest else "element"
            return f"Invalid value in {origin}: {where} at index {index}"
        return f"Invalid value in {origin}"

    def _missing_required(self, raw: RawIssue) -> str:
        field_name = get_string_property(raw, "field_name")
        field_type = get_string_property(raw, "field_type") or "field"
        if not field_name:
            return f"Missing required {field_type}"
        return f"Missing required {field_type}: {field_name}"

    def _type_conversion(self, raw: RawIssue) -> str:
        from_type = get_string_property(raw, "from_type") or "unknown"
        to_type = get_string_property(raw, "to_type") or "unknown"
        return f"Type conversion failed: cannot convert {from_type} to {to_type}"

    def _invalid_schema(self, raw: RawIssue) -> str:
        reason = get_string_property(raw, "reason")
        if reason:
            return f"Invalid schema: {reason}"
        return "Invalid schema definition"

    def _invalid_discriminator(self, raw: RawIssue) -> str:
        field = get_string_property(raw, "field") or "discriminator"
        return f"Invalid or missing discriminator field: {field}"

    def _incompatible_types(self, raw: RawIssue) -> str:
        conflict = get_string_property(raw, "conflict_type") or "values"
        return f"Cannot merge {conflict}: incompatible types"

    def _custom(self, raw: RawIssue) -> str:
        if raw.message:
            return raw.message
        return get_string_property(raw, "message") or "Invalid input"


default_formatter = DefaultMessageFormatter()


def generate_default_message(raw: RawIssue) -> str:
    """Render a raw issue with the default English formatter."""
    return default_formatter.format_message(raw)


def format_message_with_formatter(raw: RawIssue, formatter: MessageFormatter) -> str:
    return formatter.format_message(raw)
