"""Typed access to issue properties.

Raw accessors read a canonical key from RawIssue.properties and return the
zero value of the requested type when the key is missing or holds a value of
the wrong type. Final accessors return (value, present) pairs and only report
a value when the issue's code is one that carries it.
"""

from collections.abc import Sequence
from typing import Any

from pyzod.core.codes import IssueCode
from pyzod.issues.types import FinalIssue, RawIssue

# ---------------------------------------------------------------------------
# Raw issue properties
# ---------------------------------------------------------------------------


def get_property(issue: RawIssue | None, key: str) -> tuple[Any, bool]:
    """Return (value, present) for any property."""
    if issue is None or not issue.properties or key not in issue.properties:
        return None, False
    return issue.properties[key], True


def get_string_property(issue: RawIssue | None, key: str) -> str:
    value, _ = get_property(issue, key)
    return value if isinstance(value, str) else ""


def get_bool_property(issue: RawIssue | None, key: str) -> bool:
    value, _ = get_property(issue, key)
    return value if isinstance(value, bool) else False


def get_int_property(issue: RawIssue | None, key: str) -> int:
    """Return an integer property, accepting integer-valued floats."""
    value, _ = get_property(issue, key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def get_strings_property(issue: RawIssue | None, key: str) -> list[str]:
    """Return a list-of-strings property; non-string entries are stringified."""
    value, _ = get_property(issue, key)
    if isinstance(value, str) or not isinstance(value, Sequence):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


def get_list_property(issue: RawIssue | None, key: str) -> list[Any]:
    value, _ = get_property(issue, key)
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    return []


def get_raw_issue_expected(issue: RawIssue | None) -> str:
    return get_string_property(issue, "expected")


def get_raw_issue_received(issue: RawIssue | None) -> str:
    return get_string_property(issue, "received")


def get_raw_issue_origin(issue: RawIssue | None) -> str:
    return get_string_property(issue, "origin")


def get_raw_issue_format(issue: RawIssue | None) -> str:
    return get_string_property(issue, "format")


def get_raw_issue_minimum(issue: RawIssue | None) -> Any:
    value, _ = get_property(issue, "minimum")
    return value


def get_raw_issue_maximum(issue: RawIssue | None) -> Any:
    value, _ = get_property(issue, "maximum")
    return value


def get_raw_issue_divisor(issue: RawIssue | None) -> Any:
    value, _ = get_property(issue, "divisor")
    return value


def get_raw_issue_inclusive(issue: RawIssue | None, default: bool = True) -> bool:
    """Return the inclusive flag; a missing flag means inclusive."""
    value, present = get_property(issue, "inclusive")
    if not present or not isinstance(value, bool):
        return default
    return value


def get_raw_issue_keys(issue: RawIssue | None) -> list[str]:
    return get_strings_property(issue, "keys")


def get_raw_issue_values(issue: RawIssue | None) -> list[Any]:
    return get_list_property(issue, "values")


# ---------------------------------------------------------------------------
# Final issue fields, gated by code
# ---------------------------------------------------------------------------


def _gated(
    issue: FinalIssue | None, codes: set[IssueCode], value: Any, missing: Any = None
) -> tuple[Any, bool]:
    if issue is None or issue.code not in codes:
        return missing, False
    return value, True


def get_issue_expected(issue: FinalIssue | None) -> tuple[str, bool]:
    """Return (expected, present); only invalid_type issues carry it."""
    if issue is None:
        return "", False
    value, ok = _gated(issue, {IssueCode.INVALID_TYPE}, issue.expected)
    return (value, True) if ok else ("", False)


def get_issue_received(issue: FinalIssue | None) -> tuple[str, bool]:
    if issue is None:
        return "", False
    value, ok = _gated(issue, {IssueCode.INVALID_TYPE}, issue.received)
    return (value, True) if ok else ("", False)


def get_issue_minimum(issue: FinalIssue | None) -> tuple[Any, bool]:
    """Return (minimum, present); only too_small issues carry it."""
    if issue is None or issue.minimum is None:
        return None, False
    return _gated(issue, {IssueCode.TOO_SMALL}, issue.minimum)


def get_issue_maximum(issue: FinalIssue | None) -> tuple[Any, bool]:
    if issue is None or issue.maximum is None:
        return None, False
    return _gated(issue, {IssueCode.TOO_BIG}, issue.maximum)


def get_issue_format(issue: FinalIssue | None) -> tuple[str, bool]:
    if issue is None:
        return "", False
    value, ok = _gated(issue, {IssueCode.INVALID_FORMAT}, issue.format)
    return (value, True) if ok else ("", False)


def get_issue_divisor(issue: FinalIssue | None) -> tuple[Any, bool]:
    if issue is None or issue.divisor is None:
        return None, False
    return _gated(issue, {IssueCode.NOT_MULTIPLE_OF}, issue.divisor)


def get_issue_keys(issue: FinalIssue | None) -> tuple[list[str], bool]:
    if issue is None or issue.keys is None:
        return [], False
    return _gated(issue, {IssueCode.UNRECOGNIZED_KEYS}, list(issue.keys), [])


def get_issue_values(issue: FinalIssue | None) -> tuple[list[Any], bool]:
    if issue is None or issue.values is None:
        return [], False
    return _gated(issue, {IssueCode.INVALID_VALUE}, list(issue.values), [])
