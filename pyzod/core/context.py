"""Parse context and payload.

ParseContext carries per-call options that influence finalization (a
call-site error map and whether the offending input is reported). ParsePayload
is the mutable record threaded through the check loop: the current value, the
current path and the raw issues accumulated so far.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from pyzod.issues.types import Path, RawIssue

# An error map turns a raw issue into a message. Returning None or "" defers
# to the next tier of the resolution chain.
ErrorMap: TypeAlias = Callable[["RawIssue"], str | None]


def to_error_map(error: Any) -> "ErrorMap | None":
    """Lift a user-supplied error into an error map.

    Args:
        error: None, a fixed message string, or a callable taking a raw issue

    Returns:
        An error map, or None when no error was supplied

    Example:
        >>> error_map = to_error_map("Must be positive")
        >>> error_map(issue)
        'Must be positive'
    """
    if error is None:
        return None
    if isinstance(error, str):
        message = error
        return lambda _issue: message
    if callable(error):
        return error
    message = str(error)
    return lambda _issue: message


@dataclass
class ParseContext:
    """Per-call parse options.

    Attributes:
        error: Call-site error map, consulted after schema-level errors
        report_input: Whether finalized issues carry the offending input
    """

    error: "ErrorMap | None" = None
    report_input: bool = True


@dataclass
class ParsePayload:
    """Mutable state threaded through validation.

    Attributes:
        value: Current value (checks may overwrite it)
        path: Location of value within the parsed input
        issues: Raw issues accumulated so far, in production order

    Example:
        >>> payload = ParsePayload("hi", path=["user", "name"])
        >>> payload.add_issue(create_too_small_issue(3, True, "string", "hi"))
        >>> payload.issues[0].path
        ['user', 'name']
    """

    value: Any = None
    path: "Path" = field(default_factory=list)
    issues: "list[RawIssue]" = field(default_factory=list)

    def __post_init__(self) -> None:
        # Own a private copy so pushes never leak into the caller's list
        self.path = list(self.path) if self.path is not None else []
        if self.issues is None:
            self.issues = []

    def add_issue(self, issue: "RawIssue") -> None:
        """Append an issue, prefixing its path with the payload path."""
        if self.path:
            issue.path = [*self.path, *issue.path]
        self.issues.append(issue)

    def add_issue_with_path(self, issue: "RawIssue", path: "Path") -> None:
        """Append an issue at an explicit path, ignoring the payload path."""
        issue.path = list(path)
        self.issues.append(issue)

    def has_issues(self) -> bool:
        return len(self.issues) > 0

    def issue_count(self) -> int:
        return len(self.issues)

    def clear_issues(self) -> None:
        self.issues.clear()

    def push_path(self, segment: "str | int") -> None:
        self.path.append(segment)

    def pop_path(self) -> "str | int | None":
        if not self.path:
            return None
        return self.path.pop()

    def with_clean_issues(self) -> "ParsePayload":
        """Return a payload with the same value and path but no issues."""
        return ParsePayload(self.value, list(self.path))

    def clone(self) -> "ParsePayload":
        """Return a copy whose path and issue list can be mutated independently."""
        return ParsePayload(self.value, list(self.path), list(self.issues))
