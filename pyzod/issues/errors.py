"""ValidationError and its rendering projections.

A ValidationError is an ordered list of final issues plus the formatter used
to re-render issues that lack a message. It can be projected into four
shapes that carry the same messages arranged differently:

- format_error: nested dict keyed by path segment, each node with "_errors"
- treeify_error: ErrorTree nodes with errors, properties and items
- flatten_error: FlattenedError with form_errors and first-segment field_errors
- prettify_error: one string, "path: message" entries joined by "; "

Every projection has a *_with_mapper variant that replaces the message step
with a caller-supplied (FinalIssue) -> str function.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, TypeAlias

from pyzod.core.codes import IssueCode
from pyzod.issues.finalize import issue_to_properties
from pyzod.issues.formatter import MessageFormatter, default_formatter
from pyzod.issues.path import to_dot_path
from pyzod.issues.types import FinalIssue, RawIssue

IssueMapper: TypeAlias = Callable[[FinalIssue], str]
FormattedError: TypeAlias = dict[str, Any]

EMPTY_ERROR_MESSAGE = "Validation failed"


class ValidationError(Exception):
    """Validation failure carrying finalized issues.

    str(error) is the pretty projection. An error without issues renders as
    "Validation failed".

    Attributes:
        issues: Final issues in production order

    Example:
        >>> err = ValidationError([finalize_issue(raw)])
        >>> str(err)
        'user.name: Invalid input: expected string, received number'
    """

    def __init__(
        self,
        issues: Iterable[FinalIssue] | None = None,
        formatter: MessageFormatter | None = None,
    ) -> None:
        self.issues: list[FinalIssue] = list(issues or [])
        self._formatter: MessageFormatter = formatter or default_formatter
        super().__init__(self.issues)

    @property
    def formatter(self) -> MessageFormatter:
        return self._formatter

    @formatter.setter
    def formatter(self, formatter: MessageFormatter | None) -> None:
        self.set_formatter(formatter)

    def set_formatter(self, formatter: MessageFormatter | None) -> None:
        """Replace the formatter; None leaves the current one in place."""
        if formatter is not None:
            self._formatter = formatter

    def __str__(self) -> str:
        return prettify_error_with_formatter(self, self._formatter)

    def __repr__(self) -> str:
        return f"ValidationError(issues={len(self.issues)})"

    def __len__(self) -> int:
        return len(self.issues)


def is_validation_error(error: BaseException | None) -> ValidationError | None:
    """Find a ValidationError in an exception or its cause/context chain.

    Args:
        error: Exception to inspect (may be None)

    Returns:
        The first ValidationError found, or None

    Example:
        >>> try:
        ...     raise RuntimeError("wrapped") from ValidationError([])
        ... except RuntimeError as exc:
        ...     assert is_validation_error(exc) is not None
    """
    seen: set[int] = set()
    current = error
    while current is not None and id(current) not in seen:
        if isinstance(current, ValidationError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


# =============================================================================
# Message mapping
# =============================================================================


def default_issue_mapper(formatter: MessageFormatter | None = None) -> IssueMapper:
    """Return a mapper that prefers the issue's message, else re-renders it."""
    active = formatter or default_formatter

    def mapper(issue: FinalIssue) -> str:
        if issue.message:
            return issue.message
        raw = RawIssue(
            code=issue.code,
            path=list(issue.path),
            properties=issue_to_properties(issue),
        )
        return active.format_message(raw)

    return mapper


def _nested(issue: FinalIssue) -> list[list[FinalIssue]]:
    """Return the nested issue groups of a structural or branching issue.

    Nested paths are relative to the parent issue, so they are prefixed with
    the parent's path here.
    """
    groups: list[list[FinalIssue]] = []
    if issue.code == IssueCode.INVALID_UNION and issue.errors:
        groups = [branch for branch in issue.errors if branch]
    elif issue.code in (IssueCode.INVALID_KEY, IssueCode.INVALID_ELEMENT) and issue.issues:
        groups = [issue.issues]
    if not issue.path:
        return groups
    return [
        [replace(child, path=[*issue.path, *child.path]) for child in group] for group in groups
    ]


# =============================================================================
# FormattedMap
# =============================================================================


def format_error(error: ValidationError) -> FormattedError:
    """Project an error into a nested dict keyed by path segment.

    Example:
        >>> format_error(err)
        {'_errors': [], 'user': {'_errors': [], 'name': {'_errors': ['Invalid input: ...']}}}
    """
    return format_error_with_mapper(error, default_issue_mapper(error.formatter))


def _formatted_key(segment: Any) -> str:
    key = str(segment)
    # A child named "_errors" would shadow the node's message list.
    return f'["{key}"]' if key == "_errors" else key


def format_error_with_mapper(error: ValidationError, mapper: IssueMapper) -> FormattedError:
    """Project an error into a FormattedMap using a custom mapper.

    A path key spelled "_errors" is stored under '["_errors"]' so it cannot
    collide with the node's own message list.
    """
    root: FormattedError = {"_errors": []}

    def process(issues: list[FinalIssue]) -> None:
        for issue in issues:
            groups = _nested(issue)
            if groups:
                for group in groups:
                    process(group)
                continue

            node = root
            for segment in issue.path:
                node = node.setdefault(_formatted_key(segment), {"_errors": []})
            node["_errors"].append(mapper(issue))

    process(error.issues)
    return root


# =============================================================================
# Tree
# =============================================================================


@dataclass
class ErrorTree:
    """Tree-shaped error node."""

    errors: list[str] = field(default_factory=list)
    properties: dict[str, "ErrorTree"] = field(default_factory=dict)
    items: list["ErrorTree"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict, omitting empty properties and items."""
        result: dict[str, Any] = {"errors": list(self.errors)}
        if self.properties:
            result["properties"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.items:
            result["items"] = [item.to_dict() for item in self.items]
        return result


def treeify_error(error: ValidationError) -> ErrorTree:
    return treeify_error_with_mapper(error, default_issue_mapper(error.formatter))


def treeify_error_with_mapper(error: ValidationError, mapper: IssueMapper) -> ErrorTree:
    """Project an error into an ErrorTree.

    String segments descend into properties; non-negative integer segments
    extend items with empty nodes up to the index and descend into it. A
    negative index has no slot in items and is kept as a property key.
    """
    tree = ErrorTree()
    for issue in error.issues:
        node = tree
        for segment in issue.path:
            if isinstance(segment, int) and not isinstance(segment, bool) and segment >= 0:
                while len(node.items) <= segment:
                    node.items.append(ErrorTree())
                node = node.items[segment]
            else:
                node = node.properties.setdefault(str(segment), ErrorTree())
        node.errors.append(mapper(issue))
    return tree


# =============================================================================
# Flattened
# =============================================================================


@dataclass
class FlattenedError:
    """Form-level errors plus errors grouped by top-level field."""

    form_errors: list[str] = field(default_factory=list)
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "form_errors": list(self.form_errors),
            "field_errors": {k: list(v) for k, v in self.field_errors.items()},
        }


def flatten_error(error: ValidationError) -> FlattenedError:
    return flatten_error_with_mapper(error, default_issue_mapper(error.formatter))


def flatten_error_with_formatter(
    error: ValidationError, formatter: MessageFormatter
) -> FlattenedError:
    return flatten_error_with_mapper(error, default_issue_mapper(formatter))


def flatten_error_with_mapper(error: ValidationError, mapper: IssueMapper) -> FlattenedError:
    """Project an error into form errors and first-segment field errors.

    Only the first path segment is used as the field key; deeper structure
    is intentionally dropped.
    """
    flattened = FlattenedError()
    for issue in error.issues:
        message = mapper(issue)
        if not issue.path:
            flattened.form_errors.append(message)
        else:
            flattened.field_errors.setdefault(str(issue.path[0]), []).append(message)
    return flattened


# =============================================================================
# Pretty
# =============================================================================


def prettify_error(error: ValidationError) -> str:
    return prettify_error_with_formatter(error, error.formatter)


def prettify_error_with_formatter(
    error: ValidationError | None, formatter: MessageFormatter | None
) -> str:
    if error is None:
        return EMPTY_ERROR_MESSAGE
    return prettify_error_with_mapper(error, default_issue_mapper(formatter))


def prettify_error_with_mapper(error: ValidationError, mapper: IssueMapper) -> str:
    """Join "path: message" entries with "; "."""
    if not error.issues:
        return EMPTY_ERROR_MESSAGE
    parts: list[str] = []
    for issue in error.issues:
        message = mapper(issue)
        if issue.path:
            parts.append(f"{to_dot_path(issue.path)}: {message}")
        else:
            parts.append(message)
    return "; ".join(parts)
