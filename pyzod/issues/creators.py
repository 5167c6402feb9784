"""Issue constructors.

One constructor per canonical failure mode. Each sets the code, fills the
property bag with the keys that code carries and leaves the path empty; the
check engine or the caller's payload prepends the current location.

The second half of the module holds shortcuts that build a raw issue, finalize
it and wrap it in a single-issue ValidationError in one step.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pyzod.core.codes import IssueCode
from pyzod.core.config import Config
from pyzod.core.context import ParseContext
from pyzod.core.exceptions import IssueError
from pyzod.core.types import parsed_type_name
from pyzod.issues.errors import ValidationError, is_validation_error
from pyzod.issues.finalize import convert_issue_to_raw, finalize_issue
from pyzod.issues.types import FinalIssue, RawIssue

logger = logging.getLogger(__name__)

# Deduplication is quadratic on unhashable values, so it is only applied to
# short lists.
MAX_DEDUP_VALUES = 10
MAX_DEDUP_KEYS = 5


def _unique(items: Sequence[Any]) -> list[Any]:
    """Remove duplicates by equality, keeping the first occurrence."""
    result: list[Any] = []
    for item in items:
        if not any(item == seen and type(item) is type(seen) for seen in result):
            result.append(item)
    return result


def create_issue(
    code: IssueCode | str,
    message: str = "",
    properties: Mapping[str, Any] | None = None,
    input: Any = None,
) -> RawIssue:
    """Create a raw issue with a private copy of the property bag.

    Args:
        code: Issue code
        message: Explicit message, or "" to resolve during finalization
        properties: Canonical properties for the code
        input: Offending value

    Returns:
        RawIssue with an empty path
    """
    return RawIssue(
        code=code,
        message=message or "",
        input=input,
        path=[],
        properties=dict(properties) if properties else {},
    )


# =============================================================================
# Raw issue constructors
# =============================================================================


def create_invalid_type_issue(expected: str, input: Any) -> RawIssue:
    """Create an invalid_type issue.

    Example:
        >>> issue = create_invalid_type_issue("string", 42)
        >>> issue.properties
        {'expected': 'string', 'received': 'number'}
    """
    return create_issue(
        IssueCode.INVALID_TYPE,
        properties={"expected": str(expected), "received": parsed_type_name(input)},
        input=input,
    )


def create_invalid_value_issue(valid_values: Iterable[Any], input: Any) -> RawIssue:
    """Create an invalid_value issue listing the accepted values."""
    values = list(valid_values)
    if 1 < len(values) <= MAX_DEDUP_VALUES:
        values = _unique(values)
    return create_issue(IssueCode.INVALID_VALUE, properties={"values": values}, input=input)


def create_too_big_issue(maximum: Any, inclusive: bool, origin: str, input: Any) -> RawIssue:
    return create_issue(
        IssueCode.TOO_BIG,
        properties={"maximum": maximum, "inclusive": inclusive, "origin": origin},
        input=input,
    )


def create_too_small_issue(minimum: Any, inclusive: bool, origin: str, input: Any) -> RawIssue:
    return create_issue(
        IssueCode.TOO_SMALL,
        properties={"minimum": minimum, "inclusive": inclusive, "origin": origin},
        input=input,
    )


def create_fixed_length_array_issue(
    expected_length: Any, actual_length: int, input: Any, is_too_small: bool
) -> RawIssue:
    """Create a size issue for a fixed-length array.

    Both bounds are set to the expected length so the message reads
    "expected exactly N".

    Args:
        expected_length: Required length
        actual_length: Observed length (kept for callers' logging only)
        input: Offending array
        is_too_small: True for too_small, False for too_big

    Returns:
        too_small or too_big RawIssue
    """
    code = IssueCode.TOO_SMALL if is_too_small else IssueCode.TOO_BIG
    logger.debug("Fixed-length array mismatch: expected %s, got %s", expected_length, actual_length)
    return create_issue(
        code,
        properties={
            "minimum": expected_length,
            "maximum": expected_length,
            "inclusive": True,
            "origin": "array",
        },
        input=input,
    )


def create_invalid_format_issue(
    format: str, input: Any, extras: Mapping[str, Any] | None = None
) -> RawIssue:
    """Create an invalid_format issue.

    Args:
        format: Format name (e.g., "email", "starts_with", "regex")
        input: Offending value
        extras: Additional properties such as prefix, suffix, includes or pattern

    Returns:
        invalid_format RawIssue
    """
    properties: dict[str, Any] = {"format": format}
    if extras:
        properties.update(extras)
    return create_issue(IssueCode.INVALID_FORMAT, properties=properties, input=input)


def create_not_multiple_of_issue(divisor: Any, origin: str, input: Any) -> RawIssue:
    return create_issue(
        IssueCode.NOT_MULTIPLE_OF,
        properties={"divisor": divisor, "origin": origin},
        input=input,
    )


def create_unrecognized_keys_issue(keys: Iterable[str], input: Any) -> RawIssue:
    keys = list(keys)
    if 1 < len(keys) <= MAX_DEDUP_KEYS:
        keys = list(dict.fromkeys(keys))
    return create_issue(IssueCode.UNRECOGNIZED_KEYS, properties={"keys": keys}, input=input)


def create_invalid_key_issue(key: Any, origin: str, input: Any) -> RawIssue:
    return create_issue(
        IssueCode.INVALID_KEY,
        properties={"key": key, "origin": origin},
        input=input,
    )


def create_invalid_element_issue(
    index: int, origin: str, input: Any, element_error: RawIssue
) -> RawIssue:
    """Create an invalid_element issue located at [index].

    Args:
        index: Position of the failing element
        origin: Container kind ("array", "array rest", "set", ...)
        input: The container
        element_error: Issue produced by the element itself

    Returns:
        invalid_element RawIssue with path [index]

    Raises:
        IssueError: If index is negative or element_error is not a RawIssue
    """
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise IssueError(
            "Element index must be a non-negative integer",
            code=IssueCode.INVALID_ELEMENT.value,
            property="index",
            value=index,
        )
    if not isinstance(element_error, RawIssue):
        raise IssueError(
            "Element error must be a raw issue",
            code=IssueCode.INVALID_ELEMENT.value,
            property="element_error",
            value=type(element_error).__name__,
        )
    issue = create_issue(
        IssueCode.INVALID_ELEMENT,
        properties={"index": index, "origin": origin, "element_error": element_error},
        input=input,
    )
    issue.path = [index]
    return issue


def create_invalid_union_issue(
    branch_errors: Sequence[Sequence[RawIssue] | RawIssue], input: Any
) -> RawIssue:
    """Create an invalid_union issue for "no union member matched".

    Args:
        branch_errors: One issue list per attempted branch. A bare RawIssue is
                       treated as a branch that failed with that single issue.
        input: Offending value

    Returns:
        invalid_union RawIssue with per-branch errors
    """
    branches = [
        [branch] if isinstance(branch, RawIssue) else list(branch) for branch in branch_errors
    ]
    properties: dict[str, Any] = {"errors": branches}
    if branches:
        properties["error_count"] = len(branches)
    return create_issue(IssueCode.INVALID_UNION, properties=properties, input=input)


def create_invalid_xor_issue(match_count: int, input: Any) -> RawIssue:
    """Create an invalid_union issue for an exclusive union matched more than once.

    inclusive=False marks the exclusive variant; match_count records how many
    members accepted the input.
    """
    return create_issue(
        IssueCode.INVALID_UNION,
        properties={"errors": [], "inclusive": False, "match_count": match_count},
        input=input,
    )


def create_custom_issue(
    message: str = "", properties: Mapping[str, Any] | None = None, input: Any = None
) -> RawIssue:
    return create_issue(IssueCode.CUSTOM, message, properties, input)


def create_non_optional_issue(input: Any) -> RawIssue:
    return create_issue(
        IssueCode.INVALID_TYPE,
        properties={"expected": "nonoptional", "received": parsed_type_name(input)},
        input=input,
    )


def create_missing_required_issue(field_name: str, field_type: str = "") -> RawIssue:
    return create_issue(
        IssueCode.MISSING_REQUIRED,
        properties={"field_name": field_name, "field_type": field_type},
    )


def create_type_conversion_issue(from_type: str, to_type: str, input: Any) -> RawIssue:
    return create_issue(
        IssueCode.TYPE_CONVERSION,
        properties={"from_type": from_type, "to_type": to_type},
        input=input,
    )


def create_invalid_schema_issue(
    reason: str, input: Any = None, extras: Mapping[str, Any] | None = None
) -> RawIssue:
    properties: dict[str, Any] = {"reason": reason}
    if extras:
        properties.update(extras)
    return create_issue(IssueCode.INVALID_SCHEMA, properties=properties, input=input)


def create_invalid_discriminator_issue(field: str, input: Any) -> RawIssue:
    return create_issue(IssueCode.INVALID_DISCRIMINATOR, properties={"field": field}, input=input)


def create_incompatible_types_issue(
    conflict_type: str, value1: Any, value2: Any, input: Any
) -> RawIssue:
    return create_issue(
        IssueCode.INCOMPATIBLE_TYPES,
        properties={"conflict_type": conflict_type, "value1": value1, "value2": value2},
        input=input,
    )


def create_nil_pointer_issue(input: Any = None) -> RawIssue:
    return create_issue(IssueCode.NIL_POINTER, input=input)


# =============================================================================
# Single-issue ValidationError shortcuts
# =============================================================================


def _single_issue_error(
    raw: RawIssue, ctx: ParseContext | None, config: Config | None = None
) -> ValidationError:
    return ValidationError([finalize_issue(raw, ctx, config)])


def _raw_from_exception(error: BaseException, input: Any) -> RawIssue:
    """Turn an arbitrary exception into a raw issue.

    A ValidationError contributes its first issue; anything else becomes a
    custom issue carrying the exception text.
    """
    validation_error = is_validation_error(error)
    if validation_error is not None and validation_error.issues:
        return convert_issue_to_raw(validation_error.issues[0])
    return create_custom_issue(str(error), None, input)


def create_final_error(
    code: IssueCode | str,
    message: str = "",
    properties: Mapping[str, Any] | None = None,
    input: Any = None,
    ctx: ParseContext | None = None,
    config: Config | None = None,
) -> ValidationError:
    """Build, finalize and wrap a single issue.

    Example:
        >>> err = create_final_error("custom", "Bad value", input=3)
        >>> str(err)
        'Bad value'
    """
    return _single_issue_error(create_issue(code, message, properties, input), ctx, config)


def create_invalid_type_error(
    expected: str, input: Any, ctx: ParseContext | None = None, inst: Any = None
) -> ValidationError:
    raw = create_invalid_type_issue(expected, input)
    raw.inst = inst
    return _single_issue_error(raw, ctx)


def create_non_optional_error(ctx: ParseContext | None = None) -> ValidationError:
    return _single_issue_error(create_non_optional_issue(None), ctx)


def create_invalid_value_error(
    valid_values: Iterable[Any], input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_invalid_value_issue(valid_values, input), ctx)


def create_too_big_error(
    maximum: Any, inclusive: bool, origin: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_too_big_issue(maximum, inclusive, origin, input), ctx)


def create_too_small_error(
    minimum: Any, inclusive: bool, origin: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_too_small_issue(minimum, inclusive, origin, input), ctx)


def create_rest_parameter_too_small_error(
    minimum: Any, inclusive: bool, origin: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    """Build a too_small error for a variadic (rest) parameter list."""
    raw = create_too_small_issue(minimum, inclusive, origin, input)
    raw.properties["is_rest_param"] = True
    return _single_issue_error(raw, ctx)


def create_fixed_length_array_error(
    expected_length: Any,
    actual_length: int,
    input: Any,
    is_too_small: bool,
    ctx: ParseContext | None = None,
) -> ValidationError:
    raw = create_fixed_length_array_issue(expected_length, actual_length, input, is_too_small)
    return _single_issue_error(raw, ctx)


def create_invalid_format_error(
    format: str,
    input: Any,
    ctx: ParseContext | None = None,
    extras: Mapping[str, Any] | None = None,
) -> ValidationError:
    return _single_issue_error(create_invalid_format_issue(format, input, extras), ctx)


def create_not_multiple_of_error(
    divisor: Any, origin: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_not_multiple_of_issue(divisor, origin, input), ctx)


def create_custom_error(
    message: str,
    properties: Mapping[str, Any] | None = None,
    input: Any = None,
    ctx: ParseContext | None = None,
) -> ValidationError:
    return _single_issue_error(create_custom_issue(message, properties, input), ctx)


def create_unrecognized_keys_error(
    keys: Iterable[str], input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_unrecognized_keys_issue(keys, input), ctx)


def create_invalid_key_error(
    key: Any, origin: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_invalid_key_issue(key, origin, input), ctx)


def create_invalid_element_error(
    index: int,
    origin: str,
    input: Any,
    element_error: BaseException,
    ctx: ParseContext | None = None,
) -> ValidationError:
    """Build an invalid_element error from the element's own failure.

    Args:
        index: Position of the failing element
        origin: Container kind
        input: The container
        element_error: A ValidationError (its first issue is used) or any
                       other exception (its text becomes a custom issue)
        ctx: Parse context

    Returns:
        Single-issue ValidationError
    """
    inner = _raw_from_exception(element_error, input)
    return _single_issue_error(create_invalid_element_issue(index, origin, input, inner), ctx)


def create_invalid_union_error(
    union_errors: Sequence[BaseException], input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    """Build an invalid_union error from the failure of each member."""
    branches = [[_raw_from_exception(error, input)] for error in union_errors]
    return _single_issue_error(create_invalid_union_issue(branches, input), ctx)


def create_invalid_xor_error(
    match_count: int, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_invalid_xor_issue(match_count, input), ctx)


def create_missing_required_error(
    field_name: str, field_type: str = "", ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_missing_required_issue(field_name, field_type), ctx)


def create_type_conversion_error(
    from_type: str, to_type: str, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    return _single_issue_error(create_type_conversion_issue(from_type, to_type, input), ctx)


def create_incompatible_types_error(
    conflict_type: str, value1: Any, value2: Any, input: Any, ctx: ParseContext | None = None
) -> ValidationError:
    raw = create_incompatible_types_issue(conflict_type, value1, value2, input)
    return _single_issue_error(raw, ctx)


def create_invalid_schema_error(
    reason: str,
    input: Any = None,
    ctx: ParseContext | None = None,
    extras: Mapping[str, Any] | None = None,
) -> ValidationError:
    return _single_issue_error(create_invalid_schema_issue(reason, input, extras), ctx)


def create_array_validation_error(issues: Sequence[RawIssue]) -> ValidationError | None:
    """Finalize already-located element issues into one error, or None if empty."""
    if not issues:
        return None
    finals: list[FinalIssue] = [finalize_issue(raw, ParseContext(), None) for raw in issues]
    return ValidationError(finals)
