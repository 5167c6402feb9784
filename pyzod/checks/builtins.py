"""Reusable checks built on the engine.

Every factory returns CheckInternals and accepts the same keyword options:

- error: message string or error map applied to the issues it produces
- abort: stop the check sequence when this check fails
- when: predicate gating the check

Issues produced here are non-fatal (continue_=True) unless abort is set.
Length checks only run on sized values and numeric checks only on values
that support ordering; anything else passes through untouched.
"""

from collections.abc import Callable, Mapping, Sized
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any

from pyzod.checks.engine import CheckDef, CheckInternals, WhenFn
from pyzod.core.context import ParsePayload, to_error_map
from pyzod.core.exceptions import CheckError
from pyzod.core.types import parsed_type_name
from pyzod.issues.creators import (
    create_custom_issue,
    create_fixed_length_array_issue,
    create_not_multiple_of_issue,
    create_too_big_issue,
    create_too_small_issue,
)
from pyzod.issues.types import RawIssue

_NUMBERS = (int, float, Decimal, Fraction)


def _build(
    name: str,
    body: Callable[[ParsePayload], None],
    error: Any,
    abort: bool,
    when: WhenFn | None,
    **params: Any,
) -> CheckInternals:
    internals = CheckInternals(
        when=when,
        definition=CheckDef(check=name, error=to_error_map(error), abort=abort),
        params=params,
    )

    def check(payload: ParsePayload) -> None:
        start = len(payload.issues)
        body(payload)
        for issue in payload.issues[start:]:
            issue.continue_ = not abort
            if issue.inst is None:
                issue.inst = internals

    internals.check = check
    return internals


def _both(first: WhenFn | None, second: WhenFn) -> WhenFn:
    if first is None:
        return second
    return lambda payload: second(payload) and first(payload)


def _size_origin(value: Any) -> str:
    if isinstance(value, str):
        return "string"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, Mapping):
        return "object"
    return "array"


def _is_sized(payload: ParsePayload) -> bool:
    return isinstance(payload.value, Sized)


def _numeric_origin(value: Any) -> str:
    name = parsed_type_name(value)
    if name == "bigint":
        return "bigint"
    if name in ("number", "NaN", "Infinity"):
        return "number"
    if name == "Date":
        return "date"
    return "value"


def _is_orderable(threshold: Any) -> WhenFn:
    """Gate numeric checks on values that can be ordered against threshold."""

    def gate(payload: ParsePayload) -> bool:
        value = payload.value
        if isinstance(value, bool):
            return False
        if isinstance(value, Decimal) and value.is_nan():
            return False
        if isinstance(threshold, datetime):
            return isinstance(value, datetime)
        if isinstance(threshold, date):
            return isinstance(value, date) and not isinstance(value, datetime)
        return isinstance(value, _NUMBERS)

    return gate


def _require_non_negative_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CheckError(
            "Length bound must be a non-negative integer",
            check=name,
            parameter="length",
            reason=repr(value),
        )


# =============================================================================
# Generic checks
# =============================================================================


def custom_check(
    body: Callable[[ParsePayload], None],
    *,
    error: Any = None,
    abort: bool = False,
    when: WhenFn | None = None,
) -> CheckInternals:
    """Wrap a raw check body.

    The body receives the payload and may add issues or overwrite the value.
    Like every built-in check, the wrapper decides fatality: issues the body
    adds get continue_ = not abort, whatever the body set. Pass abort=True
    to make them fatal.
    """
    return _build("custom", body, error, abort, when)


def refine(
    predicate: Callable[[Any], bool],
    *,
    error: Any = None,
    abort: bool = False,
    when: WhenFn | None = None,
    path: list[str | int] | None = None,
    params: Mapping[str, Any] | None = None,
) -> CheckInternals:
    """Add a custom issue when predicate(value) is falsy.

    Args:
        predicate: Function of the current value
        error: Message or error map for the produced issue
        abort: Stop further checks on failure
        when: Optional gate
        path: Path, relative to the payload, of the produced issue
        params: Extra data stored under the issue's "params" property

    Returns:
        CheckInternals ready to be passed to run_checks

    Example:
        >>> positive = refine(lambda v: v > 0, error="Must be positive")
    """
    relative = list(path or [])

    def body(payload: ParsePayload) -> None:
        if predicate(payload.value):
            return
        properties = {"params": dict(params)} if params else None
        issue: RawIssue = create_custom_issue("", properties, payload.value)
        issue.path = list(relative)
        payload.add_issue(issue)

    return _build("refine", body, error, abort, when)


def overwrite(
    transform: Callable[[Any], Any],
    *,
    when: WhenFn | None = None,
) -> CheckInternals:
    """Replace the current value with transform(value); never adds issues."""

    def body(payload: ParsePayload) -> None:
        payload.value = transform(payload.value)

    return _build("overwrite", body, None, False, when)


# =============================================================================
# Length checks
# =============================================================================


def min_length(
    minimum: int, *, error: Any = None, abort: bool = False, when: WhenFn | None = None
) -> CheckInternals:
    """Require len(value) >= minimum."""
    _require_non_negative_int("min_length", minimum)

    def body(payload: ParsePayload) -> None:
        if len(payload.value) < minimum:
            origin = _size_origin(payload.value)
            payload.add_issue(create_too_small_issue(minimum, True, origin, payload.value))

    return _build("min_length", body, error, abort, _both(when, _is_sized), minimum=minimum)


def max_length(
    maximum: int, *, error: Any = None, abort: bool = False, when: WhenFn | None = None
) -> CheckInternals:
    """Require len(value) <= maximum."""
    _require_non_negative_int("max_length", maximum)

    def body(payload: ParsePayload) -> None:
        if len(payload.value) > maximum:
            origin = _size_origin(payload.value)
            payload.add_issue(create_too_big_issue(maximum, True, origin, payload.value))

    return _build("max_length", body, error, abort, _both(when, _is_sized), maximum=maximum)


def length(
    exact: int, *, error: Any = None, abort: bool = False, when: WhenFn | None = None
) -> CheckInternals:
    """Require len(value) == exact.

    Lists and tuples report the fixed-length form ("expected exactly N").
    """
    _require_non_negative_int("length", exact)

    def body(payload: ParsePayload) -> None:
        actual = len(payload.value)
        if actual == exact:
            return
        too_small = actual < exact
        origin = _size_origin(payload.value)
        if origin == "array":
            issue = create_fixed_length_array_issue(exact, actual, payload.value, too_small)
        elif too_small:
            issue = create_too_small_issue(exact, True, origin, payload.value)
        else:
            issue = create_too_big_issue(exact, True, origin, payload.value)
        payload.add_issue(issue)

    return _build("length", body, error, abort, _both(when, _is_sized), length=exact)


# =============================================================================
# Numeric checks
# =============================================================================


def _bound(
    name: str,
    threshold: Any,
    inclusive: bool,
    lower: bool,
    error: Any,
    abort: bool,
    when: WhenFn | None,
) -> CheckInternals:
    if isinstance(threshold, bool) or not isinstance(threshold, (*_NUMBERS, date)):
        raise CheckError(
            "Bound must be a number or a date",
            check=name,
            parameter="value",
            reason=repr(threshold),
        )

    def body(payload: ParsePayload) -> None:
        value = payload.value
        if lower:
            ok = value >= threshold if inclusive else value > threshold
        else:
            ok = value <= threshold if inclusive else value < threshold
        if ok:
            return
        origin = _numeric_origin(value)
        if lower:
            payload.add_issue(create_too_small_issue(threshold, inclusive, origin, value))
        else:
            payload.add_issue(create_too_big_issue(threshold, inclusive, origin, value))

    return _build(
        name,
        body,
        error,
        abort,
        _both(when, _is_orderable(threshold)),
        value=threshold,
        inclusive=inclusive,
    )


def gte(value: Any, *, error: Any = None, abort: bool = False, when: WhenFn | None = None) -> CheckInternals:
    return _bound("gte", value, True, True, error, abort, when)


def gt(value: Any, *, error: Any = None, abort: bool = False, when: WhenFn | None = None) -> CheckInternals:
    return _bound("gt", value, False, True, error, abort, when)


def lte(value: Any, *, error: Any = None, abort: bool = False, when: WhenFn | None = None) -> CheckInternals:
    return _bound("lte", value, True, False, error, abort, when)


def lt(value: Any, *, error: Any = None, abort: bool = False, when: WhenFn | None = None) -> CheckInternals:
    return _bound("lt", value, False, False, error, abort, when)


def _is_multiple(value: Any, divisor: Any) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    # Decimal arithmetic on the printed values avoids float remainders like 0.3 % 0.1
    try:
        return Decimal(str(value)) % Decimal(str(divisor)) == 0
    except InvalidOperation:
        return False


def multiple_of(
    divisor: Any, *, error: Any = None, abort: bool = False, when: WhenFn | None = None
) -> CheckInternals:
    """Require value to be an exact multiple of divisor.

    Raises:
        CheckError: If divisor is zero or not a number
    """
    if isinstance(divisor, bool) or not isinstance(divisor, (int, float, Decimal)) or divisor == 0:
        raise CheckError(
            "Divisor must be a non-zero number",
            check="multiple_of",
            parameter="divisor",
            reason=repr(divisor),
        )

    def body(payload: ParsePayload) -> None:
        if not _is_multiple(payload.value, divisor):
            origin = _numeric_origin(payload.value)
            payload.add_issue(create_not_multiple_of_issue(divisor, origin, payload.value))

    return _build(
        "multiple_of", body, error, abort, _both(when, _is_orderable(divisor)), divisor=divisor
    )
