"""Check execution engine.

A check is anything exposing internals() -> CheckInternals. The engine runs
checks in order against a payload:

- None checks, None internals and internals without a body are skipped.
- A check with a "when" predicate is skipped once a fatal issue (continue_
  is False) is already present, and otherwise only runs when the predicate
  accepts the current value. Checks without "when" always run.
- Each check works on a fresh sub-payload holding the current value and
  path. Its final value is threaded into the next check, so a check can
  overwrite the value.
- Issues from a check whose definition has an error map get their message
  from that map and the check's internals as inst.
- A check whose definition sets abort stops the loop once it has produced
  issues.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pyzod.core.context import ErrorMap, ParseContext, ParsePayload

logger = logging.getLogger(__name__)

CheckFn = Callable[[ParsePayload], None]
WhenFn = Callable[[ParsePayload], bool]


@dataclass
class CheckDef:
    """Static definition of a check.

    Attributes:
        check: Name of the check, for diagnostics
        error: Error map applied to every issue the check produces
        abort: Stop running further checks once this one fails
    """

    check: str = "custom"
    error: ErrorMap | None = None
    abort: bool = False


@dataclass
class CheckInternals:
    """Runtime half of a check.

    Attributes:
        check: Body; may set payload.value and append issues
        when: Optional gate evaluated before the body
        definition: Static definition (error map, abort flag)
        params: Parameters the check was built with, for diagnostics
    """

    check: CheckFn | None = None
    when: WhenFn | None = None
    definition: CheckDef = field(default_factory=CheckDef)
    params: dict[str, Any] = field(default_factory=dict)

    def internals(self) -> "CheckInternals":
        return self

    def zod(self) -> "CheckInternals":
        return self


@runtime_checkable
class ZodCheck(Protocol):
    """Anything that exposes check internals."""

    def internals(self) -> CheckInternals | None: ...


def check_aborted(payload: ParsePayload, start: int = 0) -> bool:
    """Return True if any issue from index start onwards is fatal.

    Args:
        payload: Payload to inspect
        start: Index of the first issue to consider

    Returns:
        True when an issue at or after start has continue_ set to False
    """
    issues = payload.issues
    if start >= len(issues):
        return False
    return any(not issue.continue_ for issue in issues[max(start, 0):])


def _resolve_internals(check: Any) -> CheckInternals | None:
    if check is None:
        return None
    internals = check.internals() if hasattr(check, "internals") else None
    if internals is None or internals.check is None:
        return None
    return internals


def _execute(value: Any, checks: list[Any], payload: ParsePayload) -> ParsePayload:
    path = payload.path

    for position, check in enumerate(checks):
        internals = _resolve_internals(check)
        if internals is None:
            logger.debug("Skipping check %d: no runnable internals", position)
            continue

        definition = internals.definition or CheckDef()

        if internals.when is not None:
            if check_aborted(payload):
                logger.debug(
                    "Skipping conditional check %s: a fatal issue is already present",
                    definition.check,
                )
                continue
            if not internals.when(ParsePayload(value, path)):
                continue

        sub = ParsePayload(value, path)
        internals.check(sub)
        value = sub.value

        if not sub.issues:
            continue

        if definition.error is not None:
            for issue in sub.issues:
                issue.message = definition.error(issue) or issue.message
                issue.inst = internals

        payload.issues.extend(sub.issues)

        if definition.abort:
            logger.debug("Check %s aborted the check sequence", definition.check)
            break

    payload.value = value
    return payload


def run_checks(
    checks: Iterable[Any] | None,
    payload: ParsePayload | None,
    ctx: ParseContext | None = None,
) -> ParsePayload | None:
    """Run checks against the payload's own value.

    Args:
        checks: Checks to run, in order; None entries are skipped
        payload: Payload carrying value, path and accumulated issues
        ctx: Parse context of the surrounding parse call; checks read their
             options from their own definition, so it is not consulted here

    Returns:
        The same payload, with issues appended and the (possibly
        overwritten) value stored back

    Example:
        >>> payload = run_checks([min_length(3)], ParsePayload("hi", ["name"]))
        >>> payload.issues[0].code
        <IssueCode.TOO_SMALL: 'too_small'>
    """
    if payload is None or not checks:
        return payload
    return _execute(payload.value, list(checks), payload)


def run_checks_on_value(
    value: Any,
    checks: Iterable[Any] | None,
    payload: ParsePayload | None,
    ctx: ParseContext | None = None,
) -> ParsePayload | None:
    """Run checks against an explicit value, collecting issues into payload.

    The final value is stored back into payload.value.
    """
    if payload is None or not checks:
        return payload
    return _execute(value, list(checks), payload)
