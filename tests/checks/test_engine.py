"""Tests for the check execution engine."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pyzod.checks.engine import (
    CheckDef,
    CheckInternals,
    check_aborted,
    run_checks,
    run_checks_on_value,
)
from pyzod.core.context import ParseContext, ParsePayload
from pyzod.issues.creators import create_custom_issue, create_too_small_issue
from pyzod.issues.finalize import finalize_issue
from pyzod.issues.types import RawIssue


def failing(message: str, continue_: bool = True, abort: bool = False, error=None, when=None):
    """Build a check that always adds one issue."""

    def body(payload: ParsePayload) -> None:
        issue = create_custom_issue(message, None, payload.value)
        issue.continue_ = continue_
        payload.add_issue(issue)

    return CheckInternals(
        check=body, when=when, definition=CheckDef(check=message, error=error, abort=abort)
    )


def passing(calls: list):
    def body(payload: ParsePayload) -> None:
        calls.append(payload.value)

    return CheckInternals(check=body)


class Wrapper:
    """Check object exposing internals like a schema-level check would."""

    def __init__(self, internals) -> None:
        self._internals = internals

    def internals(self):
        return self._internals


def messages(payload: ParsePayload) -> list[str]:
    return [issue.message for issue in payload.issues]


class TestCheckAborted:
    """Test check_aborted."""

    def test_empty(self) -> None:
        assert check_aborted(ParsePayload()) is False

    def test_only_continuable_issues(self) -> None:
        payload = ParsePayload()
        issue = create_custom_issue("x")
        issue.continue_ = True
        payload.add_issue(issue)
        assert check_aborted(payload) is False

    def test_fatal_issue(self) -> None:
        payload = ParsePayload()
        payload.add_issue(create_custom_issue("x"))
        assert check_aborted(payload) is True

    def test_start_index(self) -> None:
        payload = ParsePayload()
        payload.add_issue(create_custom_issue("fatal"))
        ok = create_custom_issue("ok")
        ok.continue_ = True
        payload.add_issue(ok)
        assert check_aborted(payload, 1) is False
        assert check_aborted(payload, 5) is False


class TestRunChecks:
    """Test run_checks and run_checks_on_value."""

    def test_empty_checks_return_payload_unchanged(self) -> None:
        payload = ParsePayload("v", ["a"])
        assert run_checks([], payload) is payload
        assert run_checks(None, payload) is payload
        assert payload.issues == []

    def test_none_payload(self) -> None:
        assert run_checks([failing("x")], None) is None
        assert run_checks_on_value(1, [failing("x")], None) is None

    def test_issues_accumulate_in_order(self) -> None:
        payload = run_checks([failing("a"), failing("b"), failing("c")], ParsePayload(1))
        assert messages(payload) == ["a", "b", "c"]

    def test_issue_paths_are_prefixed(self) -> None:
        payload = run_checks([failing("a")], ParsePayload(1, ["user", "age"]))
        assert payload.issues[0].path == ["user", "age"]

    def test_none_checks_and_internals_are_skipped(self) -> None:
        payload = run_checks(
            [None, Wrapper(None), CheckInternals(), failing("ran")], ParsePayload(1)
        )
        assert messages(payload) == ["ran"]

    def test_wrapped_checks_run(self) -> None:
        payload = run_checks([Wrapper(failing("wrapped"))], ParsePayload(1))
        assert messages(payload) == ["wrapped"]

    def test_ctx_is_accepted(self) -> None:
        payload = run_checks([failing("a")], ParsePayload(1), ParseContext(report_input=False))
        assert messages(payload) == ["a"]


class TestAbort:
    """Test the abort flag."""

    def test_abort_stops_later_checks(self) -> None:
        calls: list = []
        payload = run_checks(
            [failing("first", abort=True), passing(calls), failing("third")], ParsePayload(1)
        )
        assert messages(payload) == ["first"]
        assert calls == []

    def test_abort_without_issues_does_not_stop(self) -> None:
        calls: list = []
        quiet = CheckInternals(check=lambda payload: None, definition=CheckDef(abort=True))
        run_checks([quiet, passing(calls)], ParsePayload(1))
        assert calls == [1]

    @given(
        abort_at=st.integers(min_value=0, max_value=5),
        total=st.integers(min_value=1, max_value=6),
    )
    @settings(max_examples=50, deadline=None)
    def test_no_check_runs_after_abort(self, abort_at: int, total: int) -> None:
        checks = [failing(str(n), abort=(n == abort_at)) for n in range(total)]
        payload = run_checks(checks, ParsePayload(0))
        expected = [str(n) for n in range(min(abort_at + 1, total))]
        assert messages(payload) == expected


class TestWhen:
    """Test the when predicate."""

    def test_when_false_skips(self) -> None:
        payload = run_checks([failing("gated", when=lambda p: False)], ParsePayload(1))
        assert payload.issues == []

    def test_when_receives_current_value_and_path(self) -> None:
        seen: list = []

        def when(payload: ParsePayload) -> bool:
            seen.append((payload.value, list(payload.path)))
            return True

        run_checks([failing("gated", when=when)], ParsePayload(7, ["n"]))
        assert seen == [(7, ["n"])]

    def test_when_skipped_after_fatal_issue(self) -> None:
        calls: list = []
        payload = run_checks(
            [failing("fatal", continue_=False), failing("gated", when=lambda p: calls.append(1) or True)],
            ParsePayload(1),
        )
        assert messages(payload) == ["fatal"]
        assert calls == []

    def test_when_runs_after_continuable_issue(self) -> None:
        payload = run_checks(
            [failing("soft", continue_=True), failing("gated", when=lambda p: True)],
            ParsePayload(1),
        )
        assert messages(payload) == ["soft", "gated"]

    def test_fatal_issue_already_in_payload(self) -> None:
        payload = ParsePayload(1)
        payload.add_issue(create_custom_issue("earlier"))
        run_checks([failing("gated", when=lambda p: True)], payload)
        assert messages(payload) == ["earlier"]

    def test_checks_without_when_still_run_after_fatal_issue(self) -> None:
        payload = run_checks(
            [failing("fatal one", continue_=False), failing("fatal two", continue_=False)],
            ParsePayload(1),
        )
        assert messages(payload) == ["fatal one", "fatal two"]


class TestOverwrite:
    """Test value threading between checks."""

    def test_value_is_threaded(self) -> None:
        def double(payload: ParsePayload) -> None:
            payload.value = payload.value * 2

        calls: list = []
        payload = run_checks(
            [CheckInternals(check=double), CheckInternals(check=double), passing(calls)],
            ParsePayload(3),
        )
        assert calls == [12]
        assert payload.value == 12

    def test_run_checks_on_value(self) -> None:
        def upper(payload: ParsePayload) -> None:
            payload.value = payload.value.upper()

        payload = ParsePayload("ignored")
        run_checks_on_value("abc", [CheckInternals(check=upper)], payload)
        assert payload.value == "ABC"


class TestErrorRemap:
    """Test per-check error maps."""

    def test_definition_error_overrides_default(self) -> None:
        def body(payload: ParsePayload) -> None:
            payload.add_issue(create_too_small_issue(3, True, "number", payload.value))

        check = CheckInternals(
            check=body, definition=CheckDef(error=lambda issue: "MY: " + issue.code)
        )
        payload = run_checks([check], ParsePayload(1))
        issue = payload.issues[0]
        assert issue.message == "MY: too_small"
        assert issue.inst is check
        assert finalize_issue(issue).message == "MY: too_small"

    def test_empty_error_keeps_message(self) -> None:
        check = failing("original", error=lambda issue: "")
        payload = run_checks([check], ParsePayload(1))
        assert messages(payload) == ["original"]

    def test_error_map_sees_raw_issue(self) -> None:
        seen: list[RawIssue] = []

        def error(issue: RawIssue) -> str:
            seen.append(issue)
            return "mapped"

        run_checks([failing("x", error=error)], ParsePayload(5, ["p"]))
        assert seen[0].input == 5
        assert seen[0].path == ["p"]

    @pytest.mark.parametrize("abort", [True, False])
    def test_remap_applies_with_abort(self, abort: bool) -> None:
        payload = run_checks([failing("x", abort=abort, error=lambda i: "E")], ParsePayload(1))
        assert messages(payload) == ["E"]
