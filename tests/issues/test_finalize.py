"""Tests for message resolution and issue finalization."""

from dataclasses import dataclass

import pytest
from hypothesis import given, settings

from pyzod.checks.engine import CheckDef, CheckInternals
from pyzod.core.codes import IssueCode
from pyzod.core.config import Config, set_config
from pyzod.core.context import ParseContext
from pyzod.issues.creators import (
    create_invalid_element_issue,
    create_invalid_type_issue,
    create_invalid_union_issue,
    create_too_small_issue,
    create_unrecognized_keys_issue,
)
from pyzod.issues.finalize import (
    convert_issue_to_raw,
    convert_raw_issues_to_issues,
    extract_schema_level_error,
    finalize_issue,
    issue_to_properties,
    resolve_message,
)
from pyzod.issues.types import UNSET, FinalIssue, RawIssue
from tests.conftest import raw_issues


class MessageSchema:
    """Schema exposing error_for."""

    def __init__(self, message: str) -> None:
        self.message = message

    def error_for(self, issue: RawIssue) -> str:
        return self.message


@dataclass
class ErrorRecord:
    error: object = None


class GetterSchema:
    def get_error(self):
        return "From getter"


class WrappedSchema:
    def __init__(self, inner) -> None:
        self._inner = inner

    def internals(self):
        return self._inner


def issue() -> RawIssue:
    return create_too_small_issue(18, True, "number", 3)


class TestSchemaLevelProbes:
    """Test the ways a producing instance can supply a message."""

    def test_no_inst(self) -> None:
        assert extract_schema_level_error(issue()) == ""

    def test_message_source(self) -> None:
        raw = issue()
        raw.inst = MessageSchema("S")
        assert extract_schema_level_error(raw) == "S"

    def test_error_attribute_string(self) -> None:
        raw = issue()
        raw.inst = ErrorRecord("Fixed")
        assert extract_schema_level_error(raw) == "Fixed"

    def test_error_attribute_callable(self) -> None:
        raw = issue()
        raw.inst = ErrorRecord(lambda i: f"got {i.input}")
        assert extract_schema_level_error(raw) == "got 3"

    def test_check_definition(self) -> None:
        raw = issue()
        raw.inst = CheckInternals(definition=CheckDef(error=lambda i: "From check"))
        assert extract_schema_level_error(raw) == "From check"

    def test_get_error(self) -> None:
        raw = issue()
        raw.inst = GetterSchema()
        assert extract_schema_level_error(raw) == "From getter"

    def test_internals(self) -> None:
        raw = issue()
        raw.inst = WrappedSchema(ErrorRecord("Inner"))
        assert extract_schema_level_error(raw) == "Inner"

    def test_empty_hook_defers(self) -> None:
        raw = issue()
        raw.inst = MessageSchema("")
        assert extract_schema_level_error(raw) == ""

    def test_instance_without_hooks(self) -> None:
        raw = issue()
        raw.inst = object()
        assert extract_schema_level_error(raw) == ""


class TestResolutionPrecedence:
    """Test the order of the message resolution chain."""

    def setup_issue(self, inst=None) -> RawIssue:
        raw = issue()
        raw.inst = inst
        return raw

    def full_chain(self):
        ctx = ParseContext(error=lambda i: "C")
        config = Config(custom_error=lambda i: "G", locale_error=lambda i: "L")
        return ctx, config

    def test_explicit_message_wins(self) -> None:
        raw = self.setup_issue(MessageSchema("S"))
        raw.message = "Explicit"
        ctx, config = self.full_chain()
        assert resolve_message(raw, ctx, config) == "Explicit"

    def test_schema_beats_context_and_config(self) -> None:
        raw = self.setup_issue(MessageSchema("S"))
        ctx, config = self.full_chain()
        assert finalize_issue(raw, ctx, config).message == "S"

    def test_context_beats_config(self) -> None:
        ctx, config = self.full_chain()
        assert resolve_message(self.setup_issue(), ctx, config) == "C"

    def test_custom_error_beats_locale(self) -> None:
        _, config = self.full_chain()
        assert resolve_message(self.setup_issue(), ParseContext(), config) == "G"

    def test_locale_beats_default(self) -> None:
        config = Config(locale_error=lambda i: "L")
        assert resolve_message(self.setup_issue(), None, config) == "L"

    def test_default(self) -> None:
        assert resolve_message(self.setup_issue(), None, None) == (
            "Too small: expected number to be at least 18"
        )

    @pytest.mark.parametrize("empty", ["", None])
    def test_empty_results_defer(self, empty) -> None:
        raw = self.setup_issue(MessageSchema(""))
        ctx = ParseContext(error=lambda i: empty)
        config = Config(custom_error=lambda i: empty, locale_error=lambda i: "L")
        assert resolve_message(raw, ctx, config) == "L"


class TestFinalizeIssue:
    """Test finalize_issue field mapping and input reporting."""

    def test_scenario_type_mismatch(self) -> None:
        raw = create_invalid_type_issue("string", 42)
        raw.path = ["user", "name"]
        final = finalize_issue(raw)
        assert final.code is IssueCode.INVALID_TYPE
        assert final.message == "Invalid input: expected string, received number"
        assert final.path == ["user", "name"]
        assert final.expected == "string"
        assert final.received == "number"
        assert final.input == 42

    def test_none_path_becomes_empty_list(self) -> None:
        raw = RawIssue(code="custom", message="x")
        raw.path = None
        assert finalize_issue(raw).path == []

    def test_path_is_copied(self) -> None:
        raw = issue()
        raw.path = ["a"]
        final = finalize_issue(raw)
        raw.path.append("b")
        assert final.path == ["a"]

    def test_report_input_false_hides_input(self) -> None:
        final = finalize_issue(issue(), ParseContext(report_input=False))
        assert final.input is UNSET
        assert not final.has_input

    def test_report_input_true(self) -> None:
        final = finalize_issue(issue(), ParseContext(report_input=True))
        assert final.input == 3
        assert final.has_input

    def test_size_fields(self) -> None:
        final = finalize_issue(issue())
        assert final.minimum == 18
        assert final.inclusive is True
        assert final.origin == "number"
        assert final.maximum is None

    def test_mistyped_properties_become_zero_values(self) -> None:
        raw = RawIssue(code="too_small", properties={"origin": 5, "inclusive": "yes"})
        final = finalize_issue(raw)
        assert final.origin == ""
        assert final.inclusive is False

    def test_keys(self) -> None:
        final = finalize_issue(create_unrecognized_keys_issue(["extra"], {"extra": 1}))
        assert final.keys == ["extra"]

    def test_element_error_is_finalized(self) -> None:
        inner = create_invalid_type_issue("string", 1)
        raw = create_invalid_element_issue(0, "array", [1], inner)
        final = finalize_issue(raw)
        assert final.issues is not None
        assert final.issues[0].message == "Invalid input: expected string, received number"
        assert final.message == (
            "Invalid input: expected string, received number (element at index 0)"
        )

    def test_nested_issues_use_the_same_config(self) -> None:
        inner = create_invalid_type_issue("string", 1)
        raw = create_invalid_element_issue(0, "array", [1], inner)
        final = finalize_issue(raw, None, Config(custom_error=lambda i: f"G:{i.code}"))
        assert final.message == "G:invalid_element"
        assert final.issues[0].message == "G:invalid_type"

    def test_union_branches_are_finalized(self) -> None:
        raw = create_invalid_union_issue(
            [create_invalid_type_issue("string", 1), create_invalid_type_issue("bool", 1)], 1
        )
        final = finalize_issue(raw)
        assert [len(branch) for branch in final.errors] == [1, 1]
        assert final.errors[1][0].expected == "bool"

    def test_final_issue_is_immutable(self) -> None:
        final = finalize_issue(issue())
        with pytest.raises(AttributeError):
            final.message = "changed"  # type: ignore[misc]

    @given(raw=raw_issues())
    @settings(max_examples=50, deadline=None)
    def test_message_is_never_empty(self, raw: RawIssue) -> None:
        assert finalize_issue(raw, None, None).message != ""

    @given(raw=raw_issues())
    @settings(max_examples=50, deadline=None)
    def test_report_input_false_always_hides_input(self, raw: RawIssue) -> None:
        assert finalize_issue(raw, ParseContext(report_input=False)).input is UNSET


class TestConversions:
    """Test bulk conversion and conversion back to raw issues."""

    def test_convert_uses_global_config(self) -> None:
        set_config(Config(custom_error=lambda i: "Global"))
        finals = convert_raw_issues_to_issues([issue(), issue()])
        assert [f.message for f in finals] == ["Global", "Global"]

    def test_convert_preserves_order(self) -> None:
        raws = [RawIssue(code="custom", message=str(n)) for n in range(5)]
        assert [f.message for f in convert_raw_issues_to_issues(raws)] == list("01234")

    @given(raw=raw_issues())
    @settings(max_examples=50, deadline=None)
    def test_round_trip_keeps_code_message_input(self, raw: RawIssue) -> None:
        final = finalize_issue(raw)
        back = convert_issue_to_raw(final)
        assert back.code == raw.code
        assert back.message == final.message
        assert back.input == raw.input
        assert back.path == []
        assert back.properties == {}

    def test_round_trip_of_hidden_input(self) -> None:
        final = finalize_issue(issue(), ParseContext(report_input=False))
        assert convert_issue_to_raw(final).input is None

    def test_issue_to_properties(self) -> None:
        final = FinalIssue(code="too_small", message="m", minimum=0, origin="number")
        assert issue_to_properties(final) == {"minimum": 0, "origin": "number", "inclusive": False}
