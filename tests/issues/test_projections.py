"""Tests for ValidationError and its four projections."""

from collections import Counter

from hypothesis import given, settings
from hypothesis import strategies as st

from pyzod.core.context import ParseContext
from pyzod.issues.creators import (
    create_custom_issue,
    create_invalid_element_issue,
    create_invalid_type_issue,
    create_invalid_union_issue,
    create_too_small_issue,
    create_unrecognized_keys_issue,
)
from pyzod.issues.errors import (
    EMPTY_ERROR_MESSAGE,
    ErrorTree,
    ValidationError,
    flatten_error,
    flatten_error_with_formatter,
    flatten_error_with_mapper,
    format_error,
    format_error_with_mapper,
    is_validation_error,
    prettify_error,
    prettify_error_with_formatter,
    prettify_error_with_mapper,
    treeify_error,
    treeify_error_with_mapper,
)
from pyzod.issues.finalize import finalize_issue
from pyzod.issues.types import FinalIssue, RawIssue
from pyzod.locales import format_de
from tests.conftest import raw_issues


def error_of(*raws: RawIssue) -> ValidationError:
    return ValidationError([finalize_issue(raw) for raw in raws])


def at(path: list, raw: RawIssue) -> RawIssue:
    raw.path = path
    return raw


def type_mismatch() -> RawIssue:
    return at(["user", "name"], create_invalid_type_issue("string", 42))


def keys_and_age() -> ValidationError:
    return error_of(
        create_unrecognized_keys_issue(["extra"], {}),
        at(["user", "age"], create_too_small_issue(18, True, "number", 3)),
    )


def collect_formatted(node: dict) -> list[str]:
    messages = list(node["_errors"])
    for key, child in node.items():
        if key != "_errors":
            messages.extend(collect_formatted(child))
    return messages


def collect_tree(tree: ErrorTree) -> list[str]:
    messages = list(tree.errors)
    for child in tree.properties.values():
        messages.extend(collect_tree(child))
    for item in tree.items:
        messages.extend(collect_tree(item))
    return messages


class TestValidationError:
    """Test the ValidationError value."""

    def test_str_is_pretty(self) -> None:
        error = error_of(type_mismatch())
        assert str(error) == "user.name: Invalid input: expected string, received number"

    def test_empty(self) -> None:
        error = ValidationError()
        assert str(error) == EMPTY_ERROR_MESSAGE
        assert len(error) == 0
        assert repr(error) == "ValidationError(issues=0)"

    def test_set_formatter_ignores_none(self) -> None:
        error = ValidationError([])
        original = error.formatter
        error.set_formatter(None)
        assert error.formatter is original

    def test_is_raisable(self) -> None:
        error = error_of(type_mismatch())
        try:
            raise error
        except ValidationError as caught:
            assert caught.issues[0].path == ["user", "name"]


class TestIsValidationError:
    """Test finding a ValidationError through exception chains."""

    def test_direct(self) -> None:
        error = ValidationError([])
        assert is_validation_error(error) is error

    def test_none_and_unrelated(self) -> None:
        assert is_validation_error(None) is None
        assert is_validation_error(ValueError("x")) is None

    def test_explicit_cause(self) -> None:
        inner = ValidationError([])
        try:
            try:
                raise inner
            except ValidationError as e:
                raise RuntimeError("wrapped") from e
        except RuntimeError as outer:
            assert is_validation_error(outer) is inner

    def test_implicit_context_two_levels(self) -> None:
        inner = ValidationError([])
        try:
            try:
                try:
                    raise inner
                except ValidationError:
                    raise KeyError("middle")
            except KeyError:
                raise RuntimeError("outer")
        except RuntimeError as outer:
            assert is_validation_error(outer) is inner

    def test_cycle_terminates(self) -> None:
        first = ValueError("a")
        second = ValueError("b")
        first.__cause__ = second
        second.__cause__ = first
        assert is_validation_error(first) is None


class TestPretty:
    """Test the pretty projection."""

    def test_scenario_nested_type_mismatch(self) -> None:
        assert prettify_error(error_of(type_mismatch())) == (
            "user.name: Invalid input: expected string, received number"
        )

    def test_scenario_unrecognized_keys_and_nested_failure(self) -> None:
        assert prettify_error(keys_and_age()) == (
            'Unrecognized key: "extra"; user.age: Too small: expected number to be at least 18'
        )

    def test_empty_message_falls_back_to_formatter(self) -> None:
        issue = FinalIssue(code="too_small", message="", minimum=3, origin="string", inclusive=True)
        error = ValidationError([issue])
        assert prettify_error(error) == "Too small: expected string to have at least 3 characters"

    def test_formatter_is_used_for_empty_messages(self) -> None:
        issue = FinalIssue(code="too_small", message="", minimum=3, origin="number", inclusive=True)

        class German:
            def format_message(self, raw: RawIssue) -> str:
                return format_de(raw)

        error = ValidationError([issue], formatter=German())
        assert str(error) == "Zu klein: erwartet, dass number >=3 ist"

    def test_none_error(self) -> None:
        assert prettify_error_with_formatter(None, None) == EMPTY_ERROR_MESSAGE

    def test_mapper(self) -> None:
        error = keys_and_age()
        assert prettify_error_with_mapper(error, lambda issue: str(issue.code)) == (
            "unrecognized_keys; user.age: too_small"
        )

    def test_unicode_preserved(self) -> None:
        error = error_of(at(["名前", "ünïcode"], create_custom_issue("Ungültig ✗")))
        assert prettify_error(error) == '["名前"]["ünïcode"]: Ungültig ✗'

    def test_deep_path(self) -> None:
        path = [f"k{n}" for n in range(120)]
        error = error_of(at(path, create_custom_issue("deep")))
        rendered = prettify_error(error)
        assert rendered.startswith("k0.k1.")
        assert rendered.endswith("k119: deep")


class TestFlattened:
    """Test the flattened projection."""

    def test_scenario_nested_type_mismatch(self) -> None:
        flattened = flatten_error(error_of(type_mismatch()))
        assert flattened.form_errors == []
        assert flattened.field_errors == {
            "user": ["Invalid input: expected string, received number"]
        }

    def test_root_issues_are_form_errors(self) -> None:
        flattened = flatten_error(keys_and_age())
        assert flattened.form_errors == ['Unrecognized key: "extra"']
        assert flattened.field_errors["user"] == ["Too small: expected number to be at least 18"]

    def test_integer_first_segment_is_stringified(self) -> None:
        error = error_of(at([0, "x"], create_custom_issue("bad")))
        assert flatten_error(error).field_errors == {"0": ["bad"]}

    def test_to_dict(self) -> None:
        assert flatten_error(keys_and_age()).to_dict() == {
            "form_errors": ['Unrecognized key: "extra"'],
            "field_errors": {"user": ["Too small: expected number to be at least 18"]},
        }

    def test_mapper_and_formatter_variants(self) -> None:
        error = keys_and_age()
        mapped = flatten_error_with_mapper(error, lambda issue: "M")
        assert mapped.form_errors == ["M"]
        assert flatten_error_with_formatter(error, error.formatter) == flatten_error(error)


class TestTree:
    """Test the tree projection."""

    def test_properties_and_items(self) -> None:
        error = error_of(
            at(["users", 2, "email"], create_custom_issue("bad email")),
            create_custom_issue("root"),
        )
        tree = treeify_error(error)
        assert tree.errors == ["root"]
        users = tree.properties["users"]
        assert len(users.items) == 3
        assert users.items[0] == ErrorTree()
        assert users.items[2].properties["email"].errors == ["bad email"]

    def test_to_dict_omits_empty_children(self) -> None:
        tree = treeify_error(error_of(type_mismatch()))
        assert tree.to_dict() == {
            "errors": [],
            "properties": {
                "user": {
                    "errors": [],
                    "properties": {
                        "name": {"errors": ["Invalid input: expected string, received number"]}
                    },
                }
            },
        }

    def test_negative_index_becomes_property(self) -> None:
        tree = treeify_error(error_of(at([-1], create_custom_issue("bad"))))
        assert tree.items == []
        assert tree.properties["-1"].errors == ["bad"]

    def test_mapper(self) -> None:
        tree = treeify_error_with_mapper(keys_and_age(), lambda issue: "M")
        assert tree.errors == ["M"]
        assert tree.properties["user"].properties["age"].errors == ["M"]


class TestFormattedMap:
    """Test the FormattedMap projection."""

    def test_nested_nodes(self) -> None:
        formatted = format_error(keys_and_age())
        assert formatted == {
            "_errors": ['Unrecognized key: "extra"'],
            "user": {
                "_errors": [],
                "age": {"_errors": ["Too small: expected number to be at least 18"]},
            },
        }

    def test_element_issue_recurses_into_children(self) -> None:
        inner = create_invalid_type_issue("string", 1)
        element = at(["tags", 0], create_invalid_element_issue(0, "array", [1], inner))
        formatted = format_error(error_of(element))
        assert formatted["tags"]["0"]["_errors"] == [
            "Invalid input: expected string, received number"
        ]

    def test_union_recurses_into_branches(self) -> None:
        union = create_invalid_union_issue(
            [
                at(["a"], create_invalid_type_issue("string", 1)),
                at(["b"], create_invalid_type_issue("bool", 1)),
            ],
            {},
        )
        formatted = format_error(error_of(at(["field"], union)))
        assert formatted["field"]["a"]["_errors"] == [
            "Invalid input: expected string, received number"
        ]
        assert formatted["field"]["b"]["_errors"] == [
            "Invalid input: expected bool, received number"
        ]
        assert formatted["field"]["_errors"] == []

    def test_empty_union_is_a_leaf(self) -> None:
        formatted = format_error(error_of(create_invalid_union_issue([], 1)))
        assert formatted["_errors"] == ["Invalid input: no union member matched"]

    def test_mapper(self) -> None:
        formatted = format_error_with_mapper(error_of(type_mismatch()), lambda i: "M")
        assert formatted["user"]["name"]["_errors"] == ["M"]

    def test_key_named_errors_is_quoted(self) -> None:
        error = error_of(
            at(["_errors"], create_custom_issue("bad", None, 1)),
            at(["_errors", "x"], create_custom_issue("worse", None, 1)),
        )
        formatted = format_error(error)
        assert formatted["_errors"] == []
        assert formatted['["_errors"]']["_errors"] == ["bad"]
        assert formatted['["_errors"]']["x"]["_errors"] == ["worse"]


class TestProjectionsAgree:
    """Test that the projections carry the same messages for leaf issues."""

    @given(raws=st.lists(raw_issues(), max_size=8))
    @settings(max_examples=50, deadline=None)
    def test_same_multiset_of_messages(self, raws: list[RawIssue]) -> None:
        error = ValidationError([finalize_issue(raw, ParseContext()) for raw in raws])
        expected = Counter(issue.message for issue in error.issues)

        flattened = flatten_error(error)
        flat_messages = list(flattened.form_errors)
        for messages in flattened.field_errors.values():
            flat_messages.extend(messages)

        assert Counter(collect_formatted(format_error(error))) == expected
        assert Counter(collect_tree(treeify_error(error))) == expected
        assert Counter(flat_messages) == expected
        if error.issues:
            assert len(prettify_error(error).split("; ")) >= len(error.issues)

    @given(raws=st.lists(raw_issues(), min_size=1, max_size=8))
    @settings(max_examples=50, deadline=None)
    def test_flattened_routes_by_first_segment(self, raws: list[RawIssue]) -> None:
        error = ValidationError([finalize_issue(raw) for raw in raws])
        flattened = flatten_error(error)
        for issue in error.issues:
            if issue.path:
                assert issue.message in flattened.field_errors[str(issue.path[0])]
            else:
                assert issue.message in flattened.form_errors
