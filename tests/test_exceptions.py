"""Unit tests for library exception classes."""

import pytest

from pyzod.core.exceptions import CheckError, ConfigError, IssueError, PyzodError
from pyzod.issues.errors import ValidationError


class TestPyzodError:
    """Test the base PyzodError exception."""

    def test_basic_message(self) -> None:
        """Test exception with just a message."""
        error = PyzodError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_with_context(self) -> None:
        """Test exception with context information."""
        error = PyzodError("Operation failed", context={"code": "too_small", "index": 3})
        assert error.context == {"code": "too_small", "index": 3}
        assert str(error) == "Operation failed [code='too_small', index=3]"


class TestIssueError:
    """Test the IssueError exception."""

    def test_context_fields(self) -> None:
        """Test that constructor details end up in the context."""
        error = IssueError("Bad index", code="invalid_element", property="index", value=-1)
        assert error.context == {"code": "invalid_element", "property": "index", "value": -1}
        assert "property='index'" in str(error)

    def test_none_fields_are_omitted(self) -> None:
        """Test that unset fields do not appear in the context."""
        error = IssueError("Bad issue")
        assert error.context == {}
        assert str(error) == "Bad issue"

    def test_extra_context(self) -> None:
        """Test extra keyword context."""
        error = IssueError("Bad entry", property="code", index=2)
        assert error.context["index"] == 2


class TestCheckError:
    """Test the CheckError exception."""

    def test_context_fields(self) -> None:
        error = CheckError("Bad divisor", check="multiple_of", parameter="divisor", reason="0")
        assert error.context == {"check": "multiple_of", "parameter": "divisor", "reason": "0"}


class TestConfigError:
    """Test the ConfigError exception."""

    def test_context_fields(self) -> None:
        error = ConfigError("Invalid YAML", path="cfg.yaml", reason="bad indent")
        assert error.context == {"path": "cfg.yaml", "reason": "bad indent"}
        assert str(error).startswith("Invalid YAML [")


class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize("cls", [IssueError, CheckError, ConfigError])
    def test_subclasses_share_base(self, cls: type) -> None:
        """Test that all library errors can be caught as PyzodError."""
        with pytest.raises(PyzodError):
            raise cls("boom")

    def test_validation_error_is_not_library_error(self) -> None:
        """Test that validation failures stay outside the library hierarchy."""
        assert not issubclass(ValidationError, PyzodError)
        assert issubclass(ValidationError, Exception)
