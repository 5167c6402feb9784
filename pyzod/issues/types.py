"""Issue records.

Two shapes of the same failure exist:

- RawIssue is produced by validators and check bodies on the hot path. It
  carries a typed code and an untyped property bag holding everything else.
- FinalIssue is what users consume. Every canonical property has been promoted
  to a typed field and the message has been resolved.

The property bag uses a closed set of canonical keys (CANONICAL_PROPERTIES).
Unknown keys are preserved on the raw issue but ignored by formatters.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from pyzod.core.codes import IssueCode

PathSegment: TypeAlias = str | int
Path: TypeAlias = list[PathSegment]

CANONICAL_PROPERTIES = frozenset(
    {
        "expected",
        "received",
        "minimum",
        "maximum",
        "inclusive",
        "divisor",
        "format",
        "pattern",
        "prefix",
        "suffix",
        "includes",
        "algorithm",
        "origin",
        "key",
        "keys",
        "values",
        "params",
        "index",
        "element_error",
        "errors",
        "is_rest_param",
        "match_count",
        "message",
        "field_name",
        "field_type",
        "from_type",
        "to_type",
        "reason",
        "field",
        "conflict_type",
    }
)


class _Unset:
    """Marker for a finalized input that was deliberately not reported."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def normalize_code(code: "IssueCode | str") -> "IssueCode | str":
    """Return the IssueCode member for a known code, or the string unchanged."""
    if isinstance(code, IssueCode):
        return code
    try:
        return IssueCode(code)
    except ValueError:
        return code


@dataclass
class RawIssue:
    """Issue as produced during validation.

    Attributes:
        code: Failure kind
        message: Explicit message; empty means "resolve during finalization"
        input: The offending value
        path: Location of the offending value (empty = root)
        properties: Canonical property bag (see CANONICAL_PROPERTIES)
        continue_: Permission for downstream stages to keep running after
                   this issue. Issues with continue_=False are fatal.
        inst: Schema or check that produced the issue, consulted for
              schema-level messages
    """

    code: IssueCode | str
    message: str = ""
    input: Any = None
    path: Path = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    continue_: bool = False
    inst: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.code = normalize_code(self.code)
        if self.path is None:
            self.path = []
        if self.properties is None:
            self.properties = {}
        if self.message is None:
            self.message = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawIssue":
        """Build a raw issue from a plain mapping.

        Accepts the shape found in JSON or YAML issue files: "code", optional
        "message", "input", "path", "properties" and "continue". A nested
        "element_error" mapping and the per-branch "errors" lists of a union
        issue are rebuilt into raw issues as well.

        Args:
            data: Mapping describing the issue

        Returns:
            RawIssue equivalent to the mapping

        Raises:
            KeyError: If "code" is missing

        Example:
            >>> issue = RawIssue.from_dict({
            ...     "code": "too_small",
            ...     "path": ["user", "age"],
            ...     "properties": {"minimum": 18, "inclusive": True, "origin": "number"},
            ... })
            >>> issue.code
            <IssueCode.TOO_SMALL: 'too_small'>
        """
        properties = dict(data.get("properties") or {})

        element_error = properties.get("element_error")
        if isinstance(element_error, Mapping):
            properties["element_error"] = cls.from_dict(element_error)

        branches = properties.get("errors")
        if isinstance(branches, list):
            properties["errors"] = [
                [cls.from_dict(i) if isinstance(i, Mapping) else i for i in branch]
                if isinstance(branch, list)
                else branch
                for branch in branches
            ]

        return cls(
            code=data["code"],
            message=data.get("message") or "",
            input=data.get("input"),
            path=list(data.get("path") or []),
            properties=properties,
            continue_=bool(data.get("continue", False)),
        )


@dataclass(frozen=True)
class FinalIssue:
    """Issue as emitted to users.

    Only the fields relevant to the issue's code are populated; the rest keep
    their zero values. input is UNSET when the parse context asked not to
    report inputs.
    """

    code: IssueCode | str
    message: str
    path: Path = field(default_factory=list)
    input: Any = UNSET
    expected: str = ""
    received: str = ""
    minimum: Any = None
    maximum: Any = None
    inclusive: bool = False
    divisor: Any = None
    format: str = ""
    pattern: str = ""
    prefix: str = ""
    suffix: str = ""
    includes: str = ""
    algorithm: str = ""
    origin: str = ""
    key: Any = None
    keys: list[str] | None = None
    values: list[Any] | None = None
    params: dict[str, Any] | None = None
    issues: "list[FinalIssue] | None" = None
    errors: "list[list[FinalIssue]] | None" = None

    @property
    def has_input(self) -> bool:
        return self.input is not UNSET
