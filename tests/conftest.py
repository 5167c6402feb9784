"""Shared test fixtures and Hypothesis strategies for pyzod tests."""

import pytest
from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from pyzod.core.codes import LEAF_CODES, IssueCode
from pyzod.core.config import set_config
from pyzod.issues.types import RawIssue

settings.register_profile(
    "pyzod",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("pyzod")


@pytest.fixture(autouse=True)
def reset_global_config():
    """Start and finish every test with an empty process-wide config."""
    set_config(None)
    yield
    set_config(None)


# Keys matching [A-Za-z0-9_$]+, rendered bare by to_dot_path.
identifier_keys = st.one_of(
    st.just("_errors"),
    st.text(
        alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$",
        min_size=1,
        max_size=10,
    ),
)

path_segments = st.one_of(identifier_keys, st.integers(min_value=0, max_value=20))

paths = st.lists(path_segments, min_size=0, max_size=6)

messages = st.text(min_size=1, max_size=40).filter(lambda s: s.strip() != "")


@composite
def raw_issues(draw: st.DrawFn, codes=None, with_message: bool | None = None) -> RawIssue:
    """Generate leaf raw issues with plausible properties.

    Args:
        draw: Hypothesis draw function
        codes: Codes to sample from (default: all leaf codes)
        with_message: Force an explicit message on (True) or off (False);
                      None draws either

    Returns:
        RawIssue with a random path
    """
    code = draw(st.sampled_from(sorted(codes or LEAF_CODES, key=str)))
    properties: dict = {}

    if code == IssueCode.INVALID_TYPE:
        properties["expected"] = draw(st.sampled_from(["string", "number", "bool", "object"]))
    elif code == IssueCode.INVALID_VALUE:
        properties["values"] = draw(st.lists(st.one_of(st.integers(), identifier_keys), max_size=4))
    elif code in (IssueCode.TOO_SMALL, IssueCode.TOO_BIG):
        bound = "minimum" if code == IssueCode.TOO_SMALL else "maximum"
        properties[bound] = draw(st.integers(min_value=0, max_value=100))
        properties["inclusive"] = draw(st.booleans())
        properties["origin"] = draw(st.sampled_from(["string", "number", "array", "set", "file"]))
    elif code == IssueCode.INVALID_FORMAT:
        properties["format"] = draw(st.sampled_from(["email", "url", "uuid", "regex", ""]))
    elif code == IssueCode.NOT_MULTIPLE_OF:
        properties["divisor"] = draw(st.integers(min_value=1, max_value=10))
    elif code == IssueCode.UNRECOGNIZED_KEYS:
        properties["keys"] = draw(st.lists(identifier_keys, max_size=3))

    message = ""
    if with_message or (with_message is None and draw(st.booleans())):
        message = draw(messages)

    return RawIssue(
        code=code,
        message=message,
        input=draw(st.one_of(st.none(), st.integers(), st.text(max_size=5))),
        path=draw(paths),
        properties=properties,
    )
