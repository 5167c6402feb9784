"""Dot-path rendering for issue paths."""

import re

from pyzod.issues.types import PathSegment

_IDENTIFIER = re.compile(r"[A-Za-z0-9_$]+")


def format_path_segment(segment: PathSegment, first: bool = False) -> str:
    """Render a single path segment.

    Args:
        segment: String key or integer index
        first: Whether this is the leading segment (no dot prefix)

    Returns:
        ".key", "key", "[N]" or '["odd key"]'
    """
    if isinstance(segment, int) and not isinstance(segment, bool):
        return f"[{segment}]"
    key = str(segment)
    if _IDENTIFIER.fullmatch(key):
        return key if first else f".{key}"
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'["{escaped}"]'


def to_dot_path(path: "list[PathSegment] | None") -> str:
    """Render a path as a dotted string.

    Identifier-like keys appear bare, other keys are quoted in brackets and
    integer indices always appear as [N]. There is never a leading dot.

    Args:
        path: Sequence of keys and indices

    Returns:
        Dotted path, or "" for the root

    Example:
        >>> to_dot_path(["user", "contacts", 0, "email"])
        'user.contacts[0].email'
        >>> to_dot_path(["user", "first name"])
        'user["first name"]'
    """
    if not path:
        return ""
    return "".join(
        format_path_segment(segment, first=(i == 0)) for i, segment in enumerate(path)
    )
