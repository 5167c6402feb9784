"""Issue finalization.

finalize_issue turns a RawIssue into a FinalIssue in three steps:

1. Resolve the message. An explicit raw message wins outright; otherwise the
   resolvers in RESOLVERS are tried in order and the first non-empty result
   is used: schema level, context level, config custom_error, config
   locale_error and finally the default English formatter.
2. Gate the input on ParseContext.report_input.
3. Promote canonical properties to typed fields. Missing or mistyped
   properties become the field's zero value. A nested element_error is
   finalized recursively into FinalIssue.issues and union branch issues into
   FinalIssue.errors.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from pyzod.core.config import Config, get_config
from pyzod.core.context import ErrorMap, ParseContext, to_error_map
from pyzod.issues.accessors import (
    get_bool_property,
    get_property,
    get_string_property,
    get_strings_property,
)
from pyzod.issues.formatter import generate_default_message
from pyzod.issues.types import UNSET, FinalIssue, RawIssue

logger = logging.getLogger(__name__)


@runtime_checkable
class MessageSource(Protocol):
    """A schema or check that can supply its own message for an issue."""

    def error_for(self, issue: RawIssue) -> str | None: ...


# =============================================================================
# Schema-level probes
# =============================================================================
#
# Each probe inspects the producing instance and returns an error map, or None
# when the instance does not expose one in that shape.


def _call_if_callable(obj: Any, name: str) -> Any:
    method = getattr(obj, name, None)
    if method is None or not callable(method):
        return None
    return method()


def _probe_message_source(inst: Any) -> ErrorMap | None:
    if isinstance(inst, MessageSource):
        return inst.error_for
    return None


def _probe_error_attribute(inst: Any) -> ErrorMap | None:
    """A plain internals record carrying an "error" hook."""
    error = getattr(inst, "error", None)
    if isinstance(inst, type) or not (isinstance(error, str) or callable(error)):
        return None
    return to_error_map(error)


def _probe_check_definition(inst: Any) -> ErrorMap | None:
    """Check internals whose definition carries an "error" hook."""
    definition = getattr(inst, "definition", None)
    if definition is None:
        return None
    return to_error_map(getattr(definition, "error", None))


def _probe_get_error(inst: Any) -> ErrorMap | None:
    return to_error_map(_call_if_callable(inst, "get_error"))


def _probe_internals(inst: Any) -> ErrorMap | None:
    internals = _call_if_callable(inst, "internals")
    if internals is None or internals is inst:
        return None
    return _probe_error_attribute(internals) or _probe_check_definition(internals)


def _probe_zod(inst: Any) -> ErrorMap | None:
    return _probe_check_definition(_call_if_callable(inst, "zod"))


def _probe_check_internals(inst: Any) -> ErrorMap | None:
    return _probe_check_definition(_call_if_callable(inst, "check_internals"))


SCHEMA_PROBES: tuple[Callable[[Any], ErrorMap | None], ...] = (
    _probe_message_source,
    _probe_error_attribute,
    _probe_check_definition,
    _probe_get_error,
    _probe_internals,
    _probe_zod,
    _probe_check_internals,
)


def extract_schema_level_error(issue: RawIssue) -> str:
    """Return the message supplied by the issue's producing instance, or ""."""
    if issue.inst is None:
        return ""
    for probe in SCHEMA_PROBES:
        error_map = probe(issue.inst)
        if error_map is None:
            continue
        message = error_map(issue)
        if message:
            return message
    return ""


# =============================================================================
# Resolution chain
# =============================================================================

Resolver = Callable[[RawIssue, ParseContext | None, Config | None], str | None]


def _resolve_schema(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str | None:
    return extract_schema_level_error(issue)


def _resolve_context(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str | None:
    if ctx is None or ctx.error is None:
        return None
    return ctx.error(issue)


def _resolve_custom(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str | None:
    if config is None or config.custom_error is None:
        return None
    return config.custom_error(issue)


def _resolve_locale(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str | None:
    if config is None or config.locale_error is None:
        return None
    return config.locale_error(issue)


def _resolve_default(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str | None:
    return generate_default_message(issue)


RESOLVERS: tuple[tuple[str, Resolver], ...] = (
    ("schema", _resolve_schema),
    ("context", _resolve_context),
    ("custom_error", _resolve_custom),
    ("locale_error", _resolve_locale),
    ("default", _resolve_default),
)


def resolve_message(issue: RawIssue, ctx: ParseContext | None, config: Config | None) -> str:
    """Resolve the message for a raw issue.

    Args:
        issue: Raw issue; an explicit message short-circuits the chain
        ctx: Parse context (may be None)
        config: Message configuration (may be None)

    Returns:
        Non-empty message
    """
    if issue.message:
        return issue.message
    for tier, resolver in RESOLVERS:
        message = resolver(issue, ctx, config)
        if message:
            logger.debug("Message for %s resolved at %s level", issue.code, tier)
            return message
    return "Invalid input"


# =============================================================================
# Finalization
# =============================================================================


def _finalize_branches(
    branches: Any, ctx: ParseContext | None, config: Config | None
) -> list[list[FinalIssue]] | None:
    if not isinstance(branches, list):
        return None
    result: list[list[FinalIssue]] = []
    for branch in branches:
        items = branch if isinstance(branch, list) else [branch]
        finals: list[FinalIssue] = []
        for item in items:
            if isinstance(item, RawIssue):
                finals.append(finalize_issue(item, ctx, config))
            elif isinstance(item, FinalIssue):
                finals.append(item)
        result.append(finals)
    return result


def _map_properties(
    properties: Mapping[str, Any], ctx: ParseContext | None, config: Config | None
) -> dict[str, Any]:
    """Promote canonical properties to FinalIssue keyword arguments."""
    holder = RawIssue(code="custom", properties=dict(properties))

    keys_value, keys_present = get_property(holder, "keys")
    values_value, _ = get_property(holder, "values")
    params_value, _ = get_property(holder, "params")

    fields: dict[str, Any] = {
        "expected": get_string_property(holder, "expected"),
        "received": get_string_property(holder, "received"),
        "origin": get_string_property(holder, "origin"),
        "format": get_string_property(holder, "format"),
        "pattern": get_string_property(holder, "pattern"),
        "prefix": get_string_property(holder, "prefix"),
        "suffix": get_string_property(holder, "suffix"),
        "includes": get_string_property(holder, "includes"),
        "algorithm": get_string_property(holder, "algorithm"),
        "minimum": properties.get("minimum"),
        "maximum": properties.get("maximum"),
        "divisor": properties.get("divisor"),
        "key": properties.get("key"),
        "inclusive": get_bool_property(holder, "inclusive"),
        "keys": get_strings_property(holder, "keys")
        if keys_present and isinstance(keys_value, (list, tuple))
        else None,
        "values": list(values_value) if isinstance(values_value, (list, tuple)) else None,
        "params": dict(params_value) if isinstance(params_value, Mapping) else None,
    }

    element_error = properties.get("element_error")
    if isinstance(element_error, RawIssue):
        fields["issues"] = [finalize_issue(element_error, ctx, config)]

    fields["errors"] = _finalize_branches(properties.get("errors"), ctx, config)
    return fields


def finalize_issue(
    raw: RawIssue, ctx: ParseContext | None = None, config: Config | None = None
) -> FinalIssue:
    """Finalize a raw issue.

    Args:
        raw: Issue produced during validation
        ctx: Parse context; None reports the input and skips the context tier
        config: Message configuration; None skips both config tiers

    Returns:
        Immutable FinalIssue with a non-empty message and a list path

    Example:
        >>> raw = create_invalid_type_issue("string", 42)
        >>> raw.path = ["user", "name"]
        >>> finalize_issue(raw).message
        'Invalid input: expected string, received number'
    """
    path = list(raw.path) if raw.path is not None else []
    message = resolve_message(raw, ctx, config)
    reported = raw.input if ctx is None or ctx.report_input else UNSET
    fields = _map_properties(raw.properties or {}, ctx, config)
    return FinalIssue(code=raw.code, message=message, path=path, input=reported, **fields)


def convert_raw_issues_to_issues(
    raws: Iterable[RawIssue], ctx: ParseContext | None = None
) -> list[FinalIssue]:
    """Finalize raw issues under the process-wide configuration."""
    config = get_config()
    return [finalize_issue(raw, ctx, config) for raw in raws]


def convert_issue_to_raw(issue: FinalIssue) -> RawIssue:
    """Convert a final issue back to a raw one.

    Code, message and input are preserved; path and properties start empty and
    are filled in by the caller.
    """
    return RawIssue(
        code=issue.code,
        message=issue.message,
        input=None if issue.input is UNSET else issue.input,
        path=[],
        properties={},
    )


def issue_to_properties(issue: FinalIssue) -> dict[str, Any]:
    """Rebuild a property bag from the typed fields of a final issue.

    Used when a final issue has to be re-rendered by a formatter. Only
    populated fields are included; inclusive is always present.
    """
    properties: dict[str, Any] = {}
    for name in (
        "expected",
        "received",
        "format",
        "pattern",
        "prefix",
        "suffix",
        "includes",
        "algorithm",
        "origin",
    ):
        value = getattr(issue, name)
        if value:
            properties[name] = value
    for name in ("minimum", "maximum", "divisor", "key"):
        value = getattr(issue, name)
        if value is not None:
            properties[name] = value
    if issue.keys:
        properties["keys"] = list(issue.keys)
    if issue.values:
        properties["values"] = list(issue.values)
    if issue.params:
        for name, value in issue.params.items():
            properties.setdefault(name, value)
    properties["inclusive"] = issue.inclusive
    return properties
