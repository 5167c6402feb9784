"""Check execution engine and reusable checks."""

from pyzod.checks.builtins import (
    custom_check,
    gt,
    gte,
    length,
    lt,
    lte,
    max_length,
    min_length,
    multiple_of,
    overwrite,
    refine,
)
from pyzod.checks.engine import (
    CheckDef,
    CheckInternals,
    ZodCheck,
    check_aborted,
    run_checks,
    run_checks_on_value,
)

__all__ = [
    "CheckDef",
    "CheckInternals",
    "ZodCheck",
    "check_aborted",
    "run_checks",
    "run_checks_on_value",
    "custom_check",
    "refine",
    "overwrite",
    "min_length",
    "max_length",
    "length",
    "gte",
    "gt",
    "lte",
    "lt",
    "multiple_of",
]
