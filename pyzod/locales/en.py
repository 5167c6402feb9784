"""English locale, identical to the default formatter."""

from pyzod.issues.formatter import default_formatter
from pyzod.issues.types import RawIssue


def format_en(issue: RawIssue) -> str:
    return default_formatter.format_message(issue)
