"""pyzod: the validation issue pipeline.

Validators report failures as raw issues; the check engine collects them;
finalization resolves their messages; projections render them for users.

Example:
    >>> from pyzod import ParsePayload, ValidationError, min_length, run_checks
    >>> from pyzod import convert_raw_issues_to_issues
    >>> payload = run_checks([min_length(3)], ParsePayload("hi", ["name"]))
    >>> error = ValidationError(convert_raw_issues_to_issues(payload.issues))
    >>> str(error)
    'name: Too small: expected string to have at least 3 characters'
"""

__version__ = "0.1.0"

# Check engine and reusable checks
from pyzod.checks import (
    CheckDef,
    CheckInternals,
    ZodCheck,
    check_aborted,
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
    run_checks,
    run_checks_on_value,
)

# Core records, configuration and exceptions
from pyzod.core import (
    CheckError,
    Config,
    ConfigError,
    ErrorMap,
    IssueCode,
    IssueError,
    ParseContext,
    ParsePayload,
    PyzodError,
    get_config,
    parsed_type_name,
    set_config,
    to_error_map,
)

# Issue model, constructors and finalization
from pyzod.issues import (
    UNSET,
    FinalIssue,
    MessageSource,
    RawIssue,
    convert_issue_to_raw,
    convert_raw_issues_to_issues,
    create_custom_issue,
    create_fixed_length_array_issue,
    create_incompatible_types_issue,
    create_invalid_discriminator_issue,
    create_invalid_element_issue,
    create_invalid_format_issue,
    create_invalid_key_issue,
    create_invalid_schema_issue,
    create_invalid_type_issue,
    create_invalid_union_issue,
    create_invalid_value_issue,
    create_invalid_xor_issue,
    create_issue,
    create_missing_required_issue,
    create_nil_pointer_issue,
    create_non_optional_issue,
    create_not_multiple_of_issue,
    create_too_big_issue,
    create_too_small_issue,
    create_type_conversion_issue,
    create_unrecognized_keys_issue,
    finalize_issue,
)

# Errors and projections
from pyzod.issues import (
    DefaultMessageFormatter,
    ErrorTree,
    FlattenedError,
    MessageFormatter,
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
    to_dot_path,
    treeify_error,
    treeify_error_with_mapper,
)

# Locales
from pyzod.locales import (
    available_locales,
    get_locale_formatter,
    get_localized_error,
    register_locale,
)

__all__ = [
    "__version__",
    "CheckDef",
    "CheckInternals",
    "ZodCheck",
    "check_aborted",
    "custom_check",
    "gt",
    "gte",
    "length",
    "lt",
    "lte",
    "max_length",
    "min_length",
    "multiple_of",
    "overwrite",
    "refine",
    "run_checks",
    "run_checks_on_value",
    "CheckError",
    "Config",
    "ConfigError",
    "ErrorMap",
    "IssueCode",
    "IssueError",
    "ParseContext",
    "ParsePayload",
    "PyzodError",
    "get_config",
    "parsed_type_name",
    "set_config",
    "to_error_map",
    "UNSET",
    "FinalIssue",
    "MessageSource",
    "RawIssue",
    "convert_issue_to_raw",
    "convert_raw_issues_to_issues",
    "create_custom_issue",
    "create_fixed_length_array_issue",
    "create_incompatible_types_issue",
    "create_invalid_discriminator_issue",
    "create_invalid_element_issue",
    "create_invalid_format_issue",
    "create_invalid_key_issue",
    "create_invalid_schema_issue",
    "create_invalid_type_issue",
    "create_invalid_union_issue",
    "create_invalid_value_issue",
    "create_invalid_xor_issue",
    "create_issue",
    "create_missing_required_issue",
    "create_nil_pointer_issue",
    "create_non_optional_issue",
    "create_not_multiple_of_issue",
    "create_too_big_issue",
    "create_too_small_issue",
    "create_type_conversion_issue",
    "create_unrecognized_keys_issue",
    "finalize_issue",
    "DefaultMessageFormatter",
    "ErrorTree",
    "FlattenedError",
    "MessageFormatter",
    "ValidationError",
    "flatten_error",
    "flatten_error_with_formatter",
    "flatten_error_with_mapper",
    "format_error",
    "format_error_with_mapper",
    "is_validation_error",
    "prettify_error",
    "prettify_error_with_formatter",
    "prettify_error_with_mapper",
    "to_dot_path",
    "treeify_error",
    "treeify_error_with_mapper",
    "available_locales",
    "get_locale_formatter",
    "get_localized_error",
    "register_locale",
]
