"""Issue model, constructors, finalization and rendering."""

from pyzod.issues.accessors import (
    get_bool_property,
    get_int_property,
    get_issue_divisor,
    get_issue_expected,
    get_issue_format,
    get_issue_keys,
    get_issue_maximum,
    get_issue_minimum,
    get_issue_received,
    get_issue_values,
    get_list_property,
    get_property,
    get_raw_issue_divisor,
    get_raw_issue_expected,
    get_raw_issue_format,
    get_raw_issue_inclusive,
    get_raw_issue_keys,
    get_raw_issue_maximum,
    get_raw_issue_minimum,
    get_raw_issue_origin,
    get_raw_issue_received,
    get_raw_issue_values,
    get_string_property,
    get_strings_property,
)
from pyzod.issues.creators import (
    create_array_validation_error,
    create_custom_error,
    create_custom_issue,
    create_final_error,
    create_fixed_length_array_error,
    create_fixed_length_array_issue,
    create_incompatible_types_error,
    create_incompatible_types_issue,
    create_invalid_discriminator_issue,
    create_invalid_element_error,
    create_invalid_element_issue,
    create_invalid_format_error,
    create_invalid_format_issue,
    create_invalid_key_error,
    create_invalid_key_issue,
    create_invalid_schema_error,
    create_invalid_schema_issue,
    create_invalid_type_error,
    create_invalid_type_issue,
    create_invalid_union_error,
    create_invalid_union_issue,
    create_invalid_value_error,
    create_invalid_value_issue,
    create_invalid_xor_error,
    create_invalid_xor_issue,
    create_issue,
    create_missing_required_error,
    create_missing_required_issue,
    create_nil_pointer_issue,
    create_non_optional_error,
    create_non_optional_issue,
    create_not_multiple_of_error,
    create_not_multiple_of_issue,
    create_rest_parameter_too_small_error,
    create_too_big_error,
    create_too_big_issue,
    create_too_small_error,
    create_too_small_issue,
    create_type_conversion_error,
    create_type_conversion_issue,
    create_unrecognized_keys_error,
    create_unrecognized_keys_issue,
)
from pyzod.issues.errors import (
    ErrorTree,
    FlattenedError,
    FormattedError,
    IssueMapper,
    ValidationError,
    default_issue_mapper,
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
from pyzod.issues.finalize import (
    MessageSource,
    convert_issue_to_raw,
    convert_raw_issues_to_issues,
    finalize_issue,
    issue_to_properties,
    resolve_message,
)
from pyzod.issues.formatter import (
    DefaultMessageFormatter,
    MessageFormatter,
    default_formatter,
    generate_default_message,
)
from pyzod.issues.path import to_dot_path
from pyzod.issues.types import UNSET, FinalIssue, Path, PathSegment, RawIssue

__all__ = [
    # Model
    "FinalIssue",
    "Path",
    "PathSegment",
    "RawIssue",
    "UNSET",
    # Accessors
    "get_bool_property",
    "get_int_property",
    "get_issue_divisor",
    "get_issue_expected",
    "get_issue_format",
    "get_issue_keys",
    "get_issue_maximum",
    "get_issue_minimum",
    "get_issue_received",
    "get_issue_values",
    "get_list_property",
    "get_property",
    "get_raw_issue_divisor",
    "get_raw_issue_expected",
    "get_raw_issue_format",
    "get_raw_issue_inclusive",
    "get_raw_issue_keys",
    "get_raw_issue_maximum",
    "get_raw_issue_minimum",
    "get_raw_issue_origin",
    "get_raw_issue_received",
    "get_raw_issue_values",
    "get_string_property",
    "get_strings_property",
    # Constructors
    "create_issue",
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
    "create_missing_required_issue",
    "create_nil_pointer_issue",
    "create_non_optional_issue",
    "create_not_multiple_of_issue",
    "create_too_big_issue",
    "create_too_small_issue",
    "create_type_conversion_issue",
    "create_unrecognized_keys_issue",
    # Error shortcuts
    "create_array_validation_error",
    "create_custom_error",
    "create_final_error",
    "create_fixed_length_array_error",
    "create_incompatible_types_error",
    "create_invalid_element_error",
    "create_invalid_format_error",
    "create_invalid_key_error",
    "create_invalid_schema_error",
    "create_invalid_type_error",
    "create_invalid_union_error",
    "create_invalid_value_error",
    "create_invalid_xor_error",
    "create_missing_required_error",
    "create_non_optional_error",
    "create_not_multiple_of_error",
    "create_rest_parameter_too_small_error",
    "create_too_big_error",
    "create_too_small_error",
    "create_type_conversion_error",
    "create_unrecognized_keys_error",
    # Finalization
    "MessageSource",
    "convert_issue_to_raw",
    "convert_raw_issues_to_issues",
    "finalize_issue",
    "issue_to_properties",
    "resolve_message",
    # Formatting
    "DefaultMessageFormatter",
    "MessageFormatter",
    "default_formatter",
    "generate_default_message",
    "to_dot_path",
    # Errors and projections
    "ErrorTree",
    "FlattenedError",
    "FormattedError",
    "IssueMapper",
    "ValidationError",
    "default_issue_mapper",
    "flatten_error",
    "flatten_error_with_formatter",
    "flatten_error_with_mapper",
    "format_error",
    "format_error_with_mapper",
    "is_validation_error",
    "prettify_error",
    "prettify_error_with_formatter",
    "prettify_error_with_mapper",
    "treeify_error",
    "treeify_error_with_mapper",
]
