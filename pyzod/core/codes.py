"""Issue codes.

IssueCode is the closed set of failure kinds an issue can describe. The
members are string-valued so that codes compare equal to their wire names
("too_small" == IssueCode.TOO_SMALL) and survive a trip through JSON or YAML.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Validation issue kind.

    Attributes:
        INVALID_TYPE: Input has the wrong runtime type
        INVALID_VALUE: Input is not one of the allowed values
        INVALID_FORMAT: String input does not match the required format
        INVALID_UNION: No union branch (or more than one xor branch) matched
        INVALID_KEY: A map or record key failed validation
        INVALID_ELEMENT: A collection element failed validation
        TOO_BIG: Value or size above the maximum
        TOO_SMALL: Value or size below the minimum
        NOT_MULTIPLE_OF: Number is not a multiple of the divisor
        UNRECOGNIZED_KEYS: Object carries keys the schema does not know
        CUSTOM: Failure raised by a user refinement
        INVALID_SCHEMA: The schema definition itself is unusable
        INVALID_DISCRIMINATOR: Discriminator field missing or unknown
        INCOMPATIBLE_TYPES: Intersection members cannot be merged
        MISSING_REQUIRED: Required field absent
        TYPE_CONVERSION: Value could not be converted to the target type
        NIL_POINTER: A nil reference was encountered
    """

    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    INVALID_FORMAT = "invalid_format"
    INVALID_UNION = "invalid_union"
    INVALID_KEY = "invalid_key"
    INVALID_ELEMENT = "invalid_element"
    TOO_BIG = "too_big"
    TOO_SMALL = "too_small"
    NOT_MULTIPLE_OF = "not_multiple_of"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    CUSTOM = "custom"
    INVALID_SCHEMA = "invalid_schema"
    INVALID_DISCRIMINATOR = "invalid_discriminator"
    INCOMPATIBLE_TYPES = "incompatible_types"
    MISSING_REQUIRED = "missing_required"
    TYPE_CONVERSION = "type_conversion"
    NIL_POINTER = "nil_pointer"

    def __str__(self) -> str:
        return self.value


# Codes whose issues carry nested issues under "issues"
STRUCTURAL_CODES = frozenset({IssueCode.INVALID_KEY, IssueCode.INVALID_ELEMENT})

# Codes whose issues carry one issue sequence per attempted branch
BRANCHING_CODES = frozenset({IssueCode.INVALID_UNION})

LEAF_CODES = frozenset(IssueCode) - STRUCTURAL_CODES - BRANCHING_CODES
