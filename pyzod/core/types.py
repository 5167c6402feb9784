"""Runtime type naming.

parsed_type_name() maps an arbitrary Python value onto the closed set of type
tags used in issue properties and messages ("received number", "expected
string", ...). The tags are shared with every other language binding of the
same schema model, so Python types are folded onto them rather than reported
by their Python class names.
"""

import dataclasses
import io
import math
from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath

STRING = "string"
NUMBER = "number"
BOOL = "bool"
NULL = "null"
ARRAY = "array"
SLICE = "slice"
OBJECT = "object"
STRUCT = "struct"
MAP = "map"
COMPLEX = "complex"
BIGINT = "bigint"
ENUM = "enum"
TUPLE = "tuple"
FUNCTION = "function"
FILE = "File"
DATE = "Date"
UNKNOWN = "unknown"
NAN = "NaN"
INFINITY = "Infinity"

PARSED_TYPE_NAMES = frozenset(
    {
        STRING,
        NUMBER,
        BOOL,
        NULL,
        ARRAY,
        SLICE,
        OBJECT,
        STRUCT,
        MAP,
        COMPLEX,
        BIGINT,
        ENUM,
        TUPLE,
        FUNCTION,
        FILE,
        DATE,
        UNKNOWN,
        NAN,
        INFINITY,
    }
)

# Integers outside the signed 64-bit range are reported as bigint
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _float_name(value: float) -> str:
    if math.isnan(value):
        return NAN
    if math.isinf(value):
        return INFINITY
    return NUMBER


def parsed_type_name(value: object) -> str:
    """Name the runtime type of a value.

    Args:
        value: Any Python value

    Returns:
        One of the tags in PARSED_TYPE_NAMES

    Example:
        >>> parsed_type_name("hello")
        'string'
        >>> parsed_type_name(42)
        'number'
        >>> parsed_type_name(float("nan"))
        'NaN'
        >>> parsed_type_name({"a": 1})
        'map'
    """
    if value is None:
        return NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, Enum):
        return ENUM
    if isinstance(value, str):
        return STRING
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return NUMBER
        return BIGINT
    if isinstance(value, float):
        return _float_name(value)
    if isinstance(value, Decimal):
        if value.is_nan():
            return NAN
        if value.is_infinite():
            return INFINITY
        return NUMBER
    if isinstance(value, Fraction):
        return NUMBER
    if isinstance(value, complex):
        return COMPLEX
    if isinstance(value, (datetime, date, time)):
        return DATE
    if isinstance(value, (io.IOBase, PurePath)):
        return FILE
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SLICE
    if isinstance(value, tuple):
        # NamedTuple instances behave like records
        if hasattr(value, "_fields"):
            return STRUCT
        return TUPLE
    if isinstance(value, (list, set, frozenset)):
        return ARRAY
    if isinstance(value, Mapping):
        return MAP
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return STRUCT
    if isinstance(value, Callable):  # type: ignore[arg-type]
        return FUNCTION
    if hasattr(value, "__dict__") or hasattr(value, "__slots__"):
        return OBJECT
    return UNKNOWN
