"""Core building blocks shared by the issue pipeline.

Provides issue codes, runtime type naming, parse context/payload records,
process-wide message configuration and the library exception hierarchy.
"""

from pyzod.core.codes import IssueCode
from pyzod.core.config import Config, get_config, set_config
from pyzod.core.context import ErrorMap, ParseContext, ParsePayload, to_error_map
from pyzod.core.exceptions import CheckError, ConfigError, IssueError, PyzodError
from pyzod.core.types import PARSED_TYPE_NAMES, parsed_type_name

__all__ = [
    "IssueCode",
    "Config",
    "get_config",
    "set_config",
    "ErrorMap",
    "ParseContext",
    "ParsePayload",
    "to_error_map",
    "PyzodError",
    "IssueError",
    "CheckError",
    "ConfigError",
    "PARSED_TYPE_NAMES",
    "parsed_type_name",
]
