"""Exit code constants for CLI commands.

Exit codes:
    0: SUCCESS - Operation completed successfully (no issues to report)
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception or unreadable input
    2: VALIDATION_ERROR - Issues were rendered (validation failures present)
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> import sys
        >>> from pyzod.cli.exit_codes import ExitCode
        >>> sys.exit(ExitCode.VALIDATION_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    VALIDATION_ERROR = 2
    """At least one validation issue was rendered."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
