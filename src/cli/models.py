"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, malformed responses)
    - AUTH_ERROR (3): Missing credentials or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - REMOTE_FAULT (5): The wiki rejected the call with a fault

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    REMOTE_FAULT = 5
