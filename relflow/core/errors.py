"""Exit codes for the relflow CLI.

The numeric values are part of the command-line contract:
- 0: Success (including an operator cancelling a release)
- 1: User error (missing/unknown version, not a repository)
- 2: Environment error (unreadable or invalid config file)
- 3: Git error (a delegated git step failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3

