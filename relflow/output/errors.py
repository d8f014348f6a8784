"""Error presentation utilities.

Centralized release error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relflow.core.errors import ErrorCode
from relflow.output.console import Style
from relflow.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from relflow.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print message, raw tool output and remediation hint."""
    console.error(error.message)
    if error.detail:
        console.verbatim(error.detail)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "not_a_repository" | "invalid_version" | "version_not_found":
            return int(ErrorCode.USER_ERROR)
        case (
            "status_failed"
            | "stage_failed"
            | "commit_failed"
            | "push_failed"
            | "tag_create_failed"
            | "tag_push_failed"
        ):
            return int(ErrorCode.GIT_ERROR)
    return int(ErrorCode.GIT_ERROR)
