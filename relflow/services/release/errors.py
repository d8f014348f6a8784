from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "not_a_repository",
    "invalid_version",
    "version_not_found",
    "status_failed",
    "stage_failed",
    "commit_failed",
    "push_failed",
    "tag_create_failed",
    "tag_push_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Release failure payload.

    ``detail`` carries the delegated tool's raw output and is shown to the
    operator verbatim.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    detail: str | None = None

