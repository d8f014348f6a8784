"""Release states and outcomes.

``FAILED`` is only reachable from one of ``RELEASE_STEPS``. A release whose
precondition checks fail (no repository, unknown version, unreadable
status) ends in ``REJECTED`` instead: nothing was attempted, so there is
no failed step to report.
"""

from __future__ import annotations

from enum import Enum


class ReleaseState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CANCELLED = "cancelled"
    STAGING = "staging"
    COMMITTING = "committing"
    PUSHING = "pushing"
    TAGGING = "tagging"
    DONE = "done"
    FAILED = "failed"


# Steps that can end in FAILED, in execution order.
RELEASE_STEPS: tuple[ReleaseState, ...] = (
    ReleaseState.STAGING,
    ReleaseState.COMMITTING,
    ReleaseState.PUSHING,
    ReleaseState.TAGGING,
)


class ReleaseOutcome(Enum):
    DONE = "done"
    CANCELLED = "cancelled"


class TagOutcome(Enum):
    CREATED = "created"
    SKIPPED = "skipped"
