from __future__ import annotations

from relflow.services.release.model import RELEASE_STEPS, ReleaseState


def test_steps_run_in_order() -> None:
    assert RELEASE_STEPS == (
        ReleaseState.STAGING,
        ReleaseState.COMMITTING,
        ReleaseState.PUSHING,
        ReleaseState.TAGGING,
    )


def test_validation_states_are_not_steps() -> None:
    assert ReleaseState.VALIDATING not in RELEASE_STEPS
    assert ReleaseState.REJECTED not in RELEASE_STEPS
