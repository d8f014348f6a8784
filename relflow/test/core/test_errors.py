"""Tests for relflow.core.errors module."""

from relflow.core.errors import ErrorCode


class TestErrorCodeValues:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.GIT_ERROR == 3
