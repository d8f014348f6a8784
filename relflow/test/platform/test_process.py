"""Tests for relflow.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relflow.core.result import Err, Ok
from relflow.platform.process import ProcessError, run


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "push"),
            returncode=128,
            stdout="",
            stderr="fatal: no remote",
        )
        assert str(error) == "git push failed (exit 128)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(("git", "-C", "/repo", "push", "origin", "main"), 1, "", "")
        assert str(error) == "git -C /repo ... failed (exit 1)"

    def test_output_combines_streams(self) -> None:
        error = ProcessError(("git",), 1, "out line\n", "err line\n")
        assert error.output == "err line\nout line"

    def test_output_empty(self) -> None:
        assert ProcessError(("git",), 1, "", "  ").output == ""

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert result.value.strip() == "hello"

    def test_nonzero_exit_is_error(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; print('partial'); sys.exit('bad things')"],
            cwd=tmp_path,
        )
        assert isinstance(result, Err)
        assert result.error.returncode == 1
        assert "partial" in result.error.stdout
        assert "bad things" in result.error.stderr

    def test_missing_executable(self, tmp_path: Path) -> None:
        result = run(["relflow-definitely-not-a-command"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == -1

    def test_timeout(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            cwd=tmp_path,
            timeout=0.2,
        )
        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "timed out" in result.error.stderr
