from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from relflow.cli import app as app_mod
from relflow.cli.app import app
from relflow.core.config import ROOT_ENV_VAR
from relflow.core.errors import ErrorCode

runner = CliRunner()
_ENV = {"COLUMNS": "200", "NO_COLOR": "1"}


@pytest.fixture(autouse=True)
def _no_root_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)


def _invoke(*args: str):
    return runner.invoke(app, list(args), env=_ENV)


def _versions(root: Path, *names: str) -> None:
    directory = root / "versions"
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / f"{name}.txt").write_text(f"Release {name}\n\ndetails\n", encoding="utf-8")


def test_help_action_exits_zero() -> None:
    result = _invoke("help")
    assert result.exit_code == 0
    assert "ACTION" in result.output.upper()


def test_about_prints_version() -> None:
    result = _invoke("--about")
    assert result.exit_code == 0
    assert app_mod.__version__ in result.output


def test_list_is_default_action(tmp_path: Path) -> None:
    _versions(tmp_path, "v0.2.0", "v0.1.0-alpha")
    result = _invoke("--root", str(tmp_path))
    assert result.exit_code == 0
    out = result.output
    assert out.index("v0.1.0-alpha") < out.index("v0.2.0")
    assert "Release v0.2.0" in out


def test_list_with_no_versions(tmp_path: Path) -> None:
    result = _invoke("list", "--root", str(tmp_path))
    assert result.exit_code == 0
    assert "no versions found" in result.output


def test_status_outside_repository(tmp_path: Path) -> None:
    result = _invoke("status", "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "not a git repository" in result.output


@pytest.mark.parametrize("action", ["commit", "tag", "release"])
def test_version_required(tmp_path: Path, action: str) -> None:
    (tmp_path / ".git").mkdir()
    _versions(tmp_path, "v1.0.0")
    result = _invoke(action, "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert f"a version is required for '{action}'" in result.output
    assert "available versions: v1.0.0" in result.output


@pytest.mark.parametrize("action", ["commit", "tag", "release"])
def test_missing_repository_reported_before_missing_version(tmp_path: Path, action: str) -> None:
    _versions(tmp_path, "v1.0.0")
    result = _invoke(action, "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "not a git repository" in result.output
    assert "a version is required" not in result.output


def test_list_with_non_utf8_message(tmp_path: Path) -> None:
    _versions(tmp_path)
    (tmp_path / "versions" / "v1.0.0.txt").write_bytes(b"Caf\xe9 release\n")
    result = _invoke("list", "--root", str(tmp_path))
    assert result.exit_code == 0
    assert "v1.0.0" in result.output
    assert "release" in result.output


def test_commit_unknown_version(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    _versions(tmp_path, "v0.1.0", "v1.0.0")
    result = _invoke("commit", "v9.9.9", "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "no commit message file for v9.9.9" in result.output
    assert "available versions: v0.1.0, v1.0.0" in result.output


def test_commit_bad_version_format(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    result = _invoke("commit", "1.0", "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "invalid version identifier" in result.output


def test_invalid_config_is_env_error(tmp_path: Path) -> None:
    (tmp_path / "relflow.toml").write_text("[release", encoding="utf-8")
    result = _invoke("list", "--root", str(tmp_path))
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_messages_dir_flag(tmp_path: Path) -> None:
    elsewhere = tmp_path / "notes"
    elsewhere.mkdir()
    (elsewhere / "v3.0.0.txt").write_text("Three\n", encoding="utf-8")
    result = _invoke("list", "--root", str(tmp_path), "--messages-dir", str(elsewhere))
    assert result.exit_code == 0
    assert "v3.0.0" in result.output


def test_unknown_action_rejected() -> None:
    result = _invoke("deploy")
    assert result.exit_code != 0
