"""Tests for relflow.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relflow.core.config import (
    DEFAULT_BRANCH,
    DEFAULT_REMOTE,
    ROOT_ENV_VAR,
    FileConfig,
    find_repository_root,
    load_file_config,
    resolve_config,
)
from relflow.core.result import Err, Ok


@pytest.fixture(autouse=True)
def _no_root_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)


def _make_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


class TestFindRepositoryRoot:
    def test_finds_root_from_subdirectory(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path / "project")
        nested = root / "src" / "pkg"
        nested.mkdir(parents=True)
        assert find_repository_root(nested) == root

    def test_git_file_counts(self, tmp_path: Path) -> None:
        (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/x")
        assert find_repository_root(tmp_path) == tmp_path

    def test_none_outside_repository(self, tmp_path: Path) -> None:
        # tmp_path itself may live under a repository on some machines
        found = find_repository_root(tmp_path)
        assert found is None or tmp_path.is_relative_to(found)


class TestLoadFileConfig:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        result = load_file_config(tmp_path / "relflow.toml")
        assert result == Ok(FileConfig())

    def test_reads_release_table(self, tmp_path: Path) -> None:
        path = tmp_path / "relflow.toml"
        path.write_text(
            '[release]\nmessages_dir = "docs/releases"\nremote = "upstream"\nbranch = "trunk"\n',
            encoding="utf-8",
        )
        result = load_file_config(path)
        assert isinstance(result, Ok)
        assert result.value == FileConfig(
            messages_dir="docs/releases", remote="upstream", branch="trunk"
        )

    def test_blank_values_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "relflow.toml"
        path.write_text('[release]\nremote = "  "\nbranch = 3\n', encoding="utf-8")
        result = load_file_config(path)
        assert result == Ok(FileConfig())

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "relflow.toml"
        path.write_text("[release\nremote=", encoding="utf-8")
        result = load_file_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path


class TestResolveConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path)
        result = resolve_config(start_dir=root)
        assert isinstance(result, Ok)
        cfg = result.value
        assert cfg.repository_root == root.resolve()
        assert cfg.resource_directory == root.resolve() / "versions"
        assert cfg.remote == DEFAULT_REMOTE
        assert cfg.branch == DEFAULT_BRANCH

    def test_detects_root_from_subdirectory(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path / "repo")
        sub = root / "docs"
        sub.mkdir()
        result = resolve_config(start_dir=sub)
        assert isinstance(result, Ok)
        assert result.value.repository_root == root.resolve()

    def test_file_values(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path)
        (root / "relflow.toml").write_text(
            '[release]\nmessages_dir = "notes"\nremote = "upstream"\n', encoding="utf-8"
        )
        result = resolve_config(root=root)
        assert isinstance(result, Ok)
        assert result.value.resource_directory == root.resolve() / "notes"
        assert result.value.remote == "upstream"
        assert result.value.branch == DEFAULT_BRANCH

    def test_overrides_beat_file(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path / "repo")
        (root / "relflow.toml").write_text(
            '[release]\nremote = "upstream"\nbranch = "trunk"\n', encoding="utf-8"
        )
        messages = tmp_path / "elsewhere"
        result = resolve_config(root=root, messages_dir=messages, remote="fork", branch="dev")
        assert isinstance(result, Ok)
        assert result.value.remote == "fork"
        assert result.value.branch == "dev"
        assert result.value.resource_directory == messages.resolve()

    def test_env_root(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = _make_repo(tmp_path / "from-env")
        monkeypatch.setenv(ROOT_ENV_VAR, str(root))
        result = resolve_config(start_dir=tmp_path)
        assert isinstance(result, Ok)
        assert result.value.repository_root == root.resolve()

    def test_invalid_file_is_error(self, tmp_path: Path) -> None:
        root = _make_repo(tmp_path)
        (root / "relflow.toml").write_text("not = [valid", encoding="utf-8")
        assert isinstance(resolve_config(root=root), Err)
