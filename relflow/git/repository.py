"""Git repository abstraction.

``Repository`` is the production implementation of the ``VersionControl``
capability. Every method shells out to ``git -C <root>``; the exit code is
the only success signal and git's output is kept verbatim in ``GitError``.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.stage_all():
        case Ok(_):
            print("staged")
        case Err(e):
            print(f"{e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.platform.process import ProcessError
from relflow.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push origin main")
        message: git's combined output, or a fallback description
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git working tree at ``path``.

    All methods that can fail return Result types. Message files are
    passed to git by absolute path so the text is used byte for byte.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """True if ``path`` holds a ``.git`` directory or gitdir file."""
        return (self.path / ".git").exists()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def status_text(self) -> Result[str, GitError]:
        """Short human-readable status, exactly as git prints it."""
        result = self._run(["status", "--short", "--branch"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(stdout.rstrip())

    def staged_files(self) -> Result[tuple[str, ...], GitError]:
        """Names of files currently staged for commit."""
        result = self._run(["diff", "--cached", "--name-only"])
        match result:
            case Err(e):
                return Err(_git_error("diff --cached", e, "git diff failed"))
            case Ok(stdout):
                return Ok(tuple(ln for ln in stdout.splitlines() if ln.strip()))

    def tag_exists(self, name: str) -> bool:
        result = self._run(["rev-parse", "-q", "--verify", f"refs/tags/{name}"])
        return isinstance(result, Ok)

    def local_tags(self) -> frozenset[str]:
        """All local tag names (empty if git fails)."""
        result = self._run(["tag", "--list"])
        match result:
            case Ok(stdout):
                return frozenset(ln.strip() for ln in stdout.splitlines() if ln.strip())
            case Err(_):
                return frozenset()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def stage_all(self) -> Result[str, GitError]:
        return self._mutate(["add", "-A"], label="add -A")

    def commit(self, message_file: Path) -> Result[str, GitError]:
        return self._mutate(["commit", "-F", str(message_file.resolve())], label="commit")

    def push(self, remote: str, branch: str) -> Result[str, GitError]:
        return self._mutate(["push", remote, branch], label=f"push {remote} {branch}")

    def create_tag(self, name: str, message_file: Path) -> Result[str, GitError]:
        return self._mutate(
            ["tag", "-a", name, "-F", str(message_file.resolve())],
            label=f"tag -a {name}",
        )

    def delete_tag(self, name: str) -> Result[str, GitError]:
        return self._mutate(["tag", "-d", name], label=f"tag -d {name}")

    def push_tag(self, name: str, remote: str) -> Result[str, GitError]:
        """Force-push a single tag to ``remote``."""
        return self._mutate(
            ["push", "--force", remote, f"refs/tags/{name}"],
            label=f"push --force {remote} {name}",
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _mutate(self, args: list[str], *, label: str) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(_git_error(label, e, f"git {label} failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(label: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=label,
        message=error.output or fallback,
        returncode=error.returncode,
    )
