"""Version-control capability used by the release runner.

The runner depends on this protocol only, so the release sequence can be
exercised against an in-memory fake. ``Repository`` is the git-backed
implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relflow.core.result import Result
from relflow.git.repository import GitError

__all__ = ["VersionControl"]


class VersionControl(Protocol):
    """Operations the release workflow needs from a VCS.

    Mutating methods return ``Ok(output)`` on success and ``Err(GitError)``
    when the underlying tool exits non-zero.
    """

    def exists(self) -> bool: ...

    def status_text(self) -> Result[str, GitError]: ...

    def staged_files(self) -> Result[tuple[str, ...], GitError]: ...

    def tag_exists(self, name: str) -> bool: ...

    def local_tags(self) -> frozenset[str]: ...

    def stage_all(self) -> Result[str, GitError]: ...

    def commit(self, message_file: Path) -> Result[str, GitError]: ...

    def push(self, remote: str, branch: str) -> Result[str, GitError]: ...

    def create_tag(self, name: str, message_file: Path) -> Result[str, GitError]: ...

    def delete_tag(self, name: str) -> Result[str, GitError]: ...

    def push_tag(self, name: str, remote: str) -> Result[str, GitError]: ...
