"""Git operations.

Usage:
    from relflow.git import Repository

    repo = Repository(Path("/path/to/repo"))
    if repo.exists():
        match repo.status_text():
            case Ok(text):
                print(text)
"""

from relflow.git.protocol import VersionControl
from relflow.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
    "VersionControl",
]
