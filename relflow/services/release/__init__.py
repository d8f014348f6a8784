"""Release workflow: version messages, runner and outcomes."""

from relflow.services.release.errors import ReleaseError
from relflow.services.release.messages import MessageStore, VersionIndex
from relflow.services.release.model import ReleaseOutcome, ReleaseState, TagOutcome
from relflow.services.release.runner import ReleaseWorkflowRunner
from relflow.services.release.versions import is_version

__all__ = [
    "MessageStore",
    "ReleaseError",
    "ReleaseOutcome",
    "ReleaseState",
    "ReleaseWorkflowRunner",
    "TagOutcome",
    "VersionIndex",
    "is_version",
]
