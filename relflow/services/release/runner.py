"""Release workflow runner.

Runs the git release sequence for one version:

    validate -> show status -> show plan -> confirm
             -> stage -> commit -> push -> tag (create + push)

Each step runs only if the previous one succeeded. Nothing is rolled back:
if the push fails, the commit stays in place and the operator re-runs the
remaining steps by hand (``relflow push`` then ``relflow tag``).

Every operation checks that the repository exists before it looks at the
version, and returns ``Err(ReleaseError)`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from relflow.core.config import ReleaseConfig
from relflow.core.result import Err, Ok, Result
from relflow.git.protocol import VersionControl
from relflow.output.console import ConsoleProtocol, Style
from relflow.services.release.errors import ReleaseError
from relflow.services.release.messages import MessageStore, VersionIndex
from relflow.services.release.model import ReleaseOutcome, ReleaseState, TagOutcome

__all__ = ["Confirm", "ReleaseWorkflowRunner"]

Confirm = Callable[[str], bool]

T = TypeVar("T")


class ReleaseWorkflowRunner:
    """Stage, commit, push and tag a release.

    ``state`` follows the release state machine while ``release()`` runs;
    ``failed_step`` names the step that failed when ``state`` is FAILED and
    stays None when validation rejects the release.
    """

    def __init__(
        self,
        *,
        config: ReleaseConfig,
        vcs: VersionControl,
        messages: MessageStore,
        console: ConsoleProtocol,
        confirm: Confirm,
    ) -> None:
        self._config = config
        self._vcs = vcs
        self._messages = messages
        self._console = console
        self._confirm = confirm
        self.state = ReleaseState.IDLE
        self.failed_step: ReleaseState | None = None

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    def list_versions(self) -> VersionIndex:
        return self._messages.versions()

    def check_repository(self) -> Result[None, ReleaseError]:
        return self._require_repository()

    def show_status(self) -> Result[str, ReleaseError]:
        repo = self._require_repository()
        if isinstance(repo, Err):
            return repo
        return self._print_status()

    def stage_all(self) -> Result[None, ReleaseError]:
        repo = self._require_repository()
        if isinstance(repo, Err):
            return repo
        return self._stage()

    def commit(self, version: str) -> Result[None, ReleaseError]:
        checked = self._require_version(version)
        if isinstance(checked, Err):
            return checked
        return self._commit(version, checked.value)

    def push(self, remote: str, branch: str) -> Result[None, ReleaseError]:
        repo = self._require_repository()
        if isinstance(repo, Err):
            return repo
        return self._push(remote, branch)

    def tag(self, version: str, remote: str) -> Result[TagOutcome, ReleaseError]:
        checked = self._require_version(version)
        if isinstance(checked, Err):
            return checked
        return self._tag(version, checked.value, remote)

    def release(
        self, version: str, remote: str, branch: str
    ) -> Result[ReleaseOutcome, ReleaseError]:
        self.state = ReleaseState.VALIDATING
        self.failed_step = None

        checked = self._require_version(version)
        if isinstance(checked, Err):
            return self._reject(checked.error)
        message_file = checked.value

        status = self._print_status()
        if isinstance(status, Err):
            return self._reject(status.error)

        self._print_plan(version, message_file, remote, branch)

        self.state = ReleaseState.AWAITING_CONFIRMATION
        if not self._confirm(f"Release {version} to {remote}/{branch}?"):
            self.state = ReleaseState.CANCELLED
            self._console.warning("release cancelled; nothing was changed")
            return Ok(ReleaseOutcome.CANCELLED)

        self.state = ReleaseState.STAGING
        staged = self._stage()
        if isinstance(staged, Err):
            return self._fail(ReleaseState.STAGING, staged.error)

        self.state = ReleaseState.COMMITTING
        committed = self._commit(version, message_file)
        if isinstance(committed, Err):
            return self._fail(ReleaseState.COMMITTING, committed.error)

        self.state = ReleaseState.PUSHING
        pushed = self._push(remote, branch)
        if isinstance(pushed, Err):
            return self._fail(ReleaseState.PUSHING, pushed.error)

        self.state = ReleaseState.TAGGING
        tagged = self._tag(version, message_file, remote)
        if isinstance(tagged, Err):
            return self._fail(ReleaseState.TAGGING, tagged.error)
        if tagged.value is TagOutcome.SKIPPED:
            self.state = ReleaseState.CANCELLED
            self._console.warning(
                f"release stopped before tagging; {branch} was pushed without tag {version}"
            )
            return Ok(ReleaseOutcome.CANCELLED)

        self.state = ReleaseState.DONE
        self._console.success(f"released {version}")
        return Ok(ReleaseOutcome.DONE)

    # -------------------------------------------------------------------------
    # Preconditions
    # -------------------------------------------------------------------------

    def _require_repository(self) -> Result[None, ReleaseError]:
        if self._vcs.exists():
            return Ok(None)
        return Err(
            ReleaseError(
                kind="not_a_repository",
                message=f"not a git repository: {self._config.repository_root}",
                hint="run relflow inside a git working tree or pass --root",
            )
        )

    def _require_version(self, version: str) -> Result[Path, ReleaseError]:
        repo = self._require_repository()
        if isinstance(repo, Err):
            return repo
        return self._messages.require(version)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _print_status(self) -> Result[str, ReleaseError]:
        result = self._vcs.status_text()
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="status_failed",
                    message="git status failed",
                    detail=result.error.message,
                )
            )
        self._console.header("Repository status")
        self._console.verbatim(result.value)
        return Ok(result.value)

    def _print_plan(self, version: str, message_file: Path, remote: str, branch: str) -> None:
        self._console.header(f"Release plan: {version}")
        self._console.print(f"  remote:  {remote}")
        self._console.print(f"  branch:  {branch}")
        self._console.print(f"  message: {message_file}")
        for line in self._messages.preview(version):
            self._console.print(f"    | {line}", Style.DIM)
        self._console.newline()
        self._console.print("  1. stage all changes (git add -A)")
        self._console.print(f"  2. commit with {message_file.name}")
        self._console.print(f"  3. push {branch} to {remote}")
        self._console.print(f"  4. create annotated tag {version} and push it to {remote}")
        self._console.newline()

    def _stage(self) -> Result[None, ReleaseError]:
        result = self._vcs.stage_all()
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="stage_failed",
                    message="git add failed",
                    detail=result.error.message,
                )
            )
        self._console.success("staged all changes")
        return Ok(None)

    def _commit(self, version: str, message_file: Path) -> Result[None, ReleaseError]:
        staged = self._vcs.staged_files()
        if isinstance(staged, Err):
            return Err(
                ReleaseError(
                    kind="commit_failed",
                    message="could not list staged changes",
                    detail=staged.error.message,
                )
            )

        if not staged.value:
            self._console.info("no staged changes; staging all changes first")
            auto = self._stage()
            if isinstance(auto, Err):
                return auto

        result = self._vcs.commit(message_file)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="commit_failed",
                    message=f"git commit failed for {version}",
                    hint="fix the problem above, then re-run: relflow commit " + version,
                    detail=self._commit_diagnostics(result.error.message),
                )
            )
        self._console.success(f"committed {version}")
        return Ok(None)

    def _commit_diagnostics(self, git_output: str) -> str:
        parts = [git_output]

        status = self._vcs.status_text()
        match status:
            case Ok(text):
                parts.append(f"status:\n{text}" if text else "status: (empty)")
            case Err(e):
                parts.append(f"status: unavailable ({e.message})")

        staged = self._vcs.staged_files()
        match staged:
            case Ok(files) if files:
                parts.append("staged files:\n" + "\n".join(f"  {f}" for f in files))
            case Ok(_):
                parts.append("staged files: (none)")
            case Err(e):
                parts.append(f"staged files: unavailable ({e.message})")

        return "\n\n".join(parts)

    def _push(self, remote: str, branch: str) -> Result[None, ReleaseError]:
        result = self._vcs.push(remote, branch)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="push_failed",
                    message=f"git push {remote} {branch} failed",
                    hint="check the remote, branch and credentials, then re-run: relflow push",
                    detail=result.error.message,
                )
            )
        self._console.success(f"pushed {branch} to {remote}")
        return Ok(None)

    def _tag(
        self, version: str, message_file: Path, remote: str
    ) -> Result[TagOutcome, ReleaseError]:
        if self._vcs.tag_exists(version):
            self._console.warning(f"tag {version} already exists")
            if not self._confirm(f"Delete and recreate tag {version}?"):
                self._console.warning(f"kept existing tag {version}; nothing was tagged")
                return Ok(TagOutcome.SKIPPED)

            deleted = self._vcs.delete_tag(version)
            if isinstance(deleted, Err):
                return Err(
                    ReleaseError(
                        kind="tag_create_failed",
                        message=f"could not delete existing tag {version}",
                        detail=deleted.error.message,
                    )
                )
            self._console.info(f"deleted local tag {version}")

        created = self._vcs.create_tag(version, message_file)
        if isinstance(created, Err):
            return Err(
                ReleaseError(
                    kind="tag_create_failed",
                    message=f"git tag {version} failed",
                    detail=created.error.message,
                )
            )
        self._console.success(f"created annotated tag {version}")

        pushed = self._vcs.push_tag(version, remote)
        if isinstance(pushed, Err):
            return Err(
                ReleaseError(
                    kind="tag_push_failed",
                    message=f"pushing tag {version} to {remote} failed",
                    hint=f"the tag exists locally; re-run: relflow tag {version}",
                    detail=pushed.error.message,
                )
            )
        self._console.success(f"pushed tag {version} to {remote}")
        return Ok(TagOutcome.CREATED)

    def _reject(self, error: ReleaseError) -> Result[ReleaseOutcome, ReleaseError]:
        self.state = ReleaseState.REJECTED
        return Err(error)

    def _fail(self, step: ReleaseState, error: ReleaseError) -> Result[T, ReleaseError]:
        self.state = ReleaseState.FAILED
        self.failed_step = step
        return Err(error)
