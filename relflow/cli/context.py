from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relflow.core.config import ReleaseConfig, resolve_config
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.git.repository import Repository
from relflow.output.console import ConsoleProtocol, RichConsole
from relflow.services.release.messages import MessageStore
from relflow.services.release.runner import Confirm, ReleaseWorkflowRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    repository: Repository
    messages: MessageStore
    console: ConsoleProtocol
    runner: ReleaseWorkflowRunner


def _prompt_confirm(message: str) -> bool:
    return typer.confirm(message, default=False)


def _assume_yes(message: str) -> bool:
    del message
    return True


def build_context(
    *,
    root: Path | None = None,
    messages_dir: Path | None = None,
    remote: str | None = None,
    branch: str | None = None,
    assume_yes: bool = False,
) -> CLIContext:
    config_result = resolve_config(
        root=root,
        messages_dir=messages_dir,
        remote=remote,
        branch=branch,
    )
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    repository = Repository(config.repository_root)
    messages = MessageStore(config.resource_directory)
    out = RichConsole()
    confirm: Confirm = _assume_yes if assume_yes else _prompt_confirm

    return CLIContext(
        config=config,
        repository=repository,
        messages=messages,
        console=out,
        runner=ReleaseWorkflowRunner(
            config=config,
            vcs=repository,
            messages=messages,
            console=out,
            confirm=confirm,
        ),
    )
