"""Action handlers for the relflow command."""

from __future__ import annotations

from relflow.cli.commands._helpers import exit_on_error, require_version
from relflow.cli.context import CLIContext
from relflow.output.console import Style
from relflow.services.release.model import RELEASE_STEPS, ReleaseOutcome, TagOutcome


def list_versions(ctx: CLIContext) -> None:
    """Print known versions with their summary line."""
    versions = list(ctx.runner.list_versions())
    if not versions:
        ctx.console.info(f"no versions found in {ctx.config.resource_directory}")
        ctx.console.print("add a file named <version>.txt, e.g. v0.1.0.txt", Style.DIM)
        return

    tags = ctx.repository.local_tags() if ctx.repository.exists() else frozenset[str]()
    width = max(len(v) for v in versions)

    ctx.console.header(f"Versions ({ctx.config.resource_directory})")
    for version in versions:
        summary = ctx.messages.summary(version)
        marker = "  [tagged]" if version in tags else ""
        ctx.console.print(f"  {version.ljust(width)}  {summary}{marker}")


def show_status(ctx: CLIContext) -> None:
    exit_on_error(ctx.runner.show_status(), ctx)


def stage(ctx: CLIContext) -> None:
    exit_on_error(ctx.runner.stage_all(), ctx)


def commit(ctx: CLIContext, version: str) -> None:
    version = require_version(version, "commit", ctx)
    exit_on_error(ctx.runner.commit(version), ctx)


def push(ctx: CLIContext, remote: str, branch: str) -> None:
    exit_on_error(ctx.runner.push(remote, branch), ctx)


def tag(ctx: CLIContext, version: str, remote: str) -> None:
    version = require_version(version, "tag", ctx)
    outcome = exit_on_error(ctx.runner.tag(version, remote), ctx)
    if outcome is TagOutcome.SKIPPED:
        ctx.console.print("tag unchanged", Style.DIM)


def release(ctx: CLIContext, version: str, remote: str, branch: str) -> None:
    version = require_version(version, "release", ctx)
    result = ctx.runner.release(version, remote, branch)

    step = ctx.runner.failed_step
    if step is not None and step is not RELEASE_STEPS[0]:
        ctx.console.warning(f"release stopped while {step.value}; earlier steps were kept")

    outcome = exit_on_error(result, ctx)
    if outcome is ReleaseOutcome.DONE:
        ctx.console.print(f"{version} is live on {remote}", Style.DIM)
