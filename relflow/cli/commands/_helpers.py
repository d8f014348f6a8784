"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relflow.core.errors import ErrorCode
from relflow.core.result import Err, Result
from relflow.output.console import Style
from relflow.output.errors import print_release_error, release_error_exit_code
from relflow.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from relflow.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error(result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the Ok value, or render the error and exit.

    Replaces the pattern:
        match result:
            case Err(e):
                print_release_error(e, ctx.console)
                raise typer.Exit(code=release_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))
    return result.value


def require_version(version: str, action: str, ctx: CLIContext) -> str:
    """Exit with a user error when an action needs a version and got none.

    A missing repository is reported first, as the runner does.
    """
    exit_on_error(ctx.runner.check_repository(), ctx)
    version = version.strip()
    if version:
        return version

    ctx.console.error(f"a version is required for '{action}'")
    known = list(ctx.messages.versions())
    if known:
        ctx.console.print(f"available versions: {', '.join(known)}", Style.DIM)
    ctx.console.print(f"usage: relflow {action} <version>", Style.DIM)
    exit_with_code(int(ErrorCode.USER_ERROR))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
