from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer

from relflow import __version__
from relflow.cli.commands import release_cmd
from relflow.cli.context import build_context


class Action(str, Enum):
    list = "list"
    status = "status"
    release = "release"
    add = "add"
    commit = "commit"
    tag = "tag"
    push = "push"
    help = "help"


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def run(
    ctx: typer.Context,
    action: Action = typer.Argument(Action.list, help="Operation to perform."),
    version: str = typer.Argument("", help="Version, e.g. v1.2.0 (release/commit/tag)."),
    remote: str | None = typer.Option(None, "--remote", "-r", help="Remote name [origin]"),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Branch name [main]"),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Repository root (overrides auto detection)",
    ),
    messages_dir: Path | None = typer.Option(
        None,
        "--messages-dir",
        help="Directory of <version>.txt commit messages [<root>/versions]",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every prompt"),
    show_version: bool = typer.Option(False, "--about", help="Show relflow version and exit."),
) -> None:
    """Stage, commit, push and tag a release from a per-version message file.

    Actions: list, status, add, commit <version>, push, tag <version>,
    release <version>, help.
    """
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if action is Action.help:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    cli = build_context(
        root=root,
        messages_dir=messages_dir,
        remote=remote,
        branch=branch,
        assume_yes=yes,
    )
    remote_name = cli.config.remote
    branch_name = cli.config.branch

    match action:
        case Action.list:
            release_cmd.list_versions(cli)
        case Action.status:
            release_cmd.show_status(cli)
        case Action.add:
            release_cmd.stage(cli)
        case Action.commit:
            release_cmd.commit(cli, version)
        case Action.push:
            release_cmd.push(cli, remote_name, branch_name)
        case Action.tag:
            release_cmd.tag(cli, version, remote_name)
        case Action.release:
            release_cmd.release(cli, version, remote_name, branch_name)


def main() -> None:
    app()
