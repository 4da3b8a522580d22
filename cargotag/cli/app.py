from __future__ import annotations

import os
from pathlib import Path

import typer

from cargotag import __version__
from cargotag.cli._helpers import exit_on_error
from cargotag.cli.context import build_context
from cargotag.core.config import resolve_config
from cargotag.core.errors import ErrorCode
from cargotag.core.result import Err
from cargotag.output.console import RichConsole
from cargotag.services.report import report
from cargotag.services.tagging import TagService

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Create an annotated git tag from the version in Cargo.toml.",
)


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "true" if value else "false"


@app.command()
def tag(
    cargo_path: str | None = typer.Option(
        None,
        "--cargo-path",
        help="Path to Cargo.toml (default: src-tauri/Cargo.toml)",
    ),
    tag_prefix: str | None = typer.Option(None, "--tag-prefix", help="Tag prefix (default: v)"),
    commit_message: str | None = typer.Option(
        None,
        "--commit-message",
        help="Annotation message, {version} is substituted (default: Release {version})",
    ),
    push: bool | None = typer.Option(
        None,
        "--push/--no-push",
        help="Push the created tag to origin (default: push)",
        show_default=False,
    ),
    dry_run: bool | None = typer.Option(
        None,
        "--dry-run/--no-dry-run",
        help="Decide only, never create or push",
        show_default=False,
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="Token for the refs API (GITHUB_TOKEN takes priority)",
    ),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository working copy (defaults to the current directory)",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Tag the current commit with the manifest version unless the tag exists.

    Unset options fall back to INPUT_<NAME> environment variables.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()
    repo_root: Path | None = None
    if repo is not None:
        repo_root = repo.expanduser().resolve()
        if not repo_root.is_dir():
            console.error(f"--repo '{repo_root}' is not a directory")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    overrides = {
        "cargo-path": cargo_path,
        "tag-prefix": tag_prefix,
        "commit-message": commit_message,
        "push": _flag(push),
        "dry-run": _flag(dry_run),
        "token": token,
    }
    resolved = resolve_config(os.environ, overrides, repo_root=repo_root)
    if isinstance(resolved, Err):
        exit_on_error(resolved, console, ErrorCode.USER_ERROR)
        return

    ctx = build_context(resolved.value, console)
    outputs = TagService(
        config=ctx.config,
        repo=ctx.repo,
        checker=ctx.checker,
        console=ctx.console,
    ).run()
    if isinstance(outputs, Err):
        exit_on_error(outputs, ctx.console)
        return

    exit_on_error(report(outputs.value, os.environ, ctx.console), ctx.console)


def main() -> None:
    app()
