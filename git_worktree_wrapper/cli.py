"""Typer CLI entrypoint for gww."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import Settings, load_settings
from .exceptions import WorktreeError
from .git import SubprocessGitRunner
from .interactive import InquirerConfirmer, InquirerPicker
from .shell import autocd_script, cd_line
from .worktrees import WorktreeService

app = typer.Typer(
    add_completion=False,
    help="Git worktree wrapper: one worktree per branch.",
)


@dataclass(slots=True)
class AppState:
    settings: Settings
    console: Console
    err_console: Console
    verbose: bool = False


def configure_logging(verbose: bool, console: Console) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gww {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the gww version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    settings = load_settings()
    console = Console(no_color=settings.no_colour)
    err_console = Console(stderr=True, no_color=settings.no_colour)
    configure_logging(verbose, err_console)
    ctx.obj = AppState(settings=settings, console=console, err_console=err_console, verbose=verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(
            "No command provided; defaulting to `checkout`. Use `gww --help` for options.",
            err=True,
        )
        _checkout(ctx.obj, None, False)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


def _build_service(state: AppState) -> WorktreeService:
    return WorktreeService(
        runner=SubprocessGitRunner(),
        settings=state.settings,
        picker=InquirerPicker(),
        confirmer=InquirerConfirmer(),
    )


def _fail(state: AppState, exc: Exception) -> NoReturn:
    state.err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    raise typer.Exit(1) from exc


def _checkout(state: AppState, branch: Optional[str], create: bool) -> None:
    try:
        path = _build_service(state).checkout(branch, create=create)
    except WorktreeError as exc:
        _fail(state, exc)
    typer.echo(cd_line(path))


def checkout(
    ctx: typer.Context,
    branch: Optional[str] = typer.Argument(None, help="Branch name to checkout."),
    create: bool = typer.Option(False, "-b", "--create", help="Create branch if it does not exist."),
) -> None:
    """Checkout a branch in a worktree."""
    _checkout(_require_state(ctx), branch, create)


def list_(
    ctx: typer.Context,
    json_: bool = typer.Option(False, "--json", help="Output JSON instead of a table."),
) -> None:
    """List worktrees."""
    state = _require_state(ctx)
    try:
        records = _build_service(state).list_worktrees()
    except WorktreeError as exc:
        _fail(state, exc)
    if json_:
        payload = [{"branch": record.branch, "path": str(record.path)} for record in records]
        typer.echo(json.dumps(payload, indent=2))
        return
    if not records:
        state.console.print("No worktrees found.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Branch", no_wrap=True)
    table.add_column("Path")
    for record in records:
        table.add_row(record.branch or "(detached)", str(record.path))
    state.console.print(table)


def remove(
    ctx: typer.Context,
    branch: Optional[str] = typer.Argument(None, help="Branch name to remove."),
) -> None:
    """Remove a worktree."""
    state = _require_state(ctx)
    try:
        path = _build_service(state).remove(branch)
    except WorktreeError as exc:
        _fail(state, exc)
    state.err_console.print(f"[green]Removed worktree {escape(str(path))}[/green]")


def autocd() -> None:
    """Output shell function for auto-cd."""
    typer.echo(autocd_script(), nl=False)


@app.command(hidden=True)
def timechooser(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    try:
        candidates, elapsed = _build_service(state).timed_candidates()
    except WorktreeError as exc:
        _fail(state, exc)
    typer.echo(f"Built {len(candidates)} branch entries in {elapsed:.2f}s")


app.command("checkout")(checkout)
app.command("co", hidden=True)(checkout)
app.command("list")(list_)
app.command("ls", hidden=True)(list_)
app.command("remove")(remove)
app.command("rm", hidden=True)(remove)
app.command("autocd")(autocd)


__all__ = ["app"]
