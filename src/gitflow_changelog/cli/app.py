"""Command line entry point."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gitflow_changelog import __version__
from gitflow_changelog.exceptions import GitflowChangelogError

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="gitflow-changelog",
    help="Compute the next version and update the changelog on git-flow branches.",
    add_completion=False,
    no_args_is_help=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"gitflow-changelog {__version__}")
        raise typer.Exit()


@app.command()
def generate(
    path: Annotated[
        str | None,
        typer.Option("--path", "-p", help="Project directory (defaults to the current directory)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the release section without writing or committing."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every git command."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Bump the version and prepend the changelog on release and hotfix branches.

    On develop, print a preview of the next release instead.
    """
    from gitflow_changelog.cli.commands.generate import run_generate

    _configure_logging(verbose)
    try:
        run_generate(path, dry_run, console, err_console)
    except GitflowChangelogError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e


def main() -> None:
    """Console script entry point."""
    app()
