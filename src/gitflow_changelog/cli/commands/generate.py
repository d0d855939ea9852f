"""Implementation of the changelog generation command.

On a release or hotfix branch the command prepends the new section to the
changelog, bumps the version in the npm manifests and commits the result.
On develop it only prints a preview of what the next release will contain.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.text import Text

from gitflow_changelog.config.loader import get_project_root, load_config
from gitflow_changelog.core.branches import BranchKind, classify_branch
from gitflow_changelog.core.bump import get_next_version
from gitflow_changelog.core.changelog import (
    build_changelog,
    render_changelog,
    render_preview,
    write_changelog,
)
from gitflow_changelog.core.commits import fetch_commits
from gitflow_changelog.exceptions import BranchError
from gitflow_changelog.project.package_json import update_manifests
from gitflow_changelog.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_generate(
    path: str | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> str | None:
    """Run the generate command.

    Args:
        path: Optional path to the project directory
        dry_run: Print the release section instead of writing it
        console: Console for standard output
        err_console: Console for warnings

    Returns:
        The next version, None when the branch is skipped

    Raises:
        GitflowChangelogError: Any failure, carrying its exit code
    """
    project_path = get_project_root(Path(path) if path else None)

    config = load_config(project_path)
    repo = GitRepository(project_path)

    current_branch = repo.current_branch()
    console.print(f"Current branch: [cyan]{current_branch}[/]")

    kind = classify_branch(
        current_branch,
        release_prefix=config.branches.release_prefix,
        hotfix_prefix=config.branches.hotfix_prefix,
        develop=config.branches.develop,
    )
    if kind == BranchKind.OTHER:
        message = (
            "You must be in release, hotfix or develop branch to run the changelog generator"
        )
        if config.branches.on_unknown == "error":
            raise BranchError(message)
        err_console.print(f"[yellow]Warning:[/] {message}")
        return None

    last_tag = repo.get_latest_tag()
    console.print(f"Last tag: [cyan]{last_tag or 'none'}[/]")

    keep_untyped = config.commits.keep_untyped
    commits_all = fetch_commits(repo, last_tag, current_branch, keep_untyped=keep_untyped)
    commits_release = fetch_commits(
        repo, config.branches.develop, current_branch, keep_untyped=keep_untyped
    )

    next_version = get_next_version(repo, last_tag, current_branch, config)
    console.print(f"Next version: [green]{next_version}[/]")

    changelog = build_changelog(
        header=config.changelog.header,
        repo_url=config.repo_url,
        version=next_version,
        commits_all=commits_all,
        commits_release=commits_release,
    )

    if kind == BranchKind.DEVELOP:
        console.print(
            Panel(
                Text(render_preview(changelog).strip("\n")),
                title=f"[yellow]Preview {next_version}[/]",
                border_style="yellow",
            )
        )
        return next_version

    content = render_changelog(changelog)
    if dry_run:
        console.print(
            Panel(
                Text(content),
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return next_version

    write_changelog(project_path / config.changelog.path, content)
    console.print(f"  [green]✓[/] Updated {config.changelog.path}")

    for manifest in update_manifests((project_path / m for m in config.manifests), next_version):
        console.print(f"  [green]✓[/] Updated version in {manifest.name}")

    console.print("Committing...")
    repo.commit_files(
        [project_path / p for p in config.files_to_commit],
        config.commit_message.format(version=next_version),
    )

    console.print(
        Panel(
            f"[green]Bumped version to {next_version}![/]\n\n"
            "Next steps:\n"
            "  1. Review the release commit\n"
            f"  2. Finish the branch and tag: [cyan]git tag {next_version}[/]",
            title="[green]Release Prepared[/]",
            border_style="green",
        )
    )
    return next_version
