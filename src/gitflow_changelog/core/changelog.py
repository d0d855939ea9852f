"""Changelog rendering and writing.

A release section lists three groups of commits:

- **Release commits**: everything committed on the release branch since
  it was cut from develop;
- **Features Merged**: feature branches merged into develop since the
  last tag;
- **Bug Fixes**: ``fix`` commits from both ranges, each hash once.

Sections are prepended to the changelog file so the newest release is
always on top.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from typing import TYPE_CHECKING

from gitflow_changelog.core.commits import (
    FEATURE_TYPE,
    FIX_TYPE,
    MERGE_TYPE,
    Commit,
    filter_by_type,
    unique_by_hash,
)
from gitflow_changelog.exceptions import ChangelogError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


@dataclass(frozen=True)
class Changelog:
    """Everything needed to render one release section."""

    header: str
    repo_url: str
    version: str
    date: str
    merges: tuple[Commit, ...] = ()
    features: tuple[Commit, ...] = ()
    release: tuple[Commit, ...] = ()
    bugfixs: tuple[Commit, ...] = ()


def build_changelog(
    *,
    header: str,
    repo_url: str,
    version: str,
    commits_all: Sequence[Commit],
    commits_release: Sequence[Commit],
    date: date_type | None = None,
) -> Changelog:
    """Group commits into a Changelog.

    Args:
        header: Banner placed above the release heading
        repo_url: Repository URL used for commit links
        version: Version being released
        commits_all: Commits since the last tag
        commits_release: Commits on the current branch since develop
        date: Release date, defaults to today

    Returns:
        The changelog record
    """
    fixes = filter_by_type(commits_all, FIX_TYPE) + filter_by_type(commits_release, FIX_TYPE)
    return Changelog(
        header=header,
        repo_url=repo_url,
        version=version,
        date=(date or date_type.today()).isoformat(),
        merges=tuple(filter_by_type(commits_all, MERGE_TYPE)),
        features=tuple(filter_by_type(commits_all, FEATURE_TYPE)),
        release=tuple(commits_release),
        bugfixs=tuple(unique_by_hash(fixes)),
    )


def _link(changelog: Changelog, commit: Commit) -> str:
    return f"([{commit.hash}]({changelog.repo_url}/commit/{commit.hash}))"


def render_changelog(changelog: Changelog) -> str:
    """Render a release section as Markdown."""
    release = "".join(
        f"* **{c.type} {f'- {c.scope}' if c.scope else ''}**: {c.subject} {_link(changelog, c)}  \n"
        for c in changelog.release
    )
    merges = "".join(f"* {c.subject} {_link(changelog, c)}  \n" for c in changelog.merges)
    bugfixs = "".join(
        f"* {f'**{c.scope}**:' if c.scope else ''} {c.subject} {_link(changelog, c)}  \n"
        for c in changelog.bugfixs
    )

    return (
        f"{changelog.header}\n"
        f"## {changelog.version} ({changelog.date})\n"
        "\n"
        "### Release commits\n"
        "\n"
        f"{release}\n"
        "\n"
        "\n"
        "### Features Merged\n"
        "\n"
        f"{merges}\n"
        "\n"
        "\n"
        "### Bug Fixes\n"
        "\n"
        f"{bugfixs}\n"
        "\n"
        "___\n"
    )


def _preview_line(commit: Commit) -> str:
    scope = f"{commit.scope} -> " if commit.scope else ""
    return f"{scope}{commit.subject} ({commit.hash})"


def render_preview(changelog: Changelog) -> str:
    """Render a plain-text summary for console display, without links."""
    merges = "\n".join(f"{c.subject} ({c.hash})" for c in changelog.merges)
    features = "\n".join(_preview_line(c) for c in changelog.features)
    bugfixs = "\n".join(_preview_line(c) for c in changelog.bugfixs)

    return (
        "\n"
        "\n"
        "### Features Merged\n"
        f"{merges}\n"
        "\n"
        "\n"
        "### Features\n"
        f"{features}\n"
        "\n"
        "\n"
        "### Bug Fixes\n"
        f"{bugfixs}\n"
        "\n"
    )


def write_changelog(path: Path, content: str) -> Path:
    """Prepend ``content`` to the changelog at ``path``.

    Existing content is kept verbatim after the new section. The file is
    created when it does not exist.

    Args:
        path: Changelog file
        content: Rendered release section

    Returns:
        The changelog path

    Raises:
        ChangelogError: If the file cannot be read or written
    """
    try:
        existing = path.read_bytes() if path.exists() else b""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8") + existing)
    except OSError as e:
        raise ChangelogError(f"Could not update {path}: {e}") from e
    return path
