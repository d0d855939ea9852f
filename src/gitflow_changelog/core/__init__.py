"""Core business logic for gitflow-changelog.

This module contains the fundamental building blocks:
- Git-flow branch classification
- Conventional commit parsing
- Branch-aware next-version calculation
- Changelog rendering
"""

from __future__ import annotations

from gitflow_changelog.core.branches import (
    BranchKind,
    classify_branch,
    is_develop,
    is_hotfix,
    is_release,
)
from gitflow_changelog.core.bump import calculate_bump, get_next_version, next_version
from gitflow_changelog.core.changelog import (
    Changelog,
    build_changelog,
    render_changelog,
    render_preview,
    write_changelog,
)
from gitflow_changelog.core.commits import (
    Commit,
    CommitNote,
    RevertInfo,
    fetch_commits,
    parse_commit,
    parse_commits,
)
from gitflow_changelog.core.version import BumpType, Version, parse_version

__all__ = [
    # Branches
    "BranchKind",
    # Version
    "BumpType",
    # Changelog
    "Changelog",
    # Commits
    "Commit",
    "CommitNote",
    "RevertInfo",
    "Version",
    "build_changelog",
    "calculate_bump",
    "classify_branch",
    "fetch_commits",
    "get_next_version",
    "is_develop",
    "is_hotfix",
    "is_release",
    "next_version",
    "parse_commit",
    "parse_commits",
    "parse_version",
    "render_changelog",
    "render_preview",
    "write_changelog",
]
