"""Branch-aware next-version calculation.

The bump level depends on the kind of branch being released:

- hotfix: patch when at least one ``fix`` commit exists, otherwise none;
- develop and release: none without commits, major for a breaking
  commit, minor otherwise (feature branches are merged with plain
  merge commits, so a release always ships at least a minor);
- any other branch: major for a breaking commit, minor for a ``feat``,
  patch otherwise.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from gitflow_changelog.core.branches import BranchKind, classify_branch
from gitflow_changelog.core.commits import Commit, fetch_commits
from gitflow_changelog.core.version import BumpType, Version

if TYPE_CHECKING:
    from gitflow_changelog.config.models import GitflowChangelogConfig
    from gitflow_changelog.vcs.git import GitRepository


def calculate_bump(commits: Sequence[Commit], branch_kind: BranchKind) -> BumpType:
    """Decide the bump level for a set of commits.

    Args:
        commits: Commits since the last tag
        branch_kind: Kind of the branch being released

    Returns:
        The bump to apply, ``BumpType.NONE`` when no release is warranted
    """
    if branch_kind == BranchKind.HOTFIX:
        return BumpType.PATCH if any(c.is_fix for c in commits) else BumpType.NONE

    if branch_kind in (BranchKind.DEVELOP, BranchKind.RELEASE):
        if not commits:
            return BumpType.NONE
        if any(c.is_breaking for c in commits):
            return BumpType.MAJOR
        return BumpType.MINOR

    if any(c.is_breaking for c in commits):
        return BumpType.MAJOR
    if any(c.is_feature for c in commits):
        return BumpType.MINOR
    return BumpType.PATCH


def next_version(
    last_tag: str,
    branch_name: str,
    commits: Sequence[Commit],
    config: GitflowChangelogConfig | None = None,
) -> str:
    """Compute the version that follows ``last_tag``.

    Args:
        last_tag: Latest version tag, e.g. ``"1.2.3"``
        branch_name: Current branch name
        commits: Commits since ``last_tag``
        config: Configuration providing branch naming, defaults if None

    Returns:
        The bumped version, or ``last_tag`` normalized to ``M.m.p`` when
        nothing warrants a release

    Raises:
        VersionParseError: If ``last_tag`` is not a valid version
    """
    if config is None:
        kind = classify_branch(branch_name)
    else:
        kind = classify_branch(
            branch_name,
            release_prefix=config.branches.release_prefix,
            hotfix_prefix=config.branches.hotfix_prefix,
            develop=config.branches.develop,
        )

    return str(Version.parse(last_tag).bump(calculate_bump(commits, kind)))


def get_next_version(
    repo: GitRepository,
    last_tag: str | None,
    branch_name: str,
    config: GitflowChangelogConfig,
) -> str:
    """Fetch the commits since ``last_tag`` and compute the next version.

    Args:
        repo: Git repository
        last_tag: Latest tag, None when the repository has no tag yet
        branch_name: Current branch name
        config: Configuration

    Returns:
        The next version string
    """
    base = last_tag or config.version.initial_version
    commits = fetch_commits(repo, last_tag, branch_name, keep_untyped=config.commits.keep_untyped)
    return next_version(base, branch_name, commits, config)
