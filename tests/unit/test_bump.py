"""Tests for branch-aware next-version calculation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from gitflow_changelog.config.models import BranchesConfig, GitflowChangelogConfig
from gitflow_changelog.core.branches import BranchKind
from gitflow_changelog.core.bump import calculate_bump, get_next_version, next_version
from gitflow_changelog.core.commits import Commit
from gitflow_changelog.core.version import BumpType
from gitflow_changelog.exceptions import VersionParseError
from gitflow_changelog.vcs.git import GitRepository


class TestCalculateBump:
    """Tests for calculate_bump()."""

    @pytest.mark.parametrize("kind", [BranchKind.DEVELOP, BranchKind.RELEASE])
    def test_no_commits_returns_none(self, kind: BranchKind):
        """No commits since the tag, no release."""
        assert calculate_bump([], kind) == BumpType.NONE

    @pytest.mark.parametrize("kind", [BranchKind.DEVELOP, BranchKind.RELEASE])
    def test_feat_returns_minor(self, feat_commit: Commit, kind: BranchKind):
        """A feat commit yields a minor release."""
        assert calculate_bump([feat_commit], kind) == BumpType.MINOR

    def test_merge_only_returns_minor(self, merge_commit: Commit):
        """A feature merge alone is enough for a minor release."""
        assert calculate_bump([merge_commit], BranchKind.RELEASE) == BumpType.MINOR

    def test_fix_only_on_release_returns_minor(self, fix_commit: Commit):
        """Release branches ship at least a minor, even with only fixes."""
        assert calculate_bump([fix_commit], BranchKind.RELEASE) == BumpType.MINOR

    def test_breaking_returns_major(
        self, feat_commit: Commit, breaking_commit: Commit, fix_commit: Commit
    ):
        """One breaking commit among others yields a major release."""
        commits = [feat_commit, breaking_commit, fix_commit]
        assert calculate_bump(commits, BranchKind.RELEASE) == BumpType.MAJOR

    def test_breaking_order_independent(self, feat_commit: Commit, breaking_commit: Commit):
        """The first commit being breaking still yields a major bump."""
        assert calculate_bump([breaking_commit, feat_commit], BranchKind.DEVELOP) == BumpType.MAJOR

    def test_hotfix_with_fix_returns_patch(self, fix_commit: Commit, feat_commit: Commit):
        """A fix on a hotfix branch yields a patch."""
        assert calculate_bump([feat_commit, fix_commit], BranchKind.HOTFIX) == BumpType.PATCH

    def test_hotfix_without_fix_returns_none(self, feat_commit: Commit):
        """Hotfix branches without a fix are not released."""
        assert calculate_bump([feat_commit], BranchKind.HOTFIX) == BumpType.NONE

    def test_hotfix_ignores_breaking(self, breaking_commit: Commit, fix_commit: Commit):
        """Hotfixes never go beyond a patch."""
        assert calculate_bump([breaking_commit, fix_commit], BranchKind.HOTFIX) == BumpType.PATCH

    def test_other_branch_defaults_to_patch(self, fix_commit: Commit):
        """Other branches fall back to a patch, even without commits."""
        assert calculate_bump([fix_commit], BranchKind.OTHER) == BumpType.PATCH
        assert calculate_bump([], BranchKind.OTHER) == BumpType.PATCH

    def test_other_branch_feat_returns_minor(self, fix_commit: Commit, feat_commit: Commit):
        """A feat anywhere in the list yields a minor on other branches."""
        assert calculate_bump([fix_commit, feat_commit], BranchKind.OTHER) == BumpType.MINOR

    def test_other_branch_breaking_returns_major(self, breaking_commit: Commit):
        """A breaking commit wins even without a preceding feat."""
        assert calculate_bump([breaking_commit], BranchKind.OTHER) == BumpType.MAJOR


class TestNextVersion:
    """Tests for next_version()."""

    @pytest.mark.parametrize("branch", ["develop", "release/1.3.0"])
    def test_empty_commits_unchanged(self, branch: str):
        """Without commits the tag is returned as the version."""
        assert next_version("1.2.3", branch, []) == "1.2.3"

    def test_feat_on_release(self):
        """A feat on a release branch bumps the minor."""
        commits = [Commit(hash="abc1234", type="feat", subject="add search")]
        assert next_version("1.2.3", "release/1.3.0", commits) == "1.3.0"

    def test_breaking_type_on_release(self):
        """A ! in the type bumps the major."""
        commits = [Commit(hash="abc1234", type="feat!", subject="drop v1")]
        assert next_version("1.2.3", "release/2.0.0", commits) == "2.0.0"

    def test_breaking_body_on_release(self):
        """A BREAKING CHANGE footer bumps the major."""
        commits = [
            Commit(
                hash="abc1234",
                type="feat",
                subject="new auth",
                body="BREAKING CHANGE: sessions are invalidated",
            )
        ]
        assert next_version("1.2.3", "release/2.0.0", commits) == "2.0.0"

    def test_hotfix_fix(self):
        """A fix on a hotfix branch bumps the patch."""
        commits = [Commit(hash="abc1234", type="fix", subject="null check")]
        assert next_version("1.2.4", "hotfix/1.2.5", commits) == "1.2.5"

    def test_hotfix_without_fix_unchanged(self):
        """A hotfix without a fix keeps the tagged version."""
        commits = [Commit(hash="abc1234", type="chore", subject="bump deps")]
        assert next_version("1.2.4", "hotfix/1.2.5", commits) == "1.2.4"

    def test_v_prefixed_tag(self):
        """The v prefix is dropped from the bumped version."""
        commits = [Commit(hash="abc1234", type="fix", subject="null check")]
        assert next_version("v1.2.4", "hotfix/1.2.5", commits) == "1.2.5"

    def test_v_prefixed_tag_hotfix_without_fix(self):
        """The v prefix is dropped even when nothing is bumped."""
        commits = [Commit(hash="abc1234", type="chore", subject="bump deps")]
        assert next_version("v1.2.4", "hotfix/1.2.5", commits) == "1.2.4"

    @pytest.mark.parametrize("branch", ["develop", "release/1.3.0"])
    def test_v_prefixed_tag_without_commits(self, branch: str):
        """An empty range returns the tag in M.m.p form."""
        assert next_version("v1.2.4", branch, []) == "1.2.4"

    def test_invalid_tag_raises(self):
        """A tag that is not a version cannot be bumped."""
        commits = [Commit(hash="abc1234", type="fix", subject="null check")]
        with pytest.raises(VersionParseError):
            next_version("nightly", "hotfix/x", commits)

    def test_uses_configured_branch_names(self):
        """Configured prefixes decide the branch kind."""
        config = GitflowChangelogConfig(branches=BranchesConfig(hotfix_prefix="patch-"))
        commits = [Commit(hash="abc1234", type="fix", subject="null check")]

        assert next_version("1.0.0", "patch-1", commits, config) == "1.0.1"


class TestGetNextVersion:
    """Tests for get_next_version()."""

    def test_fetches_commits_since_tag(self):
        """Commits are read from the tag to the branch."""
        repo = MagicMock(spec=GitRepository)
        repo.get_commits.return_value = [
            "abc1234 fix: null check",
            "bcd2345 Merge branch 'feature/search' into develop",
        ]

        result = get_next_version(repo, "1.2.3", "release/1.3.0", GitflowChangelogConfig())

        assert result == "1.3.0"
        repo.get_commits.assert_called_once_with("1.2.3", "release/1.3.0")

    def test_no_tag_uses_initial_version(self):
        """Without a tag the initial version is the base."""
        repo = MagicMock(spec=GitRepository)
        repo.get_commits.return_value = ["abc1234 feat: first feature"]

        result = get_next_version(repo, None, "release/0.1.0", GitflowChangelogConfig())

        assert result == "0.1.0"
        repo.get_commits.assert_called_once_with(None, "release/0.1.0")
