"""Shared fixtures for gitflow-changelog tests."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from gitflow_changelog.core.commits import Commit, parse_commit

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def feat_commit() -> Commit:
    """A feature commit with a scope."""
    commit = parse_commit("feat123 feat(auth): add user authentication")
    assert commit is not None
    return commit


@pytest.fixture
def fix_commit() -> Commit:
    """A bug fix commit with a scope."""
    commit = parse_commit("fix4567 fix(core): handle empty config")
    assert commit is not None
    return commit


@pytest.fixture
def breaking_commit() -> Commit:
    """A breaking feature commit."""
    commit = parse_commit("brk8901 feat(api)!: drop v1 endpoints")
    assert commit is not None
    return commit


@pytest.fixture
def merge_commit() -> Commit:
    """A feature branch merged into develop."""
    commit = parse_commit("mrg2345 Merge branch 'feature/login' into develop")
    assert commit is not None
    return commit


@pytest.fixture
def sample_raw_entries() -> list[str]:
    """Raw log entries as returned by GitRepository.get_commits."""
    return [
        "a1b2c3d feat(ui): add dark mode",
        "b2c3d4e fix: correct typo in header",
        "c3d4e5f Merge branch 'feature/search' into develop",
        "d4e5f6a docs: update readme",
        "e5f6a7b Update dependencies",
        "f6a7b8c feat!: remove legacy API\n\nBREAKING CHANGE: the v1 API is gone.",
    ]


@pytest.fixture
def npm_project(tmp_path: Path) -> Path:
    """A directory with package.json and package-lock.json."""
    package = {
        "name": "widgets",
        "version": "1.2.3",
        "description": "Wïdgets",
        "repository": {"type": "git", "url": "git+https://github.com/acme/widgets.git"},
        "scripts": {"test": "jest"},
    }
    lock = {
        "name": "widgets",
        "version": "1.2.3",
        "lockfileVersion": 3,
        "requires": True,
        "packages": {"": {"name": "widgets", "version": "1.2.3"}},
    }
    (tmp_path / "package.json").write_text(json.dumps(package, indent=2) + "\n", encoding="utf-8")
    (tmp_path / "package-lock.json").write_text(json.dumps(lock, indent=2) + "\n", encoding="utf-8")
    return tmp_path


def _git(repo: Path, *args: str) -> str:
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@test.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@test.com",
        "GIT_CONFIG_NOSYSTEM": "1",
    }
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=repo,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git():
    """Run a git command in a repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    return _git


@pytest.fixture
def temp_git_repo(npm_project: Path, git) -> Path:
    """An npm project under git with a ``1.2.3`` tag on develop."""
    git(npm_project, "init", "-q")
    git(npm_project, "checkout", "-q", "-b", "develop")
    git(npm_project, "add", "-A")
    git(npm_project, "commit", "-q", "-m", "chore: initial commit")
    git(npm_project, "tag", "1.2.3")
    return npm_project
