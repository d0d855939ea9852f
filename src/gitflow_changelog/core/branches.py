"""Git-flow branch classification.

A branch is exactly one of release (``release/*``), hotfix (``hotfix/*``),
develop (``develop``) or none of them.
"""

from __future__ import annotations

from enum import Enum

RELEASE_PREFIX = "release/"
HOTFIX_PREFIX = "hotfix/"
DEVELOP_BRANCH = "develop"


class BranchKind(str, Enum):
    """Workflow role of a branch."""

    RELEASE = "release"
    HOTFIX = "hotfix"
    DEVELOP = "develop"
    OTHER = "other"


def is_release(name: str, prefix: str = RELEASE_PREFIX) -> bool:
    """Check whether ``name`` is a release branch."""
    return name.startswith(prefix)


def is_hotfix(name: str, prefix: str = HOTFIX_PREFIX) -> bool:
    """Check whether ``name`` is a hotfix branch."""
    return name.startswith(prefix)


def is_develop(name: str, develop: str = DEVELOP_BRANCH) -> bool:
    """Check whether ``name`` is the develop branch."""
    return name == develop


def classify_branch(
    name: str,
    *,
    release_prefix: str = RELEASE_PREFIX,
    hotfix_prefix: str = HOTFIX_PREFIX,
    develop: str = DEVELOP_BRANCH,
) -> BranchKind:
    """Classify a branch name.

    Args:
        name: Branch name, e.g. ``"release/1.4.0"``
        release_prefix: Prefix of release branches
        hotfix_prefix: Prefix of hotfix branches
        develop: Name of the integration branch

    Returns:
        The matching BranchKind, ``BranchKind.OTHER`` if none match
    """
    if is_release(name, release_prefix):
        return BranchKind.RELEASE
    if is_hotfix(name, hotfix_prefix):
        return BranchKind.HOTFIX
    if is_develop(name, develop):
        return BranchKind.DEVELOP
    return BranchKind.OTHER
