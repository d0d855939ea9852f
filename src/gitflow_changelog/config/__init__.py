"""Configuration management for gitflow-changelog."""

from __future__ import annotations

from gitflow_changelog.config.loader import load_config
from gitflow_changelog.config.models import (
    BranchesConfig,
    ChangelogConfig,
    CommitsConfig,
    GitflowChangelogConfig,
    VersionConfig,
)

__all__ = [
    "BranchesConfig",
    "ChangelogConfig",
    "CommitsConfig",
    "GitflowChangelogConfig",
    "VersionConfig",
    "load_config",
]
