"""Version control integration."""

from __future__ import annotations

from gitflow_changelog.vcs.git import GitRepository

__all__ = ["GitRepository"]
