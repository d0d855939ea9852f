"""Configuration models.

All settings live under the ``"gitflow-changelog"`` key of the project's
``package.json``. Every field has a default, so an npm package with a
``repository`` field needs no configuration at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitflow_changelog.core.version import Version
from gitflow_changelog.exceptions import VersionParseError


class BranchesConfig(BaseModel):
    """Git-flow branch naming."""

    model_config = ConfigDict(extra="forbid")

    develop: str = "develop"
    release_prefix: str = "release/"
    hotfix_prefix: str = "hotfix/"
    on_unknown: Literal["error", "warn"] = "error"


class ChangelogConfig(BaseModel):
    """Changelog file settings."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Path("CHANGELOG.md")
    header: str = ""


class CommitsConfig(BaseModel):
    """Commit parsing settings."""

    model_config = ConfigDict(extra="forbid")

    keep_untyped: bool = False


class VersionConfig(BaseModel):
    """Version settings."""

    model_config = ConfigDict(extra="forbid")

    initial_version: str = "0.0.0"

    @field_validator("initial_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        try:
            Version.parse(value)
        except VersionParseError as e:
            raise ValueError(e.message) from e
        return value


class GitflowChangelogConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    repo_url: str = ""
    manifests: list[Path] = Field(
        default_factory=lambda: [Path("package.json"), Path("package-lock.json")]
    )
    commit_message: str = "chore(release): bump version to {version}"

    branches: BranchesConfig = Field(default_factory=BranchesConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    @field_validator("commit_message")
    @classmethod
    def _check_message(cls, value: str) -> str:
        if "{version}" not in value:
            raise ValueError("commit_message must contain the {version} placeholder")
        return value

    @property
    def files_to_commit(self) -> list[Path]:
        """Changelog and manifests, in that order."""
        return [self.changelog.path, *self.manifests]
