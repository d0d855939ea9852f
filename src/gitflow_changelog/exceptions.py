"""Exception hierarchy for gitflow-changelog.

Every error the tool raises derives from :class:`GitflowChangelogError`.
Each error kind carries the process exit code the CLI terminates with,
so callers and CI scripts can tell failures apart:

- 2: configuration errors
- 3: branch validation errors
- 4: git subprocess failures
- 5: commit or version parse errors
- 6: changelog or manifest file errors
"""

from __future__ import annotations


class GitflowChangelogError(Exception):
    """Base class for all gitflow-changelog errors."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(GitflowChangelogError):
    """Configuration could not be loaded."""

    exit_code = 2


class ConfigNotFoundError(ConfigError):
    """package.json was not found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# =============================================================================
# Branches
# =============================================================================


class BranchError(GitflowChangelogError):
    """Current branch is not a release, hotfix or develop branch."""

    exit_code = 3


# =============================================================================
# Git
# =============================================================================


class GitError(GitflowChangelogError):
    """A git command failed."""

    exit_code = 4

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}\n{self.stderr.strip()}"
        return self.message


# =============================================================================
# Parsing
# =============================================================================


class ParseError(GitflowChangelogError):
    """Input could not be parsed."""

    exit_code = 5


class CommitParseError(ParseError):
    """A raw log entry is not a valid commit record."""


class VersionParseError(ParseError):
    """A string is not a MAJOR.MINOR.PATCH version."""


# =============================================================================
# Files
# =============================================================================


class FileUpdateError(GitflowChangelogError):
    """A project file could not be read or written."""

    exit_code = 6


class ChangelogError(FileUpdateError):
    """The changelog file could not be updated."""


class ManifestError(FileUpdateError):
    """A package manifest could not be updated."""
