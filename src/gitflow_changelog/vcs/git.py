"""Git operations via the git command line.

Every call runs ``git`` as a subprocess in the repository directory and
raises :class:`GitError` when the command fails.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from gitflow_changelog.core.version import Version
from gitflow_changelog.exceptions import GitError, VersionParseError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Separates entries in ``git log`` output; commit messages never contain it.
COMMIT_DELIMITER = "------------------------ >8 ------------------------"


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")

    def _run(self, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.path)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def current_branch(self) -> str:
        """Name of the checked-out branch."""
        return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def list_tags(self) -> list[str]:
        """All tags, highest version first."""
        output = self._run("tag", "--sort=-v:refname")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_latest_tag(self) -> str | None:
        """Highest ``M.m.p`` version tag, None when no tag is a version.

        Pre-release tags (``1.3.0-rc.1``) and other names are skipped.
        """
        for tag in self.list_tags():
            try:
                Version.parse(tag)
            except VersionParseError:
                logger.debug("Skipping non-version tag %s", tag)
                continue
            return tag
        return None

    def get_commits(self, from_ref: str | None, to_ref: str = "HEAD") -> list[str]:
        """Raw ``<short-hash> <message>`` entries between two refs.

        Args:
            from_ref: Exclusive start, None to start at the root commit
            to_ref: Inclusive end

        Returns:
            Entries oldest first
        """
        rev_range = f"{from_ref}..{to_ref}" if from_ref else to_ref
        output = self._run(
            "log",
            "--reverse",
            f"--format=%h %B%n{COMMIT_DELIMITER}",
            rev_range,
            "--",
        )
        entries = [entry.strip("\n") for entry in output.split(COMMIT_DELIMITER)]
        return [entry for entry in entries if entry.strip()]

    def commit_files(self, paths: Sequence[Path | str], message: str) -> None:
        """Stage ``paths`` and commit them with ``message``."""
        self._run("add", "-A", "--", *(str(p) for p in paths))
        self._run("commit", "-m", message)
