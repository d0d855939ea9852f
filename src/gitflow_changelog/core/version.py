"""Semantic version parsing and bumping.

Versions are plain ``MAJOR.MINOR.PATCH`` triples as used by npm tags.
A leading ``v`` (``v1.2.3``) is accepted when parsing and dropped when
formatting, matching how ``semver.inc`` treats tag names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from gitflow_changelog.exceptions import VersionParseError

VERSION_PATTERN: re.Pattern[str] = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)$"
)


class BumpType(str, Enum):
    """Kind of version increment, strongest first."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Version:
    """A ``MAJOR.MINOR.PATCH`` version."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string.

        Args:
            value: Version such as ``"1.2.3"`` or ``"v1.2.3"``

        Returns:
            Parsed Version

        Raises:
            VersionParseError: If the string is not a valid version
        """
        match = VERSION_PATTERN.match(value.strip())
        if not match:
            raise VersionParseError(f"Invalid version: {value!r}. Expected MAJOR.MINOR.PATCH.")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
        )

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented by ``bump_type``.

        Major resets minor and patch, minor resets patch.
        ``BumpType.NONE`` returns the version unchanged.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(value: str) -> Version:
    """Shortcut for :meth:`Version.parse`."""
    return Version.parse(value)
