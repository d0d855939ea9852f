"""Conventional commit parsing.

Raw log entries come from ``git log --format='%h %B'``, so the first line
of every entry is the abbreviated hash followed by the commit header::

    3f2a9c1 feat(auth)!: drop password login

    BREAKING CHANGE: tokens are now required.

The parser extracts hash, type, scope and subject from that first line,
collects ``BREAKING CHANGE`` notes from the body, detects revert commits
and issue references, and rewrites feature-branch merge commits into
synthetic ``merge`` records.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitflow_changelog.exceptions import CommitParseError

if TYPE_CHECKING:
    from gitflow_changelog.vcs.git import GitRepository

MERGE_TYPE = "merge"
FEATURE_TYPE = "feat"
FIX_TYPE = "fix"

BREAKING_NOTE = "BREAKING CHANGE"
FEATURE_MERGE_MARKER = "Merge branch 'feature/"
DEVELOP_MERGE_SUFFIX = "' into develop"

# abc1234 type(scope)!: subject
HEADER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<hash>\w{7,40}) "
    r"(?P<type>\w*)"
    r"(?:\((?P<scope>[^)]*)\))?"
    r"(?P<breaking>!)?"
    r": (?P<subject>.*)$"
)

# Leading hash of any entry, including ones that are not conventional.
HASH_PATTERN: re.Pattern[str] = re.compile(r"^(?P<hash>\w{4,40})(?:\s|$)")

NOTE_PATTERN: re.Pattern[str] = re.compile(r"^(?P<title>BREAKING[ -]CHANGE):\s*(?P<text>.*)$")

# Any line mentioning a breaking change, including the BREAKING_CHANGE spelling.
BREAKING_LINE_PATTERN: re.Pattern[str] = re.compile(r"BREAKING[ _-]CHANGE")

REVERT_PATTERN: re.Pattern[str] = re.compile(
    r'^(?:revert|revert:)\s"?(?P<header>[\S\s]+?)"?\s*this reverts commit (?P<hash>\w*)\.',
    re.IGNORECASE,
)

REFERENCE_PATTERN: re.Pattern[str] = re.compile(r"(?<![\w&])#(\d+)\b")


@dataclass(frozen=True)
class CommitNote:
    """A footer note such as ``BREAKING CHANGE: ...``."""

    title: str
    text: str


@dataclass(frozen=True)
class RevertInfo:
    """Header and hash of the commit undone by a revert."""

    header: str
    hash: str


@dataclass(frozen=True)
class Commit:
    """A parsed log entry.

    Attributes:
        hash: Abbreviated commit hash, never empty
        type: Conventional commit type, ``"merge"`` for feature merges,
            None when the header is not conventional
        scope: Optional scope between parentheses
        subject: Summary after the colon
        header: First line of the raw entry, hash included
        body: Remaining lines, None when empty
        notes: Footer notes, ``BREAKING CHANGE`` in practice
        references: Issue references such as ``"#12"``
        revert: Reverted commit, for revert commits
    """

    hash: str
    type: str | None = None
    scope: str | None = None
    subject: str | None = None
    header: str | None = None
    body: str | None = None
    notes: tuple[CommitNote, ...] = ()
    references: tuple[str, ...] = ()
    revert: RevertInfo | None = None

    def __post_init__(self) -> None:
        if not self.hash:
            raise CommitParseError(f"Commit without hash: {self.header!r}")

    @property
    def is_breaking(self) -> bool:
        """Whether the commit warrants a major bump."""
        if self.type and "!" in self.type:
            return True
        if any(note.title == BREAKING_NOTE for note in self.notes):
            return True
        if self.body:
            return any(BREAKING_LINE_PATTERN.search(line) for line in self.body.splitlines())
        return False

    @property
    def is_merge(self) -> bool:
        return self.type == MERGE_TYPE

    @property
    def is_feature(self) -> bool:
        return self.type == FEATURE_TYPE

    @property
    def is_fix(self) -> bool:
        return self.type == FIX_TYPE


def _feature_merge_subject(header: str) -> str:
    """Extract the feature name from a ``Merge branch 'feature/...'`` header."""
    start = header.index(FEATURE_MERGE_MARKER) + len(FEATURE_MERGE_MARKER)
    end = header.find(DEVELOP_MERGE_SUFFIX, start)
    if end == -1:
        # Merged into something other than develop; stop at the closing quote.
        end = header.find("'", start)
    if end == -1:
        end = len(header)
    return header[start:end]


def _parse_notes(lines: list[str]) -> tuple[CommitNote, ...]:
    notes: list[CommitNote] = []
    for line in lines:
        match = NOTE_PATTERN.match(line.strip())
        if match:
            notes.append(CommitNote(title=BREAKING_NOTE, text=match.group("text").strip()))
    return tuple(notes)


def parse_commit(raw: str) -> Commit | None:
    """Parse one raw ``<hash> <message>`` log entry.

    Args:
        raw: Entry as printed by ``git log --format='%h %B'``

    Returns:
        The parsed Commit, or None for an empty entry

    Raises:
        CommitParseError: If the entry does not start with a commit hash
    """
    text = raw.strip("\n")
    if not text.strip():
        return None

    lines = text.splitlines()
    header = lines[0].strip()
    body_lines = lines[1:]
    body = "\n".join(body_lines).strip() or None

    hash_match = HASH_PATTERN.match(header)
    if not hash_match:
        raise CommitParseError(f"Log entry does not start with a commit hash: {header!r}")

    message = text.strip()[len(hash_match.group("hash")) :].strip()
    notes = list(_parse_notes(body_lines))
    references = tuple(dict.fromkeys(f"#{num}" for num in REFERENCE_PATTERN.findall(message)))

    revert = None
    revert_match = REVERT_PATTERN.match(message)
    if revert_match:
        revert = RevertInfo(header=revert_match.group("header"), hash=revert_match.group("hash"))

    if FEATURE_MERGE_MARKER in header:
        return Commit(
            hash=header[:7],
            type=MERGE_TYPE,
            subject=_feature_merge_subject(header),
            header=header,
            body=body,
            notes=tuple(notes),
            references=references,
            revert=revert,
        )

    match = HEADER_PATTERN.match(header)
    if not match:
        return Commit(
            hash=hash_match.group("hash"),
            header=header,
            body=body,
            notes=tuple(notes),
            references=references,
            revert=revert,
        )

    subject = match.group("subject")
    if match.group("breaking") and not any(n.title == BREAKING_NOTE for n in notes):
        notes.insert(0, CommitNote(title=BREAKING_NOTE, text=subject))

    return Commit(
        hash=match.group("hash"),
        type=match.group("type") or None,
        scope=match.group("scope") or None,
        subject=subject,
        header=header,
        body=body,
        notes=tuple(notes),
        references=references,
        revert=revert,
    )


def parse_commits(raw_entries: Iterable[str], *, keep_untyped: bool = False) -> list[Commit]:
    """Parse raw log entries, keeping their order.

    Args:
        raw_entries: Entries as returned by ``GitRepository.get_commits``
        keep_untyped: Keep commits whose header is not conventional

    Returns:
        Parsed commits

    Raises:
        CommitParseError: If any entry is malformed
    """
    commits: list[Commit] = []
    for raw in raw_entries:
        commit = parse_commit(raw)
        if commit is None:
            continue
        if commit.type is None and not keep_untyped:
            continue
        commits.append(commit)
    return commits


def filter_by_type(commits: Iterable[Commit], commit_type: str) -> list[Commit]:
    """Return the commits of a given type."""
    return [c for c in commits if c.type == commit_type]


def unique_by_hash(commits: Iterable[Commit]) -> list[Commit]:
    """Drop repeated hashes, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Commit] = []
    for commit in commits:
        if commit.hash in seen:
            continue
        seen.add(commit.hash)
        unique.append(commit)
    return unique


def fetch_commits(
    repo: GitRepository,
    from_ref: str | None,
    to_ref: str,
    *,
    keep_untyped: bool = False,
) -> list[Commit]:
    """Read and parse the commits between two refs.

    Args:
        repo: Git repository
        from_ref: Exclusive start (tag or branch), None for the root commit
        to_ref: Inclusive end
        keep_untyped: Keep commits whose header is not conventional

    Returns:
        Parsed commits, oldest first; empty for an empty range

    Raises:
        GitError: If git fails
        CommitParseError: If any entry is malformed
    """
    return parse_commits(repo.get_commits(from_ref, to_ref), keep_untyped=keep_untyped)
