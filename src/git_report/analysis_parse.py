"""
Parser for `git log --numstat --format=%H%n%aI%n%s%n%aN%n%aE` output.

Each record is a five line header (id, ISO timestamp, subject, author name,
author email), optional blank lines, then zero or more numstat lines
(`insertions<TAB>deletions<TAB>path`). There is no explicit separator between
records: a line that looks like a commit id ends the current record.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum
import string
from collections.abc import Callable, Iterable, Mapping

from .analysis_paths import EXTENSION_LANGUAGES, dominant_language, normalize_numstat_path
from .models import Commit

HEADER_LINES = 5
COMMIT_ID_LENGTH = 40

_HEX = frozenset(string.hexdigits)


def looks_like_commit_id(line: str, id_length: int = COMMIT_ID_LENGTH) -> bool:
    if len(line) != id_length or "\t" in line:
        return False
    return all(ch in _HEX for ch in line)


def parse_timestamp(value: str) -> dt.datetime | None:
    s = (value or "").strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        d = dt.datetime.fromisoformat(s)
    except ValueError:
        return None
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return d


def _stat_value(s: str) -> int:
    # "-" marks a binary file
    try:
        return max(0, int(s))
    except ValueError:
        return 0


class ParseState(enum.Enum):
    META = "meta"
    STATS = "stats"


@dataclasses.dataclass
class PendingCommit:
    header: list[str] = dataclasses.field(default_factory=list)
    files: list[str] = dataclasses.field(default_factory=list)
    insertions: int = 0
    deletions: int = 0

    @property
    def header_complete(self) -> bool:
        return len(self.header) >= HEADER_LINES

    def add_stat(self, insertions: int, deletions: int, path: str) -> None:
        self.insertions += insertions
        self.deletions += deletions
        self.files.append(path)

    def build(self, languages: Mapping[str, str]) -> Commit | None:
        if not self.header_complete:
            return None
        sha, iso, subject, name, email = self.header[:HEADER_LINES]
        ts = parse_timestamp(iso)
        if ts is None:
            return None
        return Commit(
            hash=sha.strip(),
            timestamp=ts,
            subject=subject,
            author_name=name,
            author_email=email,
            files=tuple(self.files),
            insertions=self.insertions,
            deletions=self.deletions,
            language=dominant_language(self.files, languages),
        )


class LogParser:
    """Line-at-a-time state machine; call `feed` per line, then `finish`."""

    def __init__(
        self,
        *,
        languages: Mapping[str, str] = EXTENSION_LANGUAGES,
        exclude_path: Callable[[str], bool] | None = None,
        is_commit_id: Callable[[str], bool] = looks_like_commit_id,
    ) -> None:
        self.languages = languages
        self.exclude_path = exclude_path
        self.is_commit_id = is_commit_id
        self.state = ParseState.META
        self.pending: PendingCommit | None = None
        self.commits: list[Commit] = []
        self.skipped_lines = 0

    def feed(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if self.state is ParseState.STATS:
            self._feed_stats(line)
        else:
            self._feed_meta(line)

    def finish(self) -> list[Commit]:
        self._finalize()
        self.state = ParseState.META
        return self.commits

    def _feed_meta(self, line: str) -> None:
        if self.pending is None:
            if not line.strip():
                return
            self.pending = PendingCommit()
        self.pending.header.append(line)
        if self.pending.header_complete:
            self.state = ParseState.STATS

    def _feed_stats(self, line: str) -> None:
        if not line.strip():
            return
        if self.is_commit_id(line):
            self._finalize()
            self.state = ParseState.META
            self._feed_meta(line)
            return
        parts = line.split("\t")
        if len(parts) != 3:
            self.skipped_lines += 1
            return
        path = normalize_numstat_path(parts[2])
        if self.exclude_path is not None and path and self.exclude_path(path):
            return
        assert self.pending is not None
        self.pending.add_stat(_stat_value(parts[0]), _stat_value(parts[1]), path)

    def _finalize(self) -> None:
        pending = self.pending
        self.pending = None
        if pending is None or not pending.header_complete:
            return
        commit = pending.build(self.languages)
        if commit is None:
            self.skipped_lines += HEADER_LINES
            return
        self.commits.append(commit)


def parse_log_lines(
    lines: Iterable[str],
    *,
    languages: Mapping[str, str] = EXTENSION_LANGUAGES,
    exclude_path: Callable[[str], bool] | None = None,
) -> list[Commit]:
    parser = LogParser(languages=languages, exclude_path=exclude_path)
    for line in lines:
        parser.feed(line)
    return parser.finish()


def parse_log(
    text: str,
    *,
    languages: Mapping[str, str] = EXTENSION_LANGUAGES,
    exclude_path: Callable[[str], bool] | None = None,
) -> list[Commit]:
    return parse_log_lines(text.split("\n"), languages=languages, exclude_path=exclude_path)
