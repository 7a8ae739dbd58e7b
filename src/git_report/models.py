from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class Commit:
    hash: str
    timestamp: dt.datetime
    subject: str
    author_name: str
    author_email: str
    files: tuple[str, ...] = ()
    insertions: int = 0
    deletions: int = 0
    language: str = "Unknown"

    @property
    def changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def day_of_week(self) -> int:
        # 0 = Sunday ... 6 = Saturday
        return (self.timestamp.weekday() + 1) % 7


@dataclasses.dataclass(frozen=True)
class LanguageStat:
    count: int = 0
    percentage: int = 0


@dataclasses.dataclass(frozen=True)
class TimeStats:
    by_hour: dict[int, int] = dataclasses.field(default_factory=dict)
    by_day_of_week: dict[int, int] = dataclasses.field(default_factory=dict)  # 0 = Sunday
    by_month: dict[str, int] = dataclasses.field(default_factory=dict)  # YYYY-MM


@dataclasses.dataclass(frozen=True)
class StreakStats:
    longest_streak: int = 0
    current_streak: int = 0
    total_active_days: int = 0


@dataclasses.dataclass(frozen=True)
class ProjectSummary:
    path: str
    name: str
    commits: int = 0
    lines: int = 0  # insertions + deletions


@dataclasses.dataclass(frozen=True)
class TrendPoint:
    date: str
    count: int


@dataclasses.dataclass(frozen=True)
class CommitTrends:
    daily: tuple[TrendPoint, ...] = ()  # YYYY-MM-DD, ascending
    monthly: tuple[TrendPoint, ...] = ()  # YYYY-MM, ascending


@dataclasses.dataclass(frozen=True)
class KeywordCount:
    word: str
    count: int


@dataclasses.dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False
    progress: str | None = None  # "current/target"


@dataclasses.dataclass(frozen=True)
class Persona:
    title: str
    description: str


@dataclasses.dataclass(frozen=True)
class CommitSignals:
    """Per-commit facts kept after aggregation so merged results stay exact."""

    fix_commits: int = 0
    refactor_commits: int = 0
    markdown_commits: int = 0
    keyword_counts: dict[str, int] = dataclasses.field(default_factory=dict)  # first-seen order


def empty_punch_card() -> tuple[tuple[int, ...], ...]:
    return tuple(tuple(0 for _ in range(24)) for _ in range(7))


@dataclasses.dataclass(frozen=True)
class AnalysisResult:
    total_commits: int = 0
    total_insertions: int = 0
    total_deletions: int = 0
    net_lines: int = 0
    language_stats: dict[str, LanguageStat] = dataclasses.field(default_factory=dict)
    time_stats: TimeStats = dataclasses.field(default_factory=TimeStats)
    streak_stats: StreakStats = dataclasses.field(default_factory=StreakStats)
    project_stats: tuple[ProjectSummary, ...] = ()
    commit_trends: CommitTrends = dataclasses.field(default_factory=CommitTrends)
    punch_card: tuple[tuple[int, ...], ...] = dataclasses.field(default_factory=empty_punch_card)  # [day][hour]
    top_keywords: tuple[KeywordCount, ...] = ()
    achievements: tuple[Achievement, ...] = ()
    persona: Persona = dataclasses.field(default_factory=lambda: Persona(title="", description=""))
    signals: CommitSignals = dataclasses.field(default_factory=CommitSignals)
    total_projects: int = 1
    active_projects: int = 0


@dataclasses.dataclass(frozen=True)
class LogFilters:
    since: str = ""  # passed to git log --since
    until: str = ""  # passed to git log --before (exclusive)
    authors: tuple[str, ...] = ()
    include_merges: bool = False
