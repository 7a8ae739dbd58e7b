from __future__ import annotations

import dataclasses
import datetime as dt
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from .analysis_achievements import achievement_facts, evaluate_achievements
from .analysis_paths import language_for_path
from .analysis_persona import persona_for
from .analysis_tables import DEFAULT_TABLES, AnalysisTables
from .models import (
    AnalysisResult,
    Commit,
    CommitSignals,
    CommitTrends,
    KeywordCount,
    LanguageStat,
    ProjectSummary,
    StreakStats,
    TimeStats,
    TrendPoint,
)

_PUNCTUATION = re.compile(r"[^\w\s]+")


def percent(count: int, total: int) -> int:
    # half-up rounding; 0 when total is 0
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


def language_percentages(counts: Mapping[str, int]) -> dict[str, LanguageStat]:
    total = sum(counts.values())
    if total <= 0:
        return {}
    return {lang: LanguageStat(count=n, percentage=percent(n, total)) for lang, n in counts.items()}


def language_counts(commits: Iterable[Commit], languages: Mapping[str, str]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for c in commits:
        for f in c.files:
            counts[language_for_path(f, languages)] += 1
    return dict(counts)


def language_stats(commits: Iterable[Commit], tables: AnalysisTables = DEFAULT_TABLES) -> dict[str, LanguageStat]:
    return language_percentages(language_counts(commits, tables.extension_languages))


def time_stats(commits: Iterable[Commit]) -> TimeStats:
    by_hour: Counter[int] = Counter()
    by_day: Counter[int] = Counter()
    by_month: Counter[str] = Counter()
    for c in commits:
        by_hour[c.timestamp.hour] += 1
        by_day[c.day_of_week] += 1
        by_month[f"{c.timestamp.year:04d}-{c.timestamp.month:02d}"] += 1
    return TimeStats(by_hour=dict(by_hour), by_day_of_week=dict(by_day), by_month=dict(by_month))


def streak_stats(dates: Iterable[dt.date], today: dt.date | None = None) -> StreakStats:
    days = sorted(set(dates))
    if not days:
        return StreakStats()
    if today is None:
        today = dt.date.today()

    longest = 1
    run = 1
    for prev, cur in zip(days, days[1:]):
        if (cur - prev).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    active = set(days)
    current = 0
    day = today
    while day in active:
        current += 1
        day -= dt.timedelta(days=1)

    return StreakStats(longest_streak=longest, current_streak=current, total_active_days=len(days))


def commit_dates(commits: Iterable[Commit]) -> list[dt.date]:
    return [c.timestamp.date() for c in commits]


def trend_series(counts: Mapping[str, int]) -> tuple[TrendPoint, ...]:
    return tuple(TrendPoint(date=k, count=int(counts[k])) for k in sorted(counts))


def commit_trends(commits: Iterable[Commit]) -> CommitTrends:
    daily: Counter[str] = Counter()
    monthly: Counter[str] = Counter()
    for c in commits:
        day = c.timestamp.date().isoformat()
        daily[day] += 1
        monthly[day[:7]] += 1
    return CommitTrends(daily=trend_series(daily), monthly=trend_series(monthly))


def punch_card(commits: Iterable[Commit]) -> tuple[tuple[int, ...], ...]:
    grid = [[0] * 24 for _ in range(7)]
    for c in commits:
        grid[c.day_of_week][c.timestamp.hour] += 1
    return tuple(tuple(row) for row in grid)


def subject_keywords(subject: str, tables: AnalysisTables = DEFAULT_TABLES) -> list[str]:
    text = _PUNCTUATION.sub(" ", (subject or "").lower())
    return [w for w in text.split() if len(w) >= tables.min_keyword_length and w not in tables.stop_words]


def keyword_counts(commits: Iterable[Commit], tables: AnalysisTables = DEFAULT_TABLES) -> dict[str, int]:
    counts: dict[str, int] = {}
    for c in commits:
        for w in subject_keywords(c.subject, tables):
            counts[w] = counts.get(w, 0) + 1
    return counts


def rank_keywords(counts: Mapping[str, int], limit: int = 20) -> tuple[KeywordCount, ...]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return tuple(KeywordCount(word=w, count=n) for w, n in ranked[: max(0, limit)])


def _mentions(subject: str, words: Sequence[str]) -> bool:
    s = (subject or "").lower()
    return any(w in s for w in words)


def commit_signals(commits: Sequence[Commit], tables: AnalysisTables = DEFAULT_TABLES) -> CommitSignals:
    fix = 0
    refactor = 0
    markdown = 0
    for c in commits:
        if _mentions(c.subject, tables.fix_words):
            fix += 1
        if _mentions(c.subject, tables.refactor_words):
            refactor += 1
        if any(f.lower().endswith(tables.markdown_extensions) for f in c.files):
            markdown += 1
    return CommitSignals(
        fix_commits=fix,
        refactor_commits=refactor,
        markdown_commits=markdown,
        keyword_counts=keyword_counts(commits, tables),
    )


def with_achievements_and_persona(result: AnalysisResult, tables: AnalysisTables = DEFAULT_TABLES) -> AnalysisResult:
    achievements = evaluate_achievements(achievement_facts(result), tables.achievements)
    return dataclasses.replace(result, achievements=tuple(achievements), persona=persona_for(result))


def analyze_commits(
    commits: Sequence[Commit],
    *,
    project_path: str = "",
    project_name: str = "",
    tables: AnalysisTables = DEFAULT_TABLES,
    today: dt.date | None = None,
) -> AnalysisResult:
    insertions = sum(c.insertions for c in commits)
    deletions = sum(c.deletions for c in commits)
    signals = commit_signals(commits, tables)
    name = project_name or (Path(project_path).name if project_path else "")

    result = AnalysisResult(
        total_commits=len(commits),
        total_insertions=insertions,
        total_deletions=deletions,
        net_lines=insertions - deletions,
        language_stats=language_stats(commits, tables),
        time_stats=time_stats(commits),
        streak_stats=streak_stats(commit_dates(commits), today),
        project_stats=(ProjectSummary(path=project_path, name=name, commits=len(commits), lines=sum(c.changed for c in commits)),),
        commit_trends=commit_trends(commits),
        punch_card=punch_card(commits),
        top_keywords=rank_keywords(signals.keyword_counts, tables.keyword_limit),
        signals=signals,
        total_projects=1,
        active_projects=1 if commits else 0,
    )
    return with_achievements_and_persona(result, tables)
