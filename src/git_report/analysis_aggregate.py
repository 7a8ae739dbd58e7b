from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Iterable, Mapping
from typing import TypeVar

from .analysis_achievements import achievement_facts, evaluate_achievements, project_milestones
from .analysis_persona import multi_project_persona, persona_for
from .analysis_stats import language_percentages, rank_keywords, streak_stats, trend_series
from .analysis_tables import DEFAULT_TABLES, AnalysisTables
from .models import (
    AnalysisResult,
    CommitSignals,
    CommitTrends,
    ProjectSummary,
    TimeStats,
    TrendPoint,
    empty_punch_card,
)

K = TypeVar("K")

MULTI_PROJECT_PERSONA_THRESHOLD = 5


@dataclasses.dataclass(frozen=True)
class ProjectInput:
    result: AnalysisResult
    path: str
    name: str


def merge_counts(dst: dict[K, int], src: Mapping[K, int]) -> None:
    for key, n in src.items():
        dst[key] = int(dst.get(key, 0)) + int(n)


def merge_punch_cards(cards: Iterable[tuple[tuple[int, ...], ...]]) -> tuple[tuple[int, ...], ...]:
    grid = [list(row) for row in empty_punch_card()]
    for card in cards:
        for day, row in enumerate(card):
            for hour, n in enumerate(row):
                grid[day][hour] += int(n)
    return tuple(tuple(row) for row in grid)


def merge_trend(series: Iterable[Iterable[TrendPoint]]) -> tuple[TrendPoint, ...]:
    counts: dict[str, int] = {}
    for points in series:
        merge_counts(counts, {p.date: p.count for p in points})
    return trend_series(counts)


def merge_signals(signals: Iterable[CommitSignals]) -> CommitSignals:
    fix = 0
    refactor = 0
    markdown = 0
    keywords: dict[str, int] = {}
    for s in signals:
        fix += s.fix_commits
        refactor += s.refactor_commits
        markdown += s.markdown_commits
        merge_counts(keywords, s.keyword_counts)
    return CommitSignals(fix_commits=fix, refactor_commits=refactor, markdown_commits=markdown, keyword_counts=keywords)


def merge_results(
    projects: list[ProjectInput],
    *,
    tables: AnalysisTables = DEFAULT_TABLES,
    today: dt.date | None = None,
) -> AnalysisResult:
    """
    Combine per-repository results into one. Streaks, keywords and the
    message-based achievements are recomputed from the merged daily series and
    signals, so they match what a single analysis over all commits would give.
    """
    results = [p.result for p in projects]

    languages: dict[str, int] = {}
    by_hour: dict[int, int] = {}
    by_day: dict[int, int] = {}
    by_month: dict[str, int] = {}
    for r in results:
        merge_counts(languages, {lang: st.count for lang, st in r.language_stats.items()})
        merge_counts(by_hour, r.time_stats.by_hour)
        merge_counts(by_day, r.time_stats.by_day_of_week)
        merge_counts(by_month, r.time_stats.by_month)

    daily = merge_trend(r.commit_trends.daily for r in results)
    monthly = merge_trend(r.commit_trends.monthly for r in results)
    signals = merge_signals(r.signals for r in results)
    insertions = sum(r.total_insertions for r in results)
    deletions = sum(r.total_deletions for r in results)

    total_projects = len(projects)
    active_projects = sum(1 for r in results if r.total_commits > 0)

    merged = AnalysisResult(
        total_commits=sum(r.total_commits for r in results),
        total_insertions=insertions,
        total_deletions=deletions,
        net_lines=insertions - deletions,
        language_stats=language_percentages(languages),
        time_stats=TimeStats(by_hour=by_hour, by_day_of_week=by_day, by_month=by_month),
        streak_stats=streak_stats((dt.date.fromisoformat(p.date) for p in daily), today),
        project_stats=tuple(
            ProjectSummary(
                path=p.path,
                name=p.name,
                commits=p.result.total_commits,
                lines=p.result.total_insertions + p.result.total_deletions,
            )
            for p in projects
        ),
        commit_trends=CommitTrends(daily=daily, monthly=monthly),
        punch_card=merge_punch_cards(r.punch_card for r in results),
        top_keywords=rank_keywords(signals.keyword_counts, tables.keyword_limit),
        signals=signals,
        total_projects=total_projects,
        active_projects=active_projects,
    )

    achievements = evaluate_achievements(achievement_facts(merged), tables.achievements)
    achievements.extend(project_milestones(total_projects, active_projects))
    if total_projects >= MULTI_PROJECT_PERSONA_THRESHOLD:
        persona = multi_project_persona(merged, total_projects, active_projects)
    else:
        persona = persona_for(merged)
    return dataclasses.replace(merged, achievements=tuple(achievements), persona=persona)
