from __future__ import annotations

import datetime as dt

from git_report.analysis_paths import dominant_language
from git_report.analysis_stats import (
    analyze_commits,
    commit_trends,
    keyword_counts,
    language_percentages,
    percent,
    punch_card,
    rank_keywords,
    streak_stats,
    subject_keywords,
    time_stats,
)


def test_percent_rounds_half_up() -> None:
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(1, 8) == 13  # 12.5
    assert percent(0, 5) == 0
    assert percent(3, 0) == 0


def test_language_percentages() -> None:
    stats = language_percentages({"Python": 3, "Go": 1})
    assert stats["Python"].count == 3
    assert stats["Python"].percentage == 75
    assert stats["Go"].percentage == 25
    assert language_percentages({}) == {}


def test_language_stats_count_files_including_other(commit_factory) -> None:
    commits = [
        commit_factory(dt.datetime(2025, 1, 6, 10), files=("a.py", "b.py", "Makefile"), n=1),
        commit_factory(dt.datetime(2025, 1, 6, 11), files=("c.py",), n=2),
    ]
    result = analyze_commits(commits, today=dt.date(2025, 2, 1))
    assert result.language_stats["Python"].count == 3
    assert result.language_stats["Other"].count == 1
    assert result.language_stats["Python"].percentage == 75


def test_sunday_is_day_zero(commit_factory) -> None:
    sunday = commit_factory(dt.datetime(2025, 1, 5, 9))
    saturday = commit_factory(dt.datetime(2025, 1, 11, 23))
    assert sunday.day_of_week == 0
    assert saturday.day_of_week == 6

    ts = time_stats([sunday, saturday])
    assert ts.by_day_of_week == {0: 1, 6: 1}
    assert ts.by_hour == {9: 1, 23: 1}
    assert ts.by_month == {"2025-01": 2}


def test_hours_use_recorded_offset(commit_factory) -> None:
    tz = dt.timezone(dt.timedelta(hours=-7))
    c = commit_factory(dt.datetime(2025, 3, 1, 23, 30, tzinfo=tz))
    assert time_stats([c]).by_hour == {23: 1}
    assert commit_trends([c]).daily[0].date == "2025-03-01"


def test_punch_card_sums_to_commit_count(commit_factory) -> None:
    commits = [commit_factory(dt.datetime(2025, 1, 1, 0) + dt.timedelta(hours=7 * i), n=i) for i in range(50)]
    card = punch_card(commits)
    assert len(card) == 7
    assert all(len(row) == 24 for row in card)
    assert sum(sum(row) for row in card) == 50


def test_streak_of_eight_days() -> None:
    days = [dt.date(2025, 4, 1) + dt.timedelta(days=i) for i in range(8)]
    days += [dt.date(2025, 4, 20), dt.date(2025, 4, 21)]
    s = streak_stats(days, today=dt.date(2025, 5, 1))
    assert s.longest_streak == 8
    assert s.current_streak == 0
    assert s.total_active_days == 10


def test_current_streak_counts_back_from_today() -> None:
    today = dt.date(2025, 6, 10)
    days = [today, today - dt.timedelta(days=1), today - dt.timedelta(days=2), today - dt.timedelta(days=5)]
    s = streak_stats(days, today=today)
    assert s.current_streak == 3
    assert s.longest_streak == 3
    assert s.total_active_days == 4


def test_duplicate_days_count_once() -> None:
    d = dt.date(2025, 1, 1)
    s = streak_stats([d, d, d], today=dt.date(2025, 3, 1))
    assert s.longest_streak == 1
    assert s.total_active_days == 1


def test_zero_commits() -> None:
    result = analyze_commits([], today=dt.date(2025, 1, 1))
    assert result.total_commits == 0
    assert result.net_lines == 0
    assert result.language_stats == {}
    assert result.streak_stats.longest_streak == 0
    assert result.streak_stats.current_streak == 0
    assert result.top_keywords == ()
    assert result.achievements == ()
    assert result.active_projects == 0
    assert result.persona.title == "The Quiet Observer"


def test_commit_language_uses_dominant_extension() -> None:
    assert dominant_language(["a.ts", "b.py", "c.ts"]) == "TypeScript"
    assert dominant_language(["a.go", "b.rs"]) == "Go"  # tie: first seen
    assert dominant_language(["README"]) == "Other"
    assert dominant_language([]) == "Unknown"


def test_subject_keywords() -> None:
    assert subject_keywords("Fix: the Parser, add caching!") == ["parser", "caching"]
    assert subject_keywords("UI ok") == []


def test_keywords_are_ranked_stably(commit_factory) -> None:
    commits = [
        commit_factory(dt.datetime(2025, 1, 1), subject="parser speedup", n=1),
        commit_factory(dt.datetime(2025, 1, 2), subject="cache layer", n=2),
        commit_factory(dt.datetime(2025, 1, 3), subject="parser cache", n=3),
    ]
    counts = keyword_counts(commits)
    assert counts == {"parser": 2, "speedup": 1, "cache": 2, "layer": 1}
    ranked = rank_keywords(counts, limit=3)
    assert [(k.word, k.count) for k in ranked] == [("parser", 2), ("cache", 2), ("speedup", 1)]


def test_keywords_limited_to_twenty(commit_factory) -> None:
    words = " ".join(f"word{chr(97 + i)}x" for i in range(26))
    result = analyze_commits([commit_factory(dt.datetime(2025, 1, 1), subject=words)], today=dt.date(2025, 2, 1))
    assert len(result.top_keywords) == 20


def test_thirty_one_fix_commits_unlock_bug_hunter(commit_factory) -> None:
    commits = [
        commit_factory(dt.datetime(2025, 1, 1) + dt.timedelta(days=i * 3), subject=f"fix crash #{i}", n=i)
        for i in range(31)
    ]
    result = analyze_commits(commits, today=dt.date(2025, 12, 31))
    ids = {a.id for a in result.achievements}
    assert "bug_hunter" in ids
    assert result.signals.fix_commits == 31
    bug = next(a for a in result.achievements if a.id == "bug_hunter")
    assert bug.progress == "30/30"


def test_trends_are_sorted(commit_factory) -> None:
    commits = [
        commit_factory(dt.datetime(2025, 3, 2, 10), n=1),
        commit_factory(dt.datetime(2025, 1, 9, 10), n=2),
        commit_factory(dt.datetime(2025, 3, 2, 12), n=3),
    ]
    trends = commit_trends(commits)
    assert [(p.date, p.count) for p in trends.daily] == [("2025-01-09", 1), ("2025-03-02", 2)]
    assert [(p.date, p.count) for p in trends.monthly] == [("2025-01", 1), ("2025-03", 2)]


def test_single_repo_project_stats(commit_factory) -> None:
    commits = [commit_factory(dt.datetime(2025, 1, 1), insertions=5, deletions=2)]
    result = analyze_commits(commits, project_path="/src/demo", today=dt.date(2025, 2, 1))
    (p,) = result.project_stats
    assert p.name == "demo"
    assert p.commits == 1
    assert p.lines == 7
    assert result.total_projects == 1
    assert result.active_projects == 1
