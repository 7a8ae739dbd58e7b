from __future__ import annotations

import dataclasses
from collections.abc import Callable

from .analysis_paths import OTHER_LANGUAGE, UNKNOWN_LANGUAGE
from .models import Achievement, AnalysisResult

NIGHT_HOURS = range(0, 5)
EARLY_HOURS = range(5, 9)
MIDNIGHT_HOURS = range(0, 2)
WEEKEND_DAYS = (0, 6)  # Sunday, Saturday


@dataclasses.dataclass(frozen=True)
class AchievementFacts:
    total_commits: int = 0
    total_insertions: int = 0
    total_deletions: int = 0
    net_lines: int = 0
    longest_streak: int = 0
    active_days: int = 0
    language_count: int = 0
    night_commits: int = 0
    weekend_commits: int = 0
    early_commits: int = 0
    midnight_commits: int = 0
    max_day_commits: int = 0
    fix_commits: int = 0
    refactor_commits: int = 0
    markdown_commits: int = 0

    @property
    def mean_lines(self) -> float:
        if self.total_commits <= 0:
            return 0.0
        return (self.total_insertions + self.total_deletions) / self.total_commits

    @property
    def deletion_ratio(self) -> float:
        if self.total_insertions <= 0:
            return 0.0
        return self.total_deletions / self.total_insertions


def achievement_facts(result: AnalysisResult) -> AchievementFacts:
    by_hour = result.time_stats.by_hour
    by_day = result.time_stats.by_day_of_week
    languages = [lang for lang in result.language_stats if lang not in (OTHER_LANGUAGE, UNKNOWN_LANGUAGE)]
    return AchievementFacts(
        total_commits=result.total_commits,
        total_insertions=result.total_insertions,
        total_deletions=result.total_deletions,
        net_lines=result.net_lines,
        longest_streak=result.streak_stats.longest_streak,
        active_days=result.streak_stats.total_active_days,
        language_count=len(languages),
        night_commits=sum(by_hour.get(h, 0) for h in NIGHT_HOURS),
        weekend_commits=sum(by_day.get(d, 0) for d in WEEKEND_DAYS),
        early_commits=sum(by_hour.get(h, 0) for h in EARLY_HOURS),
        midnight_commits=sum(by_hour.get(h, 0) for h in MIDNIGHT_HOURS),
        max_day_commits=max((p.count for p in result.commit_trends.daily), default=0),
        fix_commits=result.signals.fix_commits,
        refactor_commits=result.signals.refactor_commits,
        markdown_commits=result.signals.markdown_commits,
    )


@dataclasses.dataclass(frozen=True)
class AchievementRule:
    """
    One catalogue entry. `description` is a format string receiving
    `value` (the metric) and `target`.
    """

    id: str
    name: str
    icon: str
    description: str
    target: float
    metric: Callable[[AchievementFacts], float]
    below: bool = False  # unlock when metric < target
    show_progress: bool = True

    def evaluate(self, facts: AchievementFacts) -> Achievement:
        value = self.metric(facts)
        if self.below:
            unlocked = facts.total_commits > 0 and value < self.target
        else:
            unlocked = value >= self.target
        progress = None
        if self.show_progress:
            progress = f"{min(int(value), int(self.target))}/{int(self.target)}"
        return Achievement(
            id=self.id,
            name=self.name,
            description=self.description.format(value=value, target=self.target),
            icon=self.icon,
            unlocked=unlocked,
            progress=progress,
        )


def _ratio_metric(facts: AchievementFacts) -> float:
    return facts.deletion_ratio


DEFAULT_ACHIEVEMENTS: tuple[AchievementRule, ...] = (
    AchievementRule("first_commit", "Hello, World", "🌱", "Made your first commit ({value:,} so far)", 1, lambda f: f.total_commits),
    AchievementRule("commits_100", "Centurion", "💯", "Reached {value:,} commits", 100, lambda f: f.total_commits),
    AchievementRule("commits_500", "Committed", "🚀", "Reached {value:,} commits", 500, lambda f: f.total_commits),
    AchievementRule("commits_1000", "Commit Machine", "🏆", "Reached {value:,} commits", 1000, lambda f: f.total_commits),
    AchievementRule("week_streak", "Week Warrior", "🔥", "Committed {value} days in a row", 7, lambda f: f.longest_streak),
    AchievementRule("polyglot", "Polyglot", "🌍", "Touched {value} different languages", 5, lambda f: f.language_count),
    AchievementRule("night_owl", "Night Owl", "🦉", "{value} commits between midnight and 5am", 20, lambda f: f.night_commits),
    AchievementRule("weekend_warrior", "Weekend Warrior", "🗡️", "{value} commits on weekends", 50, lambda f: f.weekend_commits),
    AchievementRule("early_bird", "Early Bird", "🐦", "{value} commits between 5am and 9am", 10, lambda f: f.early_commits),
    AchievementRule("midnight_coder", "Midnight Coder", "🌙", "{value} commits right after midnight", 10, lambda f: f.midnight_commits),
    AchievementRule("marathon_day", "Marathon Day", "⚡", "{value} commits in a single day", 10, lambda f: f.max_day_commits),
    AchievementRule("bug_hunter", "Bug Hunter", "🐛", "{value} bug fix commits", 30, lambda f: f.fix_commits),
    AchievementRule("refactor_master", "Refactor Master", "🔧", "{value} refactoring commits", 15, lambda f: f.refactor_commits),
    AchievementRule("documentarian", "Documentarian", "📚", "{value} commits touching Markdown docs", 20, lambda f: f.markdown_commits),
    AchievementRule(
        "small_steps",
        "Small Steps",
        "👣",
        "Averaged {value:.1f} lines per commit",
        50,
        lambda f: f.mean_lines,
        below=True,
        show_progress=False,
    ),
    AchievementRule("code_mountain", "Code Mountain", "⛰️", "Net {value:,} lines of code", 10_000, lambda f: f.net_lines),
    AchievementRule(
        "cleaner",
        "Cleaner",
        "🧹",
        "Deleted {value:.2f} lines for every line added",
        0.5,
        _ratio_metric,
        show_progress=False,
    ),
    AchievementRule("dedicated", "Dedicated", "📅", "Active on {value} days", 100, lambda f: f.active_days),
)


def evaluate_achievements(
    facts: AchievementFacts,
    rules: tuple[AchievementRule, ...] = DEFAULT_ACHIEVEMENTS,
    *,
    unlocked_only: bool = True,
) -> list[Achievement]:
    out: list[Achievement] = []
    for rule in rules:
        a = rule.evaluate(facts)
        if unlocked_only and not a.unlocked:
            continue
        out.append(a)
    return out


PROJECT_COUNT_THRESHOLDS = (5, 10, 20, 50)
ACTIVE_PROJECT_THRESHOLDS = (5, 10)


def project_milestones(total_projects: int, active_projects: int) -> list[Achievement]:
    """Unlocked milestones that only make sense across several repositories."""
    out: list[Achievement] = []
    for t in PROJECT_COUNT_THRESHOLDS:
        if total_projects >= t:
            out.append(
                Achievement(
                    id=f"projects_{t}",
                    name=f"{t} Projects",
                    description=f"Analyzed {total_projects} projects",
                    icon="🗂️",
                    unlocked=True,
                    progress=f"{t}/{t}",
                )
            )
    for t in ACTIVE_PROJECT_THRESHOLDS:
        if active_projects >= t:
            out.append(
                Achievement(
                    id=f"active_projects_{t}",
                    name=f"{t} Active Projects",
                    description=f"Committed to {active_projects} projects",
                    icon="🧩",
                    unlocked=True,
                    progress=f"{t}/{t}",
                )
            )
    if active_projects >= 1 and total_projects >= 3 and total_projects >= active_projects * 3:
        out.append(
            Achievement(
                id="focused",
                name="Focused",
                description=f"Concentrated on {active_projects} of {total_projects} projects",
                icon="🎯",
                unlocked=True,
            )
        )
    if total_projects == 1 and active_projects == 1:
        out.append(
            Achievement(
                id="loyal",
                name="Loyal Developer",
                description="Devoted the whole period to a single project",
                icon="💍",
                unlocked=True,
            )
        )
    return out
