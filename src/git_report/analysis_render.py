from __future__ import annotations

from .models import AnalysisResult

YEAR_IN_REVIEW_BANNER = r"""
+------------------------------------------------------------------------+
|                              YEAR IN REVIEW                             |
+------------------------------------------------------------------------+
""".strip("\n")

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def fmt_int(n: int) -> str:
    return f"{int(n):,}"


def trunc(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 1:
        return s[:max_len]
    return s[: max_len - 1] + "…"


def bar(value: int, max_value: int, width: int = 22) -> str:
    if max_value <= 0:
        filled = 0
    else:
        filled = int(round((value / max_value) * width))
    filled = max(0, min(width, filled))
    return "[" + ("#" * filled) + ("-" * (width - filled)) + "]"


def render_summary(result: AnalysisResult, *, author: str, label: str, top_n: int = 10) -> str:
    lines: list[str] = []
    lines.append(YEAR_IN_REVIEW_BANNER)
    lines.append("")
    lines.append(f"YEAR IN REVIEW: {label}" + (f" - {author}" if author else ""))
    lines.append(f"{result.persona.title}: {result.persona.description}")
    lines.append("")

    lines.append("Totals")
    lines.append("-" * 72)
    lines.append(f"Commits:        {fmt_int(result.total_commits):>12}")
    lines.append(f"Insertions:     {fmt_int(result.total_insertions):>12}")
    lines.append(f"Deletions:      {fmt_int(result.total_deletions):>12}")
    lines.append(f"Net lines:      {fmt_int(result.net_lines):>12}")
    lines.append(
        f"Streaks:        longest {result.streak_stats.longest_streak} days, "
        f"current {result.streak_stats.current_streak} days, "
        f"active {result.streak_stats.total_active_days} days"
    )
    if result.total_projects > 1:
        lines.append(f"Projects:       {result.active_projects} active of {result.total_projects}")
    lines.append("")

    lines.append("Top languages (files touched)")
    lines.append("-" * 72)
    langs_sorted = sorted(result.language_stats.items(), key=lambda kv: (-kv[1].count, kv[0].lower()))
    max_count = langs_sorted[0][1].count if langs_sorted else 0
    for lang, st in langs_sorted[:top_n]:
        lines.append(f"{trunc(lang, 20):20} {fmt_int(st.count):>8} {st.percentage:>4}%  {bar(st.count, max_count)}")
    if not langs_sorted:
        lines.append("(no file changes detected)")
    lines.append("")

    lines.append("Commits by hour")
    lines.append("-" * 72)
    by_hour = result.time_stats.by_hour
    max_hour = max(by_hour.values(), default=0)
    for hour in range(24):
        n = by_hour.get(hour, 0)
        if n:
            lines.append(f"{hour:02d}:00 {fmt_int(n):>8}  {bar(n, max_hour)}")
    if not by_hour:
        lines.append("(no commits)")
    lines.append("")

    lines.append("Commits by weekday")
    lines.append("-" * 72)
    by_day = result.time_stats.by_day_of_week
    max_day = max(by_day.values(), default=0)
    for day, name in enumerate(DAY_NAMES):
        n = by_day.get(day, 0)
        lines.append(f"{name}   {fmt_int(n):>8}  {bar(n, max_day)}")
    lines.append("")

    if len(result.project_stats) > 1:
        lines.append("Projects (commits)")
        lines.append("-" * 72)
        projects = sorted(result.project_stats, key=lambda p: (-p.commits, p.name.lower()))
        max_commits = projects[0].commits if projects else 0
        for p in projects[:top_n]:
            lines.append(f"{trunc(p.name, 30):30} {fmt_int(p.commits):>8}  {bar(p.commits, max_commits)}")
        lines.append("")

    lines.append("Top keywords")
    lines.append("-" * 72)
    if result.top_keywords:
        lines.append(", ".join(f"{k.word} ({k.count})" for k in result.top_keywords[:top_n]))
    else:
        lines.append("(no keywords)")
    lines.append("")

    lines.append("Achievements")
    lines.append("-" * 72)
    for a in result.achievements:
        suffix = f" [{a.progress}]" if a.progress else ""
        lines.append(f"{a.icon} {a.name}: {a.description}{suffix}")
    if not result.achievements:
        lines.append("(none unlocked yet)")

    return "\n".join(lines) + "\n"
