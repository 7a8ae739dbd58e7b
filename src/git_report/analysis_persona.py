from __future__ import annotations

import dataclasses

from .analysis_paths import OTHER_LANGUAGE, UNKNOWN_LANGUAGE
from .models import AnalysisResult, Persona

LATE_HOURS = (22, 23, 0, 1, 2, 3, 4)


@dataclasses.dataclass(frozen=True)
class PersonaInputs:
    total_commits: int = 0
    net_lines: int = 0
    longest_streak: int = 0
    top_language: str = ""
    deletion_ratio: float = 0.0
    late_commits: int = 0


def top_language(result: AnalysisResult) -> str:
    best = ""
    best_count = 0
    for lang, st in result.language_stats.items():
        if lang in (OTHER_LANGUAGE, UNKNOWN_LANGUAGE):
            continue
        if st.count > best_count:
            best, best_count = lang, st.count
    return best


def persona_inputs(result: AnalysisResult) -> PersonaInputs:
    ratio = result.total_deletions / result.total_insertions if result.total_insertions > 0 else 0.0
    return PersonaInputs(
        total_commits=result.total_commits,
        net_lines=result.net_lines,
        longest_streak=result.streak_stats.longest_streak,
        top_language=top_language(result),
        deletion_ratio=ratio,
        late_commits=sum(result.time_stats.by_hour.get(h, 0) for h in LATE_HOURS),
    )


def classify_persona(inputs: PersonaInputs) -> str:
    if inputs.total_commits <= 0:
        return "newcomer"
    if inputs.late_commits >= 10 and inputs.late_commits * 100 >= inputs.total_commits * 40:
        return "night_owl"
    if inputs.total_commits >= 20 and inputs.deletion_ratio >= 0.8:
        return "sculptor"
    if inputs.longest_streak >= 30:
        return "marathoner"
    if inputs.total_commits >= 1000:
        return "machine"
    if inputs.net_lines >= 50_000:
        return "architect"
    if inputs.top_language:
        return "specialist"
    return "steady"


PERSONA_TEMPLATES: dict[str, tuple[str, str]] = {
    "newcomer": ("The Quiet Observer", "No commits in this period yet. Every streak starts with a single commit."),
    "night_owl": (
        "The Night Owl",
        "{late_commits} of your {total_commits} commits landed after 10pm. The best code is written while the world sleeps.",
    ),
    "sculptor": (
        "The Code Sculptor",
        "You deleted {ratio_pct}% as many lines as you added. Less code, better code.",
    ),
    "marathoner": (
        "The Marathon Runner",
        "A {longest_streak}-day streak shows remarkable consistency.",
    ),
    "machine": (
        "The Commit Machine",
        "{total_commits} commits. Shipping is a habit, not an event.",
    ),
    "architect": (
        "The Architect",
        "Net {net_lines} new lines of code. You build things that last.",
    ),
    "specialist": (
        "The {top_language} Specialist",
        "Most of your {total_commits} commits touched {top_language}. Depth over breadth.",
    ),
    "steady": (
        "The Steady Builder",
        "{total_commits} commits of steady, reliable progress.",
    ),
    "multi_project": (
        "The Multi-Project Maestro",
        "You kept {active_projects} of {total_projects} projects moving with {total_commits} commits.",
    ),
}


def persona_text(
    key: str,
    inputs: PersonaInputs,
    *,
    templates: dict[str, tuple[str, str]] = PERSONA_TEMPLATES,
    **extra: int,
) -> Persona:
    title_tpl, desc_tpl = templates.get(key, templates["steady"])
    fields = {
        "total_commits": f"{inputs.total_commits:,}",
        "net_lines": f"{inputs.net_lines:,}",
        "longest_streak": inputs.longest_streak,
        "top_language": inputs.top_language or "Code",
        "ratio_pct": int(round(inputs.deletion_ratio * 100)),
        "late_commits": f"{inputs.late_commits:,}",
        **extra,
    }
    return Persona(title=title_tpl.format(**fields), description=desc_tpl.format(**fields))


def persona_for(result: AnalysisResult) -> Persona:
    inputs = persona_inputs(result)
    return persona_text(classify_persona(inputs), inputs)


def multi_project_persona(result: AnalysisResult, total_projects: int, active_projects: int) -> Persona:
    inputs = persona_inputs(result)
    return persona_text("multi_project", inputs, total_projects=total_projects, active_projects=active_projects)
