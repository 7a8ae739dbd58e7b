from __future__ import annotations

import dataclasses
from collections.abc import Mapping

from .analysis_achievements import DEFAULT_ACHIEVEMENTS, AchievementRule
from .analysis_paths import EXTENSION_LANGUAGES

STOP_WORDS = frozenset(
    {
        # verbs that show up in nearly every subject line
        "fix", "fixed", "fixes", "add", "added", "adds", "update", "updated", "updates",
        "merge", "merged", "remove", "removed", "change", "changed", "changes", "bump",
        "use", "make", "move", "moved", "rename", "renamed", "revert", "improve",
        "refactor", "implement", "create", "delete", "set", "get", "wip",
        # filler
        "the", "and", "for", "with", "from", "into", "onto", "this", "that", "these",
        "not", "but", "are", "was", "were", "has", "have", "had", "its", "via", "when",
        "all", "any", "some", "new", "old", "more", "less", "now", "also", "than",
        "then", "out", "off", "too", "can", "should", "will", "pull", "request", "branch",
    }
)

FIX_WORDS = ("fix", "bug", "hotfix", "patch")
REFACTOR_WORDS = ("refactor", "cleanup", "clean up", "restructure")
MARKDOWN_EXTENSIONS = (".md", ".markdown")


@dataclasses.dataclass(frozen=True)
class AnalysisTables:
    """Static lookup data used by the aggregator; swap in tests as needed."""

    extension_languages: Mapping[str, str] = dataclasses.field(default_factory=lambda: EXTENSION_LANGUAGES)
    stop_words: frozenset[str] = STOP_WORDS
    fix_words: tuple[str, ...] = FIX_WORDS
    refactor_words: tuple[str, ...] = REFACTOR_WORDS
    markdown_extensions: tuple[str, ...] = MARKDOWN_EXTENSIONS
    keyword_limit: int = 20
    min_keyword_length: int = 3
    achievements: tuple[AchievementRule, ...] = DEFAULT_ACHIEVEMENTS


DEFAULT_TABLES = AnalysisTables()
