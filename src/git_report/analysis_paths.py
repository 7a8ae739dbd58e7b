from __future__ import annotations

import fnmatch
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from pathlib import PurePosixPath
from types import MappingProxyType

EXTENSION_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        ".py": "Python",
        ".ipynb": "Jupyter",
        ".js": "JavaScript",
        ".jsx": "JavaScript",
        ".mjs": "JavaScript",
        ".cjs": "JavaScript",
        ".ts": "TypeScript",
        ".tsx": "TypeScript",
        ".vue": "Vue",
        ".java": "Java",
        ".kt": "Kotlin",
        ".swift": "Swift",
        ".dart": "Dart",
        ".go": "Go",
        ".rs": "Rust",
        ".php": "PHP",
        ".rb": "Ruby",
        ".cs": "C#",
        ".c": "C",
        ".h": "C/C++ Headers",
        ".cpp": "C++",
        ".hpp": "C++",
        ".m": "Objective-C",
        ".mm": "Objective-C++",
        ".scala": "Scala",
        ".sql": "SQL",
        ".tf": "Terraform",
        ".yml": "YAML",
        ".yaml": "YAML",
        ".json": "JSON",
        ".toml": "TOML",
        ".ini": "INI",
        ".xml": "XML",
        ".proto": "Protobuf",
        ".gradle": "Gradle",
        ".md": "Markdown",
        ".markdown": "Markdown",
        ".rst": "reStructuredText",
        ".html": "HTML",
        ".htm": "HTML",
        ".css": "CSS",
        ".scss": "SCSS",
        ".sass": "Sass",
        ".less": "Less",
        ".sh": "Shell",
        ".bash": "Shell",
        ".zsh": "Shell",
        ".ps1": "PowerShell",
        ".bat": "Batch",
    }
)

OTHER_LANGUAGE = "Other"
UNKNOWN_LANGUAGE = "Unknown"

_GLOB_CHARS = ("*", "?", "[")


def split_exclude_paths(entries: Iterable[str]) -> tuple[list[str], list[str]]:
    prefixes: list[str] = []
    globs: list[str] = []
    for e in entries:
        e = (e or "").strip()
        if not e:
            continue
        if any(ch in e for ch in _GLOB_CHARS):
            globs.append(e)
        else:
            prefixes.append(e)
    return prefixes, globs


def should_exclude_path(path: str, exclude_prefixes: list[str], exclude_globs: list[str]) -> bool:
    p = path.replace("\\", "/").lstrip("./")
    for pref in exclude_prefixes:
        pr = (pref or "").replace("\\", "/").lstrip("./")
        if not pr:
            continue
        if not pr.endswith("/"):
            pr = pr + "/"
        if p.startswith(pr) or f"/{pr}" in p:
            return True
    base = p.rsplit("/", 1)[-1]
    for pat in exclude_globs:
        if pat and (fnmatch.fnmatch(p, pat) or fnmatch.fnmatch(base, pat)):
            return True
    return False


def normalize_numstat_path(path: str) -> str:
    p = path.strip()
    # `git log --numstat` may render renames like: src/{old => new}/file.py or old.py => new.py
    if " => " not in p:
        return p
    start = p.find("{")
    end = p.find("}", start + 1)
    if start != -1 and end != -1:
        new = p[start + 1 : end].split(" => ")[-1]
        return (p[:start] + new + p[end + 1 :]).replace("//", "/").strip()
    return p.split(" => ")[-1].strip()


def extension_for_path(path: str) -> str:
    base = path.replace("\\", "/").rsplit("/", 1)[-1]
    return PurePosixPath(base).suffix.lower()


def language_for_path(path: str, table: Mapping[str, str] = EXTENSION_LANGUAGES) -> str:
    return table.get(extension_for_path(path), OTHER_LANGUAGE)


def dominant_language(files: Iterable[str], table: Mapping[str, str] = EXTENSION_LANGUAGES) -> str:
    """
    Language of the most frequent extension among `files`.
    Ties go to the extension seen first; no files -> "Unknown".
    """
    counts: Counter[str] = Counter(extension_for_path(f) for f in files)
    if not counts:
        return UNKNOWN_LANGUAGE
    best_ext = ""
    best_count = 0
    for ext, n in counts.items():
        if n > best_count:
            best_ext, best_count = ext, n
    return table.get(best_ext, OTHER_LANGUAGE)


def path_excluder(entries: Iterable[str]) -> Callable[[str], bool] | None:
    prefixes, globs = split_exclude_paths(entries)
    if not prefixes and not globs:
        return None

    def exclude(path: str) -> bool:
        return should_exclude_path(path, prefixes, globs)

    return exclude
