from __future__ import annotations

import datetime as dt
import json
import subprocess
import sys
from pathlib import Path

from .git import run_git

CONFIG_FILE_NAMES = ("git-report.json", ".git-report.json")
THEMES = ("light", "dark", "colorful")
FORMATS = ("json", "text")

DEFAULT_CONFIG: dict = {
    "author": "",
    "authors": [],
    "repositories_dir": "",
    "theme": "dark",
    "output": "./reports",
    "formats": ["json", "text"],
    "include_merges": False,
    "exclude_paths": ["node_modules", "*.min.js", "dist", "build"],
    "date_range": None,
    "exclude_commits": [],
}


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    return json.loads(config_path.read_text(encoding="utf-8"))


def save_config(config_path: Path, config: dict) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def merge_with_defaults(user_config: dict) -> dict:
    config = json.loads(json.dumps(DEFAULT_CONFIG))
    config.update(user_config or {})
    authors = [str(a).strip() for a in (config.get("authors") or []) if str(a).strip()]
    # `email` is the older single-author key
    email = str((user_config or {}).get("email", "") or "").strip()
    if email and not authors:
        authors = [email]
    config["authors"] = authors
    config.pop("email", None)
    return config


def find_config(config_path: Path | None, cwd: Path | None = None) -> Path | None:
    if config_path is not None:
        if config_path.exists():
            return config_path
        print(f"Warning: config file not found: {config_path}", file=sys.stderr)
    base = cwd if cwd is not None else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def resolve_config(config_path: Path | None, cwd: Path | None = None) -> dict:
    found = find_config(config_path, cwd)
    if found is None:
        return merge_with_defaults({})
    return merge_with_defaults(load_config(found))


def validate_config(config: dict) -> list[str]:
    errors: list[str] = []
    theme = config.get("theme")
    if theme not in THEMES:
        errors.append(f"invalid theme: {theme!r} (expected one of {', '.join(THEMES)})")
    formats = config.get("formats")
    if not isinstance(formats, list) or not formats:
        errors.append("formats must be a non-empty list")
    else:
        for fmt in formats:
            if fmt not in FORMATS:
                errors.append(f"invalid format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    output = config.get("output")
    if not isinstance(output, str) or not output.strip():
        errors.append("output must be a non-empty path")
    if not isinstance(config.get("exclude_paths"), list):
        errors.append("exclude_paths must be a list")
    if not isinstance(config.get("exclude_commits"), list):
        errors.append("exclude_commits must be a list")
    date_range = config.get("date_range")
    if date_range is not None:
        errors.extend(_date_range_errors(date_range))
    return errors


def _date_range_errors(date_range: object) -> list[str]:
    if not (isinstance(date_range, dict) and date_range.get("from") and date_range.get("to")):
        return ["date_range must be an object with 'from' and 'to'"]
    bounds: dict[str, dt.date] = {}
    errors: list[str] = []
    for key in ("from", "to"):
        value = str(date_range[key]).strip()
        try:
            bounds[key] = dt.date.fromisoformat(value)
        except ValueError:
            errors.append(f"date_range.{key} is not a YYYY-MM-DD date: {value!r}")
    if not errors and bounds["to"] < bounds["from"]:
        errors.append(f"date_range ends before it starts: {bounds['from']} > {bounds['to']}")
    return errors


def infer_me() -> tuple[list[str], list[str]]:
    emails: list[str] = []
    names: list[str] = []

    code, out, _ = run_git(["config", "--global", "--get", "user.email"], cwd=Path.cwd())
    if code == 0 and out.strip():
        emails.append(out.strip())

    code, out, _ = run_git(["config", "--global", "--get", "user.name"], cwd=Path.cwd())
    if code == 0 and out.strip():
        names.append(out.strip())

    return emails, names


def write_sample_config(config_path: Path) -> dict:
    """Write a starter config, prefilled with the global git identity when there is one."""
    config = json.loads(json.dumps(DEFAULT_CONFIG))
    try:
        emails, names = infer_me()
    except (OSError, subprocess.SubprocessError):
        emails, names = [], []
    config["authors"] = emails
    config["author"] = names[0] if names else ""
    config["date_range"] = None
    config["exclude_commits"] = ["Merge pull request", "Update dependencies"]
    save_config(config_path, config)
    return config
