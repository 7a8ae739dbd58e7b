from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .models import LogFilters

LOG_FORMAT = "%H%n%aI%n%s%n%aN%n%aE"
DISCOVERY_SKIP_DIRNAMES = frozenset({"node_modules"})


class GitLogError(RuntimeError):
    pass


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def build_log_args(filters: LogFilters) -> list[str]:
    args = ["log", "--numstat", f"--format={LOG_FORMAT}"]
    for author in filters.authors:
        author = (author or "").strip()
        if author:
            args.append(f"--author={author}")
    if filters.since:
        args.append(f"--since={filters.since}")
    if filters.until:
        args.append(f"--before={filters.until}")
    if not filters.include_merges:
        args.append("--no-merges")
    return args


def fetch_log(repo: Path, filters: LogFilters, timeout_s: int = 300) -> str:
    """Raw `git log --numstat` text for `repo`; raises GitLogError if git fails."""
    try:
        code, out, err = run_git(build_log_args(filters), cwd=repo, timeout_s=timeout_s)
    except (OSError, subprocess.SubprocessError) as e:
        raise GitLogError(f"failed to run git log in {repo}: {e}") from e
    if code != 0:
        raise GitLogError(f"git log exited {code} in {repo}: {err.strip()[:500]}")
    return out


def is_git_repo(path: Path) -> bool:
    return (path / ".git").exists()


def discover_git_roots(root: Path, max_depth: int = 3) -> list[Path]:
    """
    Repositories under `root` (including `root` itself), at most `max_depth`
    directories deep. Nested repositories below a found one are not returned.
    """
    roots: list[Path] = []

    def onerror(err: OSError) -> None:
        _ = err

    root = Path(root)
    base_depth = len(root.parts)
    for dirpath, dirnames, _filenames in os.walk(root, onerror=onerror):
        here = Path(dirpath)
        if is_git_repo(here):
            roots.append(here)
            dirnames[:] = []
            continue
        if len(here.parts) - base_depth >= max_depth:
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in DISCOVERY_SKIP_DIRNAMES)
    return roots
