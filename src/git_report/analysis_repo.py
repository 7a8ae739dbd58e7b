from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path

from .analysis_aggregate import ProjectInput, merge_results
from .analysis_parse import parse_log
from .analysis_paths import path_excluder
from .analysis_stats import analyze_commits
from .analysis_tables import DEFAULT_TABLES, AnalysisTables
from .git import GitLogError, fetch_log
from .models import AnalysisResult, Commit, LogFilters


def exclude_commits_by_subject(commits: list[Commit], patterns: list[str]) -> list[Commit]:
    pats = [p.strip().lower() for p in patterns if p and p.strip()]
    if not pats:
        return list(commits)
    return [c for c in commits if not any(p in c.subject.lower() for p in pats)]


def analyze_repo(
    repo: Path,
    filters: LogFilters,
    *,
    exclude_paths: list[str] | None = None,
    exclude_commits: list[str] | None = None,
    tables: AnalysisTables = DEFAULT_TABLES,
    today: dt.date | None = None,
) -> AnalysisResult:
    """Fetch, parse and aggregate one repository. GitLogError propagates."""
    raw = fetch_log(repo, filters)
    commits = parse_log(raw, languages=tables.extension_languages, exclude_path=path_excluder(exclude_paths or []))
    commits = exclude_commits_by_subject(commits, exclude_commits or [])
    return analyze_commits(commits, project_path=str(repo), project_name=repo.name, tables=tables, today=today)


def analyze_projects(
    repos: list[Path],
    filters: LogFilters,
    *,
    exclude_paths: list[str] | None = None,
    exclude_commits: list[str] | None = None,
    tables: AnalysisTables = DEFAULT_TABLES,
    today: dt.date | None = None,
) -> tuple[AnalysisResult, list[str]]:
    """
    Analyze `repos` one after another, in order, and merge the results.
    A repository whose log cannot be fetched is reported and skipped.
    """
    inputs: list[ProjectInput] = []
    errors: list[str] = []
    for i, repo in enumerate(repos, start=1):
        print(f"Analyzing {i}/{len(repos)}: {repo.name}")
        try:
            result = analyze_repo(
                repo,
                filters,
                exclude_paths=exclude_paths,
                exclude_commits=exclude_commits,
                tables=tables,
                today=today,
            )
        except GitLogError as e:
            errors.append(str(e))
            print(f"Warning: skipping {repo}: {e}", file=sys.stderr)
            continue
        inputs.append(ProjectInput(result=result, path=str(repo), name=repo.name))
    return merge_results(inputs, tables=tables, today=today), errors
