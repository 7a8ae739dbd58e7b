from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analysis_paths import OTHER_LANGUAGE
from .analysis_periods import Period, period_from_date_range, resolve_year, year_period
from .analysis_render import fmt_int
from .analysis_repo import analyze_projects, analyze_repo
from .analysis_write import write_reports
from .config import resolve_config, validate_config, write_sample_config
from .git import GitLogError, discover_git_roots
from .models import AnalysisResult, LogFilters


def _print_header(*, title: str, targets: list[Path], period: Period, config: dict) -> None:
    lines = [
        "┌──────────────────────────────────────────────────────────────┐",
        "│                          git-report                          │",
        "└──────────────────────────────────────────────────────────────┘",
        "",
        title,
        f"- Period: {period.start_iso} -> {period.end_iso} (exclusive end)",
        f"- Authors: {', '.join(config.get('authors') or []) or 'everyone'}",
        f"- Merges: {'on' if config.get('include_merges') else 'off'}  Theme: {config.get('theme')}",
        f"- Formats: {', '.join(config.get('formats') or [])}  Output: {config.get('output')}",
    ]
    for i, t in enumerate(targets[:10], start=1):
        lines.append(f"  {i}. {t}")
    if len(targets) > 10:
        lines.append(f"  ... (+{len(targets) - 10} more)")
    lines.append("")
    print("\n".join(lines))


def _print_totals(result: AnalysisResult) -> None:
    langs = [lang for lang, _ in sorted(result.language_stats.items(), key=lambda kv: -kv[1].count) if lang != OTHER_LANGUAGE]
    print("")
    print("Summary")
    print(f"- Commits:        {fmt_int(result.total_commits)}")
    print(f"- Insertions:     +{fmt_int(result.total_insertions)}")
    print(f"- Deletions:      -{fmt_int(result.total_deletions)}")
    print(f"- Net lines:      {fmt_int(result.net_lines)}")
    print(f"- Longest streak: {result.streak_stats.longest_streak} days")
    print(f"- Languages:      {', '.join(langs[:3]) or '-'}")
    print(f"- Persona:        {result.persona.title}")


def _load_config(args: argparse.Namespace) -> dict | None:
    config = resolve_config(args.config)
    if args.theme:
        config["theme"] = args.theme
    if args.format:
        config["formats"] = list(args.format)
    if args.output is not None:
        config["output"] = str(args.output)
    if args.include_merges:
        config["include_merges"] = True
    if getattr(args, "author", None):
        config["authors"] = [a for a in args.author if a.strip()]

    errors = validate_config(config)
    if errors:
        print("Invalid configuration:", file=sys.stderr)
        for e in errors:
            print(f"  - {e}", file=sys.stderr)
        return None
    return config


def _period_for(args: argparse.Namespace, config: dict) -> Period:
    period = period_from_date_range(config.get("date_range"))
    if period is not None and not args.year:
        return period
    return year_period(resolve_year(args.year))


def _filters_for(period: Period, config: dict) -> LogFilters:
    return LogFilters(
        since=f"{period.start_iso}T00:00:00",
        until=f"{period.end_iso}T00:00:00",
        authors=tuple(config.get("authors") or []),
        include_merges=bool(config.get("include_merges")),
    )


def _write(result: AnalysisResult, *, report_dir: Path, period: Period, config: dict, author: str) -> None:
    written = write_reports(
        report_dir=report_dir,
        result=result,
        label=period.label,
        author=author,
        theme=str(config.get("theme")),
        formats=list(config.get("formats") or []),
    )
    for path in written:
        print(f"Wrote {path}")


def run_single(args: argparse.Namespace) -> int:
    config = _load_config(args)
    if config is None:
        return 2
    repo = args.path.resolve()
    period = _period_for(args, config)
    _print_header(title="Single repository", targets=[repo], period=period, config=config)

    try:
        result = analyze_repo(
            repo,
            _filters_for(period, config),
            exclude_paths=list(config.get("exclude_paths") or []),
            exclude_commits=list(config.get("exclude_commits") or []),
        )
    except GitLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write(result, report_dir=Path(config["output"]), period=period, config=config, author=str(config.get("author") or repo.name))
    _print_totals(result)
    return 0


def _multi_targets(args: argparse.Namespace, config: dict) -> list[Path]:
    if args.projects:
        return [p.resolve() for p in args.projects]
    root = args.root if args.root is not None else (Path(config["repositories_dir"]) if config.get("repositories_dir") else None)
    if root is None:
        return []
    root = root.resolve()
    print(f"Scanning for git repos under: {root}...")
    return discover_git_roots(root)


def run_multi(args: argparse.Namespace) -> int:
    config = _load_config(args)
    if config is None:
        return 2
    targets = _multi_targets(args, config)
    if not targets:
        print("No repositories to analyze; pass --projects a,b,c or --root DIR (or set repositories_dir).", file=sys.stderr)
        return 2
    period = _period_for(args, config)
    _print_header(title=f"{len(targets)} repositories", targets=targets, period=period, config=config)

    result, errors = analyze_projects(
        targets,
        _filters_for(period, config),
        exclude_paths=list(config.get("exclude_paths") or []),
        exclude_commits=list(config.get("exclude_commits") or []),
    )
    if errors:
        print(f"Note: {len(errors)} of {len(targets)} repositories were skipped.", file=sys.stderr)

    _write(result, report_dir=Path(config["output"]), period=period, config=config, author=str(config.get("author") or ""))
    _print_totals(result)
    return 0


def run_init(args: argparse.Namespace) -> int:
    path: Path = args.output
    if path.exists() and not args.force:
        print(f"Refusing to overwrite existing config: {path} (use --force)", file=sys.stderr)
        return 1
    write_sample_config(path)
    print(f"Wrote sample config: {path}")
    return 0
