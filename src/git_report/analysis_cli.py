from __future__ import annotations

import argparse
from pathlib import Path

from .analysis_run import run_init, run_multi, run_single
from .config import FORMATS, THEMES


def _add_report_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-y", "--year", type=str, default="", help="Year to analyze (current year or one of the two before it).")
    parser.add_argument("-t", "--theme", choices=THEMES, default=None, help="Report theme (stored in the JSON report).")
    parser.add_argument("-f", "--format", choices=FORMATS, nargs="+", default=None, help="Output formats.")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output directory for reports.")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to git-report.json.")
    parser.add_argument("--include-merges", action="store_true", help="Include merge commits.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a year-in-review of your git activity.")
    parser.add_argument("path", type=Path, nargs="?", default=Path("."), help="Git repository to analyze.")
    parser.add_argument(
        "-a",
        "--author",
        type=str,
        action="append",
        default=None,
        help="Only count commits by this author (email or name); repeatable.",
    )
    _add_report_args(parser)
    return parser


def _build_multi_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-report multi", description="Analyze several repositories and merge the results.")
    parser.add_argument("-p", "--projects", type=str, default="", help="Comma-separated repository paths.")
    parser.add_argument("--root", type=Path, default=None, help="Directory to scan for repositories (overrides repositories_dir).")
    parser.add_argument("-a", "--author", type=str, action="append", default=None, help="Only count commits by this author; repeatable.")
    _add_report_args(parser)
    return parser


def _build_init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-report init", description="Create a sample git-report.json.")
    parser.add_argument("-o", "--output", type=Path, default=Path("git-report.json"), help="Where to write the config.")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    return parser


def split_csv_args(values: list[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    return run_single(args)


def multi_main(argv: list[str]) -> int:
    args = _build_multi_parser().parse_args(argv)
    args.projects = [Path(p) for p in split_csv_args([args.projects])]
    return run_multi(args)


def init_main(argv: list[str]) -> int:
    args = _build_init_parser().parse_args(argv)
    return run_init(args)
