from __future__ import annotations

import dataclasses
import json
from pathlib import Path

from .analysis_render import render_summary
from .models import AnalysisResult


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2, sort_keys=False, ensure_ascii=False), encoding="utf-8")


def result_to_dict(result: AnalysisResult) -> dict:
    data = dataclasses.asdict(result)
    # JSON objects need string keys
    ts = data["time_stats"]
    ts["by_hour"] = {str(h): n for h, n in sorted(ts["by_hour"].items())}
    ts["by_day_of_week"] = {str(d): n for d, n in sorted(ts["by_day_of_week"].items())}
    ts["by_month"] = dict(sorted(ts["by_month"].items()))
    data["punch_card"] = [list(row) for row in result.punch_card]
    return data


def write_reports(
    *,
    report_dir: Path,
    result: AnalysisResult,
    label: str,
    author: str,
    theme: str,
    formats: list[str],
) -> list[Path]:
    ensure_dir(report_dir)
    written: list[Path] = []
    if "json" in formats:
        path = report_dir / f"git-report-{label}.json"
        write_json(path, {"meta": {"label": label, "author": author, "theme": theme}, "result": result_to_dict(result)})
        written.append(path)
    if "text" in formats:
        path = report_dir / f"git-report-{label}.txt"
        path.write_text(render_summary(result, author=author, label=label), encoding="utf-8")
        written.append(path)
    return written
