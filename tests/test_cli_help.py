from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from git_report import cli


def test_root_help_mentions_commands(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str((Path(__file__).resolve().parents[1] / "src"))
    cmd = [sys.executable, "-m", "git_report", "--help"]
    proc = subprocess.run(cmd, cwd=str(tmp_path), env=env, text=True, capture_output=True)
    assert proc.returncode == 0, proc.stderr
    out = proc.stdout
    assert "multi" in out
    assert "init" in out
    assert "Build a year-in-review" in out


def test_init_refuses_to_overwrite(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "git-report.json"

    assert cli.main(["init", "-o", str(target)]) == 0
    assert target.exists()
    assert cli.main(["init", "-o", str(target)]) == 1
    assert "Refusing to overwrite" in capsys.readouterr().err
    assert cli.main(["init", "-o", str(target), "--force"]) == 0


def test_invalid_config_exits_2(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "git-report.json").write_text('{"theme": "neon"}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert cli.main([str(tmp_path)]) == 2
    assert "invalid theme" in capsys.readouterr().err


def test_multi_without_targets(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    assert cli.main(["multi"]) == 2
    assert "No repositories to analyze" in capsys.readouterr().err


def test_inverted_date_range_exits_2(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "git-report.json").write_text(
        '{"date_range": {"from": "2025-12-31", "to": "2025-01-01"}}', encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert cli.main([str(tmp_path)]) == 2
    assert "date_range ends before it starts" in capsys.readouterr().err
