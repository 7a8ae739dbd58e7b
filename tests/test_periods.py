from __future__ import annotations

import datetime as dt

import pytest

from git_report.analysis_periods import available_years, period_from_date_range, resolve_year, year_period


def test_year_period() -> None:
    p = year_period(2025)
    assert (p.label, p.start_iso, p.end_iso) == ("2025", "2025-01-01", "2026-01-01")


def test_resolve_year(capsys: pytest.CaptureFixture[str]) -> None:
    today = dt.date(2026, 3, 1)
    assert available_years(today) == [2026, 2025, 2024]
    assert resolve_year(None, today) == 2026
    assert resolve_year("", today) == 2026
    assert resolve_year("2024", today) == 2024
    assert resolve_year(2025, today) == 2025
    assert capsys.readouterr().err == ""

    assert resolve_year("2019", today) == 2026
    assert "out of range" in capsys.readouterr().err
    assert resolve_year("soon", today) == 2026
    assert "invalid year" in capsys.readouterr().err


def test_date_range_end_is_inclusive() -> None:
    p = period_from_date_range({"from": "2025-03-01", "to": "2025-03-31"})
    assert p is not None
    assert p.label == "2025-03-01_2025-03-31"
    assert p.start_iso == "2025-03-01"
    assert p.end_iso == "2025-04-01"


def test_date_range_invalid() -> None:
    assert period_from_date_range(None) is None
    assert period_from_date_range({"from": "2025-03-01"}) is None
    assert period_from_date_range({"from": "2025-03-31", "to": "2025-03-01"}) is None
    assert period_from_date_range({"from": "March", "to": "April"}) is None
