from __future__ import annotations

import dataclasses
import datetime as dt
import sys


@dataclasses.dataclass(frozen=True)
class Period:
    """Half-open date window `[start, end)` plus the label used in report names."""

    label: str
    start: dt.date
    end: dt.date

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()


def year_period(year: int) -> Period:
    return Period(label=str(year), start=dt.date(year, 1, 1), end=dt.date(year + 1, 1, 1))


def available_years(today: dt.date | None = None) -> list[int]:
    if today is None:
        today = dt.date.today()
    return [today.year, today.year - 1, today.year - 2]


def resolve_year(value: str | int | None, today: dt.date | None = None) -> int:
    """Reports cover one of the three most recent years; anything else falls back to the current year."""
    years = available_years(today)
    current = years[0]
    if value is None or str(value).strip() == "":
        return current
    try:
        year = int(str(value).strip())
    except ValueError:
        print(f"Warning: invalid year {value!r}; using {current}.", file=sys.stderr)
        return current
    if year not in years:
        allowed = ", ".join(str(y) for y in years)
        print(f"Warning: year {year} is out of range (allowed: {allowed}); using {current}.", file=sys.stderr)
        return current
    return year


def period_from_date_range(date_range: dict[str, str] | None) -> Period | None:
    """`{"from": ..., "to": ...}` with an inclusive end date, or None when absent/invalid."""
    if not isinstance(date_range, dict):
        return None
    start_s = str(date_range.get("from", "") or "").strip()
    end_s = str(date_range.get("to", "") or "").strip()
    if not start_s or not end_s:
        return None
    try:
        start = dt.date.fromisoformat(start_s)
        end = dt.date.fromisoformat(end_s)
    except ValueError:
        return None
    if end < start:
        return None
    return Period(label=f"{start_s}_{end_s}", start=start, end=end + dt.timedelta(days=1))
