from __future__ import annotations

import datetime as dt

import pytest

from git_report.models import Commit

UTC = dt.timezone.utc


def make_commit(
    when: dt.datetime,
    *,
    subject: str = "work",
    files: tuple[str, ...] = (),
    insertions: int = 0,
    deletions: int = 0,
    language: str = "Unknown",
    n: int = 0,
) -> Commit:
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return Commit(
        hash=f"{n:040x}",
        timestamp=when,
        subject=subject,
        author_name="Dev",
        author_email="dev@example.com",
        files=files,
        insertions=insertions,
        deletions=deletions,
        language=language,
    )


@pytest.fixture
def commit_factory():
    return make_commit
