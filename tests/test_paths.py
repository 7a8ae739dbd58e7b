from __future__ import annotations

from git_report.analysis_paths import (
    language_for_path,
    normalize_numstat_path,
    path_excluder,
    should_exclude_path,
    split_exclude_paths,
)


def test_split_exclude_paths() -> None:
    prefixes, globs = split_exclude_paths(["node_modules", " dist/ ", "*.min.js", "", "src/gen_?.py"])
    assert prefixes == ["node_modules", "dist/"]
    assert globs == ["*.min.js", "src/gen_?.py"]


def test_should_exclude_path() -> None:
    prefixes, globs = split_exclude_paths(["node_modules", "build", "*.min.js"])
    assert should_exclude_path("node_modules/react/index.js", prefixes, globs)
    assert should_exclude_path("web/node_modules/x.js", prefixes, globs)
    assert should_exclude_path("./build/out.o", prefixes, globs)
    assert should_exclude_path("static/js/app.min.js", prefixes, globs)
    assert not should_exclude_path("src/builder.py", prefixes, globs)
    assert not should_exclude_path("src/app.js", prefixes, globs)


def test_path_excluder() -> None:
    assert path_excluder([]) is None
    assert path_excluder(["", "  "]) is None
    exclude = path_excluder(["vendor"])
    assert exclude is not None
    assert exclude("vendor/lib.go")
    assert not exclude("main.go")


def test_normalize_numstat_path() -> None:
    assert normalize_numstat_path("src/a.py") == "src/a.py"
    assert normalize_numstat_path("src/{old => new}/a.py") == "src/new/a.py"
    assert normalize_numstat_path("src/{old.py => new.py}") == "src/new.py"
    assert normalize_numstat_path("src/{legacy => }/a.py") == "src/a.py"
    assert normalize_numstat_path("old.py => new.py") == "new.py"


def test_language_for_path() -> None:
    assert language_for_path("src/App.TSX") == "TypeScript"
    assert language_for_path("docs/guide.markdown") == "Markdown"
    assert language_for_path("Dockerfile") == "Other"
    assert language_for_path("x.py", {".py": "Snake"}) == "Snake"
