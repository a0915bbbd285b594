from __future__ import annotations

import os
from pathlib import Path

import pytest

from templatecs.discovery import discover_files
from templatecs.discovery import display_path
from templatecs.discovery import iter_sources
from templatecs.errors import ConfigurationError
from templatecs.types import Source
from templatecs.types import SyntaxFailure


@pytest.fixture
def project(tmp_path):
    files = [
        "templates/base.html",
        "templates/app/detail.html",
        "templates/app/notes.txt",
        "templates/node_modules/lib.html",
        "templates/app/vendor/widget.html",
        "empty/readme.md",
    ]
    for name in files:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{{{{ {path.stem} }}}}\n", encoding="utf-8")
    return tmp_path


def _names(files, root):
    return {
        key: [p.relative_to(root).as_posix() for p in paths]
        for key, paths in files.items()
    }


def test_walks_directories_sorted(project):
    requested = str(project / "templates")
    files = discover_files([requested])
    assert _names(files, project) == {
        requested: [
            "templates/app/detail.html",
            "templates/app/vendor/widget.html",
            "templates/base.html",
            "templates/node_modules/lib.html",
        ]
    }


def test_exclude_by_name_and_relative_path(project):
    requested = str(project / "templates")
    files = discover_files([requested], exclude=["node_modules", "app/vendor/"])
    assert _names(files, project)[requested] == [
        "templates/app/detail.html",
        "templates/base.html",
    ]


def test_custom_patterns(project):
    requested = str(project / "templates")
    files = discover_files([requested], patterns=["*.txt"])
    assert _names(files, project)[requested] == ["templates/app/notes.txt"]


def test_explicit_file_ignores_patterns(project):
    requested = str(project / "templates/app/notes.txt")
    assert _names(discover_files([requested]), project) == {
        requested: ["templates/app/notes.txt"]
    }


def test_directory_without_matches_is_omitted(project):
    assert discover_files([str(project / "empty")]) == {}


def test_missing_path(project):
    with pytest.raises(ConfigurationError, match="does not exist"):
        discover_files([str(project / "missing")])


def test_display_path_keeps_requested_prefix(project, monkeypatch):
    monkeypatch.chdir(project)
    real = os.path.realpath(project / "templates/app/detail.html")

    assert display_path("templates", real) == "templates/app/detail.html"
    assert display_path("templates/", real) == "templates/app/detail.html"
    assert display_path("./templates", real) == "./templates/app/detail.html"
    assert display_path("templates/app/detail.html", real) == (
        "templates/app/detail.html"
    )


def test_display_path_outside_requested_root(project, monkeypatch):
    monkeypatch.chdir(project)
    real = os.path.realpath(project / "templates/base.html")
    assert display_path("empty", real) == real


def test_iter_sources_is_lazy(project, monkeypatch):
    monkeypatch.chdir(project)
    files = discover_files(["templates"])
    sources = iter_sources(files)

    (project / "templates/base.html").write_text("changed\n", encoding="utf-8")
    first = next(sources)
    assert first.display_path == "templates/app/detail.html"
    assert first.content == "{{ detail }}\n"
    assert first.real_path == os.path.realpath(project / "templates/app/detail.html")

    rest = list(sources)
    assert [s.display_path for s in rest] == [
        "templates/app/vendor/widget.html",
        "templates/base.html",
        "templates/node_modules/lib.html",
    ]
    assert rest[1].content == "changed\n"


def test_non_utf8_file_yields_syntax_failure(project, monkeypatch):
    monkeypatch.chdir(project)
    (project / "templates/base.html").write_bytes(b"ok\n<p>caf\xe9</p>\n")

    sources = list(iter_sources(discover_files(["templates"])))

    assert [type(s) for s in sources] == [Source, Source, SyntaxFailure, Source]
    assert sources[2] == SyntaxFailure(
        "templates/base.html",
        2,
        6,
        "File is not valid UTF-8 (invalid continuation byte)",
    )


def test_unreadable_file_yields_syntax_failure(project, monkeypatch):
    monkeypatch.chdir(project)
    read_bytes = Path.read_bytes

    def deny_base(self):
        if self.name == "base.html":
            raise PermissionError(13, "Permission denied")
        return read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", deny_base)

    sources = list(iter_sources(discover_files(["templates"])))

    assert sources[2] == SyntaxFailure(
        "templates/base.html", 1, 0, "Cannot read file (Permission denied)"
    )
    assert isinstance(sources[3], Source)
