"""Tests for classpath root lookup on a search path."""

from __future__ import annotations

import sys
import zipfile
from pathlib import Path

import pytest

from resglob.resolver import (
    ArchiveLocation,
    ResourceIOError,
    SearchPathResolver,
    TreeLocation,
)


def _make_zip(path: Path, members: list[str]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name in members:
            zf.writestr(name, "" if name.endswith("/") else f"// {name}\n")
    return path


def test_resolve_directory_entry(tmp_path: Path):
    lib = tmp_path / "lib"
    (lib / "app").mkdir(parents=True)

    resolver = SearchPathResolver([lib])
    assert resolver.resolve("app") == [TreeLocation(lib / "app")]
    assert resolver.resolve("/app/") == [TreeLocation(lib / "app")]


def test_resolve_archive_entry(tmp_path: Path):
    archive = _make_zip(tmp_path / "app.zip", ["app/main.js", "app/util/strings.js"])

    resolver = SearchPathResolver([archive])
    assert resolver.resolve("app") == [ArchiveLocation(archive, "app")]
    assert resolver.resolve("app/util") == [ArchiveLocation(archive, "app/util")]
    assert resolver.resolve("app/main.js") == [ArchiveLocation(archive, "app/main.js")]


def test_resolve_archive_prefix_must_end_at_separator(tmp_path: Path):
    archive = _make_zip(tmp_path / "app.zip", ["application/main.js"])

    resolver = SearchPathResolver([archive])
    assert resolver.resolve("app") == []


def test_resolve_missing_root(tmp_path: Path):
    lib = tmp_path / "lib"
    lib.mkdir()
    archive = _make_zip(tmp_path / "app.zip", ["app/main.js"])

    resolver = SearchPathResolver([lib, archive])
    assert resolver.resolve("does/not/exist") == []


def test_resolve_keeps_search_path_order(tmp_path: Path):
    first = _make_zip(tmp_path / "first.jar", ["app/a.js"])
    lib = tmp_path / "lib"
    (lib / "app").mkdir(parents=True)
    second = _make_zip(tmp_path / "second.zip", ["app/b.js"])

    resolver = SearchPathResolver([first, lib, second])
    assert resolver.resolve("app") == [
        ArchiveLocation(first, "app"),
        TreeLocation(lib / "app"),
        ArchiveLocation(second, "app"),
    ]


def test_resolve_empty_root_matches_every_entry(tmp_path: Path):
    lib = tmp_path / "lib"
    lib.mkdir()
    archive = _make_zip(tmp_path / "app.zip", ["main.js"])

    resolver = SearchPathResolver([lib, archive])
    assert resolver.resolve("") == [TreeLocation(lib), ArchiveLocation(archive, "")]


def test_resolve_skips_unusable_entries(tmp_path: Path):
    not_a_zip = tmp_path / "notes.txt"
    not_a_zip.write_text("just text")
    lib = tmp_path / "lib"
    (lib / "app").mkdir(parents=True)

    resolver = SearchPathResolver([tmp_path / "missing", not_a_zip, lib])
    assert resolver.resolve("app") == [TreeLocation(lib / "app")]


def test_default_search_path_is_sys_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "pkg").mkdir()
    monkeypatch.setattr(sys, "path", [str(tmp_path)])

    resolver = SearchPathResolver()
    assert resolver.search_path == [tmp_path]
    assert resolver.resolve("pkg") == [TreeLocation(tmp_path / "pkg")]


def test_unreadable_archive_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    archive = _make_zip(tmp_path / "app.zip", ["app/main.js"])

    def broken_zip(*args: object, **kwargs: object) -> zipfile.ZipFile:
        raise zipfile.BadZipFile("truncated")

    monkeypatch.setattr(zipfile, "ZipFile", broken_zip)
    with pytest.raises(ResourceIOError):
        SearchPathResolver([archive]).resolve("app")
