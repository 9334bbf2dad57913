from __future__ import annotations

import os
from pathlib import Path

import pytest

from mukti.platform.files import atomic_write_text


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "site" / "_redirects"
    atomic_write_text(path, "/linux https://example.com/a.tar.gz 301\n")

    assert path.read_text(encoding="utf-8") == "/linux https://example.com/a.tar.gz 301\n"


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "releases.json"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new", encoding="utf-8")

    assert path.read_text(encoding="utf-8") == "new"


def test_atomic_write_text_keeps_old_content_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "releases.json"
    path.write_text("old", encoding="utf-8")

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload", encoding="utf-8")

    assert path.read_text(encoding="utf-8") == "old"
    assert list(path.parent.glob(f".{path.name}.*.tmp")) == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_atomic_write_text_keeps_existing_mode(tmp_path: Path) -> None:
    path = tmp_path / "releases.json"
    path.write_text("old", encoding="utf-8")
    path.chmod(0o640)

    atomic_write_text(path, "new")

    assert path.stat().st_mode & 0o777 == 0o640


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_atomic_write_text_new_file_follows_umask(tmp_path: Path) -> None:
    path = tmp_path / "site" / "_redirects"
    old_umask = os.umask(0o022)
    try:
        atomic_write_text(path, "# Generated by mukti\n")
    finally:
        os.umask(old_umask)

    # Not the 0o600 a bare temp file would have.
    assert path.stat().st_mode & 0o777 == 0o644
