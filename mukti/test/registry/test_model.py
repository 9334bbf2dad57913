from __future__ import annotations

import pytest

from mukti.core.result import Err, Ok
from mukti.registry.model import ArchiveKey, ArchiveKind, build_record

LINUX = ArchiveKey("x86_64-unknown-linux-gnu", ArchiveKind.TAR_GZ)
WINDOWS = ArchiveKey("x86_64-pc-windows-msvc", ArchiveKind.ZIP)


def test_build_record() -> None:
    result = build_record(
        version="1.0.0",
        release_url="https://github.com/example/app/releases/tag/1.0.0",
        archive_prefix="https://github.com/example/app/releases/download/1.0.0/",
        archives=[(LINUX, "app-linux.tar.gz"), (WINDOWS, "app-windows.zip")],
    )
    assert isinstance(result, Ok)
    record = result.value
    assert record.archive_prefix == "https://github.com/example/app/releases/download/1.0.0"
    assert list(record.archives) == [LINUX, WINDOWS]
    assert record.archive_url(WINDOWS) == (
        "https://github.com/example/app/releases/download/1.0.0/app-windows.zip"
    )
    assert record.archive_url(ArchiveKey("aarch64-apple-darwin", ArchiveKind.TAR_GZ)) is None
    assert record.status == "active"
    assert record.is_complete


def test_record_without_archives_is_incomplete_but_valid() -> None:
    result = build_record(version="1.0.0", archive_prefix="https://ex/dl", archives=[])
    assert isinstance(result, Ok)
    assert not result.value.is_complete
    assert result.value.release_url is None


def test_records_are_immutable() -> None:
    result = build_record(version="1.0.0", archive_prefix="https://ex/dl", archives=[(LINUX, "a.tar.gz")])
    assert isinstance(result, Ok)
    with pytest.raises(TypeError):
        result.value.archives[WINDOWS] = "b.zip"  # type: ignore[index]


@pytest.mark.parametrize(
    ("kwargs", "fragment"),
    [
        ({"version": ""}, "version is empty"),
        ({"version": "one"}, "invalid version 'one'"),
        ({"archive_prefix": "ex/dl"}, "invalid archive prefix"),
        ({"archive_prefix": "https://"}, "invalid archive prefix"),
        ({"release_url": "not a url"}, "invalid release URL"),
        ({"archives": [(LINUX, "")]}, "empty file name"),
        ({"archives": [(LINUX, "dir/a.tar.gz")]}, "must not contain '/'"),
        ({"archives": [(LINUX, "my app.tar.gz")]}, "must not contain whitespace"),
        ({"archives": [(LINUX, "a.tar.gz\tb")]}, "must not contain whitespace"),
        ({"archives": [(LINUX, "a.tar.gz"), (LINUX, "b.tar.gz")]}, "given more than once"),
    ],
)
def test_invalid_records(kwargs: dict[str, object], fragment: str) -> None:
    args: dict[str, object] = {
        "version": "1.0.0",
        "archive_prefix": "https://ex/dl",
        "archives": [(LINUX, "a.tar.gz")],
    }
    args.update(kwargs)

    result = build_record(**args)  # type: ignore[arg-type]
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_record"
    assert result.error.category == "InvalidRecord"
    assert fragment in result.error.message


def test_archive_kind_parse() -> None:
    assert ArchiveKind.parse("tar.gz") is ArchiveKind.TAR_GZ
    assert ArchiveKind.parse(".ZIP") is ArchiveKind.ZIP
    assert ArchiveKind.parse("rar") is None


def test_unknown_fields_are_kept_for_shipped_archives_only() -> None:
    result = build_record(
        version="1.0.0",
        archive_prefix="https://ex/dl",
        archives=[(LINUX, "a.tar.gz")],
        extra={"metadata": {"sha256": "abc"}},
        archive_extra={LINUX: {"checksums": {"sha256": "def"}}, WINDOWS: {"checksums": {}}},
    )
    assert isinstance(result, Ok)
    record = result.value
    assert dict(record.extra) == {"metadata": {"sha256": "abc"}}
    assert list(record.archive_extra) == [LINUX]
    assert dict(record.archive_extra[LINUX]) == {"checksums": {"sha256": "def"}}
