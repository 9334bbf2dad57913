from __future__ import annotations

import pytest

from mukti.registry.semver import SemVer, parse_version, version_range


def test_parse_plain_version() -> None:
    assert parse_version("1.2.3") == SemVer(1, 2, 3)


def test_parse_prerelease_and_build() -> None:
    parsed = parse_version("1.0.0-beta.2+build.7")
    assert parsed == SemVer(1, 0, 0, pre=("beta", "2"), build="build.7")
    assert parsed is not None and parsed.is_prerelease
    assert str(parsed) == "1.0.0-beta.2+build.7"


@pytest.mark.parametrize("text", ["", "v1.2.3", "1.2", "01.2.3", "1.2.3-", "latest"])
def test_rejects_non_semver(text: str) -> None:
    assert parse_version(text) is None


def test_precedence() -> None:
    ordered = ["1.0.0-alpha", "1.0.0-alpha.1", "1.0.0-beta.2", "1.0.0-beta.11", "1.0.0", "1.1.0"]
    parsed = [parse_version(v) for v in ordered]
    assert all(p is not None for p in parsed)
    assert sorted(parsed, reverse=True) == list(reversed(parsed))  # type: ignore[type-var]


def test_build_metadata_does_not_affect_equality() -> None:
    assert parse_version("1.0.0+a") == parse_version("1.0.0+b")


@pytest.mark.parametrize(
    ("text", "expected"),
    [("2.4.1", "2"), ("0.3.9", "0.3"), ("0.0.7", "0.0.7")],
)
def test_version_range(text: str, expected: str) -> None:
    parsed = parse_version(text)
    assert parsed is not None
    assert version_range(parsed) == expected
