"""Tests for mukti.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from mukti.core.config import Config, RedirectsConfig, load_config
from mukti.core.result import Err, Ok


def test_missing_optional_config_is_default(tmp_path: Path) -> None:
    result = load_config(tmp_path / "mukti.toml", required=False)
    assert result == Ok(Config())


def test_missing_required_config_is_error(tmp_path: Path) -> None:
    result = load_config(tmp_path / "mukti.toml")
    assert isinstance(result, Err)
    assert "not found" in result.error.message


def test_load_full_config(tmp_path: Path) -> None:
    path = tmp_path / "mukti.toml"
    path.write_text(
        """
json = "site/releases.json"

[redirects]
flavor = "netlify-toml"
prefix = "/dl"
status_code = 302

[redirects.aliases]
linux = "x86_64-unknown-linux-gnu:tar.gz"
windows = "x86_64-pc-windows-msvc:zip"
""",
        encoding="utf-8",
    )

    result = load_config(path)
    assert isinstance(result, Ok)
    config = result.value
    assert config.json_path == Path("site/releases.json")
    assert config.redirects == RedirectsConfig(
        flavor="netlify-toml",
        prefix="/dl",
        status_code=302,
        aliases=(
            ("linux", "x86_64-unknown-linux-gnu:tar.gz"),
            ("windows", "x86_64-pc-windows-msvc:zip"),
        ),
    )


def test_invalid_toml_syntax(tmp_path: Path) -> None:
    path = tmp_path / "mukti.toml"
    path.write_text("json = \n", encoding="utf-8")

    result = load_config(path)
    assert isinstance(result, Err)
    assert "Invalid TOML syntax" in result.error.message
    assert result.error.path == path


@pytest.mark.parametrize(
    "body",
    [
        "[redirects]\nstatus_code = \"301\"\n",
        "[redirects.aliases]\nlinux = 3\n",
    ],
)
def test_wrong_value_types_are_rejected(tmp_path: Path, body: str) -> None:
    path = tmp_path / "mukti.toml"
    path.write_text(body, encoding="utf-8")

    result = load_config(path)
    assert isinstance(result, Err)
    assert "Invalid config structure" in result.error.message


def test_frozen() -> None:
    config = Config()
    with pytest.raises(AttributeError):
        config.json_path = Path("x")  # type: ignore[misc]
