"""Typed loading of the optional ``mukti.toml`` file.

Example:

    json = "releases.json"

    [redirects]
    flavor = "netlify"
    prefix = "/"
    status_code = 301

    [redirects.aliases]
    linux = "x86_64-unknown-linux-gnu:tar.gz"

Values are kept as written; the CLI validates flavors and alias selectors
with the same parsers it uses for command-line options.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "RedirectsConfig",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_JSON_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("mukti.toml")
DEFAULT_JSON_PATH = Path(".releases.json")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RedirectsConfig:
    """Defaults for ``generate-redirects``."""

    flavor: str | None = None
    prefix: str | None = None
    status_code: int | None = None
    # (alias, "TARGET:KIND") in file order
    aliases: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class Config:
    json_path: Path | None = None
    redirects: RedirectsConfig = field(default_factory=RedirectsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: If a value has the wrong type.
        """
        redirects: StrDict = get_table(data, "redirects") or {}
        aliases_table: StrDict = get_table(redirects, "aliases") or {}

        aliases: list[tuple[str, str]] = []
        for name, selector in aliases_table.items():
            if not isinstance(selector, str):
                raise ValueError(f"alias {name!r} must be a string of the form TARGET:KIND")
            aliases.append((name, selector.strip()))

        if "status_code" in redirects and get_int(redirects, "status_code") is None:
            raise ValueError("redirects.status_code must be an integer")

        json_path = get_str(data, "json")
        return cls(
            json_path=Path(json_path) if json_path else None,
            redirects=RedirectsConfig(
                flavor=get_str(redirects, "flavor"),
                prefix=get_str(redirects, "prefix"),
                status_code=get_int(redirects, "status_code"),
                aliases=tuple(aliases),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax in {path}: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config {path}: {e}", path=path))


def load_config(path: Path, *, required: bool = True) -> Result[Config, ConfigError]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file.
        required: When False, a missing file yields the default Config.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure.
    """
    if not required and not path.exists():
        return Ok(Config())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure in {path}: {e}", path=path))
