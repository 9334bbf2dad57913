"""Resolve aliases against a release record into redirect rules.

Rendering is a separate step (see ``flavors``): the rules computed here are
the same whichever output format is requested.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mukti.core.result import Err, Ok, Result
from mukti.registry.errors import RegistryError
from mukti.registry.model import ArchiveKey, ReleaseRecord

PERMANENT_REDIRECT = 301
ALLOWED_STATUS_CODES = (301, 302, 307, 308)


@dataclass(frozen=True, slots=True)
class Alias:
    name: str
    key: ArchiveKey

    def __str__(self) -> str:
        return f"{self.name}={self.key}"


@dataclass(frozen=True, slots=True)
class RedirectRule:
    alias_path: str
    target_url: str
    status_code: int = PERMANENT_REDIRECT


def normalize_prefix(prefix: str) -> str:
    """``"/"`` -> ``""``, ``"dl/"`` -> ``"/dl"``."""
    stripped = prefix.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def resolve_rules(
    record: ReleaseRecord,
    aliases: Iterable[Alias],
    *,
    prefix: str = "/",
    status_code: int = PERMANENT_REDIRECT,
) -> Result[tuple[RedirectRule, ...], RegistryError]:
    """Build one rule per alias, in the order the aliases were given.

    Fails on the first alias whose target/kind the record does not ship; a
    missing archive means the release is broken, so nothing is skipped.
    """
    if status_code not in ALLOWED_STATUS_CODES:
        allowed = ", ".join(str(c) for c in ALLOWED_STATUS_CODES)
        return Err(
            RegistryError(
                kind="invalid_option",
                message=f"unsupported redirect status code {status_code}",
                hint=f"use one of {allowed}",
            )
        )

    base = normalize_prefix(prefix)
    rules: list[RedirectRule] = []
    for alias in aliases:
        url = record.archive_url(alias.key)
        if url is None:
            shipped = ", ".join(str(k) for k in record.archives) or "none"
            return Err(
                RegistryError(
                    kind="unresolved_alias",
                    message=(
                        f"alias {alias.name!r} points at {alias.key}, "
                        f"which release {record.version} does not have"
                    ),
                    hint=f"archives in {record.version}: {shipped}",
                )
            )
        rules.append(
            RedirectRule(
                alias_path=f"{base}/{alias.name.strip('/')}",
                target_url=url,
                status_code=status_code,
            )
        )
    return Ok(tuple(rules))
