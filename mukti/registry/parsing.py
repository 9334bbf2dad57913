"""Parsers for ``--archive TARGET:KIND=FILENAME`` and ``--alias NAME=TARGET:KIND``."""

from __future__ import annotations

from mukti.core.result import Err, Ok, Result
from mukti.registry.errors import RegistryError
from mukti.registry.model import ArchiveKey, ArchiveKind
from mukti.registry.redirects import Alias

_KINDS_HINT = "archive kinds: " + ", ".join(k.value for k in ArchiveKind)


def _split_name_value(text: str) -> tuple[str, str] | None:
    name, sep, value = text.partition("=")
    if not sep:
        return None
    return (name.strip(), value.strip())


def parse_archive_key(text: str) -> ArchiveKey | None:
    # Triples never contain ':', so the last one separates the kind.
    target, sep, kind_text = text.strip().rpartition(":")
    if not sep or not target.strip():
        return None
    kind = ArchiveKind.parse(kind_text)
    if kind is None:
        return None
    return ArchiveKey(target=target.strip(), kind=kind)


def parse_archive(text: str) -> Result[tuple[ArchiveKey, str], RegistryError]:
    pair = _split_name_value(text)
    if pair is None:
        return Err(
            RegistryError(
                kind="invalid_record",
                message=f"unable to parse archive {text!r} in the format TARGET:KIND=FILENAME",
            )
        )
    key_text, filename = pair
    key = parse_archive_key(key_text)
    if key is None:
        return Err(
            RegistryError(
                kind="invalid_record",
                message=f"invalid archive target {key_text!r} in {text!r}",
                hint=_KINDS_HINT,
            )
        )
    return Ok((key, filename))


def parse_alias_selector(name: str, selector: str) -> Result[Alias, RegistryError]:
    raw = name
    # "linux" and "/linux" name the same redirect path.
    name = name.strip().strip("/")
    if not name or any(c.isspace() for c in name):
        return Err(RegistryError(kind="invalid_alias", message=f"invalid alias name {raw!r}"))
    key = parse_archive_key(selector)
    if key is None:
        return Err(
            RegistryError(
                kind="invalid_alias",
                message=f"alias {name!r} has invalid target {selector!r}, expected TARGET:KIND",
                hint=_KINDS_HINT,
            )
        )
    return Ok(Alias(name=name, key=key))


def parse_alias(text: str) -> Result[Alias, RegistryError]:
    pair = _split_name_value(text)
    if pair is None:
        return Err(
            RegistryError(
                kind="invalid_alias",
                message=f"unable to parse alias {text!r} in the format NAME=TARGET:KIND",
            )
        )
    return parse_alias_selector(*pair)


def merge_aliases(*groups: list[Alias]) -> Result[tuple[Alias, ...], RegistryError]:
    """Concatenate alias groups, rejecting a name that appears twice."""
    merged: list[Alias] = []
    seen: set[str] = set()
    for group in groups:
        for alias in group:
            if alias.name in seen:
                return Err(
                    RegistryError(kind="invalid_alias", message=f"alias {alias.name!r} given more than once")
                )
            seen.add(alias.name)
            merged.append(alias)
    return Ok(tuple(merged))
