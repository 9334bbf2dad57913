"""The on-disk release registry (``releases.json``).

Every CLI invocation loads a fresh snapshot, applies at most one change and
writes the whole document back with an atomic replace. Field names in the
document are read by other tools and must not change.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType

from mukti.core.result import Err, Ok, Result
from mukti.core.structured import StrDict, as_obj_list, as_str_dict, get_list, get_str
from mukti.platform.files import atomic_write_text
from mukti.registry.errors import RegistryError
from mukti.registry.model import (
    RELEASE_STATUSES,
    ArchiveKey,
    ArchiveKind,
    ReleaseRecord,
    ReleaseStatus,
    build_record,
)

REGISTRY_SCHEMA = 1

# Keys this tool reads and writes; anything else is kept verbatim after them.
DOCUMENT_FIELDS = ("schema", "releases")
RECORD_FIELDS = ("version", "release_url", "archive_prefix", "status", "archives")
ARCHIVE_FIELDS = ("target", "kind", "name")


def _unknown_fields(data: StrDict, known: tuple[str, ...]) -> StrDict:
    return {k: v for k, v in data.items() if k not in known}


def _no_extra() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Registry:
    releases: tuple[ReleaseRecord, ...] = ()
    extra: Mapping[str, object] = field(default_factory=_no_extra)

    @property
    def versions(self) -> tuple[str, ...]:
        return tuple(r.version for r in self.releases)


def _corrupt(path: Path, message: str) -> RegistryError:
    return RegistryError(
        kind="corrupt_registry",
        message=f"{path}: {message}",
        hint="fix or restore the registry file; it is never rewritten while unreadable",
    )


def record_to_dict(record: ReleaseRecord) -> StrDict:
    archives: list[StrDict] = []
    for key, name in record.archives.items():
        entry: StrDict = {"target": key.target, "kind": key.kind.value, "name": name}
        entry.update(record.archive_extra.get(key, {}))
        archives.append(entry)

    out: StrDict = {
        "version": record.version,
        "release_url": record.release_url,
        "archive_prefix": record.archive_prefix,
        "status": record.status,
        "archives": archives,
    }
    out.update(record.extra)
    return out


def registry_to_dict(registry: Registry) -> StrDict:
    out: StrDict = {
        "schema": REGISTRY_SCHEMA,
        "releases": [record_to_dict(r) for r in registry.releases],
    }
    out.update(registry.extra)
    return out


def _record_from_dict(obj: object, *, path: Path, index: int) -> Result[ReleaseRecord, RegistryError]:
    data = as_str_dict(obj)
    if data is None:
        return Err(_corrupt(path, f"releases[{index}] must be an object"))

    version = get_str(data, "version")
    if version is None:
        return Err(_corrupt(path, f"releases[{index}] is missing a version"))
    archive_prefix = get_str(data, "archive_prefix")
    if archive_prefix is None:
        return Err(_corrupt(path, f"release {version} is missing archive_prefix"))

    release_url_obj = data.get("release_url")
    if release_url_obj is not None and not isinstance(release_url_obj, str):
        return Err(_corrupt(path, f"release {version} has a non-string release_url"))

    status_obj = data.get("status", "active")
    if status_obj not in RELEASE_STATUSES:
        return Err(_corrupt(path, f"release {version} has unknown status {status_obj!r}"))
    status: ReleaseStatus = "yanked" if status_obj == "yanked" else "active"

    archives_obj = data.get("archives", [])
    archive_items = as_obj_list(archives_obj)
    if archive_items is None:
        return Err(_corrupt(path, f"release {version} archives must be a list"))

    archives: list[tuple[ArchiveKey, str]] = []
    archive_extra: dict[ArchiveKey, StrDict] = {}
    for item in archive_items:
        entry = as_str_dict(item)
        if entry is None:
            return Err(_corrupt(path, f"release {version} has a non-object archive entry"))
        target = get_str(entry, "target")
        kind_text = get_str(entry, "kind")
        name = get_str(entry, "name")
        if target is None or kind_text is None or name is None:
            return Err(
                _corrupt(path, f"release {version} has an archive entry without target/kind/name")
            )
        kind = ArchiveKind.parse(kind_text)
        if kind is None:
            return Err(_corrupt(path, f"release {version} has unknown archive kind {kind_text!r}"))
        key = ArchiveKey(target=target, kind=kind)
        archives.append((key, name))
        archive_extra[key] = _unknown_fields(entry, ARCHIVE_FIELDS)

    built = build_record(
        version=version,
        archive_prefix=archive_prefix,
        release_url=release_url_obj,
        archives=archives,
        status=status,
        extra=_unknown_fields(data, RECORD_FIELDS),
        archive_extra=archive_extra,
    )
    if isinstance(built, Err):
        return Err(_corrupt(path, built.error.message))
    return built


def registry_from_dict(obj: object, *, path: Path) -> Result[Registry, RegistryError]:
    data = as_str_dict(obj)
    if data is None:
        return Err(_corrupt(path, "root must be a JSON object"))

    schema = data.get("schema", REGISTRY_SCHEMA)
    if schema != REGISTRY_SCHEMA or isinstance(schema, bool):
        return Err(_corrupt(path, f"unsupported registry schema: {schema!r}"))

    if "releases" not in data:
        return Err(_corrupt(path, "missing releases[]"))
    items = get_list(data, "releases")
    if items is None:
        return Err(_corrupt(path, "releases must be a list"))

    records: list[ReleaseRecord] = []
    seen: set[str] = set()
    for index, item in enumerate(items):
        record = _record_from_dict(item, path=path, index=index)
        if isinstance(record, Err):
            return record
        if record.value.version in seen:
            return Err(_corrupt(path, f"version {record.value.version} appears more than once"))
        seen.add(record.value.version)
        records.append(record.value)

    return Ok(
        Registry(
            releases=tuple(records),
            extra=MappingProxyType(_unknown_fields(data, DOCUMENT_FIELDS)),
        )
    )


def load(path: Path) -> Result[Registry, RegistryError]:
    """Load the registry at path; a missing file is an empty registry."""
    if not path.exists():
        return Ok(Registry())

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(_corrupt(path, f"failed to read registry: {e}"))

    try:
        obj: object = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting raises RecursionError.
        return Err(_corrupt(path, f"invalid JSON: {e}"))

    return registry_from_dict(obj, path=path)


def dumps(registry: Registry) -> str:
    return json.dumps(registry_to_dict(registry), indent=2) + "\n"


def save(registry: Registry, path: Path) -> Result[None, RegistryError]:
    """Write the full registry atomically."""
    try:
        atomic_write_text(path, dumps(registry), encoding="utf-8")
    except OSError as e:
        return Err(
            RegistryError(
                kind="write_error",
                message=f"failed to write registry {path}: {e}",
                hint="the previous registry file was left unchanged",
            )
        )
    return Ok(None)


def add_release(
    registry: Registry,
    record: ReleaseRecord,
    *,
    overwrite: bool = False,
) -> Result[Registry, RegistryError]:
    """Append record, or replace an existing version in place when overwrite is set.

    A replaced record keeps the release-level fields other tools added to it;
    per-archive fields are dropped with the archives they described.
    """
    releases = list(registry.releases)
    for i, existing in enumerate(releases):
        if existing.version != record.version:
            continue
        if not overwrite:
            return Err(
                RegistryError(
                    kind="duplicate_version",
                    message=f"version {record.version} is already in the registry",
                    hint="pass --overwrite to replace it",
                )
            )
        releases[i] = replace(record, extra=MappingProxyType({**existing.extra, **record.extra}))
        return Ok(replace(registry, releases=tuple(releases)))

    releases.append(record)
    return Ok(replace(registry, releases=tuple(releases)))


def most_recent(registry: Registry) -> ReleaseRecord | None:
    """The last appended record, which is not necessarily the highest version."""
    if not registry.releases:
        return None
    return registry.releases[-1]


def find_release(registry: Registry, version: str) -> ReleaseRecord | None:
    wanted = version.strip()
    for record in registry.releases:
        if record.version == wanted:
            return record
    return None


def select_release(registry: Registry, version: str | None = None) -> Result[ReleaseRecord, RegistryError]:
    """Pick the record redirects are generated for."""
    if version is None:
        latest = most_recent(registry)
        if latest is None:
            return Err(
                RegistryError(
                    kind="release_not_found",
                    message="the registry has no releases",
                    hint="run add-release first",
                )
            )
        return Ok(latest)

    record = find_release(registry, version)
    if record is None:
        known = ", ".join(registry.versions) or "none"
        return Err(
            RegistryError(
                kind="release_not_found",
                message=f"version {version} is not in the registry",
                hint=f"known versions: {known}",
            )
        )
    return Ok(record)
