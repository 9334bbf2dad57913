"""Release records and their validation.

A record is immutable once built. ``build_record`` is the only way the CLI
and the store construct one, so every record in memory has passed the same
checks whether it came from the command line or from ``releases.json``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Literal
from urllib.parse import urlsplit

from mukti.core.result import Err, Ok, Result
from mukti.registry.errors import RegistryError, invalid_record
from mukti.registry.semver import SemVer, parse_version

ReleaseStatus = Literal["active", "yanked"]
RELEASE_STATUSES: tuple[ReleaseStatus, ...] = ("active", "yanked")


class ArchiveKind(Enum):
    """Archive formats a release can ship."""

    TAR_GZ = "tar.gz"
    TAR_XZ = "tar.xz"
    TAR_ZST = "tar.zst"
    TAR_BZ2 = "tar.bz2"
    TAR = "tar"
    ZIP = "zip"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> ArchiveKind | None:
        # Accept ".tar.gz" as well, as written by some build scripts.
        value = text.strip().lstrip(".").lower()
        for kind in cls:
            if kind.value == value:
                return kind
        return None


@dataclass(frozen=True, slots=True)
class ArchiveKey:
    target: str
    kind: ArchiveKind

    def __str__(self) -> str:
        return f"{self.target}:{self.kind}"


def _empty_archives() -> Mapping[ArchiveKey, str]:
    return MappingProxyType({})


def _empty_extra() -> Mapping[str, object]:
    return MappingProxyType({})


def _empty_archive_extra() -> Mapping[ArchiveKey, Mapping[str, object]]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    version: str
    archive_prefix: str
    release_url: str | None = None
    # (target, kind) -> file name, in the order archives were given
    archives: Mapping[ArchiveKey, str] = field(default_factory=_empty_archives)
    status: ReleaseStatus = "active"
    # Fields written by other tools (checksums, metadata); carried through rewrites untouched.
    extra: Mapping[str, object] = field(default_factory=_empty_extra)
    archive_extra: Mapping[ArchiveKey, Mapping[str, object]] = field(
        default_factory=_empty_archive_extra
    )

    @property
    def semver(self) -> SemVer:
        parsed = parse_version(self.version)
        assert parsed is not None, f"record built with invalid version {self.version!r}"
        return parsed

    @property
    def is_complete(self) -> bool:
        """A record with no archives was published but never finished."""
        return bool(self.archives)

    def archive_url(self, key: ArchiveKey) -> str | None:
        name = self.archives.get(key)
        if name is None:
            return None
        return f"{self.archive_prefix}/{name}"


def is_url_like(value: str) -> bool:
    """True when value has both a scheme and a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc) and not any(c.isspace() for c in value)


def build_record(
    *,
    version: str,
    archive_prefix: str,
    archives: Iterable[tuple[ArchiveKey, str]],
    release_url: str | None = None,
    status: ReleaseStatus = "active",
    extra: Mapping[str, object] | None = None,
    archive_extra: Mapping[ArchiveKey, Mapping[str, object]] | None = None,
) -> Result[ReleaseRecord, RegistryError]:
    """Validate inputs and build a ReleaseRecord.

    ``extra`` and ``archive_extra`` hold fields this tool does not interpret;
    they are stored as given so the store can write them back.
    """
    version = version.strip()
    if not version:
        return Err(invalid_record("release version is empty"))
    if parse_version(version) is None:
        return Err(
            invalid_record(
                f"invalid version {version!r}",
                hint="expected a semantic version such as 1.2.3 or 1.2.3-beta.1",
            )
        )

    prefix = archive_prefix.strip().rstrip("/")
    if not is_url_like(prefix):
        return Err(
            invalid_record(
                f"invalid archive prefix {archive_prefix!r} for version {version}",
                hint="expected a URL with a scheme and host, e.g. https://example.com/dl",
            )
        )

    if release_url is not None:
        release_url = release_url.strip()
        if not is_url_like(release_url):
            return Err(
                invalid_record(
                    f"invalid release URL {release_url!r} for version {version}",
                    hint="expected a URL with a scheme and host",
                )
            )

    if status not in RELEASE_STATUSES:
        return Err(invalid_record(f"invalid status {status!r} for version {version}"))

    by_key: dict[ArchiveKey, str] = {}
    for key, name in archives:
        name = name.strip()
        if not key.target.strip():
            return Err(invalid_record(f"archive {name!r} for version {version} has an empty target"))
        if not name:
            return Err(invalid_record(f"archive {key} for version {version} has an empty file name"))
        if "/" in name:
            return Err(
                invalid_record(
                    f"archive file name {name!r} for version {version} must not contain '/'",
                    hint="put the directory part in --archive-prefix",
                )
            )
        # The name ends up in redirect lines whose fields are space-separated.
        if any(c.isspace() for c in name):
            return Err(
                invalid_record(
                    f"archive file name {name!r} for version {version} must not contain whitespace",
                    hint="rename the archive or percent-encode the name",
                )
            )
        if key in by_key:
            return Err(invalid_record(f"archive {key} given more than once for version {version}"))
        by_key[key] = name

    kept_archive_extra = {
        key: MappingProxyType(dict(fields))
        for key, fields in (archive_extra or {}).items()
        if key in by_key and fields
    }

    return Ok(
        ReleaseRecord(
            version=version,
            archive_prefix=prefix,
            release_url=release_url,
            archives=MappingProxyType(by_key),
            status=status,
            extra=MappingProxyType(dict(extra or {})),
            archive_extra=MappingProxyType(kept_archive_extra),
        )
    )
