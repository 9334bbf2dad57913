from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RegistryErrorKind = Literal[
    "invalid_record",
    "invalid_alias",
    "invalid_option",
    "duplicate_version",
    "corrupt_registry",
    "write_error",
    "unresolved_alias",
    "release_not_found",
]

_CATEGORIES: dict[str, str] = {
    "invalid_record": "InvalidRecord",
    "invalid_alias": "InvalidAlias",
    "invalid_option": "InvalidOption",
    "duplicate_version": "DuplicateVersion",
    "corrupt_registry": "CorruptRegistry",
    "write_error": "WriteError",
    "unresolved_alias": "UnresolvedAlias",
    "release_not_found": "ReleaseNotFound",
}


@dataclass(frozen=True, slots=True)
class RegistryError:
    kind: RegistryErrorKind
    message: str
    hint: str | None = None

    @property
    def category(self) -> str:
        """Name printed on the diagnostic line, e.g. ``DuplicateVersion``."""
        return _CATEGORIES[self.kind]


def invalid_record(message: str, hint: str | None = None) -> RegistryError:
    return RegistryError(kind="invalid_record", message=message, hint=hint)
