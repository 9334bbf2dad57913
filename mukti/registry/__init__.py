"""Release registry: records, the JSON store, and redirect generation."""

from .errors import RegistryError
from .flavors import Flavor, RenderedOutput, render
from .model import ArchiveKey, ArchiveKind, ReleaseRecord, build_record
from .redirects import Alias, RedirectRule, resolve_rules
from .store import (
    Registry,
    add_release,
    find_release,
    load,
    most_recent,
    save,
    select_release,
)

__all__ = [
    "Alias",
    "ArchiveKey",
    "ArchiveKind",
    "Flavor",
    "RedirectRule",
    "Registry",
    "RegistryError",
    "ReleaseRecord",
    "RenderedOutput",
    "add_release",
    "build_record",
    "find_release",
    "load",
    "most_recent",
    "render",
    "resolve_rules",
    "save",
    "select_release",
]
