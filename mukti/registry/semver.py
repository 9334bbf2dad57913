from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _identifier_key(ident: str) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones.
    if ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    pre: tuple[str, ...] = ()
    build: str = field(default="", compare=False)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.pre)

    def precedence_key(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        """Sort key following SemVer precedence (build metadata ignored)."""
        # A release sorts after all of its pre-releases.
        release_flag = 0 if self.pre else 1
        return (
            self.major,
            self.minor,
            self.patch,
            release_flag,
            tuple(_identifier_key(p) for p in self.pre),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() < other.precedence_key()

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            out += "-" + ".".join(self.pre)
        if self.build:
            out += "+" + self.build
        return out


def parse_version(text: str) -> SemVer | None:
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    pre = tuple(m.group(4).split(".")) if m.group(4) else ()
    return SemVer(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        pre=pre,
        build=m.group(5) or "",
    )


def version_range(version: SemVer) -> str:
    """Compatibility range a version belongs to: ``1``, ``0.3`` or ``0.0.7``."""
    if version.major >= 1:
        return str(version.major)
    if version.minor >= 1:
        return f"0.{version.minor}"
    return f"0.0.{version.patch}"
