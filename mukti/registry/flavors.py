"""Output formats for redirect rules.

The set of flavors is closed: adding one means adding an enum member and a
renderer below. Renderers only format rules; they never look at the
registry.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import tomli_w

from mukti.registry.redirects import RedirectRule

HEADER = "Generated by mukti"


class Flavor(Enum):
    NETLIFY = "netlify"
    NETLIFY_TOML = "netlify-toml"
    JSON = "json"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Flavor | None:
        value = text.strip().lower()
        for flavor in cls:
            if flavor.value == value:
                return flavor
        return None

    @property
    def filename(self) -> str:
        return _FILENAMES[self]


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    filename: str
    content: str


def render_netlify(rules: Sequence[RedirectRule]) -> str:
    """Netlify ``_redirects``: one ``FROM TO STATUS`` line per rule."""
    lines = [f"# {HEADER}", ""]
    lines.extend(f"{r.alias_path} {r.target_url} {r.status_code}" for r in rules)
    return "\n".join(lines) + "\n"


def render_netlify_toml(rules: Sequence[RedirectRule]) -> str:
    doc = {
        "redirects": [
            {
                "from": r.alias_path,
                "to": r.target_url,
                "status": r.status_code,
                "force": True,
            }
            for r in rules
        ]
    }
    return f"# {HEADER}\n\n" + tomli_w.dumps(doc)


def render_json(rules: Sequence[RedirectRule]) -> str:
    doc = {
        "redirects": [
            {"from": r.alias_path, "to": r.target_url, "status": r.status_code} for r in rules
        ]
    }
    return json.dumps(doc, indent=2) + "\n"


_FILENAMES: dict[Flavor, str] = {
    Flavor.NETLIFY: "_redirects",
    Flavor.NETLIFY_TOML: "netlify.toml",
    Flavor.JSON: "redirects.json",
}

_RENDERERS: dict[Flavor, Callable[[Sequence[RedirectRule]], str]] = {
    Flavor.NETLIFY: render_netlify,
    Flavor.NETLIFY_TOML: render_netlify_toml,
    Flavor.JSON: render_json,
}


def render(flavor: Flavor, rules: Sequence[RedirectRule]) -> RenderedOutput:
    return RenderedOutput(filename=flavor.filename, content=_RENDERERS[flavor](rules))
