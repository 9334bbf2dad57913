from __future__ import annotations

import json
import tomllib

from mukti.registry.flavors import Flavor, render
from mukti.registry.redirects import RedirectRule

RULES = (
    RedirectRule("/linux", "https://ex/dl/app-linux.tar.gz", 301),
    RedirectRule("/windows", "https://ex/dl/app-windows.zip", 301),
)


def test_parse_flavor() -> None:
    assert Flavor.parse("netlify") is Flavor.NETLIFY
    assert Flavor.parse("Netlify-TOML") is Flavor.NETLIFY_TOML
    assert Flavor.parse("apache") is None


def test_netlify_redirects_file() -> None:
    output = render(Flavor.NETLIFY, RULES)

    assert output.filename == "_redirects"
    assert output.content == (
        "# Generated by mukti\n"
        "\n"
        "/linux https://ex/dl/app-linux.tar.gz 301\n"
        "/windows https://ex/dl/app-windows.zip 301\n"
    )


def test_netlify_toml() -> None:
    output = render(Flavor.NETLIFY_TOML, RULES)

    assert output.filename == "netlify.toml"
    assert output.content.startswith("# Generated by mukti\n")
    parsed = tomllib.loads(output.content)
    assert parsed["redirects"] == [
        {"from": "/linux", "to": "https://ex/dl/app-linux.tar.gz", "status": 301, "force": True},
        {"from": "/windows", "to": "https://ex/dl/app-windows.zip", "status": 301, "force": True},
    ]


def test_json() -> None:
    output = render(Flavor.JSON, RULES)

    assert output.filename == "redirects.json"
    assert json.loads(output.content)["redirects"][1] == {
        "from": "/windows",
        "to": "https://ex/dl/app-windows.zip",
        "status": 301,
    }


def test_every_flavor_renders_empty_rules() -> None:
    for flavor in Flavor:
        output = render(flavor, ())
        assert output.filename == flavor.filename
        assert output.content.endswith("\n")
