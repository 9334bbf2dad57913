from __future__ import annotations

from pathlib import Path

import typer

from mukti.cli.commands._helpers import exit_with_error, unwrap_or_exit
from mukti.cli.context import build_context
from mukti.platform.files import atomic_write_text
from mukti.registry.errors import RegistryError
from mukti.registry.flavors import Flavor, render
from mukti.registry.parsing import merge_aliases, parse_alias, parse_alias_selector
from mukti.registry.redirects import PERMANENT_REDIRECT, Alias, resolve_rules
from mukti.registry.store import load, select_release

DEFAULT_FLAVOR = Flavor.NETLIFY


def generate_redirects_cmd(
    ctx: typer.Context,
    out_dir: Path = typer.Argument(..., help="Directory the redirects file is written to"),
    flavor_name: str | None = typer.Option(
        None,
        "--flavor",
        help="Output format: " + ", ".join(f.value for f in Flavor),
    ),
    aliases: list[str] | None = typer.Option(
        None,
        "--alias",
        metavar="NAME=TARGET:KIND",
        help="Alias to generate a redirect for (repeatable)",
    ),
    release: str | None = typer.Option(
        None, "--release", help="Version to redirect to (default: most recently added)"
    ),
    prefix: str | None = typer.Option(None, "--prefix", help="Path prefix for aliases"),
    status_code: int | None = typer.Option(
        None, "--status-code", help="HTTP status for the redirects (default 301)"
    ),
) -> None:
    """Generate redirects from aliases to the archives of a release."""
    cli = build_context(ctx)
    cfg = cli.config.redirects

    name = flavor_name or cfg.flavor or DEFAULT_FLAVOR.value
    flavor = Flavor.parse(name)
    if flavor is None:
        exit_with_error(
            RegistryError(
                kind="invalid_option",
                message=f"unknown flavor {name!r}",
                hint="flavors: " + ", ".join(f.value for f in Flavor),
            ),
            cli.console,
        )

    from_config: list[Alias] = [
        unwrap_or_exit(parse_alias_selector(alias, selector), cli.console)
        for alias, selector in cfg.aliases
    ]
    from_cli: list[Alias] = [unwrap_or_exit(parse_alias(text), cli.console) for text in aliases or []]
    alias_table = unwrap_or_exit(merge_aliases(from_config, from_cli), cli.console)
    if not alias_table:
        cli.console.warning("no aliases given; the output will contain no redirects")

    registry = unwrap_or_exit(load(cli.json_path), cli.console)
    record = unwrap_or_exit(select_release(registry, release), cli.console)
    if status_code is None:
        status_code = cfg.status_code if cfg.status_code is not None else PERMANENT_REDIRECT
    rules = unwrap_or_exit(
        resolve_rules(
            record,
            alias_table,
            prefix=prefix if prefix is not None else (cfg.prefix or "/"),
            status_code=status_code,
        ),
        cli.console,
    )

    output = render(flavor, rules)
    out_path = out_dir / output.filename
    try:
        atomic_write_text(out_path, output.content, encoding="utf-8")
    except OSError as e:
        exit_with_error(
            RegistryError(kind="write_error", message=f"failed to write {out_path}: {e}"),
            cli.console,
        )

    if record.status == "yanked":
        cli.console.warning(f"release {record.version} is marked as yanked")
    cli.console.success(f"wrote {len(rules)} redirect(s) for {record.version} to {out_path}")
