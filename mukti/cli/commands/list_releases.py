from __future__ import annotations

import typer

from mukti.cli.commands._helpers import unwrap_or_exit
from mukti.cli.context import build_context
from mukti.output.console import Style
from mukti.registry.semver import version_range
from mukti.registry.store import load, most_recent


def list_releases_cmd(ctx: typer.Context) -> None:
    """List releases in the order they were added."""
    cli = build_context(ctx)
    registry = unwrap_or_exit(load(cli.json_path), cli.console)

    latest = most_recent(registry)
    if latest is None:
        cli.console.info(f"no releases in {cli.json_path}")
        return

    for record in registry.releases:
        line = (
            f"{record.version}  range={version_range(record.semver)}  "
            f"status={record.status}  archives={len(record.archives)}"
        )
        if record.semver.is_prerelease:
            line += "  prerelease"
        if record is latest:
            cli.console.print(f"{line}  (latest)", Style.BOLD)
        elif record.status == "yanked" or not record.is_complete:
            cli.console.print(line, Style.DIM)
        else:
            cli.console.print(line)
