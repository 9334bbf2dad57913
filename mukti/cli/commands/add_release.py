from __future__ import annotations

import typer

from mukti.cli.commands._helpers import unwrap_or_exit
from mukti.cli.context import build_context
from mukti.registry.model import ArchiveKey, build_record
from mukti.registry.parsing import parse_archive
from mukti.registry.store import add_release, load, most_recent, save


def add_release_cmd(
    ctx: typer.Context,
    version: str = typer.Option(..., "--version", help="Version to publish (e.g. 1.2.3)"),
    archive_prefix: str = typer.Option(
        ..., "--archive-prefix", help="Base URL shared by all archives of this release"
    ),
    release_url: str | None = typer.Option(
        None, "--release-url", help="URL of the human-facing release page"
    ),
    archives: list[str] | None = typer.Option(
        None,
        "--archive",
        metavar="TARGET:KIND=FILENAME",
        help="Archive built for a target (repeatable)",
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace an existing record for the same version"
    ),
) -> None:
    """Add a release to the registry."""
    cli = build_context(ctx)

    parsed: list[tuple[ArchiveKey, str]] = []
    for text in archives or []:
        parsed.append(unwrap_or_exit(parse_archive(text), cli.console))

    record = unwrap_or_exit(
        build_record(
            version=version,
            archive_prefix=archive_prefix,
            release_url=release_url,
            archives=parsed,
        ),
        cli.console,
    )

    registry = unwrap_or_exit(load(cli.json_path), cli.console)
    replaced = record.version in registry.versions
    previous = most_recent(registry)
    updated = unwrap_or_exit(add_release(registry, record, overwrite=overwrite), cli.console)
    unwrap_or_exit(save(updated, cli.json_path), cli.console)

    if not replaced and previous is not None and record.semver < previous.semver:
        cli.console.warning(
            f"{record.version} is lower than {previous.version}; redirects now follow "
            f"{record.version} because it was added last"
        )
    if not record.is_complete:
        cli.console.warning(f"release {record.version} was recorded without any archives")
    verb = "replaced" if replaced else "added"
    cli.console.success(
        f"{verb} {record.version} ({len(record.archives)} archive(s)) in {cli.json_path}"
    )
