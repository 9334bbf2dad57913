from __future__ import annotations

from pathlib import Path

import typer

from mukti import __version__
from mukti.cli.commands.add_release import add_release_cmd
from mukti.cli.commands.generate_redirects import generate_redirects_cmd
from mukti.cli.commands.list_releases import list_releases_cmd
from mukti.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Maintain a releases.json registry and generate download redirects from it.",
)


# Commands
app.command("add-release")(add_release_cmd)
app.command("generate-redirects")(generate_redirects_cmd)
app.command("list-releases")(list_releases_cmd)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_path: Path | None = typer.Option(
        None,
        "--json",
        help="Registry file to read and update (default: .releases.json)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: mukti.toml, if present)",
    ),
) -> None:
    ctx.obj = GlobalOptions(json_path=json_path, config_path=config_path)


def main() -> None:
    app(prog_name="mukti-bin")
