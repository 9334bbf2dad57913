from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from mukti.core.config import DEFAULT_CONFIG_PATH, DEFAULT_JSON_PATH, Config, load_config
from mukti.core.errors import ErrorCode
from mukti.core.result import Err
from mukti.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the subcommand name."""

    json_path: Path | None = None
    config_path: Path | None = None


@dataclass(frozen=True, slots=True)
class CLIContext:
    json_path: Path
    config: Config
    console: ConsoleProtocol


def build_context(ctx: typer.Context) -> CLIContext:
    """Resolve the registry path and config for one invocation."""
    options = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    console = RichConsole()

    # An explicit --config must exist; the default one is optional.
    config_path = options.config_path or DEFAULT_CONFIG_PATH
    config_result = load_config(config_path, required=options.config_path is not None)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    json_path = options.json_path or config.json_path or DEFAULT_JSON_PATH
    return CLIContext(json_path=json_path, config=config, console=console)
