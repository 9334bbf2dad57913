"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, TypeVar

import typer

from mukti.core.errors import ErrorCode
from mukti.core.result import Err, Ok, Result
from mukti.output.console import ConsoleProtocol
from mukti.registry.errors import RegistryError

T = TypeVar("T")


def registry_error_code(error: RegistryError) -> ErrorCode:
    if error.kind in {"corrupt_registry", "write_error"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def format_error(error: RegistryError) -> str:
    """One diagnostic line: ``<Category>: <message> (hint: <hint>)``."""
    line = f"{error.category}: {error.message}"
    if error.hint:
        line += f" (hint: {error.hint})"
    return line


def exit_with_error(error: RegistryError, console: ConsoleProtocol) -> NoReturn:
    console.error(format_error(error))
    raise typer.Exit(code=int(registry_error_code(error)))


def unwrap_or_exit(result: Result[T, RegistryError], console: ConsoleProtocol) -> T:
    """Return the Ok value, or report the error and exit non-zero.

    Replaces the common pattern:
        match result:
            case Err(e):
                console.error(...)
                raise typer.Exit(code=...)
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        exit_with_error(result.error, console)
    assert isinstance(result, Ok)
    return result.value
