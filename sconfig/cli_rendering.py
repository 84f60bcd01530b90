"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and logical-line listings.
"""

from __future__ import annotations

from typing import NoReturn, Sequence

import typer
import yaml

from .errors import ConfigError
from .reader import LogicalLine


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    if isinstance(exc, ConfigError) and exc.hint:
        typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1) from exc


def echo_lines(lines: Sequence[LogicalLine]) -> None:
    """Print one `path:line: text` row per logical line."""

    for line in lines:
        typer.echo(f"{line.path}:{line.number}: {line.text}")


def echo_lines_yaml(lines: Sequence[LogicalLine]) -> None:
    """Print logical lines as a YAML list of `path`/`line`/`text` mappings."""

    payload = [
        {"path": str(line.path), "line": line.number, "text": line.text}
        for line in lines
    ]
    typer.echo(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), nl=False)
