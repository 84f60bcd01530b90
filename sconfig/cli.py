"""Command-line interface for sconfig.

Responsibilities:
- Show how a configuration file reads after comments, continuations and
  `source` directives are applied.
- Locate a configuration file in the conventional search locations.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from .cli_rendering import echo_lines, echo_lines_yaml, exit_with_command_error
from .discovery import config_locations, find_config
from .errors import ConfigError
from .reader import read_lines
from .telemetry import configure_logging

_OUTPUT_FORMATS = ("text", "yaml")

app = typer.Typer(
    name="sconfig",
    no_args_is_help=True,
    help="Inspect sconfig configuration files.",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log file reads and includes to stderr."),
    ] = False,
) -> None:
    """Configure logging before any command runs."""

    # Drop loguru's default stderr sink; events go through ours only.
    logger.remove()
    configure_logging(sys.stderr, verbose=verbose)


@app.command("lines")
def lines_command(
    config_file: Annotated[Path, typer.Argument(help="Path to the configuration file.")],
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: `text` or `yaml`."),
    ] = "text",
) -> None:
    """Print the logical lines of a configuration file with their origin."""

    try:
        if output_format not in _OUTPUT_FORMATS:
            raise ConfigError(
                f"unknown output format `{output_format}`",
                hint=f"Use one of: {', '.join(_OUTPUT_FORMATS)}.",
            )
        lines = read_lines(config_file)
    except Exception as exc:
        exit_with_command_error("lines", exc)

    if output_format == "yaml":
        echo_lines_yaml(lines)
    else:
        echo_lines(lines)


@app.command("find")
def find_command(
    name: Annotated[str, typer.Argument(help="Configuration file name, e.g. `myapp/config`.")],
) -> None:
    """Print the first existing location of a configuration file."""

    found = find_config(name)
    if found is None:
        searched = ", ".join(str(location) for location in config_locations(name))
        exit_with_command_error(
            "find",
            ConfigError(
                f"no configuration file named `{name}` found",
                hint=f"Searched: {searched}.",
            ),
        )
    typer.echo(str(found))


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
