"""Structured parse logging utilities.

Responsibilities:
- Emit concise, deterministic event lines for file reads and field assignment.
- Keep library logging silent until an application opts in.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from loguru import logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


_handler_id: int | None = None


def configure_logging(sink: TextIO | None = None, verbose: bool = False) -> int:
    """Route `sconfig` log events to `sink` and enable them.

    The package disables its own logger on import; applications (and the CLI)
    call this to see the events. Only the sink added by a previous call is
    replaced; other loguru sinks are left alone.

    Returns:
        The loguru handler id of the new sink.
    """

    global _handler_id

    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            # The application already removed it, e.g. with `logger.remove()`.
            pass
    _handler_id = logger.add(
        sink or sys.stderr,
        format="{message}",
        level="DEBUG" if verbose else "INFO",
        filter="sconfig",
        colorize=False,
    )
    logger.enable("sconfig")
    return _handler_id


class ParseLogger:
    """Emit deterministic event lines for configuration reads and parses."""

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured log line."""

        logger.log(level, f"[sconfig] level={level} event={event}{_format_context(context)}")

    def log_read(self, path: Path, line_count: int) -> None:
        """Emit a file-read event with the number of logical lines produced."""

        self._emit("DEBUG", "read", file=path, lines=line_count)

    def log_source(self, path: Path, parent: Path, parent_line: int) -> None:
        """Emit an include event for a `source` directive."""

        self._emit("DEBUG", "source", file=path, parent=parent, line=parent_line)

    def log_field_set(self, field: str, route: str, path: Path, line: int) -> None:
        """Emit a field-assignment event naming the route (handler or converter)."""

        self._emit("DEBUG", route, field=field, file=path, line=line)

    def log_parse_complete(self, path: Path, line_count: int) -> None:
        """Emit a parse-complete event."""

        self._emit("INFO", "parsed", file=path, lines=line_count)

    def log_failure(self, path: Path, line: int, error_type: str) -> None:
        """Emit a parse-failure event without the offending value."""

        self._emit("ERROR", "failure", file=path, line=line, error_type=error_type)

    def log_abort(self, path: Path, error_type: str) -> None:
        """Emit the fatal event `must_parse` logs before exiting."""

        self._emit("CRITICAL", "abort", file=path, error_type=error_type)
