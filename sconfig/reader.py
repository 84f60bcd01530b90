"""Logical line reader for configuration files.

Responsibilities:
- Strip comments and blank lines, and collapse interior whitespace.
- Merge indented continuation lines into the directive above them.
- Splice in files named by `source <path>` directives, recursively.

Key types:
- `LogicalLine`: one assembled directive tagged with its physical origin.

Key public functions:
- `read_lines`: read a file into its logical lines.
- `remove_comments`, `collapse_whitespace`: single-line normalization steps.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from .errors import ConfigReadError, ConfigStructureError
from .telemetry import ParseLogger

_SOURCE_PREFIX = "source "

_log = ParseLogger()


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """One configuration directive after comment, whitespace and continuation handling.

    Attributes:
        path: File the directive physically starts in.
        number: 1-based physical line number of the directive's first line in `path`.
        text: Normalized directive text, `<key> <value> [<value> ...]`.
    """

    path: Path
    number: int
    text: str

    def tokens(self) -> list[str]:
        """Split the directive into its key and value tokens."""

        return self.text.split(" ")


def remove_comments(text: str) -> str:
    """Drop everything from the first unescaped `#`; `\\#` becomes a literal `#`."""

    start = 0
    while True:
        index = text.find("#", start)
        if index < 0:
            return text
        if index > 0 and text[index - 1] == "\\":
            text = text[: index - 1] + text[index:]
            start = index
            continue
        return text[:index]


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space, honouring backslash escapes.

    A whitespace character preceded by a backslash inside a run is kept, `\\\\`
    produces one backslash, a lone backslash is dropped, and a space in the last
    position is dropped.
    """

    collapsed: list[str] = []
    previous_space = False
    last = len(text) - 1
    for index, char in enumerate(text):
        escaped = index > 0 and text[index - 1] == "\\"
        if char == "\\":
            if escaped:
                collapsed.append("\\")
        elif char.isspace():
            if previous_space:
                if escaped:
                    collapsed.append(char)
            else:
                previous_space = True
                if index != last:
                    collapsed.append(" ")
        else:
            collapsed.append(char)
            previous_space = False
    return "".join(collapsed)


def read_lines(path: Path | str) -> list[LogicalLine]:
    """Read `path` into its logical lines, splicing sourced files in place.

    Args:
        path: Configuration file to read. Relative paths, including those in
            `source` directives, resolve against the current working directory.

    Returns:
        Logical lines in encounter order. Sourced lines keep the path and line
        number of the file they came from.

    Raises:
        ConfigReadError: If the file or a sourced file cannot be opened or decoded.
        ConfigStructureError: If a file starts with an indented line, or files
            source each other in a cycle.
    """

    return _read_file(Path(path), ())


def _read_file(path: Path, active: tuple[Path, ...]) -> list[LogicalLine]:
    """Read one file; `active` holds the resolved paths currently being sourced."""

    lines: list[LogicalLine] = []
    try:
        with path.open("r", encoding="utf-8") as handle:
            for number, raw in enumerate(handle, start=1):
                raw = raw.rstrip("\r\n")
                indented = raw[:1].isspace()
                stripped = raw.strip()
                if not stripped or stripped.startswith("#"):
                    continue

                text = collapse_whitespace(remove_comments(stripped).rstrip())
                if not text:
                    continue
                if indented:
                    if not lines:
                        raise ConfigStructureError(
                            path=path,
                            line=number,
                            detail="first line can't be indented",
                            hint="Remove the leading whitespace; indentation continues the previous line.",
                        )
                    lines[-1] = replace(lines[-1], text=f"{lines[-1].text} {text}")
                elif text.startswith(_SOURCE_PREFIX):
                    lines.extend(_read_sourced(text[len(_SOURCE_PREFIX):], path, number, active))
                else:
                    lines.append(LogicalLine(path=path, number=number, text=text))
    except OSError as exc:
        raise ConfigReadError(path=path, detail=exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ConfigReadError(path=path, detail=f"not valid UTF-8 ({exc.reason})") from exc

    _log.log_read(path, len(lines))
    return lines


def _read_sourced(
    target: str, parent: Path, parent_line: int, active: tuple[Path, ...]
) -> list[LogicalLine]:
    """Read the file named by a `source` directive at `parent` line `parent_line`."""

    sourced = Path(target)
    chain = active + (parent.resolve(),)
    if sourced.resolve() in chain:
        raise ConfigStructureError(
            path=parent,
            line=parent_line,
            detail=f"`source {target}` includes a file that is already being read",
        )
    _log.log_source(sourced, parent, parent_line)
    return _read_file(sourced, chain)
