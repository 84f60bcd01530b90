"""Exceptions raised while reading and applying configuration files.

Responsibilities:
- Give every failure mode of the engine its own exception type.
- Carry the structured context (file, line, key) that CLI diagnostics render.

All exceptions derive from `ConfigError`, itself a `ValueError`, so callers that
only care about "the config is bad" can catch one type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ConfigError(ValueError):
    """Base class for configuration failures.

    Attributes:
        detail: Human-readable failure description without location context.
        hint: Optional remediation hint for CLI output.
    """

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        """Initialize a configuration error with an optional remediation hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class ConfigReadError(ConfigError):
    """Raised when a config file, or a file it sources, cannot be read."""

    def __init__(self, *, path: Path, detail: str) -> None:
        """Initialize a read error for `path`."""

        super().__init__(
            f"cannot read `{path}`: {detail}",
            hint="Check that the file exists and is readable.",
        )
        self.path = path


class ConfigStructureError(ConfigError):
    """Raised for malformed file structure (indented first line, include cycles)."""

    def __init__(self, *, path: Path, line: int, detail: str, hint: str | None = None) -> None:
        """Initialize a structural error located at `path` line `line`."""

        super().__init__(f"{path} line {line}: {detail}", hint=hint)
        self.path = path
        self.line = line


class UnknownFieldError(ConfigError):
    """Raised when a key resolves to no field of the destination record.

    Attributes:
        candidates: Every field name that was tried, in resolution order.
    """

    def __init__(self, *, name: str, plural: str, candidates: Sequence[str]) -> None:
        """Initialize an unknown-option error naming every form that was tried.

        Each distinct form is named once, in resolution order (`A or B`,
        `A, B or C`).
        """

        forms = list(dict.fromkeys([name, plural, *candidates]))
        if len(forms) < 2:
            tried = f"{name} or {plural}"
        else:
            tried = f"{', '.join(forms[:-1])} or {forms[-1]}"
        super().__init__(f"unknown option (field {tried} is missing)")
        self.candidates = tuple(candidates)


class UnsupportedTypeError(ConfigError):
    """Raised when neither a handler nor a converter chain covers a field type."""

    def __init__(self, *, type_name: str) -> None:
        """Initialize an unsupported-type error for `type_name`."""

        super().__init__(
            f"don't know how to set fields of the type {type_name}",
            hint="Register a converter for this type or pass a handler for the field.",
        )
        self.type_name = type_name


class HandlerError(ConfigError):
    """Raised when a caller-supplied field handler fails."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"{detail} (from handler)")


class ConverterError(ConfigError):
    """Raised when a converter in a type's chain rejects its input."""


class ConfigParseError(ConfigError):
    """Raised by `parse` for any failure while applying one logical line.

    Attributes:
        path: File the offending line physically came from.
        line: 1-based line number within `path`.
        key: Raw key token of the offending line.
    """

    def __init__(
        self,
        *,
        path: Path,
        line: int,
        key: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a line-located parse error."""

        super().__init__(f"{path} line {line}: error parsing {key}: {detail}", hint=hint)
        self.path = path
        self.line = line
        self.key = key
        self.reason = detail
