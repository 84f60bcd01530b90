"""Locate configuration files in conventional places.

Probe order for a file `name`:

1. `$XDG_CONFIG_HOME/name`, or `$HOME/.config/name` when `XDG_CONFIG_HOME` is unset
2. `$HOME/.name`
3. `/etc/name`
4. `/usr/local/etc/name`
5. `/usr/pkg/etc/name`
6. `./name`
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from .parsing import normalize_optional_string

_SYSTEM_CONFIG_DIRS = (Path("/etc"), Path("/usr/local/etc"), Path("/usr/pkg/etc"))


def config_locations(name: str, environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return every candidate path for `name`, in probe order."""

    env = os.environ if environ is None else environ
    name = name.lstrip("/")
    xdg_config_home = normalize_optional_string(env.get("XDG_CONFIG_HOME"))
    home = normalize_optional_string(env.get("HOME"))

    locations: list[Path] = []
    if xdg_config_home is not None:
        locations.append(Path(xdg_config_home) / name)
    elif home is not None:
        locations.append(Path(home) / ".config" / name)
    if home is not None:
        locations.append(Path(home) / f".{name}")
    locations.extend(directory / name for directory in _SYSTEM_CONFIG_DIRS)
    locations.append(Path(".") / name)
    return locations


def find_config(name: str, environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the first existing candidate path for `name`, or `None`."""

    for location in config_locations(name, environ):
        if location.exists():
            return location
    return None
