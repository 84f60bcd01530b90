"""Module entrypoint for running sconfig as ``python -m sconfig``."""

from __future__ import annotations

from sconfig.cli import main


if __name__ == "__main__":
    main()
