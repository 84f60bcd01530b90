"""Logging for configuration reads and parses."""

from .logger import ParseLogger, configure_logging

__all__ = ["ParseLogger", "configure_logging"]
