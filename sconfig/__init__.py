"""Top-level package for sconfig.

A small configuration file format mapped onto typed records: one
`key value [value ...]` directive per line, `#` comments, indented
continuation lines and `source` includes. The main entry point is `parse`.
"""

from loguru import logger

from .binding import FieldBinding, RecordBinding, bind_attribute
from .converters import default_registry, register_builtin_types
from .discovery import find_config
from .errors import (
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    ConfigStructureError,
    ConverterError,
    HandlerError,
    UnknownFieldError,
    UnsupportedTypeError,
)
from .naming import NameResolver
from .parser import Handlers, must_parse, parse
from .reader import LogicalLine, read_lines
from .registry import TypeRegistry, n_values, one_value, type_name

logger.disable("sconfig")

__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigStructureError",
    "ConverterError",
    "FieldBinding",
    "HandlerError",
    "Handlers",
    "LogicalLine",
    "NameResolver",
    "RecordBinding",
    "TypeRegistry",
    "UnknownFieldError",
    "UnsupportedTypeError",
    "__version__",
    "bind_attribute",
    "default_registry",
    "find_config",
    "must_parse",
    "n_values",
    "one_value",
    "parse",
    "read_lines",
    "register_builtin_types",
    "type_name",
]

__version__ = "0.1.0"
