"""Built-in converter chains for common field types.

Responsibilities:
- Convert value tokens into `str`, `int`, `float`, `bool`, `Path` and
  compiled regular expressions.
- Convert value tokens into flat lists and single-entry mappings.
- Assemble the default registry used when a parse gets none.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from .handlers.net import register_net_types
from .parsing import parse_boolean_token, parse_integer_token
from .registry import TypeRegistry, n_values, one_value


def join_values(values: Sequence[str]) -> str:
    """Join all tokens with single spaces."""

    return " ".join(values)


def to_int(values: Sequence[str]) -> int:
    return parse_integer_token(values[0])


def to_float(values: Sequence[str]) -> float:
    try:
        return float(values[0])
    except ValueError:
        raise ValueError(f"not a number: `{values[0]}`") from None


def to_bool(values: Sequence[str]) -> bool:
    """Parse a boolean; a key given without a value means `True`."""

    if not values:
        return True
    return parse_boolean_token(values[0])


def to_path(values: Sequence[str]) -> Path:
    return Path(join_values(values)).expanduser()


def to_pattern(values: Sequence[str]) -> re.Pattern[str]:
    return re.compile(join_values(values))


def to_str_list(values: Sequence[str]) -> list[str]:
    return list(values)


def to_int_list(values: Sequence[str]) -> list[int]:
    return [parse_integer_token(value) for value in values]


def to_float_list(values: Sequence[str]) -> list[float]:
    return [to_float([value]) for value in values]


def to_bool_list(values: Sequence[str]) -> list[bool]:
    return [parse_boolean_token(value) for value in values]


def to_str_mapping(values: Sequence[str]) -> dict[str, str]:
    """Map the first token to the remaining tokens joined with spaces."""

    return {values[0]: join_values(values[1:])}


def to_list_mapping(values: Sequence[str]) -> dict[str, list[str]]:
    """Map the first token to the list of remaining tokens."""

    return {values[0]: list(values[1:])}


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    """Register the built-in chains on `registry` and return it."""

    registry.register(str, join_values)
    registry.register(int, one_value, to_int)
    registry.register(float, one_value, to_float)
    registry.register(bool, n_values(0, 1), to_bool)
    registry.register(Path, to_path)
    registry.register(re.Pattern, to_pattern)
    registry.register(re.Pattern[str], to_pattern)
    registry.register(list[str], to_str_list)
    registry.register(list[int], to_int_list)
    registry.register(list[float], to_float_list)
    registry.register(list[bool], to_bool_list)
    registry.register(dict[str, str], n_values(2, 0), to_str_mapping)
    registry.register(dict[str, list[str]], n_values(2, 0), to_list_mapping)
    return registry


def default_registry() -> TypeRegistry:
    """Return a new registry holding the built-in and network type chains."""

    return register_net_types(register_builtin_types(TypeRegistry()))
