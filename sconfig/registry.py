"""Type registry mapping field types to converter chains.

Responsibilities:
- Name field types with stable string identifiers.
- Store ordered converter chains per type identifier.
- Run a chain, threading each converter's output into the next one.
- Provide the arity validators meant to head a chain.

Key types:
- `TypeRegistry`: explicit registry value passed into every parse.
"""

from __future__ import annotations

import types
import typing
from typing import Any, Callable, Sequence

from .errors import ConverterError, UnsupportedTypeError

TypeConverter = Callable[[Any], Any]

_UNION_ORIGINS = (typing.Union, types.UnionType)


def type_name(type_id: object) -> str:
    """Return the registry identifier for a type annotation.

    Strings are returned unchanged. Builtins use their bare name (`str`), other
    classes `module.QualName` (`ipaddress.IPv4Address`), generics their
    subscripted form (`list[str]`, `dict[str, list[str]]`) and unions their
    members joined with ` | `.
    """

    if isinstance(type_id, str):
        return type_id
    if type_id is None or type_id is type(None):
        return "None"

    origin = typing.get_origin(type_id)
    if origin in _UNION_ORIGINS:
        return " | ".join(type_name(member) for member in typing.get_args(type_id))
    if origin is not None:
        arguments = ", ".join(
            "..." if argument is Ellipsis else type_name(argument)
            for argument in typing.get_args(type_id)
        )
        return f"{type_name(origin)}[{arguments}]"

    if isinstance(type_id, type):
        if type_id.__module__ == "builtins":
            return type_id.__qualname__
        return f"{type_id.__module__}.{type_id.__qualname__}"
    return str(type_id)


def one_value(values: Sequence[str]) -> Sequence[str]:
    """Pass `values` through when it holds exactly one token."""

    if len(values) != 1:
        raise ValueError("must have exactly one value")
    return values


def n_values(minimum: int, maximum: int) -> TypeConverter:
    """Return a validator requiring between `minimum` and `maximum` tokens.

    Both bounds are inclusive; a bound of zero leaves that side unbounded.
    """

    def _check(values: Sequence[str]) -> Sequence[str]:
        if minimum > 0 and len(values) < minimum:
            raise ValueError(f"must have at least {minimum} values (has: {len(values)})")
        if maximum > 0 and len(values) > maximum:
            raise ValueError(f"must have at most {maximum} values (has: {len(values)})")
        return values

    return _check


class TypeRegistry:
    """Ordered converter chains keyed by type identifier."""

    def __init__(self) -> None:
        self._chains: dict[str, tuple[TypeConverter, ...]] = {}

    def register(self, type_id: object, *converters: TypeConverter) -> None:
        """Set the converter chain for `type_id`, replacing any previous chain.

        Converters run in the given order; the first receives the value tokens,
        each later one the output of its predecessor.
        """

        if not converters:
            raise ValueError(f"no converters given for type `{type_name(type_id)}`")
        self._chains[type_name(type_id)] = tuple(converters)

    def lookup(self, type_id: object) -> tuple[TypeConverter, ...] | None:
        """Return the chain registered for `type_id`, or `None`."""

        return self._chains.get(type_name(type_id))

    def __contains__(self, type_id: object) -> bool:
        return type_name(type_id) in self._chains

    def type_names(self) -> list[str]:
        """Return every registered type identifier, sorted."""

        return sorted(self._chains)

    def copy(self) -> TypeRegistry:
        """Return an independent registry with the same chains."""

        duplicate = TypeRegistry()
        duplicate._chains = dict(self._chains)
        return duplicate

    def convert(self, type_id: object, values: Sequence[str]) -> Any:
        """Run the chain for `type_id` over `values` and return its final output.

        Raises:
            UnsupportedTypeError: If no chain is registered for `type_id`.
            ConverterError: If a converter fails; later converters do not run.
        """

        chain = self.lookup(type_id)
        if chain is None:
            raise UnsupportedTypeError(type_name=type_name(type_id))

        value: Any = list(values)
        for converter in chain:
            try:
                value = converter(value)
            except ConverterError:
                raise
            except Exception as exc:
                raise ConverterError(str(exc)) from exc
        return value
