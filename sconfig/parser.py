"""Parse configuration files into a destination record.

Responsibilities:
- Read logical lines and resolve each key to a field of the record.
- Dispatch values to a custom handler, else to the field type's converter chain.
- Abort on the first failure with a file/line/key located `ConfigParseError`.

Key public functions:
- `parse`: populate a record from a file.
- `must_parse`: `parse`, exiting the process on failure.
- `dispatch`: set one field from its value tokens.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Literal, Mapping, Sequence

from .binding import FieldBinding, RecordBinding
from .converters import default_registry
from .errors import ConfigError, ConfigParseError, HandlerError, UnsupportedTypeError
from .naming import NameResolver
from .reader import read_lines
from .registry import TypeRegistry
from .telemetry import ParseLogger

Handler = Callable[[list[str]], None]
Handlers = Mapping[str, Handler]

_log = ParseLogger()


def dispatch(
    field: FieldBinding,
    values: Sequence[str],
    handlers: Handlers | None,
    registry: TypeRegistry,
) -> Literal["handler", "convert"]:
    """Set one field from its value tokens and return the route taken.

    A handler registered under the field's canonical name (or its attribute
    name) always wins; the registry is then not consulted. Otherwise the chain
    registered for the field's type runs and its result is assigned.

    Raises:
        HandlerError: If the custom handler fails.
        ConverterError: If a converter in the chain fails; the field is unchanged.
        UnsupportedTypeError: If there is neither a handler nor a chain.
    """

    handler = _find_handler(field, handlers)
    if handler is not None:
        try:
            handler(list(values))
        except Exception as exc:
            raise HandlerError(str(exc)) from exc
        return "handler"

    if field.type_name not in registry:
        raise UnsupportedTypeError(type_name=field.type_name)
    field.setter(registry.convert(field.type_name, values))
    return "convert"


def _find_handler(field: FieldBinding, handlers: Handlers | None) -> Handler | None:
    """Return the handler bound to `field`, if any."""

    if not handlers:
        return None
    handler = handlers.get(field.name)
    if handler is None:
        handler = handlers.get(field.attribute)
    return handler


def parse(
    record: object,
    path: Path | str,
    handlers: Handlers | None = None,
    *,
    registry: TypeRegistry | None = None,
    resolver: NameResolver | None = None,
) -> None:
    """Read `path` and populate `record` from its directives.

    Args:
        record: Mutable dataclass instance, or a `RecordBinding` describing the
            destination explicitly.
        path: Configuration file to read.
        handlers: Custom handlers keyed by field name (`KeyFile`) or attribute
            name (`key_file`); each receives the value tokens and sets the
            record itself.
        registry: Converter chains to use; defaults to `default_registry()`.
        resolver: Key resolution strategy; defaults to `NameResolver()`.

    Raises:
        ConfigReadError: If the file or a sourced file cannot be read.
        ConfigStructureError: If the file structure is invalid.
        ConfigParseError: If a directive cannot be applied. Fields set by
            earlier directives keep their new values.
    """

    resolver = resolver or NameResolver()
    registry = registry if registry is not None else default_registry()
    binding = (
        record
        if isinstance(record, RecordBinding)
        else RecordBinding.from_dataclass(record, field_name=resolver.field_name)
    )

    lines = read_lines(path)
    for line in lines:
        tokens = line.tokens()
        key = tokens[0]
        try:
            name = resolver.resolve(key, binding)
            route = dispatch(binding[name], tokens[1:], handlers, registry)
        except ConfigError as exc:
            _log.log_failure(line.path, line.number, type(exc).__name__)
            raise ConfigParseError(
                path=line.path,
                line=line.number,
                key=key,
                detail=str(exc),
                hint=exc.hint,
            ) from exc
        _log.log_field_set(name, route, line.path, line.number)

    _log.log_parse_complete(Path(path), len(lines))


def must_parse(
    record: object,
    path: Path | str,
    handlers: Handlers | None = None,
    *,
    registry: TypeRegistry | None = None,
    resolver: NameResolver | None = None,
) -> None:
    """Like `parse`, but any configuration error is logged and exits the process."""

    try:
        parse(record, path, handlers, registry=registry, resolver=resolver)
    except ConfigError as exc:
        _log.log_abort(Path(path), type(exc).__name__)
        raise SystemExit(f"sconfig: {exc}") from exc
