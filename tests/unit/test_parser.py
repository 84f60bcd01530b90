"""Unit tests for field dispatch and parse orchestration."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from ipaddress import IPv4Address
from pathlib import Path
from typing import Any, Callable

import pytest

from sconfig.binding import FieldBinding, RecordBinding
from sconfig.converters import default_registry
from sconfig.errors import (
    ConfigParseError,
    ConfigReadError,
    ConfigStructureError,
    ConverterError,
    HandlerError,
    UnknownFieldError,
    UnsupportedTypeError,
)
from sconfig.handlers.net import TCPAddr
from sconfig.parser import dispatch, must_parse, parse
from sconfig.registry import TypeRegistry, one_value

WriteConfig = Callable[[str, str], Path]


@dataclass
class _Config:
    user: str = ""
    key_file: str = ""
    port: int = 0
    verbose: bool = False
    timeout: float | None = None
    record: str = ""
    hosts: list[str] = field(default_factory=list)
    listen: TCPAddr | None = None
    created: datetime.datetime | None = None


class _Color:
    def __init__(self, name: str) -> None:
        self.name = name


@dataclass
class _Theme:
    color: _Color | None = None


def test_parse_populates_fields_and_invokes_handlers(write_config: WriteConfig) -> None:
    """Directives should set typed fields and feed handlers merged continuations."""

    path = write_config(
        "config",
        "user martin\n"
        "key-file  /home/martin/key.pem\n"
        "hosts example.com\n"
        "   www.example.com\n",
    )
    config = _Config()
    calls: list[list[str]] = []

    parse(config, path, {"Hosts": calls.append})

    assert config.user == "martin"
    assert config.key_file == "/home/martin/key.pem"
    assert calls == [["example.com", "www.example.com"]]
    assert config.hosts == []


def test_parse_converts_builtin_and_network_types(write_config: WriteConfig) -> None:
    """The default registry should cover scalars, flags, optionals and addresses."""

    path = write_config(
        "config",
        "port 0x50\nverbose\ntimeout 2.5\nhost a.example\n  b.example\nlisten 127.0.0.1:8080\n",
    )
    config = _Config()

    parse(config, path)

    assert config.port == 80
    assert config.verbose is True
    assert config.timeout == 2.5
    assert config.hosts == ["a.example", "b.example"]
    assert config.listen == TCPAddr(ip=IPv4Address("127.0.0.1"), port=8080)


def test_parse_resolves_plural_key_to_singular_field(write_config: WriteConfig) -> None:
    """`records` should set a field named `record`."""

    path = write_config("config", "records example.com\n")
    config = _Config()

    parse(config, path)

    assert config.record == "example.com"


def test_handler_wins_over_registered_converter(write_config: WriteConfig) -> None:
    """A handler should bypass the type registry entirely."""

    path = write_config("config", "port not-a-number\n")
    config = _Config()
    received: list[list[str]] = []

    parse(config, path, {"port": received.append})

    assert received == [["not-a-number"]]
    assert config.port == 0


def test_handler_failure_is_wrapped_with_location(write_config: WriteConfig) -> None:
    """Handler errors should be marked and located at the offending line."""

    path = write_config("config", "user martin\nport 22\n")

    def _reject(values: list[str]) -> None:
        raise ValueError(f"port {values[0]} is reserved")

    with pytest.raises(ConfigParseError) as excinfo:
        parse(_Config(), path, {"Port": _reject})

    error = excinfo.value
    assert str(error) == f"{path} line 2: error parsing port: port 22 is reserved (from handler)"
    assert (error.path, error.line, error.key) == (path, 2, "port")
    assert isinstance(error.__cause__, HandlerError)


def test_unknown_key_aborts_without_rollback(write_config: WriteConfig) -> None:
    """An unknown key should stop the parse; earlier fields keep their values."""

    path = write_config("config", "user martin\nbogus value\nport 22\n")
    config = _Config()

    with pytest.raises(ConfigParseError, match="error parsing bogus: unknown option") as excinfo:
        parse(config, path)

    assert "Bogus" in str(excinfo.value)
    assert excinfo.value.line == 2
    assert isinstance(excinfo.value.__cause__, UnknownFieldError)
    assert config.user == "martin"
    assert config.port == 0


def test_wrong_arity_never_reaches_assignment(write_config: WriteConfig) -> None:
    """The single-value check should fail before the field is touched."""

    path = write_config("config", "port 22 23\n")
    config = _Config(port=1)

    with pytest.raises(ConfigParseError, match="must have exactly one value") as excinfo:
        parse(config, path)

    assert isinstance(excinfo.value.__cause__, ConverterError)
    assert config.port == 1


def test_unsupported_type_is_reported(write_config: WriteConfig) -> None:
    """Fields with neither handler nor converter should fail with their type."""

    path = write_config("config", "created 2016-01-01\n")

    with pytest.raises(
        ConfigParseError, match="don't know how to set fields of the type datetime.datetime"
    ) as excinfo:
        parse(_Config(), path)

    assert isinstance(excinfo.value.__cause__, UnsupportedTypeError)
    assert excinfo.value.hint is not None


def test_custom_registry_chain_runs_in_registration_order(write_config: WriteConfig) -> None:
    """Custom types should convert through their registered chain."""

    path = write_config("config", "color red\n")
    calls: list[str] = []

    def _lower(values: Any) -> str:
        calls.append("lower")
        return values[0].lower()

    def _build(name: str) -> _Color:
        calls.append("build")
        return _Color(name)

    registry = TypeRegistry()
    registry.register(_Color, one_value, _lower, _build)
    theme = _Theme()

    parse(theme, path, registry=registry)

    assert calls == ["lower", "build"]
    assert theme.color is not None
    assert theme.color.name == "red"


def test_error_location_names_the_sourced_file(write_config: WriteConfig) -> None:
    """Failures on spliced lines should point at the file they came from."""

    included = write_config("included.conf", "\n\nport nope\n")
    main = write_config("main.conf", f"user martin\nsource {included}\n")

    with pytest.raises(ConfigParseError) as excinfo:
        parse(_Config(), main)

    assert excinfo.value.path == included
    assert excinfo.value.line == 3
    assert str(excinfo.value).startswith(f"{included} line 3: error parsing port:")


def test_read_failures_propagate_unwrapped(write_config: WriteConfig, tmp_path: Path) -> None:
    """Read and structure errors should keep their own types."""

    with pytest.raises(ConfigReadError):
        parse(_Config(), tmp_path / "missing")

    indented = write_config("indented", "  user martin\n")
    with pytest.raises(ConfigStructureError):
        parse(_Config(), indented)


def test_parse_accepts_explicit_record_binding(write_config: WriteConfig) -> None:
    """A hand-built field table should work as the destination."""

    path = write_config("config", "retries 3\n")
    settings: dict[str, Any] = {}
    binding = RecordBinding(
        [
            FieldBinding(
                name="Retries",
                attribute="retries",
                type_name="int",
                setter=lambda value: settings.__setitem__("retries", value),
            )
        ]
    )

    parse(binding, path, registry=default_registry())

    assert settings == {"retries": 3}


def test_empty_registry_reports_unsupported_builtin_types(write_config: WriteConfig) -> None:
    """An explicit registry should replace the defaults entirely."""

    path = write_config("config", "user martin\n")

    with pytest.raises(ConfigParseError, match="don't know how to set fields of the type str"):
        parse(_Config(), path, registry=TypeRegistry())


def test_dispatch_reports_route() -> None:
    """`dispatch` should report whether a handler or a converter set the field."""

    config = _Config()
    binding = RecordBinding.from_dataclass(config)
    registry = default_registry()

    assert dispatch(binding["User"], ["martin"], None, registry) == "convert"
    assert dispatch(binding["User"], ["x"], {"User": lambda values: None}, registry) == "handler"
    assert config.user == "martin"


def test_must_parse_exits_on_error(write_config: WriteConfig, tmp_path: Path) -> None:
    """`must_parse` should turn configuration errors into a process exit."""

    path = write_config("config", "bogus 1\n")

    with pytest.raises(SystemExit, match="^sconfig: .*unknown option"):
        must_parse(_Config(), path)
    with pytest.raises(SystemExit):
        must_parse(_Config(), tmp_path / "missing")

    good = write_config("good", "user martin\n")
    config = _Config()
    must_parse(config, good)
    assert config.user == "martin"


def test_parse_accepts_records_with_function_local_field_types(
    write_config: WriteConfig,
) -> None:
    """Local field types should reach handlers, or fail with a located error."""

    class Color:
        def __init__(self, name: str) -> None:
            self.name = name

    @dataclass
    class Theme:
        color: Color | None = None

    path = write_config("config", "color red\n")
    theme = Theme()

    parse(theme, path, {"Color": lambda values: setattr(theme, "color", Color(values[0]))})

    assert theme.color is not None
    assert theme.color.name == "red"

    with pytest.raises(ConfigParseError) as excinfo:
        parse(Theme(), path)

    assert str(excinfo.value) == (
        f"{path} line 1: error parsing color: "
        "don't know how to set fields of the type Color"
    )
