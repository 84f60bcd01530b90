"""Declarative field tables describing a destination record.

Responsibilities:
- Describe each settable field by canonical name, attribute, type and setter.
- Build that description from a dataclass instance's declared fields.

Key types:
- `FieldBinding`: one settable field.
- `RecordBinding`: the ordered field table the parser resolves keys against.
"""

from __future__ import annotations

import dataclasses
import functools
import sys
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping

from .naming import NameResolver
from .registry import type_name


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """One settable field of a destination record.

    Attributes:
        name: Canonical CamelCase field name keys resolve to (`KeyFile`).
        attribute: Attribute on the record (`key_file`).
        type_name: Registry identifier of the field's declared type.
        setter: Assigns a converted value to the field.
    """

    name: str
    attribute: str
    type_name: str
    setter: Callable[[Any], None]


def bind_attribute(
    record: object,
    attribute: str,
    annotation: object,
    name: str | None = None,
) -> FieldBinding:
    """Bind `record.<attribute>` as a field converted as `annotation`.

    `name` defaults to the attribute's canonical name (`key_file` -> `KeyFile`).
    `Optional[...]` annotations bind as their inner type.
    """

    return FieldBinding(
        name=name or NameResolver().field_name(attribute),
        attribute=attribute,
        type_name=type_name(_unwrap_optional(annotation)),
        setter=functools.partial(setattr, record, attribute),
    )


class RecordBinding(Mapping[str, FieldBinding]):
    """Ordered mapping of canonical field name to `FieldBinding`."""

    def __init__(self, fields: Iterable[FieldBinding]) -> None:
        """Index `fields` by name.

        Raises:
            ValueError: If two fields share a canonical name.
        """

        self._fields: dict[str, FieldBinding] = {}
        for binding in fields:
            existing = self._fields.get(binding.name)
            if existing is not None:
                raise ValueError(
                    f"attributes `{existing.attribute}` and `{binding.attribute}` "
                    f"both map to field name `{binding.name}`"
                )
            self._fields[binding.name] = binding

    @classmethod
    def from_dataclass(
        cls,
        record: object,
        field_name: Callable[[str], str] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> RecordBinding:
        """Describe every public field of a dataclass instance.

        Args:
            record: Dataclass instance to populate; attributes starting with
                `_` are not bound.
            field_name: Maps an attribute to its canonical field name; defaults
                to the default `NameResolver`'s camel-casing.
            localns: Extra names for resolving string annotations, such as
                classes local to the function that defined the record. An
                annotation that still cannot be resolved binds under its
                source text (`Color | None` binds as `Color`).

        Raises:
            TypeError: If `record` is not a mutable dataclass instance.
        """

        if not dataclasses.is_dataclass(record) or isinstance(record, type):
            raise TypeError(
                f"expected a dataclass instance, got {type(record).__name__}"
            )
        if type(record).__dataclass_params__.frozen:
            raise TypeError(f"cannot populate frozen dataclass {type(record).__name__}")

        to_name = field_name or NameResolver().field_name
        hints = _field_annotations(type(record), localns)
        return cls(
            bind_attribute(record, item.name, hints[item.name], to_name(item.name))
            for item in dataclasses.fields(record)
            if not item.name.startswith("_")
        )

    def __getitem__(self, name: str) -> FieldBinding:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"RecordBinding({list(self._fields)!r})"


def _unwrap_optional(annotation: object) -> object:
    """Strip `None` from a union annotation (`str | None` -> `str`)."""

    if isinstance(annotation, str):
        if "[" in annotation:
            return annotation
        return " | ".join(
            member.strip() for member in annotation.split("|") if member.strip() != "None"
        )
    if typing.get_origin(annotation) not in (typing.Union, types.UnionType):
        return annotation
    members = tuple(
        member for member in typing.get_args(annotation) if member is not type(None)
    )
    if len(members) == 1:
        return members[0]
    return typing.Union[members]


def _field_annotations(
    cls: type, localns: Mapping[str, Any] | None
) -> dict[str, object]:
    """Resolve the annotations of `cls`, one field at a time when some fail.

    A field whose string annotation names something out of reach keeps the
    string.
    """

    namespace = dict(localns) if localns is not None else None
    try:
        return typing.get_type_hints(cls, localns=namespace)
    except NameError:
        pass

    globalns = vars(sys.modules[cls.__module__])
    resolved: dict[str, object] = {}
    for item in dataclasses.fields(cls):
        single = types.SimpleNamespace(__annotations__={item.name: item.type})
        try:
            resolved.update(typing.get_type_hints(single, globalns, namespace))
        except NameError:
            resolved[item.name] = item.type
    return resolved
