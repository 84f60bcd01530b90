"""Key to field-name resolution.

Responsibilities:
- Turn raw keys (`key-file`, `api_url`) into CamelCase field names.
- Upper-case well-known acronyms (`ApiUrl` -> `APIURL`).
- Fall back to the plural, then the singular, of a name missing from the record.

Key types:
- `Inflector`: pluralization strategy interface.
- `NameResolver`: the resolution pipeline, with injectable strategies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Container, Protocol

import inflection

from .errors import UnknownFieldError

# Order matters: longer forms sharing a prefix ("Https") come before "Http".
ACRONYMS: tuple[str, ...] = (
    "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML", "HTTPS", "HTTP",
    "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS", "RPC", "SLA", "SMTP", "SQL",
    "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID", "UUID", "URI", "URL", "UTF8",
    "VM", "XML", "XSRF", "XSS",
)

_SEPARATORS = re.compile(r"[-_\s]+")


class Inflector(Protocol):
    """Singular/plural strategy used for field-name fallback."""

    def pluralize(self, word: str) -> str:
        """Return the plural form of `word`."""

    def singularize(self, word: str) -> str:
        """Return the singular form of `word`."""


class InflectionInflector:
    """English inflection backed by the `inflection` package."""

    def pluralize(self, word: str) -> str:
        return inflection.pluralize(word)

    def singularize(self, word: str) -> str:
        return inflection.singularize(word)


def camelize(key: str) -> str:
    """Join `-`, `_` and whitespace separated tokens, capitalizing each one.

    Only the first letter of a token changes; other characters, `/` and `.`
    included, are kept as written.
    """

    return "".join(token[:1].upper() + token[1:] for token in _SEPARATORS.split(key))


def normalize_acronyms(name: str) -> str:
    """Replace capitalized acronyms (`Http`) with their upper-case form (`HTTP`)."""

    for acronym in ACRONYMS:
        name = name.replace(acronym.capitalize(), acronym)
    return name


@dataclass(frozen=True, slots=True)
class NameResolver:
    """Map raw configuration keys onto the field names of a record.

    Attributes:
        inflector: Plural/singular strategy for the fallback lookups.
        acronyms: Acronym normalization applied after camel-casing.
    """

    inflector: Inflector = field(default_factory=InflectionInflector)
    acronyms: Callable[[str], str] = normalize_acronyms

    def field_name(self, key: str) -> str:
        """Return the canonical field name for `key`, before any fallback."""

        return self.acronyms(camelize(key))

    def resolve(self, key: str, field_names: Container[str]) -> str:
        """Resolve `key` to a member of `field_names`.

        The camel-cased name is tried first, then its plural, then its singular.

        Raises:
            UnknownFieldError: If no candidate is a field name.
        """

        name = self.field_name(key)
        plural = self.inflector.pluralize(name)
        candidates = [name]
        for candidate in (plural, self.inflector.singularize(name)):
            if candidate not in candidates:
                candidates.append(candidate)

        for candidate in candidates:
            if candidate in field_names:
                return candidate
        raise UnknownFieldError(name=name, plural=plural, candidates=candidates)
