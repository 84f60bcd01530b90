"""Shared token parsing helpers for converters and path discovery."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on", "enable", "enabled"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off", "disable", "disabled"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_boolean_token(token: str) -> bool:
    """Parse one configuration boolean token.

    Raises:
        ValueError: If the token is not one of the accepted boolean values.
    """

    parsed = parse_permissive_boolean(token)
    if parsed is not None:
        return parsed

    raise ValueError(
        f"not a boolean value: `{token}` "
        "(use `true`/`false`, `yes`/`no`, `on`/`off`, `enable`/`disable` or `1`/`0`)"
    )


def parse_integer_token(token: str) -> int:
    """Parse an integer token, accepting `0x`, `0o` and `0b` prefixes.

    Raises:
        ValueError: If the token is not an integer literal.
    """

    try:
        return int(token, 0)
    except ValueError:
        pass
    try:
        # int(..., 0) rejects decimal literals with leading zeros.
        return int(token, 10)
    except ValueError:
        raise ValueError(f"not an integer: `{token}`") from None
