# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Locale-independent string conversions shared by field types."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

__all__ = (
    "parse_int",
    "check_byte",
    "parse_byte",
    "parse_decimal",
    "parse_bool",
    "parse_datetime",
    "format_decimal",
    "format_bool",
    "to_utc",
    "format_datetime",
    "parse_enum",
    "parse_for_type",
    "format_for_type",
    "has_parser_for",
)

_INTEGER = re.compile(r"^[+-]?(\d{1,3}(,\d{3})+|\d+)$")
_DECIMAL = re.compile(r"^[+-]?(\d{1,3}(,\d{3})+|\d+)?(\.\d+)?$")

_TRUE = frozenset(("true", "1", "yes", "on"))
_FALSE = frozenset(("false", "0", "no", "off"))


def parse_int(text: str) -> int:
    text = text.strip()
    if not _INTEGER.match(text):
        raise ValueError(f"Invalid integer: {text!r}")
    return int(text.replace(",", ""))


def check_byte(value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"Byte value out of range: {value}")
    return value


def parse_byte(text: str) -> int:
    return check_byte(parse_int(text))


def parse_decimal(text: str) -> Decimal:
    text = text.strip()
    if not text or text in "+-" or not _DECIMAL.match(text):
        raise ValueError(f"Invalid number: {text!r}")
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation as e:
        raise ValueError(f"Invalid number: {text!r}") from e


def format_decimal(value: Decimal | int | float) -> str:
    if isinstance(value, float):
        value = Decimal(repr(value))
    return format(value, "f")


def parse_bool(text: str) -> bool:
    normalized = text.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError(f"Invalid boolean: {text!r}")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_datetime(text: str) -> datetime:
    """Parse ISO 8601 text, treating naive values as UTC."""
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


def to_utc(value: datetime) -> datetime:
    """Convert to UTC, treating naive values as UTC already."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: datetime) -> str:
    return to_utc(value).isoformat()


def parse_enum(enum_type: type[Enum], text: str) -> Enum:
    """Find a member by value, falling back to its name."""
    text = text.strip()
    for member in enum_type:
        if str(member.value) == text:
            return member
    try:
        return enum_type[text]
    except KeyError as e:
        raise ValueError(
            f"{text!r} is not a member of {enum_type.__name__}"
        ) from e


_PARSERS: dict[type, Callable[[str], Any]] = {
    str: lambda text: text,
    bool: parse_bool,
    int: parse_int,
    Decimal: parse_decimal,
    float: lambda text: float(parse_decimal(text)),
    datetime: parse_datetime,
}

_FORMATTERS: dict[type, Callable[[Any], str]] = {
    bool: format_bool,
    Decimal: format_decimal,
    float: format_decimal,
    datetime: format_datetime,
}


def parse_for_type(type_: type, text: str) -> Any:
    """Parse `text` into a value of `type_`.

    Raises:
        ValueError: If the text is malformed or the type has no parser.
    """
    if isinstance(type_, type) and issubclass(type_, Enum):
        return parse_enum(type_, text)
    for base in getattr(type_, "__mro__", (type_,)):
        if parser := _PARSERS.get(base):
            return parser(text)
    raise ValueError(f"No string conversion for type {type_!r}")


def format_for_type(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    for base in type(value).__mro__:
        if formatter := _FORMATTERS.get(base):
            return formatter(value)
    return str(value)


def has_parser_for(type_: type) -> bool:
    if isinstance(type_, type) and issubclass(type_, Enum):
        return True
    return any(base in _PARSERS for base in getattr(type_, "__mro__", ()))
