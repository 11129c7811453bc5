# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable
from functools import cmp_to_key
from typing import Any

from .._errors import DirectoryError
from ..types import Option

__all__ = (
    "compare",
    "UserValueComparer",
    "compare_options_by_key",
    "compare_options_by_value",
    "VagueTermComparer",
)


def compare(x: Any, y: Any) -> int:
    """Three-way comparison where `None` sorts before every value."""
    if x is None:
        return 0 if y is None else -1
    if y is None:
        return 1
    return (x > y) - (x < y)


def _compare_text(x: str | None, y: str | None) -> int:
    return compare(
        x.casefold() if x is not None else None,
        y.casefold() if y is not None else None,
    )


class UserValueComparer:
    """Orders users by one of their fields.

    Ids, birthdays and timestamps compare by value. Any other key compares
    the string values of the users' element fields with that key.
    """

    _DIRECT_KEYS = ("id", "birthday", "created_at", "modified_at")

    def __init__(self, field_key: str):
        self.field_key = field_key

    def __call__(self, x, y) -> int:
        return self.compare(x, y)

    def compare(self, x, y) -> int:
        if x is None or y is None:
            return compare(x, y)
        if self.field_key in self._DIRECT_KEYS:
            return compare(
                getattr(x, self.field_key), getattr(y, self.field_key)
            )
        x_field = x.find_presentable_field(self.field_key)
        y_field = y.find_presentable_field(self.field_key)
        if not (_is_element_field(x_field) and _is_element_field(y_field)):
            raise DirectoryError(
                f'Comparing users by field with key "{self.field_key}" '
                "is not supported.",
                details={"field_key": self.field_key},
            )
        return compare(x_field.value_as_string, y_field.value_as_string)

    def as_key(self) -> Callable[[Any], Any]:
        return cmp_to_key(self.compare)


def _is_element_field(field) -> bool:
    return field is not None and field.is_for_single_element


def compare_options_by_key(x: Option, y: Option) -> int:
    return _compare_text(x.key, y.key)


def compare_options_by_value(x: Option, y: Option) -> int:
    return _compare_text(x.value, y.value)


class VagueTermComparer:
    """Orders search results for a vague term.

    Values starting with the term come first, then the rest. Within each
    group values are ordered alphabetically, ignoring case.
    """

    def __init__(self, term: str | None, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive
        self.term = self._normalize(term or "")

    def _normalize(self, value: str) -> str:
        return value if self.case_sensitive else value.casefold()

    def __call__(self, x: str | None, y: str | None) -> int:
        if x is None or y is None:
            return compare(x, y)
        x_prefix = self._normalize(x).startswith(self.term)
        y_prefix = self._normalize(y).startswith(self.term)
        if x_prefix != y_prefix:
            return -1 if x_prefix else 1
        return _compare_text(x, y)

    def as_key(self) -> Callable[[Any], Any]:
        return cmp_to_key(self)
