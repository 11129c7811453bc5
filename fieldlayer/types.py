# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum as _Enum
from typing import Any, NamedTuple

from ._errors import ResolutionError

__all__ = (
    "Enum",
    "Option",
    "Mandatoriness",
    "ValidityCheck",
    "ValueSeparator",
    "FieldRenderMode",
    "DateTimeType",
    "OptionControlType",
    "OptionDisplayStyle",
    "FilterScope",
    "Resolution",
)


class Enum(_Enum):
    @classmethod
    def allowed(cls) -> tuple[str, ...]:
        return tuple(e.value for e in cls)


class Option(NamedTuple):
    """A selectable pair of stored key and human-readable value."""

    key: str | None
    value: str | None


class Mandatoriness(str, Enum):
    OPTIONAL = "optional"
    DESIRED = "desired"
    REQUIRED = "required"


class ValidityCheck(str, Enum):
    """How strictly mandatoriness is enforced.

    `TRANSITIONAL` accepts blank desired fields, `STRICT` does not.
    """

    TRANSITIONAL = "transitional"
    STRICT = "strict"


class ValueSeparator(str, Enum):
    NONE = "none"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    SPACE = "space"
    LINE_BREAK = "line_break"


class DateTimeType(str, Enum):
    """Part of a date time a view field edits and shows."""

    DATE = "date"
    DATE_AND_TIME = "date_and_time"
    LOCAL_DATE_AND_TIME = "local_date_and_time"
    MONTH = "month"
    TIME = "time"
    WEEK = "week"


class FieldRenderMode(str, Enum):
    FORM = "form"
    LIST_TABLE = "list_table"


class OptionControlType(str, Enum):
    AUTOMATIC = "automatic"
    DROP_DOWN_LIST = "drop_down_list"
    RADIO_BUTTONS = "radio_buttons"


class OptionDisplayStyle(str, Enum):
    ICON = "icon"
    TEXT = "text"
    ICON_AND_TEXT = "icon_and_text"
    ICON_WITH_TEXT_FALLBACK = "icon_with_text_fallback"


class FilterScope(str, Enum):
    """Which user attributes a vague-term search looks at."""

    USER_NAME = "user_name"
    DISPLAY_NAME = "display_name"
    USER_NAME_AND_DISPLAY_NAME = "user_name_and_display_name"


@dataclass(slots=True, frozen=True)
class Resolution:
    """Outcome of resolving one reference term to exactly one object.

    Keeps apart the two ways resolution can fail: nothing matched, or
    several candidates matched.
    """

    term: str | None
    match_count: int
    value: Any = None

    @property
    def is_unique(self) -> bool:
        return self.match_count == 1

    @property
    def is_missing(self) -> bool:
        return self.match_count == 0

    @property
    def is_ambiguous(self) -> bool:
        return self.match_count > 1

    def raise_for_status(self) -> None:
        if not self.is_unique:
            raise ResolutionError(self)

    @classmethod
    def from_matches(cls, term: str | None, matches) -> Resolution:
        matches = list(matches)
        value = matches[0] if len(matches) == 1 else None
        return cls(term=term, match_count=len(matches), value=value)
