# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..utils.text import remove_tags
from . import converters
from .base import PresentableFieldForElement

if TYPE_CHECKING:
    from ..objects import PresentableObject

__all__ = (
    "PresentableFieldForString",
    "PresentableFieldForNullableByte",
    "PresentableFieldForNullableInt",
    "PresentableFieldForNullableDecimal",
    "PresentableFieldForNullableBool",
    "PresentableFieldForNullableDateTime",
    "PresentableFieldForEnum",
    "PresentableFieldForObject",
)


class PresentableFieldForString(PresentableFieldForElement[str]):
    """String field. Its plain text has all markup stripped."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: str | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, str, value, is_read_only=is_read_only)

    def _parse(self, raw: str) -> str:
        return raw

    def _plain_text(self, value: str) -> str:
        return remove_tags(value)


class PresentableFieldForNullableByte(PresentableFieldForElement[int]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: int | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, int, value, is_read_only=is_read_only)

    def _coerce(self, value: int | None) -> int | None:
        return None if value is None else converters.check_byte(value)

    def _parse(self, raw: str) -> int:
        return converters.parse_byte(raw)


class PresentableFieldForNullableInt(PresentableFieldForElement[int]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: int | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, int, value, is_read_only=is_read_only)

    def _parse(self, raw: str) -> int:
        return converters.parse_int(raw)


class PresentableFieldForNullableDecimal(PresentableFieldForElement[Decimal]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: Decimal | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, Decimal, value, is_read_only=is_read_only
        )

    def _parse(self, raw: str) -> Decimal:
        return converters.parse_decimal(raw)

    def _format(self, value: Decimal) -> str:
        return converters.format_decimal(value)


class PresentableFieldForNullableBool(PresentableFieldForElement[bool]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: bool | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, bool, value, is_read_only=is_read_only)

    def _parse(self, raw: str) -> bool:
        return converters.parse_bool(raw)

    def _format(self, value: bool) -> str:
        return converters.format_bool(value)


class PresentableFieldForNullableDateTime(
    PresentableFieldForElement[datetime]
):
    """Date time field; values are kept and rendered in UTC."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: datetime | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, datetime, value, is_read_only=is_read_only
        )

    def _coerce(self, value: datetime | None) -> datetime | None:
        return None if value is None else converters.to_utc(value)

    def _parse(self, raw: str) -> datetime:
        return converters.parse_datetime(raw)

    def _format(self, value: datetime) -> str:
        return converters.format_datetime(value)


class PresentableFieldForEnum(PresentableFieldForElement[Enum]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        enum_type: type[Enum],
        value: Enum | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, enum_type, value, is_read_only=is_read_only
        )

    def _parse(self, raw: str) -> Enum:
        return converters.parse_enum(self.content_base_type, raw)

    def _format(self, value: Enum) -> str:
        return str(value.value)

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForObject(PresentableFieldForElement[Any]):
    """Field for a value of arbitrary type.

    Strings are converted with the parser registered for the content base
    type and stored as-is when there is none.
    """

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type = object,
        value: Any = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, value, is_read_only=is_read_only
        )

    def _parse(self, raw: str) -> Any:
        if not converters.has_parser_for(self.content_base_type):
            return raw
        return converters.parse_for_type(self.content_base_type, raw)

    def _format(self, value: Any) -> str:
        return converters.format_for_type(value)
