# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from pydantic import Field, SerializeAsAny, field_validator

from .. import messages
from ..fields.converters import parse_datetime, to_utc
from ..fields.element import PresentableFieldForNullableDateTime
from ..options.base import OptionProvider
from ..types import DateTimeType, ValidityCheck
from ..utils import key_chain as kc
from .base import ViewFieldForElement, find_previous_field

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..objects import PresentableObject

__all__ = (
    "format_date_time",
    "parse_date_time",
    "ViewFieldForDateTime",
    "ViewFieldForSubsequentDateTime",
)

_EARLIEST = datetime(1, 1, 1, tzinfo=timezone.utc)

_KINDS = {
    DateTimeType.DATE: "date",
    DateTimeType.DATE_AND_TIME: "date and time",
    DateTimeType.LOCAL_DATE_AND_TIME: "date and time",
    DateTimeType.MONTH: "month",
    DateTimeType.TIME: "time",
    DateTimeType.WEEK: "week",
}


def format_date_time(value: datetime, date_time_type: DateTimeType) -> str:
    """Render the part of `value` a date time type shows."""
    value = to_utc(value)
    match DateTimeType(date_time_type):
        case DateTimeType.DATE:
            return value.strftime("%Y-%m-%d")
        case DateTimeType.DATE_AND_TIME:
            return value.strftime("%Y-%m-%d %H:%M") + " UTC"
        case DateTimeType.LOCAL_DATE_AND_TIME:
            return value.astimezone().strftime("%Y-%m-%d %H:%M")
        case DateTimeType.MONTH:
            return value.strftime("%Y-%m")
        case DateTimeType.TIME:
            return value.strftime("%H:%M")
        case DateTimeType.WEEK:
            year, week, _ = value.isocalendar()
            return f"{year}-W{week:02d}"


def parse_date_time(text: str | None) -> datetime | None:
    """Read a rendered date time back, or None if it is not one.

    Times without a date fall on the first day of year one. Weeks start
    on Monday, months on their first day.
    """
    if not text or not text.strip():
        return None
    text = text.strip().removesuffix(" UTC")
    try:
        return parse_datetime(text)
    except ValueError:
        pass
    for pattern, prefix in (
        ("%Y-%m", ""),
        ("%G-W%V-%u", ""),
        ("%Y-%m-%d %H:%M", "0001-01-01 "),
        ("%Y-%m-%d %H:%M:%S", "0001-01-01 "),
    ):
        candidate = prefix + text + ("-1" if "%G" in pattern else "")
        try:
            parsed = datetime.strptime(candidate, pattern)
        except ValueError:
            continue
        return parsed.replace(tzinfo=timezone.utc)
    return None


class ViewFieldForDateTime(ViewFieldForElement):
    date_time_type: DateTimeType = DateTimeType.DATE_AND_TIME

    min_value: datetime | None = None
    """Earliest valid value. None means unbounded."""

    max_value: datetime | None = None
    """Latest valid value. None means unbounded."""

    step: timedelta = Field(default=timedelta(0), ge=timedelta(0))
    """Allowed increment counted from `min_value`, zero for any value."""

    option_provider: SerializeAsAny[OptionProvider] | None = None

    @field_validator("min_value", "max_value")
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return None if value is None else to_utc(value)

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForNullableDateTime:
        return PresentableFieldForNullableDateTime(parent, self.key)

    def format(self, value: datetime) -> str:
        return format_date_time(value, self.date_time_type)

    def get_default_error_message(self) -> str:
        message = self._bounds_message(self.min_value, self.max_value)
        return messages.join(
            message, self._info_message_about_mandatoriness()
        )

    def _bounds_message(
        self, min_value: datetime | None, max_value: datetime | None
    ) -> str:
        kind = _KINDS[DateTimeType(self.date_time_type)]
        minimum = None if min_value is None else self.format(min_value)
        maximum = None if max_value is None else self.format(max_value)
        if minimum is None and maximum is None:
            template = messages.DATE_TIME
        elif maximum is None:
            template = messages.DATE_TIME_NOT_BEFORE
        elif minimum is None:
            template = messages.DATE_TIME_NOT_AFTER
        else:
            template = messages.DATE_TIME_BETWEEN
        return template.format(kind=kind, minimum=minimum, maximum=maximum)

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        value = presentable_field.value_as_object
        if not isinstance(value, datetime):
            return ""
        return self.format(value)

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        return parse_date_time(read_only_value)

    def is_valid_date_time(self, value: datetime) -> bool:
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        if self.step > timedelta(0):
            step_base = self.min_value or _EARLIEST
            return (value - step_base) % self.step == timedelta(0)
        return True

    def validate_field(
        self,
        presentable_field: PresentableFieldForElement,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        error_message = super().validate_field(
            presentable_field,
            validity_check,
            presentable_object,
            data_provider,
        )
        value = presentable_field.value_as_string
        if error_message or not value:
            return error_message
        try:
            date_time = parse_datetime(value)
        except ValueError:
            return self.get_default_error_message()
        if not self.is_valid_date_time(date_time):
            return self.get_default_error_message()
        return None


class ViewFieldForSubsequentDateTime(ViewFieldForDateTime):
    """Date time that may not be earlier than a previous field's value."""

    previous_field_key: str
    """Dotted key chain of the field holding the previous value."""

    @field_validator("previous_field_key", mode="before")
    def _join_previous_key_chain(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return kc.to_key(value)
        return value

    def validate_field(
        self,
        presentable_field: PresentableFieldForElement,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        error_message = super().validate_field(
            presentable_field,
            validity_check,
            presentable_object,
            data_provider,
        )
        previous_field = find_previous_field(
            self.previous_field_key, presentable_field, presentable_object
        )
        value = presentable_field.value_as_string
        previous_value = previous_field.value_as_string
        if error_message or not value or not previous_value:
            return error_message
        try:
            date_time = parse_datetime(value)
            previous = parse_datetime(previous_value)
        except ValueError:
            return self.get_default_error_message()
        if date_time < previous:
            return messages.join(
                self._bounds_message(previous, self.max_value),
                self._info_message_about_mandatoriness(),
            )
        return None
