# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import Field, SerializeAsAny, field_validator

from .. import messages
from ..fields.converters import parse_decimal
from ..fields.element import PresentableFieldForNullableDecimal
from ..options.base import OptionProvider
from ..types import FieldRenderMode, ValidityCheck, ValueSeparator
from ..utils import key_chain as kc
from .base import (
    ViewFieldForCollectionWithPlaceholder,
    ViewFieldForElementWithPlaceholder,
    find_previous_field,
)

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection
    from ..objects import PresentableObject

__all__ = (
    "format_number",
    "ViewFieldForNumberWithoutUnit",
    "ViewFieldForNumber",
    "ViewFieldForSubsequentNumber",
    "ViewFieldForMultipleNumbers",
)


def format_number(
    value: Decimal, step: Decimal, has_thousands_separators: bool = True
) -> str:
    """Format a number with as many decimal places as `step` has.

    A step of zero keeps all significant decimal places.
    """
    grouping = "," if has_thousands_separators else ""
    if step == 0:
        return format(value.normalize(), f"{grouping}f")
    places = max(0, -step.as_tuple().exponent)
    return format(value, f"{grouping}.{places}f")


def _bounds_message(
    min_value: Decimal | None,
    max_value: Decimal | None,
    plural: bool = False,
) -> str | None:
    if min_value is None and max_value is None:
        return None
    if min_value is None:
        template = (
            messages.NUMBERS_LESS_THAN if plural else messages.NUMBER_LESS_THAN
        )
    elif max_value is None:
        template = (
            messages.NUMBERS_GREATER_THAN
            if plural
            else messages.NUMBER_GREATER_THAN
        )
    else:
        template = (
            messages.NUMBERS_BETWEEN if plural else messages.NUMBER_BETWEEN
        )
    return template.format(minimum=min_value, maximum=max_value)


class ViewFieldForNumberWithoutUnit(ViewFieldForElementWithPlaceholder):
    min_value: Decimal | None = None
    """Lower bound. None means unbounded."""

    max_value: Decimal | None = None
    """Upper bound. None means unbounded."""

    step: Decimal = Field(default=Decimal(0), ge=0)
    """Allowed increment counted from `min_value`, zero for any value."""

    has_thousands_separators: bool = True
    is_range: bool = False
    option_provider: SerializeAsAny[OptionProvider] | None = None

    @property
    def decimal_places(self) -> int:
        return max(0, -self.step.as_tuple().exponent)

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForNullableDecimal:
        return PresentableFieldForNullableDecimal(parent, self.key)

    def format(self, value: Decimal) -> str:
        return format_number(value, self.step, self.has_thousands_separators)

    def get_default_error_message(self) -> str:
        message = _bounds_message(self.min_value, self.max_value)
        if message is None:
            return super().get_default_error_message()
        return messages.join(
            message, self._info_message_about_mandatoriness()
        )

    def is_valid_number(self, value: Decimal) -> bool:
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        if self.step > 0:
            step_base = self.min_value if self.min_value is not None else 0
            return (value - step_base) % self.step == 0
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
            number = parse_decimal(value)
        except ValueError:
            return self.get_default_error_message()
        if not self.is_valid_number(number):
            return self.get_default_error_message()
        return None


class ViewFieldForNumber(ViewFieldForNumberWithoutUnit):
    unit: str | None = None

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        try:
            number = parse_decimal(presentable_field.value_as_string)
        except ValueError:
            return ""
        read_only_value = self.format(number)
        if self.unit:
            read_only_value += " " + self.unit
        return read_only_value

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> int | Decimal | None:
        if not read_only_value:
            return None
        suffix = " " + self.unit if self.unit else ""
        if not read_only_value.endswith(suffix):
            return None
        text = read_only_value[: len(read_only_value) - len(suffix)]
        try:
            number = parse_decimal(text)
        except ValueError:
            return None
        if number == number.to_integral_value() and "." not in text:
            return int(number)
        return number


class ViewFieldForSubsequentNumber(ViewFieldForNumber):
    """Number that may not be less than a previous field's value."""

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
            number = parse_decimal(value)
            previous = parse_decimal(previous_value)
        except ValueError:
            return self.get_default_error_message()
        if number < previous:
            return messages.join(
                _bounds_message(previous, self.max_value),
                self._info_message_about_mandatoriness(),
            )
        return None


class ViewFieldForMultipleNumbers(ViewFieldForCollectionWithPlaceholder):
    min_value: Decimal | None = None
    max_value: Decimal | None = None
    step: Decimal = Field(default=Decimal(0), ge=0)
    has_thousands_separators: bool = True
    is_range: bool = False
    option_provider: SerializeAsAny[OptionProvider] | None = None

    def get_default_error_message(self) -> str:
        for_one = _bounds_message(self.min_value, self.max_value)
        if for_one is None:
            return super().get_default_error_message()
        for_several = _bounds_message(
            self.min_value, self.max_value, plural=True
        )
        return messages.join(
            self._message_for_limit(for_one, for_several),
            self._info_message_about_mandatoriness(),
        )

    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator:
        return ValueSeparator.SEMICOLON

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterator[str]:
        for value in presentable_field.get_values_as_string():
            try:
                number = parse_decimal(value)
            except ValueError:
                continue
            yield format_number(
                number, self.step, self.has_thousands_separators
            )

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        view_field_for_element = ViewFieldForNumber(
            key=self.key,
            title=self.title,
            description_for_edit_mode=self.description_for_edit_mode,
            description_for_view_mode=self.description_for_view_mode,
            min_value=self.min_value,
            max_value=self.max_value,
            step=self.step,
            is_range=self.is_range,
            option_provider=self.option_provider,
            placeholder=self.placeholder,
        )
        error_message = self._validate_members(
            presentable_field,
            validity_check,
            presentable_object,
            data_provider,
            view_field_for_element,
        )
        return self.get_default_error_message() if error_message else None
