# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from pydantic import Field, SerializeAsAny

from .. import messages
from .._errors import UnsupportedOperationError
from ..fields.element import PresentableFieldForString
from ..options.base import OptionProvider
from ..types import FieldRenderMode, ValidityCheck, ValueSeparator
from .base import (
    ViewFieldForCollectionWithPlaceholder,
    ViewFieldForElementWithPlaceholder,
)

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection
    from ..objects import PresentableObject

__all__ = (
    "ViewFieldForSingleLineText",
    "ViewFieldForMultilineText",
    "ViewFieldForPassword",
    "ViewFieldForMultipleSingleLineTexts",
)


def _length_message(min_length: int, max_length: int | None) -> str | None:
    if min_length == 0 and max_length is None:
        return None
    if min_length == 0:
        if max_length == 1:
            return messages.AT_MOST_ONE_CHARACTER
        return messages.AT_MOST_N_CHARACTERS.format(max_length=max_length)
    if max_length is None:
        if min_length == 1:
            return messages.AT_LEAST_ONE_CHARACTER
        return messages.AT_LEAST_N_CHARACTERS.format(min_length=min_length)
    return messages.BETWEEN_N_AND_M_CHARACTERS.format(
        min_length=min_length, max_length=max_length
    )


class _TextViewField(ViewFieldForElementWithPlaceholder):
    min_length: int = Field(default=0, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    """Maximum number of characters. None means unbounded."""

    validation_pattern: str | None = None
    """Regular expression the whole value has to match."""

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForString:
        return PresentableFieldForString(parent, self.key)

    def get_default_error_message(self) -> str:
        message = _length_message(self.min_length, self.max_length)
        if message is None:
            return super().get_default_error_message()
        return messages.join(
            message, self._info_message_about_mandatoriness()
        )

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
        if (
            len(value) < self.min_length
            or (self.max_length is not None and len(value) > self.max_length)
            or (
                self.validation_pattern
                and not re.fullmatch(self.validation_pattern, value)
            )
        ):
            return self.get_default_error_message()
        return None


class ViewFieldForSingleLineText(_TextViewField):
    option_provider: SerializeAsAny[OptionProvider] | None = None
    """Suggestions offered while typing."""


class ViewFieldForMultilineText(_TextViewField):
    """Text area without a validation pattern."""


def has_character_variance(value: str) -> bool:
    """Whether `value` mixes upper and lower case letters, digits and other
    characters."""
    has_upper = has_lower = has_digit = has_other = False
    for c in value:
        if "A" <= c <= "Z":
            has_upper = True
        elif "a" <= c <= "z":
            has_lower = True
        elif "0" <= c <= "9":
            has_digit = True
        else:
            has_other = True
    return has_upper and has_lower and has_digit and has_other


class ViewFieldForPassword(_TextViewField):
    """Password input. Its read-only value only tells whether one is set."""

    is_character_variance_required: bool = False

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is not None and presentable_field.value_as_string:
            return messages.YES
        return messages.NO

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        raise UnsupportedOperationError(
            "Passwords must not be parsed.",
            details={"key": self.key},
        )

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
        if self.is_character_variance_required and not (
            has_character_variance(value)
        ):
            return messages.join(
                messages.PASSWORD_CHARACTER_VARIANCE,
                self._info_message_about_mandatoriness(),
            )
        return None


class ViewFieldForMultipleSingleLineTexts(
    ViewFieldForCollectionWithPlaceholder
):
    max_length: int | None = Field(default=None, ge=0)
    option_provider: SerializeAsAny[OptionProvider] | None = None
    validation_pattern: str | None = None
    value_separator: ValueSeparator = ValueSeparator.LINE_BREAK

    def get_default_error_message(self) -> str:
        if self.max_length is None:
            return super().get_default_error_message()
        if self.max_length == 1:
            for_one = messages.AT_MOST_ONE_CHARACTER
            for_several = messages.VALUES_WITH_AT_MOST_ONE_CHARACTER
        else:
            for_one = messages.AT_MOST_N_CHARACTERS.format(
                max_length=self.max_length
            )
            for_several = messages.VALUES_WITH_AT_MOST_N_CHARACTERS.format(
                max_length=self.max_length
            )
        return messages.join(
            self._message_for_limit(for_one, for_several),
            self._info_message_about_mandatoriness(),
        )

    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator:
        if render_mode != FieldRenderMode.FORM:
            return ValueSeparator.COMMA
        if self.option_provider is not None and (
            self.limit is None or self.limit > 1
        ):
            return ValueSeparator.LINE_BREAK
        return ValueSeparator(self.value_separator)

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        view_field_for_element = ViewFieldForSingleLineText(
            key=self.key,
            title=self.title,
            description_for_edit_mode=self.description_for_edit_mode,
            description_for_view_mode=self.description_for_view_mode,
            max_length=self.max_length,
            option_provider=self.option_provider,
            placeholder=self.placeholder,
            validation_pattern=self.validation_pattern,
        )
        error_message = self._validate_members(
            presentable_field,
            validity_check,
            presentable_object,
            data_provider,
            view_field_for_element,
        )
        return self.get_default_error_message() if error_message else None
