# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any
from uuid import UUID

from pydantic import Field, SerializeAsAny

from .. import messages
from ..config import settings
from ..fields.element import (
    PresentableFieldForObject,
    PresentableFieldForString,
)
from ..lookups.base import (
    LookupProvider,
    PresentableObjectLookupProvider,
    StringLookupProvider,
)
from ..objects import PresentableObject
from ..types import FieldRenderMode, ValidityCheck, ValueSeparator
from .base import (
    ViewFieldForCollectionWithPlaceholder,
    ViewFieldForElementWithPlaceholder,
)

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection

__all__ = (
    "ViewFieldForLookup",
    "ViewFieldForStringLookup",
    "ViewFieldForPresentableObjectLookup",
    "ViewFieldForMultipleLookups",
    "ViewFieldForMultipleStringLookups",
    "ViewFieldForMultiplePresentableObjectLookups",
)

OnClickUrl = Callable[[UUID], str]


def _min_search_length() -> int:
    return settings.DEFAULT_MIN_SEARCH_LENGTH


class _LookupSettings(ABC):
    """Shared behaviour of single and multiple lookup view fields."""

    def get_is_fill_in_allowed(self) -> bool:
        return False

    @abstractmethod
    def get_lookup_provider(self) -> LookupProvider | None: ...


class ViewFieldForLookup(_LookupSettings, ViewFieldForElementWithPlaceholder):
    min_search_length: int = Field(
        default_factory=_min_search_length, ge=0, le=255
    )
    """Number of characters to type before suggestions are looked up."""

    def get_default_error_message(self) -> str:
        return messages.join(
            messages.PLEASE_SELECT_A_VALID_VALUE,
            self._info_message_about_mandatoriness(),
        )


class ViewFieldForStringLookup(ViewFieldForLookup):
    is_fill_in_allowed: bool = False
    """Accept values the lookup provider does not know."""

    lookup_provider: SerializeAsAny[StringLookupProvider] | None = None

    def get_is_fill_in_allowed(self) -> bool:
        return self.is_fill_in_allowed

    def get_lookup_provider(self) -> StringLookupProvider | None:
        return self.lookup_provider

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForString:
        return PresentableFieldForString(parent, self.key)

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        key = presentable_field.value_as_string
        read_only_value = None
        if self.lookup_provider is not None:
            read_only_value = self.lookup_provider.find_value_for_key(
                key, topmost, data_provider
            )
        if not read_only_value and self.is_fill_in_allowed:
            read_only_value = key
        return read_only_value or ""

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        value = None
        if self.lookup_provider is not None:
            value = self.lookup_provider.find_key_for_value(
                read_only_value, PresentableObject(), data_provider
            )
        if not value and self.is_fill_in_allowed:
            value = read_only_value
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
        key = presentable_field.value_as_string
        if error_message or not key or self.is_fill_in_allowed:
            return error_message
        if self.lookup_provider is None or not (
            self.lookup_provider.contains_key(
                key, presentable_object, data_provider
            )
        ):
            return self.get_default_error_message()
        return None


class ViewFieldForPresentableObjectLookup(ViewFieldForLookup):
    lookup_provider: (
        SerializeAsAny[PresentableObjectLookupProvider] | None
    ) = None
    on_click_url: OnClickUrl | None = Field(default=None, exclude=True)

    def get_lookup_provider(self) -> PresentableObjectLookupProvider | None:
        return self.lookup_provider

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForObject:
        return PresentableFieldForObject(parent, self.key, PresentableObject)

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None or self.lookup_provider is None:
            return ""
        key = presentable_field.value_as_object
        if not isinstance(key, PresentableObject):
            return ""
        return (
            self.lookup_provider.find_value_for_key(
                key, topmost, data_provider
            )
            or ""
        )

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        if self.lookup_provider is None:
            return None
        return self.lookup_provider.find_key_for_value(
            read_only_value, PresentableObject(), data_provider
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
        key = presentable_field.value_as_object
        if error_message or not isinstance(key, PresentableObject):
            return error_message
        if self.lookup_provider is None or not (
            self.lookup_provider.contains_key(
                key, presentable_object, data_provider
            )
        ):
            return self.get_default_error_message()
        return None


class ViewFieldForMultipleLookups(
    _LookupSettings, ViewFieldForCollectionWithPlaceholder
):
    min_search_length: int = Field(
        default_factory=_min_search_length, ge=0, le=255
    )

    def get_default_error_message(self) -> str:
        return messages.join(
            self._message_for_limit(
                messages.PLEASE_SELECT_A_VALID_VALUE,
                messages.PLEASE_SELECT_VALID_VALUES,
            ),
            self._info_message_about_mandatoriness(),
        )

    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator:
        if render_mode == FieldRenderMode.FORM:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA


class ViewFieldForMultipleStringLookups(ViewFieldForMultipleLookups):
    is_fill_in_allowed: bool = False
    lookup_provider: SerializeAsAny[StringLookupProvider] | None = None

    def get_is_fill_in_allowed(self) -> bool:
        return self.is_fill_in_allowed

    def get_lookup_provider(self) -> StringLookupProvider | None:
        return self.lookup_provider

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterator[str]:
        for key in presentable_field.get_values_as_string():
            read_only_value = None
            if self.lookup_provider is not None:
                read_only_value = self.lookup_provider.find_value_for_key(
                    key, topmost, data_provider
                )
            if not read_only_value and self.is_fill_in_allowed:
                read_only_value = key
            yield read_only_value or ""

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        view_field_for_element = ViewFieldForStringLookup(
            key=self.key,
            title=self.title,
            description_for_edit_mode=self.description_for_edit_mode,
            description_for_view_mode=self.description_for_view_mode,
            is_fill_in_allowed=self.is_fill_in_allowed,
            lookup_provider=self.lookup_provider,
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


class ViewFieldForMultiplePresentableObjectLookups(
    ViewFieldForMultipleLookups
):
    lookup_provider: (
        SerializeAsAny[PresentableObjectLookupProvider] | None
    ) = None
    on_click_url: OnClickUrl | None = Field(default=None, exclude=True)

    def get_lookup_provider(self) -> PresentableObjectLookupProvider | None:
        return self.lookup_provider

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterator[str]:
        if self.lookup_provider is None:
            return
        for key in presentable_field.get_values_as_object():
            if isinstance(key, PresentableObject):
                yield self.lookup_provider.find_value_for_key(
                    key, topmost, data_provider
                ) or ""

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        error_message = self._validate_count(presentable_field, validity_check)
        if error_message:
            return error_message
        for key in presentable_field.get_values_as_object():
            if not isinstance(key, PresentableObject):
                continue
            if self.lookup_provider is None or not (
                self.lookup_provider.contains_key(
                    key, presentable_object, data_provider
                )
            ):
                return self.get_default_error_message()
        return None
