# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any
from uuid import UUID

from pydantic import Field, SerializeAsAny

from .. import messages
from .._errors import ConfigurationError
from ..fields.element import (
    PresentableFieldForObject,
    PresentableFieldForString,
)
from ..fields.reference import PresentableFieldForUser, missing_user_directory
from ..objects import PresentableObject
from ..options.base import OptionProvider
from ..types import (
    FieldRenderMode,
    FilterScope,
    OptionControlType,
    OptionDisplayStyle,
    ValidityCheck,
    ValueSeparator,
)
from ..utils.text import format_id
from .base import ViewFieldForCollection, ViewFieldForElement

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection

__all__ = (
    "ViewFieldForChoice",
    "ViewFieldForStringChoice",
    "ViewFieldForPresentableObjectChoice",
    "ViewFieldForPersonChoice",
    "ViewFieldForMultipleChoices",
    "ViewFieldForMultipleStringChoices",
    "ViewFieldForMultiplePresentableObjectChoices",
)

OnClickUrl = Callable[[UUID], str]


def _missing_option_provider(view_field: Any) -> ConfigurationError:
    return ConfigurationError(
        f'Option provider of view field "{view_field.key}" is missing.',
        details={"key": view_field.key, "dependency": "option_provider"},
    )


class ViewFieldForChoice(ViewFieldForElement):
    """Single selection among the options of an option provider."""

    option_provider: SerializeAsAny[OptionProvider] | None = None
    option_control_type: OptionControlType = OptionControlType.AUTOMATIC
    option_display_style: OptionDisplayStyle = (
        OptionDisplayStyle.ICON_WITH_TEXT_FALLBACK
    )

    def require_option_provider(self) -> OptionProvider:
        if self.option_provider is None:
            raise _missing_option_provider(self)
        return self.option_provider

    def get_default_error_message(self) -> str:
        return messages.join(
            messages.PLEASE_SELECT_A_VALID_VALUE,
            self._info_message_about_mandatoriness(),
        )

    def _selected_key(self, presentable_field: PresentableFieldForElement):
        return presentable_field.value_as_string

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
        selected_key: str | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        if selected_key is None:
            selected_key = self._selected_key(presentable_field)
        value = self.require_option_provider().find_read_only_value_for_key(
            selected_key,
            presentable_field.parent_presentable_object,
            topmost,
            data_provider,
        )
        return value or ""

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        return self.require_option_provider().find_key_for_value(
            read_only_value,
            PresentableObject(),
            PresentableObject(),
            data_provider,
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
        key = self._selected_key(presentable_field)
        if error_message or not key:
            return error_message
        key_count = self.require_option_provider().count_key(
            key,
            presentable_field.parent_presentable_object,
            presentable_object,
            data_provider,
        )
        if key_count < 1:
            return self.get_default_error_message()
        if key_count > 1:
            return messages.join(
                messages.SELECTED_VALUE_NOT_UNIQUE,
                self.get_default_error_message(),
            )
        return None


class ViewFieldForStringChoice(ViewFieldForChoice):
    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForString:
        return PresentableFieldForString(parent, self.key)


class ViewFieldForPresentableObjectChoice(ViewFieldForChoice):
    """Choice of a presentable object, keyed by its formatted id."""

    on_click_url: OnClickUrl | None = Field(default=None, exclude=True)
    """Builds the URL to open for the id of a selected object."""

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForObject:
        return PresentableFieldForObject(parent, self.key, PresentableObject)

    def _selected_key(self, presentable_field: PresentableFieldForElement):
        value = presentable_field.value_as_object
        if isinstance(value, PresentableObject):
            return format_id(value.id)
        return presentable_field.value_as_string


class ViewFieldForPersonChoice(ViewFieldForChoice):
    """Choice of a user, keyed by user name."""

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForUser:
        return PresentableFieldForUser(parent, self.key)

    def get_default_error_message(self) -> str:
        return messages.join(
            messages.PLEASE_SELECT_A_VALID_PERSON,
            self._info_message_about_mandatoriness(),
        )

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
        selected_key: str | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        return presentable_field.value_as_string

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> UUID | None:
        if data_provider is None or data_provider.user_directory is None:
            raise missing_user_directory(self.key)
        user = data_provider.user_directory.find_one_by_vague_term(
            read_only_value, FilterScope.USER_NAME_AND_DISPLAY_NAME
        )
        return user.id if user is not None else None


class ViewFieldForMultipleChoices(ViewFieldForCollection):
    """Selection of several options of an option provider."""

    option_provider: SerializeAsAny[OptionProvider] | None = None
    option_display_style: OptionDisplayStyle = (
        OptionDisplayStyle.ICON_WITH_TEXT_FALLBACK
    )
    is_auto_selection_enabled: bool = False
    """Select options automatically when only one is available."""

    def require_option_provider(self) -> OptionProvider:
        if self.option_provider is None:
            raise _missing_option_provider(self)
        return self.option_provider

    def get_default_error_message(self) -> str:
        return messages.join(
            self._message_for_limit(
                messages.PLEASE_SELECT_A_VALID_VALUE,
                messages.PLEASE_SELECT_VALID_VALUES,
            ),
            self._info_message_about_mandatoriness(),
        )

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterator[str]:
        options = self.require_option_provider()
        for option in options.find_read_only_options_for_keys(
            presentable_field.get_values_as_string(),
            presentable_field.parent_presentable_object,
            topmost,
            data_provider,
        ):
            yield option.value

    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator:
        # editable values are posted back comma separated
        if render_mode == FieldRenderMode.FORM and self.is_read_only:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA

    @abstractmethod
    def _element_view_field(self) -> ViewFieldForChoice:
        """Element view field each selected key is validated with."""

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        return self._validate_members(
            presentable_field,
            validity_check,
            presentable_object,
            data_provider,
            self._element_view_field(),
        )


class ViewFieldForMultipleStringChoices(ViewFieldForMultipleChoices):
    def _element_view_field(self) -> ViewFieldForChoice:
        return ViewFieldForStringChoice(
            key=self.key,
            title=self.title,
            description_for_edit_mode=self.description_for_edit_mode,
            description_for_view_mode=self.description_for_view_mode,
            option_display_style=self.option_display_style,
            option_provider=self.option_provider,
        )


class ViewFieldForMultiplePresentableObjectChoices(
    ViewFieldForMultipleChoices
):
    on_click_url: OnClickUrl | None = Field(default=None, exclude=True)

    def _element_view_field(self) -> ViewFieldForChoice:
        return ViewFieldForPresentableObjectChoice(
            key=self.key,
            title=self.title,
            description_for_edit_mode=self.description_for_edit_mode,
            description_for_view_mode=self.description_for_view_mode,
            option_display_style=self.option_display_style,
            option_provider=self.option_provider,
            on_click_url=self.on_click_url,
        )
