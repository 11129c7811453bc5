# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Declarative descriptions of how field values are shown and validated.

A view field is independent of any object instance. Given a presentable
field located by its key chain it renders a read-only value and checks
the value, returning a user-facing message when it is not valid.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator

from .. import messages
from .._errors import ConfigurationError, PresentationError
from .._models import Descriptor
from ..fields.element import PresentableFieldForString
from ..types import (
    FieldRenderMode,
    Mandatoriness,
    ValidityCheck,
    ValueSeparator,
)
from ..utils import key_chain as kc

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableField, PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection
    from ..objects import PresentableObject

__all__ = (
    "ViewField",
    "ViewFieldForTitle",
    "ViewFieldForEditableValue",
    "ViewFieldForElement",
    "ViewFieldForElementWithPlaceholder",
    "ViewFieldForCollection",
    "ViewFieldForCollectionWithPlaceholder",
    "find_previous_field",
)


class ViewField(Descriptor):
    title: str | None = None

    def get_title(self) -> str | None:
        return self.title

    @abstractmethod
    def get_read_only_value_for(
        self,
        presentable_field: PresentableField | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        """Render the current value of `presentable_field` as text."""

    @staticmethod
    def sort_by_key_chain(view_fields: list[ViewField]) -> None:
        """Sort in place: fields without key first, then by key."""

        def compare(a: ViewField, b: ViewField) -> int:
            a_key = getattr(a, "key", None) if a.is_editable else None
            b_key = getattr(b, "key", None) if b.is_editable else None
            if a_key is None:
                return 0 if b_key is None else -1
            if b_key is None:
                return 1
            return (a_key > b_key) - (a_key < b_key)

        view_fields.sort(key=cmp_to_key(compare))

    @property
    def is_editable(self) -> bool:
        return False


class ViewFieldForTitle(ViewField):
    """Shows the title of the topmost object."""

    def get_read_only_value_for(
        self,
        presentable_field: PresentableField | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        return topmost.get_title() if topmost is not None else ""


class ViewFieldForEditableValue(ViewField):
    key: str = ""
    """Dotted key chain of the presentable field described."""

    mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL
    description_for_edit_mode: str | None = None
    description_for_view_mode: str | None = None
    is_read_only: bool = False
    is_autofocused: bool = False

    @field_validator("key", mode="before")
    def _join_key_chain(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return kc.to_key(value)
        return value

    @property
    def key_chain(self) -> tuple[str, ...]:
        return kc.from_key(self.key)

    @property
    def is_editable(self) -> bool:
        return True

    def is_mandatory(self, validity_check: ValidityCheck) -> bool:
        return self.mandatoriness == Mandatoriness.REQUIRED or (
            validity_check == ValidityCheck.STRICT
            and self.mandatoriness == Mandatoriness.DESIRED
        )

    def get_default_error_message(self) -> str:
        return messages.join(
            messages.PLEASE_ENTER_A_VALID_VALUE,
            self._info_message_about_mandatoriness(),
        )

    def _info_message_about_mandatoriness(self) -> str:
        match self.mandatoriness:
            case Mandatoriness.REQUIRED:
                return messages.THIS_IS_A_MANDATORY_FIELD
            case Mandatoriness.DESIRED:
                return messages.YOU_CAN_LEAVE_THIS_FIELD_BLANK_FOR_NOW
            case _:
                return messages.YOU_CAN_LEAVE_THIS_FIELD_BLANK

    def find_presentable_field(
        self, presentable_object: PresentableObject
    ) -> PresentableField | None:
        """Locate the described field on an object by key chain."""
        return presentable_object.find_presentable_field(self.key_chain)

    @abstractmethod
    def validate_field(
        self,
        presentable_field: PresentableField,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        """Check the field value.

        Returns:
            str | None: None if the value is valid, a user-facing error
            message otherwise.
        """


class ViewFieldForElement(ViewFieldForEditableValue):
    """View field for a single value."""

    @abstractmethod
    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForElement: ...

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        return presentable_field.value_as_string

    def parse_read_only_value(
        self,
        read_only_value: str | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        """Convert a rendered read-only value back to a field value."""
        from ..objects import PresentableObject

        presentable_field = self.create_presentable_field(PresentableObject())
        presentable_field.try_set_value_as_string(read_only_value)
        return presentable_field.value_as_object

    def validate_field(
        self,
        presentable_field: PresentableFieldForElement,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if self.is_mandatory(validity_check) and not (
            presentable_field.value_as_string
        ):
            return self.get_default_error_message()
        return None


class ViewFieldForElementWithPlaceholder(ViewFieldForElement):
    placeholder: str | None = None


class ViewFieldForCollection(ViewFieldForEditableValue):
    """View field for a collection of values."""

    limit: int | None = Field(default=None, ge=0)
    """Maximum number of values. None means unbounded."""

    def get_default_error_message(self) -> str:
        return messages.join(
            self._message_for_limit(
                messages.PLEASE_ENTER_A_VALID_VALUE,
                messages.PLEASE_ENTER_VALID_VALUES,
            ),
            self._info_message_about_mandatoriness(),
        )

    def _message_for_limit(self, for_one: str, for_several: str) -> str:
        if self.limit is not None and self.limit < 2:
            return for_one
        if self.limit is None:
            return for_several
        return messages.join(
            for_several, messages.UP_TO_N_VALUES.format(limit=self.limit)
        )

    @abstractmethod
    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator: ...

    @staticmethod
    def value_separator_text(value_separator: ValueSeparator) -> str | None:
        match value_separator:
            case ValueSeparator.NONE:
                return None
            case ValueSeparator.COMMA:
                return ", "
            case ValueSeparator.SEMICOLON:
                return "; "
            case ValueSeparator.SPACE:
                return " "
            case ValueSeparator.LINE_BREAK:
                return "\n"
        raise PresentationError(
            f'Value separator "{value_separator}" is unknown.',
            details={"value_separator": str(value_separator)},
        )

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForCollection | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        separator = self.value_separator_text(
            self.get_value_separator(FieldRenderMode.LIST_TABLE)
        )
        return (separator or "").join(
            self.get_read_only_values_for(
                presentable_field, topmost, data_provider
            )
        )

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterable[str]:
        return presentable_field.get_values_as_string()

    def _validate_count(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck,
    ) -> str | None:
        if self.is_mandatory(validity_check) and len(presentable_field) < 1:
            return self.get_default_error_message()
        if self.limit is not None and len(presentable_field) > self.limit:
            return self.get_default_error_message()
        return None

    def validate_field(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        return self._validate_count(presentable_field, validity_check)

    def _validate_members(
        self,
        presentable_field: PresentableFieldForCollection,
        validity_check: ValidityCheck,
        presentable_object: PresentableObject | None,
        data_provider: OptionDataProvider | None,
        view_field_for_element: ViewFieldForElement,
    ) -> str | None:
        """Validate the count, then each value with an element view field."""
        error_message = self._validate_count(presentable_field, validity_check)
        if error_message:
            return error_message
        for value in presentable_field.get_values_as_string():
            member = PresentableFieldForString(
                presentable_field.parent_presentable_object,
                presentable_field.key,
                value,
                is_read_only=presentable_field.is_read_only,
            )
            error_message = view_field_for_element.validate_field(
                member, validity_check, presentable_object, data_provider
            )
            if error_message:
                return error_message
        return None


class ViewFieldForCollectionWithPlaceholder(ViewFieldForCollection):
    placeholder: str | None = None


def find_previous_field(
    previous_field_key: str,
    presentable_field: PresentableFieldForElement,
    presentable_object: PresentableObject | None,
) -> PresentableFieldForElement:
    """Locate the field a subsequent value is compared with.

    The parent of `presentable_field` is searched first, then the topmost
    object.

    Raises:
        ConfigurationError: If neither object has such an element field.
    """
    chain = kc.from_key(previous_field_key)
    for owner in (
        presentable_field.parent_presentable_object,
        presentable_object,
    ):
        if owner is None:
            continue
        previous_field = owner.find_presentable_field(chain)
        if previous_field is not None and previous_field.is_for_single_element:
            return previous_field
    raise ConfigurationError(
        f'Presentable field with key "{previous_field_key}" cannot be '
        "found.",
        details={"dependency": "previous_field", "key": previous_field_key},
    )
