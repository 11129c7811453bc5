# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator

from .. import messages
from ..fields.reference import PresentableFieldForFile
from ..objects import File, ImageFile
from ..types import FieldRenderMode, ValidityCheck, ValueSeparator
from .base import ViewFieldForCollection, ViewFieldForElement

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..fields.base import PresentableFieldForElement
    from ..fields.collection import PresentableFieldForCollection
    from ..objects import PresentableObject

__all__ = (
    "FORBIDDEN_FILE_NAME_CHARACTERS",
    "ViewFieldForFile",
    "ViewFieldForImageFile",
    "ViewFieldForMultipleFiles",
)

FORBIDDEN_FILE_NAME_CHARACTERS = frozenset("<>*%&:\\")

_MEBIBYTE = 1_048_576


def split_mime_types(value):
    """Accept a comma separated string as a list of MIME types."""
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def clean_file_name(name: str) -> str:
    """Strip directories a client may send along with the file name."""
    return name.rsplit("/", 1)[-1].strip()


def is_accepted_type(file: File, accepted_mime_types: list[str]) -> bool:
    """Match MIME types exactly, by `type/*` wildcard or by `.ext`."""
    if not accepted_mime_types:
        return True
    content_type = (file.mime_type or "").upper()
    file_name = (file.name or "").upper()
    for accepted in accepted_mime_types:
        accepted = accepted.upper()
        if accepted == content_type:
            return True
        if (
            accepted.endswith("*")
            and len(accepted) > 1
            and content_type.startswith(accepted[:-1])
        ):
            return True
        if accepted.startswith(".") and file_name.endswith(accepted):
            return True
    return False


class ViewFieldForFile(ViewFieldForElement):
    accepted_mime_types: list[str] = Field(default_factory=list)
    """MIME types like `image/png`, wildcards like `image/*` or file
    extensions like `.pdf`. Empty accepts any type."""

    max_file_size: int = Field(default=2_000_000_000, ge=0)
    """Maximum size in bytes."""

    @field_validator("accepted_mime_types", mode="before")
    def _split_mime_types(cls, value):
        return split_mime_types(value)

    def create_presentable_field(
        self, parent: PresentableObject | None
    ) -> PresentableFieldForFile:
        return PresentableFieldForFile(parent, self.key)

    def get_default_error_message(self) -> str:
        size = round(self.max_file_size / _MEBIBYTE)
        if self.accepted_mime_types:
            message = messages.FILE_OF_ALLOWED_TYPE_WITH_MAXIMUM_SIZE
        else:
            message = messages.FILE_WITH_MAXIMUM_SIZE
        return messages.join(
            message.format(size=size),
            self._info_message_about_mandatoriness(),
        )

    def get_read_only_value_for(
        self,
        presentable_field: PresentableFieldForElement | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> str:
        if presentable_field is None:
            return ""
        file = presentable_field.value_as_object
        if isinstance(file, File):
            return file.name or ""
        return ""

    def validate_file(
        self,
        file: File | None,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
    ) -> str | None:
        """Check an uploaded file against type, size and name rules."""
        if file is None or not file.size:
            if self.is_mandatory(validity_check):
                return self.get_default_error_message()
            return None
        error_message = None
        if not is_accepted_type(file, self.accepted_mime_types):
            error_message = self.get_default_error_message()
        if file.size > self.max_file_size:
            return self.get_default_error_message()
        if FORBIDDEN_FILE_NAME_CHARACTERS & set(
            clean_file_name(file.name or "")
        ):
            return messages.join(
                messages.FILE_NAME_CHARACTERS,
                self._info_message_about_mandatoriness(),
            )
        return error_message

    def validate_field(
        self,
        presentable_field: PresentableFieldForElement,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        file = presentable_field.value_as_object
        return self.validate_file(
            file if isinstance(file, File) else None, validity_check
        )


class ViewFieldForImageFile(ViewFieldForFile):
    """Image upload with minimum pixel dimensions."""

    accepted_mime_types: list[str] = Field(
        default_factory=lambda: ["image/*"]
    )
    max_file_size: int = Field(default=50 * _MEBIBYTE, ge=0)
    has_automatic_rotation_enabled: bool = True

    min_side_length: int = Field(default=0, ge=0)
    """Minimum length of the longer image side in pixels."""

    min_width: int = Field(default=0, ge=0)
    min_height: int = Field(default=0, ge=0)

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
        image = presentable_field.value_as_object
        if error_message or not isinstance(image, ImageFile):
            return error_message
        if max(image.width, image.height) < self.min_side_length:
            return messages.join(
                messages.IMAGE_MIN_SIDE_LENGTH.format(
                    length=self.min_side_length
                ),
                self._info_message_about_mandatoriness(),
            )
        if image.width < self.min_width or image.height < self.min_height:
            return messages.join(
                messages.IMAGE_MIN_RESOLUTION.format(
                    width=self.min_width, height=self.min_height
                ),
                self._info_message_about_mandatoriness(),
            )
        return None


class ViewFieldForMultipleFiles(ViewFieldForCollection):
    accepted_mime_types: list[str] = Field(default_factory=list)
    max_file_size: int = Field(default=1024 * _MEBIBYTE, ge=0)
    """Maximum size of each file in bytes."""

    @field_validator("accepted_mime_types", mode="before")
    def _split_mime_types(cls, value):
        return split_mime_types(value)

    def get_default_error_message(self) -> str:
        size = round(self.max_file_size / _MEBIBYTE)
        if self.accepted_mime_types:
            for_one = messages.FILE_OF_ALLOWED_TYPE_WITH_MAXIMUM_SIZE
            for_several = messages.FILES_OF_ALLOWED_TYPES_WITH_MAXIMUM_SIZE
        else:
            for_one = messages.FILE_WITH_MAXIMUM_SIZE
            for_several = messages.FILES_WITH_MAXIMUM_SIZE
        if self.limit is not None and self.limit < 2:
            message = for_one.format(size=size)
        else:
            message = for_several.format(size=size)
            if self.limit is not None:
                message = messages.join(
                    message, messages.UP_TO_N_FILES.format(limit=self.limit)
                )
        return messages.join(
            message, self._info_message_about_mandatoriness()
        )

    def get_value_separator(
        self, render_mode: FieldRenderMode
    ) -> ValueSeparator:
        if render_mode == FieldRenderMode.FORM:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA

    def get_read_only_values_for(
        self,
        presentable_field: PresentableFieldForCollection,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None = None,
    ) -> list[str]:
        return [
            file.name or ""
            for file in presentable_field.get_values_as_object()
            if isinstance(file, File)
        ]

    def validate_file(
        self,
        file: File | None,
        validity_check: ValidityCheck = ValidityCheck.STRICT,
    ) -> str | None:
        """Check one of the files as an optional single file upload."""
        view_field_for_file = ViewFieldForFile(
            key=self.key,
            title=self.title,
            accepted_mime_types=self.accepted_mime_types,
            max_file_size=self.max_file_size,
        )
        error_message = view_field_for_file.validate_file(file, validity_check)
        return self.get_default_error_message() if error_message else None

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
        for file in presentable_field.get_values_as_object():
            if isinstance(file, File):
                error_message = self.validate_file(file, validity_check)
                if error_message:
                    return error_message
        return None
