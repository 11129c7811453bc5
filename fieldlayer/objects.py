# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import UUID, uuid4

from .fields.base import PresentableField
from .fields.element import (
    PresentableFieldForNullableDateTime,
    PresentableFieldForNullableInt,
    PresentableFieldForString,
)
from .fields.field_collection import FieldCollection
from .utils.text import parse_id

__all__ = (
    "PresentableObject",
    "PersistentObject",
    "User",
    "File",
    "ImageFile",
)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class PresentableObject:
    """Object exposing its values through presentable fields.

    Attributes:
        id (UUID): Identifier of the object.
        fields (FieldCollection): The fields of the object in order.
    """

    title_key: ClassVar[str | None] = None
    """Key of the field rendered as the title of the object."""

    def __init__(self, id: UUID | str | None = None):
        self.id: UUID = parse_id(id) if id is not None else uuid4()
        self.fields = FieldCollection()

    @classmethod
    def class_name(cls) -> str:
        return cls.__name__

    def find_presentable_field(
        self, key: str | Sequence[str]
    ) -> PresentableField | None:
        return self.fields.find(key)

    def get_title(self) -> str:
        if self.title_key:
            field = self.find_presentable_field(self.title_key)
            if field is not None and field.is_for_single_element:
                return field.get_value_as_plain_text()
        return self.class_name()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PresentableObject):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.class_name()}(id={self.id.hex})"


class PersistentObject(PresentableObject):
    def __init__(
        self, id: UUID | str | None = None, *, is_write_protected: bool = False
    ):
        super().__init__(id=id)
        self.is_write_protected = is_write_protected


class User(PersistentObject):
    """A directory user. Its title is the display name."""

    title_key = "display_name"

    def __init__(
        self,
        user_name: str,
        display_name: str | None = None,
        email: str | None = None,
        birthday: datetime | None = None,
        *,
        id: UUID | str | None = None,
        created_at: datetime | None = None,
        modified_at: datetime | None = None,
        is_write_protected: bool = False,
    ):
        super().__init__(id=id, is_write_protected=is_write_protected)
        created_at = created_at or _now_utc()
        self.fields.add_range(
            (
                PresentableFieldForString(self, "user_name", user_name),
                PresentableFieldForString(
                    self, "display_name", display_name or user_name
                ),
                PresentableFieldForString(self, "email", email),
                PresentableFieldForNullableDateTime(
                    self, "birthday", birthday
                ),
                PresentableFieldForNullableDateTime(
                    self, "created_at", created_at, is_read_only=True
                ),
                PresentableFieldForNullableDateTime(
                    self,
                    "modified_at",
                    modified_at or created_at,
                    is_read_only=True,
                ),
            )
        )

    @property
    def user_name(self) -> str:
        return self.fields["user_name"].value

    @property
    def display_name(self) -> str:
        return self.fields["display_name"].value

    @property
    def email(self) -> str | None:
        return self.fields["email"].value

    @property
    def birthday(self) -> datetime | None:
        return self.fields["birthday"].value

    @property
    def created_at(self) -> datetime:
        return self.fields["created_at"].value

    @property
    def modified_at(self) -> datetime:
        return self.fields["modified_at"].value

    def __repr__(self) -> str:
        return f"User(user_name={self.user_name!r})"


class File(PersistentObject):
    title_key = "name"

    def __init__(
        self,
        name: str | None = None,
        mime_type: str | None = None,
        size: int | None = None,
        *,
        id: UUID | str | None = None,
        is_write_protected: bool = False,
    ):
        super().__init__(id=id, is_write_protected=is_write_protected)
        self.fields.add_range(
            (
                PresentableFieldForString(self, "name", name),
                PresentableFieldForString(self, "mime_type", mime_type),
                PresentableFieldForNullableInt(self, "size", size),
            )
        )

    @property
    def name(self) -> str | None:
        return self.fields["name"].value

    @property
    def mime_type(self) -> str | None:
        return self.fields["mime_type"].value

    @property
    def size(self) -> int | None:
        return self.fields["size"].value

    @property
    def is_image(self) -> bool:
        return (self.mime_type or "").lower().startswith("image/")


class ImageFile(File):
    """File with the pixel dimensions of the image it holds."""

    def __init__(
        self,
        name: str | None = None,
        mime_type: str | None = None,
        size: int | None = None,
        width: int | None = None,
        height: int | None = None,
        *,
        id: UUID | str | None = None,
        is_write_protected: bool = False,
    ):
        super().__init__(
            name,
            mime_type,
            size,
            id=id,
            is_write_protected=is_write_protected,
        )
        self.fields.add_range(
            (
                PresentableFieldForNullableInt(self, "width", width),
                PresentableFieldForNullableInt(self, "height", height),
            )
        )

    @property
    def width(self) -> int:
        return self.fields["width"].value or 0

    @property
    def height(self) -> int:
        return self.fields["height"].value or 0
