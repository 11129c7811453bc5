# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from .._errors import ConversionError, ReadOnlyFieldError

if TYPE_CHECKING:
    from ..objects import PresentableObject

__all__ = (
    "PresentableField",
    "PresentableFieldForElement",
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PresentableField(ABC):
    """Holds the value of one key of one presentable object.

    The content base type is fixed at construction. A read-only field
    rejects every write and keeps its state.
    """

    is_for_single_element: ClassVar[bool] = True

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        *,
        is_read_only: bool = False,
    ):
        if not key:
            raise ValueError("Key of presentable field must not be empty.")
        self._parent = parent
        self._key = key
        self._content_base_type = content_base_type
        self._is_read_only = is_read_only

    @property
    def key(self) -> str:
        return self._key

    @property
    def content_base_type(self) -> type:
        return self._content_base_type

    @property
    def parent_presentable_object(self) -> PresentableObject | None:
        return self._parent

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    @is_read_only.setter
    def is_read_only(self, value: bool) -> None:
        self._is_read_only = value

    def new_item_as_object(self) -> Any:
        """Create a fresh, empty instance of the content base type."""
        try:
            return self._content_base_type()
        except TypeError:
            return None

    def _check_writable(self) -> None:
        if self.is_read_only:
            raise ReadOnlyFieldError(
                f'Field "{self.key}" is read-only.',
                details={"key": self.key},
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


class PresentableFieldForElement(PresentableField, Generic[T]):
    """Presentable field for a single value.

    Subclasses implement `_parse` to turn a non-empty string into a value
    and may override `_coerce`, `_format` and `_plain_text`.
    """

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        value: T | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, is_read_only=is_read_only
        )
        self._value = self._coerce(value)

    @property
    def value(self) -> T | None:
        return self._value

    @value.setter
    def value(self, value: T | None) -> None:
        self._check_writable()
        self._value = self._coerce(value)

    @property
    def value_as_object(self) -> Any:
        return self.value

    @value_as_object.setter
    def value_as_object(self, value: Any) -> None:
        self.value = value

    @property
    def value_as_string(self) -> str:
        value = self.value
        return "" if value is None else self._format(value)

    @value_as_string.setter
    def value_as_string(self, raw: str | None) -> None:
        self._check_writable()
        if raw is None or raw == "":
            self.value = None
            return
        try:
            parsed = self._parse(raw)
        except ValueError as e:
            raise ConversionError.from_value(
                raw, expected=self.content_base_type, key=self.key, cause=e
            ) from e
        self.value = parsed

    def try_set_value_as_string(self, raw: str | None) -> bool:
        """Set the value from its string form.

        Returns:
            bool: False if the field is read-only or `raw` cannot be
            converted, in which case the prior value is kept.
        """
        if self.is_read_only:
            return False
        try:
            self.value_as_string = raw
        except ConversionError as e:
            logger.debug("Could not set field %s: %s", self.key, e.message)
            return False
        return True

    def get_value_as_plain_text(self) -> str:
        value = self.value
        return "" if value is None else self._plain_text(value)

    @property
    def sortable_value(self) -> Any:
        return self.value

    def _coerce(self, value: T | None) -> T | None:
        """Normalize a typed value before it is stored.

        Raises `ValueError` for values outside the field's domain.
        """
        return value

    def _format(self, value: T) -> str:
        return str(value)

    def _plain_text(self, value: T) -> str:
        return self._format(value)

    @abstractmethod
    def _parse(self, raw: str) -> T:
        """Convert a non-empty string, raising `ValueError` if malformed."""
