# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Fields whose values are derived from the state of their parent.

A calculated field never stores a value of its own. The producing
callable runs on first read and its result is kept for the lifetime of
the field, except that an empty result on a non-persistent parent is
produced again on the next read. Writes go to an optional pass-through
callable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .._errors import ReadOnlyFieldError, UnsupportedOperationError
from ..objects import PersistentObject, User
from ..types import FilterScope
from ..utils.comparers import UserValueComparer
from ..utils.text import remove_tags
from . import converters
from .base import PresentableFieldForElement
from .collection import PresentableFieldForCollection
from .reference import missing_user_directory

if TYPE_CHECKING:
    from ..directory import UserDirectory
    from ..objects import PresentableObject

__all__ = (
    "PresentableFieldForCalculatedValue",
    "PresentableFieldForCalculatedValueCollection",
    "PresentableFieldForCalculatedUser",
    "PresentableFieldForCalculatedUserCollection",
)

T = TypeVar("T")

_UNSET = object()


def _is_write_protected(parent: Any) -> bool:
    return isinstance(parent, PersistentObject) and parent.is_write_protected


class _Memo(Generic[T]):
    """Result of a producing callable, kept once it is final."""

    __slots__ = ("_produce", "_parent", "_value")

    def __init__(self, produce: Callable[[], T], parent: Any):
        self._produce = produce
        self._parent = parent
        self._value: Any = _UNSET

    def get(self, is_empty: Callable[[T], bool]) -> T:
        if self._value is not _UNSET:
            return self._value
        value = self._produce()
        if not is_empty(value) or isinstance(self._parent, PersistentObject):
            self._value = value
        return value

    def reset(self) -> None:
        self._value = _UNSET


class PresentableFieldForCalculatedValue(PresentableFieldForElement[T]):
    """Element field computed by `get_value`.

    Args:
        parent: Owning object.
        key: Key of the field.
        content_base_type: Type of the produced values.
        get_value: Produces the value from the parent's state.
        pass_through: Receives values written to the field. Without it
            the field is read-only.
    """

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        get_value: Callable[[], T | None],
        pass_through: Callable[[T | None], None] | None = None,
    ):
        super().__init__(parent, key, content_base_type)
        self._memo = _Memo(get_value, parent)
        self._pass_through = pass_through

    @property
    def is_read_only(self) -> bool:
        return self._pass_through is None or _is_write_protected(
            self.parent_presentable_object
        )

    @property
    def value(self) -> T | None:
        return self._memo.get(lambda v: v is None)

    @value.setter
    def value(self, value: T | None) -> None:
        if self._pass_through is None:
            raise UnsupportedOperationError(
                f'Calculated field "{self.key}" cannot be written.',
                details={"key": self.key},
            )
        if _is_write_protected(self.parent_presentable_object):
            raise ReadOnlyFieldError(
                f'Field "{self.key}" is read-only.',
                details={"key": self.key},
            )
        self._pass_through(value)
        self._memo.reset()

    def _check_writable(self) -> None:
        if self._pass_through is None:
            raise UnsupportedOperationError(
                f'Calculated field "{self.key}" cannot be written.',
                details={"key": self.key},
            )
        super()._check_writable()

    def _parse(self, raw: str) -> T:
        return converters.parse_for_type(self.content_base_type, raw)

    def _format(self, value: T) -> str:
        return converters.format_for_type(value)

    def _plain_text(self, value: T) -> str:
        return remove_tags(self._format(value))


class PresentableFieldForCalculatedUser(
    PresentableFieldForCalculatedValue[User]
):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        get_value: Callable[[], User | None],
        pass_through: Callable[[User | None], None] | None = None,
        *,
        user_directory: UserDirectory | None = None,
    ):
        super().__init__(parent, key, User, get_value, pass_through)
        self.user_directory = user_directory

    def _parse(self, raw: str) -> User:
        if self.user_directory is None:
            raise missing_user_directory(self.key)
        user = self.user_directory.find_one_by_vague_term(
            raw, FilterScope.USER_NAME
        )
        if user is None:
            raise ValueError(f"User name {raw!r} is not unique.")
        return user

    def _format(self, value: User) -> str:
        return value.user_name

    def _plain_text(self, value: User) -> str:
        return value.display_name

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForCalculatedValueCollection(
    PresentableFieldForCollection[T]
):
    """Read-only collection computed by `get_values`."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        get_values: Callable[[], Iterable[T] | None],
    ):
        super().__init__(parent, key, content_base_type)
        self._memo = _Memo(lambda: list(get_values() or ()), parent)

    @property
    def is_read_only(self) -> bool:
        return True

    def _values(self) -> list[T]:
        return self._memo.get(lambda v: not v)

    def _check_writable(self) -> None:
        raise UnsupportedOperationError(
            f'Calculated field "{self.key}" cannot be written.',
            details={"key": self.key},
        )

    def _parse_item(self, raw: str) -> T:
        return converters.parse_for_type(self.content_base_type, raw)

    def sorted(
        self, key: Callable[[T], Any] | None = None, reverse: bool = False
    ) -> list[T]:
        """Return the values sorted, leaving the field untouched."""
        if key is None:

            def key(item: T) -> tuple[bool, Any]:
                sortable = self._sortable_item(item)
                return sortable is not None, sortable

        return sorted(self._values(), key=key, reverse=reverse)


class PresentableFieldForCalculatedUserCollection(
    PresentableFieldForCalculatedValueCollection[User]
):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        get_values: Callable[[], Iterable[User] | None],
    ):
        super().__init__(parent, key, User, get_values)

    def _same_item(self, a: Any, b: Any) -> bool:
        return a is b or getattr(a, "id", None) == getattr(b, "id", None)

    def _format_item(self, item: User) -> str:
        return item.user_name

    def _plain_text_item(self, item: User) -> str:
        return item.display_name

    def _sortable_item(self, item: User) -> str:
        return item.display_name

    def sorted_by_field(
        self, field_key: str, reverse: bool = False
    ) -> list[User]:
        return self.sorted(
            key=UserValueComparer(field_key).as_key(), reverse=reverse
        )
