# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Callable, Iterable, Iterator
from decimal import Decimal
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from .._errors import ConversionError, UnsupportedOperationError
from ..utils.sequences import RestartableIterable
from ..utils.text import format_id, remove_tags
from . import converters
from .base import PresentableField

if TYPE_CHECKING:
    from ..objects import PresentableObject

__all__ = (
    "PresentableFieldForCollection",
    "PresentableFieldForStringCollection",
    "PresentableFieldForDecimalCollection",
    "PresentableFieldForObjectCollection",
    "PresentableFieldForPresentableObjectCollection",
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PresentableFieldForCollection(PresentableField, Generic[T]):
    """Presentable field for an ordered collection of values.

    Values keep the order they were added in until the collection is
    sorted. The `get_values_*` projections are lazy and restartable.
    """

    is_for_single_element: ClassVar[bool] = False

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        values: Iterable[T] | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, is_read_only=is_read_only
        )
        self._items: list[T] = list(values or ())

    def _values(self) -> list[T]:
        return self._items

    @property
    def value_as_object(self) -> list[T]:
        return list(self._values())

    def __len__(self) -> int:
        return len(self._values())

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._values()))

    def __getitem__(self, index: int) -> T:
        return self._values()[index]

    def __contains__(self, item: Any) -> bool:
        return any(self._same_item(v, item) for v in self._values())

    def add(self, item: T) -> None:
        self._check_writable()
        self._items.append(item)

    def add_range(self, items: Iterable[T]) -> None:
        self._check_writable()
        self._items.extend(items)

    def add_object(self, item: Any) -> None:
        self.add(item)

    def add_string(self, raw: str | None) -> None:
        """Parse `raw` and append the result. Empty strings add nothing.

        Raises:
            ReadOnlyFieldError: If the field is read-only.
            ConversionError: If `raw` cannot be converted.
        """
        self._check_writable()
        if raw is None or raw == "":
            return
        try:
            item = self._parse_item(raw)
        except ValueError as e:
            raise ConversionError.from_value(
                raw, expected=self.content_base_type, key=self.key, cause=e
            ) from e
        self.add(item)

    def try_add_string(self, raw: str | None) -> bool:
        if self.is_read_only:
            return False
        try:
            self.add_string(raw)
        except ConversionError as e:
            logger.debug("Could not add to field %s: %s", self.key, e.message)
            return False
        return True

    def remove(self, item: T) -> bool:
        self._check_writable()
        for index, value in enumerate(self._items):
            if self._same_item(value, item):
                del self._items[index]
                return True
        return False

    def clear(self) -> None:
        self._check_writable()
        self._items.clear()

    def swap(self, index_a: int, index_b: int) -> None:
        self._check_writable()
        items = self._items
        items[index_a], items[index_b] = items[index_b], items[index_a]

    def sort(
        self, key: Callable[[T], Any] | None = None, reverse: bool = False
    ) -> None:
        """Sort in place, by sortable value unless `key` is given.

        Empty sortable values go first.
        """
        self._check_writable()
        if key is None:

            def key(item: T) -> tuple[bool, Any]:
                sortable = self._sortable_item(item)
                return sortable is not None, sortable

        self._items.sort(key=key, reverse=reverse)

    def sort_by(self, comparison: Callable[[T, T], int]) -> None:
        self.sort(key=cmp_to_key(comparison))

    def get_values_as_string(self) -> RestartableIterable[str]:
        return RestartableIterable(
            lambda: (self._format_item(v) for v in self._values())
        )

    def get_values_as_plain_text(self) -> RestartableIterable[str]:
        return RestartableIterable(
            lambda: (self._plain_text_item(v) for v in self._values())
        )

    def get_values_as_object(self) -> RestartableIterable[Any]:
        return RestartableIterable(lambda: iter(list(self._values())))

    def get_sortable_values(self) -> RestartableIterable[Any]:
        return RestartableIterable(
            lambda: (self._sortable_item(v) for v in self._values())
        )

    def _same_item(self, a: Any, b: Any) -> bool:
        return a == b

    def _format_item(self, item: T) -> str:
        return converters.format_for_type(item)

    def _plain_text_item(self, item: T) -> str:
        return self._format_item(item)

    def _sortable_item(self, item: T) -> Any:
        return item

    @abstractmethod
    def _parse_item(self, raw: str) -> T:
        """Convert a non-empty string, raising `ValueError` if malformed."""


class PresentableFieldForStringCollection(PresentableFieldForCollection[str]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        values: Iterable[str] | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, str, values, is_read_only=is_read_only)

    def _parse_item(self, raw: str) -> str:
        return raw

    def _plain_text_item(self, item: str) -> str:
        return remove_tags(item)


class PresentableFieldForDecimalCollection(
    PresentableFieldForCollection[Decimal]
):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        values: Iterable[Decimal] | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, Decimal, values, is_read_only=is_read_only
        )

    def _parse_item(self, raw: str) -> Decimal:
        return converters.parse_decimal(raw)


class PresentableFieldForObjectCollection(PresentableFieldForCollection[Any]):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type = object,
        values: Iterable[Any] | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, values, is_read_only=is_read_only
        )

    def _parse_item(self, raw: str) -> Any:
        if not converters.has_parser_for(self.content_base_type):
            return raw
        return converters.parse_for_type(self.content_base_type, raw)


class PresentableFieldForPresentableObjectCollection(
    PresentableFieldForCollection["PresentableObject"]
):
    """Collection of child presentable objects owned by the parent.

    Child objects have no string form to be parsed from.
    """

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type,
        values: Iterable[PresentableObject] | None = None,
        *,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, values, is_read_only=is_read_only
        )

    def add_string(self, raw: str | None) -> None:
        raise UnsupportedOperationError(
            f'Values of field "{self.key}" cannot be added from strings.',
            details={"key": self.key},
        )

    def try_add_string(self, raw: str | None) -> bool:
        self.add_string(raw)
        return False

    def _same_item(self, a: Any, b: Any) -> bool:
        return a is b or (
            getattr(a, "id", None) is not None
            and getattr(a, "id", None) == getattr(b, "id", None)
        )

    def _format_item(self, item: PresentableObject) -> str:
        return format_id(item.id)

    def _plain_text_item(self, item: PresentableObject) -> str:
        return item.get_title()

    def _sortable_item(self, item: PresentableObject) -> Any:
        return item.get_title()

    def _parse_item(self, raw: str) -> PresentableObject:
        raise UnsupportedOperationError(
            f'Values of field "{self.key}" cannot be parsed from strings.'
        )
