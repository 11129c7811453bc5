# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from .._errors import (
    ItemExistsError,
    ItemNotFoundError,
    UnsupportedOperationError,
)
from ..utils import key_chain as kc
from .base import PresentableField

__all__ = ("FieldCollection",)


class FieldCollection:
    """Ordered, keyed set of presentable fields of one object.

    Keys are unique within the collection. Key chains address fields of
    child presentable objects held in single-element fields.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Iterable[PresentableField] | None = None):
        self._fields: dict[str, PresentableField] = {}
        if fields:
            self.add_range(fields)

    def add(self, field: PresentableField) -> None:
        """Append a field.

        Raises:
            ItemExistsError: If a field with the same key is present.
        """
        if field.key in self._fields:
            raise ItemExistsError(
                f'Field with key "{field.key}" already exists.',
                details={"key": field.key},
            )
        self._fields[field.key] = field

    def add_range(self, fields: Iterable[PresentableField]) -> None:
        for field in fields:
            self.add(field)

    def __getitem__(self, key: str) -> PresentableField:
        try:
            return self._fields[key]
        except KeyError as e:
            raise ItemNotFoundError(
                f'Field with key "{key}" was not found.',
                details={"key": key},
            ) from e

    def get(
        self, key: str, default: PresentableField | None = None
    ) -> PresentableField | None:
        return self._fields.get(key, default)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def contains(self, key: str | Sequence[str]) -> bool:
        if isinstance(key, str) and key in self._fields:
            return True
        chain = kc.from_key(key)
        if len(chain) == 1:
            return chain[0] in self._fields
        try:
            return self.find(chain) is not None
        except UnsupportedOperationError:
            return False

    def __contains__(self, key: Any) -> bool:
        if isinstance(key, PresentableField):
            return self._fields.get(key.key) is key
        if isinstance(key, (str, tuple, list)):
            return self.contains(key)
        return False

    def find(self, key_chain: str | Sequence[str]) -> PresentableField | None:
        """Walk a key chain through nested presentable objects.

        Returns:
            PresentableField | None: The addressed field, or None if any
            link is missing or an intermediate value is empty.

        Raises:
            UnsupportedOperationError: If an intermediate link addresses a
                collection field.
        """
        from ..objects import PresentableObject

        chain = kc.from_key(key_chain)
        if not chain:
            return None
        field = self._fields.get(chain[0])
        if field is None or len(chain) == 1:
            return field
        if not field.is_for_single_element:
            raise UnsupportedOperationError(
                f'Key chain "{kc.to_key(chain)}" cannot be resolved '
                f'because "{field.key}" is a collection field.',
                details={"key_chain": list(chain)},
            )
        child = field.value_as_object
        if not isinstance(child, PresentableObject):
            return None
        return child.fields.find(kc.remove_first_link_of(chain))

    def remove(self, key: str) -> bool:
        return self._fields.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[PresentableField]:
        return iter(self._fields.values())

    def __bool__(self) -> bool:
        return bool(self._fields)

    def __repr__(self) -> str:
        return f"FieldCollection({list(self._fields)!r})"
