# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .._models import ImportableType
from ..data import FilterCriteria, RelationalOperator
from ..fields.reference import missing_option_data_provider
from .base import PresentableObjectLookupProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PersistentObject, PresentableObject

__all__ = ("PersistentObjectLookupProvider",)


class PersistentObjectLookupProvider(PresentableObjectLookupProvider):
    """Searches stored objects of a type by the text of one field."""

    object_type: ImportableType
    search_key: str
    """Key of the field searched and displayed."""

    def _data_provider(
        self, data_provider: OptionDataProvider | None
    ) -> OptionDataProvider:
        if data_provider is None:
            raise missing_option_data_provider(
                self.class_name(), owner="lookup provider"
            )
        return data_provider

    def _display_value(self, obj: PersistentObject) -> str:
        field = obj.find_presentable_field(self.search_key)
        text = ""
        if field is not None and field.is_for_single_element:
            text = field.get_value_as_plain_text()
        return text or obj.get_title() or obj.class_name()

    def iter_values_by_vague_term(
        self,
        term: str,
        presentable_object: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[str]:
        matches = self._data_provider(data_provider).find(
            self.object_type,
            FilterCriteria(self.search_key, RelationalOperator.CONTAINS, term),
        )
        values = {self._display_value(obj): None for obj in matches}
        yield from self._sorted(term, (v for v in values if v))

    def find_key_for_value(
        self,
        value: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> PersistentObject | None:
        if not value:
            return None
        resolution = self._data_provider(data_provider).resolve(
            self.object_type,
            FilterCriteria(
                self.search_key, RelationalOperator.IS_EQUAL_TO, value
            ),
            term=value,
        )
        return resolution.value

    def find_value_for_key(
        self,
        key: PersistentObject | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not isinstance(key, self.object_type):
            return None
        stored = self._data_provider(data_provider).find_one(
            self.object_type, FilterCriteria.for_id(key.id)
        )
        return None if stored is None else self._display_value(stored)
