# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from pydantic import SerializeAsAny

from ..options.base import OptionProvider
from .base import StringLookupProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("OptionLookupProvider",)


class OptionLookupProvider(StringLookupProvider):
    """Searches the display values of an option provider.

    A value matches when it contains the term, ignoring case. Resolving
    keys and values requires a unique match.
    """

    option_provider: SerializeAsAny[OptionProvider]

    def iter_values_by_vague_term(
        self,
        term: str,
        presentable_object: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[str]:
        needle = term.casefold()
        values = {
            option.value: None
            for option in self.option_provider.get_options(
                presentable_object, presentable_object, data_provider
            )
            if option.value and needle in option.value.casefold()
        }
        yield from self._sorted(term, values)

    def find_key_for_value(
        self,
        value: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not value:
            return None
        keys = {
            option.key
            for option in self.option_provider.get_options(
                presentable_object, presentable_object, data_provider
            )
            if option.value == value
        }
        return keys.pop() if len(keys) == 1 else None

    def find_value_for_key(
        self,
        key: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not key:
            return None
        values = {
            option.value
            for option in self.option_provider.get_options(
                presentable_object, presentable_object, data_provider
            )
            if option.key == key
        }
        return values.pop() if len(values) == 1 else None
