# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from pydantic import Field

from .._errors import ItemExistsError
from .._models import ImportableType
from ..types import Option
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("StringOptionDictionary", "EnumOptionProvider")


class StringOptionDictionary(OptionProvider):
    """Static, ordered mapping of option keys to display values."""

    options: dict[str, str] = Field(default_factory=dict)
    display_value_for_null: str = ""
    """Value displayed when no option is selected."""

    def __len__(self) -> int:
        return len(self.options)

    def __getitem__(self, key: str) -> str:
        return self.options[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.options[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.options

    def keys(self):
        return self.options.keys()

    def values(self):
        return self.options.values()

    def add(self, key: str, value: str | None = None) -> None:
        """Add an option. The value defaults to the key.

        Raises:
            ItemExistsError: If the key is already present.
        """
        if key in self.options:
            raise ItemExistsError(
                f'Option with key "{key}" already exists.',
                details={"key": key},
            )
        self.options[key] = key if value is None else value

    def add_range(
        self, items: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        for key, value in items:
            self.add(key, value)

    def remove(self, key: str) -> bool:
        return self.options.pop(key, None) is not None

    def clear(self) -> None:
        self.options.clear()

    def sort_by_key(self, reverse: bool = False) -> None:
        self.options = dict(
            sorted(self.options.items(), key=lambda i: i[0], reverse=reverse)
        )

    def sort_by_value(self, reverse: bool = False) -> None:
        self.options = dict(
            sorted(
                self.options.items(),
                key=lambda i: i[1].casefold(),
                reverse=reverse,
            )
        )

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        for key, value in list(self.options.items()):
            yield Option(key, value)

    def get_display_value_for_null(self) -> str:
        return self.display_value_for_null


class EnumOptionProvider(OptionProvider):
    """Options for the members of an enumeration, keyed by member value.

    Display values default to the member names in sentence case.
    """

    enum_type: ImportableType
    labels: dict[str, str] = Field(default_factory=dict)

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        for member in self.enum_type:
            key = str(member.value)
            label = self.labels.get(key)
            if label is None:
                label = member.name.replace("_", " ").capitalize()
            yield Option(key, label)
