# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .._models import Descriptor
from ..types import Option
from ..utils.sequences import RestartableIterable

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("OptionProvider",)


class OptionProvider(Descriptor):
    """Source of the selectable options of a field.

    Subclasses implement `iter_options`. Options may depend on the parent
    or topmost object, for instance on the value of a sibling field.
    """

    def get_options(
        self,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> Iterable[Option]:
        """Return the options as a lazy sequence that can be re-iterated.

        Each iteration asks the provider again.
        """
        return RestartableIterable(
            lambda: self.iter_options(parent, topmost, data_provider)
        )

    @abstractmethod
    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterable[Option]: ...

    def get_icon_urls(
        self, presentable_object: PresentableObject | None = None
    ) -> Iterable[tuple[str, str]]:
        """Pairs of option key and icon URL. None by default."""
        return ()

    def get_icon_url_for(
        self, key: str, presentable_object: PresentableObject | None = None
    ) -> str | None:
        for option_key, url in self.get_icon_urls(presentable_object):
            if option_key == key:
                return url
        return None

    def get_display_value_for_null(self) -> str:
        return ""

    def find_value_for_key(
        self,
        key: str | None,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not key:
            return None
        for option in self.get_options(parent, topmost, data_provider):
            if option.key == key:
                return option.value
        return None

    def find_key_for_value(
        self,
        value: str | None,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        for option in self.get_options(parent, topmost, data_provider):
            if option.value == value:
                return option.key
        return None

    def contains_key(
        self,
        key: str | None,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> bool:
        return (
            self.find_value_for_key(key, parent, topmost, data_provider)
            is not None
        )

    def count_key(
        self,
        key: str | None,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> int:
        """Count the distinct values offered for `key`."""
        values = {
            option.value
            for option in self.get_options(parent, topmost, data_provider)
            if option.key == key
        }
        return len(values)

    def find_read_only_options_for_keys(
        self,
        keys: Iterable[str | None],
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> list[Option]:
        """Options for the given keys, skipping keys without a value."""
        options = list(self.get_options(parent, topmost, data_provider))
        result = []
        for key in keys:
            if not key:
                continue
            value = self._find_read_only_value(key, options, data_provider)
            if value:
                result.append(Option(key, value))
        return result

    def find_read_only_value_for_key(
        self,
        key: str | None,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        options = self.find_read_only_options_for_keys(
            (key,), parent, topmost, data_provider
        )
        return options[0].value if options else None

    def _find_read_only_value(
        self,
        key: str,
        options: list[Option],
        data_provider: OptionDataProvider | None,
    ) -> str | None:
        for option in options:
            if option.key == key:
                return option.value
        return None

    def get_option_dictionary(
        self,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> dict[str | None, str | None]:
        return {
            option.key: option.value
            for option in self.get_options(parent, topmost, data_provider)
        }

    def has_options(
        self,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> bool:
        for _ in self.get_options(parent, topmost, data_provider):
            return True
        return False
