# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from pydantic import Field, SerializeAsAny
from typing_extensions import override

from ..types import Option
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("GroupedOptionProvider",)


class GroupedOptionProvider(OptionProvider):
    """Concatenates the options of its child providers in order.

    Children that are None are skipped.
    """

    option_providers: list[SerializeAsAny[OptionProvider] | None] = Field(
        default_factory=list
    )

    def add(self, option_provider: OptionProvider | None) -> None:
        self.option_providers.append(option_provider)

    @override
    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        for provider in self.option_providers:
            if provider is not None:
                yield from provider.get_options(parent, topmost, data_provider)

    @override
    def get_icon_urls(
        self, presentable_object: PresentableObject | None = None
    ) -> Iterable[tuple[str, str]]:
        urls: list[tuple[str, str]] = []
        for provider in self.option_providers:
            if provider is not None:
                urls.extend(provider.get_icon_urls(presentable_object))
        return urls
