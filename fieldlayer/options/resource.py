# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from pydantic import Field

from ..config import settings
from ..resources import ResourceBundle
from ..types import Option
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("ResourceOptionProvider",)


class ResourceOptionProvider(OptionProvider):
    """One option per non-empty key of a resource bundle.

    Keys come from the invariant culture. Display values are read for
    `culture` and fall back to the invariant string. The bundle is read
    again on every call; wrap the provider in a `CachedOptionProvider` to
    read it once per request.
    """

    resource_bundle: ResourceBundle = Field(exclude=True)
    culture: str | None = None

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        invariant = self.resource_bundle.get_resource_set(
            settings.INVARIANT_CULTURE
        )
        localized = (
            self.resource_bundle.get_resource_set(self.culture)
            if self.culture is not None
            else invariant
        )
        for key, value in list(invariant.items()):
            if key:
                yield Option(key, localized.get(key, value))
