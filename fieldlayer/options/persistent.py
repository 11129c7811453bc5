# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .._models import ImportableType
from ..data import SortCriterion
from ..fields.reference import missing_option_data_provider
from ..types import Option
from ..utils.text import format_id
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("PersistentObjectOptionProvider",)


class PersistentObjectOptionProvider(OptionProvider):
    """Options for all stored objects of a type, keyed by id."""

    object_type: ImportableType
    sort_key: str | None = None
    """Key of the field to order the objects by."""

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        if data_provider is None:
            raise missing_option_data_provider(
                self.class_name(), owner="option provider"
            )
        sort_criteria = (
            (SortCriterion(self.sort_key),) if self.sort_key else ()
        )
        for obj in data_provider.find(self.object_type, None, sort_criteria):
            yield Option(format_id(obj.id), obj.get_title())
