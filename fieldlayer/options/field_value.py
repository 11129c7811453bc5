# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from pydantic import field_validator

from ..types import Option
from ..utils import key_chain as kc
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("FieldValueOptionProvider",)


class FieldValueOptionProvider(OptionProvider):
    """Offers the current values of another field as options.

    The field is addressed by a key chain on the topmost object, or on
    the parent object when there is no topmost one. Each distinct value
    becomes one option whose key and display value are the same string.
    """

    key: str
    """Dotted key chain of the field providing the values."""

    @field_validator("key", mode="before")
    def _join_key_chain(cls, value):
        if isinstance(value, (list, tuple)):
            return kc.to_key(value)
        return value

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        source = topmost if topmost is not None else parent
        if source is None:
            return
        field = source.find_presentable_field(self.key)
        if field is None:
            return
        if field.is_for_single_element:
            values = [field.value_as_string]
        else:
            values = list(field.get_values_as_string())
        seen: set[str] = set()
        for value in values:
            if value and value not in seen:
                seen.add(value)
                yield Option(value, value)
