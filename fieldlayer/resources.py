# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

__all__ = ("ResourceBundle", "DictResourceBundle")


class ResourceBundle(ABC):
    """Culture-scoped table of localized strings."""

    @abstractmethod
    def get_resource_set(self, culture: str) -> Mapping[str, str]:
        """Return the key to string mapping for `culture`."""

    def get_string(self, key: str, culture: str = "") -> str | None:
        return self.get_resource_set(culture).get(key)


class DictResourceBundle(ResourceBundle):
    def __init__(self, resources: Mapping[str, Mapping[str, str]]):
        self.resources = {c: dict(r) for c, r in resources.items()}

    def get_resource_set(self, culture: str) -> Mapping[str, str]:
        return self.resources.get(culture, {})
