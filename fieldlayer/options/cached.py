# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import PrivateAttr, SerializeAsAny
from typing_extensions import override

from .._errors import ConfigurationError
from ..types import Option
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = ("CachedOptionProvider",)

logger = logging.getLogger(__name__)


class CachedOptionProvider(OptionProvider):
    """Option provider computing its options at most once per instance.

    The first call to `get_options` fills the cache, either from the
    wrapped `option_provider` or from `iter_cached_options`. Every later
    call returns the same tuple, whatever the arguments. Instances are
    meant to live for one request and are not thread safe.
    """

    option_provider: SerializeAsAny[OptionProvider] | None = None
    """Provider whose options are cached. Subclasses may leave it unset
    and implement `iter_cached_options` instead."""

    _cache: tuple[Option, ...] | None = PrivateAttr(default=None)

    @override
    def get_options(
        self,
        parent: PresentableObject | None = None,
        topmost: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> tuple[Option, ...]:
        if self._cache is None:
            if self.option_provider is not None:
                options = self.option_provider.get_options(
                    parent, topmost, data_provider
                )
            else:
                options = self.iter_cached_options(data_provider)
            self._cache = tuple(options)
            logger.debug(
                "Cached %d options of %s",
                len(self._cache),
                self.class_name(),
            )
        return self._cache

    @override
    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterable[Option]:
        return self.get_options(parent, topmost, data_provider)

    def iter_cached_options(
        self, data_provider: OptionDataProvider | None
    ) -> Iterable[Option]:
        """Produce the options independent of any particular object."""
        raise ConfigurationError(
            f"{self.class_name()} has neither an option provider to wrap "
            "nor an implementation of iter_cached_options.",
            details={"dependency": "option_provider"},
        )

    @override
    def get_icon_urls(
        self, presentable_object: PresentableObject | None = None
    ) -> Iterable[tuple[str, str]]:
        if self.option_provider is not None:
            return self.option_provider.get_icon_urls(presentable_object)
        return ()

    @override
    def get_display_value_for_null(self) -> str:
        if self.option_provider is not None:
            return self.option_provider.get_display_value_for_null()
        return ""

    @property
    def is_cached(self) -> bool:
        return self._cache is not None

    def clear_cache(self) -> None:
        self._cache = None
