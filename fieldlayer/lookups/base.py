# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Iterable
from itertools import islice
from typing import TYPE_CHECKING, Any

from .._errors import PresentationError
from .._models import Descriptor
from ..config import settings
from ..utils.comparers import VagueTermComparer
from ..utils.sequences import RestartableIterable

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = (
    "LookupProvider",
    "KeyedLookupProvider",
    "StringLookupProvider",
    "PresentableObjectLookupProvider",
)


class LookupProvider(Descriptor):
    """Provides candidate values for a free-text search term.

    Subclasses implement `iter_values_by_vague_term`.
    """

    def iter_values_by_vague_term(
        self,
        term: str,
        presentable_object: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterable[str]:
        return ()

    def find_values_by_vague_term(
        self,
        term: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> RestartableIterable[str]:
        """Candidate display values for `term`, lazily and re-iterable.

        At most `MAX_VAGUE_TERM_RESULTS` values are listed when set.
        """
        if not term:
            return RestartableIterable(tuple)
        limit = settings.MAX_VAGUE_TERM_RESULTS
        return RestartableIterable(
            lambda: islice(
                self.iter_values_by_vague_term(
                    term, presentable_object, data_provider
                ),
                limit,
            )
        )

    def find_unique_value_by_vague_term(
        self,
        term: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        """Resolve `term` to exactly one candidate value.

        A single candidate is returned as is. Among several candidates only
        one equal to the term counts. Returns None otherwise. All candidates
        are counted, regardless of the listing limit.
        """
        if not term:
            return None
        values = list(
            self.iter_values_by_vague_term(
                term, presentable_object, data_provider
            )
        )
        if len(values) == 1:
            return values[0]
        if len(values) > 1 and term in values:
            return term
        return None

    @staticmethod
    def get_comparison_for(term: str) -> Callable[[str, str], int]:
        """Comparison placing values that start with `term` first."""
        return VagueTermComparer(
            term, case_sensitive=settings.VAGUE_TERM_CASE_SENSITIVE
        )

    @staticmethod
    def try_split_value_with_parenthesis(
        value: str | None,
    ) -> tuple[str, str] | None:
        """Split `"Jane Doe (jane)"` into `("Jane Doe", "jane")`.

        Returns None unless both parts are non-empty.
        """
        if not value or not value.endswith(")"):
            return None
        start = value.rfind("(")
        if start < 1:
            return None
        left = value[:start].strip()
        inner = value[start + 1 : -1].strip()
        if left and inner:
            return left, inner
        return None

    def _sorted(self, term: str, values: Iterable[str]) -> list[str]:
        return sorted(values, key=self.get_comparison_for(term).as_key())


class KeyedLookupProvider(LookupProvider):
    """Lookup provider that also converts between keys and values."""

    @abstractmethod
    def find_key_for_value(
        self,
        value: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> Any:
        """Key of the only entry with this display value, else None."""

    @abstractmethod
    def find_value_for_key(
        self,
        key: Any,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        """Display value of the only entry with this key, else None."""

    def contains_key(
        self,
        key: Any,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> bool:
        value = self.find_value_for_key(key, presentable_object, data_provider)
        if value == "":
            raise PresentationError(
                "Empty string is not a valid value for lookup providers.",
                details={"lookup_provider": self.class_name()},
            )
        return value is not None


class StringLookupProvider(KeyedLookupProvider):
    """Keyed lookup provider whose keys are strings."""


class PresentableObjectLookupProvider(KeyedLookupProvider):
    """Keyed lookup provider whose keys are presentable objects."""
