# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Query contract for persisted object stores used by options and fields."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, TypeVar
from uuid import UUID

from .types import Enum, Resolution
from .utils.comparers import compare

if TYPE_CHECKING:
    from .directory import UserDirectory
    from .objects import PersistentObject

__all__ = (
    "RelationalOperator",
    "FilterCriteria",
    "SortCriterion",
    "OptionDataProvider",
    "InMemoryOptionDataProvider",
)

P = TypeVar("P", bound="PersistentObject")

logger = logging.getLogger(__name__)


class RelationalOperator(str, Enum):
    IS_EQUAL_TO = "is_equal_to"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"


def _value_of(obj: Any, key: str) -> Any:
    if key == "id":
        return obj.id
    field = obj.find_presentable_field(key)
    if field is None or not field.is_for_single_element:
        return None
    return field.value_as_object


def _text_of(obj: Any, key: str) -> str:
    if key == "id":
        return obj.id.hex
    field = obj.find_presentable_field(key)
    if field is None or not field.is_for_single_element:
        return ""
    return field.value_as_string


@dataclass(slots=True, frozen=True)
class FilterCriteria:
    """A single condition on a field of the queried objects.

    An empty criteria (no field key) matches every object.
    """

    field_key: str | None = None
    operator: RelationalOperator = RelationalOperator.IS_EQUAL_TO
    value: Any = None

    @classmethod
    def empty(cls) -> FilterCriteria:
        return cls()

    @classmethod
    def for_id(cls, id_: UUID) -> FilterCriteria:
        return cls("id", RelationalOperator.IS_EQUAL_TO, id_)

    @property
    def is_empty(self) -> bool:
        return not self.field_key

    def matches(self, obj: Any) -> bool:
        if self.is_empty:
            return True
        if self.operator == RelationalOperator.IS_EQUAL_TO and not isinstance(
            self.value, str
        ):
            return _value_of(obj, self.field_key) == self.value
        actual = _text_of(obj, self.field_key).casefold()
        expected = str(self.value or "").casefold()
        match self.operator:
            case RelationalOperator.IS_EQUAL_TO:
                return actual == expected
            case RelationalOperator.CONTAINS:
                return expected in actual
            case RelationalOperator.STARTS_WITH:
                return actual.startswith(expected)
        raise ValueError(f"Unknown relational operator: {self.operator}")


@dataclass(slots=True, frozen=True)
class SortCriterion:
    field_key: str
    descending: bool = False


def sort_objects(
    objects: Iterable[P], sort_criteria: Sequence[SortCriterion] = ()
) -> list[P]:
    """Sort objects by several criteria, the first one taking precedence."""
    result = list(objects)
    for criterion in reversed(tuple(sort_criteria)):
        result.sort(
            key=cmp_to_key(
                lambda x, y, k=criterion.field_key: compare(
                    _value_of(x, k), _value_of(y, k)
                )
            ),
            reverse=criterion.descending,
        )
    return result


class OptionDataProvider(ABC):
    """Query access to persisted objects and the user directory."""

    def __init__(self, user_directory: UserDirectory | None = None):
        self.user_directory = user_directory

    @abstractmethod
    def find(
        self,
        type_: type[P],
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> list[P]:
        """Return objects of `type_` matching the criteria."""

    def resolve(
        self, type_: type[P], filter_criteria: FilterCriteria, term=None
    ) -> Resolution:
        """Find the single object matching the criteria."""
        matches = self.find(type_, filter_criteria)
        resolution = Resolution.from_matches(term, matches)
        if resolution.is_ambiguous:
            logger.warning(
                "Ambiguous reference %r: %d %s objects match",
                term,
                resolution.match_count,
                type_.__name__,
            )
        return resolution

    def find_one(
        self,
        type_: type[P],
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> P | None:
        matches = self.find(type_, filter_criteria, sort_criteria)
        return matches[0] if len(matches) == 1 else None


class InMemoryOptionDataProvider(OptionDataProvider):
    def __init__(
        self,
        objects: Iterable[PersistentObject] = (),
        user_directory: UserDirectory | None = None,
    ):
        super().__init__(user_directory=user_directory)
        self.objects: list[PersistentObject] = list(objects)

    def add(self, obj: PersistentObject) -> None:
        self.objects.append(obj)

    def find(
        self,
        type_: type[P],
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> list[P]:
        criteria = filter_criteria or FilterCriteria.empty()
        matches = (
            obj
            for obj in self.objects
            if isinstance(obj, type_) and criteria.matches(obj)
        )
        return sort_objects(matches, sort_criteria)
