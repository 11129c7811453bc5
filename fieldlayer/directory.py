# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence

from .config import settings
from .data import FilterCriteria, SortCriterion, sort_objects
from .objects import User
from .types import FilterScope, Resolution
from .utils.comparers import VagueTermComparer

__all__ = (
    "UserDirectory",
    "InMemoryUserDirectory",
    "split_user_name",
)

logger = logging.getLogger(__name__)


def split_user_name(term: str) -> str | None:
    """Return the user name of a term like `"Jane Doe (jane)"`."""
    term = term.strip()
    start = term.rfind("(")
    if start > -1 and term.endswith(")"):
        return term[start + 1 : -1].strip()
    return None


class UserDirectory(ABC):
    """Query contract of a user directory."""

    @abstractmethod
    def find(
        self,
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> list[User]: ...

    @abstractmethod
    def find_by_vague_term(
        self, term: str | None, scope: FilterScope
    ) -> Iterable[User]:
        """Find all users whose name matches a free-text term."""

    def find_one(
        self,
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> User | None:
        """Return the only matching user, or None if not exactly one."""
        matches = self.find(filter_criteria, sort_criteria)
        return matches[0] if len(matches) == 1 else None

    def resolve_by_vague_term(
        self, term: str | None, scope: FilterScope
    ) -> Resolution:
        resolution = Resolution.from_matches(
            term, self.find_by_vague_term(term, scope)
        )
        if resolution.is_ambiguous:
            logger.warning(
                "Ambiguous user reference %r: %d users match",
                term,
                resolution.match_count,
            )
        return resolution

    def find_one_by_vague_term(
        self, term: str | None, scope: FilterScope
    ) -> User | None:
        """Return the user uniquely matching `term`.

        Returns None when no user or more than one user matches.
        """
        return self.resolve_by_vague_term(term, scope).value


class InMemoryUserDirectory(UserDirectory):
    """User directory backed by a list of users.

    A vague term matches users by user name. With a display-name scope it
    also matches users whose display name starts with the term. A term of
    the form `"Display Name (user.name)"` matches the user name in
    parentheses only.
    """

    def __init__(self, users: Iterable[User] = ()):
        self.users: list[User] = list(users)

    def add(self, user: User) -> None:
        self.users.append(user)

    def __iter__(self) -> Iterator[User]:
        return iter(self.users)

    def find(
        self,
        filter_criteria: FilterCriteria | None = None,
        sort_criteria: Sequence[SortCriterion] = (),
    ) -> list[User]:
        criteria = filter_criteria or FilterCriteria.empty()
        return sort_objects(
            (u for u in self.users if criteria.matches(u)), sort_criteria
        )

    def find_by_vague_term(
        self, term: str | None, scope: FilterScope
    ) -> list[User]:
        if not term or not term.strip():
            return []
        term = term.strip()
        if (user_name := split_user_name(term)) is not None:
            matches = [
                u for u in self.users if _equals(u.user_name, user_name)
            ]
        else:
            matches = [u for u in self.users if _matches(u, term, scope)]
        comparer = VagueTermComparer(
            term, case_sensitive=settings.VAGUE_TERM_CASE_SENSITIVE
        )
        key = comparer.as_key()
        matches.sort(key=lambda u: key(u.user_name))
        return matches


def _normalize(value: str | None) -> str:
    value = value or ""
    return value if settings.VAGUE_TERM_CASE_SENSITIVE else value.casefold()


def _equals(value: str | None, term: str) -> bool:
    return _normalize(value) == _normalize(term)


def _matches(user: User, term: str, scope: FilterScope) -> bool:
    by_user_name = scope in (
        FilterScope.USER_NAME,
        FilterScope.USER_NAME_AND_DISPLAY_NAME,
    )
    by_display_name = scope in (
        FilterScope.DISPLAY_NAME,
        FilterScope.USER_NAME_AND_DISPLAY_NAME,
    )
    return (by_user_name and _equals(user.user_name, term)) or (
        by_display_name
        and _normalize(user.display_name).startswith(_normalize(term))
    )
