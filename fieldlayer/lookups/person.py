# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .._errors import ConfigurationError
from ..data import FilterCriteria, RelationalOperator
from ..options.person import format_person
from ..types import FilterScope
from .base import StringLookupProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..directory import UserDirectory
    from ..objects import PresentableObject, User

__all__ = ("PersonLookupProvider",)


def _user_directory(data_provider: OptionDataProvider | None) -> UserDirectory:
    directory = getattr(data_provider, "user_directory", None)
    if directory is None:
        raise ConfigurationError(
            "Person lookups need an option data provider with a user "
            "directory.",
            details={"dependency": "user_directory"},
        )
    return directory


class PersonLookupProvider(StringLookupProvider):
    """Looks up users by user name or display name.

    Keys are user names, display values look like `"Jane Doe (jane)"`.
    """

    def iter_values_by_vague_term(
        self,
        term: str,
        presentable_object: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[str]:
        directory = _user_directory(data_provider)
        for user in directory.find_by_vague_term(
            term, FilterScope.USER_NAME_AND_DISPLAY_NAME
        ):
            if user is not None:
                yield format_person(user)

    def _find_by_user_name(
        self, user_name: str, data_provider: OptionDataProvider | None
    ) -> User | None:
        return _user_directory(data_provider).find_one(
            FilterCriteria(
                "user_name", RelationalOperator.IS_EQUAL_TO, user_name
            )
        )

    def find_value_for_key(
        self,
        key: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not key:
            return None
        user = self._find_by_user_name(key, data_provider)
        return format_person(user) if user is not None else None

    def find_key_for_value(
        self,
        value: str | None,
        presentable_object: PresentableObject | None = None,
        data_provider: OptionDataProvider | None = None,
    ) -> str | None:
        if not value:
            return None
        if parts := self.try_split_value_with_parenthesis(value):
            user = self._find_by_user_name(parts[1], data_provider)
        else:
            user = _user_directory(data_provider).find_one_by_vague_term(
                value, FilterScope.USER_NAME_AND_DISPLAY_NAME
            )
        return user.user_name if user is not None else None
