# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from pydantic import Field
from typing_extensions import override

from ..data import FilterCriteria, RelationalOperator
from ..objects import User
from ..types import Option
from ..utils.comparers import UserValueComparer
from .base import OptionProvider

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..objects import PresentableObject

__all__ = (
    "format_person",
    "PersonOptionProvider",
    "PersonOptionCollection",
)


def format_person(user: User) -> str:
    """Display value of a user, e.g. `"Jane Doe (jane)"`."""
    return f"{user.display_name} ({user.user_name})"


class PersonOptionProvider(OptionProvider):
    """Options for users, keyed by user name."""

    is_resolving_missing_users_in_read_only_mode: bool = False
    """Look up users that are not among the options when rendering
    read-only values."""

    @abstractmethod
    def iter_person_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterable[tuple[User, str]]:
        """Pairs of user and display value."""

    def iter_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[Option]:
        for user, value in self.iter_person_options(
            parent, topmost, data_provider
        ):
            yield Option(user.user_name if user else None, value)

    @override
    def _find_read_only_value(
        self,
        key: str,
        options: list[Option],
        data_provider: OptionDataProvider | None,
    ) -> str | None:
        value = super()._find_read_only_value(key, options, data_provider)
        if (
            not value
            and self.is_resolving_missing_users_in_read_only_mode
            and data_provider is not None
            and data_provider.user_directory is not None
        ):
            user = data_provider.user_directory.find_one(
                FilterCriteria(
                    "user_name", RelationalOperator.IS_EQUAL_TO, key
                )
            )
            value = user.display_name if user is not None else None
        return value


class PersonOptionCollection(PersonOptionProvider):
    """Static list of users offered as options."""

    users: list[User] = Field(default_factory=list, exclude=True)

    def __len__(self) -> int:
        return len(self.users)

    def __getitem__(self, index: int) -> User:
        return self.users[index]

    def __contains__(self, user: object) -> bool:
        return user in self.users

    def add(self, user: User) -> None:
        self.users.append(user)

    def add_range(self, users: Iterable[User]) -> None:
        self.users.extend(users)

    def remove(self, user: User) -> bool:
        try:
            self.users.remove(user)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self.users.clear()

    def sort(self, field_key: str, reverse: bool = False) -> None:
        self.users.sort(
            key=UserValueComparer(field_key).as_key(), reverse=reverse
        )

    def iter_person_options(
        self,
        parent: PresentableObject | None,
        topmost: PresentableObject | None,
        data_provider: OptionDataProvider | None,
    ) -> Iterator[tuple[User, str]]:
        for user in list(self.users):
            if user is not None:
                yield user, format_person(user)
