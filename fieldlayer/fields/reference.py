# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Fields referencing persistent objects and users.

References are stored as objects and written to strings as their ids or
user names. Converting a string back needs a resolver that is passed in
at construction. A string resolves only if exactly one object matches;
the outcome of the last attempt is kept in `last_resolution`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from .._errors import ConfigurationError
from ..data import FilterCriteria
from ..objects import File, PersistentObject, User
from ..types import FilterScope, Resolution
from ..utils.comparers import UserValueComparer
from ..utils.text import format_id, parse_id
from .base import PresentableFieldForElement
from .collection import PresentableFieldForCollection

if TYPE_CHECKING:
    from ..data import OptionDataProvider
    from ..directory import UserDirectory
    from ..objects import PresentableObject

__all__ = (
    "PresentableFieldForPersistentObject",
    "PresentableFieldForFile",
    "PresentableFieldForUser",
    "PresentableFieldForPersistentObjectCollection",
    "PresentableFieldForUserCollection",
    "missing_option_data_provider",
    "missing_user_directory",
)

logger = logging.getLogger(__name__)


def missing_option_data_provider(
    key: str, owner: str = "field"
) -> ConfigurationError:
    return ConfigurationError(
        f'Option data provider of {owner} "{key}" is missing. This may be '
        "caused by a view field for string choices being used for a field "
        "referencing persistent objects; use a view field for presentable "
        "object choices instead.",
        details={"key": key, "dependency": "option_data_provider"},
    )


def missing_user_directory(key: str) -> ConfigurationError:
    return ConfigurationError(
        f'User directory of field "{key}" is missing. This may be caused '
        "by a view field for string choices being used for a user field; "
        "use a view field for person choices instead.",
        details={"key": key, "dependency": "user_directory"},
    )


def _same_object(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if a is None or b is None:
        return False
    return getattr(a, "id", None) == getattr(b, "id", None)


class _ResolvesPersistentObjects:
    key: str
    content_base_type: type
    option_data_provider: OptionDataProvider | None
    last_resolution: Resolution | None

    def _resolve(self, raw: str) -> PersistentObject:
        if self.option_data_provider is None:
            raise missing_option_data_provider(self.key)
        id_ = parse_id(raw)
        resolution = self.option_data_provider.resolve(
            self.content_base_type, FilterCriteria.for_id(id_), term=raw
        )
        self.last_resolution = resolution
        logger.debug(
            "Resolved %r for field %s: %d match(es)",
            raw,
            self.key,
            resolution.match_count,
        )
        if not resolution.is_unique:
            raise ValueError(
                f"Id {raw!r} matches {resolution.match_count} objects."
            )
        return resolution.value


class _ResolvesUsers:
    key: str
    user_directory: UserDirectory | None
    last_resolution: Resolution | None

    def _resolve(self, raw: str) -> User:
        if self.user_directory is None:
            raise missing_user_directory(self.key)
        resolution = self.user_directory.resolve_by_vague_term(
            raw, FilterScope.USER_NAME
        )
        self.last_resolution = resolution
        logger.debug(
            "Resolved user %r for field %s: %d match(es)",
            raw,
            self.key,
            resolution.match_count,
        )
        if not resolution.is_unique:
            raise ValueError(
                f"User name {raw!r} matches {resolution.match_count} users."
            )
        return resolution.value


class PresentableFieldForPersistentObject(
    _ResolvesPersistentObjects, PresentableFieldForElement[PersistentObject]
):
    """Reference to a persistent object, written as its id."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type[PersistentObject] = PersistentObject,
        value: PersistentObject | None = None,
        *,
        option_data_provider: OptionDataProvider | None = None,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, value, is_read_only=is_read_only
        )
        self.option_data_provider = option_data_provider
        self.last_resolution: Resolution | None = None

    def _parse(self, raw: str) -> PersistentObject:
        return self._resolve(raw)

    def _format(self, value: PersistentObject) -> str:
        return format_id(value.id)

    def _plain_text(self, value: PersistentObject) -> str:
        return value.get_title()

    @property
    def sortable_value(self) -> str | None:
        return self.value.get_title() if self.value is not None else None


class PresentableFieldForFile(PresentableFieldForPersistentObject):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: File | None = None,
        *,
        option_data_provider: OptionDataProvider | None = None,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent,
            key,
            File,
            value,
            option_data_provider=option_data_provider,
            is_read_only=is_read_only,
        )


class PresentableFieldForUser(
    _ResolvesUsers, PresentableFieldForElement[User]
):
    """Reference to a user, written as the user name."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        value: User | None = None,
        *,
        user_directory: UserDirectory | None = None,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, User, value, is_read_only=is_read_only)
        self.user_directory = user_directory
        self.last_resolution: Resolution | None = None

    def _parse(self, raw: str) -> User:
        return self._resolve(raw)

    def _format(self, value: User) -> str:
        return value.user_name

    def _plain_text(self, value: User) -> str:
        return value.display_name

    @property
    def sortable_value(self) -> str | None:
        return self.value.display_name if self.value is not None else None

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForPersistentObjectCollection(
    _ResolvesPersistentObjects, PresentableFieldForCollection[PersistentObject]
):
    """Ordered references to persistent objects, removed by id."""

    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        content_base_type: type[PersistentObject] = PersistentObject,
        values: Iterable[PersistentObject] | None = None,
        *,
        option_data_provider: OptionDataProvider | None = None,
        is_read_only: bool = False,
    ):
        super().__init__(
            parent, key, content_base_type, values, is_read_only=is_read_only
        )
        self.option_data_provider = option_data_provider
        self.last_resolution: Resolution | None = None

    def _parse_item(self, raw: str) -> PersistentObject:
        return self._resolve(raw)

    def _same_item(self, a: Any, b: Any) -> bool:
        return _same_object(a, b)

    def _format_item(self, item: PersistentObject) -> str:
        return format_id(item.id)

    def _plain_text_item(self, item: PersistentObject) -> str:
        return item.get_title()

    def _sortable_item(self, item: PersistentObject) -> str:
        return item.get_title()


class PresentableFieldForUserCollection(
    _ResolvesUsers, PresentableFieldForCollection[User]
):
    def __init__(
        self,
        parent: PresentableObject | None,
        key: str,
        values: Iterable[User] | None = None,
        *,
        user_directory: UserDirectory | None = None,
        is_read_only: bool = False,
    ):
        super().__init__(parent, key, User, values, is_read_only=is_read_only)
        self.user_directory = user_directory
        self.last_resolution: Resolution | None = None

    def _parse_item(self, raw: str) -> User:
        return self._resolve(raw)

    def _same_item(self, a: Any, b: Any) -> bool:
        return _same_object(a, b)

    def _format_item(self, item: User) -> str:
        return item.user_name

    def _plain_text_item(self, item: User) -> str:
        return item.display_name

    def _sortable_item(self, item: User) -> str:
        return item.display_name

    def sort_by_field(self, field_key: str, reverse: bool = False) -> None:
        """Sort users by one of their fields."""
        self.sort(key=UserValueComparer(field_key).as_key(), reverse=reverse)

