# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fieldlayer.data import InMemoryOptionDataProvider
from fieldlayer.directory import InMemoryUserDirectory
from fieldlayer.fields.collection import (
    PresentableFieldForDecimalCollection,
    PresentableFieldForStringCollection,
)
from fieldlayer.fields.element import (
    PresentableFieldForNullableDecimal,
    PresentableFieldForObject,
    PresentableFieldForString,
)
from fieldlayer.objects import PersistentObject, PresentableObject, User


class Address(PresentableObject):
    title_key = "city"

    def __init__(self, city=None, street=None, **kwargs):
        super().__init__(**kwargs)
        self.fields.add_range(
            (
                PresentableFieldForString(self, "city", city),
                PresentableFieldForString(self, "street", street),
            )
        )


class Company(PersistentObject):
    title_key = "name"

    def __init__(self, name=None, address=None, **kwargs):
        super().__init__(**kwargs)
        self.fields.add_range(
            (
                PresentableFieldForString(self, "name", name),
                PresentableFieldForObject(self, "address", Address, address),
                PresentableFieldForStringCollection(self, "tags"),
                PresentableFieldForDecimalCollection(self, "ratings"),
                PresentableFieldForNullableDecimal(self, "revenue"),
            )
        )


@pytest.fixture
def jane():
    return User(
        "jane",
        "Jane Doe",
        "jane@example.com",
        birthday=datetime(1990, 5, 17, tzinfo=timezone.utc),
    )


@pytest.fixture
def john():
    return User(
        "john",
        "John Smith",
        birthday=datetime(1985, 1, 2, tzinfo=timezone.utc),
    )


@pytest.fixture
def janet():
    return User("janet", "Janet Jackson")


@pytest.fixture
def users(jane, john, janet):
    return [jane, john, janet]


@pytest.fixture
def user_directory(users):
    return InMemoryUserDirectory(users)


@pytest.fixture
def acme():
    return Company("Acme", Address("Berlin", "Main Street 1"))


@pytest.fixture
def globex():
    return Company("Globex", Address("Hamburg"))


@pytest.fixture
def data_provider(acme, globex, user_directory):
    return InMemoryOptionDataProvider([acme, globex], user_directory)


@pytest.fixture
def parent():
    return PresentableObject()


@pytest.fixture
def decimal_field(parent):
    return PresentableFieldForNullableDecimal(parent, "amount", Decimal("1.5"))
