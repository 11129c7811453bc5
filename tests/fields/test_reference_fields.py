# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
from uuid import uuid4

import pytest

from fieldlayer._errors import ConfigurationError, ConversionError
from fieldlayer.data import InMemoryOptionDataProvider
from fieldlayer.directory import InMemoryUserDirectory
from fieldlayer.fields.reference import (
    PresentableFieldForFile,
    PresentableFieldForPersistentObject,
    PresentableFieldForPersistentObjectCollection,
    PresentableFieldForUser,
    PresentableFieldForUserCollection,
)
from fieldlayer.objects import File, PersistentObject, User
from fieldlayer.utils.text import format_id


class TestPersistentObjectField:
    """References to persistent objects are written as ids."""

    def test_round_trip(self, parent, acme, data_provider):
        """Test an id resolves back to the same object."""
        field = PresentableFieldForPersistentObject(
            parent, "company", value=acme, option_data_provider=data_provider
        )
        text = field.value_as_string
        assert text == format_id(acme.id)
        field.value_as_string = ""
        assert field.value is None
        assert field.try_set_value_as_string(text)
        assert field.value is acme
        assert field.last_resolution.is_unique

    def test_plain_text_is_title(self, parent, acme):
        """Test plain text renders the object's title."""
        field = PresentableFieldForPersistentObject(parent, "c", value=acme)
        assert field.get_value_as_plain_text() == "Acme"

    def test_missing_object(self, parent, acme, data_provider):
        """Test unknown ids keep the prior value."""
        field = PresentableFieldForPersistentObject(
            parent, "company", value=acme, option_data_provider=data_provider
        )
        assert field.try_set_value_as_string(uuid4().hex) is False
        assert field.value is acme
        assert field.last_resolution.is_missing

    def test_ambiguous_object(self, parent, caplog):
        """Test ids matching several objects are ambiguous."""
        first = PersistentObject()
        second = PersistentObject(id=first.id)
        provider = InMemoryOptionDataProvider([first, second])
        field = PresentableFieldForPersistentObject(
            parent, "ref", option_data_provider=provider
        )
        with caplog.at_level(logging.WARNING, logger="fieldlayer"):
            assert field.try_set_value_as_string(first.id.hex) is False
        assert field.last_resolution.is_ambiguous
        assert field.last_resolution.match_count == 2
        assert "Ambiguous" in caplog.text

    def test_malformed_id(self, parent, data_provider):
        """Test strings that are no ids raise ConversionError."""
        field = PresentableFieldForPersistentObject(
            parent, "ref", option_data_provider=data_provider
        )
        with pytest.raises(ConversionError):
            field.value_as_string = "not-an-id"

    def test_missing_data_provider(self, parent, acme):
        """Test resolving without data provider is a configuration error."""
        field = PresentableFieldForPersistentObject(parent, "company")
        with pytest.raises(ConfigurationError) as exc_info:
            field.try_set_value_as_string(acme.id.hex)
        assert exc_info.value.details["dependency"] == "option_data_provider"

    def test_type_restricts_resolution(self, parent, acme, data_provider):
        """Test only objects of the content type resolve."""
        field = PresentableFieldForFile(
            parent, "file", option_data_provider=data_provider
        )
        assert field.try_set_value_as_string(acme.id.hex) is False
        doc = File("a.pdf", "application/pdf", 10)
        data_provider.add(doc)
        assert field.try_set_value_as_string(doc.id.hex)
        assert field.value is doc


class TestUserField:
    """References to users are written as user names."""

    def test_round_trip(self, parent, jane, user_directory):
        """Test a user name resolves back to the user."""
        field = PresentableFieldForUser(
            parent, "owner", jane, user_directory=user_directory
        )
        assert field.value_as_string == "jane"
        assert field.get_value_as_plain_text() == "Jane Doe"
        field.value = None
        assert field.try_set_value_as_string("JANE")
        assert field.value is jane

    def test_unknown_user(self, parent, jane, user_directory):
        """Test unknown user names keep the prior value."""
        field = PresentableFieldForUser(
            parent, "owner", jane, user_directory=user_directory
        )
        assert field.try_set_value_as_string("nobody") is False
        assert field.value is jane
        assert field.last_resolution.is_missing

    def test_ambiguous_user(self, parent, jane):
        """Test duplicate user names are ambiguous."""
        directory = InMemoryUserDirectory([jane, User("jane", "Other Jane")])
        field = PresentableFieldForUser(
            parent, "owner", user_directory=directory
        )
        assert field.try_set_value_as_string("jane") is False
        assert field.last_resolution.is_ambiguous

    def test_missing_directory(self, parent):
        """Test resolving without directory is a configuration error."""
        field = PresentableFieldForUser(parent, "owner")
        with pytest.raises(ConfigurationError, match="person choices"):
            field.value_as_string = "jane"


class TestReferenceCollections:
    """Collections of references."""

    def test_persistent_object_collection(
        self, parent, acme, globex, data_provider
    ):
        """Test ids are resolved and items are removed by id."""
        field = PresentableFieldForPersistentObjectCollection(
            parent, "companies", option_data_provider=data_provider
        )
        field.add_string(globex.id.hex)
        field.add_string(acme.id.hex)
        assert list(field.get_values_as_plain_text()) == ["Globex", "Acme"]
        field.sort()
        assert list(field) == [acme, globex]
        assert field.remove(acme)
        assert list(field) == [globex]

    def test_user_collection_sort_by_field(
        self, parent, jane, john, janet, user_directory
    ):
        """Test sorting users by one of their fields."""
        field = PresentableFieldForUserCollection(
            parent, "members", user_directory=user_directory
        )
        for name in ("john", "jane", "janet"):
            field.add_string(name)
        field.sort_by_field("user_name")
        assert list(field.get_values_as_string()) == ["jane", "janet", "john"]
        field.sort_by_field("birthday")
        assert list(field)[0] is janet
        assert list(field)[1] is john

    def test_user_collection_rejects_unknown(self, parent, user_directory):
        """Test unknown users are not added."""
        field = PresentableFieldForUserCollection(
            parent, "members", user_directory=user_directory
        )
        assert field.try_add_string("nobody") is False
        assert len(field) == 0
