# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import pytest

from fieldlayer import messages
from fieldlayer._errors import ConfigurationError
from fieldlayer.fields.collection import PresentableFieldForStringCollection
from fieldlayer.fields.element import (
    PresentableFieldForObject,
    PresentableFieldForString,
)
from fieldlayer.fields.reference import (
    PresentableFieldForPersistentObjectCollection,
    PresentableFieldForUser,
)
from fieldlayer.objects import PresentableObject
from fieldlayer.options.grouped import GroupedOptionProvider
from fieldlayer.options.person import PersonOptionCollection
from fieldlayer.options.persistent import PersistentObjectOptionProvider
from fieldlayer.options.static import StringOptionDictionary
from fieldlayer.types import FieldRenderMode, ValueSeparator
from fieldlayer.views.choice import (
    ViewFieldForMultiplePresentableObjectChoices,
    ViewFieldForMultipleStringChoices,
    ViewFieldForPersonChoice,
    ViewFieldForPresentableObjectChoice,
    ViewFieldForStringChoice,
)

OPTIONAL_INFO = messages.YOU_CAN_LEAVE_THIS_FIELD_BLANK
SELECT_MESSAGE = f"{messages.PLEASE_SELECT_A_VALID_VALUE} {OPTIONAL_INFO}"


@pytest.fixture
def statuses():
    return StringOptionDictionary(options={"o": "Open", "c": "Closed"})


class TestStringChoice:
    """Selection of one string option."""

    def test_read_only_value(self, parent, statuses):
        """Test the selected key renders as its option value."""
        view_field = ViewFieldForStringChoice(
            key="status", option_provider=statuses
        )
        field = PresentableFieldForString(parent, "status", "c")
        assert view_field.get_read_only_value_for(field, parent) == "Closed"
        field.value = "x"
        assert view_field.get_read_only_value_for(field, parent) == ""
        assert view_field.parse_read_only_value("Open") == "o"

    @pytest.mark.parametrize(
        "value,expected", [("o", None), (None, None), ("x", SELECT_MESSAGE)]
    )
    def test_validate(self, parent, statuses, value, expected):
        """Test keys that are no option fail."""
        view_field = ViewFieldForStringChoice(
            key="status", option_provider=statuses
        )
        field = PresentableFieldForString(parent, "status", value)
        assert view_field.validate_field(field) == expected

    def test_key_not_unique(self, parent):
        """Test keys with several values fail."""
        options = GroupedOptionProvider(
            option_providers=[
                StringOptionDictionary(options={"o": "Open"}),
                StringOptionDictionary(options={"o": "Opened"}),
            ]
        )
        view_field = ViewFieldForStringChoice(
            key="status", option_provider=options
        )
        field = PresentableFieldForString(parent, "status", "o")
        assert view_field.validate_field(field) == (
            f"{messages.SELECTED_VALUE_NOT_UNIQUE} {SELECT_MESSAGE}"
        )

    def test_missing_option_provider(self, parent):
        """Test choices without options are misconfigured."""
        view_field = ViewFieldForStringChoice(key="status")
        field = PresentableFieldForString(parent, "status", "o")
        with pytest.raises(ConfigurationError) as exc_info:
            view_field.validate_field(field)
        assert exc_info.value.details["key"] == "status"


class TestPresentableObjectChoice:
    """Selection of a stored object."""

    @pytest.fixture
    def view_field(self, acme):
        return ViewFieldForPresentableObjectChoice(
            key="company",
            option_provider=PersistentObjectOptionProvider(
                object_type=type(acme)
            ),
        )

    def test_selected_object(self, view_field, parent, acme, data_provider):
        """Test objects are selected by id."""
        field = PresentableFieldForObject(
            parent, "company", PresentableObject, acme
        )
        assert (
            view_field.validate_field(field, data_provider=data_provider)
            is None
        )
        assert (
            view_field.get_read_only_value_for(field, None, data_provider)
            == "Acme"
        )

    def test_unknown_object(self, view_field, parent, acme, data_provider):
        """Test objects that are no option fail."""
        field = PresentableFieldForObject(
            parent, "company", PresentableObject, type(acme)("Initech")
        )
        assert (
            view_field.validate_field(field, data_provider=data_provider)
            == SELECT_MESSAGE
        )

    def test_create_presentable_field(self, view_field, parent):
        """Test the created field holds presentable objects."""
        field = view_field.create_presentable_field(parent)
        assert field.content_base_type is PresentableObject


class TestPersonChoice:
    """Selection of a user."""

    @pytest.fixture
    def view_field(self, jane, john):
        return ViewFieldForPersonChoice(
            key="owner",
            option_provider=PersonOptionCollection(users=[jane, john]),
        )

    def test_validate(self, view_field, parent, jane, janet):
        """Test users that are no option fail."""
        field = PresentableFieldForUser(parent, "owner", jane)
        assert view_field.validate_field(field) is None
        field.value = janet
        assert view_field.validate_field(field) == (
            f"{messages.PLEASE_SELECT_A_VALID_PERSON} {OPTIONAL_INFO}"
        )

    def test_read_only_value_is_user_name(self, view_field, parent, jane):
        """Test users render as their user name."""
        field = PresentableFieldForUser(parent, "owner", jane)
        assert view_field.get_read_only_value_for(field, None) == "jane"

    def test_parse_read_only_value(self, view_field, john, data_provider):
        """Test names resolve to the id of the only matching user."""
        assert (
            view_field.parse_read_only_value("John Smith", data_provider)
            == john.id
        )
        result = view_field.parse_read_only_value("nobody", data_provider)
        assert result is None
        with pytest.raises(ConfigurationError):
            view_field.parse_read_only_value("john")


class TestMultipleChoices:
    """Selection of several options."""

    def test_read_only_values(self, parent, statuses):
        """Test selected keys render as their values, unknown skipped."""
        view_field = ViewFieldForMultipleStringChoices(
            key="statuses", option_provider=statuses
        )
        field = PresentableFieldForStringCollection(
            parent, "statuses", ["c", "x", "o"]
        )
        assert (
            view_field.get_read_only_value_for(field, None) == "Closed, Open"
        )

    def test_validate(self, parent, statuses):
        """Test every selected key has to be an option."""
        view_field = ViewFieldForMultipleStringChoices(
            key="statuses", option_provider=statuses, limit=2
        )
        field = PresentableFieldForStringCollection(
            parent, "statuses", ["o"]
        )
        assert view_field.validate_field(field) is None
        field.add("x")
        assert view_field.validate_field(field) == SELECT_MESSAGE
        field.remove("x")
        field.add_range(["c", "o"])
        assert view_field.validate_field(field) == (
            f"{messages.PLEASE_SELECT_VALID_VALUES} "
            f"Up to 2 values are allowed. {OPTIONAL_INFO}"
        )

    def test_value_separator(self, statuses):
        """Test read-only forms list one value per line."""
        view_field = ViewFieldForMultipleStringChoices(
            option_provider=statuses
        )
        assert (
            view_field.get_value_separator(FieldRenderMode.FORM)
            == ValueSeparator.COMMA
        )
        view_field.is_read_only = True
        assert (
            view_field.get_value_separator(FieldRenderMode.FORM)
            == ValueSeparator.LINE_BREAK
        )
        assert (
            view_field.get_value_separator(FieldRenderMode.LIST_TABLE)
            == ValueSeparator.COMMA
        )

    def test_presentable_objects(self, parent, acme, globex, data_provider):
        """Test selected objects are validated by id."""
        view_field = ViewFieldForMultiplePresentableObjectChoices(
            key="companies",
            option_provider=PersistentObjectOptionProvider(
                object_type=type(acme), sort_key="name"
            ),
        )
        field = PresentableFieldForPersistentObjectCollection(
            parent, "companies", values=[globex, acme]
        )
        assert (
            view_field.validate_field(field, data_provider=data_provider)
            is None
        )
        assert (
            view_field.get_read_only_value_for(field, None, data_provider)
            == "Globex, Acme"
        )
