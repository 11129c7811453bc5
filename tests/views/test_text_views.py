# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import pytest

from fieldlayer import messages
from fieldlayer._errors import UnsupportedOperationError
from fieldlayer.fields.collection import PresentableFieldForStringCollection
from fieldlayer.fields.element import PresentableFieldForString
from fieldlayer.options.static import StringOptionDictionary
from fieldlayer.types import FieldRenderMode, Mandatoriness, ValueSeparator
from fieldlayer.views.text import (
    ViewFieldForMultilineText,
    ViewFieldForMultipleSingleLineTexts,
    ViewFieldForPassword,
    ViewFieldForSingleLineText,
    has_character_variance,
)

OPTIONAL_INFO = messages.YOU_CAN_LEAVE_THIS_FIELD_BLANK


class TestSingleLineText:
    """Length and pattern checks of text fields."""

    @pytest.mark.parametrize(
        "value,valid",
        [("", True), ("abc", True), ("abcde", True), ("abcdef", False)],
    )
    def test_max_length(self, parent, value, valid):
        """Test values longer than the maximum are rejected."""
        view_field = ViewFieldForSingleLineText(key="name", max_length=5)
        field = PresentableFieldForString(parent, "name", value)
        assert (view_field.validate_field(field) is None) is valid

    def test_length_message(self, parent):
        """Test the message names the length bounds."""
        view_field = ViewFieldForSingleLineText(
            key="name", max_length=5, mandatoriness=Mandatoriness.REQUIRED
        )
        expected = (
            "Please enter a valid value with at most 5 characters for this "
            f"field. {messages.THIS_IS_A_MANDATORY_FIELD}"
        )
        field = PresentableFieldForString(parent, "name", "abcdef")
        assert view_field.validate_field(field) == expected
        field.value = None
        assert view_field.validate_field(field) == expected

    @pytest.mark.parametrize(
        "min_length,max_length,message",
        [
            (0, 1, messages.AT_MOST_ONE_CHARACTER),
            (1, None, messages.AT_LEAST_ONE_CHARACTER),
            (
                3,
                None,
                "Please enter a valid value with at least 3 characters "
                "for this field.",
            ),
            (
                2,
                4,
                "Please enter a valid value with at least 2 and at most 4 "
                "characters for this field.",
            ),
            (0, None, messages.PLEASE_ENTER_A_VALID_VALUE),
        ],
    )
    def test_message_variants(self, min_length, max_length, message):
        """Test the message for each combination of bounds."""
        view_field = ViewFieldForMultilineText(
            min_length=min_length, max_length=max_length
        )
        assert view_field.get_default_error_message() == (
            f"{message} {OPTIONAL_INFO}"
        )

    def test_min_length(self, parent):
        """Test values shorter than the minimum are rejected."""
        view_field = ViewFieldForSingleLineText(key="code", min_length=2)
        field = PresentableFieldForString(parent, "code", "a")
        assert view_field.validate_field(field) is not None
        field.value = "ab"
        assert view_field.validate_field(field) is None

    @pytest.mark.parametrize(
        "value,valid", [("ABC", True), ("abc", False), ("ABCD", False)]
    )
    def test_validation_pattern(self, parent, value, valid):
        """Test the pattern has to match the whole value."""
        view_field = ViewFieldForSingleLineText(
            key="code", validation_pattern=r"[A-Z]{3}"
        )
        field = PresentableFieldForString(parent, "code", value)
        assert (view_field.validate_field(field) is None) is valid

    def test_parse_read_only_value(self):
        """Test read-only text parses back to itself."""
        view_field = ViewFieldForSingleLineText(key="name")
        assert view_field.parse_read_only_value("text") == "text"
        assert view_field.parse_read_only_value("") is None

    def test_read_only_value(self, parent):
        """Test the read-only value is the string value."""
        view_field = ViewFieldForSingleLineText(key="name")
        field = PresentableFieldForString(parent, "name", "<b>x</b>")
        assert view_field.get_read_only_value_for(field, parent) == "<b>x</b>"
        assert view_field.get_read_only_value_for(None, parent) == ""


class TestMultipleSingleLineTexts:
    """Collections of single-line texts."""

    @pytest.fixture
    def tags(self, parent):
        return PresentableFieldForStringCollection(parent, "tags", ["ab"])

    def test_member_too_long(self, tags):
        """Test any value over the maximum length fails the collection."""
        view_field = ViewFieldForMultipleSingleLineTexts(
            key="tags", max_length=3
        )
        assert view_field.validate_field(tags) is None
        tags.add("abcd")
        assert view_field.validate_field(tags) == (
            "Please enter valid values with at most 3 characters for this "
            f"field. {OPTIONAL_INFO}"
        )

    def test_member_pattern(self, tags):
        """Test every value has to match the pattern."""
        view_field = ViewFieldForMultipleSingleLineTexts(
            key="tags", validation_pattern=r"[a-z]+"
        )
        assert view_field.validate_field(tags) is None
        tags.add("A1")
        assert view_field.validate_field(tags) is not None

    @pytest.mark.parametrize(
        "max_length,limit,message",
        [
            (1, None, messages.VALUES_WITH_AT_MOST_ONE_CHARACTER),
            (1, 1, messages.AT_MOST_ONE_CHARACTER),
            (
                4,
                1,
                "Please enter a valid value with at most 4 characters "
                "for this field.",
            ),
            (
                4,
                3,
                "Please enter valid values with at most 4 characters "
                "for this field. Up to 3 values are allowed.",
            ),
        ],
    )
    def test_messages(self, max_length, limit, message):
        """Test messages combine the length and the limit."""
        view_field = ViewFieldForMultipleSingleLineTexts(
            max_length=max_length, limit=limit
        )
        assert view_field.get_default_error_message() == (
            f"{message} {OPTIONAL_INFO}"
        )

    def test_value_separator(self):
        """Test form separators depend on suggestions and limit."""
        view_field = ViewFieldForMultipleSingleLineTexts(
            value_separator=ValueSeparator.SEMICOLON
        )
        assert (
            view_field.get_value_separator(FieldRenderMode.FORM)
            == ValueSeparator.SEMICOLON
        )
        assert (
            view_field.get_value_separator(FieldRenderMode.LIST_TABLE)
            == ValueSeparator.COMMA
        )
        view_field.option_provider = StringOptionDictionary()
        assert (
            view_field.get_value_separator(FieldRenderMode.FORM)
            == ValueSeparator.LINE_BREAK
        )
        view_field.limit = 1
        assert (
            view_field.get_value_separator(FieldRenderMode.FORM)
            == ValueSeparator.SEMICOLON
        )


class TestPassword:
    """Password fields hide their value."""

    @pytest.mark.parametrize(
        "value,varied",
        [
            ("Secret1!", True),
            ("secret1!", False),
            ("SECRET1!", False),
            ("Secret!!", False),
            ("Secret12", False),
            ("", False),
        ],
    )
    def test_has_character_variance(self, value, varied):
        """Test all four character classes are required."""
        assert has_character_variance(value) is varied

    def test_read_only_value(self, parent):
        """Test only whether a password is set is rendered."""
        view_field = ViewFieldForPassword(key="password")
        field = PresentableFieldForString(parent, "password", "Secret1!")
        assert view_field.get_read_only_value_for(field, None) == "Yes"
        field.value = None
        assert view_field.get_read_only_value_for(field, None) == "No"
        assert view_field.get_read_only_value_for(None, None) == "No"

    def test_parse_read_only_value(self):
        """Test passwords cannot be read back."""
        view_field = ViewFieldForPassword(key="password")
        with pytest.raises(UnsupportedOperationError):
            view_field.parse_read_only_value("Yes")

    @pytest.mark.parametrize(
        "value,valid", [("", True), ("Secret1!", True), ("secret", False)]
    )
    def test_character_variance(self, parent, value, valid):
        """Test required variance rejects uniform passwords."""
        view_field = ViewFieldForPassword(
            key="password", is_character_variance_required=True
        )
        field = PresentableFieldForString(parent, "password", value)
        assert (view_field.validate_field(field) is None) is valid

    def test_variance_message(self, parent):
        """Test the message lists the character classes."""
        view_field = ViewFieldForPassword(
            key="password", is_character_variance_required=True
        )
        field = PresentableFieldForString(parent, "password", "secret")
        assert view_field.validate_field(field) == (
            f"{messages.PASSWORD_CHARACTER_VARIANCE} {OPTIONAL_INFO}"
        )

    def test_length_checked_first(self, parent):
        """Test length rules still apply to passwords."""
        view_field = ViewFieldForPassword(
            key="password", min_length=10, is_character_variance_required=True
        )
        field = PresentableFieldForString(parent, "password", "Secret1!")
        assert view_field.validate_field(field) == (
            "Please enter a valid value with at least 10 characters for this "
            f"field. {OPTIONAL_INFO}"
        )
