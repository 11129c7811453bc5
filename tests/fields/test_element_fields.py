# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

import pytest

from fieldlayer._errors import ConversionError, ReadOnlyFieldError
from fieldlayer.fields.element import (
    PresentableFieldForEnum,
    PresentableFieldForNullableBool,
    PresentableFieldForNullableByte,
    PresentableFieldForNullableDateTime,
    PresentableFieldForNullableDecimal,
    PresentableFieldForNullableInt,
    PresentableFieldForObject,
    PresentableFieldForString,
)


class Color(Enum):
    RED = "red"
    DARK_BLUE = "dark_blue"


class TestRoundTrip:
    """Formatting a value and parsing it back yields the same value."""

    @pytest.mark.parametrize(
        "field_class,value",
        [
            (PresentableFieldForString, "hello"),
            (PresentableFieldForNullableInt, -42),
            (PresentableFieldForNullableByte, 255),
            (PresentableFieldForNullableDecimal, Decimal("1234.50")),
            (PresentableFieldForNullableBool, True),
            (PresentableFieldForNullableBool, False),
            (
                PresentableFieldForNullableDateTime,
                datetime(2024, 2, 29, 13, 5, tzinfo=timezone.utc),
            ),
        ],
    )
    def test_round_trip(self, parent, field_class, value):
        """Test value survives string conversion."""
        source = field_class(parent, "f", value)
        target = field_class(parent, "f")
        assert target.try_set_value_as_string(source.value_as_string)
        assert target.value == value

    def test_enum_round_trip(self, parent):
        """Test enum members are written as their values."""
        field = PresentableFieldForEnum(parent, "color", Color, Color.RED)
        assert field.value_as_string == "red"
        field.value_as_string = "dark_blue"
        assert field.value is Color.DARK_BLUE

    def test_enum_parses_member_name(self, parent):
        """Test enum parsing falls back to member names."""
        field = PresentableFieldForEnum(parent, "color", Color)
        field.value_as_string = "DARK_BLUE"
        assert field.value is Color.DARK_BLUE


class TestEmptyInput:
    """Empty strings clear the value."""

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_clears(self, decimal_field, raw):
        """Test empty input sets the value to None."""
        assert decimal_field.try_set_value_as_string(raw) is True
        assert decimal_field.value is None
        assert decimal_field.value_as_string == ""

    def test_none_formats_as_empty_string(self, parent):
        """Test unset values format as the empty string."""
        field = PresentableFieldForNullableInt(parent, "n")
        assert field.value_as_string == ""


class TestMalformedInput:
    """Malformed input is rejected and the prior value is kept."""

    @pytest.mark.parametrize("raw", ["abc", "1.2.3", "1,23", "--1", "+"])
    def test_try_set_keeps_prior_value(self, decimal_field, raw):
        """Test try_set returns False and keeps the value."""
        assert decimal_field.try_set_value_as_string(raw) is False
        assert decimal_field.value == Decimal("1.5")

    def test_setter_raises_conversion_error(self, decimal_field):
        """Test the raising setter reports the key and type."""
        with pytest.raises(ConversionError) as exc_info:
            decimal_field.value_as_string = "abc"
        assert exc_info.value.details["key"] == "amount"
        assert exc_info.value.details["expected"] == "Decimal"
        assert decimal_field.value == Decimal("1.5")

    @pytest.mark.parametrize("raw", ["256", "-1", "x"])
    def test_byte_range(self, parent, raw):
        """Test byte fields only accept 0..255."""
        field = PresentableFieldForNullableByte(parent, "b", 7)
        assert not field.try_set_value_as_string(raw)
        assert field.value == 7

    @pytest.mark.parametrize("value", [256, -1, 300])
    def test_typed_byte_range(self, parent, value):
        """Test typed byte values outside 0..255 are rejected."""
        field = PresentableFieldForNullableByte(parent, "b", 7)
        with pytest.raises(ValueError):
            field.value = value
        assert field.value == 7
        with pytest.raises(ValueError):
            PresentableFieldForNullableByte(parent, "b", value)

    def test_bool_rejects_unknown_words(self, parent):
        """Test bool fields only accept known words."""
        field = PresentableFieldForNullableBool(parent, "b")
        assert not field.try_set_value_as_string("maybe")
        assert field.try_set_value_as_string("Yes")
        assert field.value is True


class TestReadOnly:
    """Read-only fields reject writes and keep their state."""

    def test_try_set_returns_false(self, parent):
        """Test try_set on a read-only field."""
        field = PresentableFieldForString(parent, "s", "x", is_read_only=True)
        assert field.try_set_value_as_string("y") is False
        assert field.value == "x"

    def test_setter_raises(self, parent):
        """Test writes raise ReadOnlyFieldError."""
        field = PresentableFieldForString(parent, "s", "x", is_read_only=True)
        with pytest.raises(ReadOnlyFieldError):
            field.value_as_string = "y"
        with pytest.raises(ReadOnlyFieldError):
            field.value = "y"

    def test_read_only_flag_can_be_lifted(self, parent):
        """Test the read-only flag is writable."""
        field = PresentableFieldForString(parent, "s", "x", is_read_only=True)
        field.is_read_only = False
        assert field.try_set_value_as_string("y")


class TestDateTime:
    """Date times are normalised to UTC."""

    def test_naive_input_is_utc(self, parent):
        """Test naive strings are read as UTC."""
        field = PresentableFieldForNullableDateTime(parent, "d")
        field.value_as_string = "2024-01-01T10:00:00"
        assert field.value == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)

    def test_offset_input_is_converted(self, parent):
        """Test strings with offsets are converted to UTC."""
        field = PresentableFieldForNullableDateTime(parent, "d")
        field.value_as_string = "2024-01-01T10:00:00+02:00"
        assert field.value.utcoffset() == timedelta(0)
        assert field.value.hour == 8

    def test_naive_value_is_utc(self, parent):
        """Test typed naive values are stored as UTC and round trip."""
        field = PresentableFieldForNullableDateTime(parent, "d")
        field.value = datetime(2024, 1, 1)
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert field.value == expected
        target = PresentableFieldForNullableDateTime(parent, "d")
        assert target.try_set_value_as_string(field.value_as_string)
        assert target.value == field.value
        initial = PresentableFieldForNullableDateTime(
            parent, "d", datetime(2024, 1, 1)
        )
        assert initial.value == expected

    def test_zulu_suffix(self, parent):
        """Test the Z suffix is accepted."""
        field = PresentableFieldForNullableDateTime(parent, "d")
        field.value_as_string = "2024-01-01T10:00:00Z"
        assert field.value_as_string == "2024-01-01T10:00:00+00:00"


class TestPlainText:
    """Plain text renders values without markup."""

    def test_string_removes_tags(self, parent):
        """Test markup is stripped from string fields."""
        field = PresentableFieldForString(
            parent, "s", "<p>Hello&nbsp;<b>World</b></p><p>Again</p>"
        )
        assert field.get_value_as_plain_text() == "Hello World Again"
        assert field.value_as_string.startswith("<p>")


class TestObjectField:
    """Fields of arbitrary type."""

    def test_uses_parser_of_base_type(self, parent):
        """Test strings are parsed with the content type's parser."""
        field = PresentableFieldForObject(parent, "o", int)
        field.value_as_string = "1,000"
        assert field.value == 1000

    def test_keeps_raw_string_without_parser(self, parent):
        """Test strings are kept as-is for types without a parser."""
        field = PresentableFieldForObject(parent, "o")
        field.value_as_string = "anything"
        assert field.value == "anything"

    def test_new_item_as_object(self, parent):
        """Test a fresh instance of the content type is created."""
        field = PresentableFieldForObject(parent, "o", list)
        assert field.new_item_as_object() == []
        field = PresentableFieldForEnum(parent, "e", Color)
        assert field.new_item_as_object() is None


def test_empty_key_is_rejected(parent):
    """Test fields need a key."""
    with pytest.raises(ValueError):
        PresentableFieldForString(parent, "")
