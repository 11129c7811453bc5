# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from decimal import Decimal

import pytest

from fieldlayer._errors import ReadOnlyFieldError, UnsupportedOperationError
from fieldlayer.fields.calculated import (
    PresentableFieldForCalculatedUser,
    PresentableFieldForCalculatedUserCollection,
    PresentableFieldForCalculatedValue,
    PresentableFieldForCalculatedValueCollection,
)
from fieldlayer.objects import PersistentObject, PresentableObject


class Counter:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.results.pop(0) if self.results else None


class TestCalculatedValue:
    """Element fields derived from their parent."""

    def test_value_is_computed_once(self):
        """Test the producer runs on first read only."""
        produce = Counter(Decimal("2.5"))
        field = PresentableFieldForCalculatedValue(
            PresentableObject(), "total", Decimal, produce
        )
        assert field.value == Decimal("2.5")
        assert field.value_as_string == "2.5"
        assert produce.calls == 1

    def test_empty_result_is_retried_on_non_persistent_parent(self):
        """Test empty results are produced again for transient parents."""
        produce = Counter(None, Decimal(1))
        field = PresentableFieldForCalculatedValue(
            PresentableObject(), "total", Decimal, produce
        )
        assert field.value is None
        assert field.value == Decimal(1)
        assert produce.calls == 2

    def test_empty_result_is_kept_on_persistent_parent(self):
        """Test empty results are final for persistent parents."""
        produce = Counter(None, Decimal(1))
        field = PresentableFieldForCalculatedValue(
            PersistentObject(), "total", Decimal, produce
        )
        assert field.value is None
        assert field.value is None
        assert produce.calls == 1

    def test_plain_text_strips_markup(self):
        """Test plain text drops the markup of produced values."""
        field = PresentableFieldForCalculatedValue(
            PresentableObject(), "summary", str, lambda: "<b>Total</b> tax"
        )
        assert field.value_as_string == "<b>Total</b> tax"
        assert field.get_value_as_plain_text() == "Total tax"

    def test_read_only_without_pass_through(self):
        """Test writes without pass-through are unsupported."""
        field = PresentableFieldForCalculatedValue(
            PresentableObject(), "total", int, lambda: 1
        )
        assert field.is_read_only
        assert field.try_set_value_as_string("2") is False
        with pytest.raises(UnsupportedOperationError):
            field.value_as_string = "2"
        with pytest.raises(UnsupportedOperationError):
            field.value = 2

    def test_pass_through(self):
        """Test writes go to the pass-through and reset the memo."""
        store = {"v": 1}
        field = PresentableFieldForCalculatedValue(
            PresentableObject(),
            "total",
            int,
            lambda: store["v"],
            lambda value: store.update(v=value),
        )
        assert field.value == 1
        assert field.try_set_value_as_string("7")
        assert store["v"] == 7
        assert field.value == 7

    def test_write_protected_parent(self):
        """Test write-protected parents make the field read-only."""
        field = PresentableFieldForCalculatedValue(
            PersistentObject(is_write_protected=True),
            "total",
            int,
            lambda: 1,
            lambda value: None,
        )
        assert field.is_read_only
        with pytest.raises(ReadOnlyFieldError):
            field.value = 3


class TestCalculatedUser:
    def test_user_formatting(self, jane, user_directory):
        """Test calculated users render like user fields."""
        field = PresentableFieldForCalculatedUser(
            PresentableObject(),
            "owner",
            lambda: jane,
            lambda user: None,
            user_directory=user_directory,
        )
        assert field.value_as_string == "jane"
        assert field.get_value_as_plain_text() == "Jane Doe"
        assert field.try_set_value_as_string("john")
        assert not field.try_set_value_as_string("nobody")


class TestCalculatedCollection:
    """Collections derived from their parent."""

    def test_always_read_only(self):
        """Test calculated collections cannot be written."""
        field = PresentableFieldForCalculatedValueCollection(
            PresentableObject(), "items", str, lambda: ["b", "a"]
        )
        assert field.is_read_only
        assert field.try_add_string("c") is False
        with pytest.raises(UnsupportedOperationError):
            field.add("c")
        with pytest.raises(UnsupportedOperationError):
            field.sort()
        assert list(field) == ["b", "a"]

    def test_sorted_returns_copy(self):
        """Test sorted leaves the field untouched."""
        field = PresentableFieldForCalculatedValueCollection(
            PresentableObject(), "items", str, lambda: ["b", "a"]
        )
        assert field.sorted() == ["a", "b"]
        assert field.sorted(reverse=True) == ["b", "a"]
        assert list(field) == ["b", "a"]

    def test_user_collection(self, jane, john, janet):
        """Test calculated user collections sort by user fields."""
        field = PresentableFieldForCalculatedUserCollection(
            PresentableObject(), "members", lambda: [john, jane, janet]
        )
        assert list(field.get_values_as_plain_text()) == [
            "John Smith",
            "Jane Doe",
            "Janet Jackson",
        ]
        assert field.sorted_by_field("user_name") == [jane, janet, john]
        assert jane in field
