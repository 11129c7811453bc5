# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the package namespace and its lazy imports."""

import logging

import pytest

import fieldlayer


class TestLazyImports:
    """Test lazy import mechanism and caching."""

    @pytest.mark.parametrize(
        "name,module",
        [
            ("PresentableObject", "fieldlayer.objects"),
            ("User", "fieldlayer.objects"),
            ("FieldCollection", "fieldlayer.fields.field_collection"),
            ("InMemoryUserDirectory", "fieldlayer.directory"),
            ("CachedOptionProvider", "fieldlayer.options.cached"),
            ("GroupedOptionProvider", "fieldlayer.options.grouped"),
            ("ViewField", "fieldlayer.views.base"),
        ],
    )
    def test_lazy_attribute(self, name, module):
        """Test lazy names resolve to the defining module's object."""
        obj = getattr(fieldlayer, name)
        assert obj.__module__ == module

    def test_lazy_import_is_cached(self):
        """Test a resolved name is kept in the lazy import cache."""
        first = fieldlayer.OptionProvider
        assert fieldlayer._lazy_imports["OptionProvider"] is first
        assert fieldlayer.OptionProvider is first

    def test_unknown_attribute(self):
        """Test unknown names raise AttributeError."""
        with pytest.raises(AttributeError, match="no attribute"):
            fieldlayer.does_not_exist

    def test_all_exports_resolve(self):
        """Test every name in __all__ can be accessed."""
        for name in fieldlayer.__all__:
            assert getattr(fieldlayer, name) is not None


def test_package_logger():
    """Test the package logger is set to INFO."""
    assert fieldlayer.logger is logging.getLogger("fieldlayer")
    assert fieldlayer.logger.level == logging.INFO


def test_version():
    """Test the version string is exposed."""
    assert isinstance(fieldlayer.__version__, str)
