# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
from importlib import import_module
from typing import TYPE_CHECKING

from ._errors import (
    ConfigurationError,
    ConversionError,
    FieldLayerError,
    PresentationError,
    ReadOnlyFieldError,
    ResolutionError,
    UnsupportedOperationError,
)
from .config import settings
from .types import (
    Mandatoriness,
    Option,
    Resolution,
    ValidityCheck,
    ValueSeparator,
)
from .version import __version__

if TYPE_CHECKING:
    from .data import InMemoryOptionDataProvider, OptionDataProvider
    from .directory import InMemoryUserDirectory, UserDirectory
    from .fields.field_collection import FieldCollection
    from .objects import File, PersistentObject, PresentableObject, User
    from .options.base import OptionProvider
    from .options.cached import CachedOptionProvider
    from .options.grouped import GroupedOptionProvider
    from .views.base import ViewField

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_lazy_imports = {}


def _get_obj(name: str, module: str):
    global _lazy_imports
    obj_ = getattr(import_module(f"fieldlayer.{module}"), name)

    _lazy_imports[name] = obj_
    return obj_


def __getattr__(name: str):
    global _lazy_imports
    if name in _lazy_imports:
        return _lazy_imports[name]

    match name:
        case "PresentableObject":
            return _get_obj("PresentableObject", "objects")
        case "PersistentObject":
            return _get_obj("PersistentObject", "objects")
        case "User":
            return _get_obj("User", "objects")
        case "File":
            return _get_obj("File", "objects")
        case "FieldCollection":
            return _get_obj("FieldCollection", "fields.field_collection")
        case "OptionDataProvider":
            return _get_obj("OptionDataProvider", "data")
        case "InMemoryOptionDataProvider":
            return _get_obj("InMemoryOptionDataProvider", "data")
        case "UserDirectory":
            return _get_obj("UserDirectory", "directory")
        case "InMemoryUserDirectory":
            return _get_obj("InMemoryUserDirectory", "directory")
        case "OptionProvider":
            return _get_obj("OptionProvider", "options.base")
        case "CachedOptionProvider":
            return _get_obj("CachedOptionProvider", "options.cached")
        case "GroupedOptionProvider":
            return _get_obj("GroupedOptionProvider", "options.grouped")
        case "ViewField":
            return _get_obj("ViewField", "views.base")
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = (
    "__version__",
    "CachedOptionProvider",
    "ConfigurationError",
    "ConversionError",
    "FieldCollection",
    "FieldLayerError",
    "File",
    "GroupedOptionProvider",
    "InMemoryOptionDataProvider",
    "InMemoryUserDirectory",
    "Mandatoriness",
    "Option",
    "OptionDataProvider",
    "OptionProvider",
    "PersistentObject",
    "PresentableObject",
    "PresentationError",
    "ReadOnlyFieldError",
    "Resolution",
    "ResolutionError",
    "UnsupportedOperationError",
    "User",
    "UserDirectory",
    "ValidityCheck",
    "ValueSeparator",
    "ViewField",
    "logger",
    "settings",
)
