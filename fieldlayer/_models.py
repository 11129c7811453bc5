# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import importlib
from typing import Annotated, Any, Literal, TypeVar
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    BeforeValidator,
    PlainSerializer,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)

from ._errors import ItemNotFoundError

__all__ = (
    "Descriptor",
    "DESCRIPTOR_REGISTRY",
    "get_class",
    "ImportableType",
)

D = TypeVar("D", bound="Descriptor")

DESCRIPTOR_REGISTRY: dict[str, type[Descriptor]] = {}


def get_class(class_name: str) -> type[Descriptor]:
    """Retrieve a descriptor class by its name from the registry."""
    try:
        return DESCRIPTOR_REGISTRY[class_name]
    except KeyError as e:
        raise ItemNotFoundError(
            f"Class '{class_name}' not found in registry",
            details={"class_name": class_name},
        ) from e


class Descriptor(BaseModel):
    """Persistable configuration object, independent of any field instance.

    View fields, option providers and lookup providers are descriptors.
    They serialize to plain dicts carrying their class name, so a stored
    layout can be read back into the right subclasses.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        populate_by_name=True,
        extra="forbid",
        use_attribute_docstrings=True,
        validate_assignment=True,
    )

    id: UUID = Field(default_factory=uuid4, frozen=True)
    """A unique identifier for the descriptor."""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        DESCRIPTOR_REGISTRY[cls.__name__] = cls

    @classmethod
    def class_name(cls, full: bool = False) -> str:
        """Returns this class's name.

        full (bool): If True, returns the fully qualified class name;
            otherwise, returns only the class name.
        """
        if full:
            return str(cls).split("'")[1]
        return cls.__name__

    @field_validator("id", mode="before")
    def _validate_id(cls, value: Any) -> UUID:
        if isinstance(value, UUID):
            return value
        if isinstance(value, str):
            try:
                return UUID(value)
            except ValueError as e:
                raise ValueError(f"Invalid UUID string: {value}") from e
        raise TypeError(f"Invalid type for id: {type(value)}")

    @model_validator(mode="wrap")
    @classmethod
    def _dispatch_type(cls, value: Any, handler):
        if isinstance(value, dict) and "type" in value:
            value = dict(value)
            target = get_class(value.pop("type"))
            if target is not cls and issubclass(target, cls):
                return target.model_validate(value)
        return handler(value)

    @model_serializer(mode="wrap")
    def _serialize_with_type(self, handler):
        data = handler(self)
        if isinstance(data, dict):
            data["type"] = self.class_name()
        return data

    def __bool__(self) -> bool:
        """Descriptors are always considered truthy."""
        return True

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(
        self, *, mode: Literal["python", "json"] = "python", **kw: Any
    ) -> dict[str, Any]:
        """Serialize this descriptor and nested descriptors with their
        class names under `type`."""
        return self.model_dump(mode=mode, **kw)

    @classmethod
    def from_dict(cls: type[D], data: dict[str, Any]) -> D:
        """Deserialize a dict into the descriptor subclass it names.

        Nested descriptors are restored through their own `type` keys.
        """
        data = dict(data)
        class_name = data.pop("type", None)
        target = cls if class_name is None else get_class(class_name)
        if not issubclass(target, cls):
            raise TypeError(
                f"{target.__name__} is not a subclass of {cls.__name__}"
            )
        return target.model_validate(data)


def _import_type(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    module_name, _, name = value.rpartition(".")
    if not module_name:
        raise ValueError(f"Invalid qualified type name: {value}")
    return getattr(importlib.import_module(module_name), name)


def _qualified_name(value: type) -> str:
    return f"{value.__module__}.{value.__qualname__}"


ImportableType = Annotated[
    type,
    BeforeValidator(_import_type),
    PlainSerializer(_qualified_name),
]
"""A type that serializes as its qualified name and is imported back."""
