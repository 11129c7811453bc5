# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .types import Resolution


class FieldLayerError(Exception):
    default_message: ClassVar[str] = "fieldlayer error"
    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}
        self.status_code = status_code or self.status_code

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class ConversionError(FieldLayerError, ValueError):
    """Raised when a string cannot be converted to a field's type."""

    default_message = "String value cannot be converted"
    status_code = 422

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: type | str | None = None,
        key: str | None = None,
        cause: Exception | None = None,
    ):
        """Create a ConversionError for a raw string and its target type."""
        expected_name = (
            expected.__name__ if isinstance(expected, type) else expected
        )
        message = f'String value "{value}" cannot be converted'
        if expected_name:
            message += f" to type {expected_name}"
        details = {
            "value": value,
            **({"expected": expected_name} if expected_name else {}),
            **({"key": key} if key else {}),
        }
        return cls(message=message + ".", details=details, cause=cause)


class ResolutionError(FieldLayerError):
    """Raised on request when a reference cannot be resolved uniquely."""

    default_message = "Reference could not be resolved uniquely"
    status_code = 404

    def __init__(self, resolution: Resolution, message: str | None = None):
        if message is None:
            if resolution.is_ambiguous:
                message = (
                    f'Reference "{resolution.term}" is ambiguous: '
                    f"{resolution.match_count} matches found."
                )
            else:
                message = f'Reference "{resolution.term}" was not found.'
        super().__init__(
            message,
            details={
                "term": resolution.term,
                "match_count": resolution.match_count,
            },
        )
        self.resolution = resolution


class ConfigurationError(FieldLayerError):
    """Raised when a field is used without a resolver it depends on."""

    default_message = "Field is not configured properly"


class UnsupportedOperationError(FieldLayerError):
    """Raised when a write or traversal is not supported by a field kind."""

    default_message = "Operation is not supported"
    status_code = 405


class ReadOnlyFieldError(UnsupportedOperationError):
    default_message = "Field is read-only"


class PresentationError(FieldLayerError):
    default_message = "Invalid presentation configuration"


class ItemNotFoundError(FieldLayerError):
    status_code = 404


class ItemExistsError(FieldLayerError):
    status_code = 409


class DirectoryError(FieldLayerError):
    """Raised by directories when a user cannot be determined uniquely."""

    default_message = "User could not be determined"
    status_code = 404
