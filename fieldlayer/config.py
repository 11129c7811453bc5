# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FieldLayerSettings(BaseSettings, frozen=True):
    """Settings for field conversion, lookups and rendering helpers.

    Values are read from environment variables prefixed with
    ``FIELDLAYER_`` and from the usual ``.env`` files.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDLAYER_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DEFAULT_MIN_SEARCH_LENGTH: int = Field(
        default=1,
        ge=0,
        le=255,
        description="Minimum term length before lookup view fields query",
    )
    MAX_VAGUE_TERM_RESULTS: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound for results of vague-term searches",
    )
    VAGUE_TERM_CASE_SENSITIVE: bool = False

    TRUNCATION_ELLIPSIS: str = "…"

    INVARIANT_CULTURE: str = Field(
        default="",
        description="Culture key used to read invariant resource sets",
    )

    ID_FORMAT: Literal["hex", "hyphenated"] = Field(
        default="hex",
        description="Format of object ids stored in string fields",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None


# Create a singleton instance
settings = FieldLayerSettings()
# Store the instance in the class variable for singleton pattern
FieldLayerSettings._instance = settings
