# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import html
import re
from uuid import UUID

from ..config import settings

__all__ = (
    "remove_tags",
    "truncate",
    "format_id",
    "parse_id",
    "is_null_or_whitespace",
)

_BLOCK_END = re.compile(
    r"<\s*(br\s*/?|/\s*(p|div|li|tr|h[1-6]|blockquote|pre|ul|ol|table))\s*>",
    re.IGNORECASE,
)
_TAG = re.compile(r"<[^>]*>")
_SPACES = re.compile(r"[ \t\xa0]+")
_SENTENCE_END = ".!?"


def is_null_or_whitespace(value: str | None) -> bool:
    return value is None or not value.strip()


def remove_tags(text: str | None, new_line: str = " ") -> str:
    """Convert markup to plain text.

    Block-closing tags and line breaks become `new_line`, all other tags
    are dropped, entities are decoded and runs of spaces are collapsed.

    Args:
        text: Markup to convert. `None` yields an empty string.
        new_line: Replacement for line breaks and block ends.

    Returns:
        str: The plain text.
    """
    if not text:
        return ""
    text = _BLOCK_END.sub("\n", text)
    text = _TAG.sub("", text)
    text = html.unescape(text)
    lines = (_SPACES.sub(" ", line).strip() for line in text.splitlines())
    return new_line.join(line for line in lines if line)


def truncate(
    text: str | None, max_length: int, ellipsis: str | None = None
) -> str:
    """Shorten `text` to at most `max_length` characters.

    Cuts after the last sentence end within bounds if there is one.
    Otherwise cuts at the last word boundary and appends an ellipsis,
    and as a last resort cuts hard and appends an ellipsis.
    """
    if text is None:
        return ""
    if max_length < 0:
        raise ValueError("max_length must not be negative")
    if len(text) <= max_length:
        return text
    ellipsis = settings.TRUNCATION_ELLIPSIS if ellipsis is None else ellipsis

    for i in range(max_length - 1, 0, -1):
        if text[i] in _SENTENCE_END and text[i + 1].isspace():
            return text[: i + 1]

    if max_length <= len(ellipsis):
        return text[:max_length]
    limit = max_length - len(ellipsis)
    head = text[: limit + 1]
    for i in range(len(head) - 1, 0, -1):
        if head[i].isspace():
            shortened = head[:i].rstrip()
            if shortened:
                return shortened + ellipsis
    return text[:limit] + ellipsis


def format_id(id_: UUID) -> str:
    """Serialize an id the way string fields store it."""
    if settings.ID_FORMAT == "hyphenated":
        return str(id_)
    return id_.hex


def parse_id(text: str | UUID) -> UUID:
    if isinstance(text, UUID):
        return text
    try:
        return UUID(text.strip())
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid id string: {text!r}") from e
