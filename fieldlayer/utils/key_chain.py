# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Helpers for key chains, the ordered paths addressing nested fields.

A key chain is a tuple of keys. Its flat form joins the links with dots,
so `("address", "city")` and `"address.city"` address the same field.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

__all__ = (
    "SEPARATOR",
    "from_key",
    "to_key",
    "concat",
    "remove_first_link_of",
    "remove_last_link_of",
    "remove_leading_links_of",
    "remove_trailing_links_of",
    "starts_with",
    "is_contained_in",
    "remove_indexes_from",
    "split_key",
)

SEPARATOR = "."

_INDEX_PATTERN = re.compile(r"^(?P<key>.*?)\[(?P<index>\d+)\]$")

KeyChain = tuple[str, ...]


def from_key(key: str | Sequence[str] | None) -> KeyChain:
    if key is None or key == "":
        return ()
    if isinstance(key, str):
        return tuple(key.split(SEPARATOR))
    return tuple(key)


def to_key(key_chain: Iterable[str]) -> str:
    return SEPARATOR.join(key_chain)


def concat(*chains: str | Sequence[str]) -> KeyChain:
    result: list[str] = []
    for chain in chains:
        result.extend(from_key(chain))
    return tuple(result)


def remove_first_link_of(key_chain: Sequence[str]) -> KeyChain:
    return tuple(key_chain[1:])


def remove_last_link_of(key_chain: Sequence[str]) -> KeyChain:
    return tuple(key_chain[:-1])


def starts_with(key_chain: Sequence[str], prefix: Sequence[str]) -> bool:
    prefix = tuple(prefix)
    return tuple(key_chain[: len(prefix)]) == prefix


def remove_leading_links_of(
    key_chain: Sequence[str], leading: Sequence[str]
) -> KeyChain:
    """Strip `leading` from the front of `key_chain` if it is a prefix.

    Returns the chain unchanged otherwise.
    """
    if starts_with(key_chain, leading):
        return tuple(key_chain[len(tuple(leading)) :])
    return tuple(key_chain)


def remove_trailing_links_of(
    key_chain: Sequence[str], trailing: Sequence[str]
) -> KeyChain:
    trailing = tuple(trailing)
    if trailing and tuple(key_chain[-len(trailing) :]) == trailing:
        return tuple(key_chain[: -len(trailing)])
    return tuple(key_chain)


def is_contained_in(
    key_chain: Sequence[str], key_chains: Iterable[Sequence[str]]
) -> bool:
    key_chain = tuple(key_chain)
    return any(tuple(other) == key_chain for other in key_chains)


def split_key(key: str) -> tuple[str, int | None]:
    """Split an indexed key like `"items[3]"` into `("items", 3)`."""
    match = _INDEX_PATTERN.match(key)
    if match is None:
        return key, None
    return match.group("key"), int(match.group("index"))


def remove_indexes_from(key_chain: Sequence[str]) -> KeyChain:
    return tuple(split_key(link)[0] for link in key_chain)
