# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

__all__ = ("RestartableIterable",)

T = TypeVar("T")


class RestartableIterable(Generic[T]):
    """Finite, lazy sequence that can be iterated more than once.

    Every call to `iter()` runs the producer again, so the values always
    reflect the current state of whatever the producer reads.
    """

    __slots__ = ("_producer",)

    def __init__(self, producer: Callable[[], Iterable[T]]):
        self._producer = producer

    def __iter__(self) -> Iterator[T]:
        return iter(self._producer())

    def __bool__(self) -> bool:
        for _ in self:
            return True
        return False

    def __repr__(self) -> str:
        return f"RestartableIterable({list(self)!r})"

    def to_list(self) -> list[T]:
        return list(self)

    def first(self, default: T | None = None) -> T | None:
        for item in self:
            return item
        return default
