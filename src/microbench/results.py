"""Ordered multi-association of benchmark values keyed by total duration.

Both the timing engine and the comparator return a ResultCollection:
iteration yields ``(total_ns, value)`` pairs fastest-first.  Equal keys
are all retained, in the order they were inserted.
"""

from __future__ import annotations

import bisect
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


def _key(entry: tuple[int, object]) -> int:
    return entry[0]


class ResultCollection(Generic[T]):
    """Sorted (key, value) pairs permitting duplicate keys."""

    __slots__ = ("_entries",)

    def __init__(self, entries: list[tuple[int, T]] | None = None) -> None:
        self._entries: list[tuple[int, T]] = []
        for key, value in entries or []:
            self.insert(key, value)

    def insert(self, key: int, value: T) -> None:
        """Insert *value* after any existing entries with an equal key."""
        bisect.insort_right(self._entries, (key, value), key=_key)

    def keys(self) -> list[int]:
        return [k for k, _ in self._entries]

    def values(self) -> list[T]:
        return [v for _, v in self._entries]

    def items(self) -> list[tuple[int, T]]:
        return list(self._entries)

    def __iter__(self) -> Iterator[tuple[int, T]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> tuple[int, T]:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultCollection):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ResultCollection({self._entries!r})"
