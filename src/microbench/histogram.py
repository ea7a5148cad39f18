"""Exact-value runtime histogram.

Maps each observed duration (native nanoseconds) to the number of
iterations that observed exactly that duration.  There is no binning:
the number of buckets depends on timer resolution and system jitter,
not on the iteration count.
"""

from __future__ import annotations

from typing import Iterator


class Histogram:
    """Frequency table keyed by exact duration, iterated in ascending order."""

    __slots__ = ("_counts", "_total")

    def __init__(self, counts: dict[int, int] | None = None) -> None:
        self._counts: dict[int, int] = {}
        self._total = 0
        if counts:
            for value, occurrences in counts.items():
                self.add(value, occurrences)

    def add(self, value: int, occurrences: int = 1) -> None:
        """Record *occurrences* observations of *value*."""
        if occurrences < 0:
            raise ValueError(f"Occurrences cannot be negative (got {occurrences}).")
        if occurrences == 0:
            return
        self._counts[value] = self._counts.get(value, 0) + occurrences
        self._total += occurrences

    @property
    def total(self) -> int:
        """Sum of all bucket counts (the number of recorded samples)."""
        return self._total

    def items(self) -> list[tuple[int, int]]:
        """(duration, count) pairs ordered by duration."""
        return sorted(self._counts.items())

    def keys(self) -> list[int]:
        return sorted(self._counts)

    def to_dict(self) -> dict[int, int]:
        """Return an ordered plain-dict copy."""
        return dict(self.items())

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def __iter__(self) -> Iterator[int]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Histogram):
            return self._counts == other._counts
        if isinstance(other, dict):
            return self._counts == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Histogram({self.to_dict()!r})"
