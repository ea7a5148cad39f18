"""Pairwise relative-performance comparison of benchmark results.

For a row test ``a`` and a column test ``b``::

    pct(a, b) = (total_b - total_a) / total_b * 100

i.e. how much faster (positive) or slower (negative) ``a`` is,
expressed as a percentage of ``b``'s own total.  The matrix is not
skew-symmetric: ``pct(b, a)`` uses ``total_a`` as its denominator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from microbench.results import ResultCollection
from microbench.stats import AggregatedResult

log = logging.getLogger("microbench")


@dataclass(frozen=True)
class ComparisonEntry:
    """Percentage differences of one test against every test in a run."""

    name: str
    percentages: tuple[float, ...]


def percent_difference(total_a: float, total_b: float) -> float:
    """Return ``(total_b - total_a) / total_b * 100``.

    A zero *total_b* has no meaningful percentage; NaN is returned.
    """
    if total_b == 0:
        return float("nan")
    return (total_b - total_a) / total_b * 100.0


def compare(
    results: ResultCollection[AggregatedResult],
) -> ResultCollection[ComparisonEntry]:
    """Build the all-pairs comparison matrix for *results*.

    Each entry's percentages follow the iteration order of *results*.
    The entry at a test's own position is exactly 0.0.  The input is
    not modified.
    """
    pairs = results.items()
    comparison: ResultCollection[ComparisonEntry] = ResultCollection()

    zero_totals = [r.name for total, r in pairs if total == 0]
    if zero_totals and len(pairs) > 1:
        log.warning(
            "Cannot compute percentages against zero total runtime: %s",
            ", ".join(zero_totals),
        )

    for i, (total_a, result_a) in enumerate(pairs):
        pct: list[float] = []
        for j, (total_b, _) in enumerate(pairs):
            if i == j:
                pct.append(0.0)
                continue
            pct.append(percent_difference(total_a, total_b))
        comparison.insert(total_a, ComparisonEntry(name=result_a.name, percentages=tuple(pct)))

    return comparison
