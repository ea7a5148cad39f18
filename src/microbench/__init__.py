"""microbench: time competing implementations of the same operation.

Run each named callable a fixed number of times, aggregate per-iteration
wall-clock durations (min, max, mean, variance, standard deviation and an
exact-value histogram) and derive an all-pairs percentage comparison.

Typical use::

    from microbench import BenchUnit, compare, time_units
    from microbench.display import format_comparison

    runtimes = time_units(100_000, [
        BenchUnit("float", lambda: float(val)),
        BenchUnit("decimal", lambda: Decimal(val)),
    ])
    print(format_comparison(compare(runtimes)))
"""

from __future__ import annotations

from microbench.compare import ComparisonEntry, compare, percent_difference
from microbench.histogram import Histogram
from microbench.results import ResultCollection
from microbench.stats import AggregatedResult, RunningStats
from microbench.timing import time_units
from microbench.units import BenchUnit

__version__ = "0.1.0"

__all__ = [
    "AggregatedResult",
    "BenchUnit",
    "ComparisonEntry",
    "Histogram",
    "ResultCollection",
    "RunningStats",
    "compare",
    "percent_difference",
    "time_units",
]
