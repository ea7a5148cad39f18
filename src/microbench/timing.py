"""Timing engine: run each unit ``count`` times and aggregate durations.

Every invocation is bracketed by two reads of a monotonic nanosecond
clock (``time.perf_counter_ns`` by default).  Units run strictly one
after another; an exception from an action is not caught and aborts
the whole run.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from microbench.results import ResultCollection
from microbench.stats import AggregatedResult, RunningStats
from microbench.units import BenchUnit

log = logging.getLogger("microbench")

DEFAULT_CLOCK: Callable[[], int] = time.perf_counter_ns

# Below this many samples a histogram with one bucket per sample is
# unremarkable.
_JITTER_WARN_MIN_COUNT = 1000


def time_units(
    count: int,
    units: Sequence[BenchUnit],
    *,
    clock: Callable[[], int] = DEFAULT_CLOCK,
) -> ResultCollection[AggregatedResult]:
    """Benchmark *units*, invoking each action *count* times.

    Args:
        count: Repetitions per unit.  Zero produces degenerate results
            (NaN min/max/mean, zero variance, empty histogram).
        units: Units to run, in order.
        clock: Zero-argument callable returning integer nanoseconds.
            Must be monotonic.

    Returns:
        ResultCollection of AggregatedResult keyed by total duration,
        fastest first.

    Raises:
        ValueError: If *count* is negative.
    """
    if count < 0:
        raise ValueError(f"Repetition count cannot be negative (got {count}).")

    runtimes: ResultCollection[AggregatedResult] = ResultCollection()
    for unit in units:
        result = _time_unit(count, unit, clock)
        runtimes.insert(result.total, result)
    return runtimes


def _time_unit(
    count: int,
    unit: BenchUnit,
    clock: Callable[[], int],
) -> AggregatedResult:
    """Run one unit and return its frozen statistics."""
    log.debug("Timing %s (%d iterations)", unit.name, count)
    action = unit.action
    stats = RunningStats()
    total = 0

    for _ in range(count):
        start = clock()
        action()
        elapsed = clock() - start
        total += elapsed
        stats.update(elapsed)

    result = stats.finalize(unit.name, total)
    log.debug(
        "Finished %s: total=%dns mean=%.1fns buckets=%d",
        unit.name,
        result.total,
        result.mean,
        result.distinct_durations,
    )
    if count >= _JITTER_WARN_MIN_COUNT and result.distinct_durations == count:
        log.warning(
            "Every iteration of %s took a distinct time; the distribution "
            "has %d buckets.",
            unit.name,
            count,
        )
    return result
