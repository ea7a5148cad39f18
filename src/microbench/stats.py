"""Streaming statistics for per-iteration durations.

Mean and variance are maintained with Welford's single-pass update
(Knuth, TAOCP vol. 2, 3rd ed., p. 232), which avoids the catastrophic
cancellation of ``sum(x**2) - n * mean**2`` over millions of samples
and never buffers raw samples.

References:
    Welford, B. P. (1962). "Note on a method for calculating corrected
        sums of squares and products." Technometrics 4(3): 419-420.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from microbench.histogram import Histogram


# ---------------------------------------------------------------------------
# Finalized per-unit result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AggregatedResult:
    """Statistics for one unit over ``count`` repetitions.

    All durations are in native clock resolution (nanoseconds);
    ``variance`` is in nanoseconds squared.  For ``count == 0`` the
    min, max and mean are NaN and variance/stddev are 0.
    """

    name: str
    count: int
    total: int
    min: float
    max: float
    mean: float
    variance: float
    stddev: float
    histogram: Histogram = field(default_factory=Histogram, compare=False)

    @property
    def distinct_durations(self) -> int:
        """Number of histogram buckets."""
        return len(self.histogram)


# ---------------------------------------------------------------------------
# Running accumulator
# ---------------------------------------------------------------------------


class RunningStats:
    """Incremental min/max/mean/variance and exact-value histogram."""

    def __init__(self) -> None:
        self.count = 0
        self.min = math.inf
        self.max = -math.inf
        self.mean = 0.0
        self._m2 = 0.0  # sum of squared deviations from the running mean
        self.histogram = Histogram()

    def update(self, duration: int) -> None:
        """Fold one sample into the running statistics."""
        self.count += 1
        if duration < self.min:
            self.min = duration
        if duration > self.max:
            self.max = duration
        self.histogram.add(duration)

        if self.count == 1:
            self.mean = float(duration)
            self._m2 = 0.0
            return

        old_mean = self.mean
        self.mean = old_mean + (duration - old_mean) / self.count
        self._m2 += (duration - old_mean) * (duration - self.mean)

    @property
    def variance(self) -> float:
        """Sample variance (n - 1 denominator); 0 when count <= 1."""
        if self.count > 1:
            return self._m2 / (self.count - 1)
        return 0.0

    @property
    def stddev(self) -> float:
        return math.sqrt(self.variance)

    def finalize(self, name: str, total: int) -> AggregatedResult:
        """Freeze the accumulator into an AggregatedResult."""
        if self.count == 0:
            return AggregatedResult(
                name=name,
                count=0,
                total=total,
                min=float("nan"),
                max=float("nan"),
                mean=float("nan"),
                variance=0.0,
                stddev=0.0,
                histogram=self.histogram,
            )

        # Rounding in the running mean can push it a hair outside the
        # observed range for constant samples.
        mean = min(max(self.mean, self.min), self.max)

        return AggregatedResult(
            name=name,
            count=self.count,
            total=total,
            min=float(self.min),
            max=float(self.max),
            mean=mean,
            variance=self.variance,
            stddev=self.stddev,
            histogram=self.histogram,
        )
