"""Tests for microbench.stats — streaming mean, variance and histogram.

Running statistics are cross-checked against the two-pass textbook
formulas as computed by the ``statistics`` module.
"""

from __future__ import annotations

import math
import random
import statistics
import unittest

from bench_test_helpers import make_result

from microbench.stats import AggregatedResult, RunningStats


def _assert_close(test: unittest.TestCase, actual: float, expected: float) -> None:
    if expected == 0:
        test.assertAlmostEqual(actual, 0.0, places=9)
    else:
        test.assertLess(abs(actual - expected) / abs(expected), 1e-9)


# ---------------------------------------------------------------------------
# Agreement with the two-pass reference
# ---------------------------------------------------------------------------


class TestRunningStatsReference(unittest.TestCase):
    """RunningStats must agree with mean = sum/n, var = sum((x-mean)^2)/(n-1)."""

    def _check(self, durations: list[int]) -> None:
        result = make_result("t", durations)
        _assert_close(self, result.mean, statistics.mean(durations))
        _assert_close(self, result.variance, statistics.variance(durations))
        _assert_close(self, result.stddev, statistics.stdev(durations))

    def test_small_known_sample(self) -> None:
        """2, 4, 4, 4, 5, 5, 7, 9 has mean 5 and sample variance 32/7."""
        result = make_result("t", [2, 4, 4, 4, 5, 5, 7, 9])
        self.assertAlmostEqual(result.mean, 5.0, places=12)
        self.assertAlmostEqual(result.variance, 32 / 7, places=12)
        self.assertAlmostEqual(result.stddev, math.sqrt(32 / 7), places=12)

    def test_random_sequences(self) -> None:
        rng = random.Random(1234)
        for n in (2, 3, 10, 1000):
            durations = [rng.randint(100, 100_000) for _ in range(n)]
            with self.subTest(n=n):
                self._check(durations)

    def test_large_offset_is_stable(self) -> None:
        """Small jitter on a huge baseline must not lose precision."""
        base = 10**12
        durations = [base + d for d in (4, 7, 13, 16)]
        result = make_result("t", durations)
        self.assertAlmostEqual(result.variance, 30.0, places=3)
        self._check(durations)

    def test_many_samples(self) -> None:
        rng = random.Random(99)
        durations = [rng.choice((250, 251, 252, 260, 400)) for _ in range(100_000)]
        self._check(durations)


# ---------------------------------------------------------------------------
# Degenerate counts
# ---------------------------------------------------------------------------


class TestRunningStatsEdgeCases(unittest.TestCase):
    def test_single_sample(self) -> None:
        """count == 1: variance and stddev are exactly 0."""
        result = make_result("t", [42])
        self.assertEqual(result.count, 1)
        self.assertEqual(result.mean, 42.0)
        self.assertEqual(result.min, 42.0)
        self.assertEqual(result.max, 42.0)
        self.assertEqual(result.variance, 0.0)
        self.assertEqual(result.stddev, 0.0)

    def test_no_samples(self) -> None:
        """count == 0: NaN min/max/mean, zero variance, empty histogram."""
        result = RunningStats().finalize("t", 0)
        self.assertEqual(result.count, 0)
        self.assertEqual(result.total, 0)
        self.assertTrue(math.isnan(result.min))
        self.assertTrue(math.isnan(result.max))
        self.assertTrue(math.isnan(result.mean))
        self.assertEqual(result.variance, 0.0)
        self.assertEqual(result.stddev, 0.0)
        self.assertEqual(len(result.histogram), 0)

    def test_constant_samples(self) -> None:
        result = make_result("t", [7] * 50)
        self.assertEqual(result.mean, 7.0)
        self.assertEqual(result.variance, 0.0)
        self.assertEqual(result.min, result.max)

    def test_variance_property_before_finalize(self) -> None:
        stats = RunningStats()
        self.assertEqual(stats.variance, 0.0)
        stats.update(1)
        self.assertEqual(stats.variance, 0.0)
        stats.update(3)
        self.assertAlmostEqual(stats.variance, 2.0)


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


class TestAggregatedResultInvariants(unittest.TestCase):
    def test_min_mean_max_ordering(self) -> None:
        rng = random.Random(7)
        durations = [rng.randint(1, 10_000) for _ in range(500)]
        result = make_result("t", durations)
        self.assertLessEqual(result.min, result.mean)
        self.assertLessEqual(result.mean, result.max)
        self.assertEqual(result.min, min(durations))
        self.assertEqual(result.max, max(durations))

    def test_histogram_counts_every_sample(self) -> None:
        durations = [5, 3, 5, 5, 9, 3]
        result = make_result("t", durations)
        self.assertEqual(result.histogram.total, len(durations))
        self.assertEqual(result.histogram.to_dict(), {3: 2, 5: 3, 9: 1})
        self.assertEqual(result.distinct_durations, 3)

    def test_result_is_frozen(self) -> None:
        result = make_result("t", [1, 2])
        with self.assertRaises(AttributeError):
            result.mean = 0.0  # type: ignore[misc]

    def test_direct_construction(self) -> None:
        r = AggregatedResult(
            name="x", count=0, total=0, min=0.0, max=0.0, mean=0.0, variance=0.0, stddev=0.0
        )
        self.assertEqual(len(r.histogram), 0)


if __name__ == "__main__":
    unittest.main()
