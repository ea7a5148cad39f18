"""Tests for microbench.timing — the timing engine."""

from __future__ import annotations

import logging
import math
import time
import unittest

from bench_test_helpers import CallCounter, make_clock, make_units

from microbench.timing import DEFAULT_CLOCK, time_units
from microbench.units import BenchUnit


class TestTimeUnitsSynthetic(unittest.TestCase):
    """Engine behaviour driven by a fake clock."""

    def test_three_units_ordered_by_total(self) -> None:
        units = make_units("A", "B", "C")
        clock = make_clock([10] * 10 + [20] * 10 + [5] * 10)
        runtimes = time_units(10, units, clock=clock)
        self.assertEqual([r.name for r in runtimes.values()], ["C", "A", "B"])
        self.assertEqual(runtimes.keys(), [50, 100, 200])

    def test_statistics_from_durations(self) -> None:
        durations = [3, 1, 4, 1, 5]
        runtimes = time_units(5, make_units("x"), clock=make_clock(durations))
        total, r = runtimes[0]
        self.assertEqual(total, 14)
        self.assertEqual(r.total, 14)
        self.assertEqual(r.count, 5)
        self.assertEqual(r.min, 1.0)
        self.assertEqual(r.max, 5.0)
        self.assertAlmostEqual(r.mean, 2.8)
        self.assertAlmostEqual(r.variance, 3.2)
        self.assertEqual(r.histogram.to_dict(), {1: 2, 3: 1, 4: 1, 5: 1})

    def test_histogram_total_equals_count(self) -> None:
        for count in (1, 2, 17):
            with self.subTest(count=count):
                runtimes = time_units(
                    count, make_units("a", "b"), clock=make_clock(list(range(1, 2 * count + 1)))
                )
                for _, r in runtimes:
                    self.assertEqual(r.histogram.total, count)

    def test_equal_totals_both_kept(self) -> None:
        runtimes = time_units(2, make_units("a", "b"), clock=make_clock([5, 5, 5, 5]))
        self.assertEqual(len(runtimes), 2)
        self.assertEqual([r.name for r in runtimes.values()], ["a", "b"])

    def test_single_iteration_has_zero_variance(self) -> None:
        runtimes = time_units(1, make_units("a"), clock=make_clock([123]))
        _, r = runtimes[0]
        self.assertEqual(r.variance, 0.0)
        self.assertEqual(r.stddev, 0.0)


class TestTimeUnitsEdgeCases(unittest.TestCase):
    def test_empty_unit_list(self) -> None:
        self.assertEqual(len(time_units(10, [])), 0)

    def test_zero_count(self) -> None:
        counter = CallCounter()
        runtimes = time_units(0, [BenchUnit("z", counter)])
        self.assertEqual(counter.calls, 0)
        total, r = runtimes[0]
        self.assertEqual(total, 0)
        self.assertEqual(r.count, 0)
        self.assertTrue(math.isnan(r.mean))
        self.assertEqual(r.variance, 0.0)
        self.assertEqual(len(r.histogram), 0)

    def test_negative_count_rejected(self) -> None:
        with self.assertRaises(ValueError):
            time_units(-1, make_units("a"))

    def test_action_called_exactly_count_times(self) -> None:
        first, second = CallCounter(), CallCounter()
        time_units(25, [BenchUnit("a", first), BenchUnit("b", second)])
        self.assertEqual(first.calls, 25)
        self.assertEqual(second.calls, 25)

    def test_units_run_sequentially(self) -> None:
        calls: list[str] = []
        units = [
            BenchUnit("a", lambda: calls.append("a")),
            BenchUnit("b", lambda: calls.append("b")),
        ]
        time_units(3, units)
        self.assertEqual(calls, ["a", "a", "a", "b", "b", "b"])

    def test_exception_propagates_and_aborts(self) -> None:
        later = CallCounter()

        def boom() -> None:
            raise RuntimeError("broken unit")

        with self.assertRaises(RuntimeError):
            time_units(5, [BenchUnit("bad", boom), BenchUnit("later", later)])
        self.assertEqual(later.calls, 0)


class TestTimeUnitsRealClock(unittest.TestCase):
    def test_default_clock_is_perf_counter_ns(self) -> None:
        self.assertIs(DEFAULT_CLOCK, time.perf_counter_ns)

    def test_real_clock_bounds(self) -> None:
        runtimes = time_units(50, [BenchUnit("sum", lambda: sum(range(100)))])
        _, r = runtimes[0]
        self.assertEqual(r.histogram.total, 50)
        self.assertGreaterEqual(r.min, 0)
        self.assertLessEqual(r.min, r.mean)
        self.assertLessEqual(r.mean, r.max)
        self.assertEqual(sum(d * c for d, c in r.histogram.items()), r.total)
        for duration in r.histogram:
            self.assertIsInstance(duration, int)

    def test_sleep_is_measured(self) -> None:
        runtimes = time_units(2, [BenchUnit("sleep", lambda: time.sleep(0.01))])
        _, r = runtimes[0]
        self.assertGreater(r.min, 5_000_000)


class TestTimingLogging(unittest.TestCase):
    def test_debug_log_per_unit(self) -> None:
        with self.assertLogs("microbench", level=logging.DEBUG) as cm:
            time_units(1, make_units("logged"), clock=make_clock([1]))
        self.assertTrue(any("logged" in line for line in cm.output))

    def test_jitter_warning(self) -> None:
        count = 1000
        clock = make_clock(list(range(1, count + 1)))
        with self.assertLogs("microbench", level=logging.WARNING) as cm:
            time_units(count, make_units("noisy"), clock=clock)
        self.assertTrue(any("distinct" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
