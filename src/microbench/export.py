"""Export benchmark results to delimited text files.

For every test two files are written next to *base*::

    {base}-{name}.txt        total, min, max, mean, variance, stddev
                             (one line, display unit)
    {base}-{name}-dist.txt   one "duration<delim>count" line per
                             histogram bucket, ascending, native
                             nanoseconds

Write failures are reported through the return value and logged, not
raised.  Files written before a failure are left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path

from microbench.histogram import Histogram
from microbench.results import ResultCollection
from microbench.stats import AggregatedResult

log = logging.getLogger("microbench")

SUMMARY_FIELDS = ("total", "min", "max", "mean", "variance", "stddev")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def summary_path(base: str | Path, name: str) -> Path:
    return Path(f"{base}-{name}.txt")


def distribution_path(base: str | Path, name: str) -> Path:
    return Path(f"{base}-{name}-dist.txt")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def format_summary_line(
    result: AggregatedResult,
    *,
    unit: int = 1_000,
    delimiter: str = "\t",
    precision: int = 5,
) -> str:
    """Format the one-line summary for *result* in the display unit.

    The total is truncated to whole display units; variance is divided
    by ``unit ** 2``.
    """
    values = [
        str(int(result.total // unit)),
        f"{result.min / unit:.{precision}f}",
        f"{result.max / unit:.{precision}f}",
        f"{result.mean / unit:.{precision}f}",
        f"{result.variance / (unit * unit):.{precision}f}",
        f"{result.stddev / unit:.{precision}f}",
    ]
    return delimiter.join(values)


def write_results(
    base: str | Path,
    results: ResultCollection[AggregatedResult],
    *,
    unit: int = 1_000,
    delimiter: str = "\t",
    precision: int = 5,
) -> bool:
    """Write summary and distribution files for every result.

    Args:
        base: Path prefix for the generated files.
        results: Output of ``time_units``.
        unit: Nanoseconds per display unit for the summary file.
        delimiter: Field separator.
        precision: Digits after the decimal point in the summary file.

    Returns:
        True if every file was written, False on the first failure.
    """
    for _, result in results:
        path = summary_path(base, result.name)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(
                    format_summary_line(
                        result, unit=unit, delimiter=delimiter, precision=precision
                    )
                    + "\n"
                )
        except OSError as exc:
            log.error("Cannot write %s: %s", path, exc)
            return False

        path = distribution_path(base, result.name)
        try:
            with open(path, "w", encoding="utf-8") as f:
                for duration, occurrences in result.histogram.items():
                    f.write(f"{duration}{delimiter}{occurrences}\n")
        except OSError as exc:
            log.error("Cannot write %s: %s", path, exc)
            return False

        log.debug("Wrote %s and %s", summary_path(base, result.name), path)

    return True


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def read_summary(path: str | Path, *, delimiter: str = "\t") -> dict[str, float]:
    """Read a summary file written by :func:`write_results`.

    Raises:
        ValueError: If the file does not hold exactly six numeric fields.
    """
    text = Path(path).read_text(encoding="utf-8").strip()
    parts = text.split(delimiter)
    if len(parts) != len(SUMMARY_FIELDS):
        raise ValueError(
            f"Expected {len(SUMMARY_FIELDS)} fields in {path}, got {len(parts)}"
        )
    try:
        return {name: float(value) for name, value in zip(SUMMARY_FIELDS, parts)}
    except ValueError as exc:
        raise ValueError(f"Non-numeric field in {path}: {exc}") from exc


def read_distribution(path: str | Path, *, delimiter: str = "\t") -> Histogram:
    """Read a distribution file written by :func:`write_results`.

    Blank lines are ignored.

    Raises:
        ValueError: If a line is not ``duration<delim>count``.
    """
    histogram = Histogram()
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip("\r\n")
            if not line.strip():
                continue
            parts = line.split(delimiter)
            if len(parts) != 2:
                raise ValueError(f"{path}:{lineno}: expected 'duration{delimiter!r}count'")
            try:
                histogram.add(int(parts[0]), int(parts[1]))
            except ValueError as exc:
                raise ValueError(f"{path}:{lineno}: {exc}") from exc
    return histogram
