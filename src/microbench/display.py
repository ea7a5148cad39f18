"""Terminal display formatting for benchmark results.

Produces right-aligned fixed-width tables: one for per-test statistics
and one for the pairwise comparison matrix.  Durations are recorded in
nanoseconds and converted to the display unit here, at read time.
All formatting options are explicit arguments.
"""

from __future__ import annotations

import math

from microbench.compare import ComparisonEntry
from microbench.formatting import format_histogram
from microbench.histogram import Histogram
from microbench.results import ResultCollection
from microbench.stats import AggregatedResult

DEFAULT_UNIT = 1_000  # microseconds
SELF_MARKER = "--"


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------


def _column_width(names: list[str], width: int) -> int:
    """Widen columns so the longest test name still has a space before it."""
    for name in names:
        if len(name) > width:
            width = len(name) + 1
    return width


def _format_value(value: float, precision: int) -> str:
    if math.isnan(value):
        return "N/A"
    return f"{value:.{precision}f}"


def _format_total(total_ns: int, unit: int) -> str:
    """Whole display units, truncated toward zero."""
    return str(int(total_ns // unit))


def _format_pct(value: float, width: int, precision: int) -> str:
    if math.isnan(value):
        return f"{'N/A':>{width}s}"
    return f"{value:>{width - 1}.{precision}f}%"


# ---------------------------------------------------------------------------
# Runtime table
# ---------------------------------------------------------------------------


def format_results(
    results: ResultCollection[AggregatedResult],
    *,
    unit: int = DEFAULT_UNIT,
    precision: int = 2,
    width: int = 10,
) -> str:
    """Format per-test statistics as an aligned table.

    Args:
        results: Output of ``time_units``.
        unit: Nanoseconds per display unit (see ``config.TIME_UNITS``).
        precision: Digits after the decimal point.
        width: Minimum column width.

    Returns:
        Formatted string for terminal output.
    """
    w = _column_width([r.name for r in results.values()], width)
    headers = ["", "runtime", "min", "max", "avg", "var", "dev"]
    lines = ["".join(f"{h:>{w}s}" for h in headers)]

    for total, r in results:
        cells = [
            r.name,
            _format_total(total, unit),
            _format_value(r.min / unit, precision),
            _format_value(r.max / unit, precision),
            _format_value(r.mean / unit, precision),
            _format_value(r.variance / (unit * unit), precision),
            _format_value(r.stddev / unit, precision),
        ]
        lines.append("".join(f"{c:>{w}s}" for c in cells))

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Comparison matrix
# ---------------------------------------------------------------------------


def format_comparison(
    comparison: ResultCollection[ComparisonEntry],
    *,
    unit: int = DEFAULT_UNIT,
    precision: int = 2,
    width: int = 10,
) -> str:
    """Format the comparison matrix.

    Row *a*, column *b* shows how much faster (positive) or slower
    (negative) *a* is than *b*, relative to *b*'s total.  The diagonal
    shows ``--``.
    """
    names = [entry.name for entry in comparison.values()]
    w = _column_width(names, width)

    header = f"{'':>{w}s}{'runtime':>{w}s}" + "".join(f"{n:>{w}s}" for n in names)
    lines = [header]

    for row, (total, entry) in enumerate(comparison):
        line = f"{entry.name:>{w}s}{_format_total(total, unit):>{w}s}"
        for col, pct in enumerate(entry.percentages):
            if col == row:
                line += f"{SELF_MARKER:>{w}s}"
            else:
                line += _format_pct(pct, w, precision)
        lines.append(line)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------


def format_distribution(
    name: str,
    histogram: Histogram,
    *,
    unit: int = 1,
    precision: int = 2,
    max_bar_width: int = 40,
) -> str:
    """Format an exact-value runtime distribution as a text histogram.

    Durations are converted to the display unit for the labels only;
    buckets stay separate even when their labels round to the same text.
    """
    if not histogram:
        return f"{name}: no samples"

    digits = 0 if unit == 1 else precision
    buckets = [
        (f"{duration / unit:.{digits}f}", occurrences) for duration, occurrences in histogram.items()
    ]
    lines = [f"{name} ({histogram.total} samples, {len(buckets)} distinct)"]
    lines.append(format_histogram(buckets, max_bar_width=max_bar_width, total=histogram.total))
    return "\n".join(lines)
