"""Shared text formatting helpers for microbench.

Provides section headers and block-character histograms used by the
display module and the CLI.
"""

from __future__ import annotations


def format_histogram(
    buckets: list[tuple[str, int]],
    *,
    max_bar_width: int = 40,
    show_percentages: bool = True,
    total: int | None = None,
) -> str:
    """Format a text histogram using block characters.

    Each bucket is ``(label, count)``. Labels are right-aligned, bars are
    proportional to the largest bucket.

    Args:
        buckets: List of (label, count) tuples.
        max_bar_width: Maximum width of the bar in characters.
        show_percentages: Whether to show percentage after count.
        total: Total for percentage calculation. If None, computed from buckets.

    Returns:
        The formatted histogram as a string.
    """
    if not buckets:
        return ""

    if total is None:
        total = sum(count for _, count in buckets)

    max_count = max((count for _, count in buckets), default=0)
    label_width = max((len(label) for label, _ in buckets), default=0)
    count_width = max(3, len(str(max_count)))

    lines: list[str] = []
    for label, count in buckets:
        if max_count > 0:
            bar_len = int(count / max_count * max_bar_width)
            bar = "\u2588" * bar_len if bar_len > 0 else "\u258f"
        else:
            bar = ""

        count_str = f"{count:{count_width}d}"
        if show_percentages and total > 0:
            pct_str = f"({count / total * 100:5.1f}%)"
        elif show_percentages:
            pct_str = "(    -%)"
        else:
            pct_str = ""

        line = f"  {label:>{label_width}s}   {bar:<{max_bar_width}s}  {count_str}  {pct_str}"
        lines.append(line.rstrip())

    return "\n".join(lines)


def format_section_header(title: str, width: int = 80) -> str:
    """Format a section header: ``'\u2500\u2500\u2500 Title \u2500\u2500...'``."""
    prefix = "\u2500\u2500\u2500 "
    suffix_len = width - len(prefix) - len(title) - 1
    suffix = " " + "\u2500" * max(0, suffix_len)
    return prefix + title + suffix
