"""Rendering of query results into output lines."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

from .models import Stats

NO_OUTPUT = "No output"
EMPTY_STATS_LINE = "Min: 0.0, Max: 0.0, Mean: 0.0"

_FRACTION_DIGITS = 6
_QUANTUM = Decimal(1).scaleb(-_FRACTION_DIGITS)


def format_severity(value: float) -> str:
    """Format like the decimal pattern ``#.######``.

    Up to six fractional digits (half-even on the exact binary value), trailing zeros
    dropped, and no leading zero before the point: 0.5 -> ".5", 3.0 -> "3".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"

    exact = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + _FRACTION_DIGITS + 2)
        rounded = exact.quantize(_QUANTUM, rounding=ROUND_HALF_EVEN)

    if rounded.is_zero():
        return "-0" if rounded.is_signed() else "0"

    text = format(rounded, "f").rstrip("0").rstrip(".")
    if text.startswith("0."):
        return text[1:]
    if text.startswith("-0."):
        return "-" + text[2:]
    return text


def format_stats(stats: Stats) -> str:
    if stats.is_empty:
        return EMPTY_STATS_LINE
    return (
        f"Min: {format_severity(stats.min)}, "
        f"Max: {format_severity(stats.max)}, "
        f"Mean: {format_severity(stats.mean)}"
    )


def format_not_found(category: str) -> str:
    return f"No entries for log type: {category}"


def format_result(result: Stats | None, *, category: str) -> str:
    """Render a category-scoped query result (None means the category is unknown)."""
    if result is None:
        return format_not_found(category)
    return format_stats(result)
