from __future__ import annotations

import math

import pytest

from log_severity_stats.core.formatting import (
    EMPTY_STATS_LINE,
    format_result,
    format_severity,
    format_stats,
)
from log_severity_stats.core.models import Stats


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5.0, "5"),
        (100.0, "100"),
        (23.72, "23.72"),
        (0.5, ".5"),
        (-0.25, "-.25"),
        (-12.5, "-12.5"),
        (1.0 / 3, ".333333"),
        (2.0 / 3, ".666667"),
        (0.0, "0"),
        (1e-9, "0"),
        (1234567.125, "1234567.125"),
        (0.0078125, ".007812"),
        (-0.0078125, "-.007812"),
        (0.0234375, ".023438"),
        (math.nan, "NaN"),
        (math.inf, "∞"),
        (-math.inf, "-∞"),
    ],
)
def test_format_severity(value: float, expected: str) -> None:
    assert format_severity(value) == expected


def test_format_severity_rounds_to_six_digits() -> None:
    assert format_severity(1.0000004) == "1"
    assert format_severity(1.0000006) == "1.000001"
    assert format_severity(1e300).startswith("1000000000")


def test_format_stats() -> None:
    assert format_stats(Stats(min=3.0, max=5.0, mean=4.0, count=2)) == "Min: 3, Max: 5, Mean: 4"


def test_format_empty_stats_uses_literal_zeros() -> None:
    assert format_stats(Stats.empty()) == EMPTY_STATS_LINE == "Min: 0.0, Max: 0.0, Mean: 0.0"


def test_format_result_not_found() -> None:
    assert format_result(None, category="INFO") == "No entries for log type: INFO"
