from __future__ import annotations

import math

import pytest

from log_severity_stats.core.commands import (
    CategoryStatsCommand,
    CategoryTimeStatsCommand,
    CommandParseError,
    InsertCommand,
    TimeStatsCommand,
    parse_command,
)
from log_severity_stats.core.models import TimeMode


def test_parse_insert() -> None:
    assert parse_command("1 1715744138011;INTERNAL_SERVER_ERROR;23.72") == InsertCommand(
        timestamp=1715744138011,
        category="INTERNAL_SERVER_ERROR",
        severity=23.72,
    )


def test_parse_insert_category_with_spaces_and_negative_ts() -> None:
    cmd = parse_command("1 -5;disk full;0.5")
    assert cmd == InsertCommand(timestamp=-5, category="disk full", severity=0.5)


def test_parse_insert_nan_severity() -> None:
    cmd = parse_command("1 1;X;NaN")
    assert isinstance(cmd, InsertCommand)
    assert math.isnan(cmd.severity)


def test_parse_queries() -> None:
    assert parse_command("2 ERROR") == CategoryStatsCommand(category="ERROR")
    assert parse_command("3 BEFORE 25") == TimeStatsCommand(mode=TimeMode.BEFORE, timestamp=25)
    assert parse_command("4 AFTER WARN 30") == CategoryTimeStatsCommand(
        category="WARN", mode=TimeMode.AFTER, timestamp=30
    )


def test_parse_tolerates_surrounding_whitespace() -> None:
    assert parse_command("  3\tAFTER   7  \n") == TimeStatsCommand(mode=TimeMode.AFTER, timestamp=7)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "9 ERROR",
        "x ERROR",
        "1 10;ERROR",
        "1 ten;ERROR;5.0",
        "1 10;ERROR;high",
        "1 1_0;ERROR;5.0",
        "2",
        "3 BEFORE",
        "3 AFTER 1.5",
        "4 AFTER WARN",
        "4 AFTER WARN x",
    ],
)
def test_parse_rejects_malformed(line: str) -> None:
    with pytest.raises(CommandParseError):
        parse_command(line)


def test_parse_ignores_trailing_tokens_and_fields() -> None:
    assert parse_command("2 ERROR extra") == CategoryStatsCommand(category="ERROR")
    assert parse_command("3 AFTER 7 8") == TimeStatsCommand(mode=TimeMode.AFTER, timestamp=7)
    assert parse_command("1 10;ERROR;5.0;extra") == InsertCommand(
        timestamp=10, category="ERROR", severity=5.0
    )


@pytest.mark.parametrize("mode", ["before", "DURING", "After"])
def test_parse_unrecognized_mode_is_none(mode: str) -> None:
    assert parse_command(f"3 {mode} 25") == TimeStatsCommand(mode=None, timestamp=25)
    assert parse_command(f"4 {mode} ERROR 5") == CategoryTimeStatsCommand(
        category="ERROR", mode=None, timestamp=5
    )


def test_parse_error_carries_location() -> None:
    with pytest.raises(CommandParseError, match="line 7") as excinfo:
        parse_command("3 BEFORE soon", line_no=7)

    assert excinfo.value.line_no == 7
    assert excinfo.value.line == "3 BEFORE soon"
    assert isinstance(excinfo.value, ValueError)
