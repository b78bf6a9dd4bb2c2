"""Command-line parsing for the line-oriented command file.

Line shapes:
    1 <timestamp>;<category>;<severity>
    2 <category>
    3 <BEFORE|AFTER> <timestamp>
    4 <BEFORE|AFTER> <category> <timestamp>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from .models import TimeMode

_INT_RE = re.compile(r"^[+-]?\d+$")


class OpCode(IntEnum):
    INSERT = 1
    CATEGORY_STATS = 2
    TIME_STATS = 3
    CATEGORY_TIME_STATS = 4


class CommandParseError(ValueError):
    """Raised when a command line cannot be turned into a typed command."""

    def __init__(self, message: str, *, line: str, line_no: int | None = None) -> None:
        self.line = line
        self.line_no = line_no
        where = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{where}{message} ({line!r})")


@dataclass(frozen=True, slots=True)
class InsertCommand:
    timestamp: int
    category: str
    severity: float


@dataclass(frozen=True, slots=True)
class CategoryStatsCommand:
    category: str


@dataclass(frozen=True, slots=True)
class TimeStatsCommand:
    mode: TimeMode | None  # None: unrecognized mode, matches no record
    timestamp: int


@dataclass(frozen=True, slots=True)
class CategoryTimeStatsCommand:
    category: str
    mode: TimeMode | None
    timestamp: int


Command = InsertCommand | CategoryStatsCommand | TimeStatsCommand | CategoryTimeStatsCommand


def _parse_int(text: str, what: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"invalid {what}: {text!r}")
    return int(text)


def _parse_float(text: str, what: str) -> float:
    # float() would also accept digit separators like "1_0".
    if "_" in text:
        raise ValueError(f"invalid {what}: {text!r}")
    try:
        return float(text)
    except ValueError as e:
        raise ValueError(f"invalid {what}: {text!r}") from e


def _parse_mode(text: str) -> TimeMode | None:
    try:
        return TimeMode(text)
    except ValueError:
        return None


def _expect_fields(fields: list[str], n: int, op: OpCode) -> None:
    # Trailing tokens past the expected ones are ignored.
    if len(fields) < n:
        raise ValueError(f"operation {op.value} takes {n - 1} argument(s), got {len(fields) - 1}")


def _parse_insert(rest: str) -> InsertCommand:
    parts = rest.strip().split(";")
    if len(parts) < 3:
        raise ValueError(f"insert expects <timestamp>;<category>;<severity>, got {len(parts)} field(s)")
    ts_text, category, sev_text = parts[:3]
    return InsertCommand(
        timestamp=_parse_int(ts_text.strip(), "timestamp"),
        category=category,
        severity=_parse_float(sev_text.strip(), "severity"),
    )


def parse_command(line: str, *, line_no: int | None = None) -> Command:
    """Parse one command line into a typed command.

    Extra trailing tokens (or extra ";" fields on an insert) are ignored. A mode other
    than BEFORE/AFTER parses to None. Raises CommandParseError for blank lines, unknown
    op codes, missing fields and malformed numbers.
    """
    stripped = line.strip()
    if not stripped:
        raise CommandParseError("empty command", line=line, line_no=line_no)

    head, *tail = stripped.split(None, 1)
    rest = tail[0] if tail else ""

    try:
        op = OpCode(_parse_int(head, "operation"))
    except ValueError as e:
        raise CommandParseError(f"unknown operation {head!r}", line=line, line_no=line_no) from e

    try:
        if op is OpCode.INSERT:
            return _parse_insert(rest)

        fields = stripped.split()
        if op is OpCode.CATEGORY_STATS:
            _expect_fields(fields, 2, op)
            return CategoryStatsCommand(category=fields[1])
        if op is OpCode.TIME_STATS:
            _expect_fields(fields, 3, op)
            return TimeStatsCommand(
                mode=_parse_mode(fields[1]),
                timestamp=_parse_int(fields[2], "timestamp"),
            )
        _expect_fields(fields, 4, op)
        return CategoryTimeStatsCommand(
            mode=_parse_mode(fields[1]),
            category=fields[2],
            timestamp=_parse_int(fields[3], "timestamp"),
        )
    except ValueError as e:
        raise CommandParseError(str(e), line=line, line_no=line_no) from e
