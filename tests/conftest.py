from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

from log_severity_stats.core.log_index import LogIndex

SCENARIO_COMMANDS = [
    "1 10;ERROR;5.0",
    "1 20;ERROR;3.0",
    "1 30;WARN;1.0",
    "2 ERROR",
    "3 BEFORE 25",
    "4 AFTER WARN 30",
    "2 INFO",
]

SCENARIO_OUTPUT = [
    "No output",
    "No output",
    "No output",
    "Min: 3, Max: 5, Mean: 4",
    "Min: 3, Max: 5, Mean: 4",
    "Min: 0.0, Max: 0.0, Mean: 0.0",
    "No entries for log type: INFO",
]


@pytest.fixture
def scenario_commands() -> list[str]:
    return list(SCENARIO_COMMANDS)


@pytest.fixture
def scenario_output() -> list[str]:
    return list(SCENARIO_OUTPUT)


@pytest.fixture
def index() -> LogIndex:
    idx = LogIndex()
    idx.insert(10, "ERROR", 5.0)
    idx.insert(20, "ERROR", 3.0)
    idx.insert(30, "WARN", 1.0)
    return idx


@pytest.fixture
def write_commands() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        text = "\n".join(lines) + "\n"
        if path.suffix == ".gz":
            with gzip.open(path, mode="wt", encoding="utf-8") as f:
                f.write(text)
        else:
            path.write_text(text, encoding="utf-8")

    return _write
