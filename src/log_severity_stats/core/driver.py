"""Command-file driver.

Reads commands line by line, applies them to a LogIndex, and writes one output line
per command. Malformed lines are logged and skipped unless ``strict`` is set.
"""

from __future__ import annotations

import gzip
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .commands import (
    CategoryStatsCommand,
    CategoryTimeStatsCommand,
    Command,
    CommandParseError,
    InsertCommand,
    TimeStatsCommand,
    parse_command,
)
from .formatting import NO_OUTPUT, format_result, format_stats
from .log_index import LogIndex
from .models import Stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Counters for one pass over a command source."""

    commands: int
    skipped: int
    outputs: int


class _Counter:
    __slots__ = ("commands", "skipped")

    def __init__(self) -> None:
        self.commands = 0
        self.skipped = 0

    def summary(self) -> RunSummary:
        return RunSummary(commands=self.commands, skipped=self.skipped, outputs=self.commands)


def execute_command(index: LogIndex, command: Command) -> str:
    """Apply one typed command and return its output line."""
    if isinstance(command, InsertCommand):
        index.insert(command.timestamp, command.category, command.severity)
        return NO_OUTPUT
    if isinstance(command, CategoryStatsCommand):
        return format_result(index.stats_by_category(command.category), category=command.category)
    if isinstance(command, TimeStatsCommand):
        if command.mode is None:
            return format_stats(Stats.empty())
        return format_stats(index.stats_by_time(command.mode, command.timestamp))
    if isinstance(command, CategoryTimeStatsCommand):
        if command.mode is None:
            # Unknown categories still report NotFound before the mode is considered.
            result = Stats.empty() if command.category in index else None
            return format_result(result, category=command.category)
        result = index.stats_by_category_and_time(command.category, command.mode, command.timestamp)
        return format_result(result, category=command.category)
    raise TypeError(f"Unsupported command: {command!r}")


def _handle_line(
    index: LogIndex,
    line_no: int,
    line: str,
    *,
    strict: bool,
    counter: _Counter,
) -> str | None:
    if not line.strip():
        logger.debug("Skipping blank line %d", line_no)
        return None
    try:
        command = parse_command(line, line_no=line_no)
    except CommandParseError as e:
        if strict:
            raise
        counter.skipped += 1
        logger.warning("Skipping malformed command: %s", e)
        return None
    counter.commands += 1
    return execute_command(index, command)


def iter_output_lines(
    index: LogIndex,
    lines: Iterable[str],
    *,
    strict: bool = False,
    counter: _Counter | None = None,
) -> Iterator[str]:
    """Yield the output line for every valid command in ``lines``."""
    counter = counter or _Counter()
    for line_no, line in enumerate(lines, start=1):
        out = _handle_line(index, line_no, line.rstrip("\r\n"), strict=strict, counter=counter)
        if out is not None:
            yield out


async def aiter_output_lines(
    index: LogIndex,
    lines: AsyncIterable[str],
    *,
    strict: bool = False,
    counter: _Counter | None = None,
) -> AsyncIterator[str]:
    """Async counterpart of iter_output_lines for file-backed sources."""
    counter = counter or _Counter()
    line_no = 0
    async for line in lines:
        line_no += 1
        out = _handle_line(index, line_no, line.rstrip("\r\n"), strict=strict, counter=counter)
        if out is not None:
            yield out


def run_commands(index: LogIndex, lines: Iterable[str], *, strict: bool = False) -> tuple[list[str], RunSummary]:
    """Run in-memory command lines; return outputs and counters."""
    counter = _Counter()
    outputs = list(iter_output_lines(index, lines, strict=strict, counter=counter))
    return outputs, counter.summary()


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a command file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def iter_command_file(
    input_path: str | Path,
    index: LogIndex,
    *,
    strict: bool = False,
    encoding: str = "utf-8",
    decode_errors: str = "strict",
    counter: _Counter | None = None,
) -> AsyncIterator[str]:
    """Yield output lines for every valid command in a (possibly gzipped) file."""
    path = Path(input_path)
    if not path.is_file():
        raise FileNotFoundError(f"Command file not found: {path}")

    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as src:
        async for out in aiter_output_lines(index, src, strict=strict, counter=counter):
            yield out


async def run_command_file(
    input_path: str | Path,
    output_path: str | Path | None,
    *,
    index: LogIndex | None = None,
    strict: bool = False,
    encoding: str = "utf-8",
    decode_errors: str = "strict",
) -> RunSummary:
    """Process a command file, writing results to ``output_path``.

    When ``output_path`` is None the outputs are discarded and only the index is updated.
    """
    index = index if index is not None else LogIndex()
    counter = _Counter()
    lines = iter_command_file(
        input_path,
        index,
        strict=strict,
        encoding=encoding,
        decode_errors=decode_errors,
        counter=counter,
    )

    if output_path is None:
        async for _ in lines:
            pass
    else:
        # Validate the input before truncating the output file.
        if not Path(input_path).is_file():
            raise FileNotFoundError(f"Command file not found: {input_path}")
        async with aiofiles.open(Path(output_path), mode="w", encoding=encoding) as dst:
            async for out in lines:
                await dst.write(out + "\n")

    summary = counter.summary()
    logger.info(
        "Processed %s: %d command(s), %d skipped, %d output line(s)",
        input_path,
        summary.commands,
        summary.skipped,
        summary.outputs,
    )
    return summary
