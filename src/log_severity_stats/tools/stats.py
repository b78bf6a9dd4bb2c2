"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into LogIndex calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from log_severity_stats.core.config import safe_resolve
from log_severity_stats.core.driver import run_command_file, run_commands
from log_severity_stats.core.formatting import NO_OUTPUT, format_result, format_stats
from log_severity_stats.core.log_index import LogIndex
from log_severity_stats.core.models import Stats, TimeMode

MAX_INLINE_COMMANDS = 10_000


class StatsResult(BaseModel):
    found: bool = Field(description="False only when the category was never inserted.")
    category: str | None = Field(default=None, description="Category filter, if any.")
    mode: TimeMode | None = Field(default=None, description="BEFORE or AFTER, if time-filtered.")
    timestamp: int | None = Field(default=None, description="Exclusive time threshold, if any.")
    min: float | None = Field(default=None, description="Minimum severity.")
    max: float | None = Field(default=None, description="Maximum severity.")
    mean: float | None = Field(default=None, description="Arithmetic mean severity.")
    count: int = Field(default=0, ge=0, description="Number of matching records.")
    line: str = Field(description="Rendered output line.")


def _parse_mode(mode: str) -> TimeMode:
    name = mode.strip().upper()
    try:
        return TimeMode(name)
    except ValueError as e:
        raise ValueError(f"Unknown mode '{mode}'. Valid values: BEFORE, AFTER.") from e


def _to_result(
    stats: Stats | None,
    *,
    line: str,
    category: str | None = None,
    mode: TimeMode | None = None,
    timestamp: int | None = None,
) -> dict[str, Any]:
    if stats is None:
        res = StatsResult(found=False, category=category, mode=mode, timestamp=timestamp, line=line)
    else:
        res = StatsResult(
            found=True,
            category=category,
            mode=mode,
            timestamp=timestamp,
            min=stats.min,
            max=stats.max,
            mean=stats.mean,
            count=stats.count,
            line=line,
        )
    return res.model_dump()


def insert_log_impl(index: LogIndex, *, timestamp: int, category: str, severity: float) -> dict[str, Any]:
    index.insert(timestamp, category, severity)
    return {"line": NO_OUTPUT, "total_records": len(index)}


def stats_by_category_impl(index: LogIndex, *, category: str) -> dict[str, Any]:
    stats = index.stats_by_category(category)
    return _to_result(stats, line=format_result(stats, category=category), category=category)


def stats_by_time_impl(index: LogIndex, *, mode: str, timestamp: int) -> dict[str, Any]:
    tm = _parse_mode(mode)
    stats = index.stats_by_time(tm, timestamp)
    return _to_result(stats, line=format_stats(stats), mode=tm, timestamp=timestamp)


def stats_by_category_and_time_impl(
    index: LogIndex,
    *,
    category: str,
    mode: str,
    timestamp: int,
) -> dict[str, Any]:
    tm = _parse_mode(mode)
    stats = index.stats_by_category_and_time(category, tm, timestamp)
    return _to_result(
        stats,
        line=format_result(stats, category=category),
        category=category,
        mode=tm,
        timestamp=timestamp,
    )


def run_commands_impl(
    index: LogIndex,
    *,
    commands: str | Sequence[str],
    strict: bool = False,
) -> dict[str, Any]:
    """Run command lines given inline (newline-separated text or a list)."""
    lines = commands.splitlines() if isinstance(commands, str) else list(commands)
    if len(lines) > MAX_INLINE_COMMANDS:
        raise ValueError(f"Too many commands ({len(lines)}); limit is {MAX_INLINE_COMMANDS}.")
    outputs, summary = run_commands(index, lines, strict=strict)
    return {
        "lines": outputs,
        "commands": summary.commands,
        "skipped": summary.skipped,
    }


async def load_command_file_impl(
    index: LogIndex,
    *,
    input_path: str,
    output_path: str | None = None,
    strict: bool = False,
) -> dict[str, Any]:
    """Run a command file from within LOG_STATS_BASE_DIR against the shared index."""
    src = safe_resolve(input_path)
    dst = safe_resolve(output_path) if output_path else None
    summary = await run_command_file(src, dst, index=index, strict=strict)
    return {
        "input_path": str(src),
        "output_path": str(dst) if dst is not None else None,
        "commands": summary.commands,
        "skipped": summary.skipped,
        "outputs": summary.outputs,
        "total_records": len(index),
    }
