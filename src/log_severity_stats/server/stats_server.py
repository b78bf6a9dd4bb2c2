"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: ingest records and query min/max/mean severity
- Resources: category overview, result schema, sample commands
- Prompts: reusable templates for summarizing a category

Run locally (stdio):
    python -m log_severity_stats
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_severity_stats.core.config import configure_logging
from log_severity_stats.core.log_index import LogIndex
from log_severity_stats.prompts.registry import register_prompts
from log_severity_stats.resources.registry import register_resources
from log_severity_stats.tools.stats import (
    insert_log_impl,
    load_command_file_impl,
    run_commands_impl,
    stats_by_category_and_time_impl,
    stats_by_category_impl,
    stats_by_time_impl,
)

LOGGER = logging.getLogger(__name__)


def build_server(index: LogIndex | None = None) -> FastMCP:
    """Create an MCP server bound to ``index`` (a fresh one when omitted)."""
    index = index if index is not None else LogIndex()
    mcp = FastMCP("log-severity-stats", json_response=True)

    @mcp.tool()
    def insert_log(timestamp: int, category: str, severity: float) -> dict[str, Any]:
        """Ingest one record. Categories are case-sensitive and never normalized."""
        return insert_log_impl(index, timestamp=timestamp, category=category, severity=severity)

    @mcp.tool()
    def stats_by_category(category: str) -> dict[str, Any]:
        """Min/max/mean severity for one category; found=false if it was never inserted."""
        return stats_by_category_impl(index, category=category)

    @mcp.tool()
    def stats_by_time(mode: str, timestamp: int) -> dict[str, Any]:
        """Min/max/mean severity over records strictly BEFORE or AFTER a timestamp.

        Zero matches return count=0 with all statistics 0.0.
        """
        return stats_by_time_impl(index, mode=mode, timestamp=timestamp)

    @mcp.tool()
    def stats_by_category_and_time(category: str, mode: str, timestamp: int) -> dict[str, Any]:
        """Category and time filters combined; found=false only for unknown categories."""
        return stats_by_category_and_time_impl(index, category=category, mode=mode, timestamp=timestamp)

    @mcp.tool()
    def run_commands(commands: str, strict: bool = False) -> dict[str, Any]:
        """Run newline-separated commands (1 ts;cat;sev / 2 cat / 3 MODE ts / 4 MODE cat ts)."""
        return run_commands_impl(index, commands=commands, strict=strict)

    @mcp.tool()
    async def load_command_file(
        input_path: str,
        output_path: str | None = None,
        strict: bool = False,
    ) -> dict[str, Any]:
        """Run a command file (plain or .gz) located under LOG_STATS_BASE_DIR."""
        return await load_command_file_impl(
            index,
            input_path=input_path,
            output_path=output_path,
            strict=strict,
        )

    register_resources(mcp, index)
    register_prompts(mcp)
    return mcp


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    build_server().run(transport="stdio")


if __name__ == "__main__":
    main()
