"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from log_severity_stats.core.config import BASE_DIR_ENV, base_dir
from log_severity_stats.core.log_index import LogIndex
from log_severity_stats.tools.stats import StatsResult

SAMPLE_COMMANDS = (
    "1 10;ERROR;5.0\n"
    "1 20;ERROR;3.0\n"
    "1 30;WARN;1.0\n"
    "2 ERROR\n"
    "3 BEFORE 25\n"
    "4 AFTER WARN 30\n"
    "2 INFO\n"
)


def register_resources(mcp: FastMCP, index: LogIndex) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-stats/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://log-stats/help\n"
            "- app://log-stats/categories\n"
            "- app://log-stats/schemas/stats-result\n"
            "- app://log-stats/examples/sample-commands\n"
            f"\nCommand files are resolved under {BASE_DIR_ENV}: {base_dir()}\n"
        )

    @mcp.resource("app://log-stats/categories")
    def categories() -> dict[str, Any]:
        """Return bucket sizes per category and the total record count."""
        return {"total_records": len(index), "categories": index.categories()}

    @mcp.resource("app://log-stats/schemas/stats-result")
    def stats_result_schema() -> dict[str, Any]:
        """Return the JSON schema for query results."""
        return StatsResult.model_json_schema()

    @mcp.resource("app://log-stats/examples/sample-commands")
    def sample_commands() -> str:
        """Return a tiny command file for demos and tests."""
        return SAMPLE_COMMANDS
