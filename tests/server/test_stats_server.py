from __future__ import annotations

import pytest

from log_severity_stats.core.log_index import LogIndex
from log_severity_stats.server.stats_server import build_server


@pytest.mark.asyncio
async def test_build_server_registers_tools() -> None:
    mcp = build_server(LogIndex())

    tools = {t.name for t in await mcp.list_tools()}

    assert {
        "insert_log",
        "stats_by_category",
        "stats_by_time",
        "stats_by_category_and_time",
        "run_commands",
        "load_command_file",
    } <= tools


@pytest.mark.asyncio
async def test_build_server_registers_resources() -> None:
    mcp = build_server(LogIndex())

    uris = {str(r.uri) for r in await mcp.list_resources()}

    assert "app://log-stats/categories" in uris
    assert "app://log-stats/help" in uris
