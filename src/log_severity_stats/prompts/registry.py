"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def summarize_category(category: str, timestamp: int | None = None) -> list[dict[str, Any]]:
        """Build a prompt that compares a category's severity before and after a timestamp."""
        if timestamp is None:
            steps = f'Call stats_by_category with category="{category}".'
        else:
            steps = (
                f'Call stats_by_category_and_time for category="{category}" with mode="BEFORE" '
                f'and mode="AFTER" at timestamp={timestamp}, then compare the two results.'
            )
        return [
            {
                "role": "system",
                "content": (
                    "You are a precise assistant summarizing log severity statistics. "
                    "A result with found=false means the category was never ingested. "
                    "A result with count=0 means nothing matched the time filter."
                ),
            },
            {
                "role": "user",
                "content": f"{steps} Report min, max and mean severity and note any shift.",
            },
        ]
