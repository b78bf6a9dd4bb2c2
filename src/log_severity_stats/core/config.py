"""Environment-driven settings shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_LEVEL_ENV = "LOG_STATS_LOG_LEVEL"
BASE_DIR_ENV = "LOG_STATS_BASE_DIR"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(name: str | None = None) -> int:
    """Map a level name (or LOG_STATS_LOG_LEVEL) to a logging level; unknown names mean INFO."""
    level_name = (name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(name: str | None = None) -> None:
    """Configure a reasonable default logging setup on stderr."""
    logging.basicConfig(level=resolve_log_level(name), format=LOG_FORMAT)


def base_dir() -> Path:
    """Return the resolved base directory for file-based tools."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p
