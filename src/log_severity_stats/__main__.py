"""Module entrypoint.

Allows:
    python -m log_severity_stats
"""

from __future__ import annotations

from log_severity_stats.server.stats_server import main

if __name__ == "__main__":
    main()
