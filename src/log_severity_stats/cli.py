from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from log_severity_stats.core.commands import CommandParseError
from log_severity_stats.core.config import configure_logging
from log_severity_stats.core.driver import iter_command_file, run_command_file
from log_severity_stats.core.log_index import LogIndex

LOGGER = logging.getLogger(__name__)


async def _print_outputs(args: argparse.Namespace) -> None:
    async for line in iter_command_file(
        args.input_path,
        LogIndex(),
        strict=args.strict,
        encoding=args.encoding,
    ):
        print(line)


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Min/max/mean log severity from a command file.")
    p.add_argument("input_path", help="Command file (plain text or .gz)")
    p.add_argument("output_path", nargs="?", default="-", help="Output file (default: stdout)")
    p.add_argument("--strict", action="store_true", help="Fail on the first malformed command")
    p.add_argument("--encoding", default="utf-8", help="Text encoding for input and output")
    p.add_argument("--log-level", default=None, help="Logging level (default: $LOG_STATS_LOG_LEVEL or INFO)")

    args = p.parse_args(argv)
    configure_logging(args.log_level)
    LOGGER.debug("Running command file %s", args.input_path)

    try:
        if args.output_path == "-":
            asyncio.run(_print_outputs(args))
        else:
            asyncio.run(
                run_command_file(
                    args.input_path,
                    args.output_path,
                    index=LogIndex(),
                    strict=args.strict,
                    encoding=args.encoding,
                )
            )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (CommandParseError, UnicodeDecodeError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
