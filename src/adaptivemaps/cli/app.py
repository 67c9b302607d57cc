"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import asyncio
import logging
import sys

from adaptivemaps.cli.commands.rasterize import run_rasterize
from adaptivemaps.cli.commands.replay import run_replay
from adaptivemaps.cli.parser import build_parser
from adaptivemaps.contracts.exceptions import AdaptiveMapsError, ConfigError, PlatformError


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "rasterize":
            run_rasterize(args)
        elif args.command == "replay":
            asyncio.run(run_replay(args))
        return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except PlatformError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except AdaptiveMapsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
