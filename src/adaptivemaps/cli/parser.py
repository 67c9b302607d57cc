"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("adaptivemaps")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="adaptivemaps")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    raster_parser = subparsers.add_parser("rasterize", help="Render an SVG path icon to PNG")
    raster_parser.add_argument("--path", required=True, help="SVG path data")
    raster_parser.add_argument("--fill", required=True, help="Fill color")
    raster_parser.add_argument("--width", type=float, required=True, help="Logical icon width")
    raster_parser.add_argument("--height", type=float, required=True, help="Logical icon height")
    raster_parser.add_argument("--ratio", type=float, default=1.0, help="Device pixel ratio (default: 1)")
    raster_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the PNG to this file instead of printing a data URI",
    )
    raster_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    replay_parser = subparsers.add_parser("replay", help="Replay a JSON-lines marker event log")
    replay_parser.add_argument("events", help="Path to a .jsonl file of {kind, doc} records")
    replay_parser.add_argument(
        "--platform",
        choices=["vector", "rasterized"],
        default="vector",
        help="Field layout to translate markers into (default: vector)",
    )
    replay_parser.add_argument("--config", default=None, help="Path to an adaptivemaps JSON config")
    replay_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
