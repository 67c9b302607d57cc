"""Command-line interface for adaptivemaps."""

from __future__ import annotations

from adaptivemaps.cli.app import main as main
from adaptivemaps.cli.parser import build_parser as build_parser

__all__ = ["build_parser", "main"]

if __name__ == "__main__":
    raise SystemExit(main())
