"""Rasterize command."""

from __future__ import annotations

import argparse
from pathlib import Path

from adaptivemaps.contracts.exceptions import ConfigError
from adaptivemaps.contracts.marker import Size
from adaptivemaps.raster.rasterizer import Rasterizer


def run_rasterize(args: argparse.Namespace) -> str:
    try:
        size = Size(width=args.width, height=args.height)
        rasterizer = Rasterizer(device_pixel_ratio=args.ratio)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    if args.output is None:
        data_uri = rasterizer.rasterize(args.path, args.fill, size)
        print(data_uri)
        return data_uri

    output = Path(args.output)
    output.write_bytes(rasterizer.render_png(args.path, args.fill, size))
    width, height = rasterizer.pixel_size(size)
    print(f"wrote {width}x{height} PNG to {output}")
    return str(output)


__all__ = ["run_rasterize"]
