"""Vector icon rasterization.

Icons are rendered through cairosvg onto a surface whose physical size is the
logical icon size multiplied by the display density ratio, so bitmaps stay
sharp on high-density screens while the engine keeps placing them at their
logical size.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from xml.sax.saxutils import quoteattr

import cairosvg

from adaptivemaps.contracts.exceptions import RasterizationError
from adaptivemaps.contracts.marker import Size

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def _fmt(value: float) -> str:
    return f"{value:g}"


def build_svg(path: str, fill_color: str, size: Size) -> str:
    width = _fmt(size.width)
    height = _fmt(size.height)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}"><path d={quoteattr(path)} fill={quoteattr(fill_color)}/></svg>'
    )


class Rasterizer:
    """Stateless SVG path to PNG converter bound to one display density."""

    def __init__(self, *, device_pixel_ratio: float = 1.0, backing_store_ratio: float | None = None) -> None:
        if device_pixel_ratio <= 0:
            raise ValueError("device_pixel_ratio must be positive")
        if backing_store_ratio is not None and backing_store_ratio <= 0:
            raise ValueError("backing_store_ratio must be positive")
        self._device_pixel_ratio = device_pixel_ratio
        self._backing_store_ratio = backing_store_ratio or 1.0

    @property
    def ratio(self) -> float:
        return self._device_pixel_ratio / self._backing_store_ratio

    def pixel_size(self, size: Size) -> tuple[int, int]:
        # At least one physical pixel per side.
        return max(1, round(size.width * self.ratio)), max(1, round(size.height * self.ratio))

    def render_png(self, path: str, fill_color: str, size: Size) -> bytes:
        if not path or not fill_color:
            raise ValueError("rasterization requires both a path and a fill color")
        pixel_width, pixel_height = self.pixel_size(size)
        svg = build_svg(path, fill_color, size)
        try:
            png = cairosvg.svg2png(
                bytestring=svg.encode("utf-8"),
                output_width=pixel_width,
                output_height=pixel_height,
            )
        except Exception as exc:
            raise RasterizationError(f"failed to rasterize icon path {path!r}: {exc}") from exc
        if png is None:
            raise RasterizationError(f"rasterizer produced no output for icon path {path!r}")
        logger.debug("rasterized %sx%s icon at ratio %s", _fmt(size.width), _fmt(size.height), _fmt(self.ratio))
        return png

    def rasterize(self, path: str, fill_color: str, size: Size) -> str:
        """Render the filled *path* and return it as a PNG data URI."""
        png = self.render_png(path, fill_color, size)
        return PNG_DATA_URI_PREFIX + base64.b64encode(png).decode("ascii")

    async def rasterize_async(self, path: str, fill_color: str, size: Size) -> str:
        return await asyncio.to_thread(self.rasterize, path, fill_color, size)


def decode_data_uri(data_uri: str) -> bytes:
    if not data_uri.startswith(PNG_DATA_URI_PREFIX):
        raise ValueError("not a PNG data URI")
    return base64.b64decode(data_uri[len(PNG_DATA_URI_PREFIX) :])
