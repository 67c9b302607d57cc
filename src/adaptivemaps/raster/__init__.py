"""Icon rasterization."""

from adaptivemaps.raster.rasterizer import PNG_DATA_URI_PREFIX, Rasterizer, build_svg, decode_data_uri

__all__ = ["PNG_DATA_URI_PREFIX", "Rasterizer", "build_svg", "decode_data_uri"]
