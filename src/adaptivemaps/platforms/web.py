"""Adapter for the browser map engine."""

from __future__ import annotations

import logging
from typing import Any

from adaptivemaps.contracts.backend import WebMap, WebMapBackend, WebMarker
from adaptivemaps.contracts.exceptions import PlatformError
from adaptivemaps.contracts.marker import LatLng, MapOptions
from adaptivemaps.contracts.platform import ClickCallback, PlatformKind
from adaptivemaps.platforms.base import TranslatingPlatform
from adaptivemaps.raster.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


def web_map_options(options: MapOptions) -> dict[str, Any]:
    """Flatten map options into the browser engine's option layout."""
    result = options.passthrough()
    if options.map_type is not None:
        result["mapTypeId"] = options.map_type.value
    if options.background_color is not None:
        result["backgroundColor"] = options.background_color
    if options.controls is not None and options.controls.zoom is not None:
        result["zoomControl"] = options.controls.zoom
    camera = options.camera
    if camera is not None:
        if camera.lat_lng is not None:
            result["center"] = camera.lat_lng
        if camera.zoom is not None:
            result["zoom"] = camera.zoom
        if camera.tilt is not None:
            result["tilt"] = camera.tilt
    return result


class WebPlatform(TranslatingPlatform):
    """Vector platform: icons and anchors reach the engine unchanged."""

    def __init__(self, *, backend: WebMapBackend, rasterizer: Rasterizer | None = None) -> None:
        super().__init__(rasterizer=rasterizer)
        self._backend = backend
        self._map: WebMap | None = None

    @classmethod
    async def load_backend(cls, backend: WebMapBackend, options: dict[str, Any]) -> None:
        await backend.load(options)

    @property
    def kind(self) -> PlatformKind:
        return PlatformKind.VECTOR

    async def open_map(self, container: Any, options: MapOptions) -> None:
        if self._map is None:
            self._map = self._backend.create_map(container, web_map_options(options))

    async def set_center(self, coordinate: LatLng) -> None:
        self._require_map().set_center(coordinate)

    async def create_marker(self, fields: dict[str, Any]) -> WebMarker:
        return self._backend.create_marker({**fields, "map": self._require_map()})

    async def update_marker(self, handle: WebMarker, fields: dict[str, Any]) -> None:
        handle.set_options({**fields, "map": self._require_map()})

    async def destroy_marker(self, handle: WebMarker) -> None:
        handle.set_map(None)

    async def on_click(self, handle: WebMarker, callback: ClickCallback) -> None:
        self._backend.add_listener(handle, "click", callback)

    def _require_map(self) -> WebMap:
        if self._map is None:
            raise PlatformError("map has not been opened")
        return self._map
