"""Adapter for the native mobile map engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from adaptivemaps.contracts.backend import NativeMap, NativeMapBackend, NativeMarker
from adaptivemaps.contracts.exceptions import PlatformError
from adaptivemaps.contracts.marker import LatLng, MapOptions
from adaptivemaps.contracts.platform import ClickCallback, PlatformKind
from adaptivemaps.platforms.base import TranslatingPlatform
from adaptivemaps.raster.rasterizer import Rasterizer

logger = logging.getLogger(__name__)

FieldSetter = Callable[[NativeMarker, Any, dict[str, Any]], None]


def _set_icon(marker: NativeMarker, value: Any, fields: dict[str, Any]) -> None:
    marker.set_icon({"url": value, "size": fields.get("size")})


def _set_info_window_anchor(marker: NativeMarker, value: Any, fields: dict[str, Any]) -> None:
    marker.set_info_window_anchor(value[0], value[1])


def _set_icon_anchor(marker: NativeMarker, value: Any, fields: dict[str, Any]) -> None:
    marker.set_icon_anchor(value["x"], value["y"])


def _named(method: str) -> FieldSetter:
    def setter(marker: NativeMarker, value: Any, fields: dict[str, Any]) -> None:
        getattr(marker, method)(value)

    return setter


# Fields created through add_marker that the engine only honours via setters.
_CREATE_SETTERS: dict[str, FieldSetter] = {
    "icon": _set_icon,
    "infoWindowAnchor": _set_info_window_anchor,
    "anchor": _set_icon_anchor,
}

_UPDATE_SETTERS: dict[str, FieldSetter] = {
    **_CREATE_SETTERS,
    "title": _named("set_title"),
    "snippet": _named("set_snippet"),
    "position": _named("set_position"),
    "visible": _named("set_visible"),
    "draggable": _named("set_draggable"),
    "rotation": _named("set_rotation"),
    "opacity": _named("set_opacity"),
    "flat": _named("set_flat"),
}

# Consumed by the icon setter.
_SKIPPED_FIELDS = frozenset({"size"})


def native_map_options(options: MapOptions) -> dict[str, Any]:
    """Render map options in the native engine's nested layout."""
    result = options.passthrough()
    if options.map_type is not None:
        result["mapTypeId"] = options.map_type.value
    if options.background_color is not None:
        result["backgroundColor"] = options.background_color
    if options.controls is not None:
        result["controls"] = {
            key: value
            for key, value in (
                ("zoom", options.controls.zoom),
                ("compass", options.controls.compass),
                ("myLocationButton", options.controls.my_location_button),
                ("indoorPicker", options.controls.indoor_picker),
            )
            if value is not None
        }
    if options.gestures is not None:
        result["gestures"] = options.gestures.model_dump(exclude_none=True)
    if options.camera is not None:
        camera = options.camera
        result["camera"] = {
            key: value
            for key, value in (
                ("latLng", camera.lat_lng),
                ("zoom", camera.zoom),
                ("tilt", camera.tilt),
                ("bearing", camera.bearing),
            )
            if value is not None
        }
    return result


def apply_native_field(marker: NativeMarker, key: str, value: Any, fields: dict[str, Any]) -> None:
    if key in _SKIPPED_FIELDS:
        return
    setter = _UPDATE_SETTERS.get(key)
    if setter is None:
        marker.set(key, value)
    else:
        setter(marker, value, fields)


class NativePlatform(TranslatingPlatform):
    """Rasterized platform: icons become PNG data URIs with top-left anchors."""

    def __init__(self, *, backend: NativeMapBackend, rasterizer: Rasterizer | None = None) -> None:
        super().__init__(rasterizer=rasterizer)
        self._backend = backend
        self._map: NativeMap | None = None

    @classmethod
    async def load_backend(cls, backend: NativeMapBackend, options: dict[str, Any]) -> None:
        if options:
            logger.debug("library options are ignored by the native engine: %s", sorted(options))
        await backend.wait_ready()

    @property
    def kind(self) -> PlatformKind:
        return PlatformKind.RASTERIZED

    async def open_map(self, container: Any, options: MapOptions) -> None:
        native_map = self._map or self._backend.get_map()
        native_map.set_options(native_map_options(options))
        native_map.set_div(container)
        self._map = native_map

    async def set_center(self, coordinate: LatLng) -> None:
        self._require_map().set_center(coordinate)

    async def create_marker(self, fields: dict[str, Any]) -> NativeMarker:
        marker = await self._require_map().add_marker(fields)
        try:
            for key, setter in _CREATE_SETTERS.items():
                if key in fields:
                    setter(marker, fields[key], fields)
        except Exception:
            marker.remove()
            raise
        return marker

    async def update_marker(self, handle: NativeMarker, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            apply_native_field(handle, key, value, fields)

    async def destroy_marker(self, handle: NativeMarker) -> None:
        handle.remove()

    async def on_click(self, handle: NativeMarker, callback: ClickCallback) -> None:
        handle.add_event_listener("click", callback)

    def _require_map(self) -> NativeMap:
        if self._map is None:
            raise PlatformError("map has not been opened")
        return self._map
