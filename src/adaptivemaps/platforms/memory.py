"""In-memory platform for headless use and event replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from adaptivemaps.contracts.exceptions import PlatformError
from adaptivemaps.contracts.marker import LatLng, MapOptions
from adaptivemaps.contracts.platform import ClickCallback, PlatformKind
from adaptivemaps.platforms.base import TranslatingPlatform
from adaptivemaps.raster.rasterizer import Rasterizer


@dataclass(eq=False)
class InMemoryMarker:
    """Marker record kept by :class:`InMemoryPlatform`."""

    id: str
    fields: dict[str, Any]
    click_handlers: list[ClickCallback] = field(default_factory=list)
    removed: bool = False

    def get(self, key: str) -> Any:
        return self.fields.get(key)

    def click(self) -> None:
        for handler in list(self.click_handlers):
            handler(self)


class InMemoryPlatform(TranslatingPlatform):
    """Platform that renders nothing, keeps markers in a dict and logs every call in ``calls``."""

    def __init__(
        self,
        *,
        backend: Any = None,
        rasterizer: Rasterizer | None = None,
        kind: PlatformKind = PlatformKind.VECTOR,
    ) -> None:
        super().__init__(rasterizer=rasterizer)
        self._kind = PlatformKind(kind)
        self._counter = 0
        self.markers: dict[str, InMemoryMarker] = {}
        self.container: Any = None
        self.map_options: MapOptions | None = None
        self.center: LatLng | None = None
        self.calls: list[tuple[str, Any]] = []

    @property
    def kind(self) -> PlatformKind:
        return self._kind

    async def open_map(self, container: Any, options: MapOptions) -> None:
        self.calls.append(("open_map", container))
        self.container = container
        self.map_options = options
        if options.camera is not None and options.camera.lat_lng is not None:
            self.center = options.camera.lat_lng

    async def set_center(self, coordinate: LatLng) -> None:
        self.calls.append(("set_center", coordinate))
        self.center = coordinate

    async def create_marker(self, fields: dict[str, Any]) -> InMemoryMarker:
        self._counter += 1
        marker = InMemoryMarker(id=f"marker-{self._counter}", fields=dict(fields))
        self.calls.append(("create_marker", marker.id))
        self.markers[marker.id] = marker
        return marker

    async def update_marker(self, handle: InMemoryMarker, fields: dict[str, Any]) -> None:
        self.calls.append(("update_marker", handle.id))
        self._require_live(handle).fields.update(fields)

    async def destroy_marker(self, handle: InMemoryMarker) -> None:
        self.calls.append(("destroy_marker", handle.id))
        marker = self._require_live(handle)
        marker.removed = True
        del self.markers[marker.id]

    async def on_click(self, handle: InMemoryMarker, callback: ClickCallback) -> None:
        self.calls.append(("on_click", handle.id))
        self._require_live(handle).click_handlers.append(callback)

    def _require_live(self, handle: InMemoryMarker) -> InMemoryMarker:
        marker = self.markers.get(handle.id)
        if marker is None or marker is not handle:
            raise PlatformError(f"Marker not found: {handle.id}")
        return marker
