"""Structural types for the external map engines wrapped by platform adapters.

These describe the narrow slice of each engine the adapters call. Bindings to
a concrete engine implement them; nothing here is imported at runtime by the
engines themselves.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class WebMarker(Protocol):
    def set_options(self, options: dict[str, Any]) -> None: ...

    def set_map(self, map: Any) -> None: ...


class WebMap(Protocol):
    def set_center(self, lat_lng: Any) -> None: ...


class WebMapBackend(Protocol):
    """Browser map engine: markers carry vector icons natively."""

    async def load(self, options: dict[str, Any]) -> None: ...

    def create_map(self, container: Any, options: dict[str, Any]) -> WebMap: ...

    def create_marker(self, options: dict[str, Any]) -> WebMarker: ...

    def add_listener(self, target: Any, event: str, callback: Callable[..., Any]) -> Any: ...


class NativeMarker(Protocol):
    def set_icon(self, icon: dict[str, Any]) -> None: ...

    def set_info_window_anchor(self, x: float, y: float) -> None: ...

    def set_icon_anchor(self, x: float, y: float) -> None: ...

    def set_title(self, value: str) -> None: ...

    def set_snippet(self, value: str) -> None: ...

    def set_position(self, value: Any) -> None: ...

    def set_visible(self, value: bool) -> None: ...

    def set_draggable(self, value: bool) -> None: ...

    def set_rotation(self, value: float) -> None: ...

    def set_opacity(self, value: float) -> None: ...

    def set_flat(self, value: bool) -> None: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self) -> None: ...

    def add_event_listener(self, event: str, callback: Callable[..., Any]) -> None: ...


class NativeMap(Protocol):
    def set_options(self, options: dict[str, Any]) -> None: ...

    def set_div(self, container: Any) -> None: ...

    def set_center(self, lat_lng: Any) -> None: ...

    async def add_marker(self, fields: dict[str, Any]) -> NativeMarker: ...


class NativeMapBackend(Protocol):
    """Mobile map engine: a single native map view, icons must be bitmaps."""

    async def wait_ready(self) -> None: ...

    def get_map(self) -> NativeMap: ...
