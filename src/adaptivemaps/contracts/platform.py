"""Platform adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import StrEnum
from types import TracebackType
from typing import Any

from adaptivemaps.contracts.marker import LatLng, MapOptions, MarkerDescriptor

MarkerHandle = Any
ClickCallback = Callable[..., Any]


class PlatformKind(StrEnum):
    VECTOR = "vector"
    RASTERIZED = "rasterized"


class Platform(ABC):
    """Capability set the reconciliation engine drives.

    One instance is bound to one map. Marker handles returned by
    :meth:`create_marker` are opaque to every caller.
    """

    @classmethod
    async def load_backend(cls, backend: Any, options: dict[str, Any]) -> None:
        """Load the underlying map library before any map is created."""
        return None

    async def __aenter__(self) -> Platform:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @property
    @abstractmethod
    def kind(self) -> PlatformKind: ...  # pragma: no cover

    @abstractmethod
    async def open_map(self, container: Any, options: MapOptions) -> None: ...  # pragma: no cover

    @abstractmethod
    async def set_center(self, coordinate: LatLng) -> None: ...  # pragma: no cover

    @abstractmethod
    async def translate_fields(self, descriptor: MarkerDescriptor) -> dict[str, Any]: ...  # pragma: no cover

    @abstractmethod
    async def create_marker(self, fields: dict[str, Any]) -> MarkerHandle: ...  # pragma: no cover

    @abstractmethod
    async def update_marker(self, handle: MarkerHandle, fields: dict[str, Any]) -> None: ...  # pragma: no cover

    @abstractmethod
    async def destroy_marker(self, handle: MarkerHandle) -> None: ...  # pragma: no cover

    @abstractmethod
    async def on_click(self, handle: MarkerHandle, callback: ClickCallback) -> None: ...  # pragma: no cover
