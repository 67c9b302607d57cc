"""Public contracts for adaptivemaps."""

from adaptivemaps.contracts.config import MapsConfig
from adaptivemaps.contracts.events import EventKind, MarkerEvent
from adaptivemaps.contracts.exceptions import (
    AdaptiveMapsError,
    ConfigError,
    DuplicateKeyError,
    MarkerNotFoundError,
    PlatformCapabilityError,
    PlatformError,
    ProtocolViolation,
    RasterizationError,
    RegistryError,
    TranslationError,
)
from adaptivemaps.contracts.marker import (
    Camera,
    Controls,
    Gestures,
    Icon,
    LatLng,
    MapOptions,
    MapType,
    MarkerDescriptor,
    Point,
    Size,
)
from adaptivemaps.contracts.platform import ClickCallback, MarkerHandle, Platform, PlatformKind

__all__ = [
    "AdaptiveMapsError",
    "Camera",
    "ClickCallback",
    "ConfigError",
    "Controls",
    "DuplicateKeyError",
    "EventKind",
    "Gestures",
    "Icon",
    "LatLng",
    "MapOptions",
    "MapType",
    "MapsConfig",
    "MarkerDescriptor",
    "MarkerEvent",
    "MarkerHandle",
    "MarkerNotFoundError",
    "Platform",
    "PlatformCapabilityError",
    "PlatformError",
    "PlatformKind",
    "Point",
    "ProtocolViolation",
    "RasterizationError",
    "RegistryError",
    "Size",
    "TranslationError",
]
