"""Public API surface for adaptivemaps."""

__version__ = "0.1.0"

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
from adaptivemaps.contracts.platform import Platform, PlatformKind
from adaptivemaps.engine import EventChannel, MarkerRegistry, ReconciliationEngine, SubscriptionHandle, iter_events
from adaptivemaps.platforms import InMemoryPlatform, NativePlatform, WebPlatform, create_platform
from adaptivemaps.raster import Rasterizer
from adaptivemaps.sdk import AdaptiveMap, AdaptiveMaps, create_coordinate, initialize, load_config
from adaptivemaps.translate import FieldTranslator

__all__ = [
    "AdaptiveMap",
    "AdaptiveMaps",
    "AdaptiveMapsError",
    "Camera",
    "ConfigError",
    "Controls",
    "DuplicateKeyError",
    "EventChannel",
    "EventKind",
    "FieldTranslator",
    "Gestures",
    "Icon",
    "InMemoryPlatform",
    "LatLng",
    "MapOptions",
    "MapType",
    "MapsConfig",
    "MarkerDescriptor",
    "MarkerEvent",
    "MarkerNotFoundError",
    "MarkerRegistry",
    "NativePlatform",
    "Platform",
    "PlatformCapabilityError",
    "PlatformError",
    "PlatformKind",
    "Point",
    "ProtocolViolation",
    "RasterizationError",
    "Rasterizer",
    "ReconciliationEngine",
    "RegistryError",
    "Size",
    "SubscriptionHandle",
    "TranslationError",
    "WebPlatform",
    "create_coordinate",
    "create_platform",
    "initialize",
    "iter_events",
    "load_config",
]
