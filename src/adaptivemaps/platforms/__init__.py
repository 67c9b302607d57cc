"""Platform adapters and factory."""

from adaptivemaps.platforms.base import TranslatingPlatform
from adaptivemaps.platforms.factory import create_platform, get_platform_class, register
from adaptivemaps.platforms.memory import InMemoryMarker, InMemoryPlatform
from adaptivemaps.platforms.native import NativePlatform, native_map_options
from adaptivemaps.platforms.web import WebPlatform, web_map_options

__all__ = [
    "InMemoryMarker",
    "InMemoryPlatform",
    "NativePlatform",
    "TranslatingPlatform",
    "WebPlatform",
    "create_platform",
    "get_platform_class",
    "native_map_options",
    "register",
    "web_map_options",
]
