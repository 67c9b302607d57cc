"""Factory for creating platform adapters by name."""

from __future__ import annotations

from typing import Any

from adaptivemaps.contracts.exceptions import ConfigError, PlatformCapabilityError
from adaptivemaps.contracts.platform import Platform
from adaptivemaps.platforms.memory import InMemoryPlatform
from adaptivemaps.platforms.native import NativePlatform
from adaptivemaps.platforms.web import WebPlatform
from adaptivemaps.raster.rasterizer import Rasterizer

_REGISTRY: dict[str, type[Platform]] = {
    "web": WebPlatform,
    "native": NativePlatform,
    "memory": InMemoryPlatform,
}

# Platforms that cannot run without an engine binding.
_REQUIRES_BACKEND: set[str] = {"web", "native"}


def register(name: str, platform_cls: type[Platform], *, requires_backend: bool = True) -> None:
    """Register a platform adapter class under *name*."""
    _REGISTRY[name] = platform_cls
    if requires_backend:
        _REQUIRES_BACKEND.add(name)
    else:
        _REQUIRES_BACKEND.discard(name)


def get_platform_class(name: str) -> type[Platform]:
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ConfigError(f"Unknown platform: {name!r}. Available: {available}") from None


def create_platform(
    name: str,
    *,
    backend: Any = None,
    rasterizer: Rasterizer | None = None,
    **kwargs: Any,
) -> Platform:
    """Create a platform adapter bound to *backend*.

    Args:
        name: Platform name (must be registered, e.g. "web").
        backend: Map engine binding the adapter drives (optional for "memory").
        rasterizer: Rasterizer for icon bitmaps (optional).
        **kwargs: Additional platform-specific arguments.

    Returns:
        Platform instance (async context manager).

    Raises:
        ConfigError: If the platform name is not registered.
        PlatformCapabilityError: If the platform needs an engine binding and none was given.
    """
    platform_cls = get_platform_class(name)
    if backend is None and name in _REQUIRES_BACKEND:
        raise PlatformCapabilityError(f"platform {name!r} requires a map engine backend", capability="backend")
    return platform_cls(backend=backend, rasterizer=rasterizer, **kwargs)  # type: ignore[call-arg]
