"""SDK composition root for adaptivemaps."""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Callable, Hashable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from adaptivemaps.contracts.config import MapsConfig
from adaptivemaps.contracts.exceptions import ConfigError
from adaptivemaps.contracts.marker import LatLng, MapOptions
from adaptivemaps.contracts.platform import ClickCallback, Platform
from adaptivemaps.engine.engine import EventStream, ReconciliationEngine, Transform
from adaptivemaps.engine.subscription import ErrorCallback, SubscriptionHandle
from adaptivemaps.platforms.factory import create_platform, get_platform_class
from adaptivemaps.raster.rasterizer import Rasterizer

logger = logging.getLogger(__name__)

ReadyCallback = Callable[["AdaptiveMaps"], Any]


def load_config(path: str | Path) -> MapsConfig:
    """Load and validate config from JSON."""
    config_path = Path(path).expanduser().resolve()
    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        return MapsConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def _coerce_config(config: MapsConfig | Mapping[str, Any] | None) -> MapsConfig:
    if config is None:
        return MapsConfig()
    if isinstance(config, MapsConfig):
        return config
    try:
        return MapsConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def _coerce_options(options: MapOptions | Mapping[str, Any] | None) -> MapOptions:
    if options is None:
        return MapOptions()
    if isinstance(options, MapOptions):
        return options
    try:
        return MapOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigError(f"invalid map options: {exc}") from exc


def create_coordinate(lat: float, lng: float) -> LatLng:
    return LatLng(lat=lat, lng=lng)


class AdaptiveMap:
    """One map instance and the markers reconciled onto it."""

    def __init__(self, platform: Platform, *, id_field: str = "_id") -> None:
        self._platform = platform
        self._engine = ReconciliationEngine(platform, id_field=id_field)
        self._subscriptions: list[SubscriptionHandle] = []

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def engine(self) -> ReconciliationEngine:
        return self._engine

    @property
    def subscriptions(self) -> list[SubscriptionHandle]:
        return list(self._subscriptions)

    def subscribe_markers(
        self,
        stream: EventStream,
        transform: Transform | None = None,
        on_click: ClickCallback | None = None,
        *,
        on_error: ErrorCallback | None = None,
    ) -> SubscriptionHandle:
        """Add, update and remove markers as *stream* delivers document events."""
        subscription = self._engine.subscribe(stream, transform, on_click, on_error=on_error)
        self._subscriptions.append(subscription)
        return subscription

    async def set_center(self, coordinate: LatLng) -> None:
        await self._platform.set_center(coordinate)

    def live_ids(self) -> list[Hashable]:
        return self._engine.registry.keys()

    async def clear_markers(self) -> list[Hashable]:
        """Remove every marker from the map. Subscriptions are left running."""
        return await self._engine.remove_all()


class AdaptiveMaps:
    """Loaded map library; creates maps on the configured platform."""

    def __init__(self, config: MapsConfig, *, backend: Any = None) -> None:
        self._config = config
        self._backend = backend
        self._rasterizer = Rasterizer(
            device_pixel_ratio=config.device_pixel_ratio,
            backing_store_ratio=config.backing_store_ratio,
        )

    @property
    def config(self) -> MapsConfig:
        return self._config

    @property
    def rasterizer(self) -> Rasterizer:
        return self._rasterizer

    async def load(self) -> None:
        platform_cls = get_platform_class(self._config.platform)
        await platform_cls.load_backend(self._backend, dict(self._config.library_options))
        logger.debug("map library ready on platform %s", self._config.platform)

    async def create_map(
        self,
        container: Any,
        options: MapOptions | Mapping[str, Any] | None = None,
        **platform_kwargs: Any,
    ) -> AdaptiveMap:
        """Create a map in *container* on the configured platform.

        Args:
            container: Engine-specific element the map is drawn into.
            options: Map options model or mapping (optional).
            **platform_kwargs: Additional platform-specific arguments.

        Returns:
            :class:`AdaptiveMap` bound to a new platform instance.

        Raises:
            ConfigError: If the options are invalid.
            PlatformCapabilityError: If the platform needs a backend and none was given.
        """
        platform = create_platform(
            self._config.platform,
            backend=self._backend,
            rasterizer=self._rasterizer,
            **platform_kwargs,
        )
        await platform.open_map(container, _coerce_options(options))
        return AdaptiveMap(platform, id_field=self._config.id_field)


async def initialize(
    config: MapsConfig | Mapping[str, Any] | ReadyCallback | None = None,
    ready_callback: ReadyCallback | None = None,
    *,
    backend: Any = None,
    defaults: Mapping[str, Any] | None = None,
) -> AdaptiveMaps:
    """Load the map library for the configured platform.

    *defaults* (shared application settings) sit underneath
    ``config.library_options``; explicit options win. *ready_callback* is
    called with the loaded :class:`AdaptiveMaps` once the engine is ready,
    and may be given as the only positional argument.

    Args:
        config: Config model or mapping, or the ready callback alone.
        ready_callback: Sync or async callable receiving the loaded library.
        backend: Map engine binding for the configured platform.
        defaults: Shared settings merged under ``library_options``.

    Returns:
        Loaded :class:`AdaptiveMaps`.

    Raises:
        ConfigError: If the config is invalid or names an unknown platform.
    """
    if callable(config) and not isinstance(config, Mapping) and ready_callback is None:
        ready_callback = config
        config = None
    resolved = _coerce_config(config)  # type: ignore[arg-type]
    if defaults:
        resolved = resolved.model_copy(update={"library_options": {**defaults, **resolved.library_options}})

    maps = AdaptiveMaps(resolved, backend=backend)
    await maps.load()
    if ready_callback is not None:
        result = ready_callback(maps)
        if inspect.isawaitable(result):
            await result
    return maps
