"""Platform field translation for marker descriptors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from adaptivemaps.contracts.exceptions import RasterizationError, TranslationError
from adaptivemaps.contracts.marker import MarkerDescriptor, Point, Size
from adaptivemaps.contracts.platform import PlatformKind
from adaptivemaps.raster.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


def coerce_descriptor(value: MarkerDescriptor | Mapping[str, Any]) -> MarkerDescriptor:
    if isinstance(value, MarkerDescriptor):
        return value
    if not isinstance(value, Mapping):
        raise TranslationError(f"marker transform must return a mapping, got {type(value).__name__}")
    try:
        return MarkerDescriptor.model_validate(dict(value))
    except ValidationError as exc:
        raise TranslationError(f"invalid marker descriptor: {exc}") from exc


def tooltip_anchor(anchor_point: Point, size: Size) -> list[float]:
    """Convert a center-relative tooltip offset to a top-left-relative one."""
    return [anchor_point.x + size.width / 2, anchor_point.y + size.height / 2]


class FieldTranslator:
    """Maps a :class:`MarkerDescriptor` onto the field layout of one platform kind.

    Vector platforms understand icon paths natively and receive the descriptor
    as-is. Rasterized platforms need the icon as a PNG data URI plus its size,
    and measure tooltip anchors from the icon's top left corner.
    """

    def __init__(self, rasterizer: Rasterizer | None = None) -> None:
        self._rasterizer = rasterizer or Rasterizer()

    @property
    def rasterizer(self) -> Rasterizer:
        return self._rasterizer

    async def translate(self, descriptor: MarkerDescriptor, kind: PlatformKind) -> dict[str, Any]:
        if kind is PlatformKind.VECTOR:
            return descriptor.to_fields()
        return await self._translate_rasterized(descriptor)

    async def _translate_rasterized(self, descriptor: MarkerDescriptor) -> dict[str, Any]:
        defaults = descriptor.to_fields()
        icon = descriptor.icon
        if icon is None:
            return defaults

        fields: dict[str, Any] = {}
        size = icon.size
        if descriptor.anchor_point is not None and size is not None:
            fields["infoWindowAnchor"] = tooltip_anchor(descriptor.anchor_point, size)
            defaults.pop("anchorPoint", None)

        if icon.path and icon.fill_color:
            if size is None:
                raise TranslationError("icon.size is required to rasterize an icon")
            try:
                fields["icon"] = await self._rasterizer.rasterize_async(icon.path, icon.fill_color, size)
            except RasterizationError as exc:
                raise TranslationError(str(exc)) from exc
            fields["size"] = {"width": size.width, "height": size.height}
        else:
            logger.warning("icon without path or fill color cannot be rasterized; using the default marker icon")
            defaults.pop("icon", None)

        if icon.anchor is not None:
            fields["anchor"] = {"x": icon.anchor.x, "y": icon.anchor.y}
        if icon.rotation:
            fields["rotation"] = icon.rotation

        for key, value in defaults.items():
            fields.setdefault(key, value)
        return fields
