"""Shared behaviour for platform adapters."""

from __future__ import annotations

from typing import Any

from adaptivemaps.contracts.marker import MarkerDescriptor
from adaptivemaps.contracts.platform import Platform
from adaptivemaps.raster.rasterizer import Rasterizer
from adaptivemaps.translate.translator import FieldTranslator


class TranslatingPlatform(Platform):
    """Platform whose field layout is produced by a :class:`FieldTranslator`."""

    def __init__(self, *, rasterizer: Rasterizer | None = None) -> None:
        self._translator = FieldTranslator(rasterizer)

    @property
    def translator(self) -> FieldTranslator:
        return self._translator

    async def translate_fields(self, descriptor: MarkerDescriptor) -> dict[str, Any]:
        return await self._translator.translate(descriptor, self.kind)
