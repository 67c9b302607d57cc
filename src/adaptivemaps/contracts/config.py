"""Configuration contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MapsConfig(BaseModel):
    platform: str = "web"
    library_options: dict[str, Any] = Field(default_factory=dict)
    device_pixel_ratio: float = Field(default=1.0, gt=0)
    backing_store_ratio: float | None = Field(default=None, gt=0)
    id_field: str = "_id"

    model_config = {"frozen": True}
