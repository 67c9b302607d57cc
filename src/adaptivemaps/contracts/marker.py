"""Platform-neutral marker and map option contracts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    """Geographic coordinate understood by every platform adapter."""

    lat: float = Field(ge=-90, le=90)
    lng: float

    model_config = {"frozen": True}


class Point(BaseModel):
    x: float
    y: float

    model_config = {"frozen": True}


class Size(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    model_config = {"frozen": True}


class Icon(BaseModel):
    """Vector icon definition.

    ``anchor`` is the rotation origin relative to the top left icon corner.
    ``size`` is required by platforms that rasterize icons.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    path: str | None = None
    fill_color: str | None = Field(default=None, alias="fillColor")
    size: Size | None = None
    anchor: Point | None = None
    rotation: float | None = None


class MarkerDescriptor(BaseModel):
    """Platform-neutral marker description produced by a caller transform.

    Only ``position`` is required. Unknown attributes are kept as
    pass-through styling for the underlying engine.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    position: LatLng
    icon: Icon | None = None
    anchor_point: Point | None = Field(default=None, alias="anchorPoint")
    title: str | None = None
    snippet: str | None = None
    draggable: bool | None = None
    visible: bool | None = None

    def to_fields(self) -> dict[str, Any]:
        """Dump to the engine field layout, keeping ``position`` as a :class:`LatLng`."""
        fields = self.model_dump(by_alias=True, exclude_none=True, exclude={"position"})
        fields["position"] = self.position
        return fields


class MapType(StrEnum):
    ROADMAP = "ROADMAP"
    HYBRID = "HYBRID"
    SATELLITE = "SATELLITE"
    TERRAIN = "TERRAIN"


class Camera(BaseModel):
    lat_lng: LatLng | None = None
    zoom: float | None = None
    tilt: float | None = None
    bearing: float | None = None


class Controls(BaseModel):
    zoom: bool | None = None
    compass: bool | None = None
    my_location_button: bool | None = None
    indoor_picker: bool | None = None


class Gestures(BaseModel):
    scroll: bool | None = None
    tilt: bool | None = None
    rotate: bool | None = None
    zoom: bool | None = None


class MapOptions(BaseModel):
    """Map construction options. Unrecognised keys are passed through untouched."""

    model_config = ConfigDict(extra="allow")

    map_type: MapType | None = None
    camera: Camera | None = None
    controls: Controls | None = None
    gestures: Gestures | None = None
    background_color: str | None = None

    def passthrough(self) -> dict[str, Any]:
        return dict(self.model_extra or {})
