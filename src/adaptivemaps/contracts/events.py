"""Push-stream event contracts."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class EventKind(StrEnum):
    ADDED = "added"
    CHANGED = "changed"
    REMOVED = "removed"


class MarkerEvent(BaseModel):
    """One notification from the observed document collection."""

    kind: EventKind
    doc: dict[str, Any]

    model_config = {"frozen": True}

    @classmethod
    def added(cls, doc: Mapping[str, Any]) -> MarkerEvent:
        return cls(kind=EventKind.ADDED, doc=dict(doc))

    @classmethod
    def changed(cls, doc: Mapping[str, Any]) -> MarkerEvent:
        return cls(kind=EventKind.CHANGED, doc=dict(doc))

    @classmethod
    def removed(cls, doc: Mapping[str, Any]) -> MarkerEvent:
        return cls(kind=EventKind.REMOVED, doc=dict(doc))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MarkerEvent:
        """Parse a ``{"kind": ..., "doc": {...}}`` replay record."""
        return cls.model_validate(payload)
