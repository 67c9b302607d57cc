"""Exception hierarchy for adaptivemaps."""

from __future__ import annotations

from typing import Any

from adaptivemaps.contracts.events import EventKind


class AdaptiveMapsError(Exception):
    """Base exception for all adaptivemaps errors."""


class ConfigError(AdaptiveMapsError):
    """Configuration loading or validation failure."""


class RegistryError(AdaptiveMapsError):
    """Marker registry invariant failure."""

    def __init__(self, message: str, *, doc_id: Any) -> None:
        super().__init__(message)
        self.doc_id = doc_id


class DuplicateKeyError(RegistryError):
    """A document identity is already registered."""


class MarkerNotFoundError(RegistryError):
    """No marker is registered for a document identity."""


class ProtocolViolation(AdaptiveMapsError):
    """The upstream stream broke its per-key delivery order."""

    def __init__(self, message: str, *, doc_id: Any, kind: EventKind) -> None:
        super().__init__(message)
        self.doc_id = doc_id
        self.kind = kind


class TranslationError(AdaptiveMapsError):
    """A marker descriptor could not be translated for the target platform."""

    def __init__(self, message: str, *, doc_id: Any = None) -> None:
        super().__init__(message)
        self.doc_id = doc_id


class RasterizationError(AdaptiveMapsError):
    """A vector icon could not be rendered to a bitmap."""


class PlatformError(AdaptiveMapsError):
    """An underlying map engine call failed."""

    def __init__(self, message: str, *, doc_id: Any = None) -> None:
        super().__init__(message)
        self.doc_id = doc_id


class PlatformCapabilityError(PlatformError):
    """Platform lacks a required capability."""

    def __init__(self, message: str, *, capability: str) -> None:
        super().__init__(message)
        self.capability = capability
