"""Marker registry and reconciliation engine."""

from adaptivemaps.engine.engine import ReconciliationEngine, Transform, identity_transform
from adaptivemaps.engine.registry import MarkerRegistry
from adaptivemaps.engine.stream import EventChannel, iter_events
from adaptivemaps.engine.subscription import SubscriptionHandle

__all__ = [
    "EventChannel",
    "MarkerRegistry",
    "ReconciliationEngine",
    "SubscriptionHandle",
    "Transform",
    "identity_transform",
    "iter_events",
]
