"""Reconciliation of a document push-stream with on-map markers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Awaitable, Callable, Hashable, Iterable, Mapping
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from adaptivemaps.contracts.events import EventKind, MarkerEvent
from adaptivemaps.contracts.exceptions import PlatformError, ProtocolViolation, TranslationError
from adaptivemaps.contracts.marker import MarkerDescriptor
from adaptivemaps.contracts.platform import ClickCallback, Platform
from adaptivemaps.engine.registry import MarkerRegistry
from adaptivemaps.engine.stream import iter_events
from adaptivemaps.engine.subscription import ErrorCallback, SubscriptionHandle
from adaptivemaps.translate.translator import coerce_descriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")
Transform = Callable[[dict[str, Any]], MarkerDescriptor | Mapping[str, Any]]
EventStream = AsyncIterable[MarkerEvent] | Iterable[MarkerEvent]

_REPORTED = (ProtocolViolation, TranslationError, PlatformError)


def identity_transform(doc: dict[str, Any]) -> dict[str, Any]:
    return doc


class ReconciliationEngine:
    """Keeps one map's markers in step with add/change/remove notifications.

    Each document identity moves between two states, absent and live. Events
    for the same identity are applied strictly in delivery order; a per-key
    lock keeps that true when several subscriptions feed the same map.
    """

    def __init__(self, platform: Platform, *, id_field: str = "_id", registry: MarkerRegistry | None = None) -> None:
        self._platform = platform
        self._id_field = id_field
        self._registry = registry if registry is not None else MarkerRegistry()
        self._key_locks: dict[Hashable, asyncio.Lock] = {}
        self._key_users: dict[Hashable, int] = {}

    @property
    def registry(self) -> MarkerRegistry:
        return self._registry

    @property
    def platform(self) -> Platform:
        return self._platform

    def subscribe(
        self,
        stream: EventStream,
        transform: Transform | None = None,
        on_click: ClickCallback | None = None,
        *,
        on_error: ErrorCallback | None = None,
    ) -> SubscriptionHandle:
        subscription = SubscriptionHandle(self._registry, on_error=on_error)
        events = stream if isinstance(stream, AsyncIterable) else iter_events(stream)
        subscription._start(self._consume(subscription, events, transform or identity_transform, on_click))
        return subscription

    async def _consume(
        self,
        subscription: SubscriptionHandle,
        events: AsyncIterable[MarkerEvent],
        transform: Transform,
        on_click: ClickCallback | None,
    ) -> None:
        iterator = aiter(events)
        while not subscription.stopped:
            subscription._mark_waiting(True)
            try:
                event = await anext(iterator)
            except StopAsyncIteration:
                break
            finally:
                subscription._mark_waiting(False)
            if subscription.stopped:
                break
            try:
                await self.apply(event, transform, on_click)
            except _REPORTED as exc:
                await subscription._report(exc)

    async def apply(
        self,
        event: MarkerEvent,
        transform: Transform = identity_transform,
        on_click: ClickCallback | None = None,
    ) -> None:
        """Apply one event, raising the per-document error if it cannot be applied."""
        doc_id = self._doc_id(event)
        async with self._key_lock(doc_id):
            if event.kind is EventKind.ADDED:
                await self._added(doc_id, event.doc, transform, on_click)
            elif event.kind is EventKind.CHANGED:
                await self._changed(doc_id, event.doc, transform)
            else:
                await self._removed(doc_id)

    async def _added(
        self,
        doc_id: Hashable,
        doc: dict[str, Any],
        transform: Transform,
        on_click: ClickCallback | None,
    ) -> None:
        if doc_id in self._registry:
            raise ProtocolViolation(
                f"duplicate add for live marker {doc_id!r}; keeping the existing marker",
                doc_id=doc_id,
                kind=EventKind.ADDED,
            )
        fields = await self._translate(doc_id, doc, transform)
        marker = await self._platform_call(self._platform.create_marker(fields), "create", doc_id)
        self._registry.insert(doc_id, marker)
        logger.debug("marker %r added", doc_id)
        if on_click is not None:
            await self._platform_call(self._platform.on_click(marker, on_click), "attach click handler to", doc_id)

    async def _changed(self, doc_id: Hashable, doc: dict[str, Any], transform: Transform) -> None:
        if doc_id not in self._registry:
            raise ProtocolViolation(f"change for unknown marker {doc_id!r}", doc_id=doc_id, kind=EventKind.CHANGED)
        fields = await self._translate(doc_id, doc, transform)
        marker = self._registry.get(doc_id)
        await self._platform_call(self._platform.update_marker(marker, fields), "update", doc_id)
        logger.debug("marker %r changed", doc_id)

    async def _removed(self, doc_id: Hashable) -> None:
        if doc_id not in self._registry:
            raise ProtocolViolation(f"remove for unknown marker {doc_id!r}", doc_id=doc_id, kind=EventKind.REMOVED)
        marker = self._registry.get(doc_id)
        await self._platform_call(self._platform.destroy_marker(marker), "destroy", doc_id)
        self._registry.remove(doc_id)
        logger.debug("marker %r removed", doc_id)

    async def remove_all(self) -> list[Hashable]:
        """Destroy every live marker, returning the identities that were removed."""
        removed: list[Hashable] = []
        for doc_id in self._registry:
            async with self._key_lock(doc_id):
                if doc_id not in self._registry:
                    continue
                await self._removed(doc_id)
                removed.append(doc_id)
        return removed

    def _doc_id(self, event: MarkerEvent) -> Hashable:
        doc_id = event.doc.get(self._id_field)
        if doc_id is None:
            raise ProtocolViolation(
                f"{event.kind} event without a {self._id_field!r} identity field",
                doc_id=None,
                kind=event.kind,
            )
        try:
            hash(doc_id)
        except TypeError:
            raise ProtocolViolation(f"unhashable document identity {doc_id!r}", doc_id=None, kind=event.kind) from None
        return doc_id

    async def _translate(self, doc_id: Hashable, doc: dict[str, Any], transform: Transform) -> dict[str, Any]:
        try:
            raw = transform(doc)
        except TranslationError:
            raise
        except Exception as exc:
            raise TranslationError(f"marker transform failed for {doc_id!r}: {exc}", doc_id=doc_id) from exc
        try:
            descriptor = coerce_descriptor(raw)
            return await self._platform.translate_fields(descriptor)
        except TranslationError as exc:
            if exc.doc_id is None:
                exc.doc_id = doc_id
            raise

    async def _platform_call(self, call: Awaitable[T], action: str, doc_id: Hashable) -> T:
        try:
            return await call
        except PlatformError as exc:
            if exc.doc_id is None:
                exc.doc_id = doc_id
            raise
        except Exception as exc:
            raise PlatformError(f"failed to {action} marker {doc_id!r}: {exc}", doc_id=doc_id) from exc

    @asynccontextmanager
    async def _key_lock(self, doc_id: Hashable):  # type: ignore[no-untyped-def]
        lock = self._key_locks.get(doc_id)
        if lock is None:
            lock = self._key_locks[doc_id] = asyncio.Lock()
        self._key_users[doc_id] = self._key_users.get(doc_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._key_users[doc_id] -= 1
            if self._key_users[doc_id] == 0:
                del self._key_users[doc_id]
                del self._key_locks[doc_id]
