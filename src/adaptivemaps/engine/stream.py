"""Push-stream adapters feeding the reconciliation engine."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable, Mapping
from typing import Any

from adaptivemaps.contracts.events import MarkerEvent

_CLOSED = object()


class EventChannel:
    """Ordered queue an external observer pushes document notifications into.

    Iterating the channel yields events in push order until :meth:`close`.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: MarkerEvent) -> None:
        if self._closed:
            raise RuntimeError("cannot push to a closed event channel")
        self._queue.put_nowait(event)

    def added(self, doc: Mapping[str, Any]) -> None:
        self.push(MarkerEvent.added(doc))

    def changed(self, doc: Mapping[str, Any]) -> None:
        self.push(MarkerEvent.changed(doc))

    def removed(self, doc: Mapping[str, Any]) -> None:
        self.push(MarkerEvent.removed(doc))

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[MarkerEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[MarkerEvent]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item


async def iter_events(events: Iterable[MarkerEvent]) -> AsyncIterator[MarkerEvent]:
    for event in events:
        yield event
