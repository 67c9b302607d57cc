"""Handle returned by marker subscriptions."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Coroutine, Hashable
from typing import Any

from adaptivemaps.contracts.exceptions import AdaptiveMapsError
from adaptivemaps.engine.registry import MarkerRegistry

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[AdaptiveMapsError], Any]


class SubscriptionHandle:
    """Controls one stream subscription.

    Stopping only affects events not yet taken from the stream. Work already
    in flight completes, and markers already on the map stay there.
    """

    def __init__(self, registry: MarkerRegistry, *, on_error: ErrorCallback | None = None) -> None:
        self._registry = registry
        self._on_error = on_error
        self._task: asyncio.Task[None] | None = None
        self._stopped = False
        self._waiting_for_event = False
        self.errors: list[AdaptiveMapsError] = []

    @property
    def active(self) -> bool:
        return not self._stopped and self._task is not None and not self._task.done()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def live_ids(self) -> list[Hashable]:
        return self._registry.keys()

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        logger.debug("subscription stopped")
        if self._task is not None and self._waiting_for_event:
            self._task.cancel()

    async def wait(self) -> None:
        """Block until the stream is exhausted or the stop request takes effect."""
        if self._task is not None:
            await asyncio.wait({self._task})

    def _start(self, consumer: Coroutine[Any, Any, None]) -> None:
        self._task = asyncio.get_running_loop().create_task(consumer)

    def _mark_waiting(self, waiting: bool) -> None:
        self._waiting_for_event = waiting

    async def _report(self, error: AdaptiveMapsError) -> None:
        self.errors.append(error)
        logger.warning("%s: %s", type(error).__name__, error)
        if self._on_error is None:
            return
        try:
            result = self._on_error(error)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("on_error callback failed for %s", type(error).__name__)
