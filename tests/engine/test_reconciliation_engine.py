from __future__ import annotations

import asyncio
import random
from typing import Any

import pytest

from adaptivemaps.contracts.events import EventKind, MarkerEvent
from adaptivemaps.contracts.exceptions import AdaptiveMapsError, PlatformError, ProtocolViolation, TranslationError
from adaptivemaps.contracts.platform import PlatformKind
from adaptivemaps.engine.engine import ReconciliationEngine
from adaptivemaps.engine.stream import EventChannel
from adaptivemaps.platforms.memory import InMemoryMarker, InMemoryPlatform


def _doc(doc_id: str, **extra: Any) -> dict[str, Any]:
    return {"_id": doc_id, "position": {"lat": 1.0, "lng": 2.0}, **extra}


async def _settle() -> None:
    for _ in range(20):
        await asyncio.sleep(0)


class CreateRecordingPlatform(InMemoryPlatform):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.created: list[InMemoryMarker] = []
        self.updates: list[tuple[str, dict[str, Any]]] = []

    async def create_marker(self, fields: dict[str, Any]) -> InMemoryMarker:
        marker = await super().create_marker(fields)
        self.created.append(marker)
        return marker

    async def update_marker(self, handle: InMemoryMarker, fields: dict[str, Any]) -> None:
        self.updates.append((handle.id, fields))
        await super().update_marker(handle, fields)


class FailingPlatform(InMemoryPlatform):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.fail_create_for: set[str] = set()
        self.fail_destroy = False

    async def create_marker(self, fields: dict[str, Any]) -> InMemoryMarker:
        if fields.get("title") in self.fail_create_for:
            raise RuntimeError("engine rejected marker")
        return await super().create_marker(fields)

    async def destroy_marker(self, handle: InMemoryMarker) -> None:
        if self.fail_destroy:
            raise PlatformError("detach failed")
        await super().destroy_marker(handle)


class GatedPlatform(InMemoryPlatform):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.gate = asyncio.Event()
        self.entered = asyncio.Event()

    async def create_marker(self, fields: dict[str, Any]) -> InMemoryMarker:
        self.entered.set()
        await self.gate.wait()
        return await super().create_marker(fields)


@pytest.mark.asyncio
async def test_order_preservation_keeps_original_handle() -> None:
    platform = CreateRecordingPlatform()
    engine = ReconciliationEngine(platform)
    events = [
        MarkerEvent.added(_doc("A", title="a1")),
        MarkerEvent.added(_doc("B")),
        MarkerEvent.changed(_doc("A", title="a2")),
        MarkerEvent.removed(_doc("B")),
        MarkerEvent.changed(_doc("A", title="a3")),
    ]

    subscription = engine.subscribe(events)
    await subscription.wait()

    assert subscription.errors == []
    assert engine.registry.keys() == ["A"]
    assert engine.registry.get("A") is platform.created[0]
    assert engine.registry.get("A").get("title") == "a3"
    assert [marker_id for marker_id, _ in platform.updates] == ["marker-1", "marker-1"]


@pytest.mark.asyncio
async def test_duplicate_add_is_reported_and_first_marker_kept() -> None:
    platform = CreateRecordingPlatform()
    engine = ReconciliationEngine(platform)

    subscription = engine.subscribe(
        [MarkerEvent.added(_doc("A", title="first")), MarkerEvent.added(_doc("A", title="second"))]
    )
    await subscription.wait()

    assert len(platform.created) == 1
    assert engine.registry.keys() == ["A"]
    assert engine.registry.get("A") is platform.created[0]
    assert engine.registry.get("A").get("title") == "first"
    [error] = subscription.errors
    assert isinstance(error, ProtocolViolation)
    assert error.doc_id == "A"
    assert error.kind is EventKind.ADDED


@pytest.mark.asyncio
async def test_apply_raises_protocol_violation_on_duplicate_add() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())
    await engine.apply(MarkerEvent.added(_doc("A")))

    with pytest.raises(ProtocolViolation):
        await engine.apply(MarkerEvent.added(_doc("A")))

    assert len(engine.registry) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", [EventKind.CHANGED, EventKind.REMOVED])
async def test_events_for_absent_key_are_reported_and_processing_continues(kind: EventKind) -> None:
    engine = ReconciliationEngine(InMemoryPlatform())
    events = [MarkerEvent(kind=kind, doc=_doc("ghost")), MarkerEvent.added(_doc("A"))]

    subscription = engine.subscribe(events)
    await subscription.wait()

    assert engine.registry.keys() == ["A"]
    [error] = subscription.errors
    assert isinstance(error, ProtocolViolation)
    assert error.kind is kind
    assert error.doc_id == "ghost"


@pytest.mark.asyncio
async def test_event_without_identity_is_a_protocol_violation() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())

    with pytest.raises(ProtocolViolation, match="identity"):
        await engine.apply(MarkerEvent.added({"position": {"lat": 0, "lng": 0}}))


@pytest.mark.asyncio
async def test_custom_identity_field() -> None:
    engine = ReconciliationEngine(InMemoryPlatform(), id_field="key")

    await engine.apply(MarkerEvent.added({"key": 7, "position": {"lat": 0, "lng": 0}}))

    assert engine.registry.keys() == [7]


@pytest.mark.asyncio
async def test_transform_builds_descriptor_from_document() -> None:
    platform = InMemoryPlatform()
    engine = ReconciliationEngine(platform)

    def transform(doc: dict[str, Any]) -> dict[str, Any]:
        return {"title": doc["name"], "position": {"lat": doc["lat"], "lng": doc["lon"]}, "foo": doc["bar"]}

    subscription = engine.subscribe(
        [MarkerEvent.added({"_id": "x", "name": "Cafe", "lat": 59.3, "lon": 18.1, "bar": "baz"})],
        transform,
    )
    await subscription.wait()

    marker = engine.registry.get("x")
    assert marker.get("title") == "Cafe"
    assert marker.get("foo") == "baz"
    assert marker.get("position").lat == 59.3


@pytest.mark.asyncio
async def test_click_handler_is_attached_to_every_marker() -> None:
    clicked: list[str] = []
    engine = ReconciliationEngine(InMemoryPlatform())

    subscription = engine.subscribe(
        [MarkerEvent.added(_doc("A", title="a")), MarkerEvent.added(_doc("B", title="b"))],
        on_click=lambda marker: clicked.append(marker.get("title")),
    )
    await subscription.wait()
    engine.registry.get("B").click()
    engine.registry.get("A").click()

    assert clicked == ["b", "a"]


@pytest.mark.asyncio
async def test_translation_error_skips_document_and_continues() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())
    events = [MarkerEvent.added({"_id": "bad", "title": "no position"}), MarkerEvent.added(_doc("good"))]

    subscription = engine.subscribe(events)
    await subscription.wait()

    assert engine.registry.keys() == ["good"]
    [error] = subscription.errors
    assert isinstance(error, TranslationError)
    assert error.doc_id == "bad"


@pytest.mark.asyncio
async def test_transform_exception_is_wrapped_as_translation_error() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())

    def transform(doc: dict[str, Any]) -> dict[str, Any]:
        raise KeyError("lat")

    with pytest.raises(TranslationError) as exc_info:
        await engine.apply(MarkerEvent.added(_doc("A")), transform)

    assert exc_info.value.doc_id == "A"
    assert "A" not in engine.registry


@pytest.mark.asyncio
async def test_failed_change_leaves_marker_untouched() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())
    await engine.apply(MarkerEvent.added(_doc("A", title="kept")))

    with pytest.raises(TranslationError):
        await engine.apply(MarkerEvent.changed({"_id": "A", "title": "lost"}))

    assert engine.registry.get("A").get("title") == "kept"


@pytest.mark.asyncio
async def test_failed_create_does_not_register() -> None:
    platform = FailingPlatform()
    platform.fail_create_for = {"boom"}
    engine = ReconciliationEngine(platform)

    subscription = engine.subscribe([MarkerEvent.added(_doc("A", title="boom")), MarkerEvent.added(_doc("B"))])
    await subscription.wait()

    assert engine.registry.keys() == ["B"]
    [error] = subscription.errors
    assert isinstance(error, PlatformError)
    assert error.doc_id == "A"
    assert "engine rejected marker" in str(error)


@pytest.mark.asyncio
async def test_failed_destroy_keeps_registry_entry() -> None:
    platform = FailingPlatform()
    engine = ReconciliationEngine(platform)
    await engine.apply(MarkerEvent.added(_doc("A")))
    platform.fail_destroy = True

    with pytest.raises(PlatformError) as exc_info:
        await engine.apply(MarkerEvent.removed(_doc("A")))

    assert exc_info.value.doc_id == "A"
    assert engine.registry.keys() == ["A"]


@pytest.mark.asyncio
async def test_on_error_callback_receives_reported_errors() -> None:
    seen: list[AdaptiveMapsError] = []

    async def on_error(error: AdaptiveMapsError) -> None:
        seen.append(error)

    engine = ReconciliationEngine(InMemoryPlatform())
    subscription = engine.subscribe([MarkerEvent.removed(_doc("ghost"))], on_error=on_error)
    await subscription.wait()

    assert seen == subscription.errors
    assert isinstance(seen[0], ProtocolViolation)


@pytest.mark.asyncio
async def test_raising_error_callback_does_not_end_subscription() -> None:
    def on_error(error: AdaptiveMapsError) -> None:
        raise RuntimeError("error hook failed")

    engine = ReconciliationEngine(InMemoryPlatform())
    subscription = engine.subscribe(
        [MarkerEvent.removed(_doc("ghost")), MarkerEvent.added(_doc("A"))],
        on_error=on_error,
    )
    await subscription.wait()

    assert "A" in engine.registry
    assert len(subscription.errors) == 1


@pytest.mark.asyncio
async def test_unhashable_identity_is_reported_and_processing_continues() -> None:
    engine = ReconciliationEngine(InMemoryPlatform())
    events = [MarkerEvent.added({**_doc("x"), "_id": ("a", ["b"])}), MarkerEvent.added(_doc("A"))]

    subscription = engine.subscribe(events)
    await subscription.wait()

    assert engine.registry.keys() == ["A"]
    [error] = subscription.errors
    assert isinstance(error, ProtocolViolation)
    assert "unhashable" in str(error)


@pytest.mark.asyncio
async def test_stop_halts_future_events_and_keeps_markers() -> None:
    platform = InMemoryPlatform()
    engine = ReconciliationEngine(platform)
    channel = EventChannel()
    subscription = engine.subscribe(channel)

    channel.added(_doc("A"))
    await _settle()
    subscription.stop()
    await subscription.wait()
    channel.added(_doc("B"))
    channel.close()

    assert not subscription.active
    assert engine.registry.keys() == ["A"]
    assert len(platform.markers) == 1


@pytest.mark.asyncio
async def test_stop_lets_in_flight_event_finish() -> None:
    platform = GatedPlatform()
    engine = ReconciliationEngine(platform)
    channel = EventChannel()
    subscription = engine.subscribe(channel)

    channel.added(_doc("A"))
    channel.added(_doc("B"))
    await platform.entered.wait()
    subscription.stop()
    platform.gate.set()
    await subscription.wait()

    assert engine.registry.keys() == ["A"]


@pytest.mark.asyncio
async def test_same_key_events_wait_for_pending_create() -> None:
    platform = GatedPlatform()
    engine = ReconciliationEngine(platform)

    add = asyncio.create_task(engine.apply(MarkerEvent.added(_doc("A", title="v1"))))
    await platform.entered.wait()
    change = asyncio.create_task(engine.apply(MarkerEvent.changed(_doc("A", title="v2"))))
    await _settle()
    assert not change.done()

    platform.gate.set()
    await asyncio.gather(add, change)

    assert engine.registry.get("A").get("title") == "v2"


@pytest.mark.asyncio
async def test_remove_all_destroys_every_marker() -> None:
    platform = InMemoryPlatform()
    engine = ReconciliationEngine(platform)
    for doc_id in ("A", "B"):
        await engine.apply(MarkerEvent.added(_doc(doc_id)))

    removed = await engine.remove_all()

    assert removed == ["A", "B"]
    assert len(engine.registry) == 0
    assert platform.markers == {}


@pytest.mark.asyncio
async def test_rasterized_platform_creates_bitmap_markers() -> None:
    platform = InMemoryPlatform(kind=PlatformKind.RASTERIZED)
    engine = ReconciliationEngine(platform)
    doc = _doc(
        "A",
        icon={"path": "M0 0 H10 V10 H0 Z", "fillColor": "#000", "size": {"width": 10, "height": 10}},
        anchorPoint={"x": 0, "y": -5},
    )

    await engine.apply(MarkerEvent.added(doc))

    marker = engine.registry.get("A")
    assert marker.get("icon").startswith("data:image/png;base64,")
    assert marker.get("infoWindowAnchor") == [5, 0]


def _random_stream(seed: int, keys: int, length: int) -> tuple[list[MarkerEvent], set[str]]:
    rng = random.Random(seed)
    live: set[str] = set()
    events: list[MarkerEvent] = []
    for _ in range(length):
        key = f"k{rng.randrange(keys)}"
        if key in live:
            if rng.random() < 0.5:
                events.append(MarkerEvent.changed(_doc(key, title=str(rng.random()))))
            else:
                events.append(MarkerEvent.removed(_doc(key)))
                live.discard(key)
        else:
            events.append(MarkerEvent.added(_doc(key)))
            live.add(key)
    return events, live


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(5))
async def test_registry_matches_net_added_identities(seed: int) -> None:
    platform = InMemoryPlatform()
    engine = ReconciliationEngine(platform)
    events, expected = _random_stream(seed, keys=6, length=60)

    subscription = engine.subscribe(events)
    await subscription.wait()

    assert subscription.errors == []
    assert set(engine.registry.keys()) == expected
    assert {marker.id for marker in platform.markers.values()} == {engine.registry.get(k).id for k in expected}
