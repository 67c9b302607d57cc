"""Replay command: push a recorded event log through the engine."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adaptivemaps.contracts.config import MapsConfig
from adaptivemaps.contracts.events import MarkerEvent
from adaptivemaps.contracts.exceptions import AdaptiveMapsError, ConfigError
from adaptivemaps.contracts.platform import PlatformKind
from adaptivemaps.sdk import AdaptiveMap, initialize, load_config


def read_events(path: str | Path) -> list[MarkerEvent]:
    events_path = Path(path)
    events: list[MarkerEvent] = []
    try:
        lines = events_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise ConfigError(f"failed reading event log: {events_path}") from exc
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            events.append(MarkerEvent.from_dict(json.loads(line)))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ConfigError(f"{events_path}:{number}: invalid event record: {exc}") from exc
    return events


def format_replay_tables(adaptive_map: AdaptiveMap, errors: list[AdaptiveMapsError]) -> list[Table]:
    markers = Table(title="Live markers")
    markers.add_column("Document")
    markers.add_column("Marker")
    markers.add_column("Position")
    markers.add_column("Title")
    registry = adaptive_map.engine.registry
    for doc_id in registry:
        marker = registry.get(doc_id)
        position = marker.get("position")
        where = f"{position.lat:.6f}, {position.lng:.6f}" if position is not None else "-"
        markers.add_row(str(doc_id), marker.id, where, str(marker.get("title") or ""))

    tables = [markers]
    if errors:
        problems = Table(title="Reported errors")
        problems.add_column("Kind")
        problems.add_column("Message")
        for error in errors:
            problems.add_row(type(error).__name__, str(error))
        tables.append(problems)
    return tables


async def run_replay(args: argparse.Namespace) -> AdaptiveMap:
    config = load_config(args.config) if args.config else MapsConfig()
    config = config.model_copy(update={"platform": "memory"})
    events = read_events(args.events)

    maps = await initialize(config)
    adaptive_map = await maps.create_map(None, kind=PlatformKind(args.platform))
    subscription = adaptive_map.subscribe_markers(events)
    await subscription.wait()

    console = Console()
    for table in format_replay_tables(adaptive_map, subscription.errors):
        console.print(table)
    console.print(f"{len(adaptive_map.live_ids())} live marker(s), {len(subscription.errors)} error(s)")
    return adaptive_map


__all__ = ["format_replay_tables", "read_events", "run_replay"]
