"""Tests for the in-memory event bus."""
from __future__ import annotations

import asyncio

import pytest

from lanwatch.events.bus import EventBus
from lanwatch.events.types import EventType


class TestEventBus:
    @pytest.mark.asyncio
    async def test_publish_assigns_increasing_seq(self, event_bus: EventBus) -> None:
        first = await event_bus.publish(EventType.SCAN_STARTED, {"subnet": "10.0.0"})
        second = await event_bus.publish(EventType.SCAN_COMPLETE, {"subnet": "10.0.0"})
        assert second == first + 1
        assert event_bus.latest_seq == second

    @pytest.mark.asyncio
    async def test_subscriber_receives_matching_events(self, event_bus: EventBus) -> None:
        received: list[dict] = []

        async def on_event(event: dict) -> None:
            received.append(event)

        event_bus.subscribe([EventType.DEVICE_DISCOVERED], on_event)
        await event_bus.publish(EventType.SCAN_STARTED, {})
        await event_bus.publish(EventType.DEVICE_DISCOVERED, {"ip_address": "10.0.0.5"})
        await asyncio.sleep(0)

        assert [e["event_type"] for e in received] == [EventType.DEVICE_DISCOVERED]
        assert received[0]["payload"] == {"ip_address": "10.0.0.5"}

    @pytest.mark.asyncio
    async def test_wildcard_and_unsubscribe(self, event_bus: EventBus) -> None:
        received: list[str] = []

        async def on_event(event: dict) -> None:
            received.append(event["event_type"])

        sub = event_bus.subscribe(["*"], on_event)
        await event_bus.publish(EventType.SCAN_PROGRESS, {})
        await asyncio.sleep(0)
        event_bus.unsubscribe(sub)
        await event_bus.publish(EventType.SCAN_COMPLETE, {})
        await asyncio.sleep(0)

        assert received == [EventType.SCAN_PROGRESS]

    @pytest.mark.asyncio
    async def test_replay_is_bounded(self) -> None:
        bus = EventBus(history_size=3)
        for i in range(5):
            await bus.publish(EventType.SCAN_PROGRESS, {"i": i})
        replayed = bus.replay(0)
        assert [e["payload"]["i"] for e in replayed] == [2, 3, 4]
        assert [e["payload"]["i"] for e in bus.replay(4)] == [4]

    @pytest.mark.asyncio
    async def test_failing_subscriber_is_isolated(self, event_bus: EventBus) -> None:
        received: list[int] = []

        async def broken(event: dict) -> None:
            raise RuntimeError("subscriber bug")

        async def healthy(event: dict) -> None:
            received.append(event["seq"])

        event_bus.subscribe(["*"], broken)
        event_bus.subscribe([EventType.SCAN_COMPLETE], healthy)
        seq = await event_bus.publish(EventType.SCAN_COMPLETE, {})

        assert received == [seq]

    def test_history_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            EventBus(history_size=0)
