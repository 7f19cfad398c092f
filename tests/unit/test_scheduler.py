"""Unit tests for the recurring scan scheduler."""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from lanwatch.config import ScheduleConfig
from lanwatch.db.store import MemoryStore, load_schedules
from lanwatch.events.bus import EventBus
from lanwatch.events.types import EventType
from lanwatch.models import ScanSchedule, ScanType
from lanwatch.scheduling.scheduler import ScanScheduler


class Clock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


class RecordingRunner:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.fail = fail

    async def __call__(self, schedule: ScanSchedule) -> None:
        self.calls.append(schedule.name)
        if self.fail:
            raise RuntimeError("scan blew up")


@pytest.fixture
def clock(now: datetime) -> Clock:
    return Clock(now)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


def _scheduler(runner, clock, store=None, **kwargs) -> ScanScheduler:
    return ScanScheduler(runner, store=store, clock=clock, **kwargs)


class TestLoad:
    @pytest.mark.asyncio
    async def test_seeds_defaults_once(self, runner, clock, memory_store: MemoryStore) -> None:
        defaults = [
            ScheduleConfig(name="Hourly Quick Scan", scan_type=ScanType.QUICK, interval_seconds=3600),
            ScheduleConfig(name="Daily Full Scan", scan_type=ScanType.FULL, interval_seconds=86400, enabled=False),
        ]
        scheduler = _scheduler(runner, clock, memory_store)
        schedules = await scheduler.load(defaults)
        assert [s.name for s in schedules] == ["Hourly Quick Scan", "Daily Full Scan"]
        assert schedules[0].next_run == clock() + timedelta(hours=1)
        assert not schedules[1].enabled

        saved = await load_schedules(memory_store)
        assert [s.id for s in saved] == [s.id for s in schedules]

        # A second load reads the saved list instead of reseeding
        again = await _scheduler(runner, clock, memory_store).load([ScheduleConfig(name="Other")])
        assert [s.id for s in again] == [s.id for s in schedules]

    @pytest.mark.asyncio
    async def test_without_store(self, runner, clock) -> None:
        scheduler = _scheduler(runner, clock)
        await scheduler.load([ScheduleConfig(name="Only")])
        assert [s.name for s in scheduler.schedules] == ["Only"]

    def test_invalid_interval(self, runner) -> None:
        with pytest.raises(ValueError):
            ScanScheduler(runner, check_interval=0)


class TestMutations:
    @pytest.mark.asyncio
    async def test_add_and_remove(self, runner, clock, memory_store: MemoryStore) -> None:
        scheduler = _scheduler(runner, clock, memory_store)
        schedule = await scheduler.add("Nightly", "full", interval_seconds=600)
        assert schedule.scan_type is ScanType.FULL
        assert schedule.next_run == clock() + timedelta(minutes=10)
        assert scheduler.get(schedule.id) == schedule
        assert len(await load_schedules(memory_store)) == 1

        assert await scheduler.remove(schedule.id)
        assert not await scheduler.remove(schedule.id)
        assert await load_schedules(memory_store) == []

    @pytest.mark.asyncio
    async def test_update_interval_reschedules(self, runner, clock) -> None:
        scheduler = _scheduler(runner, clock)
        schedule = await scheduler.add("Quick", interval_seconds=3600)
        updated = await scheduler.update(schedule.id, interval_seconds=120)
        assert updated.interval_seconds == 120
        assert updated.next_run == clock() + timedelta(minutes=2)
        assert scheduler.get(schedule.id).interval_seconds == 120

    @pytest.mark.asyncio
    async def test_update_unknown_and_invalid(self, runner, clock) -> None:
        scheduler = _scheduler(runner, clock)
        with pytest.raises(KeyError):
            await scheduler.update("missing", enabled=False)
        schedule = await scheduler.add("Quick")
        with pytest.raises(ValueError):
            await scheduler.update(schedule.id, interval_seconds=0)

    @pytest.mark.asyncio
    async def test_toggle_does_not_fire_backlog(self, runner, clock) -> None:
        scheduler = _scheduler(runner, clock)
        schedule = await scheduler.add("Quick", interval_seconds=60)
        disabled = await scheduler.toggle(schedule.id)
        assert not disabled.enabled

        clock.advance(hours=5)
        enabled = await scheduler.toggle(schedule.id)
        assert enabled.enabled
        assert enabled.next_run == clock() + timedelta(seconds=60)
        assert await scheduler.tick() == []


class TestTick:
    @pytest.mark.asyncio
    async def test_runs_due_schedules_in_order(self, runner, clock, memory_store: MemoryStore) -> None:
        scheduler = _scheduler(runner, clock, memory_store)
        slow = await scheduler.add("Slow", interval_seconds=600)
        fast = await scheduler.add("Fast", interval_seconds=60)
        await scheduler.add("Off", interval_seconds=30, enabled=False)

        clock.advance(minutes=1)
        assert await scheduler.tick() == [fast.id]

        clock.advance(minutes=10)
        executed = await scheduler.tick()
        assert executed == [fast.id, slow.id]
        assert runner.calls == ["Fast", "Fast", "Slow"]

        saved = {s.id: s for s in await load_schedules(memory_store)}
        assert saved[fast.id].last_run == clock()
        assert saved[fast.id].next_run == clock() + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_skips_while_scanning(self, runner, clock) -> None:
        scanning = True
        scheduler = _scheduler(runner, clock, is_scanning=lambda: scanning)
        schedule = await scheduler.add("Quick", interval_seconds=60)
        clock.advance(minutes=5)

        assert await scheduler.tick() == []
        assert runner.calls == []
        assert scheduler.get(schedule.id).last_run is None

        scanning = False
        assert await scheduler.tick() == [schedule.id]

    @pytest.mark.asyncio
    async def test_runner_failure_still_advances(self, clock) -> None:
        runner = RecordingRunner(fail=True)
        scheduler = _scheduler(runner, clock)
        schedule = await scheduler.add("Quick", interval_seconds=60)
        clock.advance(minutes=1)

        assert await scheduler.tick() == [schedule.id]
        assert scheduler.get(schedule.id).next_run == clock() + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_publishes_trigger_event(self, runner, clock, event_bus: EventBus) -> None:
        scheduler = _scheduler(runner, clock, event_bus=event_bus)
        schedule = await scheduler.add("Quick", interval_seconds=60)
        clock.advance(minutes=1)
        await scheduler.tick()

        events = event_bus.replay(0)
        assert [e["event_type"] for e in events] == [EventType.SCHEDULE_TRIGGERED]
        assert events[0]["payload"]["schedule_id"] == schedule.id


class TestLoop:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, runner, clock) -> None:
        scheduler = _scheduler(runner, clock, check_interval=0.01)
        await scheduler.add("Quick", interval_seconds=60)
        clock.advance(minutes=1)

        await scheduler.start()
        assert scheduler.is_running
        for _ in range(100):
            if runner.calls:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

        assert runner.calls == ["Quick"]
        assert not scheduler.is_running
