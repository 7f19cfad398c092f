"""Recurring scan scheduler.

Holds a list of ``ScanSchedule`` entries, persists them through a
``KeyValueStore`` and, when started, checks once per ``check_interval``
for schedules whose ``next_run`` has passed. Due schedules run one at a
time through the injected runner; a tick that finds a scan already in
progress skips without touching any schedule, so the next tick retries.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Iterable

from lanwatch.config import ScheduleConfig
from lanwatch.db.store import KeyValueStore, load_schedules, save_schedules
from lanwatch.events.bus import EventBus
from lanwatch.events.types import EventType
from lanwatch.models import ScanSchedule, ScanType, utcnow

logger = logging.getLogger(__name__)

ScanRunner = Callable[[ScanSchedule], Awaitable[Any]]


class ScanScheduler:
    """Runs scans on recurring schedules.

    Parameters
    ----------
    runner:
        Coroutine function that performs one scan for a schedule.
    store:
        Where schedules are persisted. Mutations are saved immediately.
    check_interval:
        Seconds between due-schedule checks while started.
    is_scanning:
        Returns True while a scan (scheduled or manual) is in progress.
    event_bus:
        Receives ``schedule.triggered`` events when provided.
    clock:
        Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        runner: ScanRunner,
        store: KeyValueStore | None = None,
        check_interval: float = 60.0,
        is_scanning: Callable[[], bool] | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if check_interval <= 0:
            raise ValueError("check_interval must be positive")
        self._runner = runner
        self._store = store
        self._check_interval = check_interval
        self._is_scanning = is_scanning or (lambda: False)
        self._bus = event_bus
        self._clock = clock
        self._schedules: list[ScanSchedule] = []
        self._running_tick = False
        self._task: asyncio.Task[None] | None = None
        self._shutdown = asyncio.Event()

    @property
    def schedules(self) -> list[ScanSchedule]:
        return list(self._schedules)

    @property
    def is_running(self) -> bool:
        """Whether the background loop is active."""
        return self._task is not None and not self._task.done()

    def get(self, schedule_id: str) -> ScanSchedule | None:
        for schedule in self._schedules:
            if schedule.id == schedule_id:
                return schedule
        return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def load(self, defaults: Iterable[ScheduleConfig] = ()) -> list[ScanSchedule]:
        """Load saved schedules, seeding from *defaults* on first use."""
        saved = await load_schedules(self._store) if self._store is not None else None
        if saved is None:
            now = self._clock()
            self._schedules = [
                ScanSchedule(
                    name=cfg.name,
                    scan_type=cfg.scan_type,
                    interval_seconds=cfg.interval_seconds,
                    enabled=cfg.enabled,
                    next_run=now + _seconds(cfg.interval_seconds),
                )
                for cfg in defaults
            ]
            await self._persist()
            logger.info("Seeded %d default schedules", len(self._schedules))
        else:
            self._schedules = saved
            logger.info("Loaded %d schedules", len(saved))
        return self.schedules

    async def _persist(self) -> None:
        if self._store is not None:
            await save_schedules(self._store, self._schedules)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(
        self,
        name: str,
        scan_type: ScanType | str = ScanType.QUICK,
        interval_seconds: int = 3600,
        enabled: bool = True,
    ) -> ScanSchedule:
        """Create a schedule whose first run is one interval from now."""
        schedule = ScanSchedule(
            name=name,
            scan_type=ScanType(scan_type),
            interval_seconds=interval_seconds,
            enabled=enabled,
            next_run=self._clock() + _seconds(interval_seconds),
        )
        self._schedules.append(schedule)
        await self._persist()
        logger.info("Added schedule %r every %ds", name, interval_seconds)
        return schedule

    async def remove(self, schedule_id: str) -> bool:
        before = len(self._schedules)
        self._schedules = [s for s in self._schedules if s.id != schedule_id]
        removed = len(self._schedules) != before
        if removed:
            await self._persist()
        return removed

    async def update(self, schedule_id: str, **changes: Any) -> ScanSchedule:
        """Replace fields of a schedule.

        Changing ``interval_seconds`` reschedules the next run relative to
        the last run (or now, if it has never run).

        Raises
        ------
        KeyError:
            If no schedule has *schedule_id*.
        ValueError:
            If the changes do not validate.
        """
        current = self.get(schedule_id)
        if current is None:
            raise KeyError(schedule_id)
        data = current.model_dump()
        data.update(changes)
        if "interval_seconds" in changes and "next_run" not in changes:
            base = current.last_run or self._clock()
            data["next_run"] = base + _seconds(int(changes["interval_seconds"]))
        updated = ScanSchedule.model_validate(data)
        self._schedules = [updated if s.id == schedule_id else s for s in self._schedules]
        await self._persist()
        return updated

    async def toggle(self, schedule_id: str) -> ScanSchedule:
        """Flip ``enabled``. Re-enabling never fires a backlog of missed runs."""
        current = self.get(schedule_id)
        if current is None:
            raise KeyError(schedule_id)
        changes: dict[str, Any] = {"enabled": not current.enabled}
        now = self._clock()
        if changes["enabled"] and current.next_run is not None and current.next_run < now:
            changes["next_run"] = now + _seconds(current.interval_seconds)
        return await self.update(schedule_id, **changes)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def due_schedules(self, now: datetime | None = None) -> list[ScanSchedule]:
        now = now or self._clock()
        due = [s for s in self._schedules if s.is_due(now)]
        return sorted(due, key=lambda s: s.next_run)

    async def tick(self, now: datetime | None = None) -> list[str]:
        """Run every due schedule once, sequentially.

        Returns the ids of the schedules that ran. Nothing runs while
        another scan is in progress.
        """
        if self._running_tick or self._is_scanning():
            logger.debug("Scan in progress, skipping schedule check")
            return []
        now = now or self._clock()
        executed: list[str] = []
        self._running_tick = True
        try:
            for schedule in self.due_schedules(now):
                logger.info("Running scheduled scan %r (%s)", schedule.name, schedule.scan_type.value)
                if self._bus is not None:
                    await self._bus.publish(
                        EventType.SCHEDULE_TRIGGERED,
                        {"schedule_id": schedule.id, "name": schedule.name, "scan_type": schedule.scan_type.value},
                    )
                try:
                    await self._runner(schedule)
                except Exception:
                    logger.exception("Scheduled scan %r failed", schedule.name)
                schedule.mark_run(self._clock())
                executed.append(schedule.id)
            if executed:
                await self._persist()
        finally:
            self._running_tick = False
        return executed

    async def start(self) -> None:
        """Start the periodic check loop as a background task."""
        if self.is_running:
            return
        self._shutdown.clear()
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Scan scheduler started (check every %.0fs)", self._check_interval)

    async def stop(self) -> None:
        self._shutdown.set()
        if self._task is not None:
            try:
                await asyncio.wait_for(self._task, timeout=10)
            except (asyncio.TimeoutError, asyncio.CancelledError):
                pass
            self._task = None
        logger.info("Scan scheduler stopped")

    async def _run_loop(self) -> None:
        while not self._shutdown.is_set():
            try:
                await self.tick()
            except Exception:
                logger.exception("Schedule check failed")
            try:
                await asyncio.wait_for(self._shutdown.wait(), timeout=self._check_interval)
                break
            except asyncio.TimeoutError:
                pass


def _seconds(value: int) -> timedelta:
    return timedelta(seconds=value)
