"""Longitudinal device uptime tracking.

One observation is recorded per device per scan cycle. Each device's log is
a ring buffer: once ``max_observations`` is reached the oldest entries are
dropped silently. Uptime percentage, reliability and downtime events are
computed from the log on demand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Mapping

from lanwatch.models import (
    DowntimeEvent,
    Reliability,
    UptimeObservation,
    UptimeRecord,
    utcnow,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UptimeStatistics:
    total_devices: int
    average_uptime: float
    excellent_count: int
    unstable_count: int
    most_reliable: tuple[str, float] | None
    least_reliable: tuple[str, float] | None


class UptimeTracker:
    """Keyed store of per-device uptime records.

    Parameters
    ----------
    max_observations:
        Ring-buffer capacity per device.
    records:
        Previously persisted records to resume from.
    clock:
        Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        max_observations: int = 1000,
        records: Mapping[str, UptimeRecord] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if max_observations < 1:
            raise ValueError("max_observations must be >= 1")
        self._capacity = max_observations
        self._clock = clock
        self._records: dict[str, UptimeRecord] = {}
        for device_id, record in (records or {}).items():
            self._records[device_id] = record
            self._trim(record)

    def _trim(self, record: UptimeRecord) -> None:
        overflow = len(record.observations) - self._capacity
        if overflow > 0:
            del record.observations[:overflow]

    # -- Updates --------------------------------------------------------------

    def update(self, device_id: str, fn: Callable[[UptimeRecord], None]) -> UptimeRecord:
        """Mutate the record for *device_id* in place, creating it if needed."""
        record = self._records.get(device_id)
        if record is None:
            record = UptimeRecord(device_id=device_id)
            self._records[device_id] = record
        fn(record)
        return record

    def record_observation(
        self,
        device_id: str,
        was_online: bool,
        response_time: float | None = None,
        timestamp: datetime | None = None,
    ) -> UptimeRecord:
        observation = UptimeObservation(
            timestamp=timestamp or self._clock(),
            was_online=was_online,
            response_time=response_time if was_online else None,
        )
        return self.update(device_id, lambda r: r.append(observation, self._capacity))

    def record_scan_results(
        self,
        online: Mapping[str, float | None],
        known_ids: Iterable[str] = (),
        timestamp: datetime | None = None,
    ) -> None:
        """Record one scan cycle.

        Parameters
        ----------
        online:
            Device ID -> response time (ms, or ``None``) for devices seen online.
        known_ids:
            Every device ID tracked so far. Those absent from *online* are
            recorded as offline.
        """
        now = timestamp or self._clock()
        for device_id, response_time in online.items():
            self.record_observation(device_id, True, response_time, now)
        offline = (set(known_ids) | set(self._records)) - set(online)
        for device_id in sorted(offline):
            self.record_observation(device_id, False, None, now)
        logger.debug("Recorded uptime: %d online, %d offline", len(online), len(offline))

    def clear_old_records(self, days: int = 30) -> int:
        """Drop observations older than *days*. Returns the number removed."""
        cutoff = self._clock() - timedelta(days=days)
        removed = 0
        for device_id in list(self._records):
            record = self._records[device_id]
            kept = [o for o in record.observations if o.timestamp >= cutoff]
            removed += len(record.observations) - len(kept)
            if kept:
                record.observations[:] = kept
            else:
                del self._records[device_id]
        return removed

    # -- Queries --------------------------------------------------------------

    def get(self, device_id: str) -> UptimeRecord | None:
        return self._records.get(device_id)

    def records(self) -> dict[str, UptimeRecord]:
        return dict(self._records)

    def uptime_percentage(self, device_id: str) -> float:
        record = self._records.get(device_id)
        return record.uptime_percentage if record else 0.0

    def reliability(self, device_id: str) -> Reliability:
        return Reliability.from_uptime(self.uptime_percentage(device_id))

    def average_response_time(self, device_id: str) -> float | None:
        record = self._records.get(device_id)
        return record.average_response_time if record else None

    def downtime_events(self, device_id: str, now: datetime | None = None) -> list[DowntimeEvent]:
        record = self._records.get(device_id)
        if record is None:
            return []
        return record.downtime_events(now or self._clock())

    def unreliable_devices(self, threshold: float = 90.0) -> list[tuple[str, float]]:
        """Devices below *threshold* percent uptime, least reliable first."""
        result = [
            (device_id, record.uptime_percentage)
            for device_id, record in self._records.items()
            if record.observations and record.uptime_percentage < threshold
        ]
        return sorted(result, key=lambda item: item[1])

    def devices_by_reliability(self, reliability: Reliability) -> list[str]:
        return sorted(
            device_id
            for device_id, record in self._records.items()
            if record.observations and record.reliability is reliability
        )

    def recently_down(self, within: timedelta = timedelta(hours=24)) -> list[str]:
        """Devices with a downtime event that started within *within*."""
        now = self._clock()
        cutoff = now - within
        return sorted(
            device_id
            for device_id, record in self._records.items()
            if any(event.start >= cutoff for event in record.downtime_events(now))
        )

    def statistics(self) -> UptimeStatistics:
        ranked = [
            (device_id, record.uptime_percentage)
            for device_id, record in self._records.items()
            if record.observations
        ]
        if not ranked:
            return UptimeStatistics(0, 0.0, 0, 0, None, None)
        ranked.sort(key=lambda item: (-item[1], item[0]))
        return UptimeStatistics(
            total_devices=len(ranked),
            average_uptime=sum(pct for _, pct in ranked) / len(ranked),
            excellent_count=sum(1 for _, pct in ranked if Reliability.from_uptime(pct) is Reliability.EXCELLENT),
            unstable_count=sum(1 for _, pct in ranked if Reliability.from_uptime(pct) is Reliability.UNSTABLE),
            most_reliable=ranked[0],
            least_reliable=ranked[-1],
        )
