"""Pydantic domain models for lanwatch.

These models define the data structures shared across the scanner:
devices and their ports, uptime observations, reputation results and
scan schedules. Every model serializes to plain JSON via
``model_dump(mode="json")`` so the persistence layer can store it as a
key-value blob.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DeviceType(str, Enum):
    ROUTER = "router"
    SERVER = "server"
    COMPUTER = "computer"
    MOBILE = "mobile"
    IOT = "iot"
    PRINTER = "printer"
    UNKNOWN = "unknown"


class PortState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    FILTERED = "filtered"


class ScanType(str, Enum):
    QUICK = "quick"
    FULL = "full"
    DEEP = "deep"


class ScanState(str, Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    SCANNING = "scanning"
    CLASSIFYING = "classifying"
    SCORING = "scoring"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanState.COMPLETE, ScanState.CANCELLED, ScanState.FAILED)


class ReputationRating(str, Enum):
    TRUSTED = "trusted"
    RELIABLE = "reliable"
    ACCEPTABLE = "acceptable"
    QUESTIONABLE = "questionable"
    UNTRUSTED = "untrusted"

    @classmethod
    def from_score(cls, score: int) -> ReputationRating:
        if score >= 90:
            return cls.TRUSTED
        if score >= 75:
            return cls.RELIABLE
        if score >= 60:
            return cls.ACCEPTABLE
        if score >= 40:
            return cls.QUESTIONABLE
        return cls.UNTRUSTED


class Reliability(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNSTABLE = "unstable"

    @classmethod
    def from_uptime(cls, percentage: float) -> Reliability:
        if percentage >= 99:
            return cls.EXCELLENT
        if percentage >= 95:
            return cls.GOOD
        if percentage >= 85:
            return cls.FAIR
        if percentage >= 70:
            return cls.POOR
        return cls.UNSTABLE


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

class PortInfo(BaseModel):
    """A single port observation on a device."""

    model_config = ConfigDict(from_attributes=True)

    port: int = Field(ge=1, le=65535)
    service: str = "Unknown"
    version: str | None = None
    state: PortState = PortState.OPEN
    protocol_type: str = "TCP"
    banner: str | None = None
    product: str | None = None


class Device(BaseModel):
    """A host found on the network during a scan.

    Identity within a scan session is the IP address. ``device_id`` prefers
    the MAC address so uptime and reputation history survive DHCP churn.
    """

    model_config = ConfigDict(from_attributes=True)

    ip_address: str
    mac_address: str | None = None
    hostname: str | None = None
    manufacturer: str | None = None
    device_type: DeviceType = DeviceType.UNKNOWN
    open_ports: list[PortInfo] = Field(default_factory=list)
    is_online: bool = True
    first_seen: datetime = Field(default_factory=utcnow)
    last_seen: datetime = Field(default_factory=utcnow)
    is_known_device: bool = False
    is_rogue: bool = False
    operating_system: str | None = None
    # fastest TCP handshake seen on an open port this scan
    response_time_ms: float | None = None

    @field_validator("ip_address")
    @classmethod
    def _validate_ip(cls, value: str) -> str:
        return str(ipaddress.IPv4Address(value))

    @field_validator("open_ports")
    @classmethod
    def _unique_ports(cls, value: list[PortInfo]) -> list[PortInfo]:
        seen: set[int] = set()
        for info in value:
            if info.port in seen:
                raise ValueError(f"duplicate port {info.port}")
            seen.add(info.port)
        return value

    @model_validator(mode="after")
    def _check_seen_order(self) -> Device:
        if self.first_seen > self.last_seen:
            raise ValueError("first_seen must not be later than last_seen")
        return self

    @property
    def device_id(self) -> str:
        if self.mac_address:
            return self.mac_address.lower()
        return self.ip_address

    @property
    def port_numbers(self) -> frozenset[int]:
        return frozenset(p.port for p in self.open_ports)

    def has_port(self, port: int) -> bool:
        return any(p.port == port for p in self.open_ports)

    def port_info(self, port: int) -> PortInfo | None:
        for info in self.open_ports:
            if info.port == port:
                return info
        return None

    @property
    def display_name(self) -> str:
        return self.hostname or self.ip_address


def ip_sort_key(ip: str) -> int:
    """Sort key for dotted-quad addresses in numeric octet order."""
    return int(ipaddress.IPv4Address(ip))


# ---------------------------------------------------------------------------
# Uptime
# ---------------------------------------------------------------------------

class UptimeObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    was_online: bool
    response_time: float | None = None


@dataclass(frozen=True)
class DowntimeEvent:
    """A coalesced run of offline observations.

    ``end`` is the timestamp of the first online observation after the run,
    or the evaluation time when the run is still ongoing.
    """

    start: datetime
    end: datetime
    ongoing: bool = False

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_string(self) -> str:
        total = int(self.duration.total_seconds())
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        if minutes > 0:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"


class UptimeRecord(BaseModel):
    """Append-only observation log for one device.

    All metrics are computed from ``observations`` on demand and are never
    persisted.
    """

    device_id: str
    observations: list[UptimeObservation] = Field(default_factory=list)

    def append(self, observation: UptimeObservation, capacity: int) -> None:
        """Append an observation, dropping the oldest entries beyond *capacity*."""
        self.observations.append(observation)
        overflow = len(self.observations) - capacity
        if overflow > 0:
            del self.observations[:overflow]

    @property
    def uptime_percentage(self) -> float:
        if not self.observations:
            return 0.0
        online = sum(1 for o in self.observations if o.was_online)
        return online / len(self.observations) * 100.0

    @property
    def reliability(self) -> Reliability:
        return Reliability.from_uptime(self.uptime_percentage)

    @property
    def average_response_time(self) -> float | None:
        times = [o.response_time for o in self.observations if o.response_time is not None]
        if not times:
            return None
        return sum(times) / len(times)

    @property
    def last_observation(self) -> UptimeObservation | None:
        if not self.observations:
            return None
        return max(self.observations, key=lambda o: o.timestamp)

    def downtime_events(self, now: datetime | None = None) -> list[DowntimeEvent]:
        """Coalesce consecutive offline observations into downtime intervals."""
        now = now or utcnow()
        events: list[DowntimeEvent] = []
        run_start: datetime | None = None
        for obs in sorted(self.observations, key=lambda o: o.timestamp):
            if not obs.was_online:
                if run_start is None:
                    run_start = obs.timestamp
            elif run_start is not None:
                events.append(DowntimeEvent(start=run_start, end=obs.timestamp))
                run_start = None
        if run_start is not None:
            events.append(DowntimeEvent(start=run_start, end=max(now, run_start), ongoing=True))
        return events


# ---------------------------------------------------------------------------
# Reputation
# ---------------------------------------------------------------------------

class ReputationFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    impact: int
    reason: str


class DeviceReputation(BaseModel):
    device_id: str
    ip_address: str
    score: int = Field(ge=0, le=100)
    rating: ReputationRating
    factors: list[ReputationFactor] = Field(default_factory=list)
    computed_at: datetime = Field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------

class ScanSchedule(BaseModel):
    """A recurring scan definition, mutated by each scheduler tick."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    enabled: bool = True
    scan_type: ScanType = ScanType.QUICK
    interval_seconds: int = Field(default=3600, gt=0)
    last_run: datetime | None = None
    next_run: datetime | None = None

    @model_validator(mode="after")
    def _default_next_run(self) -> ScanSchedule:
        if self.next_run is None:
            self.next_run = utcnow() + timedelta(seconds=self.interval_seconds)
        return self

    def is_due(self, now: datetime) -> bool:
        return self.enabled and self.next_run is not None and self.next_run <= now

    def mark_run(self, now: datetime) -> None:
        self.last_run = now
        self.next_run = now + timedelta(seconds=self.interval_seconds)
