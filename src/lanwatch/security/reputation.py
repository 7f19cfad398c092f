"""Device reputation scoring.

``ReputationScorer.score`` is a pure function of a device, its optional
uptime record and its historical incident count. It starts from a neutral
baseline of 50 and applies factors in a fixed order:

1. Device type trust weight
2. Manufacturer reputation (trusted / reliable / questionable lists)
3. Dangerous open ports (-8 each)
4. Backdoor ports (flat -40)
5. Attack surface (open-port count)
6. Secure protocols (+5 for 443 or 22)
7. Rogue (-30) or known (+15) status
8. Uptime reliability
9. Historical incidents (capped at -40)
10. Offline (-10)

Every contribution is kept as a ``ReputationFactor`` so a score can always
be explained. The final score is clamped to 0-100.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Mapping

from lanwatch.models import (
    Device,
    DeviceReputation,
    DeviceType,
    ReputationFactor,
    ReputationRating,
    UptimeRecord,
    utcnow,
)

logger = logging.getLogger(__name__)

BASELINE_SCORE = 50

DEVICE_TYPE_WEIGHTS: dict[DeviceType, int] = {
    DeviceType.ROUTER: 10,
    DeviceType.SERVER: 5,
    DeviceType.COMPUTER: 0,
    DeviceType.MOBILE: 0,
    DeviceType.PRINTER: -3,
    DeviceType.IOT: -5,
    DeviceType.UNKNOWN: -10,
}

TRUSTED_MANUFACTURERS = ("Apple", "Cisco", "Ubiquiti", "UniFi", "Netgear", "ASUS", "Synology", "QNAP")
RELIABLE_MANUFACTURERS = ("TP-Link", "D-Link", "Linksys", "HP", "Dell", "Lenovo", "Samsung")
QUESTIONABLE_MANUFACTURERS = ("Hikvision", "Dahua", "Unknown", "Generic")

DANGEROUS_PORTS: dict[int, str] = {
    23: "Telnet",
    21: "FTP",
    69: "TFTP",
    135: "MSRPC",
    139: "NetBIOS",
    445: "SMB",
    1433: "MSSQL",
    3306: "MySQL",
    5432: "PostgreSQL",
    6379: "Redis",
    27017: "MongoDB",
}

BACKDOOR_PORTS = frozenset({31337, 12345, 54321, 1337, 6667, 6666, 27374})
SECURE_PROTOCOL_PORTS = frozenset({443, 22})

DANGEROUS_PORT_PENALTY = -8
BACKDOOR_PENALTY = -40
INCIDENT_PENALTY = -10
MAX_INCIDENT_PENALTY = -40


def _manufacturer_factor(manufacturer: str | None) -> ReputationFactor | None:
    if not manufacturer:
        return ReputationFactor(category="Manufacturer", impact=-5, reason="Unknown manufacturer")
    lowered = manufacturer.lower()
    if any(name.lower() in lowered for name in TRUSTED_MANUFACTURERS):
        return ReputationFactor(
            category="Manufacturer", impact=10, reason=f"Trusted manufacturer ({manufacturer})"
        )
    if any(name.lower() in lowered for name in RELIABLE_MANUFACTURERS):
        return ReputationFactor(
            category="Manufacturer", impact=5, reason=f"Reliable manufacturer ({manufacturer})"
        )
    if any(name.lower() in lowered for name in QUESTIONABLE_MANUFACTURERS):
        return ReputationFactor(
            category="Manufacturer", impact=-15, reason=f"Questionable manufacturer ({manufacturer})"
        )
    return None


def _uptime_factor(record: UptimeRecord) -> ReputationFactor:
    uptime = record.uptime_percentage
    if uptime >= 99:
        impact = 10
    elif uptime >= 95:
        impact = 5
    elif uptime >= 85:
        impact = 0
    elif uptime >= 70:
        impact = -5
    else:
        impact = -10
    return ReputationFactor(
        category="Reliability",
        impact=impact,
        reason=f"{uptime:.1f}% uptime ({record.reliability.value})",
    )


class ReputationScorer:
    """Computes explainable 0-100 reputation scores."""

    def score(
        self,
        device: Device,
        uptime: UptimeRecord | None = None,
        incident_count: int = 0,
        now: datetime | None = None,
    ) -> DeviceReputation:
        factors: list[ReputationFactor] = []
        ports = device.port_numbers

        type_weight = DEVICE_TYPE_WEIGHTS[device.device_type]
        factors.append(ReputationFactor(
            category="Device Type",
            impact=type_weight,
            reason=f"Device type: {device.device_type.value}",
        ))

        manufacturer = _manufacturer_factor(device.manufacturer)
        if manufacturer is not None:
            factors.append(manufacturer)

        for port in sorted(ports & frozenset(DANGEROUS_PORTS)):
            factors.append(ReputationFactor(
                category="Port Security",
                impact=DANGEROUS_PORT_PENALTY,
                reason=f"Dangerous port {port} ({DANGEROUS_PORTS[port]}) open",
            ))

        backdoors = sorted(ports & BACKDOOR_PORTS)
        if backdoors:
            factors.append(ReputationFactor(
                category="Malware Indicators",
                impact=BACKDOOR_PENALTY,
                reason=f"Backdoor port(s) open: {', '.join(map(str, backdoors))}",
            ))

        if len(ports) > 20:
            factors.append(ReputationFactor(
                category="Attack Surface", impact=-10, reason=f"{len(ports)} open ports",
            ))
        elif len(ports) > 10:
            factors.append(ReputationFactor(
                category="Attack Surface", impact=-5, reason=f"{len(ports)} open ports",
            ))

        if ports & SECURE_PROTOCOL_PORTS:
            factors.append(ReputationFactor(
                category="Security", impact=5, reason="Secure protocols available (HTTPS/SSH)",
            ))

        if device.is_rogue:
            factors.append(ReputationFactor(
                category="Trust Status", impact=-30, reason="Unrecognized device recently joined",
            ))
        elif device.is_known_device:
            factors.append(ReputationFactor(
                category="Trust Status", impact=15, reason="Known device",
            ))

        if uptime is not None and uptime.observations:
            factors.append(_uptime_factor(uptime))

        if incident_count > 0:
            penalty = max(MAX_INCIDENT_PENALTY, INCIDENT_PENALTY * incident_count)
            factors.append(ReputationFactor(
                category="Security History",
                impact=penalty,
                reason=f"{incident_count} security incident(s) recorded",
            ))

        if not device.is_online:
            factors.append(ReputationFactor(
                category="Availability", impact=-10, reason="Device is offline",
            ))

        raw = BASELINE_SCORE + sum(f.impact for f in factors)
        score = max(0, min(100, raw))
        return DeviceReputation(
            device_id=device.device_id,
            ip_address=device.ip_address,
            score=score,
            rating=ReputationRating.from_score(score),
            factors=factors,
            computed_at=now or utcnow(),
        )


@dataclass
class ReputationStatistics:
    total_devices: int = 0
    average_score: int = 0
    rating_counts: dict[ReputationRating, int] = field(
        default_factory=lambda: {rating: 0 for rating in ReputationRating}
    )

    @property
    def trusted_count(self) -> int:
        return self.rating_counts[ReputationRating.TRUSTED]

    @property
    def untrusted_count(self) -> int:
        return self.rating_counts[ReputationRating.UNTRUSTED]


class ReputationStore:
    """Keyed map of the latest reputation per device ID.

    Parameters
    ----------
    scorer:
        Scorer used by ``calculate_all``.
    """

    def __init__(
        self,
        scorer: ReputationScorer | None = None,
        reputations: Mapping[str, DeviceReputation] | None = None,
    ) -> None:
        self._scorer = scorer or ReputationScorer()
        self._reputations: dict[str, DeviceReputation] = dict(reputations or {})

    def get(self, device_id: str) -> DeviceReputation | None:
        return self._reputations.get(device_id)

    def update(
        self,
        device_id: str,
        fn: Callable[[DeviceReputation | None], DeviceReputation],
    ) -> DeviceReputation:
        """Replace the entry for *device_id* with ``fn(current)``."""
        updated = fn(self._reputations.get(device_id))
        self._reputations[device_id] = updated
        return updated

    def calculate_all(
        self,
        devices: Iterable[Device],
        uptime: Mapping[str, UptimeRecord] | None = None,
        incidents: Mapping[str, int] | None = None,
    ) -> list[DeviceReputation]:
        """Score every device and store the results (last writer wins)."""
        uptime = uptime or {}
        incidents = incidents or {}
        results = []
        for device in devices:
            device_id = device.device_id
            reputation = self._scorer.score(
                device,
                uptime.get(device_id),
                incidents.get(device_id, 0),
            )
            self.update(device_id, lambda _current, rep=reputation: rep)
            results.append(reputation)
        logger.debug("Scored %d devices", len(results))
        return results

    def all(self) -> dict[str, DeviceReputation]:
        return dict(self._reputations)

    def low_reputation_devices(self, threshold: int = 50) -> list[DeviceReputation]:
        """Devices scoring below *threshold*, worst first."""
        low = [r for r in self._reputations.values() if r.score < threshold]
        return sorted(low, key=lambda r: r.score)

    def devices_by_rating(self, rating: ReputationRating) -> list[DeviceReputation]:
        return [r for r in self._reputations.values() if r.rating is rating]

    def statistics(self) -> ReputationStatistics:
        stats = ReputationStatistics(total_devices=len(self._reputations))
        if not self._reputations:
            return stats
        stats.average_score = sum(r.score for r in self._reputations.values()) // len(self._reputations)
        for reputation in self._reputations.values():
            stats.rating_counts[reputation.rating] += 1
        return stats
