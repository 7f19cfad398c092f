"""Unit tests for reputation scoring."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from lanwatch.models import (
    Device,
    DeviceType,
    PortInfo,
    ReputationRating,
    UptimeObservation,
    UptimeRecord,
)
from lanwatch.security.reputation import ReputationScorer, ReputationStore


def _device(*ports: int, **kwargs) -> Device:
    return Device(
        ip_address=kwargs.pop("ip_address", "10.0.0.5"),
        open_ports=[PortInfo(port=p) for p in ports],
        **kwargs,
    )


def _uptime(now: datetime, online: int, offline: int) -> UptimeRecord:
    record = UptimeRecord(device_id="d1")
    for i in range(online + offline):
        record.append(
            UptimeObservation(timestamp=now + timedelta(minutes=i), was_online=i < online),
            capacity=1000,
        )
    return record


class TestReputationScorer:
    """Scores are explainable sums of ordered factors."""

    def test_backdoor_penalty(self) -> None:
        reputation = ReputationScorer().score(_device(80, 443, 31337))
        malware = [f for f in reputation.factors if f.category == "Malware Indicators"]
        assert len(malware) == 1
        assert malware[0].impact == -40
        assert reputation.score <= 10
        assert reputation.rating is ReputationRating.UNTRUSTED

    def test_score_is_baseline_plus_factors(self) -> None:
        reputation = ReputationScorer().score(_device(22, 3306, manufacturer="Dell"))
        assert reputation.score == 50 + sum(f.impact for f in reputation.factors)

    def test_factor_order(self) -> None:
        device = _device(
            22, 23, 31337, *range(1000, 1020),
            device_type=DeviceType.ROUTER,
            manufacturer="Netgear",
            is_rogue=True,
            is_online=False,
        )
        reputation = ReputationScorer().score(device, incident_count=2)
        categories = [f.category for f in reputation.factors]
        assert categories == [
            "Device Type",
            "Manufacturer",
            "Port Security",
            "Malware Indicators",
            "Attack Surface",
            "Security",
            "Trust Status",
            "Security History",
            "Availability",
        ]

    def test_dangerous_ports_each_penalized(self) -> None:
        reputation = ReputationScorer().score(_device(21, 23, 445))
        penalties = [f.impact for f in reputation.factors if f.category == "Port Security"]
        assert penalties == [-8, -8, -8]

    def test_known_device_bonus(self) -> None:
        reputation = ReputationScorer().score(_device(443, is_known_device=True, manufacturer="Apple"))
        trust = [f for f in reputation.factors if f.category == "Trust Status"]
        assert trust[0].impact == 15
        # 50 - 10 (unknown type) + 10 (Apple) + 5 (HTTPS) + 15 (known)
        assert reputation.score == 70

    def test_rogue_penalty_wins_over_known(self) -> None:
        reputation = ReputationScorer().score(_device(is_known_device=True, is_rogue=True))
        trust = [f for f in reputation.factors if f.category == "Trust Status"]
        assert [f.impact for f in trust] == [-30]

    def test_incident_penalty_capped(self) -> None:
        reputation = ReputationScorer().score(_device(), incident_count=9)
        history = [f for f in reputation.factors if f.category == "Security History"]
        assert history[0].impact == -40

    def test_uptime_factor(self, now: datetime) -> None:
        reliable = ReputationScorer().score(_device(), uptime=_uptime(now, 100, 0))
        flaky = ReputationScorer().score(_device(), uptime=_uptime(now, 5, 5))
        assert reliable.score - flaky.score == 20

    def test_empty_uptime_ignored(self) -> None:
        reputation = ReputationScorer().score(_device(), uptime=UptimeRecord(device_id="d1"))
        assert "Reliability" not in [f.category for f in reputation.factors]

    def test_questionable_manufacturer(self) -> None:
        reputation = ReputationScorer().score(_device(manufacturer="Hikvision Digital"))
        assert any(f.category == "Manufacturer" and f.impact == -15 for f in reputation.factors)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ports": (21, 23, 135, 139, 445, 1433, 3306, 5432, 6379, 27017, 31337, *range(2000, 2030)),
             "is_rogue": True, "is_online": False, "incidents": 10},
            {"ports": (22, 443), "device_type": DeviceType.ROUTER, "manufacturer": "Ubiquiti",
             "is_known_device": True, "incidents": 0},
        ],
    )
    def test_score_always_in_bounds(self, kwargs: dict) -> None:
        kwargs = dict(kwargs)
        ports = kwargs.pop("ports")
        incidents = kwargs.pop("incidents")
        reputation = ReputationScorer().score(_device(*ports, **kwargs), incident_count=incidents)
        assert 0 <= reputation.score <= 100
        assert reputation.rating is ReputationRating.from_score(reputation.score)

    def test_deterministic(self, now: datetime) -> None:
        device = _device(22, 80, manufacturer="Samsung")
        first = ReputationScorer().score(device, now=now)
        second = ReputationScorer().score(device, now=now)
        assert first == second

    def test_identity(self) -> None:
        reputation = ReputationScorer().score(_device(mac_address="AA:BB:CC:DD:EE:FF"))
        assert reputation.device_id == "aa:bb:cc:dd:ee:ff"
        assert reputation.ip_address == "10.0.0.5"


class TestReputationStore:
    def _devices(self) -> list[Device]:
        return [
            _device(443, ip_address="10.0.0.1", mac_address="aa:bb:cc:00:00:01",
                    device_type=DeviceType.ROUTER, manufacturer="Ubiquiti", is_known_device=True),
            _device(80, 443, 31337, ip_address="10.0.0.2", mac_address="aa:bb:cc:00:00:02"),
            _device(22, ip_address="10.0.0.3"),
        ]

    def test_calculate_all_and_queries(self) -> None:
        store = ReputationStore()
        results = store.calculate_all(self._devices())
        assert len(results) == 3
        assert set(store.all()) == {"aa:bb:cc:00:00:01", "aa:bb:cc:00:00:02", "10.0.0.3"}

        low = store.low_reputation_devices(threshold=50)
        assert [r.ip_address for r in low][0] == "10.0.0.2"
        assert [r.score for r in low] == sorted(r.score for r in low)

        trusted = store.devices_by_rating(ReputationRating.TRUSTED)
        assert [r.ip_address for r in trusted] == ["10.0.0.1"]

    def test_last_write_wins(self) -> None:
        store = ReputationStore()
        device = _device(22, mac_address="aa:bb:cc:00:00:09")
        store.calculate_all([device])
        store.calculate_all([device.model_copy(update={"is_rogue": True})])
        assert store.get("aa:bb:cc:00:00:09").score < 50

    def test_statistics(self) -> None:
        store = ReputationStore()
        assert store.statistics().total_devices == 0
        store.calculate_all(self._devices())
        stats = store.statistics()
        assert stats.total_devices == 3
        assert sum(stats.rating_counts.values()) == 3
        assert stats.trusted_count == 1
        assert stats.untrusted_count >= 1
        scores = [r.score for r in store.all().values()]
        assert stats.average_score == sum(scores) // 3
