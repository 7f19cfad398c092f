"""Unit tests for multi-phase host discovery."""
from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from lanwatch.discovery.arp import ArpEntry, NullArpReader
from lanwatch.discovery.discoverer import (
    DiscoveryPhase,
    HostDiscoverer,
    normalize_subnet,
)
from lanwatch.discovery.liveness import HostLivenessProbe, TcpLivenessProbe
from lanwatch.errors import ConfigurationError
from lanwatch.scanner.probe import ProbeResult, ProbeStatus


class FakeLiveness(HostLivenessProbe):
    """Answers from a fixed set of live addresses and records every probe."""

    def __init__(
        self,
        alive: set[str],
        arp: list[ArpEntry] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.alive = alive
        self.arp = arp or []
        self.failing = failing or set()
        self.calls: list[tuple[str, float]] = []

    async def is_alive(self, ip: str, timeout: float) -> bool:
        self.calls.append((ip, timeout))
        await asyncio.sleep(0)
        if ip in self.failing:
            raise RuntimeError("probe exploded")
        return ip in self.alive

    async def arp_table(self, prefix: str) -> list[ArpEntry]:
        return [e for e in self.arp if e.ip.startswith(prefix + ".")]


class TestNormalizeSubnet:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("192.168.1", "192.168.1"),
            ("192.168.1.0/24", "192.168.1"),
            ("192.168.1.77/24", "192.168.1"),
            ("10.0.0.17", "10.0.0"),
            (" 172.16.5 ", "172.16.5"),
        ],
    )
    def test_accepted(self, value: str, expected: str) -> None:
        assert normalize_subnet(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "192.168", "192.168.1.0/16", "300.1.1", "a.b.c", "192.168.1.0/33", "1.2.3.4.5"],
    )
    def test_rejected(self, value: str) -> None:
        with pytest.raises(ConfigurationError):
            normalize_subnet(value)

    def test_auto_uses_local_interface(self) -> None:
        with patch("lanwatch.discovery.discoverer._detect_local_prefix", return_value="10.1.2"):
            assert normalize_subnet("auto") == "10.1.2"


class TestHostDiscoverer:
    """Discovery phases, ordering and progress."""

    @pytest.mark.asyncio
    async def test_finds_hosts_from_all_phases(self) -> None:
        liveness = FakeLiveness(
            alive={"10.0.0.1", "10.0.0.50", "10.0.0.253"},
            arp=[ArpEntry("10.0.0.9", "aa:bb:cc:dd:ee:09")],
        )
        result = await HostDiscoverer(liveness).discover("10.0.0")
        assert result.prefix == "10.0.0"
        assert result.ips == ["10.0.0.1", "10.0.0.9", "10.0.0.50", "10.0.0.253"]
        assert result.macs == {"10.0.0.9": "aa:bb:cc:dd:ee:09"}
        assert result.phase_counts[DiscoveryPhase.ARP] == 1
        assert not result.cancelled

    @pytest.mark.asyncio
    async def test_results_sorted_numerically(self) -> None:
        liveness = FakeLiveness(alive={"10.0.0.100", "10.0.0.20", "10.0.0.3"})
        result = await HostDiscoverer(liveness).discover("10.0.0")
        assert result.ips == ["10.0.0.3", "10.0.0.20", "10.0.0.100"]

    @pytest.mark.asyncio
    async def test_found_hosts_not_reprobed(self) -> None:
        liveness = FakeLiveness(alive={"10.0.0.1"})
        await HostDiscoverer(liveness).discover("10.0.0")
        probed = [ip for ip, _ in liveness.calls]
        assert probed.count("10.0.0.1") == 1

    @pytest.mark.asyncio
    async def test_each_phase_uses_its_timeout(self) -> None:
        liveness = FakeLiveness(alive=set())
        discoverer = HostDiscoverer(
            liveness,
            known_octets=(5,),
            common_ranges=((6, 6),),
            known_timeout=0.1,
            common_timeout=0.2,
            sweep_timeout=0.3,
        )
        await discoverer.discover("10.0.0")
        timeouts = dict()
        for ip, timeout in liveness.calls:
            timeouts.setdefault(ip, []).append(timeout)
        assert timeouts["10.0.0.5"][0] == 0.1
        assert timeouts["10.0.0.6"][0] == 0.2
        assert timeouts["10.0.0.7"] == [0.3]
        # the sweep retries everything not found yet
        assert len(liveness.calls) == 1 + 1 + 254

    @pytest.mark.asyncio
    async def test_progress_is_monotonic_and_complete(self) -> None:
        fractions: list[float] = []
        liveness = FakeLiveness(alive={"10.0.0.1", "10.0.0.200"})
        await HostDiscoverer(liveness).discover(
            "10.0.0", progress=lambda f, text: fractions.append(f),
        )
        assert fractions == sorted(fractions)
        assert fractions[0] == 0.0
        assert fractions[-1] == 1.0
        assert all(0.0 <= f <= 1.0 for f in fractions)

    @pytest.mark.asyncio
    async def test_probe_errors_mean_no_host(self) -> None:
        liveness = FakeLiveness(alive={"10.0.0.1"}, failing={"10.0.0.2"})
        result = await HostDiscoverer(liveness).discover("10.0.0")
        assert result.ips == ["10.0.0.1"]

    @pytest.mark.asyncio
    async def test_invalid_subnet_rejected_before_probing(self) -> None:
        liveness = FakeLiveness(alive=set())
        with pytest.raises(ConfigurationError):
            await HostDiscoverer(liveness).discover("not-a-subnet")
        assert liveness.calls == []

    @pytest.mark.asyncio
    async def test_cancel_stops_new_probes(self) -> None:
        cancel = asyncio.Event()

        class CancellingLiveness(FakeLiveness):
            async def is_alive(self, ip: str, timeout: float) -> bool:
                alive = await super().is_alive(ip, timeout)
                if len(self.calls) >= 3:
                    cancel.set()
                return alive

        liveness = CancellingLiveness(alive={"10.0.0.1"})
        result = await HostDiscoverer(liveness, max_concurrent=1).discover(
            "10.0.0", cancel_event=cancel,
        )
        assert result.cancelled
        assert result.ips == ["10.0.0.1"]
        assert len(liveness.calls) == 3

    @pytest.mark.parametrize(
        "kwargs",
        [{"known_timeout": 0}, {"sweep_timeout": -1}, {"max_concurrent": 0}, {"known_octets": (0,)}],
    )
    def test_invalid_configuration(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            HostDiscoverer(FakeLiveness(alive=set()), **kwargs)


class TestTcpLivenessProbe:
    """A refused connection still proves the host exists."""

    class _StubProbe:
        def __init__(self, statuses: dict[int, ProbeStatus]) -> None:
            self.statuses = statuses
            self.ports: list[int] = []

        async def probe(self, ip: str, port: int, timeout: float | None = None) -> ProbeResult:
            self.ports.append(port)
            return ProbeResult(ip, port, self.statuses.get(port, ProbeStatus.FILTERED))

    @pytest.mark.asyncio
    async def test_refused_counts_as_alive(self) -> None:
        probe = self._StubProbe({80: ProbeStatus.CLOSED})
        assert await TcpLivenessProbe(probe=probe).is_alive("10.0.0.5", 0.3)
        assert probe.ports == [80]

    @pytest.mark.asyncio
    async def test_tries_ports_in_order(self) -> None:
        probe = self._StubProbe({443: ProbeStatus.OPEN})
        assert await TcpLivenessProbe(probe=probe, ports=(80, 443)).is_alive("10.0.0.5", 0.3)
        assert probe.ports == [80, 443]

    @pytest.mark.asyncio
    async def test_silence_is_dead(self) -> None:
        probe = self._StubProbe({})
        assert not await TcpLivenessProbe(probe=probe).is_alive("10.0.0.5", 0.3)

    @pytest.mark.asyncio
    async def test_arp_table_delegates(self) -> None:
        assert await TcpLivenessProbe(arp_reader=NullArpReader()).arp_table("10.0.0") == []
