"""Async TCP connect port scanner with optional banner grabbing.

Uses asyncio TCP connections with per-port timeouts. Each scan call drains
its (host, port) jobs through a fixed pool of worker tasks, and a shared
semaphore caps simultaneous connections across calls. No root privileges
required: this is a standard TCP connect scan. Probes for one host
complete in any order; results are always returned in ascending port order.
"""
from __future__ import annotations

import asyncio
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field

from lanwatch.errors import ConfigurationError
from lanwatch.models import PortInfo, PortState
from lanwatch.scanner.banner import BannerGrabber, BannerInfo
from lanwatch.scanner.ports import get_service_name, validate_ports
from lanwatch.scanner.probe import PortProbe, ProbeResult, close_writer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortResult:
    """Result of scanning a single open port with optional service metadata."""

    port: int
    service_name: str | None = None
    banner: str | None = None
    product: str | None = None
    version: str | None = None
    os_hint: str | None = None
    vulnerabilities: tuple[str, ...] = field(default_factory=tuple)
    latency_ms: float | None = field(default=None, compare=False)

    @classmethod
    def from_banner(cls, info: BannerInfo, latency_ms: float | None = None) -> PortResult:
        return cls(
            port=info.port,
            service_name=info.service,
            banner=info.banner,
            product=info.product,
            version=info.version,
            os_hint=info.os_hint,
            vulnerabilities=info.vulnerabilities,
            latency_ms=latency_ms,
        )

    def to_port_info(self) -> PortInfo:
        return PortInfo(
            port=self.port,
            service=self.service_name or get_service_name(self.port),
            version=self.version,
            state=PortState.OPEN,
            protocol_type="TCP",
            banner=self.banner,
            product=self.product,
        )


class PortScanner:
    """Async TCP connect scanner with optional banner grabbing.

    Parameters
    ----------
    probe:
        Connect primitive. Created with ``timeout_per_port`` if omitted.
    banner_grabber:
        Grabber used on open ports when ``grab_banners`` is set.
    timeout_per_port:
        Seconds to wait for each TCP connection attempt.
    max_concurrent:
        Maximum simultaneous connection attempts across all hosts/ports.
        Also the size of the worker pool each scan call uses.
    grab_banners:
        Read and fingerprint a banner from every open port.
    """

    def __init__(
        self,
        probe: PortProbe | None = None,
        banner_grabber: BannerGrabber | None = None,
        timeout_per_port: float = 1.5,
        max_concurrent: int = 100,
        grab_banners: bool = True,
    ) -> None:
        if max_concurrent < 1:
            raise ConfigurationError(f"max_concurrent must be >= 1, got {max_concurrent}")
        self._probe = probe or PortProbe(timeout=timeout_per_port)
        self._grabber = banner_grabber or BannerGrabber()
        self._grab_banners = grab_banners
        self._max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def scan_host(
        self,
        ip: str,
        ports: list[int],
        cancel_event: asyncio.Event | None = None,
    ) -> list[PortResult]:
        """Scan one host and return its open ports in ascending order.

        Once *cancel_event* is set no new connection is started; probes
        already in flight finish or time out on their own and their results
        are kept.

        Raises
        ------
        ConfigurationError:
            If *ports* is empty or contains an invalid port.
        """
        ports = validate_ports(ports)
        found = await self._run_pool([(ip, port) for port in ports], cancel_event)
        return sorted((result for _, result in found), key=lambda r: r.port)

    async def scan(
        self,
        targets: list[str],
        ports: list[int],
        cancel_event: asyncio.Event | None = None,
    ) -> dict[str, list[PortResult]]:
        """Scan several targets for open TCP ports.

        Returns
        -------
        dict[str, list[PortResult]]:
            Mapping of IP address to open ports sorted by port number.
            IPs with no open ports are omitted.
        """
        if not targets:
            return {}
        ports = validate_ports(ports)

        found = await self._run_pool(
            [(ip, port) for ip in targets for port in ports], cancel_event,
        )

        open_ports: dict[str, list[PortResult]] = defaultdict(list)
        for ip, result in found:
            open_ports[ip].append(result)

        return {
            ip: sorted(results, key=lambda r: r.port)
            for ip, results in open_ports.items()
        }

    async def _run_pool(
        self,
        jobs: list[tuple[str, int]],
        cancel_event: asyncio.Event | None,
    ) -> list[tuple[str, PortResult]]:
        """Drain *jobs* with at most ``max_concurrent`` worker tasks.

        Workers pull ``(ip, port)`` pairs from a shared queue, so the number
        of live tasks never depends on the size of the port list.
        """
        queue: asyncio.Queue[tuple[str, int]] = asyncio.Queue()
        for job in jobs:
            queue.put_nowait(job)
        found: list[tuple[str, PortResult]] = []

        async def worker() -> None:
            while not queue.empty():
                if cancel_event is not None and cancel_event.is_set():
                    return
                ip, port = queue.get_nowait()
                result = await self._check_port(ip, port, cancel_event)
                if result is not None:
                    found.append((ip, result))

        workers = [
            asyncio.create_task(worker())
            for _ in range(min(self._max_concurrent, len(jobs)))
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            for task in workers:
                if not task.done():
                    task.cancel()
        return found

    async def _check_port(
        self,
        ip: str,
        port: int,
        cancel_event: asyncio.Event | None,
    ) -> PortResult | None:
        """Check a single port. Returns a ``PortResult`` if open, else ``None``."""
        async with self._semaphore:
            if cancel_event is not None and cancel_event.is_set():
                return None

            started = time.monotonic()
            conn = await self._probe.open(ip, port)
            if isinstance(conn, ProbeResult):
                return None
            latency_ms = (time.monotonic() - started) * 1000

            reader, writer = conn
            try:
                if self._grab_banners:
                    info = await self._grabber.grab(reader, writer, ip, port)
                    return PortResult.from_banner(info, latency_ms)
                return PortResult(port=port, service_name=get_service_name(port), latency_ms=latency_ms)
            finally:
                await close_writer(writer)
