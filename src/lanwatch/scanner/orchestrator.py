"""Scan orchestration: discovery -> port scanning -> classification -> scoring.

Each run is a small state machine::

    Idle -> Discovering -> Scanning -> Classifying -> Scoring -> Complete

with Cancelled and Failed reachable from any non-terminal state.

Host scans run concurrently (bounded by ``max_concurrent_hosts``) and
finish in any order. Workers never touch the inventory: they push their
results onto a queue and the orchestrator loop is the only writer.
Progress is streamed to the caller as ``ScanProgress`` events with a
monotonically increasing fraction; each completed host is included in its
event so consumers can render devices as they arrive.

Cancellation is cooperative. ``ScanHandle.cancel()`` stops new probes
from being issued, lets in-flight probes finish or time out, and the run
ends in ``ScanState.CANCELLED`` with the partial inventory intact.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import AsyncIterator, Callable, Iterable, Iterator

from lanwatch.devices.classifier import classify_device, detect_operating_system
from lanwatch.devices.oui import lookup_manufacturer
from lanwatch.devices.rogue import DEFAULT_ROGUE_WINDOW, KnownDeviceAllowlist, apply_trust_status
from lanwatch.discovery.discoverer import HostDiscoverer, normalize_subnet
from lanwatch.errors import ScanInProgressError
from lanwatch.events.bus import EventBus
from lanwatch.events.types import EventType
from lanwatch.models import Device, DeviceReputation, ScanState, ip_sort_key, utcnow
from lanwatch.scanner.hostnames import resolve_hostname
from lanwatch.scanner.port_scanner import PortResult, PortScanner
from lanwatch.scanner.ports import ScanMode, ports_for_mode, validate_ports
from lanwatch.security.reputation import ReputationScorer

logger = logging.getLogger(__name__)

# Overall progress span for each state
_DISCOVERY_SPAN = (0.0, 0.40)
_SCANNING_SPAN = (0.40, 0.90)
_CLASSIFYING_AT = 0.90
_SCORING_AT = 0.95


@dataclass(frozen=True)
class ScanProgress:
    """One progress event from a running scan."""

    fraction: float
    status_text: str
    state: ScanState
    device: Device | None = None


@dataclass
class DeviceInventory:
    """Devices found by one scan, in numeric IP order."""

    devices: list[Device] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(self.devices)

    def get(self, ip: str) -> Device | None:
        for device in self.devices:
            if device.ip_address == ip:
                return device
        return None

    @property
    def ips(self) -> list[str]:
        return [d.ip_address for d in self.devices]


@dataclass
class ScanOutcome:
    """Terminal result of a scan run."""

    state: ScanState
    subnet: str
    inventory: DeviceInventory
    duration_ms: int
    error: str | None = None
    reputations: dict[str, DeviceReputation] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.state is ScanState.COMPLETE

    @property
    def cancelled(self) -> bool:
        return self.state is ScanState.CANCELLED

    @property
    def failed(self) -> bool:
        return self.state is ScanState.FAILED


class ScanHandle:
    """Caller's view of a running scan.

    Consume ``events()`` for progress, await ``result()`` for the outcome,
    and call ``cancel()`` to stop early. ``events()`` is single-consumer.
    """

    def __init__(self, subnet: str) -> None:
        self.subnet = subnet
        self.state = ScanState.IDLE
        self._events: asyncio.Queue[ScanProgress | None] = asyncio.Queue()
        self._cancel_event = asyncio.Event()
        self._task: asyncio.Task[ScanOutcome] | None = None
        self._fraction = 0.0

    def cancel(self) -> None:
        """Request cooperative cancellation. Safe to call more than once."""
        if not self._cancel_event.is_set():
            logger.info("Cancellation requested for scan of %s", self.subnet)
        self._cancel_event.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def fraction(self) -> float:
        return self._fraction

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def result(self) -> ScanOutcome:
        if self._task is None:
            raise RuntimeError("Scan has not been started")
        return await self._task

    async def events(self) -> AsyncIterator[ScanProgress]:
        """Yield progress events until the scan reaches a terminal state."""
        while True:
            event = await self._events.get()
            if event is None:
                return
            yield event

    def _emit(self, fraction: float, text: str, device: Device | None = None) -> None:
        self._fraction = max(self._fraction, min(fraction, 1.0))
        self._events.put_nowait(ScanProgress(self._fraction, text, self.state, device))

    def _close(self) -> None:
        self._events.put_nowait(None)


@dataclass
class _HostReport:
    ip: str
    results: list[PortResult]
    hostname: str | None = None
    error: BaseException | None = None


class ScanOrchestrator:
    """Coordinates one scan at a time over injected components.

    Parameters
    ----------
    discoverer:
        Finds live hosts.
    port_scanner:
        Scans each live host.
    allowlist:
        Known devices; everything else seen recently is rogue.
    rogue_window:
        How long after first sighting an unknown device counts as rogue.
    reputation_scorer:
        Scores each device in the Scoring state. Skipped when ``None``.
    max_concurrent_hosts:
        Hosts scanned in parallel.
    resolve_hostnames:
        Look up PTR names for discovered hosts.
    event_bus:
        Receives scan lifecycle and device events when provided.
    clock:
        Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        discoverer: HostDiscoverer,
        port_scanner: PortScanner,
        allowlist: KnownDeviceAllowlist | None = None,
        rogue_window: timedelta = DEFAULT_ROGUE_WINDOW,
        reputation_scorer: ReputationScorer | None = None,
        max_concurrent_hosts: int = 10,
        resolve_hostnames: bool = False,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if max_concurrent_hosts < 1:
            raise ValueError("max_concurrent_hosts must be >= 1")
        self._discoverer = discoverer
        self._scanner = port_scanner
        self.allowlist = allowlist or KnownDeviceAllowlist()
        self._rogue_window = rogue_window
        self._scorer = reputation_scorer
        self._max_hosts = max_concurrent_hosts
        self._resolve_hostnames = resolve_hostnames
        self._bus = event_bus
        self._clock = clock
        self._active: ScanHandle | None = None

    @property
    def is_scanning(self) -> bool:
        return self._active is not None and not self._active.done()

    def start_scan(
        self,
        subnet: str,
        mode: ScanMode | str = ScanMode.QUICK,
        ports: Iterable[int] | None = None,
        known_devices: Iterable[Device] | None = None,
    ) -> ScanHandle:
        """Validate inputs and start a scan in the background.

        Must be called from a running event loop.

        Parameters
        ----------
        subnet:
            Subnet prefix (``"192.168.1"``), /24 CIDR or ``"auto"``.
        mode:
            Port-set preset, ignored when *ports* is given.
        ports:
            Explicit port list.
        known_devices:
            Devices from earlier scans; their ``first_seen`` is preserved.

        Raises
        ------
        ConfigurationError:
            Invalid subnet or port set. Nothing has touched the network yet.
        ScanInProgressError:
            Another scan from this orchestrator is still running.
        """
        if self.is_scanning:
            raise ScanInProgressError("a scan is already running")
        prefix = normalize_subnet(subnet)
        port_list = validate_ports(ports) if ports is not None else ports_for_mode(mode)

        handle = ScanHandle(prefix)
        handle._task = asyncio.create_task(
            self._run(handle, prefix, port_list, list(known_devices or []))
        )
        self._active = handle
        return handle

    async def run_scan(
        self,
        subnet: str,
        mode: ScanMode | str = ScanMode.QUICK,
        ports: Iterable[int] | None = None,
        known_devices: Iterable[Device] | None = None,
    ) -> ScanOutcome:
        """Start a scan and wait for its outcome."""
        handle = self.start_scan(subnet, mode=mode, ports=ports, known_devices=known_devices)
        return await handle.result()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def _run(
        self,
        handle: ScanHandle,
        prefix: str,
        ports: list[int],
        known_devices: list[Device],
    ) -> ScanOutcome:
        start = time.monotonic()
        inventory: dict[str, Device] = {}
        os_hints: dict[str, list[str | None]] = {}
        reputations: dict[str, DeviceReputation] = {}
        logger.info("Starting scan of %s.0/24 (%d ports)", prefix, len(ports))
        await self._publish(EventType.SCAN_STARTED, {"subnet": prefix, "port_count": len(ports)})

        try:
            # ---- Discovering ----
            await self._transition(handle, ScanState.DISCOVERING, _DISCOVERY_SPAN[0], f"Discovering hosts on {prefix}.0/24")
            low, high = _DISCOVERY_SPAN
            discovery = await self._discoverer.discover(
                prefix,
                progress=lambda f, text: handle._emit(low + (high - low) * f, text),
                cancel_event=handle._cancel_event,
            )
            now = self._clock()
            previous = _index_previous(known_devices)
            for ip in discovery.ips:
                inventory[ip] = _new_device(ip, discovery.macs.get(ip), now, previous)
            logger.info("Discovery found %d hosts", len(inventory))

            # ---- Scanning ----
            if not handle.cancel_requested:
                await self._transition(handle, ScanState.SCANNING, _SCANNING_SPAN[0], f"Scanning {len(inventory)} hosts")
                await self._scan_hosts(handle, inventory, os_hints, ports)

            if handle.cancel_requested:
                self._enrich(inventory, os_hints)
                return await self._finish(handle, ScanState.CANCELLED, prefix, inventory, start)

            # ---- Classifying ----
            await self._transition(handle, ScanState.CLASSIFYING, _CLASSIFYING_AT, "Classifying devices")
            self._enrich(inventory, os_hints)

            # ---- Scoring ----
            await self._transition(handle, ScanState.SCORING, _SCORING_AT, "Scoring devices")
            if self._scorer is not None:
                for device in inventory.values():
                    reputations[device.device_id] = self._scorer.score(device)
            for device in inventory.values():
                if device.is_rogue:
                    await self._publish(
                        EventType.DEVICE_ROGUE,
                        {"ip_address": device.ip_address, "mac_address": device.mac_address},
                    )

            return await self._finish(handle, ScanState.COMPLETE, prefix, inventory, start, reputations=reputations)

        except asyncio.CancelledError:
            handle.state = ScanState.CANCELLED
            raise
        except Exception as exc:
            logger.exception("Scan of %s.0/24 failed", prefix)
            return await self._finish(
                handle, ScanState.FAILED, prefix, inventory, start, error=str(exc) or type(exc).__name__,
            )
        finally:
            handle._close()

    async def _scan_hosts(
        self,
        handle: ScanHandle,
        inventory: dict[str, Device],
        os_hints: dict[str, list[str | None]],
        ports: list[int],
    ) -> None:
        """Scan every discovered host and fold results into *inventory*."""
        targets = sorted(inventory, key=ip_sort_key)
        if not targets:
            return
        reports: asyncio.Queue[_HostReport] = asyncio.Queue()
        host_slots = asyncio.Semaphore(self._max_hosts)

        async def worker(ip: str) -> None:
            report = _HostReport(ip=ip, results=[])
            async with host_slots:
                if not handle.cancel_requested:
                    try:
                        report.results = await self._scanner.scan_host(ip, ports, handle._cancel_event)
                        if self._resolve_hostnames and not handle.cancel_requested:
                            report.hostname = await resolve_hostname(ip)
                    except Exception as exc:
                        report.error = exc
            reports.put_nowait(report)

        workers = [asyncio.create_task(worker(ip)) for ip in targets]
        low, high = _SCANNING_SPAN
        try:
            for completed in range(1, len(targets) + 1):
                report = await reports.get()
                if report.error is not None:
                    logger.warning("Port scan of %s failed: %s", report.ip, report.error)
                latencies = [r.latency_ms for r in report.results if r.latency_ms is not None]
                update: dict[str, object] = {
                    "open_ports": [r.to_port_info() for r in report.results],
                    "response_time_ms": min(latencies) if latencies else None,
                }
                if report.hostname:
                    update["hostname"] = report.hostname
                device = inventory[report.ip].model_copy(update=update)
                inventory[report.ip] = device
                os_hints[report.ip] = [r.os_hint for r in report.results]
                handle._emit(
                    low + (high - low) * completed / len(targets),
                    f"Scanned {report.ip} ({completed}/{len(targets)})",
                    device=device,
                )
                await self._publish(
                    EventType.DEVICE_DISCOVERED,
                    {
                        "ip_address": device.ip_address,
                        "mac_address": device.mac_address,
                        "open_ports": sorted(device.port_numbers),
                    },
                )
        finally:
            for task in workers:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    def _enrich(self, inventory: dict[str, Device], os_hints: dict[str, list[str | None]]) -> None:
        """Fill manufacturer, device type, OS and trust status in place."""
        now = self._clock()
        for ip, device in list(inventory.items()):
            manufacturer = device.manufacturer or lookup_manufacturer(device.mac_address)
            inventory[ip] = device.model_copy(update={
                "manufacturer": manufacturer,
                "device_type": classify_device(device.port_numbers, manufacturer, device.hostname),
                "operating_system": device.operating_system
                or detect_operating_system(device.open_ports, os_hints.get(ip, [])),
            })
        for device in apply_trust_status(inventory.values(), self.allowlist, self._rogue_window, now):
            inventory[device.ip_address] = device

    async def _transition(self, handle: ScanHandle, state: ScanState, fraction: float, text: str) -> None:
        handle.state = state
        handle._emit(fraction, text)
        await self._publish(
            EventType.SCAN_PROGRESS,
            {"subnet": handle.subnet, "state": state.value, "fraction": handle.fraction, "status": text},
        )

    async def _finish(
        self,
        handle: ScanHandle,
        state: ScanState,
        prefix: str,
        inventory: dict[str, Device],
        start: float,
        error: str | None = None,
        reputations: dict[str, DeviceReputation] | None = None,
    ) -> ScanOutcome:
        devices = sorted(inventory.values(), key=lambda d: ip_sort_key(d.ip_address))
        outcome = ScanOutcome(
            state=state,
            subnet=prefix,
            inventory=DeviceInventory(devices),
            duration_ms=int((time.monotonic() - start) * 1000),
            error=error,
            reputations=reputations or {},
        )
        handle.state = state
        if state is ScanState.COMPLETE:
            handle._emit(1.0, f"Scan complete: {len(devices)} devices")
        else:
            handle._emit(handle.fraction, f"Scan {state.value}: {len(devices)} devices")

        event_type = {
            ScanState.COMPLETE: EventType.SCAN_COMPLETE,
            ScanState.CANCELLED: EventType.SCAN_CANCELLED,
            ScanState.FAILED: EventType.SCAN_FAILED,
        }[state]
        await self._publish(
            event_type,
            {
                "subnet": prefix,
                "device_count": len(devices),
                "scan_duration_ms": outcome.duration_ms,
                "error": error,
            },
        )
        logger.info(
            "Scan of %s.0/24 %s: %d devices in %dms",
            prefix, state.value, len(devices), outcome.duration_ms,
        )
        return outcome

    async def _publish(self, event_type: str, payload: dict) -> None:
        if self._bus is not None:
            await self._bus.publish(event_type, payload)


def _index_previous(devices: list[Device]) -> dict[str, Device]:
    index: dict[str, Device] = {}
    for device in devices:
        index[device.ip_address] = device
        if device.mac_address:
            index[device.mac_address.lower()] = device
    return index


def _new_device(ip: str, mac: str | None, now: datetime, previous: dict[str, Device]) -> Device:
    """Create the inventory entry for a discovered host.

    A device matched by MAC (or by IP when no MAC is known) keeps its
    original ``first_seen`` and descriptive fields.
    """
    prior = previous.get(mac.lower()) if mac else None
    if prior is None:
        candidate = previous.get(ip)
        if candidate is not None and (
            mac is None or candidate.mac_address is None or candidate.mac_address.lower() == mac.lower()
        ):
            prior = candidate
    if prior is None:
        return Device(ip_address=ip, mac_address=mac, first_seen=now, last_seen=now)
    return Device(
        ip_address=ip,
        mac_address=mac or prior.mac_address,
        hostname=prior.hostname,
        manufacturer=prior.manufacturer,
        first_seen=min(prior.first_seen, now),
        last_seen=now,
    )
