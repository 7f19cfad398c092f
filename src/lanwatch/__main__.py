"""lanwatch -- command-line entry point.

Usage::

    python -m lanwatch scan [--subnet S] [--mode M] [--ports 22,80] [--json]
    python -m lanwatch schedule [list|add|remove|toggle|run]
    python -m lanwatch known [list|add|remove]

A scan runs through these steps:
    1. Load configuration (defaults < file < persisted < env vars)
    2. Open the store and run migrations
    3. Build discoverer, port scanner and orchestrator from settings
    4. Run the scan, streaming progress to the log
    5. Record uptime observations and recompute reputations
    6. Diff against the stored inventory, summarise threats and compliance,
       print the report
    7. Persist devices, uptime, reputations and the scan history row
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import Any

from lanwatch.config import Settings, load_settings
from lanwatch.db.store import (
    ALLOWLIST_KEY,
    KeyValueStore,
    SqliteStore,
    create_store,
    load_devices,
    load_uptime_records,
    save_devices,
    save_reputations,
    save_uptime_records,
)
from lanwatch.devices.rogue import KnownDeviceAllowlist
from lanwatch.discovery.arp import create_arp_reader
from lanwatch.discovery.discoverer import DEFAULT_KNOWN_OCTETS, HostDiscoverer
from lanwatch.discovery.liveness import TcpLivenessProbe
from lanwatch.errors import LanwatchError
from lanwatch.events.bus import EventBus
from lanwatch.events.types import EventType
from lanwatch.models import Device, DeviceReputation, ScanSchedule
from lanwatch.scanner.banner import BannerGrabber
from lanwatch.scanner.orchestrator import ScanOrchestrator, ScanOutcome
from lanwatch.scanner.port_scanner import PortScanner
from lanwatch.scanner.ports import ScanMode, parse_port_spec
from lanwatch.scanner.probe import PortProbe
from lanwatch.scheduling.scheduler import ScanScheduler
from lanwatch.security.changes import DeviceChange, detect_changes
from lanwatch.security.compliance import ComplianceChecker, ComplianceReport
from lanwatch.security.reputation import ReputationStore
from lanwatch.security.threats import NetworkThreatSummary, summarize
from lanwatch.uptime.tracker import UptimeTracker

logger = logging.getLogger("lanwatch")


# ---------------------------------------------------------------------------
# Integration seams -- thin wrappers around real subsystem constructors.
# These are module-level names so tests can patch them individually.
# ---------------------------------------------------------------------------


def load_config(config_path: str | None) -> Settings:
    """Load settings from a YAML file or the built-in defaults."""
    return load_settings(config_path=Path(config_path) if config_path else None)


async def open_store(settings: Settings) -> KeyValueStore:
    """Create the configured store and apply migrations."""
    path = settings.storage.db_path
    store = create_store(settings.storage.backend, path)
    if isinstance(store, SqliteStore):
        path.parent.mkdir(parents=True, exist_ok=True)
        await store.open()
    return store


async def close_store(store: KeyValueStore) -> None:
    if isinstance(store, SqliteStore):
        await store.close()


async def load_allowlist(settings: Settings, store: KeyValueStore) -> KnownDeviceAllowlist:
    """Known devices from configuration, overlaid with the stored list."""
    allowlist = KnownDeviceAllowlist(settings.known_devices)
    for mac, name in (await store.load(ALLOWLIST_KEY) or {}).items():
        allowlist.add(mac, name)
    return allowlist


def create_orchestrator(
    settings: Settings,
    allowlist: KnownDeviceAllowlist,
    event_bus: EventBus | None = None,
) -> ScanOrchestrator:
    """Wire discovery and port scanning from settings."""
    scanner_cfg = settings.scanner
    discovery_cfg = settings.discovery

    liveness = TcpLivenessProbe(
        probe=PortProbe(timeout=discovery_cfg.sweep_timeout),
        ports=discovery_cfg.liveness_ports,
        arp_reader=create_arp_reader(discovery_cfg.arp_source),
    )
    discoverer = HostDiscoverer(
        liveness,
        known_octets=discovery_cfg.known_octets or DEFAULT_KNOWN_OCTETS,
        known_timeout=discovery_cfg.known_timeout,
        common_timeout=discovery_cfg.common_timeout,
        sweep_timeout=discovery_cfg.sweep_timeout,
        max_concurrent=discovery_cfg.max_concurrent_probes,
    )
    port_scanner = PortScanner(
        probe=PortProbe(timeout=scanner_cfg.port_timeout),
        banner_grabber=BannerGrabber(timeout=scanner_cfg.banner_timeout),
        max_concurrent=scanner_cfg.max_concurrent_probes,
        grab_banners=scanner_cfg.grab_banners,
    )
    return ScanOrchestrator(
        discoverer,
        port_scanner,
        allowlist=allowlist,
        rogue_window=timedelta(minutes=settings.reputation.rogue_window_minutes),
        max_concurrent_hosts=scanner_cfg.max_concurrent_hosts,
        resolve_hostnames=scanner_cfg.resolve_hostnames,
        event_bus=event_bus,
    )


# ---------------------------------------------------------------------------
# Scan
# ---------------------------------------------------------------------------


async def perform_scan(
    settings: Settings,
    store: KeyValueStore,
    orchestrator: ScanOrchestrator,
    subnet: str | None = None,
    mode: str | None = None,
    ports: list[int] | None = None,
    event_bus: EventBus | None = None,
) -> dict[str, Any]:
    """Run one scan, update uptime and reputation, persist, and build the report.

    Changes against the stored inventory are reported (and published on
    *event_bus*) only for complete scans that have a previous inventory to
    compare with.
    """
    known = await load_devices(store)
    handle = orchestrator.start_scan(
        subnet or settings.discovery.subnet,
        mode=mode or settings.scanner.mode,
        ports=ports,
        known_devices=known,
    )
    async for progress in handle.events():
        logger.debug("[%3.0f%%] %s", progress.fraction * 100, progress.status_text)
    outcome = await handle.result()

    tracker = UptimeTracker(
        max_observations=settings.uptime.max_observations,
        records=await load_uptime_records(store),
    )
    devices = list(outcome.inventory)
    reputations: dict[str, DeviceReputation] = {}
    changes: list[DeviceChange] = []
    if outcome.succeeded:
        if known:
            changes = detect_changes(known, devices)
            await _publish_changes(event_bus, changes)
        tracker.record_scan_results(
            {d.device_id: d.response_time_ms for d in devices},
            known_ids=[d.device_id for d in known],
        )
        reputation_store = ReputationStore()
        reputation_store.calculate_all(devices, tracker.records())
        reputations = reputation_store.all()

        await save_devices(store, _merge_inventory(known, devices))
        await save_uptime_records(store, tracker.records())
        await save_reputations(store, reputations)

    await store.record_scan(
        outcome.subnet,
        outcome.state.value,
        len(devices),
        outcome.duration_ms,
        error=outcome.error,
    )
    return build_report(
        outcome,
        reputations,
        summarize(devices),
        ComplianceChecker().run(devices),
        changes=changes,
        unreliable=tracker.unreliable_devices(settings.uptime.unreliable_threshold),
    )


async def _publish_changes(event_bus: EventBus | None, changes: list[DeviceChange]) -> None:
    if event_bus is None:
        return
    for change in changes:
        await event_bus.publish(EventType.DEVICE_CHANGED, change.to_dict())


def _merge_inventory(known: list[Device], scanned: list[Device]) -> list[Device]:
    """Keep devices not seen this time (marked offline) alongside fresh ones."""
    scanned_ids = {d.device_id for d in scanned}
    stale = [
        d.model_copy(update={"is_online": False})
        for d in known
        if d.device_id not in scanned_ids
    ]
    return scanned + stale


def build_report(
    outcome: ScanOutcome,
    reputations: dict[str, DeviceReputation],
    threats: NetworkThreatSummary,
    compliance: ComplianceReport,
    changes: list[DeviceChange] | None = None,
    unreliable: list[tuple[str, float]] | None = None,
) -> dict[str, Any]:
    devices = []
    for device in outcome.inventory:
        reputation = reputations.get(device.device_id)
        devices.append({
            **device.model_dump(mode="json"),
            "reputation": reputation.score if reputation else None,
            "rating": reputation.rating.value if reputation else None,
        })
    return {
        "subnet": f"{outcome.subnet}.0/24",
        "state": outcome.state.value,
        "duration_ms": outcome.duration_ms,
        "error": outcome.error,
        "devices": devices,
        "changes": [c.to_dict() for c in changes or []],
        "unreliable_devices": [
            {"device_id": device_id, "uptime_percentage": round(pct, 1)}
            for device_id, pct in unreliable or []
        ],
        "threats": {
            "risk_score": threats.risk_score,
            "risk_level": threats.risk_level,
            "critical": threats.critical_count,
            "high": threats.high_count,
            "medium": threats.medium_count,
            "low": threats.low_count,
            "findings": [
                {
                    "ip_address": f.ip_address,
                    "title": f.title,
                    "severity": f.severity.value,
                    "category": f.category.value,
                    "port": f.port,
                    "remediation": f.remediation,
                }
                for f in threats.findings
            ],
        },
        "compliance": {
            "score": compliance.score,
            "grade": compliance.grade,
            "status": compliance.status,
            "failures": [
                {"check_id": c.check_id, "title": c.title, "affected": list(c.affected)}
                for c in compliance.failures()
            ],
        },
    }


def format_report(report: dict[str, Any]) -> str:
    lines = [
        f"Scan of {report['subnet']}: {report['state']} "
        f"({len(report['devices'])} devices, {report['duration_ms']} ms)",
    ]
    if report["error"]:
        lines.append(f"  error: {report['error']}")
    for device in report["devices"]:
        ports = ",".join(str(p["port"]) for p in device["open_ports"]) or "-"
        flags = " ROGUE" if device["is_rogue"] else ""
        rep = f" rep={device['reputation']}" if device["reputation"] is not None else ""
        lines.append(
            f"  {device['ip_address']:<15} {device['mac_address'] or '-':<17} "
            f"{device['device_type']:<8} ports={ports}{rep}{flags}"
        )
    threats = report["threats"]
    lines.append(
        f"Risk: {threats['risk_level']} ({threats['risk_score']}/100), "
        f"{threats['critical']} critical, {threats['high']} high findings"
    )
    for finding in threats["findings"]:
        lines.append(f"  [{finding['severity']}] {finding['ip_address']}: {finding['title']}")
    if report["changes"]:
        lines.append(f"Changes since last scan: {len(report['changes'])}")
        for change in report["changes"]:
            lines.append(f"  [{change['severity']}] {change['ip_address']}: {change['details']}")
    compliance = report["compliance"]
    lines.append(f"Compliance: {compliance['grade']} ({compliance['score']}%, {compliance['status']})")
    for failure in compliance["failures"]:
        lines.append(f"  {failure['check_id']} {failure['title']}: {', '.join(failure['affected'])}")
    for entry in report["unreliable_devices"]:
        lines.append(f"  unreliable: {entry['device_id']} ({entry['uptime_percentage']}% uptime)")
    return "\n".join(lines)


async def run_scan_command(args: argparse.Namespace) -> int:
    settings = load_config(args.config)
    ports = parse_port_spec(args.ports) if args.ports else None
    store = await open_store(settings)
    try:
        allowlist = await load_allowlist(settings, store)
        orchestrator = create_orchestrator(settings, allowlist)
        report = await perform_scan(
            settings, store, orchestrator, subnet=args.subnet, mode=args.mode, ports=ports,
        )
    finally:
        await close_store(store)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(format_report(report))
    return 0 if report["state"] == "complete" else 1


# ---------------------------------------------------------------------------
# Schedules
# ---------------------------------------------------------------------------


async def run_schedule_command(args: argparse.Namespace) -> int:
    settings = load_config(args.config)
    store = await open_store(settings)
    try:
        allowlist = await load_allowlist(settings, store)
        event_bus = EventBus()
        orchestrator = create_orchestrator(settings, allowlist, event_bus)

        async def runner(schedule: ScanSchedule) -> None:
            report = await perform_scan(
                settings, store, orchestrator,
                mode=ScanMode.for_scan_type(schedule.scan_type).value,
                event_bus=event_bus,
            )
            logger.info(
                "Scheduled scan %r finished: %s, %d devices",
                schedule.name, report["state"], len(report["devices"]),
            )

        scheduler = ScanScheduler(
            runner,
            store=store,
            check_interval=settings.scheduler.check_interval_seconds,
            is_scanning=lambda: orchestrator.is_scanning,
            event_bus=event_bus,
        )
        await scheduler.load(settings.scheduler.defaults)

        action = args.action
        if action == "add":
            schedule = await scheduler.add(args.name, args.scan_type, args.interval)
            print(f"Added {schedule.id} {schedule.name}")
        elif action == "remove":
            if not await scheduler.remove(args.id):
                print(f"No schedule {args.id}", file=sys.stderr)
                return 1
        elif action == "toggle":
            schedule = await scheduler.toggle(args.id)
            print(f"{schedule.name}: {'enabled' if schedule.enabled else 'disabled'}")
        elif action == "run":
            await scheduler.start()
            try:
                await asyncio.Event().wait()
            finally:
                await scheduler.stop()
        else:
            for schedule in scheduler.schedules:
                state = "on " if schedule.enabled else "off"
                print(
                    f"{schedule.id}  {state}  {schedule.scan_type.value:<5}  "
                    f"every {schedule.interval_seconds}s  next {schedule.next_run:%Y-%m-%d %H:%M}  {schedule.name}"
                )
    finally:
        await close_store(store)
    return 0


# ---------------------------------------------------------------------------
# Known devices
# ---------------------------------------------------------------------------


async def run_known_command(args: argparse.Namespace) -> int:
    settings = load_config(args.config)
    store = await open_store(settings)
    try:
        stored = KnownDeviceAllowlist(await store.load(ALLOWLIST_KEY) or {})
        if args.action == "add":
            stored.add(args.mac, args.name)
            await store.save(ALLOWLIST_KEY, stored.to_dict())
        elif args.action == "remove":
            if not stored.remove(args.mac):
                print(f"{args.mac} is not a known device", file=sys.stderr)
                return 1
            await store.save(ALLOWLIST_KEY, stored.to_dict())
        else:
            allowlist = await load_allowlist(settings, store)
            for mac, name in sorted(allowlist.to_dict().items()):
                print(f"{mac}  {name}")
    finally:
        await close_store(store)
    return 0


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv:
        Argument list.  Defaults to ``sys.argv[1:]`` when ``None``.
    """
    parser = argparse.ArgumentParser(
        prog="lanwatch",
        description="Local network discovery and security assessment",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_config(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", type=str, default=None, help="Path to YAML configuration file")

    scan = sub.add_parser("scan", help="Scan the local network once")
    add_config(scan)
    scan.add_argument("--subnet", default=None, help="Subnet prefix or /24 CIDR (default: auto)")
    scan.add_argument("--mode", choices=[m.value for m in ScanMode], default=None, help="Port-set preset")
    scan.add_argument("--ports", default=None, help="Explicit ports, e.g. 22,80,8000-8010")
    scan.add_argument("--json", action="store_true", help="Print the report as JSON")

    schedule = sub.add_parser("schedule", help="Manage or run recurring scans")
    add_config(schedule)
    schedule_sub = schedule.add_subparsers(dest="action")
    schedule_sub.add_parser("list")
    add = schedule_sub.add_parser("add")
    add.add_argument("name")
    add.add_argument("--scan-type", choices=["quick", "full", "deep"], default="quick")
    add.add_argument("--interval", type=int, default=3600, help="Seconds between runs")
    for name in ("remove", "toggle"):
        schedule_sub.add_parser(name).add_argument("id")
    schedule_sub.add_parser("run")

    known = sub.add_parser("known", help="Manage the known-device allowlist")
    add_config(known)
    known_sub = known.add_subparsers(dest="action")
    known_sub.add_parser("list")
    known_add = known_sub.add_parser("add")
    known_add.add_argument("mac")
    known_add.add_argument("name", nargs="?", default="")
    known_sub.add_parser("remove").add_argument("mac")

    return parser.parse_args(argv)


_COMMANDS = {
    "scan": run_scan_command,
    "schedule": run_schedule_command,
    "known": run_known_command,
}


# ---------------------------------------------------------------------------
# Script entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args and run the selected command."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return asyncio.run(_COMMANDS[args.command](args))
    except (LanwatchError, ValueError, KeyError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
