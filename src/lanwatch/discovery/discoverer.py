"""Multi-phase host discovery for a /24 subnet.

Four phases run in strict sequence, each adding to a running set of live
addresses:

  Phase 1: ARP cache        (progress 0.00-0.20)
  Phase 2: known last-octets, short timeout  (0.20-0.25)
  Phase 3: common ranges, medium timeout     (0.25-0.50)
  Phase 4: full 1-254 sweep, standard timeout (0.50-1.00)

Fast phases surface the usual hosts early while the exhaustive sweep runs
last. Each address is probed at most once per phase and a failed probe
simply means "no host there"; later phases skip addresses already found,
so the discovered set only ever grows.
"""
from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Sequence

from lanwatch.discovery.liveness import HostLivenessProbe
from lanwatch.errors import ConfigurationError
from lanwatch.models import ip_sort_key

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]

DEFAULT_KNOWN_OCTETS: tuple[int, ...] = (
    1, 9, 21, 22, 28, 33, 36, 50, 51, 52, 53, 54, 57, 61, 63, 66, 67, 76,
    78, 80, 81, 83, 98, 102, 109, 118, 119, 122, 123, 128, 134, 135, 136,
    138, 141, 148, 154, 155, 156, 160, 161, 164, 179, 193, 199, 200,
)

DEFAULT_COMMON_RANGES: tuple[tuple[int, int], ...] = (
    (1, 10),
    (20, 100),
    (100, 200),
    (200, 254),
)

_FALLBACK_PREFIX = "192.168.1"


class DiscoveryPhase(str, Enum):
    ARP = "arp"
    KNOWN = "known"
    COMMON = "common"
    SWEEP = "sweep"


# phase -> (progress start, progress end, status label)
_PHASE_SPANS: dict[DiscoveryPhase, tuple[float, float, str]] = {
    DiscoveryPhase.ARP: (0.0, 0.20, "Reading ARP cache"),
    DiscoveryPhase.KNOWN: (0.20, 0.25, "Checking known devices"),
    DiscoveryPhase.COMMON: (0.25, 0.50, "Scanning common address ranges"),
    DiscoveryPhase.SWEEP: (0.50, 1.0, "Sweeping full subnet"),
}


@dataclass
class DiscoveryResult:
    """Addresses found by a discovery run."""

    prefix: str
    ips: list[str] = field(default_factory=list)
    macs: dict[str, str] = field(default_factory=dict)
    phase_counts: dict[DiscoveryPhase, int] = field(default_factory=dict)
    cancelled: bool = False


# ---------------------------------------------------------------------------
# Subnet handling
# ---------------------------------------------------------------------------

def _detect_local_prefix() -> str:
    """Return the /24 prefix of the interface used for the default route."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            s.connect(("8.8.8.8", 80))
            local_ip = s.getsockname()[0]
        finally:
            s.close()
        prefix = local_ip.rsplit(".", 1)[0]
        logger.info("Auto-detected subnet: %s.0/24 (from local IP %s)", prefix, local_ip)
        return prefix
    except OSError:
        logger.warning("Subnet auto-detection failed, falling back to %s.0/24", _FALLBACK_PREFIX)
        return _FALLBACK_PREFIX


def normalize_subnet(subnet: str) -> str:
    """Normalize a subnet description to its three-octet prefix.

    Accepts ``"192.168.1"``, ``"192.168.1.0/24"``, a host address such as
    ``"192.168.1.17"`` or ``"auto"``.

    Raises
    ------
    ConfigurationError:
        If *subnet* is not one of the accepted forms.
    """
    value = (subnet or "").strip()
    if value.lower() == "auto":
        return _detect_local_prefix()

    if "/" in value:
        try:
            network = ipaddress.IPv4Network(value, strict=False)
        except ValueError as exc:
            raise ConfigurationError(f"invalid subnet: {subnet!r}") from exc
        if network.prefixlen != 24:
            raise ConfigurationError(f"only /24 subnets are supported, got {subnet!r}")
        return str(network.network_address).rsplit(".", 1)[0]

    parts = value.split(".")
    if len(parts) == 3:
        parts = parts + ["0"]
    if len(parts) != 4:
        raise ConfigurationError(f"invalid subnet: {subnet!r}")
    try:
        address = ipaddress.IPv4Address(".".join(parts))
    except ValueError as exc:
        raise ConfigurationError(f"invalid subnet: {subnet!r}") from exc
    return str(address).rsplit(".", 1)[0]


def _validate_octets(octets: Iterable[int]) -> tuple[int, ...]:
    result = tuple(octets)
    for octet in result:
        if not 1 <= octet <= 254:
            raise ConfigurationError(f"host octet out of range: {octet}")
    return result


def _expand_ranges(ranges: Iterable[tuple[int, int]]) -> list[int]:
    octets: list[int] = []
    for low, high in ranges:
        octets.extend(range(low, high + 1))
    return octets


# ---------------------------------------------------------------------------
# Discoverer
# ---------------------------------------------------------------------------

class HostDiscoverer:
    """Finds live hosts on a /24 using a pluggable liveness probe.

    Parameters
    ----------
    liveness:
        Strategy used for the ARP phase and for every per-address probe.
    known_octets:
        Last octets of previously seen hosts, tried first.
    common_ranges:
        Inclusive (low, high) last-octet ranges tried in phase 3.
    known_timeout, common_timeout, sweep_timeout:
        Per-probe timeout in seconds for phases 2, 3 and 4.
    max_concurrent:
        Maximum liveness probes in flight at once.
    """

    def __init__(
        self,
        liveness: HostLivenessProbe,
        known_octets: Sequence[int] = DEFAULT_KNOWN_OCTETS,
        common_ranges: Sequence[tuple[int, int]] = DEFAULT_COMMON_RANGES,
        known_timeout: float = 0.3,
        common_timeout: float = 0.4,
        sweep_timeout: float = 0.5,
        max_concurrent: int = 64,
    ) -> None:
        for timeout in (known_timeout, common_timeout, sweep_timeout):
            if timeout <= 0:
                raise ConfigurationError(f"timeout must be positive, got {timeout}")
        if max_concurrent < 1:
            raise ConfigurationError(f"max_concurrent must be >= 1, got {max_concurrent}")
        self._liveness = liveness
        self._known_octets = _validate_octets(known_octets)
        self._common_octets = _validate_octets(_expand_ranges(common_ranges))
        self._timeouts = {
            DiscoveryPhase.KNOWN: known_timeout,
            DiscoveryPhase.COMMON: common_timeout,
            DiscoveryPhase.SWEEP: sweep_timeout,
        }
        self._max_concurrent = max_concurrent

    async def discover(
        self,
        subnet: str,
        progress: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> DiscoveryResult:
        """Run all four phases against *subnet*.

        If *cancel_event* is set, no further probes are issued; the addresses
        found so far are returned with ``cancelled=True``.

        Raises
        ------
        ConfigurationError:
            If *subnet* is invalid. Raised before any probe is sent.
        """
        prefix = normalize_subnet(subnet)
        result = DiscoveryResult(prefix=prefix)
        found: set[str] = set()
        semaphore = asyncio.Semaphore(self._max_concurrent)

        def report(fraction: float, text: str) -> None:
            if progress is not None:
                progress(min(fraction, 1.0), text)

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        # ---- Phase 1: ARP cache ----
        start, end, label = _PHASE_SPANS[DiscoveryPhase.ARP]
        report(start, label)
        entries = await self._liveness.arp_table(prefix)
        for entry in entries:
            found.add(entry.ip)
            result.macs.setdefault(entry.ip, entry.mac)
        result.phase_counts[DiscoveryPhase.ARP] = len(found)
        report(end, f"ARP cache: {len(found)} hosts")
        logger.info("Phase arp complete: %d hosts", len(found))

        # ---- Phases 2-4: active probing ----
        phase_octets = {
            DiscoveryPhase.KNOWN: self._known_octets,
            DiscoveryPhase.COMMON: self._common_octets,
            DiscoveryPhase.SWEEP: tuple(range(1, 255)),
        }
        for phase, octets in phase_octets.items():
            if cancelled():
                break
            added = await self._probe_phase(
                phase, prefix, octets, found, semaphore, report, cancel_event,
            )
            result.phase_counts[phase] = added
            logger.info("Phase %s complete: %d new hosts (%d total)", phase.value, added, len(found))

        result.ips = sorted(found, key=ip_sort_key)
        result.cancelled = cancelled()
        if not result.cancelled:
            report(1.0, f"Discovery complete: {len(result.ips)} hosts")
        return result

    async def _probe_phase(
        self,
        phase: DiscoveryPhase,
        prefix: str,
        octets: Sequence[int],
        found: set[str],
        semaphore: asyncio.Semaphore,
        report: ProgressCallback,
        cancel_event: asyncio.Event | None,
    ) -> int:
        start, end, label = _PHASE_SPANS[phase]
        timeout = self._timeouts[phase]
        candidates = list(dict.fromkeys(
            f"{prefix}.{octet}" for octet in octets if f"{prefix}.{octet}" not in found
        ))
        report(start, label)
        if not candidates:
            report(end, label)
            return 0

        total = len(candidates)
        done = 0
        added = 0

        async def check(ip: str) -> None:
            nonlocal done, added
            async with semaphore:
                if cancel_event is not None and cancel_event.is_set():
                    return
                try:
                    alive = await self._liveness.is_alive(ip, timeout)
                except Exception:
                    logger.debug("Liveness probe for %s raised", ip, exc_info=True)
                    alive = False
            if alive and ip not in found:
                found.add(ip)
                added += 1
            done += 1
            report(start + (end - start) * done / total, f"{label} ({len(found)} found)")

        await asyncio.gather(*(check(ip) for ip in candidates))
        return added
