"""Readers for the local ARP (neighbor) cache.

Reading the neighbor cache is platform dependent and sometimes impossible
(sandboxed processes, containers without host networking). Every reader
therefore may return an empty list; that is a capability gap, not an error.

Readers:
- ``ProcNetArpReader``: parses ``/proc/net/arp`` on Linux.
- ``ArpCommandReader``: parses ``arp -a`` output (macOS, BSD, Linux net-tools).
- ``ScapyArpReader``: active broadcast ARP sweep via scapy (requires root).
- ``NullArpReader``: always empty.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

from lanwatch.devices.oui import normalize_mac

logger = logging.getLogger(__name__)

_INCOMPLETE_MACS = frozenset({"00:00:00:00:00:00", "ff:ff:ff:ff:ff:ff"})

# ? (192.168.1.1) at aa:bb:cc:dd:ee:ff on en0 ifscope [ethernet]
# ? (192.168.1.1) at aa:bb:cc:dd:ee:ff [ether] on eth0
_ARP_LINE_RE = re.compile(
    r"\((?P<ip>\d{1,3}(?:\.\d{1,3}){3})\)\s+at\s+(?P<mac>[0-9A-Fa-f:.-]+)"
    r"(?:\s+\[\w+\])?(?:\s+on\s+(?P<iface>\S+))?"
)


@dataclass(frozen=True)
class ArpEntry:
    """One resolved neighbor-cache entry."""

    ip: str
    mac: str
    interface: str | None = None


def _in_prefix(ip: str, prefix: str | None) -> bool:
    if prefix is None:
        return True
    head, _, last = ip.rpartition(".")
    return head == prefix and last.isdigit() and 1 <= int(last) <= 254


def _clean_entry(ip: str, mac: str, interface: str | None) -> ArpEntry | None:
    normalized = normalize_mac(mac)
    if normalized is None or normalized in _INCOMPLETE_MACS:
        return None
    return ArpEntry(ip=ip, mac=normalized, interface=interface)


def parse_proc_net_arp(text: str, prefix: str | None = None) -> list[ArpEntry]:
    """Parse the contents of ``/proc/net/arp``.

    Entries with flags ``0x0`` (incomplete) are skipped.
    """
    entries: list[ArpEntry] = []
    for line in text.splitlines()[1:]:
        fields = line.split()
        if len(fields) < 6:
            continue
        ip, _hw_type, flags, mac, _mask, device = fields[:6]
        if flags == "0x0" or not _in_prefix(ip, prefix):
            continue
        entry = _clean_entry(ip, mac, device)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_arp_command(text: str, prefix: str | None = None) -> list[ArpEntry]:
    """Parse ``arp -a`` output. Lines with ``(incomplete)`` are skipped."""
    entries: list[ArpEntry] = []
    for line in text.splitlines():
        match = _ARP_LINE_RE.search(line)
        if not match or not _in_prefix(match.group("ip"), prefix):
            continue
        entry = _clean_entry(match.group("ip"), match.group("mac"), match.group("iface"))
        if entry is not None:
            entries.append(entry)
    return entries


class ArpReader(ABC):
    """Source of (ip, mac) pairs for hosts the local machine already knows."""

    @abstractmethod
    async def read(self, prefix: str) -> list[ArpEntry]:
        """Return neighbor entries within the /24 identified by *prefix*.

        Parameters
        ----------
        prefix:
            First three octets, e.g. ``"192.168.1"``.
        """


class NullArpReader(ArpReader):
    """Reader for environments without neighbor-cache access."""

    async def read(self, prefix: str) -> list[ArpEntry]:
        return []


class ProcNetArpReader(ArpReader):
    def __init__(self, path: pathlib.Path = pathlib.Path("/proc/net/arp")) -> None:
        self._path = path

    async def read(self, prefix: str) -> list[ArpEntry]:
        try:
            text = self._path.read_text()
        except OSError as exc:
            logger.warning("Cannot read %s: %s", self._path, exc)
            return []
        return parse_proc_net_arp(text, prefix)


class ArpCommandReader(ArpReader):
    """Runs ``arp -a`` and parses its output."""

    def __init__(self, command: tuple[str, ...] = ("arp", "-a"), timeout: float = 5.0) -> None:
        self._command = command
        self._timeout = timeout

    async def read(self, prefix: str) -> list[ArpEntry]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("ARP command unavailable: %s", exc)
            return []
        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.warning("ARP command timed out after %.1fs", self._timeout)
            return []
        return parse_arp_command(stdout.decode(errors="replace"), prefix)


class ScapyArpReader(ArpReader):
    """Active ARP sweep of the /24 using scapy. Needs raw-socket privileges."""

    def __init__(self, timeout: float = 3.0) -> None:
        self._timeout = timeout

    async def read(self, prefix: str) -> list[ArpEntry]:
        loop = asyncio.get_running_loop()
        try:
            pairs = await loop.run_in_executor(None, self._arp_scan_sync, f"{prefix}.0/24")
        except PermissionError:
            logger.warning("ARP sweep needs root privileges; skipping")
            return []
        entries = []
        for ip, mac in pairs:
            if not _in_prefix(ip, prefix):
                continue
            entry = _clean_entry(ip, mac, None)
            if entry is not None:
                entries.append(entry)
        return entries

    def _arp_scan_sync(self, subnet: str) -> list[tuple[str, str]]:
        """Synchronous ARP scan using scapy (runs in executor)."""
        from scapy.all import ARP, Ether, srp

        arp_request = Ether(dst="ff:ff:ff:ff:ff:ff") / ARP(pdst=subnet)
        answered, _ = srp(arp_request, timeout=self._timeout, verbose=False)
        return [(received.psrc, received.hwsrc) for _, received in answered]


def create_arp_reader(source: str = "auto") -> ArpReader:
    """Create the ARP reader named by *source*.

    ``"auto"`` picks ``/proc/net/arp`` when it exists, ``arp -a`` on macOS,
    and the null reader everywhere else.
    """
    if source == "none":
        return NullArpReader()
    if source == "proc":
        return ProcNetArpReader()
    if source == "command":
        return ArpCommandReader()
    if source == "scapy":
        return ScapyArpReader()
    if source != "auto":
        raise ValueError(f"unknown ARP source: {source!r}")

    if pathlib.Path("/proc/net/arp").exists():
        return ProcNetArpReader()
    if sys.platform == "darwin":
        return ArpCommandReader()
    return NullArpReader()
