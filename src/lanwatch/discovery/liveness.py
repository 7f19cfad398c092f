"""Host liveness capability.

``HostLivenessProbe`` is the pluggable strategy the discoverer uses to
decide whether an address is in use. The same discovery logic runs on every
platform; only the probe (and its ARP reader) differ.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from lanwatch.discovery.arp import ArpEntry, ArpReader, NullArpReader
from lanwatch.scanner.probe import PortProbe

logger = logging.getLogger(__name__)


class HostLivenessProbe(ABC):
    """Abstract interface for host liveness checks."""

    @abstractmethod
    async def is_alive(self, ip: str, timeout: float) -> bool:
        """Return True if *ip* answered a single probe within *timeout* seconds.

        Implementations must not raise for unreachable hosts.
        """

    async def arp_table(self, prefix: str) -> list[ArpEntry]:
        """Return hosts already present in the local neighbor cache.

        The default implementation has no neighbor-cache access and returns
        an empty list.
        """
        return []


class TcpLivenessProbe(HostLivenessProbe):
    """In-process TCP connect liveness check.

    A host counts as alive when any of *ports* completes a handshake or
    actively refuses it; a reset still proves something owns the address.
    Ports are tried in order and the first answer wins.

    Parameters
    ----------
    probe:
        Connect primitive shared with the port scanner.
    ports:
        Ports to try, in order.
    arp_reader:
        Neighbor-cache source for ``arp_table()``.
    """

    def __init__(
        self,
        probe: PortProbe | None = None,
        ports: Sequence[int] = (80, 443),
        arp_reader: ArpReader | None = None,
    ) -> None:
        self._probe = probe or PortProbe()
        self._ports = tuple(ports)
        self._arp_reader = arp_reader or NullArpReader()

    async def is_alive(self, ip: str, timeout: float) -> bool:
        for port in self._ports:
            result = await self._probe.probe(ip, port, timeout=timeout)
            if result.host_responded:
                return True
        return False

    async def arp_table(self, prefix: str) -> list[ArpEntry]:
        return await self._arp_reader.read(prefix)
