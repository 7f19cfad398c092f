"""Single TCP connect-with-timeout primitive.

Every network touch in the scanner goes through ``PortProbe``. A probe never
raises for connectivity problems: refused connections, timeouts and
unreachable hosts are returned as result values.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum

from lanwatch.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ProbeStatus(str, Enum):
    OPEN = "open"
    # The host answered with a reset
    CLOSED = "closed"
    # No answer within the timeout, or the network refused to route
    FILTERED = "filtered"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one connect attempt."""

    ip: str
    port: int
    status: ProbeStatus
    latency_ms: float | None = None

    @property
    def is_open(self) -> bool:
        return self.status is ProbeStatus.OPEN

    @property
    def host_responded(self) -> bool:
        """True when the host itself answered, open or not."""
        return self.status in (ProbeStatus.OPEN, ProbeStatus.CLOSED)


class PortProbe:
    """Async TCP connect probe.

    Parameters
    ----------
    timeout:
        Default seconds to wait for the TCP handshake.
    """

    def __init__(self, timeout: float = 1.5) -> None:
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def open(
        self,
        ip: str,
        port: int,
        timeout: float | None = None,
    ) -> tuple[asyncio.StreamReader, asyncio.StreamWriter] | ProbeResult:
        """Connect and hand back the stream pair, or a non-open ``ProbeResult``.

        The caller owns the returned writer and must close it.
        """
        try:
            return await asyncio.wait_for(
                asyncio.open_connection(ip, port),
                timeout=timeout or self._timeout,
            )
        except asyncio.TimeoutError:
            return ProbeResult(ip, port, ProbeStatus.FILTERED)
        except ConnectionRefusedError:
            return ProbeResult(ip, port, ProbeStatus.CLOSED)
        except OSError as exc:
            logger.debug("Connect to %s:%d failed: %s", ip, port, exc)
            return ProbeResult(ip, port, ProbeStatus.FILTERED)

    async def probe(self, ip: str, port: int, timeout: float | None = None) -> ProbeResult:
        """Attempt a TCP handshake and close immediately."""
        start = time.monotonic()
        conn = await self.open(ip, port, timeout)
        if isinstance(conn, ProbeResult):
            return conn
        _, writer = conn
        latency_ms = (time.monotonic() - start) * 1000
        await close_writer(writer)
        return ProbeResult(ip, port, ProbeStatus.OPEN, latency_ms=latency_ms)


async def close_writer(writer: asyncio.StreamWriter) -> None:
    """Close a stream writer, ignoring errors from an already-dead peer."""
    writer.close()
    try:
        await writer.wait_closed()
    except (ConnectionError, OSError):
        pass
