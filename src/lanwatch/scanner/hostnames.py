"""Reverse-DNS hostname lookup with a hard timeout."""
from __future__ import annotations

import asyncio
import logging
import socket

logger = logging.getLogger(__name__)


async def resolve_hostname(ip: str, timeout: float = 1.0) -> str | None:
    """Return the PTR name for *ip*, or ``None`` if there is none in time.

    A resolver that simply echoes the address back counts as no answer.
    """
    loop = asyncio.get_running_loop()
    try:
        host, _ = await asyncio.wait_for(
            loop.getnameinfo((ip, 0), socket.NI_NAMEREQD),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, socket.gaierror, OSError) as exc:
        logger.debug("Reverse lookup for %s failed: %s", ip, exc)
        return None
    if not host or host == ip:
        return None
    return host.rstrip(".")
