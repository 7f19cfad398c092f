"""Unit tests for the TCP connect probe."""
from __future__ import annotations

import asyncio
import socket
from unittest.mock import patch

import pytest

from lanwatch.errors import ConfigurationError
from lanwatch.scanner.probe import PortProbe, ProbeResult, ProbeStatus


def _unused_port() -> int:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


class TestPortProbe:
    """Connect outcomes are classified, never raised."""

    @pytest.mark.asyncio
    async def test_open_port(self, tcp_server) -> None:
        port = await tcp_server()
        result = await PortProbe(timeout=1.0).probe("127.0.0.1", port)
        assert result.status is ProbeStatus.OPEN
        assert result.is_open
        assert result.host_responded
        assert result.latency_ms is not None and result.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_refused_port_is_closed(self) -> None:
        result = await PortProbe(timeout=1.0).probe("127.0.0.1", _unused_port())
        assert result.status is ProbeStatus.CLOSED
        assert not result.is_open
        assert result.host_responded

    @pytest.mark.asyncio
    async def test_timeout_is_filtered(self) -> None:
        async def hang(host, port):
            await asyncio.sleep(10)

        with patch("lanwatch.scanner.probe.asyncio.open_connection", side_effect=hang):
            result = await PortProbe(timeout=0.05).probe("10.0.0.5", 22)
        assert result == ProbeResult("10.0.0.5", 22, ProbeStatus.FILTERED)
        assert not result.host_responded

    @pytest.mark.asyncio
    async def test_unreachable_is_filtered(self) -> None:
        with patch(
            "lanwatch.scanner.probe.asyncio.open_connection",
            side_effect=OSError(113, "No route to host"),
        ):
            result = await PortProbe(timeout=0.5).probe("10.0.0.5", 22)
        assert result.status is ProbeStatus.FILTERED

    @pytest.mark.asyncio
    async def test_open_hands_back_streams(self, tcp_server) -> None:
        port = await tcp_server()
        conn = await PortProbe(timeout=1.0).open("127.0.0.1", port)
        assert isinstance(conn, tuple)
        _, writer = conn
        writer.close()
        await writer.wait_closed()

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_non_positive_timeout_rejected(self, timeout: float) -> None:
        with pytest.raises(ConfigurationError):
            PortProbe(timeout=timeout)
