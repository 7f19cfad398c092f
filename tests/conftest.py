"""Shared test fixtures for lanwatch tests."""

from __future__ import annotations

import asyncio
import pathlib
from datetime import datetime, timezone
from typing import Awaitable, Callable

import pytest
import pytest_asyncio

from lanwatch.db.store import MemoryStore, SqliteStore
from lanwatch.events.bus import EventBus

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo_root() -> pathlib.Path:
    return REPO_ROOT


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def sqlite_store():
    """An in-memory SQLite store with all migrations applied."""
    store = await SqliteStore(":memory:").open()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def tcp_server():
    """Factory for loopback servers; returns the bound port.

    Every server started through the factory is closed on teardown.
    """
    servers: list[asyncio.AbstractServer] = []

    async def start(
        handler: Callable[[asyncio.StreamReader, asyncio.StreamWriter], Awaitable[None] | None] | None = None,
    ) -> int:
        async def default(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            writer.close()

        server = await asyncio.start_server(handler or default, "127.0.0.1", 0)
        servers.append(server)
        return server.sockets[0].getsockname()[1]

    yield start
    for server in servers:
        server.close()
        await server.wait_closed()
