"""Key-value persistence for scan state.

The scanner treats persistence as an injected capability: components are
handed a ``KeyValueStore`` and read or write JSON-serializable blobs under
well-known keys. ``SqliteStore`` is the durable implementation backed by
aiosqlite; ``MemoryStore`` is used in tests and one-shot CLI runs.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import pathlib
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable

import aiosqlite

from lanwatch.db.migrations import apply_migrations
from lanwatch.errors import StorageError
from lanwatch.models import Device, DeviceReputation, ScanSchedule, UptimeRecord

logger = logging.getLogger(__name__)

# Well-known keys
DEVICES_KEY = "devices"
UPTIME_KEY = "uptime"
REPUTATION_KEY = "reputation"
SCHEDULES_KEY = "schedules"
ALLOWLIST_KEY = "allowlist"


class KeyValueStore(ABC):
    """Abstract load/save capability for JSON blobs."""

    def __init__(self) -> None:
        self._update_lock = asyncio.Lock()

    @abstractmethod
    async def load(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None``."""

    @abstractmethod
    async def save(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*. Missing keys are ignored."""

    @abstractmethod
    async def record_scan(
        self,
        subnet: str,
        state: str,
        device_count: int,
        duration_ms: int,
        error: str | None = None,
    ) -> None:
        """Append a finished scan run to the history."""

    @abstractmethod
    async def list_scans(self, limit: int = 20) -> list[dict[str, Any]]:
        """Return the most recent scan runs, newest first."""

    async def update(
        self,
        key: str,
        fn: Callable[[Any], Any],
        default: Any = None,
    ) -> Any:
        """Apply *fn* to the stored value in place and persist the result.

        Updates through the same store are serialized, so concurrent
        callers never overwrite each other's read-modify-write.

        Parameters
        ----------
        key:
            Key to update.
        fn:
            Receives the current value (or a copy of *default*) and returns
            the new value.
        default:
            Value passed to *fn* when nothing is stored yet.
        """
        async with self._update_lock:
            current = await self.load(key)
            if current is None:
                current = copy.deepcopy(default)
            updated = fn(current)
            await self.save(key, updated)
            return updated


class MemoryStore(KeyValueStore):
    """In-process store. Values are round-tripped through JSON on save."""

    def __init__(self) -> None:
        super().__init__()
        self._data: dict[str, str] = {}
        self._scans: list[dict[str, Any]] = []

    async def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    async def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def record_scan(
        self,
        subnet: str,
        state: str,
        device_count: int,
        duration_ms: int,
        error: str | None = None,
    ) -> None:
        self._scans.append({
            "id": len(self._scans) + 1,
            "subnet": subnet,
            "state": state,
            "device_count": device_count,
            "duration_ms": duration_ms,
            "error": error,
            "finished_at": datetime.now(timezone.utc).isoformat(),
        })

    async def list_scans(self, limit: int = 20) -> list[dict[str, Any]]:
        return list(reversed(self._scans))[:limit]


class SqliteStore(KeyValueStore):
    """Durable store backed by a single SQLite database.

    Parameters
    ----------
    path:
        Database file path, or ``":memory:"``.
    """

    def __init__(self, path: pathlib.Path | str) -> None:
        super().__init__()
        self._path = path
        self._db: aiosqlite.Connection | None = None

    async def open(self) -> SqliteStore:
        """Connect and apply pending migrations. Returns ``self``."""
        if isinstance(self._path, pathlib.Path):
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(str(self._path))
        # no-op for ":memory:" databases
        await self._db.execute("PRAGMA journal_mode=WAL")
        await apply_migrations(self._db)
        logger.debug("Opened store at %s", self._path)
        return self

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None

    async def __aenter__(self) -> SqliteStore:
        return await self.open()

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise StorageError("store is not open")
        return self._db

    async def load(self, key: str) -> Any | None:
        cursor = await self.db.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = await cursor.fetchone()
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            raise StorageError(f"corrupt value for key {key!r}") from exc

    async def save(self, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc).isoformat()
        await self.db.execute(
            "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "updated_at = excluded.updated_at",
            (key, json.dumps(value), now),
        )
        await self.db.commit()

    async def delete(self, key: str) -> None:
        await self.db.execute("DELETE FROM kv WHERE key = ?", (key,))
        await self.db.commit()

    async def record_scan(
        self,
        subnet: str,
        state: str,
        device_count: int,
        duration_ms: int,
        error: str | None = None,
    ) -> None:
        now = datetime.now(timezone.utc).isoformat()
        await self.db.execute(
            "INSERT INTO scan_history "
            "(subnet, state, device_count, duration_ms, error, finished_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (subnet, state, device_count, duration_ms, error, now),
        )
        await self.db.commit()

    async def list_scans(self, limit: int = 20) -> list[dict[str, Any]]:
        cursor = await self.db.execute(
            "SELECT id, subnet, state, device_count, duration_ms, error, finished_at "
            "FROM scan_history ORDER BY id DESC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        return [
            {
                "id": row[0],
                "subnet": row[1],
                "state": row[2],
                "device_count": row[3],
                "duration_ms": row[4],
                "error": row[5],
                "finished_at": row[6],
            }
            for row in rows
        ]


def create_store(backend: str, path: pathlib.Path) -> KeyValueStore:
    """Create the store named by *backend* ("sqlite" or "memory").

    The returned ``SqliteStore`` still has to be opened.
    """
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlite":
        return SqliteStore(path)
    raise ValueError(f"unknown storage backend: {backend!r}")


# ---------------------------------------------------------------------------
# Typed helpers
# ---------------------------------------------------------------------------

async def save_devices(store: KeyValueStore, devices: list[Device]) -> None:
    await store.save(DEVICES_KEY, [d.model_dump(mode="json") for d in devices])


async def load_devices(store: KeyValueStore) -> list[Device]:
    raw = await store.load(DEVICES_KEY) or []
    return [Device.model_validate(item) for item in raw]


async def save_uptime_records(store: KeyValueStore, records: dict[str, UptimeRecord]) -> None:
    await store.save(
        UPTIME_KEY,
        {key: record.model_dump(mode="json") for key, record in records.items()},
    )


async def load_uptime_records(store: KeyValueStore) -> dict[str, UptimeRecord]:
    raw = await store.load(UPTIME_KEY) or {}
    return {key: UptimeRecord.model_validate(value) for key, value in raw.items()}


async def save_reputations(store: KeyValueStore, reputations: dict[str, DeviceReputation]) -> None:
    await store.save(
        REPUTATION_KEY,
        {key: rep.model_dump(mode="json") for key, rep in reputations.items()},
    )


async def load_reputations(store: KeyValueStore) -> dict[str, DeviceReputation]:
    raw = await store.load(REPUTATION_KEY) or {}
    return {key: DeviceReputation.model_validate(value) for key, value in raw.items()}


async def save_schedules(store: KeyValueStore, schedules: list[ScanSchedule]) -> None:
    await store.save(SCHEDULES_KEY, [s.model_dump(mode="json") for s in schedules])


async def load_schedules(store: KeyValueStore) -> list[ScanSchedule] | None:
    """Return stored schedules, or ``None`` if none were ever saved."""
    raw = await store.load(SCHEDULES_KEY)
    if raw is None:
        return None
    return [ScanSchedule.model_validate(item) for item in raw]
