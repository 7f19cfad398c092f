"""Schema migrations for the SQLite store.

Each migration is a SQL script paired with the version it produces.
Pending scripts run in ascending order and each records itself in
``schema_version``; version 0 means an empty database.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import aiosqlite

from lanwatch.db.schema import SCHEMA_V1_SQL, SCHEMA_V2_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)

MIGRATIONS: tuple[tuple[int, str], ...] = (
    (1, SCHEMA_V1_SQL),
    (2, SCHEMA_V2_SQL),
)


async def get_schema_version(db: aiosqlite.Connection) -> int:
    """Return the schema version applied to *db*, or 0 for a new database."""
    cursor = await db.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    )
    if await cursor.fetchone() is None:
        return 0
    cursor = await db.execute("SELECT MAX(version) FROM schema_version")
    row = await cursor.fetchone()
    return row[0] or 0


async def apply_migrations(db: aiosqlite.Connection, target: int = SCHEMA_VERSION) -> int:
    """Bring *db* up to *target* and return the resulting version.

    Already-applied migrations are skipped, so repeated calls are no-ops.
    """
    current = await get_schema_version(db)
    for version, script in MIGRATIONS:
        if current >= version or version > target:
            continue
        await db.executescript(script)
        await db.execute(
            "INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (?, ?)",
            (version, datetime.now(timezone.utc).isoformat()),
        )
        await db.commit()
        logger.info("Applied schema migration v%d", version)
        current = version
    return current
