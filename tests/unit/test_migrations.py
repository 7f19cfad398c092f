"""Tests for schema migrations."""
from __future__ import annotations

import aiosqlite
import pytest

from lanwatch.db.migrations import apply_migrations, get_schema_version
from lanwatch.db.schema import SCHEMA_VERSION, get_all_table_names


class TestMigrations:
    @pytest.mark.asyncio
    async def test_fresh_database_reaches_current_version(self, tmp_path) -> None:
        db = await aiosqlite.connect(str(tmp_path / "test.db"))
        try:
            assert await get_schema_version(db) == 0
            assert await apply_migrations(db) == SCHEMA_VERSION
            assert await get_schema_version(db) == SCHEMA_VERSION

            cursor = await db.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
            assert set(get_all_table_names()) <= tables
        finally:
            await db.close()

    @pytest.mark.asyncio
    async def test_idempotent(self, tmp_path) -> None:
        db = await aiosqlite.connect(str(tmp_path / "test.db"))
        try:
            await apply_migrations(db)
            await apply_migrations(db)
            cursor = await db.execute("SELECT COUNT(*) FROM schema_version")
            row = await cursor.fetchone()
            assert row[0] == SCHEMA_VERSION
        finally:
            await db.close()

    @pytest.mark.asyncio
    async def test_v1_database_upgraded(self, tmp_path) -> None:
        path = str(tmp_path / "test.db")
        db = await aiosqlite.connect(path)
        assert await apply_migrations(db, target=1) == 1
        await db.execute("INSERT INTO kv (key, value, updated_at) VALUES ('devices', '[]', 'now')")
        await db.commit()
        await db.close()

        db = await aiosqlite.connect(path)
        try:
            assert await apply_migrations(db) == 2
            assert await get_schema_version(db) == 2
            cursor = await db.execute("SELECT value FROM kv WHERE key = 'devices'")
            assert (await cursor.fetchone())[0] == "[]"
        finally:
            await db.close()
