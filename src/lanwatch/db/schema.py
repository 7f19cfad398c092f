"""SQLite schema definitions for lanwatch.

Persistent state is stored as JSON blobs in a single key-value table,
plus an append-only history of completed scan runs.
"""

from __future__ import annotations

# Current schema version -- increment when adding migrations
SCHEMA_VERSION = 2

_TABLE_NAMES: list[str] = [
    "kv",
    "scan_history",
    "schema_version",
]


def get_all_table_names() -> list[str]:
    """Return the list of all table names managed by this schema."""
    return list(_TABLE_NAMES)


# ---------------------------------------------------------------------------
# SQL statements for schema version 1
# ---------------------------------------------------------------------------

SCHEMA_V1_SQL = """
-- Key-value JSON blobs (devices, uptime, reputation, schedules, allowlist)
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""

# ---------------------------------------------------------------------------
# SQL statements for schema version 2
# ---------------------------------------------------------------------------

SCHEMA_V2_SQL = """
-- One row per finished scan run, newest last
CREATE TABLE IF NOT EXISTS scan_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    subnet TEXT NOT NULL,
    state TEXT NOT NULL,
    device_count INTEGER NOT NULL,
    duration_ms INTEGER NOT NULL,
    error TEXT,
    finished_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_scan_history_finished ON scan_history(finished_at);
"""
