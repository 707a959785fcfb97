"""Key-value storage.

The store treats persistence as an opaque get/set-by-key byte store. The
default backend keeps one row per key in a SQLite table.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

import aiosqlite

from ..config import DATA_DIR

# Backend failures the store treats as "absent" on read and drops on write.
STORAGE_ERRORS = (aiosqlite.Error, OSError)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "gymbook.db"


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for key-value backends."""

    async def get(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None."""
        ...

    async def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


class SQLiteKeyValueStore:
    """Key-value store kept in a single SQLite table."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._initialized = False

    async def init(self) -> None:
        """Create the schema if needed."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            await db.commit()
        self._initialized = True

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.init()

    async def get(self, key: str) -> bytes | None:
        await self._ensure_initialized()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = await cursor.fetchone()
            if row is None:
                return None
            value = row[0]
            return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    async def set(self, key: str, value: bytes) -> None:
        await self._ensure_initialized()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            await db.commit()

    async def delete(self, key: str) -> None:
        await self._ensure_initialized()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM kv WHERE key = ?", (key,))
            await db.commit()

    async def keys(self) -> list[str]:
        """List stored keys."""
        await self._ensure_initialized()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT key FROM kv ORDER BY key")
            rows = await cursor.fetchall()
            return [row[0] for row in rows]


class MemoryKeyValueStore:
    """In-process key-value store."""

    def __init__(self, data: dict[str, bytes] | None = None):
        self.data: dict[str, bytes] = dict(data or {})

    async def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self.data)
