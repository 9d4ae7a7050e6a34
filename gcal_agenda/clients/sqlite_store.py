"""SQLite-backed key-value store for the persisted credential record."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Any, Mapping, Optional

from gcal_agenda.core.errors import CredentialStoreError


class SQLiteKeyValueStore:
    """Durable key-value store with JSON-encoded values."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def _get_sync(self, key: str) -> Optional[Any]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise CredentialStoreError(f"Failed to read {key!r} from token store.") from exc
        if not row:
            return None
        try:
            return json.loads(row["value"])
        except ValueError as exc:
            raise CredentialStoreError(f"Stored value for {key!r} is not valid JSON.") from exc

    def _set_many_sync(self, values: Mapping[str, Any]) -> None:
        rows = [(key, json.dumps(value)) for key, value in values.items()]
        try:
            # One connection context is one transaction.
            with self._connect() as conn:
                conn.executemany(
                    """
                    INSERT INTO kv_store (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    rows,
                )
        except sqlite3.Error as exc:
            raise CredentialStoreError("Failed to write to token store.") from exc

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set_many_sync, {key: value})

    async def set_many(self, values: Mapping[str, Any]) -> None:
        """Write several keys atomically."""
        await asyncio.to_thread(self._set_many_sync, dict(values))


__all__ = ["SQLiteKeyValueStore"]
