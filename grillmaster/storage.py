"""SQLite key/value storage for JSON blobs."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from grillmaster.config import DB_PATH

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class KeyValueStorage:
    """
    Persists JSON-serialisable values under string keys.

    Neither ``save`` nor ``load`` raises: a failed save returns False and a
    failed load returns the caller's default, which callers treat the same as
    "nothing stored yet".
    """

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> bool:
        """Create the key/value table if it does not already exist."""
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """
                        CREATE TABLE IF NOT EXISTS kv_store (
                            key TEXT PRIMARY KEY,
                            value TEXT NOT NULL,
                            updated_at TEXT NOT NULL
                        )
                        """
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError):
            logger.exception("Storage bootstrap failed [%s]", self.db_path)
            return False
        return True

    def save(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(value, ensure_ascii=False)
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                        """,
                        (key, payload, _utc_now_iso()),
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError, TypeError, ValueError, RecursionError) as exc:
            logger.error("Storage save error [%s]: %s", key, exc)
            return False
        return True

    def load(self, key: str, default: Any = None) -> Any:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
            if row is None:
                return default
            return json.loads(row[0])
        except (sqlite3.Error, OSError, ValueError, RecursionError) as exc:
            logger.error("Storage load error [%s]: %s", key, exc)
            return default

    def delete(self, key: str) -> bool:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            logger.error("Storage delete error [%s]: %s", key, exc)
            return False
        return True
