"""Key-value persistence backends for the record slot.

Contract: get(key) -> str | None, set(key, value), remove(key).
Backends raise QuotaExceeded / StorageUnavailable from drink_ledger.errors.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Protocol

from drink_ledger.errors import QuotaExceeded, StorageUnavailable

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _check_quota(value: str, quota_bytes: int | None) -> None:
    if quota_bytes is None:
        return
    size = len(value.encode("utf-8"))
    if size > quota_bytes:
        raise QuotaExceeded(f"value of {size} bytes exceeds quota of {quota_bytes} bytes")


class MemoryBackend:
    """In-process slot storage, scoped to one process like browser local storage."""

    def __init__(self, quota_bytes: int | None = None, available: bool = True):
        self.quota_bytes = quota_bytes
        self.available = available
        self._slots: dict[str, str] = {}

    def _require_available(self) -> None:
        if not self.available:
            raise StorageUnavailable("memory backend is disabled")

    def get(self, key: str) -> str | None:
        self._require_available()
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._require_available()
        _check_quota(value, self.quota_bytes)
        self._slots[key] = value

    def remove(self, key: str) -> None:
        self._require_available()
        self._slots.pop(key, None)


def _storage_error(exc: sqlite3.Error) -> QuotaExceeded | StorageUnavailable:
    if "full" in str(exc).lower():
        return QuotaExceeded(str(exc))
    return StorageUnavailable(str(exc))


def init_db(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_slots (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
            """
        )
        conn.commit()


class SQLiteBackend:
    """Slots stored as rows of a single kv_slots table in a SQLite file."""

    def __init__(self, db_path: str, quota_bytes: int | None = None):
        self.db_path = db_path
        self.quota_bytes = quota_bytes
        self._initialized = False

    def _ensure_db(self) -> None:
        if self._initialized:
            return
        try:
            init_db(self.db_path)
        except sqlite3.Error as exc:
            logger.warning("Cannot initialise slot database %s: %s", self.db_path, exc)
            raise StorageUnavailable(str(exc)) from exc
        self._initialized = True

    def get(self, key: str) -> str | None:
        self._ensure_db()
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute("SELECT value FROM kv_slots WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailable(str(exc)) from exc
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        _check_quota(value, self.quota_bytes)
        self._ensure_db()
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO kv_slots (key, value, updated_at)
                    VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise _storage_error(exc) from exc

    def remove(self, key: str) -> None:
        self._ensure_db()
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("DELETE FROM kv_slots WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as exc:
            raise _storage_error(exc) from exc
