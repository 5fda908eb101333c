"""Secure key-value stores.

A secure store is the device-provided blob storage used by
SecureStoreLibrary. Store primitives never raise: every call returns a
StoreResult, and callers decide how to react to a non-OK status.

Two implementations are provided:

- **MemorySecureStore**: process-local dictionary, for tests
- **SQLiteSecureStore**: single-file SQLite database
"""

import logging
import os
import sqlite3
import threading
from enum import Enum
from pathlib import Path
from typing import Protocol

import msgspec

logger = logging.getLogger(__name__)


class StoreStatus(Enum):
    """Outcome of a secure store primitive."""

    OK = "ok"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


class StoreResult(msgspec.Struct, frozen=True):
    """Result value returned by secure store primitives."""

    status: StoreStatus
    data: bytes | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK

    @classmethod
    def success(cls, data: bytes | None = None) -> "StoreResult":
        return cls(StoreStatus.OK, data)

    @classmethod
    def not_found(cls, key: str) -> "StoreResult":
        return cls(StoreStatus.NOT_FOUND, message=f"No data stored for {key}")

    @classmethod
    def failure(cls, message: str) -> "StoreResult":
        return cls(StoreStatus.FAILURE, message=message)

    def __str__(self) -> str:
        if self.message:
            return f"{self.status.value}: {self.message}"
        return self.status.value


class SecureStore(Protocol):
    """Device key-value blob store."""

    def get(self, key: str) -> StoreResult:
        """Read the blob stored under key."""
        ...

    def put(self, key: str, data: bytes) -> StoreResult:
        """Store a blob under key, replacing any previous blob."""
        ...

    def delete(self, key: str) -> StoreResult:
        """Remove the blob stored under key."""
        ...

    def keys(self) -> list[str]:
        """Get all stored keys."""
        ...


class MemorySecureStore:
    """In-memory secure store for testing purposes."""

    def __init__(self):
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> StoreResult:
        with self._lock:
            if key not in self._data:
                return StoreResult.not_found(key)
            return StoreResult.success(self._data[key])

    def put(self, key: str, data: bytes) -> StoreResult:
        with self._lock:
            self._data[key] = bytes(data)
        return StoreResult.success()

    def delete(self, key: str) -> StoreResult:
        with self._lock:
            if self._data.pop(key, None) is None:
                return StoreResult.not_found(key)
        return StoreResult.success()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())


def default_secure_store_path() -> Path:
    """Default location of the SQLite secure store."""
    xdg_data_home = Path(
        os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
    )
    return xdg_data_home / "bindlib" / "secure.db"


class SQLiteSecureStore:
    """Secure store kept in a single SQLite database file."""

    def __init__(self, db_path: Path | str | None = None):
        self.db_path = Path(db_path) if db_path is not None else default_secure_store_path()
        self._lock = threading.RLock()
        self.conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the connection, opening the database on first use."""
        with self._lock:
            if self.conn is None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
                self.conn.execute("PRAGMA journal_mode=WAL")
                self.conn.execute("""
                    CREATE TABLE IF NOT EXISTS blobs (
                        key TEXT PRIMARY KEY,
                        data BLOB NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                self.conn.commit()
            return self.conn

    def get(self, key: str) -> StoreResult:
        try:
            with self._lock:
                row = self.connection.execute(
                    "SELECT data FROM blobs WHERE key = ?", (key,)
                ).fetchone()
        except (OSError, sqlite3.Error) as e:
            logger.debug(f"Secure store read failed for {key}: {e}")
            return StoreResult.failure(str(e))

        if row is None:
            return StoreResult.not_found(key)
        return StoreResult.success(bytes(row[0]))

    def put(self, key: str, data: bytes) -> StoreResult:
        try:
            with self._lock:
                self.connection.execute(
                    """
                    INSERT INTO blobs (key, data) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        data = excluded.data,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, sqlite3.Binary(data)),
                )
                self.connection.commit()
        except (OSError, sqlite3.Error) as e:
            logger.debug(f"Secure store write failed for {key}: {e}")
            return StoreResult.failure(str(e))
        return StoreResult.success()

    def delete(self, key: str) -> StoreResult:
        try:
            with self._lock:
                cursor = self.connection.execute(
                    "DELETE FROM blobs WHERE key = ?", (key,)
                )
                self.connection.commit()
        except (OSError, sqlite3.Error) as e:
            logger.debug(f"Secure store delete failed for {key}: {e}")
            return StoreResult.failure(str(e))

        if cursor.rowcount == 0:
            return StoreResult.not_found(key)
        return StoreResult.success()

    def keys(self) -> list[str]:
        try:
            with self._lock:
                rows = self.connection.execute(
                    "SELECT key FROM blobs ORDER BY key"
                ).fetchall()
        except (OSError, sqlite3.Error) as e:
            logger.debug(f"Secure store listing failed: {e}")
            return []
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self.conn is not None:
                self.conn.close()
                self.conn = None
