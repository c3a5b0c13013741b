# favicon_scout/cache/store.py
"""
Domain-keyed favicon stores.

:class:`CacheStore` is the interface the resolver relies on; two implementations
ship with the package: :class:`MemoryCacheStore` (per process) and
:class:`SQLiteCacheStore` (``icons_cache`` table in a local SQLite file).
"""
from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Union, runtime_checkable

from favicon_scout.cache.models import CacheRecord, utc_now
from favicon_scout.exceptions import CacheStoreError
from favicon_scout.logger import logger

__all__ = ["CacheStore", "MemoryCacheStore", "SQLiteCacheStore"]


@runtime_checkable
class CacheStore(Protocol):
    def get(self, domain: str) -> Optional[CacheRecord]: ...

    def upsert(self, domain: str, favicon_url: str, size: str, format: str) -> None: ...

    def delete(self, domain: str) -> None: ...


class MemoryCacheStore:
    """In-process store; *clock* is injectable for staleness tests."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._records: Dict[str, CacheRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, domain: str) -> Optional[CacheRecord]:
        with self._lock:
            return self._records.get(domain)

    def upsert(self, domain: str, favicon_url: str, size: str, format: str) -> None:
        record = CacheRecord(domain, favicon_url, size, format, self._clock())
        with self._lock:
            self._records[domain] = record

    def delete(self, domain: str) -> None:
        with self._lock:
            self._records.pop(domain, None)

    def __len__(self) -> int:
        return len(self._records)


_SCHEMA = """
CREATE TABLE IF NOT EXISTS icons_cache (
    domain          TEXT PRIMARY KEY CHECK (length(trim(domain)) > 0),
    favicon_url     TEXT NOT NULL CHECK (length(trim(favicon_url)) > 0),
    size            TEXT,
    format          TEXT,
    last_checked_at TEXT NOT NULL,
    created_at      TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_icons_cache_last_checked ON icons_cache(last_checked_at DESC);
"""

_UPSERT = """
INSERT INTO icons_cache (domain, favicon_url, size, format, last_checked_at, created_at)
VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(domain) DO UPDATE SET
    favicon_url = excluded.favicon_url,
    size = excluded.size,
    format = excluded.format,
    last_checked_at = excluded.last_checked_at
"""


class SQLiteCacheStore:
    """``icons_cache`` table in SQLite. Errors surface as :class:`CacheStoreError`."""

    def __init__(
        self,
        path: Union[str, Path],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.path = Path(path)
        self._clock = clock
        self._lock = threading.Lock()
        if str(path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._conn:
            self._conn.executescript(_SCHEMA)
        logger.debug("SQLite cache ready at %s", path)

    def get(self, domain: str) -> Optional[CacheRecord]:
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT domain, favicon_url, size, format, last_checked_at "
                    "FROM icons_cache WHERE domain = ?",
                    (domain,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise CacheStoreError("get", domain, str(exc)) from exc
        if row is None:
            return None
        checked = datetime.fromisoformat(row["last_checked_at"])
        if checked.tzinfo is None:
            checked = checked.replace(tzinfo=timezone.utc)
        return CacheRecord(
            domain=row["domain"],
            favicon_url=row["favicon_url"],
            size=row["size"] or "unknown",
            format=row["format"] or "unknown",
            last_checked_at=checked,
        )

    def upsert(self, domain: str, favicon_url: str, size: str, format: str) -> None:
        now = self._clock().isoformat()
        try:
            with self._lock, self._conn:
                self._conn.execute(_UPSERT, (domain, favicon_url, size, format, now, now))
        except sqlite3.Error as exc:
            raise CacheStoreError("upsert", domain, str(exc)) from exc

    def delete(self, domain: str) -> None:
        try:
            with self._lock, self._conn:
                self._conn.execute("DELETE FROM icons_cache WHERE domain = ?", (domain,))
        except sqlite3.Error as exc:
            raise CacheStoreError("delete", domain, str(exc)) from exc

    def close(self) -> None:
        with self._lock:
            self._conn.close()
