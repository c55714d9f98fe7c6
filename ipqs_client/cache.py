"""Response caches for ipqs-client.

Goal: reduce latency and API credit usage by caching successful responses.

Stores are intentionally simple:
- key -> JSON payload + expiry timestamp
- expiry handled at read time
- no cross-key locking; entries are independent and may be overwritten

The client derives keys with `make_cache_key()`; stores never interpret them
beyond prefix matching.
"""

from __future__ import annotations

import hashlib
import json
import os
import sqlite3
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

KEY_PREFIX = "ipqs_"


def default_cache_path() -> str:
    base = os.getenv("XDG_CACHE_HOME") or os.path.expanduser("~/.cache")
    return os.path.join(base, "ipqs-client", "cache.sqlite")


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def make_cache_key(identifier: str, api_key: str) -> str:
    raw = f"{identifier}{api_key}"
    return KEY_PREFIX + hashlib.sha256(raw.encode("utf-8")).hexdigest()


def params_digest(params: Optional[dict[str, Any]]) -> str:
    """Stable digest of a parameter mapping for use inside cache identifiers."""
    encoded = json.dumps(params or {}, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.md5(encoded.encode("utf-8")).hexdigest()


def parse_ttl(ttl: str) -> int:
    """Parse TTL strings like: 3600, 10m, 24h, 7d."""
    s = ttl.strip().lower()
    if s.isdigit():
        return int(s)

    units = {"s": 1, "m": 60, "h": 3600, "d": 86400}
    unit = s[-1:]
    if unit not in units:
        raise ValueError(f"Invalid TTL unit: {ttl}")
    num = int(s[:-1])
    return num * units[unit]


class CacheStore:
    """Base interface for cache stores."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def delete_by_prefix(self, prefix: str) -> int:
        raise NotImplementedError


@dataclass
class MemoryCache(CacheStore):
    clock: Callable[[], float] = time.time
    _entries: dict[str, tuple[Any, float]] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            hit = self._entries.get(key)
            if hit is None:
                return None
            value, expires_at = hit
            if self.clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self.clock() + ttl_seconds)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)


@dataclass
class SqliteCache(CacheStore):
    path: str
    clock: Callable[[], float] = time.time

    def __post_init__(self) -> None:
        _ensure_parent_dir(self.path)
        with self._connect() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS cache (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    expires_at REAL NOT NULL
                )
                """
            )

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path, timeout=15)

    def get(self, key: str) -> Optional[Any]:
        now = self.clock()
        with self._connect() as con:
            row = con.execute(
                "SELECT value, expires_at FROM cache WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        value_json, expires_at = row
        if now >= float(expires_at):
            return None
        try:
            return json.loads(value_json)
        except ValueError:
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = self.clock()
        value_json = json.dumps(value, ensure_ascii=False)
        with self._connect() as con:
            con.execute(
                """
                INSERT INTO cache (key, value, created_at, expires_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value=excluded.value,
                    expires_at=excluded.expires_at
                """,
                (key, value_json, now, now + ttl_seconds),
            )
            con.commit()

    def delete(self, key: str) -> bool:
        with self._connect() as con:
            cur = con.execute("DELETE FROM cache WHERE key = ?", (key,))
            con.commit()
            return cur.rowcount > 0

    def delete_by_prefix(self, prefix: str) -> int:
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        with self._connect() as con:
            cur = con.execute(
                "DELETE FROM cache WHERE key LIKE ? ESCAPE '\\'",
                (escaped + "%",),
            )
            con.commit()
            return cur.rowcount
