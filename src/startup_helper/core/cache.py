"""In-process TTL cache for API responses.

Geocoding results and registry listings barely change within a session,
so repeated tool calls reuse them instead of spending API quota.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

# Seconds
TTL_SHORT = 60
TTL_MEDIUM = 300
TTL_LONG = 1800
TTL_VERY_LONG = 3600

# Expired entries are swept on write at most this often
PURGE_INTERVAL = 600

PREFIX_COORDS = "coords"
PREFIX_SEMAS = "semas"
PREFIX_KAKAO = "kakao"
PREFIX_BIZINFO = "bizinfo"


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """Dictionary cache with per-entry expiry.

    ``clock`` returns seconds and defaults to ``time.monotonic``; tests pass
    their own to step time forward. Entries that are never read again are
    dropped by a sweep that runs on ``set`` once ``purge_interval`` has passed.
    """

    def __init__(
        self,
        default_ttl: float = TTL_MEDIUM,
        clock: Callable[[], float] = time.monotonic,
        purge_interval: float = PURGE_INTERVAL,
    ):
        self.default_ttl = default_ttl
        self.purge_interval = purge_interval
        self._clock = clock
        self._last_purge = clock()
        self._entries: dict[str, _Entry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        if now - self._last_purge >= self.purge_interval:
            purged = self.purge_expired()
            if purged:
                logger.debug("Purged %d expired cache entries", purged)
        self._entries[key] = _Entry(value=value, expires_at=now + ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        keys = [k for k in self._entries if k.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._last_purge = now
        return len(expired)

    def stats(self) -> dict:
        lookups = self._hits + self._misses
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
        }

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl: Optional[float] = None,
    ) -> Any:
        """Return the cached value, or await ``factory`` and cache its result.

        None results are not cached so a miss is retried next time.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        if value is not None:
            self.set(key, value, ttl)
        return value


def generate_key(prefix: str, params: dict) -> str:
    """Stable key for a prefix and a parameter dict, independent of key order."""
    payload = json.dumps(params, sort_keys=True, ensure_ascii=False, default=str)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]
    return f"{prefix}:{digest}"
