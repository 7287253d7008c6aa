import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis

from matchcenter.config import CACHE_ENABLED, CACHE_NAMESPACE, CACHE_VERSION, REDIS_URL

logger = logging.getLogger(__name__)

# Distinguishes "not cached" from a cached empty roster or fixture list.
_MISS = object()


class _MemoryStore:
    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISS
            expires_at, value = entry
            if expires_at < time.time():
                del self._entries[key]
                return _MISS
            return value

    def store(self, key: str, value: Any, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (time.time() + ttl, value)

    def clear(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]


class _RedisStore:
    """Payloads are stored as JSON text with a Redis-side expiry."""

    def __init__(self, client: "redis.Redis") -> None:
        self._client = client

    def load(self, key: str) -> Any:
        raw = self._client.get(key)
        return _MISS if raw is None else json.loads(raw)

    def store(self, key: str, value: Any, ttl: int) -> None:
        self._client.set(key, json.dumps(value), ex=ttl)

    def clear(self, prefix: str) -> None:
        for key in self._client.scan_iter(match=f"{prefix}*"):
            self._client.delete(key)


def _connect(redis_url: str) -> Optional[_RedisStore]:
    try:
        client = redis.Redis.from_url(redis_url, decode_responses=True)
        client.ping()
    except (redis.RedisError, ValueError) as e:
        logger.warning("Redis unavailable at %s, using in-memory cache: %s", redis_url, e)
        return None
    return _RedisStore(client)


class CacheClient:
    """Short-lived cache for collaborator list payloads, keyed by endpoint.

    Keys look like ``matchcenter:v1:api/matches``. With ``REDIS_URL`` set the
    payloads are shared between workers; otherwise each process keeps its own.
    """

    def __init__(self, enabled: bool = CACHE_ENABLED, redis_url: Optional[str] = REDIS_URL) -> None:
        self.enabled = enabled
        self._prefix = f"{CACHE_NAMESPACE}:{CACHE_VERSION}:"
        redis_store = _connect(redis_url) if enabled and redis_url else None
        self._store = redis_store or _MemoryStore()

    @property
    def backend(self) -> str:
        return "redis" if isinstance(self._store, _RedisStore) else "memory"

    def key_for(self, endpoint: str) -> str:
        return self._prefix + endpoint.strip().strip("/")

    def get_or_set(self, endpoint: str, ttl: int, loader: Callable[[], Any]) -> Any:
        if not self.enabled:
            return loader()
        key = self.key_for(endpoint)
        cached = self._store.load(key)
        if cached is not _MISS:
            logger.debug("Cache hit for %s", key)
            return cached
        value = loader()
        if ttl > 0:
            self._store.store(key, value, ttl)
        return value

    def clear(self) -> None:
        self._store.clear(self._prefix)


cache = CacheClient()
