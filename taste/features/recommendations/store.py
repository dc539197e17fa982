"""
Day-scoped string key/value storage for the recommendation cache.

Two backends:
- InMemoryKeyValueStore: process-local dict (tests, local runs)
- RedisKeyValueStore: redis.asyncio client, shared across processes

ScopedKeyValueStore gives each user a prefixed view of a shared backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError

from taste.core.config import settings

# Failures a store backend may raise on get/set
STORE_ERRORS = (RedisError, OSError)


class KeyValueStore(ABC):
    """String key -> string value; missing keys read as None."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    async def close(self) -> None:
        return None


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data.keys())


class RedisKeyValueStore(KeyValueStore):
    """Entries expire after `ttl_seconds` so stale days do not pile up."""

    def __init__(self, client: Optional[redis_asyncio.Redis] = None, ttl_seconds: int = 2 * 24 * 3600, prefix: str = "taste:"):
        self._client = client or redis_asyncio.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        self._ttl = ttl_seconds
        self._prefix = prefix

    async def get(self, key: str) -> Optional[str]:
        value = await self._client.get(self._prefix + key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._prefix + key, value, ex=self._ttl)

    async def close(self) -> None:
        await self._client.aclose()


class ScopedKeyValueStore(KeyValueStore):
    """
    Per-user view over a shared store: every key is prefixed with `prefix`.

    close() leaves the shared backend open; its owner closes it.
    """

    def __init__(self, store: KeyValueStore, prefix: str):
        self.inner = store
        self.prefix = prefix

    async def get(self, key: str) -> Optional[str]:
        return await self.inner.get(self.prefix + key)

    async def set(self, key: str, value: str) -> None:
        await self.inner.set(self.prefix + key, value)


def user_scope(store: KeyValueStore, user_id: Optional[str]) -> KeyValueStore:
    """Scope a shared store to one user; anonymous sessions get their own bucket."""
    return ScopedKeyValueStore(store, f"user:{user_id or 'anonymous'}:")


def build_store(kind: Optional[str] = None) -> KeyValueStore:
    kind = kind or settings.DAY_CACHE_STORE
    if kind == "redis":
        return RedisKeyValueStore()
    return InMemoryKeyValueStore()
