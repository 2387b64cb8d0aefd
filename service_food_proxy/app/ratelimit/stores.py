"""
Counter stores backing the rate gate.
"""

from typing import Optional, Protocol

import redis.asyncio as redis

from shared.logging import get_logger


class CounterStore(Protocol):
    """Key-value store with expiring writes."""

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent or expired."""
        ...

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, expiring ``ttl_seconds`` from now."""
        ...


class RedisCounterStore:
    """Counter store on top of a Redis connection pool."""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.logger = get_logger("food_proxy.counter_store")
        self._redis: Optional[redis.Redis] = client

    def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url, decode_responses=True)
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        value = await self._get_redis().get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._get_redis().setex(key, ttl_seconds, value)

    async def ping(self) -> bool:
        """Check connectivity for health reporting."""
        return bool(await self._get_redis().ping())

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
