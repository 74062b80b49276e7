import json
from functools import lru_cache
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from spotmap.core import config
from spotmap.utils import get_logger

log = get_logger(__name__)


class CacheService:
    """
    JSON cache on top of Redis.

    Failures never propagate: reads return None and writes return False, so a Redis outage only costs us the cache.
    A service without a client (REDIS_URL not set) behaves like an empty cache.
    """

    def __init__(self, client: Optional[redis.Redis]):
        self._client = client

    async def get(self, key: str) -> Optional[Any]:
        if self._client is None:
            return None
        try:
            value = await self._client.get(key)
            if value is None:
                return None
            return json.loads(value)
        except (RedisError, OSError, ValueError):
            log.exception("Cache get error for key %s", key)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        if self._client is None:
            return False
        try:
            serialized = json.dumps(value)
            if ttl_seconds:
                await self._client.setex(key, ttl_seconds, serialized)
            else:
                await self._client.set(key, serialized)
            return True
        except (RedisError, OSError, TypeError, ValueError):
            log.exception("Cache set error for key %s", key)
            return False


@lru_cache(maxsize=1)
def get_redis() -> Optional[redis.Redis]:
    if not config.REDIS_URL:
        log.warning("REDIS_URL not configured, caching disabled")
        return None
    return redis.from_url(config.REDIS_URL, decode_responses=True)


def get_cache_service() -> CacheService:
    return CacheService(get_redis())
