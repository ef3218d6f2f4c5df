"""
Redis cache for provider responses.

Exchange rates and market data are stored as JSON under TTL keys:
- fx:{SOURCE}:{TARGET}
- market:{function}:{SYMBOL}[:{interval}]

A Redis failure is logged and treated as a miss, so callers fall through
to the provider.
"""

import json
import logging
from typing import Any, Callable, Optional

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """JSON values in Redis with a TTL per key.

    Args:
        client: Redis client created with decode_responses=True.
    """

    def __init__(self, client: "redis.Redis") -> None:
        self._redis = client

    @classmethod
    def from_url(cls, redis_url: str, socket_timeout: float = 5) -> "RedisCache":
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
        )
        logger.info("Redis cache configured at %s", redis_url)
        return cls(client)

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss or a Redis failure."""
        try:
            value = self._redis.get(key)
        except redis.RedisError:
            logger.warning("Redis GET failed for key %s", key)
            return None
        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self._redis.setex(key, ttl_seconds, json.dumps(value, default=str))
        except redis.RedisError:
            logger.warning("Redis SET failed for key %s", key)

    def get_or_set(self, key: str, ttl_seconds: int, loader: Callable[[], Any]) -> Any:
        """Return the cached value, loading and storing it on a miss.

        Loader exceptions propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached
        value = loader()
        self.set(key, value, ttl_seconds)
        return value
