#!/usr/bin/env python3
"""
Redis Cache

JSON-valued cache on top of redis-py's asyncio client, implementing the
CacheBackend protocol.

Semantics:
- get() returns the decoded value, or the caller's default when the key is
  missing, unreadable or Redis is unavailable
- set() with value None deletes the key
- ttl is in seconds (default 1 hour); False or None stores without expiry
- flush() drops the current database (FLUSHDB ASYNC)

Failures are logged and reported through the return value; a cache outage
degrades to cache misses instead of failing requests.

Usage:
    cache = RedisCache.from_settings(settings)
    await cache.set("user:42", {"name": "Ada"}, ttl=300)
    user = await cache.get("user:42", default={})
"""

from typing import Any

import orjson
import redis.asyncio as redis
from redis.exceptions import RedisError

from microkit.core.config.constants import CACHE_DEFAULT_TTL
from microkit.core.config.settings import Settings
from microkit.core.exceptions import CacheConnectionError
from microkit.core.logging import get_logger

logger = get_logger(__name__)


class RedisCache:
    """
    A Redis based cache implementation.

    Attributes:
        host: Redis host
        port: Redis port
        client: redis.asyncio client (built from host/port unless
            injected)
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: str | None = None,
        client: redis.Redis | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.client = client or redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password,
            decode_responses=True,  # Return strings instead of bytes
        )

        logger.info("Redis cache initialized", stage="CACHE.INIT", host=host, port=port)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCache":
        """Create a cache from the REDIS_* settings."""
        config = settings.redis
        return cls(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            db=config.REDIS_DB,
            password=config.REDIS_PASSWORD,
        )

    async def ping(self) -> None:
        """
        Verify that Redis is reachable.

        Meant for startup checks; unlike the cache operations it raises.

        Raises:
            CacheConnectionError: Redis did not answer the PING
        """
        try:
            await self.client.ping()
        except RedisError as e:
            logger.error("Redis ping failed", stage="CACHE.PING", host=self.host, error=str(e))
            raise CacheConnectionError.from_exception(
                e, message=f"Redis at {self.host}:{self.port} is unreachable", host=self.host
            ).with_suggestion("Check REDIS_HOST/REDIS_PORT and that Redis is running") from e

    async def flush(self) -> bool:
        try:
            return bool(await self.client.flushdb(asynchronous=True))
        except RedisError as e:
            logger.warning("Redis FLUSHDB failed", stage="CACHE.FLUSH", error=str(e))
            return False

    async def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = await self.client.get(key)
        except RedisError as e:
            logger.warning("Redis GET failed", stage="CACHE.GET", key=key, error=str(e))
            return default

        if raw is None:
            return default

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Cached value is not JSON", stage="CACHE.GET", key=key)
            return default

    async def set(self, key: str, value: Any, ttl: int | bool | None = CACHE_DEFAULT_TTL) -> bool:
        try:
            if value is None:
                await self.client.delete(key)
                return True

            payload = orjson.dumps(value).decode("utf-8")
            if ttl is False or ttl is None:
                await self.client.set(key, payload)
            else:
                await self.client.set(key, payload, ex=int(ttl))
            return True
        except (RedisError, TypeError) as e:
            # orjson raises TypeError (JSONEncodeError) for unserializable values
            logger.warning("Redis SET failed", stage="CACHE.SET", key=key, error=str(e))
            return False

    async def close(self) -> None:
        """Close the client and its connection pool."""
        await self.client.aclose()
        logger.info("Redis cache closed", stage="CACHE.CLOSE")
