"""Redis read-through cache for short code lookups."""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError


class RedisCache:
    """Short code -> original URL entries in Redis.

    Redis failures are logged and reported as misses; the store stays the
    source of truth, so a broken cache never fails a request.
    """

    KEY_PREFIX = "url:shortener:"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0);
                None disables the cache
            ttl_seconds: Expiry applied to every entry
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Connect and ping; an unreachable server disables the cache."""
        if not self.enabled:
            return

        self.client = redis.from_url(self.redis_url, encoding="utf-8", decode_responses=True)
        try:
            await self.client.ping()
        except RedisError as e:
            self.logger.error(f"Failed to connect to Redis, caching disabled: {e}")
            self.enabled = False
            return

        self.logger.info(f"Redis cache connected (TTL={self.ttl_seconds}s)")

    def key_for(self, short_code: str) -> str:
        return f"{self.KEY_PREFIX}{short_code}"

    async def _run(self, operation: str, default: Any, call: Callable[[redis.Redis], Awaitable[Any]]) -> Any:
        if not self.enabled or self.client is None:
            return default
        try:
            return await call(self.client)
        except RedisError as e:
            self.logger.error(f"Cache {operation} error: {e}")
            return default

    async def get_url(self, short_code: str) -> Optional[str]:
        """Cached original URL for a code, or None on a miss."""
        return await self._run("get", None, lambda c: c.get(self.key_for(short_code)))

    async def set_url(self, short_code: str, original_url: str) -> bool:
        """Cache a code's original URL for ``ttl_seconds``."""
        key = self.key_for(short_code)
        result = await self._run("set", False, lambda c: c.setex(key, self.ttl_seconds, original_url))
        return bool(result)

    async def evict(self, short_codes: Iterable[str]) -> int:
        """Drop entries for deleted codes.

        Returns:
            Number of keys removed
        """
        keys = [self.key_for(code) for code in short_codes]
        if not keys:
            return 0
        return await self._run("delete", 0, lambda c: c.delete(*keys))

    async def ping(self) -> bool:
        return bool(await self._run("ping", False, lambda c: c.ping()))

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
