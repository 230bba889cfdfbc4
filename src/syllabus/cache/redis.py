"""Redis cache client for Syllabus.

Provides async Redis operations for the catalog cache and view counters.
Uses the redis-py async client for connection pooling.

Every operation is best-effort: Redis is an accelerator, never the system of
record, so connection errors, timeouts and protocol errors are logged and
collapsed into a neutral result (miss, no-op, False, 0 or None) instead of
being raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

from syllabus.cache.result import CacheResult
from syllabus.observability.metrics import record_cache_error

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

# Failures that mean "the cache tier is unavailable right now"
CACHE_ERRORS: tuple[type[BaseException], ...] = (RedisError, OSError, asyncio.TimeoutError)


def create_redis(url: str, socket_timeout: float | None = None) -> Redis:
    """Create a Redis client backed by its own connection pool.

    The client is created once at application startup and handed to each
    cache component; nothing in this package keeps a module-level client.
    """
    return redis.from_url(  # type: ignore[no-untyped-call]
        url,
        decode_responses=False,  # Snapshots are stored as bytes
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
    )


class RedisCache:
    """Fault-tolerant key-value operations over a shared Redis client."""

    def __init__(self, client: Redis):
        self.client = client

    def _log_failure(self, operation: str, key: str, exc: BaseException) -> None:
        logger.warning(f"Cache {operation} failed for key {key}: {exc!r}")
        record_cache_error(operation)

    # -------------------------------------------------------------------------
    # Plain values
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> CacheResult[bytes]:
        """Get the value stored at key.

        Returns a HIT result carrying the value, a MISS result when the key
        is absent, or an UNAVAILABLE result when Redis could not be reached.
        """
        try:
            value = await self.client.get(key)
        except CACHE_ERRORS as e:
            self._log_failure("get", key, e)
            return CacheResult.unavailable(repr(e))

        if value is None:
            return CacheResult.miss()
        return CacheResult.hit(cast(bytes, value))

    async def set(self, key: str, value: bytes | str, ttl: int | None = None) -> bool:
        """Store value at key, replacing any prior value.

        Returns True if Redis accepted the write.
        """
        try:
            await self.client.set(key, value, ex=ttl)
        except CACHE_ERRORS as e:
            self._log_failure("set", key, e)
            return False

        logger.debug(f"Cached value for key: {key}")
        return True

    async def delete(self, key: str) -> bool:
        """Delete key if present.

        Returns True if Redis processed the delete (whether or not the key
        existed). A failed delete leaves the entry to expire via its TTL.
        """
        try:
            await self.client.delete(key)
        except CACHE_ERRORS as e:
            self._log_failure("delete", key, e)
            return False

        logger.debug(f"Deleted cache key: {key}")
        return True

    async def exists(self, key: str) -> bool:
        """Check whether key is present."""
        try:
            count = await self.client.exists(key)
        except CACHE_ERRORS as e:
            self._log_failure("exists", key, e)
            return False
        return bool(count)

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------

    async def increment(self, key: str, ttl: int | None = None) -> int | None:
        """Atomically add 1 to the integer at key, creating it at 1.

        When ttl is given, the expiry is (re)set after the increment. The two
        commands are not transactional: if EXPIRE fails the counter keeps its
        new value without an expiry and the incremented value is still
        returned.

        Returns the new value, or None if the increment itself failed.
        """
        try:
            value = cast(int, await self.client.incr(key))
        except CACHE_ERRORS as e:
            self._log_failure("incr", key, e)
            return None

        if ttl is not None:
            try:
                await self.client.expire(key, ttl)
            except CACHE_ERRORS as e:
                self._log_failure("expire", key, e)

        return value

    async def get_counter(self, key: str) -> int:
        """Read the integer stored at key; absent or unparseable reads as 0."""
        result = await self.get(key)
        if not result.is_hit:
            return 0

        try:
            return int(cast(bytes, result.value))
        except ValueError:
            logger.warning(f"Counter at key {key} is not an integer: {result.value!r}")
            return 0

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except CACHE_ERRORS:
            return False
