"""Approximate per-course view counters.

Counters live only in Redis. They are incremented with the native INCR so
concurrent requests never lose updates, and carry a rolling expiry that is
refreshed on every increment: a course that keeps getting views keeps its
count, one that goes quiet for a full window drops back to zero.
"""

from __future__ import annotations

import logging

from syllabus.cache.keys import CacheKeys
from syllabus.cache.redis import RedisCache
from syllabus.observability.metrics import record_course_view

logger = logging.getLogger(__name__)

# Default rolling window (24 hours)
DEFAULT_WINDOW = 86400


class ViewCounter:
    """View counts keyed by course id."""

    def __init__(self, cache: RedisCache, window: int = DEFAULT_WINDOW):
        self.cache = cache
        self.window = window

    async def bump(self, course_id: int) -> int | None:
        """Count one view.

        Returns the new count, or None when Redis is unavailable.
        """
        value = await self.cache.increment(CacheKeys.course_views(course_id), ttl=self.window)
        if value is not None:
            record_course_view()
        return value

    async def read(self, course_id: int) -> int:
        """Current view count; 0 when absent, expired or unreachable."""
        return await self.cache.get_counter(CacheKeys.course_views(course_id))
