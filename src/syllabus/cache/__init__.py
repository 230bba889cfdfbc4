"""Cache layer for Syllabus.

Provides Redis caching with the cache-aside pattern:
- Published courses snapshot with a fixed TTL
- Invalidation driven by catalog writes after commit
- Approximate view counters using atomic INCR
- Best-effort client: a Redis outage degrades latency, never correctness
"""

from syllabus.cache.codec import (
    SnapshotDecodeError,
    SnapshotEncodeError,
    decode_courses,
    encode_courses,
)
from syllabus.cache.counters import ViewCounter
from syllabus.cache.keys import CacheKeys
from syllabus.cache.published import PublishedCourseCache
from syllabus.cache.redis import RedisCache, create_redis
from syllabus.cache.result import CacheResult, CacheStatus

__all__ = [
    # Core cache
    "CacheKeys",
    "CacheResult",
    "CacheStatus",
    "RedisCache",
    "create_redis",
    # Coordinators
    "PublishedCourseCache",
    "ViewCounter",
    # Codec
    "SnapshotDecodeError",
    "SnapshotEncodeError",
    "decode_courses",
    "encode_courses",
]
