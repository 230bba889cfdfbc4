"""Cache-aside coordination for the published-courses collection.

The snapshot under ``courses:published`` is always a complete list of the
published courses as of some instant at most one TTL ago. Write paths never
patch it; they delete it and let the next reader repopulate from the store.

Invalidation is conservative: deleting a key that did not need deleting only
costs one extra store query, while a snapshot that survives a membership
change would serve wrong data until the TTL runs out.

Callers must commit their store transaction before calling any ``on_*``
method. Invalidating first lets a concurrent reader repopulate the snapshot
from pre-commit data, which would then outlive the invalidation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from syllabus.cache.codec import (
    SnapshotDecodeError,
    SnapshotEncodeError,
    decode_courses,
    encode_courses,
)
from syllabus.cache.keys import CacheKeys
from syllabus.cache.redis import RedisCache
from syllabus.core.model import Course, CourseStatus
from syllabus.observability.metrics import (
    record_cache_error,
    record_cache_hit,
    record_cache_miss,
)

logger = logging.getLogger(__name__)

# Snapshot TTL (5 minutes)
DEFAULT_TTL = 300

CACHE_NAME = "published_courses"


class PublishedCourseCache:
    """Snapshot of published courses plus per-course invalidation keys.

    Holds no state of its own beyond the Redis keys it manages.
    """

    predicate_status = CourseStatus.PUBLISHED

    def __init__(self, cache: RedisCache, ttl: int = DEFAULT_TTL):
        self.cache = cache
        self.ttl = ttl

    # -------------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------------

    async def get_cached(self) -> list[Course] | None:
        """Return the cached published courses, or None on a miss.

        An unreachable Redis and an undecodable snapshot both count as a miss.
        """
        result = await self.cache.get(CacheKeys.published_courses())
        if not result.is_hit or result.value is None:
            record_cache_miss(CACHE_NAME)
            return None

        try:
            courses = decode_courses(result.value)
        except SnapshotDecodeError as e:
            logger.warning(f"Discarding unreadable published courses snapshot: {e}")
            record_cache_miss(CACHE_NAME)
            return None

        record_cache_hit(CACHE_NAME)
        logger.debug(f"Retrieved {len(courses)} published courses from cache")
        return courses

    async def populate(self, courses: Sequence[Course]) -> bool:
        """Replace the snapshot with the full list of published courses.

        Returns False, leaving any existing snapshot untouched, when the
        courses cannot be encoded or Redis rejects the write.
        """
        try:
            payload = encode_courses(courses)
        except SnapshotEncodeError as e:
            logger.warning(f"Not caching published courses: {e}")
            record_cache_error("encode")
            return False

        stored = await self.cache.set(CacheKeys.published_courses(), payload, ttl=self.ttl)
        if stored:
            logger.debug(f"Cached {len(courses)} published courses")
        return stored

    # -------------------------------------------------------------------------
    # Invalidation
    # -------------------------------------------------------------------------

    async def invalidate_collection(self) -> bool:
        """Drop the published courses snapshot.

        Returns False if Redis did not process the delete; the snapshot then
        lives until its TTL runs out.
        """
        deleted = await self.cache.delete(CacheKeys.published_courses())
        if deleted:
            logger.debug("Invalidated published courses cache")
        return deleted

    async def invalidate_entity(self, course_id: int) -> None:
        """Drop the per-course entry."""
        await self.cache.delete(CacheKeys.course(course_id))
        logger.debug(f"Invalidated cache for course: {course_id}")

    async def on_entity_mutated(self, course_id: int) -> None:
        """A course row changed in a way that does not affect listing."""
        await self.invalidate_entity(course_id)

    async def on_status_transition(self, old: CourseStatus, new: CourseStatus) -> bool:
        """Invalidate the snapshot if the course entered or left the published set.

        Edits that keep a course published leave the snapshot in place; the
        changed fields show up once the TTL expires.

        Returns True if the snapshot was invalidated.
        """
        was_listed = old == self.predicate_status
        is_listed = new == self.predicate_status
        if was_listed == is_listed:
            return False

        await self.invalidate_collection()
        return True

    async def on_deleted(self, course: Course) -> None:
        """A course was deleted from the store."""
        if course.status == self.predicate_status:
            await self.invalidate_collection()
        await self.invalidate_entity(course.id)

    async def on_created(self, course: Course) -> None:
        """A course was created.

        The snapshot is dropped regardless of the new course's status.
        """
        await self.invalidate_collection()
