"""Tests for the published courses cache coordinator."""

from __future__ import annotations

import pytest

from syllabus.cache.keys import CacheKeys
from syllabus.cache.published import PublishedCourseCache
from syllabus.cache.redis import RedisCache
from syllabus.core.model import Course, CourseStatus


def make_course(course_id: int, status: CourseStatus = CourseStatus.PUBLISHED) -> Course:
    return Course(id=course_id, title=f"Course {course_id}", instructor_id="t1", status=status)


@pytest.fixture
def published(cache: RedisCache) -> PublishedCourseCache:
    return PublishedCourseCache(cache, ttl=300)


class TestReadPath:
    @pytest.mark.asyncio
    async def test_empty_cache_is_miss(self, published: PublishedCourseCache) -> None:
        assert await published.get_cached() is None

    @pytest.mark.asyncio
    async def test_populate_then_hit(self, published: PublishedCourseCache) -> None:
        courses = [make_course(1), make_course(2)]

        assert await published.populate(courses) is True

        assert await published.get_cached() == courses

    @pytest.mark.asyncio
    async def test_empty_collection_is_a_hit(self, published: PublishedCourseCache) -> None:
        """An empty catalog is cached too, and is not confused with a miss."""
        await published.populate([])

        assert await published.get_cached() == []

    @pytest.mark.asyncio
    async def test_populate_overwrites(self, published: PublishedCourseCache) -> None:
        await published.populate([make_course(1), make_course(2)])
        await published.populate([make_course(3)])

        cached = await published.get_cached()

        assert cached is not None
        assert [c.id for c in cached] == [3]

    @pytest.mark.asyncio
    async def test_snapshot_expires_after_ttl(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await published.populate([make_course(1)])

        fake_redis.advance(299)
        assert await published.get_cached() is not None

        fake_redis.advance(1)
        assert await published.get_cached() is None

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_is_miss(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await fake_redis.set(CacheKeys.published_courses(), b"\x00garbage", ex=300)

        assert await published.get_cached() is None


class TestStatusTransition:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("old", "new"),
        [
            (CourseStatus.DRAFT, CourseStatus.DRAFT),
            (CourseStatus.PUBLISHED, CourseStatus.PUBLISHED),
            (CourseStatus.DRAFT, CourseStatus.ARCHIVED),
            (CourseStatus.ARCHIVED, CourseStatus.DRAFT),
        ],
    )
    async def test_membership_unchanged_keeps_snapshot(
        self, published: PublishedCourseCache, old: CourseStatus, new: CourseStatus
    ) -> None:
        await published.populate([make_course(1)])

        invalidated = await published.on_status_transition(old, new)

        assert invalidated is False
        assert await published.get_cached() is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("old", "new"),
        [
            (CourseStatus.DRAFT, CourseStatus.PUBLISHED),
            (CourseStatus.PUBLISHED, CourseStatus.DRAFT),
            (CourseStatus.PUBLISHED, CourseStatus.ARCHIVED),
            (CourseStatus.ARCHIVED, CourseStatus.PUBLISHED),
        ],
    )
    async def test_membership_change_drops_snapshot(
        self, published: PublishedCourseCache, old: CourseStatus, new: CourseStatus
    ) -> None:
        await published.populate([make_course(1)])

        invalidated = await published.on_status_transition(old, new)

        assert invalidated is True
        assert await published.get_cached() is None


class TestInvalidation:
    @pytest.mark.asyncio
    async def test_invalidate_collection_is_idempotent(
        self, published: PublishedCourseCache
    ) -> None:
        await published.populate([make_course(1)])

        assert await published.invalidate_collection() is True
        assert await published.invalidate_collection() is True

        assert await published.get_cached() is None
        await published.populate([make_course(2)])
        cached = await published.get_cached()
        assert cached is not None
        assert [c.id for c in cached] == [2]

    @pytest.mark.asyncio
    async def test_delete_published_course(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await published.populate([make_course(1)])
        await fake_redis.set(CacheKeys.course(1), b"{}")

        await published.on_deleted(make_course(1, CourseStatus.PUBLISHED))

        assert await published.get_cached() is None
        assert await fake_redis.exists(CacheKeys.course(1)) == 0

    @pytest.mark.asyncio
    async def test_delete_draft_course_keeps_snapshot(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await published.populate([make_course(1)])
        await fake_redis.set(CacheKeys.course(2), b"{}")

        await published.on_deleted(make_course(2, CourseStatus.DRAFT))

        assert await published.get_cached() is not None
        assert await fake_redis.exists(CacheKeys.course(2)) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", list(CourseStatus))
    async def test_create_always_drops_snapshot(
        self, published: PublishedCourseCache, status: CourseStatus
    ) -> None:
        await published.populate([make_course(1)])

        await published.on_created(make_course(2, status))

        assert await published.get_cached() is None

    @pytest.mark.asyncio
    async def test_entity_mutation_leaves_snapshot(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await published.populate([make_course(1)])
        await fake_redis.set(CacheKeys.course(1), b"{}")

        await published.on_entity_mutated(1)

        assert await published.get_cached() is not None
        assert await fake_redis.exists(CacheKeys.course(1)) == 0

    @pytest.mark.asyncio
    async def test_view_counter_survives_invalidation(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        await fake_redis.incr(CacheKeys.course_views(1))

        await published.on_deleted(make_course(1))

        assert await fake_redis.get(CacheKeys.course_views(1)) == b"1"


class TestEncodeFailure:
    @pytest.mark.asyncio
    async def test_unencodable_courses_are_not_cached(
        self, published: PublishedCourseCache
    ) -> None:
        await published.populate([make_course(1)])
        broken = Course(id=2, title="\ud800", instructor_id="t1", status=CourseStatus.PUBLISHED)

        assert await published.populate([broken]) is False

        cached = await published.get_cached()
        assert cached is not None
        assert [c.id for c in cached] == [1]

    @pytest.mark.asyncio
    async def test_unencodable_courses_on_empty_cache(
        self, published: PublishedCourseCache, fake_redis
    ) -> None:
        broken = Course(id=2, title="\ud800", instructor_id="t1", status=CourseStatus.PUBLISHED)

        assert await published.populate([broken]) is False
        assert await fake_redis.exists(CacheKeys.published_courses()) == 0


class TestUnavailableRedis:
    @pytest.mark.asyncio
    async def test_every_operation_degrades(self, failing_cache: RedisCache) -> None:
        published = PublishedCourseCache(failing_cache)

        assert await published.get_cached() is None
        assert await published.populate([make_course(1)]) is False
        assert await published.invalidate_collection() is False
        await published.invalidate_entity(1)
        assert await published.on_status_transition(
            CourseStatus.DRAFT, CourseStatus.PUBLISHED
        ) is True
        await published.on_deleted(make_course(1))
        await published.on_created(make_course(2))
