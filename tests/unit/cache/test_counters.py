"""Tests for course view counters."""

from __future__ import annotations

import asyncio

import pytest

from syllabus.cache.counters import ViewCounter
from syllabus.cache.keys import CacheKeys
from syllabus.cache.redis import RedisCache


@pytest.fixture
def views(cache: RedisCache) -> ViewCounter:
    return ViewCounter(cache, window=86400)


class TestViewCounter:
    @pytest.mark.asyncio
    async def test_unseen_course_reads_zero(self, views: ViewCounter) -> None:
        assert await views.read(1) == 0

    @pytest.mark.asyncio
    async def test_bump_returns_running_total(self, views: ViewCounter) -> None:
        assert await views.bump(1) == 1
        assert await views.bump(1) == 2
        assert await views.read(1) == 2

    @pytest.mark.asyncio
    async def test_counters_are_per_course(self, views: ViewCounter) -> None:
        await views.bump(1)
        await views.bump(2)
        await views.bump(2)

        assert await views.read(1) == 1
        assert await views.read(2) == 2

    @pytest.mark.asyncio
    async def test_concurrent_bumps_lose_nothing(self, views: ViewCounter) -> None:
        await asyncio.gather(*(views.bump(7) for _ in range(100)))

        assert await views.read(7) == 100

    @pytest.mark.asyncio
    async def test_window_slides_with_activity(self, views: ViewCounter, fake_redis) -> None:
        await views.bump(1)
        fake_redis.advance(80000)
        await views.bump(1)
        fake_redis.advance(80000)

        assert await views.read(1) == 2
        assert fake_redis.ttl(CacheKeys.course_views(1)) == 86400 - 80000

    @pytest.mark.asyncio
    async def test_quiet_counter_resets(self, views: ViewCounter, fake_redis) -> None:
        await views.bump(1)
        fake_redis.advance(86400)

        assert await views.read(1) == 0
        assert await views.bump(1) == 1

    @pytest.mark.asyncio
    async def test_unavailable_redis(self, failing_cache: RedisCache) -> None:
        views = ViewCounter(failing_cache)

        assert await views.bump(1) is None
        assert await views.read(1) == 0
