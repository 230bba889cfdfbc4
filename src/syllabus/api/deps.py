"""Shared FastAPI dependencies for Syllabus routers.

The Redis client and the session factory are created once in the application
lifespan and stored on ``app.state``; these dependencies build the per-request
objects on top of them.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from syllabus.cache.counters import ViewCounter
from syllabus.cache.published import PublishedCourseCache
from syllabus.cache.redis import RedisCache
from syllabus.catalog.service import CatalogService
from syllabus.config import settings
from syllabus.persistence.db import session_context


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Provide a session for the duration of a request."""
    async with session_context(request.app.state.session_factory) as session:
        yield session


def get_cache(request: Request) -> RedisCache:
    """Get the Redis cache bound to the shared client."""
    return RedisCache(request.app.state.redis)


def get_published_cache(cache: RedisCache = Depends(get_cache)) -> PublishedCourseCache:
    return PublishedCourseCache(cache, ttl=settings.published_courses_ttl)


def get_view_counter(cache: RedisCache = Depends(get_cache)) -> ViewCounter:
    return ViewCounter(cache, window=settings.view_counter_ttl)


def get_catalog_service(
    session: AsyncSession = Depends(get_session),
    published: PublishedCourseCache = Depends(get_published_cache),
    views: ViewCounter = Depends(get_view_counter),
) -> CatalogService:
    return CatalogService(session, published, views)
