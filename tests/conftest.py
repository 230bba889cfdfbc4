"""Global pytest fixtures.

Provides:
- FakeRedis: an in-memory stand-in for redis.asyncio.Redis with a manual clock
- failing_redis: a Redis client whose every command raises ConnectionError
- session_factory: async SQLAlchemy sessions on a throwaway SQLite file
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from syllabus.cache.redis import RedisCache


class FakeRedis:
    """Subset of the Redis command set used by RedisCache.

    Expiry is driven by ``advance()`` rather than wall time.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._data: dict[str, bytes] = {}
        self._expires: dict[str, float] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _purge(self, key: str) -> None:
        deadline = self._expires.get(key)
        if deadline is not None and self.now >= deadline:
            self._data.pop(key, None)
            self._expires.pop(key, None)

    def ttl(self, key: str) -> float | None:
        self._purge(key)
        deadline = self._expires.get(key)
        return None if deadline is None else deadline - self.now

    def keys(self) -> list[str]:
        for key in list(self._data):
            self._purge(key)
        return sorted(self._data)

    async def get(self, key: str) -> bytes | None:
        self._purge(key)
        return self._data.get(key)

    async def set(self, key: str, value: bytes | str | int, ex: int | None = None) -> bool:
        if isinstance(value, int):
            value = str(value)
        if isinstance(value, str):
            value = value.encode()
        self._data[key] = value
        if ex is None:
            self._expires.pop(key, None)
        else:
            self._expires[key] = self.now + ex
        return True

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            self._purge(key)
            if self._data.pop(key, None) is not None:
                deleted += 1
            self._expires.pop(key, None)
        return deleted

    async def exists(self, *keys: str) -> int:
        count = 0
        for key in keys:
            self._purge(key)
            count += key in self._data
        return count

    async def incr(self, key: str) -> int:
        self._purge(key)
        try:
            value = int(self._data.get(key, b"0")) + 1
        except ValueError as e:
            raise ResponseError("value is not an integer or out of range") from e
        self._data[key] = str(value).encode()
        return value

    async def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self._data:
            return False
        self._expires[key] = self.now + seconds
        return True

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        pass


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache(fake_redis: FakeRedis) -> RedisCache:
    return RedisCache(fake_redis)  # type: ignore[arg-type]


@pytest.fixture
def failing_redis() -> AsyncMock:
    """Redis client that is always unreachable."""
    mock = AsyncMock()
    error = RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
    for command in ("get", "set", "delete", "exists", "incr", "expire", "ping"):
        getattr(mock, command).side_effect = error
    return mock


@pytest.fixture
def failing_cache(failing_redis: AsyncMock) -> RedisCache:
    return RedisCache(failing_redis)


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory over a fresh SQLite database with all tables created."""
    from syllabus.persistence.db import create_session_factory, init_db

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await init_db(engine)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as s:
        yield s
