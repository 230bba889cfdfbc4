"""Explicit result type for best-effort cache reads.

A cache read has three outcomes: the key held a value, the key was absent,
or Redis could not be reached. Callers on the cache-aside path treat the last
two identically, but the distinction is kept so that metrics and logs can
tell a cold cache from a broken one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class CacheStatus(str, Enum):
    """Outcome of a cache operation."""

    HIT = "hit"
    MISS = "miss"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """Value read from the cache, or the reason there is none."""

    status: CacheStatus
    value: T | None = None
    error: str | None = None

    @classmethod
    def hit(cls, value: T) -> CacheResult[T]:
        return cls(status=CacheStatus.HIT, value=value)

    @classmethod
    def miss(cls) -> CacheResult[T]:
        return cls(status=CacheStatus.MISS)

    @classmethod
    def unavailable(cls, error: str) -> CacheResult[T]:
        return cls(status=CacheStatus.UNAVAILABLE, error=error)

    @property
    def is_hit(self) -> bool:
        return self.status is CacheStatus.HIT

    def __bool__(self) -> bool:
        return self.is_hit
