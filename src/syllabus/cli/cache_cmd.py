"""CLI commands for operating on the catalog cache.

Usage:
    syllabus cache invalidate
    syllabus cache views 42
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from syllabus.cache.counters import ViewCounter
from syllabus.cache.published import PublishedCourseCache
from syllabus.cache.redis import RedisCache, create_redis
from syllabus.config import settings

app = typer.Typer(help="Inspect and invalidate the catalog cache", no_args_is_help=True)
console = Console()


def _open_cache(redis_url: str | None) -> RedisCache:
    client = create_redis(redis_url or settings.redis_url, settings.redis_socket_timeout)
    return RedisCache(client)


RedisUrlOption = typer.Option(None, "--redis-url", help="Redis URL (defaults to REDIS_URL)")


@app.command("invalidate")
def invalidate(redis_url: str | None = RedisUrlOption) -> None:
    """Drop the published courses snapshot."""

    async def _run() -> bool:
        cache = _open_cache(redis_url)
        try:
            return await PublishedCourseCache(cache).invalidate_collection()
        finally:
            await cache.client.aclose()

    if asyncio.run(_run()):
        console.print("[green]Published courses snapshot invalidated[/green]")
    else:
        console.print("[red]Redis did not process the delete; snapshot expires with its TTL[/red]")
        raise typer.Exit(code=1)


@app.command("views")
def views(
    course_id: int = typer.Argument(..., help="Course id"),
    redis_url: str | None = RedisUrlOption,
) -> None:
    """Print the approximate view count for a course."""

    async def _run() -> int:
        cache = _open_cache(redis_url)
        try:
            return await ViewCounter(cache, window=settings.view_counter_ttl).read(course_id)
        finally:
            await cache.client.aclose()

    count = asyncio.run(_run())
    console.print(f"Course {course_id}: {count} views")
