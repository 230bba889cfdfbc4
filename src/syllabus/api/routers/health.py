"""Liveness and readiness checks.

- /health/live: the process is up
- /health/ready: the database answers; Redis is reported but optional

The catalog keeps serving from the database when Redis is down, so a failed
Redis check marks the service "degraded" and still returns 200. Only an
unreachable database makes readiness fail with 503.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from enum import Enum

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from syllabus.cache.redis import RedisCache
from syllabus.persistence.db import health_check as database_is_up

router = APIRouter(prefix="/health", tags=["health"])

CHECK_TIMEOUT = 5.0  # seconds


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    name: str
    status: HealthStatus
    latency_ms: float
    message: str | None = None


async def check_component(
    name: str, check: Awaitable[bool], on_failure: HealthStatus
) -> ComponentHealth:
    """Run one connectivity check, bounded by CHECK_TIMEOUT."""
    started = time.monotonic()
    message = None
    try:
        ok = await asyncio.wait_for(check, timeout=CHECK_TIMEOUT)
    except asyncio.TimeoutError:
        ok = False
        message = f"no answer within {CHECK_TIMEOUT:g}s"
    else:
        if not ok:
            message = "unreachable"

    return ComponentHealth(
        name=name,
        status=HealthStatus.HEALTHY if ok else on_failure,
        latency_ms=round((time.monotonic() - started) * 1000, 2),
        message=message,
    )


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request) -> JSONResponse:
    state = request.app.state
    components = await asyncio.gather(
        check_component("database", database_is_up(state.session_factory), HealthStatus.UNHEALTHY),
        check_component("redis", RedisCache(state.redis).health_check(), HealthStatus.DEGRADED),
    )

    statuses = {c.status for c in components}
    if HealthStatus.UNHEALTHY in statuses:
        overall = HealthStatus.UNHEALTHY
    elif HealthStatus.DEGRADED in statuses:
        overall = HealthStatus.DEGRADED
    else:
        overall = HealthStatus.HEALTHY

    return JSONResponse(
        status_code=503 if overall is HealthStatus.UNHEALTHY else 200,
        content={
            "status": overall.value,
            "components": [c.model_dump(mode="json", exclude_none=True) for c in components],
        },
    )
