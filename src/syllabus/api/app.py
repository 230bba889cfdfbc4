"""FastAPI application factory for Syllabus.

Creates the application with:
- Course, lesson and video routers
- Health checks and Prometheus metrics
- Lifecycle management for the database engine and the Redis client
- Consistent error envelopes
- ORJSON for fast JSON serialization
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.types import ExceptionHandler

from syllabus.api.errors import (
    ApiError,
    api_exception_handler,
    catalog_not_found_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from syllabus.api.middleware import CorrelationMiddleware
from syllabus.api.routers import courses, health, lessons
from syllabus.api.routers import metrics as metrics_router
from syllabus.cache.redis import create_redis
from syllabus.catalog.errors import NotFoundError as CatalogNotFoundError
from syllabus.config import settings
from syllabus.observability import configure_logging
from syllabus.observability.metrics import MetricsMiddleware, get_metrics
from syllabus.persistence.db import create_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    On startup:
    - Configure structured logging
    - Initialize Prometheus metrics
    - Create the database engine and tables
    - Create the shared Redis client

    On shutdown:
    - Close the Redis client
    - Dispose of the database engine
    """
    configure_logging(
        json_format=settings.env != "dev",
        level=settings.log_level,
    )
    get_metrics()

    logger.info(f"Starting Syllabus ({settings.env})")
    engine = create_engine(settings)
    await init_db(engine)
    app.state.session_factory = create_session_factory(engine)
    # No startup ping: an unreachable Redis only means every read is a miss
    app.state.redis = create_redis(settings.redis_url, settings.redis_socket_timeout)
    logger.info("Syllabus startup complete")

    yield

    logger.info("Shutting down Syllabus")
    await app.state.redis.aclose()
    await engine.dispose()
    logger.info("Syllabus shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Syllabus",
        description="Course catalog service with a Redis cache layer",
        version="0.1.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # CorrelationMiddleware is innermost so metrics and handlers see the request id
    app.add_middleware(CorrelationMiddleware)
    if settings.enable_metrics:
        app.add_middleware(MetricsMiddleware)

    app.add_exception_handler(ApiError, cast(ExceptionHandler, api_exception_handler))
    app.add_exception_handler(
        CatalogNotFoundError, cast(ExceptionHandler, catalog_not_found_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast(ExceptionHandler, validation_exception_handler)
    )
    app.add_exception_handler(Exception, cast(ExceptionHandler, generic_exception_handler))

    app.include_router(health.router)
    if settings.enable_metrics:
        app.include_router(metrics_router.router)
    app.include_router(courses.router)
    app.include_router(lessons.router)

    return app
