"""Prometheus metrics for Syllabus.

Collectors:
- syllabus_http_requests_total / syllabus_http_request_duration_seconds
- syllabus_cache_hits_total / syllabus_cache_misses_total, by cache name
- syllabus_cache_errors_total, by Redis operation
- syllabus_course_views_total

Collectors are registered once per process on first use of get_metrics().
With ENABLE_METRICS=false nothing is registered and the record_* helpers
do nothing.
"""

from __future__ import annotations

import logging
import time

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from syllabus.config import settings

logger = logging.getLogger(__name__)

LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)

# Paths that would only add noise to request metrics
_UNTRACKED_PREFIXES = ("/health", "/metrics")


class MetricsRegistry:
    """Holds the process-wide collectors."""

    http_requests_total: Counter | None = None
    http_request_duration_seconds: Histogram | None = None
    cache_hits_total: Counter | None = None
    cache_misses_total: Counter | None = None
    cache_errors_total: Counter | None = None
    course_views_total: Counter | None = None

    def __init__(self, enabled: bool = True, registry: CollectorRegistry = REGISTRY):
        self.enabled = enabled
        self.registry = registry
        if not enabled:
            logger.info("Metrics are disabled")
            return

        self.http_requests_total = Counter(
            "syllabus_http_requests_total",
            "HTTP requests handled",
            ["method", "path", "status"],
            registry=registry,
        )
        self.http_request_duration_seconds = Histogram(
            "syllabus_http_request_duration_seconds",
            "HTTP request latency in seconds",
            ["method", "path"],
            buckets=LATENCY_BUCKETS,
            registry=registry,
        )
        self.cache_hits_total = Counter(
            "syllabus_cache_hits_total",
            "Cache reads served from Redis",
            ["cache"],
            registry=registry,
        )
        self.cache_misses_total = Counter(
            "syllabus_cache_misses_total",
            "Cache reads that fell through to the database",
            ["cache"],
            registry=registry,
        )
        self.cache_errors_total = Counter(
            "syllabus_cache_errors_total",
            "Redis commands that failed and were degraded",
            ["operation"],
            registry=registry,
        )
        self.course_views_total = Counter(
            "syllabus_course_views_total", "Course views counted", registry=registry
        )

    def generate_latest(self) -> bytes:
        """Exposition-format snapshot of all collectors."""
        if not self.enabled:
            return b"# Metrics disabled\n"
        return generate_latest(self.registry)


_metrics: MetricsRegistry | None = None


def get_metrics() -> MetricsRegistry:
    """Process-wide metrics, created on first call."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry(enabled=settings.enable_metrics)
    return _metrics


def normalize_path(path: str) -> str:
    """Collapse ids in a request path so label cardinality stays bounded.

    Examples:
        /courses/42 -> /courses/{id}
        /courses/42/enrollments/alice -> /courses/{id}/enrollments/{student}
    """
    segments = path.strip("/").split("/")
    for i, segment in enumerate(segments):
        if segment.isdigit():
            segments[i] = "{id}"
        elif i > 0 and segments[i - 1] == "enrollments":
            segments[i] = "{student}"
    return "/" + "/".join(segments)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count requests and observe their latency."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(_UNTRACKED_PREFIXES):
            return await call_next(request)

        metrics = get_metrics()
        path = normalize_path(request.url.path)
        status_code = 500
        started = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            if metrics.http_requests_total is not None:
                metrics.http_requests_total.labels(
                    method=request.method, path=path, status=status_code
                ).inc()
            if metrics.http_request_duration_seconds is not None:
                metrics.http_request_duration_seconds.labels(
                    method=request.method, path=path
                ).observe(time.perf_counter() - started)


def record_cache_hit(cache: str) -> None:
    counter = get_metrics().cache_hits_total
    if counter is not None:
        counter.labels(cache=cache).inc()


def record_cache_miss(cache: str) -> None:
    counter = get_metrics().cache_misses_total
    if counter is not None:
        counter.labels(cache=cache).inc()


def record_cache_error(operation: str) -> None:
    """Count a degraded Redis command (get, set, delete, incr, ...)."""
    counter = get_metrics().cache_errors_total
    if counter is not None:
        counter.labels(operation=operation).inc()


def record_course_view() -> None:
    counter = get_metrics().course_views_total
    if counter is not None:
        counter.inc()
