"""Logging and Prometheus metrics for Syllabus."""

from syllabus.observability.logging import (
    LogContext,
    configure_logging,
    correlation_id_var,
    request_id_var,
)
from syllabus.observability.metrics import MetricsMiddleware, get_metrics

__all__ = [
    "LogContext",
    "MetricsMiddleware",
    "configure_logging",
    "correlation_id_var",
    "get_metrics",
    "request_id_var",
]
