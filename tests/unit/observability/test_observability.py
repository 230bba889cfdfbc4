"""Tests for structured logging and metrics helpers."""

from __future__ import annotations

import json
import logging

import pytest
from prometheus_client import CollectorRegistry

from syllabus.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    request_id_var,
)
from syllabus.observability.metrics import MetricsRegistry, normalize_path


def make_record(message: str = "Created course 42") -> logging.LogRecord:
    return logging.LogRecord(
        name="syllabus.catalog.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestJsonFormatter:
    def test_basic_fields(self) -> None:
        data = json.loads(JsonFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "syllabus.catalog.service"
        assert data["message"] == "Created course 42"
        assert "request_id" not in data

    def test_includes_request_context(self) -> None:
        with LogContext(request_id="req-1", correlation_id="corr-1"):
            data = json.loads(JsonFormatter().format(make_record()))

        assert data["request_id"] == "req-1"
        assert data["correlation_id"] == "corr-1"

    def test_includes_extras(self) -> None:
        record = make_record()
        record.course_id = 42

        data = json.loads(JsonFormatter().format(record))

        assert data["course_id"] == 42


class TestLogContext:
    def test_restores_previous_value(self) -> None:
        with LogContext(request_id="outer"):
            with LogContext(request_id="inner"):
                assert request_id_var.get() == "inner"
            assert request_id_var.get() == "outer"
        assert request_id_var.get() == ""

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(TypeError):
            LogContext(tenant="acme")


class TestConsoleFormatter:
    def test_plain_output(self) -> None:
        line = ConsoleFormatter().format(make_record())

        assert " INFO " in line
        assert line.endswith("syllabus.catalog.service: Created course 42")

    def test_appends_request_id(self) -> None:
        with LogContext(request_id="0123456789abcdef"):
            line = ConsoleFormatter().format(make_record())

        assert line.endswith("[req=01234567]")


class TestPathNormalization:
    def test_numeric_ids(self) -> None:
        assert normalize_path("/courses/42") == "/courses/{id}"
        assert normalize_path("/lessons/7/videos") == "/lessons/{id}/videos"

    def test_student_ids(self) -> None:
        assert (
            normalize_path("/courses/42/enrollments/alice")
            == "/courses/{id}/enrollments/{student}"
        )

    def test_static_paths(self) -> None:
        assert normalize_path("/courses") == "/courses"


class TestMetricsRegistry:
    def test_counts_cache_activity(self) -> None:
        registry = CollectorRegistry()
        metrics = MetricsRegistry(registry=registry)

        metrics.cache_hits_total.labels(cache="published_courses").inc()  # type: ignore[union-attr]

        assert registry.get_sample_value(
            "syllabus_cache_hits_total", {"cache": "published_courses"}
        ) == 1.0
        assert b"syllabus_course_views_total" in metrics.generate_latest()

    def test_disabled_registers_nothing(self) -> None:
        registry = CollectorRegistry()
        metrics = MetricsRegistry(enabled=False, registry=registry)

        assert metrics.cache_hits_total is None
        assert metrics.generate_latest() == b"# Metrics disabled\n"
        assert list(registry.collect()) == []
