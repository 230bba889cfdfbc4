"""API routers for Syllabus."""

from syllabus.api.routers import courses, health, lessons, metrics

__all__ = [
    "courses",
    "health",
    "lessons",
    "metrics",
]
