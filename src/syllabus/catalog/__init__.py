"""Catalog service for courses, lessons and videos."""

from syllabus.catalog.errors import (
    CatalogError,
    CourseNotFoundError,
    LessonNotFoundError,
    NotFoundError,
)
from syllabus.catalog.service import CatalogService

__all__ = [
    "CatalogError",
    "CatalogService",
    "CourseNotFoundError",
    "LessonNotFoundError",
    "NotFoundError",
]
