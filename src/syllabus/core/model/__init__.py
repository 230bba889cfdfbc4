"""Catalog domain models.

All models use Pydantic v2. Models are serialized with camelCase aliases on
the wire and in the cache, and ignore unknown fields on input so that a
cached snapshot written by an older or newer release still decodes.
"""

from pydantic import BaseModel


class CatalogModel(BaseModel):
    """Base model for catalog payloads."""

    model_config = {
        "extra": "ignore",
        "populate_by_name": True,
    }


# Import order matters: CatalogModel must be defined first
# ruff: noqa: E402
from syllabus.core.model.course import (
    Course,
    CourseCreate,
    CourseStatus,
    CourseUpdate,
)
from syllabus.core.model.lesson import (
    Lesson,
    LessonCreate,
    LessonUpdate,
    Video,
    VideoCreate,
    VideoStatus,
)

__all__ = [
    "CatalogModel",
    "Course",
    "CourseCreate",
    "CourseStatus",
    "CourseUpdate",
    "Lesson",
    "LessonCreate",
    "LessonUpdate",
    "Video",
    "VideoCreate",
    "VideoStatus",
]
