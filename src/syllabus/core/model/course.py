"""Course models.

A course moves between DRAFT, PUBLISHED and ARCHIVED. Only PUBLISHED courses
are listed to students, which is the subset cached as a snapshot.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from syllabus.core.model import CatalogModel


class CourseStatus(str, Enum):
    """Publication status of a course."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Course(CatalogModel):
    """A course as stored and as listed."""

    id: int
    title: str
    description: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    instructor_id: str = Field(..., alias="instructorId")
    status: CourseStatus = CourseStatus.DRAFT
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @property
    def is_published(self) -> bool:
        return self.status is CourseStatus.PUBLISHED


class CourseCreate(CatalogModel):
    """Payload for creating a course."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    instructor_id: str = Field(..., min_length=1, alias="instructorId")
    status: CourseStatus = CourseStatus.DRAFT


class CourseUpdate(CatalogModel):
    """Payload for updating a course.

    Mirrors a full replace of the editable fields; the instructor is fixed
    at creation.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    status: CourseStatus
