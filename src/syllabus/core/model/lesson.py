"""Lesson and video models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from syllabus.core.model import CatalogModel


class Lesson(CatalogModel):
    id: int
    course_id: int = Field(..., alias="courseId")
    title: str
    description: str | None = None
    content: str | None = None
    order_number: int = Field(default=0, alias="orderNumber")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class LessonCreate(CatalogModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    order_number: int = Field(default=0, ge=0, alias="orderNumber")


class LessonUpdate(LessonCreate):
    pass


class VideoStatus(str, Enum):
    """Processing state of an uploaded video."""

    UPLOADING = "UPLOADING"
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"


class Video(CatalogModel):
    id: int
    lesson_id: int = Field(..., alias="lessonId")
    title: str
    description: str | None = None
    video_url: str | None = Field(default=None, alias="videoUrl")
    object_name: str | None = Field(default=None, alias="objectName")
    file_size: int | None = Field(default=None, alias="fileSize")
    duration: int = 0
    order_number: int = Field(default=0, alias="orderNumber")
    status: VideoStatus = VideoStatus.UPLOADING
    created_at: datetime | None = Field(default=None, alias="createdAt")


class VideoCreate(CatalogModel):
    """Metadata for a video whose binary was already uploaded elsewhere."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    video_url: str | None = Field(default=None, alias="videoUrl")
    object_name: str | None = Field(default=None, alias="objectName")
    file_size: int | None = Field(default=None, ge=0, alias="fileSize")
    duration: int | None = Field(default=None, ge=0)
    order_number: int | None = Field(default=None, ge=0, alias="orderNumber")
