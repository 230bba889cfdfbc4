"""Lesson and video API router.

Endpoints:
- GET    /lessons/{lessonId}         - Get lesson
- PUT    /lessons/{lessonId}         - Update lesson
- DELETE /lessons/{lessonId}         - Delete lesson and its videos
- GET    /lessons/{lessonId}/videos  - Videos in order
- POST   /lessons/{lessonId}/videos  - Register uploaded video metadata
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from syllabus.api.deps import get_catalog_service
from syllabus.catalog.service import CatalogService
from syllabus.core.model import Lesson, LessonUpdate, Video, VideoCreate

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("/{lesson_id}", response_model=Lesson)
async def get_lesson(
    lesson_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Lesson:
    return await service.get_lesson(lesson_id)


@router.put("/{lesson_id}", response_model=Lesson)
async def update_lesson(
    lesson_id: int,
    lesson: LessonUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> Lesson:
    return await service.update_lesson(lesson_id, lesson)


@router.delete("/{lesson_id}", status_code=204)
async def delete_lesson(
    lesson_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Response:
    await service.delete_lesson(lesson_id)
    return Response(status_code=204)


@router.get("/{lesson_id}/videos", response_model=list[Video])
async def list_videos(
    lesson_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> list[Video]:
    return await service.list_videos(lesson_id)


@router.post("/{lesson_id}/videos", status_code=201, response_model=Video)
async def create_video(
    lesson_id: int,
    video: VideoCreate,
    service: CatalogService = Depends(get_catalog_service),
) -> Video:
    return await service.create_video(lesson_id, video)
