"""Course API router.

Endpoints:
- GET    /courses                                 - Published courses (cached)
- GET    /courses?instructor=...                  - Courses by instructor
- GET    /courses?student=...                     - Courses a student is enrolled in
- POST   /courses                                 - Create course
- GET    /courses/{courseId}                      - Get course (counts a view)
- PUT    /courses/{courseId}                      - Update course
- DELETE /courses/{courseId}                      - Delete course
- GET    /courses/{courseId}/views                - Approximate view count
- POST   /courses/{courseId}/enrollments/{studentId} - Enroll student
- GET    /courses/{courseId}/lessons              - Lessons in order
- POST   /courses/{courseId}/lessons              - Add lesson
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from syllabus.api.deps import get_catalog_service
from syllabus.api.errors import BadRequestError
from syllabus.catalog.service import CatalogService
from syllabus.core.model import Course, CourseCreate, CourseUpdate, Lesson, LessonCreate

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=list[Course])
async def list_courses(
    instructor: str | None = Query(None, description="Only courses taught by this instructor"),
    student: str | None = Query(None, description="Only courses this student is enrolled in"),
    service: CatalogService = Depends(get_catalog_service),
) -> list[Course]:
    """List courses.

    Without filters, returns the published catalog (served from cache).
    """
    if instructor is not None and student is not None:
        raise BadRequestError("Use either 'instructor' or 'student', not both")
    if instructor is not None:
        return await service.list_courses_by_instructor(instructor)
    if student is not None:
        return await service.list_enrolled_courses(student)
    return await service.list_published_courses()


@router.post("", status_code=201, response_model=Course)
async def create_course(
    course: CourseCreate,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
) -> Course:
    created = await service.create_course(course)
    response.headers["Location"] = f"/courses/{created.id}"
    return created


@router.get("/{course_id}", response_model=Course)
async def get_course(
    course_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Course:
    return await service.get_course(course_id)


@router.put("/{course_id}", response_model=Course)
async def update_course(
    course_id: int,
    course: CourseUpdate,
    service: CatalogService = Depends(get_catalog_service),
) -> Course:
    return await service.update_course(course_id, course)


@router.delete("/{course_id}", status_code=204)
async def delete_course(
    course_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Response:
    await service.delete_course(course_id)
    return Response(status_code=204)


@router.get("/{course_id}/views")
async def get_course_views(
    course_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, int]:
    """Approximate views over the rolling window."""
    views = await service.get_course_views(course_id)
    return {"courseId": course_id, "views": views}


@router.post("/{course_id}/enrollments/{student_id}")
async def enroll_student(
    course_id: int,
    student_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> dict[str, int | str | bool]:
    enrolled = await service.enroll_student(course_id, student_id)
    return {"courseId": course_id, "studentId": student_id, "created": enrolled}


@router.get("/{course_id}/lessons", response_model=list[Lesson])
async def list_lessons(
    course_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> list[Lesson]:
    return await service.list_lessons(course_id)


@router.post("/{course_id}/lessons", status_code=201, response_model=Lesson)
async def create_lesson(
    course_id: int,
    lesson: LessonCreate,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
) -> Lesson:
    created = await service.create_lesson(course_id, lesson)
    response.headers["Location"] = f"/lessons/{created.id}"
    return created
