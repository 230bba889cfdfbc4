"""Catalog service: store operations wired to the cache layer.

Every write follows the same order: mutate through the repository, commit,
then tell the cache coordinator what happened. The cache is never touched
before the commit, so a reader that repopulates the snapshot between the two
steps can at worst hold stale data for one TTL.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from syllabus.cache.counters import ViewCounter
from syllabus.cache.published import PublishedCourseCache
from syllabus.catalog.errors import CourseNotFoundError, LessonNotFoundError
from syllabus.core.model import (
    Course,
    CourseCreate,
    CourseStatus,
    CourseUpdate,
    Lesson,
    LessonCreate,
    LessonUpdate,
    Video,
    VideoCreate,
    VideoStatus,
)
from syllabus.persistence.repositories import (
    CourseRepository,
    LessonRepository,
    VideoRepository,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Courses, lessons and videos for one request session."""

    def __init__(
        self,
        session: AsyncSession,
        published: PublishedCourseCache,
        views: ViewCounter,
        courses: CourseRepository | None = None,
        lessons: LessonRepository | None = None,
        videos: VideoRepository | None = None,
    ):
        self.session = session
        self.published = published
        self.views = views
        self.courses = courses or CourseRepository(session)
        self.lessons = lessons or LessonRepository(session)
        self.videos = videos or VideoRepository(session)

    # -------------------------------------------------------------------------
    # Course reads
    # -------------------------------------------------------------------------

    async def list_published_courses(self) -> list[Course]:
        """All published courses, served from the snapshot when possible."""
        cached = await self.published.get_cached()
        if cached is not None:
            return cached

        courses = await self.courses.list_by_status(CourseStatus.PUBLISHED)
        await self.published.populate(courses)
        return courses

    async def _require_course(self, course_id: int) -> Course:
        course = await self.courses.get(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    async def get_course(self, course_id: int) -> Course:
        """Get a course and count the view."""
        course = await self._require_course(course_id)
        await self.views.bump(course_id)
        return course

    async def get_course_views(self, course_id: int) -> int:
        await self._require_course(course_id)
        return await self.views.read(course_id)

    async def list_courses_by_instructor(self, instructor_id: str) -> list[Course]:
        return await self.courses.list_by_instructor(instructor_id)

    async def list_enrolled_courses(self, student_id: str) -> list[Course]:
        return await self.courses.list_by_student(student_id)

    # -------------------------------------------------------------------------
    # Course writes
    # -------------------------------------------------------------------------

    async def create_course(self, data: CourseCreate) -> Course:
        course = await self.courses.create(data)
        await self.session.commit()
        logger.info(f"Created course {course.id} '{course.title}' by {course.instructor_id}")

        await self.published.on_created(course)
        return course

    async def update_course(self, course_id: int, data: CourseUpdate) -> Course:
        existing = await self._require_course(course_id)

        updated = await self.courses.update(course_id, data)
        if updated is None:
            raise CourseNotFoundError(course_id)
        await self.session.commit()
        logger.info(
            f"Updated course {course_id} ({existing.status.value} -> {updated.status.value})"
        )

        await self.published.on_entity_mutated(course_id)
        await self.published.on_status_transition(existing.status, updated.status)
        return updated

    async def delete_course(self, course_id: int) -> None:
        deleted = await self.courses.delete(course_id)
        if deleted is None:
            raise CourseNotFoundError(course_id)
        await self.session.commit()
        logger.info(f"Deleted course {course_id}")

        await self.published.on_deleted(deleted)

    async def enroll_student(self, course_id: int, student_id: str) -> bool:
        """Enroll a student; enrolling twice is a no-op.

        Returns:
            True if the student was newly enrolled.
        """
        await self._require_course(course_id)

        added = await self.courses.enroll(course_id, student_id)
        if not added:
            return False
        await self.session.commit()
        logger.info(f"Student {student_id} enrolled in course {course_id}")

        await self.published.on_entity_mutated(course_id)
        return True

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    async def list_lessons(self, course_id: int) -> list[Lesson]:
        await self._require_course(course_id)
        return await self.lessons.list_by_course(course_id)

    async def get_lesson(self, lesson_id: int) -> Lesson:
        lesson = await self.lessons.get(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

    async def create_lesson(self, course_id: int, data: LessonCreate) -> Lesson:
        await self._require_course(course_id)

        lesson = await self.lessons.create(course_id, data)
        await self.session.commit()
        logger.info(f"Created lesson {lesson.id} '{lesson.title}' for course {course_id}")
        return lesson

    async def update_lesson(self, lesson_id: int, data: LessonUpdate) -> Lesson:
        lesson = await self.lessons.update(lesson_id, data)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        await self.session.commit()
        return lesson

    async def delete_lesson(self, lesson_id: int) -> None:
        if not await self.lessons.delete(lesson_id):
            raise LessonNotFoundError(lesson_id)
        await self.session.commit()
        logger.info(f"Deleted lesson {lesson_id}")

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    async def list_videos(self, lesson_id: int) -> list[Video]:
        await self.get_lesson(lesson_id)
        return await self.videos.list_by_lesson(lesson_id)

    async def create_video(self, lesson_id: int, data: VideoCreate) -> Video:
        """Register metadata for an uploaded video.

        Without an explicit order number the video goes after the last one
        in the lesson.
        """
        await self.get_lesson(lesson_id)

        order_number = data.order_number or 0
        if order_number == 0:
            existing = await self.videos.list_by_lesson(lesson_id)
            order_number = existing[-1].order_number + 1 if existing else 1

        video = await self.videos.create(lesson_id, data, order_number, VideoStatus.READY)
        await self.session.commit()
        logger.info(f"Registered video {video.id} for lesson {lesson_id}")
        return video
