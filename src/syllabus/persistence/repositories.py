"""Repository pattern for catalog persistence.

Repositories flush but never commit: the catalog service owns the
transaction so that it can commit before touching the cache.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

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
from syllabus.persistence.tables import CourseTable, EnrollmentTable, LessonTable, VideoTable


def course_from_row(row: CourseTable) -> Course:
    return Course(
        id=row.id,
        title=row.title,
        description=row.description,
        image_url=row.image_url,
        instructor_id=row.instructor_id,
        status=CourseStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def lesson_from_row(row: LessonTable) -> Lesson:
    return Lesson(
        id=row.id,
        course_id=row.course_id,
        title=row.title,
        description=row.description,
        content=row.content,
        order_number=row.order_number,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def video_from_row(row: VideoTable) -> Video:
    return Video(
        id=row.id,
        lesson_id=row.lesson_id,
        title=row.title,
        description=row.description,
        video_url=row.video_url,
        object_name=row.object_name,
        file_size=row.file_size,
        duration=row.duration,
        order_number=row.order_number,
        status=VideoStatus(row.status),
        created_at=row.created_at,
    )


class BaseRepository:
    """Base repository holding the request session."""

    def __init__(self, session: AsyncSession):
        self.session = session


class CourseRepository(BaseRepository):
    """Repository for course operations."""

    async def _get_row(self, course_id: int) -> CourseTable | None:
        return await self.session.get(CourseTable, course_id)

    async def get(self, course_id: int) -> Course | None:
        row = await self._get_row(course_id)
        if row is None:
            return None
        return course_from_row(row)

    async def create(self, data: CourseCreate) -> Course:
        row = CourseTable(
            title=data.title,
            description=data.description,
            image_url=data.image_url,
            instructor_id=data.instructor_id,
            status=data.status.value,
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return course_from_row(row)

    async def update(self, course_id: int, data: CourseUpdate) -> Course | None:
        """Replace the editable fields of a course.

        Returns:
            The updated course, or None if not found.
        """
        row = await self._get_row(course_id)
        if row is None:
            return None

        row.title = data.title
        row.description = data.description
        row.image_url = data.image_url
        row.status = data.status.value

        await self.session.flush()
        await self.session.refresh(row)
        return course_from_row(row)

    async def delete(self, course_id: int) -> Course | None:
        """Delete a course with its enrollments, lessons and videos.

        Returns:
            The course as it was before deletion, or None if not found.
        """
        row = await self._get_row(course_id)
        if row is None:
            return None

        course = course_from_row(row)
        lesson_ids = select(LessonTable.id).where(LessonTable.course_id == course_id)
        await self.session.execute(delete(VideoTable).where(VideoTable.lesson_id.in_(lesson_ids)))
        await self.session.execute(delete(LessonTable).where(LessonTable.course_id == course_id))
        await self.session.execute(
            delete(EnrollmentTable).where(EnrollmentTable.course_id == course_id)
        )
        await self.session.delete(row)
        await self.session.flush()
        return course

    async def list_by_status(self, status: CourseStatus) -> list[Course]:
        stmt = (
            select(CourseTable)
            .where(CourseTable.status == status.value)
            .order_by(CourseTable.created_at, CourseTable.id)
        )
        result = await self.session.execute(stmt)
        return [course_from_row(row) for row in result.scalars().all()]

    async def list_by_instructor(self, instructor_id: str) -> list[Course]:
        stmt = (
            select(CourseTable)
            .where(CourseTable.instructor_id == instructor_id)
            .order_by(CourseTable.created_at, CourseTable.id)
        )
        result = await self.session.execute(stmt)
        return [course_from_row(row) for row in result.scalars().all()]

    async def list_by_student(self, student_id: str) -> list[Course]:
        stmt = (
            select(CourseTable)
            .join(EnrollmentTable, EnrollmentTable.course_id == CourseTable.id)
            .where(EnrollmentTable.student_id == student_id)
            .order_by(CourseTable.created_at, CourseTable.id)
        )
        result = await self.session.execute(stmt)
        return [course_from_row(row) for row in result.scalars().all()]

    async def is_enrolled(self, course_id: int, student_id: str) -> bool:
        stmt = select(EnrollmentTable.id).where(
            EnrollmentTable.course_id == course_id,
            EnrollmentTable.student_id == student_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def enroll(self, course_id: int, student_id: str) -> bool:
        """Enroll a student.

        Returns:
            True if a new enrollment was added, False if already enrolled.
        """
        if await self.is_enrolled(course_id, student_id):
            return False

        self.session.add(EnrollmentTable(course_id=course_id, student_id=student_id))
        await self.session.flush()
        return True


class LessonRepository(BaseRepository):
    """Repository for lesson operations."""

    async def list_by_course(self, course_id: int) -> list[Lesson]:
        stmt = (
            select(LessonTable)
            .where(LessonTable.course_id == course_id)
            .order_by(LessonTable.order_number, LessonTable.id)
        )
        result = await self.session.execute(stmt)
        return [lesson_from_row(row) for row in result.scalars().all()]

    async def get(self, lesson_id: int) -> Lesson | None:
        row = await self.session.get(LessonTable, lesson_id)
        if row is None:
            return None
        return lesson_from_row(row)

    async def create(self, course_id: int, data: LessonCreate) -> Lesson:
        row = LessonTable(
            course_id=course_id,
            title=data.title,
            description=data.description,
            content=data.content,
            order_number=data.order_number,
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return lesson_from_row(row)

    async def update(self, lesson_id: int, data: LessonUpdate) -> Lesson | None:
        row = await self.session.get(LessonTable, lesson_id)
        if row is None:
            return None

        row.title = data.title
        row.description = data.description
        row.content = data.content
        row.order_number = data.order_number
        row.updated_at = datetime.now(timezone.utc)

        await self.session.flush()
        await self.session.refresh(row)
        return lesson_from_row(row)

    async def delete(self, lesson_id: int) -> bool:
        row = await self.session.get(LessonTable, lesson_id)
        if row is None:
            return False

        await self.session.execute(delete(VideoTable).where(VideoTable.lesson_id == lesson_id))
        await self.session.delete(row)
        await self.session.flush()
        return True


class VideoRepository(BaseRepository):
    """Repository for video metadata operations."""

    async def list_by_lesson(self, lesson_id: int) -> list[Video]:
        stmt = (
            select(VideoTable)
            .where(VideoTable.lesson_id == lesson_id)
            .order_by(VideoTable.order_number, VideoTable.id)
        )
        result = await self.session.execute(stmt)
        return [video_from_row(row) for row in result.scalars().all()]

    async def create(
        self,
        lesson_id: int,
        data: VideoCreate,
        order_number: int,
        status: VideoStatus = VideoStatus.READY,
    ) -> Video:
        row = VideoTable(
            lesson_id=lesson_id,
            title=data.title,
            description=data.description,
            video_url=data.video_url,
            object_name=data.object_name,
            file_size=data.file_size,
            duration=data.duration or 0,
            order_number=order_number,
            status=status.value,
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return video_from_row(row)
