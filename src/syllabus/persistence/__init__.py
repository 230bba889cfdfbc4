"""Persistence layer for Syllabus.

This module provides:
- Async engine and session factory (PostgreSQL via asyncpg)
- SQLAlchemy ORM tables for courses, enrollments, lessons and videos
- Repositories that flush but leave commits to the catalog service
"""

from syllabus.persistence.db import create_engine, create_session_factory, init_db
from syllabus.persistence.repositories import (
    CourseRepository,
    LessonRepository,
    VideoRepository,
)
from syllabus.persistence.tables import CourseTable, EnrollmentTable, LessonTable, VideoTable

__all__ = [
    # DB
    "create_engine",
    "create_session_factory",
    "init_db",
    # Tables
    "CourseTable",
    "EnrollmentTable",
    "LessonTable",
    "VideoTable",
    # Repositories
    "CourseRepository",
    "LessonRepository",
    "VideoRepository",
]
