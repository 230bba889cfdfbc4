"""Cache key schema for Syllabus.

Key formats:
- courses:published        snapshot of every published course
- course:{id}              per-course entry (invalidated, not yet populated)
- course:views:{id}        approximate view counter
"""

from __future__ import annotations


class CacheKeys:
    """Cache key generator following consistent naming convention."""

    PUBLISHED_COURSES = "courses:published"
    COURSE_PREFIX = "course"

    @classmethod
    def published_courses(cls) -> str:
        """Key for the published-courses snapshot."""
        return cls.PUBLISHED_COURSES

    @classmethod
    def course(cls, course_id: int) -> str:
        """Key for a single course entry."""
        return f"{cls.COURSE_PREFIX}:{course_id}"

    @classmethod
    def course_views(cls, course_id: int) -> str:
        """Key for a course view counter."""
        return f"{cls.COURSE_PREFIX}:views:{course_id}"

    @classmethod
    def parse_course_key(cls, key: str) -> dict[str, str] | None:
        """Parse a per-course key into its components.

        Returns None if the key doesn't belong to the course namespace.
        """
        parts = key.split(":")
        if len(parts) < 2 or parts[0] != cls.COURSE_PREFIX:
            return None

        if len(parts) == 3 and parts[1] == "views":
            return {"variant": "views", "course_id": parts[2]}
        if len(parts) == 2:
            return {"variant": "entry", "course_id": parts[1]}
        return None
