"""Tests for cache key generation."""

from syllabus.cache.keys import CacheKeys


class TestCacheKeys:
    """Test cache key generation."""

    def test_published_courses_key(self) -> None:
        """Published snapshot lives under one fixed key."""
        assert CacheKeys.published_courses() == "courses:published"

    def test_course_key(self) -> None:
        """Per-course key has correct format."""
        assert CacheKeys.course(42) == "course:42"

    def test_course_views_key(self) -> None:
        """View counter key has correct format."""
        assert CacheKeys.course_views(42) == "course:views:42"

    def test_views_key_differs_from_entry_key(self) -> None:
        """Invalidating a course entry never touches its counter."""
        assert CacheKeys.course(7) != CacheKeys.course_views(7)

    def test_parse_entry_key(self) -> None:
        result = CacheKeys.parse_course_key("course:42")
        assert result == {"variant": "entry", "course_id": "42"}

    def test_parse_views_key(self) -> None:
        result = CacheKeys.parse_course_key("course:views:42")
        assert result == {"variant": "views", "course_id": "42"}

    def test_parse_invalid_key_returns_none(self) -> None:
        """Keys outside the course namespace return None."""
        assert CacheKeys.parse_course_key("courses:published") is None
        assert CacheKeys.parse_course_key("invalid") is None
        assert CacheKeys.parse_course_key("course:a:b:c") is None
