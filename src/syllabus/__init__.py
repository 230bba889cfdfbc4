"""Syllabus: course catalog service with a Redis cache-aside layer."""

__version__ = "0.1.0"
